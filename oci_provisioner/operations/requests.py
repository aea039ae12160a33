"""Request types passed from the orchestrator to resource operators.

Property payloads and target configuration are kept as opaque JSON strings;
only the per-resource operators and the patch applier decode them.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(frozen=True)
class CreateRequest:
    resource_type: str
    properties: Optional[str] = None
    target_config: Optional[str] = None


@dataclass(frozen=True)
class UpdateRequest:
    """Update a resource from full desired properties or a patch document.

    When patch_document is set it takes precedence over desired_properties and
    is applied against a fresh read of the resource.
    """

    resource_type: str
    native_id: str
    desired_properties: Optional[str] = None
    patch_document: Optional[str] = None
    target_config: Optional[str] = None


@dataclass(frozen=True)
class DeleteRequest:
    resource_type: str
    native_id: str
    target_config: Optional[str] = None


@dataclass(frozen=True)
class StatusRequest:
    resource_type: str
    request_id: str
    native_id: str = ""
    target_config: Optional[str] = None


@dataclass(frozen=True)
class ReadRequest:
    resource_type: str
    native_id: str
    target_config: Optional[str] = None


@dataclass(frozen=True)
class ListRequest:
    """List resources of a type, filtered by additional properties.

    Most resource types require a parent "CompartmentId" filter.
    """

    resource_type: str
    additional_properties: Dict[str, str] = field(default_factory=dict)
    target_config: Optional[str] = None
