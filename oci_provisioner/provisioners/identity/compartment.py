"""Compartment operator (OCI::Identity::Compartment).

Deleted compartments stay readable for a while with lifecycle state DELETED;
reads report them as not found. The tenancy is the root compartment and has
no parent, so its CompartmentId property falls back to its own id.
"""

from typing import Any, Dict, List, Mapping

import oci
import structlog

from oci_provisioner.errors import PropertyError
from oci_provisioner.operations.requests import (
    CreateRequest,
    ListRequest,
    ReadRequest,
    UpdateRequest,
)
from oci_provisioner.operations.result import ListResult, ProgressResult, ReadResult
from oci_provisioner.operations.status import Operation
from oci_provisioner.provisioners.base import SynchronousOperator
from oci_provisioner.provisioners.patch import resolve_properties
from oci_provisioner.provisioners.properties import (
    defined_tags_to_list,
    extract_defined_tags,
    extract_freeform_tags,
    extract_string,
    freeform_tags_to_list,
    parse_properties,
    require_string,
    serialize_properties,
)

logger = structlog.get_logger()

RESOURCE_TYPE = "OCI::Identity::Compartment"
DELETED = "DELETED"


def compartment_properties(compartment: Any) -> Dict[str, Any]:
    properties: Dict[str, Any] = {
        "Id": compartment.id,
        "CompartmentId": compartment.compartment_id or compartment.id,
    }
    optional = {
        "Name": compartment.name,
        "Description": compartment.description,
        "FreeformTags": freeform_tags_to_list(compartment.freeform_tags),
        "DefinedTags": defined_tags_to_list(compartment.defined_tags),
    }
    properties.update({k: v for k, v in optional.items() if v is not None})
    return properties


def _mutable_fields(props: Mapping[str, Any]) -> Dict[str, Any]:
    fields = {
        "name": extract_string(props, "Name"),
        "description": extract_string(props, "Description"),
        "freeform_tags": extract_freeform_tags(props),
        "defined_tags": extract_defined_tags(props),
    }
    return {k: v for k, v in fields.items() if v is not None}


class CompartmentOperator(SynchronousOperator):
    resource_type = RESOURCE_TYPE

    async def create(self, request: CreateRequest) -> ProgressResult:
        props = parse_properties(request.properties)
        fields = _mutable_fields(props)
        fields["name"] = require_string(props, "Name")
        fields["description"] = require_string(props, "Description")
        details = oci.identity.models.CreateCompartmentDetails(
            compartment_id=require_string(props, "CompartmentId"),
            **fields,
        )
        client = self.clients.identity()
        response = await self.clients.execute(
            client.create_compartment, details, operation_name="create_compartment"
        )
        compartment = response.data
        return ProgressResult.success(
            Operation.CREATE,
            native_id=compartment.id,
            resource_properties=serialize_properties(
                compartment_properties(compartment)
            ),
        )

    async def read(self, request: ReadRequest) -> ReadResult:
        client = self.clients.identity()
        compartment = await self.fetch_or_none(
            client.get_compartment, request.native_id, operation_name="get_compartment"
        )
        if compartment is None or compartment.lifecycle_state == DELETED:
            return self.not_found()
        return self.found(compartment_properties(compartment))

    async def update(self, request: UpdateRequest) -> ProgressResult:
        props = await resolve_properties(request, self.read)
        details = oci.identity.models.UpdateCompartmentDetails(**_mutable_fields(props))
        client = self.clients.identity()
        response = await self.clients.execute(
            client.update_compartment,
            request.native_id,
            details,
            operation_name="update_compartment",
        )
        compartment = response.data
        return ProgressResult.success(
            Operation.UPDATE,
            native_id=compartment.id,
            resource_properties=serialize_properties(
                compartment_properties(compartment)
            ),
        )

    async def delete_resource(self, native_id: str) -> None:
        client = self.clients.identity()
        await self.clients.execute(
            client.delete_compartment, native_id, operation_name="delete_compartment"
        )

    async def list(self, request: ListRequest) -> ListResult:
        """List direct children of a compartment.

        Without a CompartmentId the tenancy is listed, and the tenancy itself
        is included as the root compartment.
        """
        parent_id = request.additional_properties.get("CompartmentId")
        at_root = not parent_id
        if at_root:
            parent_id = self.clients.tenancy
            if not parent_id:
                raise PropertyError(
                    "tenancy OCID is required for root compartment discovery"
                )

        client = self.clients.identity()
        compartments = await self.clients.list_all(
            client.list_compartments,
            parent_id,
            compartment_id_in_subtree=False,
            access_level="ACCESSIBLE",
        )
        native_ids: List[str] = [parent_id] if at_root else []
        native_ids.extend(compartment.id for compartment in compartments)
        logger.debug(
            "compartments_listed",
            parent_id=parent_id,
            count=len(native_ids),
        )
        return ListResult(native_ids=native_ids)
