"""Resolve the full property set of an update request.

An update carries either the complete desired properties or a patch document
to apply on top of the resource's current properties. A JSON array patch is
an RFC 6902 JSON Patch; a JSON object patch is an RFC 7396 JSON Merge Patch.
"""

import json
from typing import Any, Awaitable, Callable, Dict

import jsonpatch
import jsonpointer
import structlog

from oci_provisioner.errors import (
    InvalidMergedPropertiesError,
    InvalidPatchDocumentError,
    InvalidPropertiesError,
    PatchApplicationError,
    PatchReadError,
)
from oci_provisioner.operations.requests import ReadRequest, UpdateRequest
from oci_provisioner.operations.result import ReadResult

logger = structlog.get_logger()

ReadFn = Callable[[ReadRequest], Awaitable[ReadResult]]


def merge_patch(target: Any, patch: Any) -> Any:
    """Apply an RFC 7396 merge patch and return the result.

    Neither argument is mutated. A null member in the patch removes the key;
    a non-object patch replaces the target entirely.
    """
    if not isinstance(patch, dict):
        return patch

    result = dict(target) if isinstance(target, dict) else {}
    for key, value in patch.items():
        if value is None:
            result.pop(key, None)
        else:
            result[key] = merge_patch(result.get(key), value)
    return result


def _parse_desired(raw: Any) -> Dict[str, Any]:
    try:
        props = json.loads(raw or "")
    except (TypeError, ValueError) as e:
        raise InvalidPropertiesError(f"failed to parse properties: {e}") from e
    if not isinstance(props, dict):
        raise InvalidPropertiesError(
            f"failed to parse properties: expected a JSON object, got {type(props).__name__}"
        )
    return props


async def _read_snapshot(request: UpdateRequest, read_fn: ReadFn) -> Any:
    read_request = ReadRequest(
        resource_type=request.resource_type,
        native_id=request.native_id,
        target_config=request.target_config,
    )
    try:
        read = await read_fn(read_request)
    except Exception as e:  # pylint: disable=broad-except
        raise PatchReadError(f"failed to read existing resource: {e}") from e

    if not read.is_found:
        raise PatchReadError(
            f"failed to read existing resource: {request.native_id} not found"
        )

    try:
        return json.loads(read.properties) if read.properties else {}
    except ValueError as e:
        raise PatchReadError(f"failed to parse existing resource: {e}") from e


def _apply_json_patch(snapshot: Any, operations: Any) -> Any:
    if not isinstance(operations, list) or not all(
        isinstance(op, dict) for op in operations
    ):
        raise InvalidPatchDocumentError(
            "failed to decode patch document: expected a list of operations"
        )

    try:
        patch = jsonpatch.JsonPatch(operations)
    except (jsonpatch.InvalidJsonPatch, jsonpointer.JsonPointerException) as e:
        raise InvalidPatchDocumentError(f"failed to decode patch document: {e}") from e

    try:
        return patch.apply(snapshot, in_place=False)
    except jsonpatch.InvalidJsonPatch as e:
        raise InvalidPatchDocumentError(f"failed to decode patch document: {e}") from e
    except (jsonpatch.JsonPatchException, jsonpointer.JsonPointerException) as e:
        raise PatchApplicationError(f"failed to apply patch: {e}") from e


async def resolve_properties(request: UpdateRequest, read_fn: ReadFn) -> Dict[str, Any]:
    """Compute the properties an update should converge to.

    Without a patch document the desired properties are returned as is.
    Otherwise the current resource is read through read_fn on every call and
    the patch is applied to that snapshot. Concurrent updates of the same
    resource are last-writer-wins.

    Args:
        request: Update request to resolve
        read_fn: Coroutine function reading the current resource

    Returns:
        The merged properties as a dict

    Raises:
        InvalidPropertiesError: Desired properties are not a JSON object
        PatchReadError: The current resource could not be read
        InvalidPatchDocumentError: The patch document is malformed
        PatchApplicationError: The patch does not apply to the snapshot
        InvalidMergedPropertiesError: The patched document is not a JSON object
    """
    if not request.patch_document:
        return _parse_desired(request.desired_properties)

    try:
        document = json.loads(request.patch_document)
    except ValueError as e:
        raise InvalidPatchDocumentError(f"failed to decode patch document: {e}") from e
    if not isinstance(document, (list, dict)):
        raise InvalidPatchDocumentError(
            "failed to decode patch document: expected a JSON array or object"
        )

    snapshot = await _read_snapshot(request, read_fn)

    if isinstance(document, dict):
        merged = merge_patch(snapshot, document)
    else:
        merged = _apply_json_patch(snapshot, document)

    if not isinstance(merged, dict):
        raise InvalidMergedPropertiesError(
            f"failed to parse merged properties: expected a JSON object, got {type(merged).__name__}"
        )

    logger.debug(
        "patch_applied",
        resource_type=request.resource_type,
        native_id=request.native_id,
        merge_patch=isinstance(document, dict),
    )
    return merged
