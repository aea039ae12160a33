"""Block volume operator (OCI::Core::Volume)."""

from typing import Any, Dict

import oci
import structlog

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
    extract_bool,
    extract_defined_tags,
    extract_freeform_tags,
    extract_int,
    extract_string,
    freeform_tags_to_list,
    parse_properties,
    require_string,
    serialize_properties,
)

logger = structlog.get_logger()

RESOURCE_TYPE = "OCI::Core::Volume"


def volume_properties(volume: Any) -> Dict[str, Any]:
    properties: Dict[str, Any] = {
        "Id": volume.id,
        "CompartmentId": volume.compartment_id,
        "AvailabilityDomain": volume.availability_domain,
    }
    optional = {
        "DisplayName": volume.display_name,
        "SizeInGBs": volume.size_in_gbs,
        "VpusPerGB": volume.vpus_per_gb,
        "IsAutoTuneEnabled": volume.is_auto_tune_enabled,
        "KmsKeyId": volume.kms_key_id,
        "FreeformTags": freeform_tags_to_list(volume.freeform_tags),
        "DefinedTags": defined_tags_to_list(volume.defined_tags),
    }
    properties.update({k: v for k, v in optional.items() if v is not None})
    return properties


def _mutable_fields(props: Dict[str, Any]) -> Dict[str, Any]:
    fields = {
        "display_name": extract_string(props, "DisplayName"),
        "size_in_gbs": extract_int(props, "SizeInGBs"),
        "vpus_per_gb": extract_int(props, "VpusPerGB"),
        "is_auto_tune_enabled": extract_bool(props, "IsAutoTuneEnabled"),
        "freeform_tags": extract_freeform_tags(props),
        "defined_tags": extract_defined_tags(props),
    }
    return {k: v for k, v in fields.items() if v is not None}


class VolumeOperator(SynchronousOperator):
    resource_type = RESOURCE_TYPE

    async def create(self, request: CreateRequest) -> ProgressResult:
        props = parse_properties(request.properties)
        details = oci.core.models.CreateVolumeDetails(
            compartment_id=require_string(props, "CompartmentId"),
            availability_domain=require_string(props, "AvailabilityDomain"),
            kms_key_id=extract_string(props, "KmsKeyId"),
            **_mutable_fields(props),
        )
        client = self.clients.block_storage()
        response = await self.clients.execute(
            client.create_volume, details, operation_name="create_volume"
        )
        volume = response.data
        logger.info("volume_created", native_id=volume.id)
        return ProgressResult.success(
            Operation.CREATE,
            native_id=volume.id,
            resource_properties=serialize_properties(volume_properties(volume)),
        )

    async def read(self, request: ReadRequest) -> ReadResult:
        client = self.clients.block_storage()
        volume = await self.fetch_or_none(
            client.get_volume, request.native_id, operation_name="get_volume"
        )
        if volume is None:
            return self.not_found()
        return self.found(volume_properties(volume))

    async def update(self, request: UpdateRequest) -> ProgressResult:
        props = await resolve_properties(request, self.read)
        details = oci.core.models.UpdateVolumeDetails(**_mutable_fields(props))
        client = self.clients.block_storage()
        response = await self.clients.execute(
            client.update_volume,
            request.native_id,
            details,
            operation_name="update_volume",
        )
        volume = response.data
        return ProgressResult.success(
            Operation.UPDATE,
            native_id=volume.id,
            resource_properties=serialize_properties(volume_properties(volume)),
        )

    async def delete_resource(self, native_id: str) -> None:
        client = self.clients.block_storage()
        await self.clients.execute(
            client.delete_volume, native_id, operation_name="delete_volume"
        )

    async def list(self, request: ListRequest) -> ListResult:
        compartment_id = self.require_compartment(request)
        client = self.clients.block_storage()
        volumes = await self.clients.list_all(
            client.list_volumes, compartment_id=compartment_id
        )
        return ListResult(native_ids=[volume.id for volume in volumes])
