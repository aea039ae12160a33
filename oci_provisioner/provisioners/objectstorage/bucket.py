"""Object storage bucket operator (OCI::ObjectStorage::Bucket).

Buckets are addressed by name inside the tenancy's object storage namespace,
so the native id is the bucket name. The namespace comes from the Namespace
property when present and is otherwise looked up from the service.
"""

from typing import Any, Dict, Mapping, Optional

import oci

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
    extract_string,
    freeform_tags_to_list,
    parse_properties,
    require_string,
    serialize_properties,
)

RESOURCE_TYPE = "OCI::ObjectStorage::Bucket"


def bucket_properties(bucket: Any) -> Dict[str, Any]:
    properties: Dict[str, Any] = {
        "Name": bucket.name,
        "Namespace": bucket.namespace,
        "CompartmentId": bucket.compartment_id,
    }
    optional = {
        "PublicAccessType": bucket.public_access_type,
        "StorageTier": bucket.storage_tier,
        "ObjectEventsEnabled": bucket.object_events_enabled,
        "Versioning": bucket.versioning,
        "FreeformTags": freeform_tags_to_list(bucket.freeform_tags),
        "DefinedTags": defined_tags_to_list(bucket.defined_tags),
    }
    properties.update({k: v for k, v in optional.items() if v not in (None, "")})
    return properties


def _mutable_fields(props: Mapping[str, Any]) -> Dict[str, Any]:
    fields = {
        "public_access_type": extract_string(props, "PublicAccessType"),
        "object_events_enabled": extract_bool(props, "ObjectEventsEnabled"),
        "versioning": extract_string(props, "Versioning"),
        "freeform_tags": extract_freeform_tags(props),
        "defined_tags": extract_defined_tags(props),
    }
    return {k: v for k, v in fields.items() if v is not None}


class BucketOperator(SynchronousOperator):
    resource_type = RESOURCE_TYPE

    async def namespace(self, props: Optional[Mapping[str, Any]] = None) -> str:
        if props:
            namespace = extract_string(props, "Namespace")
            if namespace:
                return namespace
        client = self.clients.object_storage()
        response = await self.clients.execute(
            client.get_namespace, operation_name="get_namespace"
        )
        return response.data

    async def create(self, request: CreateRequest) -> ProgressResult:
        props = parse_properties(request.properties)
        namespace = await self.namespace(props)
        details = oci.object_storage.models.CreateBucketDetails(
            name=require_string(props, "Name"),
            compartment_id=require_string(props, "CompartmentId"),
            storage_tier=extract_string(props, "StorageTier"),
            **_mutable_fields(props),
        )
        client = self.clients.object_storage()
        response = await self.clients.execute(
            client.create_bucket, namespace, details, operation_name="create_bucket"
        )
        bucket = response.data
        return ProgressResult.success(
            Operation.CREATE,
            native_id=bucket.name,
            resource_properties=serialize_properties(bucket_properties(bucket)),
        )

    async def read(self, request: ReadRequest) -> ReadResult:
        namespace = await self.namespace()
        client = self.clients.object_storage()
        bucket = await self.fetch_or_none(
            client.get_bucket, namespace, request.native_id, operation_name="get_bucket"
        )
        if bucket is None:
            return self.not_found()
        return self.found(bucket_properties(bucket))

    async def update(self, request: UpdateRequest) -> ProgressResult:
        props = await resolve_properties(request, self.read)
        namespace = await self.namespace(props)
        details = oci.object_storage.models.UpdateBucketDetails(**_mutable_fields(props))
        client = self.clients.object_storage()
        response = await self.clients.execute(
            client.update_bucket,
            namespace,
            request.native_id,
            details,
            operation_name="update_bucket",
        )
        bucket = response.data
        return ProgressResult.success(
            Operation.UPDATE,
            native_id=bucket.name,
            resource_properties=serialize_properties(bucket_properties(bucket)),
        )

    async def delete_resource(self, native_id: str) -> None:
        namespace = await self.namespace()
        client = self.clients.object_storage()
        await self.clients.execute(
            client.delete_bucket, namespace, native_id, operation_name="delete_bucket"
        )

    async def list(self, request: ListRequest) -> ListResult:
        compartment_id = self.require_compartment(request)
        namespace = await self.namespace()
        client = self.clients.object_storage()
        buckets = await self.clients.list_all(
            client.list_buckets, namespace, compartment_id
        )
        return ListResult(native_ids=[bucket.name for bucket in buckets])
