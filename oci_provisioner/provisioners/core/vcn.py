"""Virtual cloud network operator (OCI::Core::Vcn)."""

from typing import Any, Dict

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
    extract_string,
    extract_string_list,
    extract_tag_fields,
    freeform_tags_to_list,
    parse_properties,
    require_string,
    serialize_properties,
)

RESOURCE_TYPE = "OCI::Core::Vcn"


def vcn_properties(vcn: Any) -> Dict[str, Any]:
    properties: Dict[str, Any] = {
        "Id": vcn.id,
        "CompartmentId": vcn.compartment_id,
    }
    optional = {
        "CidrBlocks": vcn.cidr_blocks,
        "DisplayName": vcn.display_name,
        "DnsLabel": vcn.dns_label,
        "DefaultRouteTableId": vcn.default_route_table_id,
        "DefaultSecurityListId": vcn.default_security_list_id,
        "DefaultDhcpOptionsId": vcn.default_dhcp_options_id,
        "VcnDomainName": vcn.vcn_domain_name,
        "FreeformTags": freeform_tags_to_list(vcn.freeform_tags),
        "DefinedTags": defined_tags_to_list(vcn.defined_tags),
    }
    properties.update({k: v for k, v in optional.items() if v is not None})
    return properties


def _mutable_fields(props: Dict[str, Any]) -> Dict[str, Any]:
    fields = extract_tag_fields(props)
    display_name = extract_string(props, "DisplayName")
    if display_name is not None:
        fields["display_name"] = display_name
    return fields


class VcnOperator(SynchronousOperator):
    resource_type = RESOURCE_TYPE

    async def create(self, request: CreateRequest) -> ProgressResult:
        props = parse_properties(request.properties)
        details = oci.core.models.CreateVcnDetails(
            compartment_id=require_string(props, "CompartmentId"),
            cidr_block=extract_string(props, "CidrBlock"),
            cidr_blocks=extract_string_list(props, "CidrBlocks"),
            dns_label=extract_string(props, "DnsLabel"),
            is_ipv6_enabled=extract_bool(props, "IsIpv6Enabled"),
            **_mutable_fields(props),
        )
        client = self.clients.virtual_network()
        response = await self.clients.execute(
            client.create_vcn, details, operation_name="create_vcn"
        )
        vcn = response.data
        return ProgressResult.success(
            Operation.CREATE,
            native_id=vcn.id,
            resource_properties=serialize_properties(vcn_properties(vcn)),
        )

    async def read(self, request: ReadRequest) -> ReadResult:
        client = self.clients.virtual_network()
        vcn = await self.fetch_or_none(
            client.get_vcn, request.native_id, operation_name="get_vcn"
        )
        if vcn is None:
            return self.not_found()
        return self.found(vcn_properties(vcn))

    async def update(self, request: UpdateRequest) -> ProgressResult:
        props = await resolve_properties(request, self.read)
        details = oci.core.models.UpdateVcnDetails(**_mutable_fields(props))
        client = self.clients.virtual_network()
        response = await self.clients.execute(
            client.update_vcn, request.native_id, details, operation_name="update_vcn"
        )
        vcn = response.data
        return ProgressResult.success(
            Operation.UPDATE,
            native_id=vcn.id,
            resource_properties=serialize_properties(vcn_properties(vcn)),
        )

    async def delete_resource(self, native_id: str) -> None:
        client = self.clients.virtual_network()
        await self.clients.execute(
            client.delete_vcn, native_id, operation_name="delete_vcn"
        )

    async def list(self, request: ListRequest) -> ListResult:
        compartment_id = self.require_compartment(request)
        client = self.clients.virtual_network()
        vcns = await self.clients.list_all(
            client.list_vcns, compartment_id=compartment_id
        )
        return ListResult(native_ids=[vcn.id for vcn in vcns])
