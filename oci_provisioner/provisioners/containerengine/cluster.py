"""Kubernetes cluster operator (OCI::ContainerEngine::Cluster).

Create, update and delete return as soon as the service accepts the work
request; the returned result is IN_PROGRESS with the work request id, and
status polls that work request until it finishes.
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
from oci_provisioner.provisioners.base import WorkRequestOperator
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
)

RESOURCE_TYPE = "OCI::ContainerEngine::Cluster"
LISTED_STATES = ["CREATING", "ACTIVE", "UPDATING"]


def cluster_properties(cluster: Any) -> Dict[str, Any]:
    properties: Dict[str, Any] = {
        "Id": cluster.id,
        "CompartmentId": cluster.compartment_id,
        "VcnId": cluster.vcn_id,
        "KubernetesVersion": cluster.kubernetes_version,
    }
    optional = {
        "Name": cluster.name,
        "ClusterType": getattr(cluster, "type", None),
        "LifecycleState": cluster.lifecycle_state,
        "FreeformTags": freeform_tags_to_list(cluster.freeform_tags),
        "DefinedTags": defined_tags_to_list(cluster.defined_tags),
    }
    properties.update({k: v for k, v in optional.items() if v is not None})

    endpoint = cluster.endpoint_config
    if endpoint is not None:
        endpoint_props = {
            "SubnetId": endpoint.subnet_id,
            "IsPublicIpEnabled": endpoint.is_public_ip_enabled,
            "NsgIds": endpoint.nsg_ids,
        }
        properties["EndpointConfig"] = {
            k: v for k, v in endpoint_props.items() if v is not None
        }
    return properties


def _endpoint_config(props: Mapping[str, Any]) -> Optional[Any]:
    endpoint = props.get("EndpointConfig")
    if not isinstance(endpoint, dict):
        return None
    return oci.container_engine.models.CreateClusterEndpointConfigDetails(
        subnet_id=extract_string(endpoint, "SubnetId"),
        is_public_ip_enabled=extract_bool(endpoint, "IsPublicIpEnabled"),
        nsg_ids=extract_string_list(endpoint, "NsgIds"),
    )


def _create_options(props: Mapping[str, Any]) -> Optional[Any]:
    options = props.get("Options")
    if not isinstance(options, dict):
        return None
    network = options.get("KubernetesNetworkConfig")
    network_config = None
    if isinstance(network, dict):
        network_config = oci.container_engine.models.KubernetesNetworkConfig(
            pods_cidr=extract_string(network, "PodsCidr"),
            services_cidr=extract_string(network, "ServicesCidr"),
        )
    return oci.container_engine.models.ClusterCreateOptions(
        service_lb_subnet_ids=extract_string_list(options, "ServiceLbSubnetIds"),
        kubernetes_network_config=network_config,
    )


class ClusterOperator(WorkRequestOperator):
    resource_type = RESOURCE_TYPE

    def work_request_client(self) -> Any:
        return self.clients.container_engine()

    async def create(self, request: CreateRequest) -> ProgressResult:
        props = parse_properties(request.properties)
        details = oci.container_engine.models.CreateClusterDetails(
            compartment_id=require_string(props, "CompartmentId"),
            vcn_id=require_string(props, "VcnId"),
            kubernetes_version=require_string(props, "KubernetesVersion"),
            name=extract_string(props, "Name"),
            type=extract_string(props, "ClusterType"),
            endpoint_config=_endpoint_config(props),
            options=_create_options(props),
            **extract_tag_fields(props),
        )
        client = self.clients.container_engine()
        response = await self.clients.execute(
            client.create_cluster, details, operation_name="create_cluster"
        )
        return self.accepted(Operation.CREATE, response)

    async def read(self, request: ReadRequest) -> ReadResult:
        client = self.clients.container_engine()
        cluster = await self.fetch_or_none(
            client.get_cluster, request.native_id, operation_name="get_cluster"
        )
        if cluster is None:
            return self.not_found()
        return self.found(cluster_properties(cluster))

    async def update(self, request: UpdateRequest) -> ProgressResult:
        props = await resolve_properties(request, self.read)
        fields = {
            "name": extract_string(props, "Name"),
            "kubernetes_version": extract_string(props, "KubernetesVersion"),
            **extract_tag_fields(props),
        }
        details = oci.container_engine.models.UpdateClusterDetails(
            **{k: v for k, v in fields.items() if v is not None}
        )
        client = self.clients.container_engine()
        response = await self.clients.execute(
            client.update_cluster,
            request.native_id,
            details,
            operation_name="update_cluster",
        )
        return self.accepted(Operation.UPDATE, response, native_id=request.native_id)

    async def delete_resource(self, native_id: str) -> Any:
        client = self.clients.container_engine()
        return await self.clients.execute(
            client.delete_cluster, native_id, operation_name="delete_cluster"
        )

    async def list(self, request: ListRequest) -> ListResult:
        compartment_id = self.require_compartment(request)
        client = self.clients.container_engine()
        clusters = await self.clients.list_all(
            client.list_clusters,
            compartment_id,
            lifecycle_state=LISTED_STATES,
        )
        return ListResult(native_ids=[cluster.id for cluster in clusters])
