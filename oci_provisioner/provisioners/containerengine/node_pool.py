"""Kubernetes node pool operator (OCI::ContainerEngine::NodePool).

Like clusters, node pool mutations run as Container Engine work requests.
Nested objects use the same PascalCase keys as top-level properties, so a
read snapshot can be patched and fed back into update.
"""

from typing import Any, Dict, List, Mapping, Optional

import oci

from oci_provisioner.errors import PropertyError
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
    extract_float,
    extract_int,
    extract_string,
    extract_string_list,
    extract_tag_fields,
    freeform_tags_to_list,
    parse_properties,
    require_string,
)

RESOURCE_TYPE = "OCI::ContainerEngine::NodePool"
LISTED_STATES = ["CREATING", "ACTIVE", "UPDATING", "INACTIVE", "NEEDS_ATTENTION"]


def _drop_none(values: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


def node_pool_properties(node_pool: Any) -> Dict[str, Any]:
    properties: Dict[str, Any] = {
        "Id": node_pool.id,
        "CompartmentId": node_pool.compartment_id,
        "ClusterId": node_pool.cluster_id,
        "Name": node_pool.name,
        "NodeShape": node_pool.node_shape,
    }
    properties.update(
        _drop_none(
            {
                "KubernetesVersion": node_pool.kubernetes_version,
                "LifecycleState": node_pool.lifecycle_state,
                "SshPublicKey": node_pool.ssh_public_key,
                "FreeformTags": freeform_tags_to_list(node_pool.freeform_tags),
                "DefinedTags": defined_tags_to_list(node_pool.defined_tags),
            }
        )
    )

    shape = node_pool.node_shape_config
    if shape is not None:
        shape_props = _drop_none(
            {"Ocpus": shape.ocpus, "MemoryInGBs": shape.memory_in_gbs}
        )
        if shape_props:
            properties["NodeShapeConfig"] = shape_props

    node_config = node_pool.node_config_details
    if node_config is not None:
        config_props = _drop_none(
            {
                "Size": node_config.size,
                "NsgIds": node_config.nsg_ids,
                "IsPvEncryptionInTransitEnabled": node_config.is_pv_encryption_in_transit_enabled,
            }
        )
        placements = [
            _drop_none(
                {
                    "AvailabilityDomain": placement.availability_domain,
                    "SubnetId": placement.subnet_id,
                    "CapacityReservationId": placement.capacity_reservation_id,
                    "FaultDomains": placement.fault_domains or None,
                }
            )
            for placement in node_config.placement_configs or []
        ]
        if placements:
            config_props["PlacementConfigs"] = placements
        properties["NodeConfigDetails"] = config_props

    labels = [
        _drop_none({"Key": label.key, "Value": label.value})
        for label in node_pool.initial_node_labels or []
    ]
    if labels:
        properties["InitialNodeLabels"] = labels
    return properties


def _placement_configs(node_config: Mapping[str, Any]) -> Optional[List[Any]]:
    placements = node_config.get("PlacementConfigs")
    if not isinstance(placements, list):
        return None
    return [
        oci.container_engine.models.NodePoolPlacementConfigDetails(
            availability_domain=extract_string(placement, "AvailabilityDomain"),
            subnet_id=extract_string(placement, "SubnetId"),
            capacity_reservation_id=extract_string(placement, "CapacityReservationId"),
            fault_domains=extract_string_list(placement, "FaultDomains"),
        )
        for placement in placements
        if isinstance(placement, dict)
    ]


def _node_config_fields(props: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
    node_config = props.get("NodeConfigDetails")
    if not isinstance(node_config, dict):
        return None
    return _drop_none(
        {
            "size": extract_int(node_config, "Size"),
            "placement_configs": _placement_configs(node_config),
            "nsg_ids": extract_string_list(node_config, "NsgIds"),
            "is_pv_encryption_in_transit_enabled": extract_bool(
                node_config, "IsPvEncryptionInTransitEnabled"
            ),
        }
    )


def _shape_config_fields(props: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
    shape = props.get("NodeShapeConfig")
    if not isinstance(shape, dict):
        return None
    return _drop_none(
        {
            "ocpus": extract_float(shape, "Ocpus"),
            "memory_in_gbs": extract_float(shape, "MemoryInGBs"),
        }
    )


def _initial_node_labels(props: Mapping[str, Any]) -> Optional[List[Any]]:
    labels = props.get("InitialNodeLabels")
    if not isinstance(labels, list):
        return None
    return [
        oci.container_engine.models.KeyValue(
            key=extract_string(label, "Key"), value=extract_string(label, "Value")
        )
        for label in labels
        if isinstance(label, dict)
    ]


def _node_source_details(props: Mapping[str, Any]) -> Any:
    source = props.get("NodeSourceDetails")
    if not isinstance(source, dict):
        raise PropertyError(
            "NodeSourceDetails is required: specify the OKE image id for your region"
        )
    image_id = extract_string(source, "ImageId")
    if not image_id:
        raise PropertyError("NodeSourceDetails.ImageId is required")
    return oci.container_engine.models.NodeSourceViaImageDetails(
        image_id=image_id,
        boot_volume_size_in_gbs=extract_int(source, "BootVolumeSizeInGBs"),
    )


class NodePoolOperator(WorkRequestOperator):
    resource_type = RESOURCE_TYPE

    def work_request_client(self) -> Any:
        return self.clients.container_engine()

    async def create(self, request: CreateRequest) -> ProgressResult:
        props = parse_properties(request.properties)
        models = oci.container_engine.models

        node_config = _node_config_fields(props)
        shape_config = _shape_config_fields(props)
        details = models.CreateNodePoolDetails(
            compartment_id=require_string(props, "CompartmentId"),
            cluster_id=require_string(props, "ClusterId"),
            name=require_string(props, "Name"),
            node_shape=require_string(props, "NodeShape"),
            node_source_details=_node_source_details(props),
            kubernetes_version=extract_string(props, "KubernetesVersion"),
            ssh_public_key=extract_string(props, "SshPublicKey"),
            initial_node_labels=_initial_node_labels(props),
            node_config_details=(
                models.CreateNodePoolNodeConfigDetails(**node_config)
                if node_config is not None
                else None
            ),
            node_shape_config=(
                models.CreateNodeShapeConfigDetails(**shape_config)
                if shape_config is not None
                else None
            ),
            **extract_tag_fields(props),
        )
        client = self.clients.container_engine()
        response = await self.clients.execute(
            client.create_node_pool, details, operation_name="create_node_pool"
        )
        return self.accepted(Operation.CREATE, response)

    async def read(self, request: ReadRequest) -> ReadResult:
        client = self.clients.container_engine()
        node_pool = await self.fetch_or_none(
            client.get_node_pool, request.native_id, operation_name="get_node_pool"
        )
        if node_pool is None:
            return self.not_found()
        return self.found(node_pool_properties(node_pool))

    async def update(self, request: UpdateRequest) -> ProgressResult:
        props = await resolve_properties(request, self.read)
        models = oci.container_engine.models

        node_config = _node_config_fields(props)
        shape_config = _shape_config_fields(props)
        fields = {
            "name": extract_string(props, "Name"),
            "kubernetes_version": extract_string(props, "KubernetesVersion"),
            "initial_node_labels": _initial_node_labels(props),
            "node_config_details": (
                models.UpdateNodePoolNodeConfigDetails(**node_config)
                if node_config is not None
                else None
            ),
            "node_shape_config": (
                models.UpdateNodeShapeConfigDetails(**shape_config)
                if shape_config is not None
                else None
            ),
            **extract_tag_fields(props),
        }
        details = models.UpdateNodePoolDetails(**_drop_none(fields))
        client = self.clients.container_engine()
        response = await self.clients.execute(
            client.update_node_pool,
            request.native_id,
            details,
            operation_name="update_node_pool",
        )
        return self.accepted(Operation.UPDATE, response, native_id=request.native_id)

    async def delete_resource(self, native_id: str) -> Any:
        client = self.clients.container_engine()
        return await self.clients.execute(
            client.delete_node_pool, native_id, operation_name="delete_node_pool"
        )

    async def list(self, request: ListRequest) -> ListResult:
        """List node pools by CompartmentId, ClusterId or both.

        With only ClusterId the compartment is taken from the cluster.
        """
        client = self.clients.container_engine()
        compartment_id = request.additional_properties.get("CompartmentId")
        cluster_id = request.additional_properties.get("ClusterId")

        if not compartment_id and cluster_id:
            response = await self.clients.execute(
                client.get_cluster, cluster_id, operation_name="get_cluster"
            )
            compartment_id = response.data.compartment_id
        if not compartment_id:
            raise PropertyError(
                f"CompartmentId or ClusterId is required for listing {self.resource_type}"
            )

        filters: Dict[str, Any] = {"lifecycle_state": LISTED_STATES}
        if cluster_id:
            filters["cluster_id"] = cluster_id
        node_pools = await self.clients.list_all(
            client.list_node_pools, compartment_id, **filters
        )
        return ListResult(native_ids=[node_pool.id for node_pool in node_pools])
