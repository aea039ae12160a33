"""Unit tests for the Kubernetes cluster operator."""

import json

import pytest

from oci_provisioner.clients.oci.clients import CONTAINER_ENGINE
from oci_provisioner.errors import PropertyError
from oci_provisioner.operations.requests import (
    CreateRequest,
    DeleteRequest,
    ListRequest,
    StatusRequest,
    UpdateRequest,
)
from oci_provisioner.operations.status import Operation
from oci_provisioner.provisioners.containerengine.cluster import ClusterOperator
from tests.factories.oci import (
    COMPARTMENT_ID,
    make_cluster,
    make_response,
    make_service_error,
    make_work_request,
)

CLUSTER = "OCI::ContainerEngine::Cluster"

CLUSTER_PROPERTIES = {
    "CompartmentId": COMPARTMENT_ID,
    "VcnId": "ocid1.vcn.oc1..vcn1",
    "KubernetesVersion": "v1.29.1",
    "Name": "prod",
    "EndpointConfig": {"SubnetId": "ocid1.subnet.1", "IsPublicIpEnabled": True},
}


@pytest.fixture
def container_engine(sdk_clients):
    return sdk_clients[CONTAINER_ENGINE]


def accepted(work_request_id="wr-1"):
    return make_response(headers={"opc-work-request-id": work_request_id})


@pytest.mark.unit
class TestMutations:
    @pytest.mark.asyncio
    async def test_create_returns_work_request(self, oci_clients, container_engine):
        container_engine.create_cluster.return_value = accepted("wr-1")
        request = CreateRequest(
            resource_type=CLUSTER, properties=json.dumps(CLUSTER_PROPERTIES)
        )

        result = await ClusterOperator(oci_clients).create(request)

        assert result.is_in_progress
        assert result.request_id == "wr-1"
        details = container_engine.create_cluster.call_args.args[0]
        assert details.vcn_id == "ocid1.vcn.oc1..vcn1"
        assert details.endpoint_config.subnet_id == "ocid1.subnet.1"
        assert details.endpoint_config.is_public_ip_enabled is True

    @pytest.mark.asyncio
    async def test_create_requires_vcn(self, oci_clients):
        props = dict(CLUSTER_PROPERTIES)
        del props["VcnId"]
        with pytest.raises(PropertyError):
            await ClusterOperator(oci_clients).create(
                CreateRequest(resource_type=CLUSTER, properties=json.dumps(props))
            )

    @pytest.mark.asyncio
    async def test_update_returns_work_request_with_native_id(
        self, oci_clients, container_engine
    ):
        container_engine.update_cluster.return_value = accepted("wr-2")
        request = UpdateRequest(
            resource_type=CLUSTER,
            native_id="ocid1.cluster.oc1..c1",
            desired_properties=json.dumps({"KubernetesVersion": "v1.30.1"}),
        )

        result = await ClusterOperator(oci_clients).update(request)

        assert result.is_in_progress
        assert result.request_id == "wr-2"
        assert result.native_id == "ocid1.cluster.oc1..c1"
        details = container_engine.update_cluster.call_args.args[1]
        assert details.kubernetes_version == "v1.30.1"

    @pytest.mark.asyncio
    async def test_delete_existing_cluster(self, oci_clients, container_engine):
        container_engine.get_cluster.return_value = make_response(make_cluster())
        container_engine.delete_cluster.return_value = accepted("wr-3")

        result = await ClusterOperator(oci_clients).delete(
            DeleteRequest(resource_type=CLUSTER, native_id="ocid1.cluster.oc1..c1")
        )

        assert result.is_in_progress
        assert result.operation == Operation.DELETE
        assert result.request_id == "wr-3"

    @pytest.mark.asyncio
    async def test_delete_absent_cluster(self, oci_clients, container_engine):
        container_engine.get_cluster.side_effect = make_service_error(404, "NotFound")

        result = await ClusterOperator(oci_clients).delete(
            DeleteRequest(resource_type=CLUSTER, native_id="ocid1.cluster.oc1..gone")
        )

        assert result.is_success
        container_engine.delete_cluster.assert_not_called()


@pytest.mark.unit
class TestStatusAndList:
    @pytest.mark.asyncio
    async def test_status_polls_work_request(self, oci_clients, container_engine):
        container_engine.get_work_request.return_value = make_response(
            make_work_request("SUCCEEDED", [("CREATED", "r-42")])
        )

        result = await ClusterOperator(oci_clients).status(
            StatusRequest(resource_type=CLUSTER, request_id="wr-1")
        )

        assert result.is_success
        assert result.native_id == "r-42"
        container_engine.get_work_request.assert_called_once_with("wr-1")

    @pytest.mark.asyncio
    async def test_list_filters_lifecycle_states(self, oci_clients, container_engine):
        container_engine.list_clusters.return_value = make_response(
            [make_cluster("c1")]
        )

        result = await ClusterOperator(oci_clients).list(
            ListRequest(
                resource_type=CLUSTER,
                additional_properties={"CompartmentId": COMPARTMENT_ID},
            )
        )

        assert result.native_ids == ["c1"]
        assert container_engine.list_clusters.call_args.kwargs["lifecycle_state"] == [
            "CREATING",
            "ACTIVE",
            "UPDATING",
        ]
