"""Unit tests for the plugin entry point."""

import json
from unittest.mock import MagicMock

import pytest

from oci_provisioner.clients.oci.clients import BLOCK_STORAGE, CONTAINER_ENGINE
from oci_provisioner.clients.oci.session_provider import SessionProvider
from oci_provisioner.errors import OperatorNotFoundError, ProviderServiceError
from oci_provisioner.operations.requests import (
    CreateRequest,
    DeleteRequest,
    ListRequest,
    ReadRequest,
    StatusRequest,
    UpdateRequest,
)
from oci_provisioner.operations.status import OperationErrorCode, OperationStatus
from oci_provisioner.plugin import RateLimitConfig, ResourcePlugin
from oci_provisioner.provisioners import build_default_registry
from tests.factories.oci import (
    COMPARTMENT_ID,
    TENANCY_ID,
    make_response,
    make_service_error,
    make_volume,
    make_work_request,
)

CLUSTER = "OCI::ContainerEngine::Cluster"
VOLUME = "OCI::Core::Volume"


@pytest.fixture
def session_provider():
    provider = MagicMock(spec=SessionProvider)
    provider.build_config.return_value = {"tenancy": TENANCY_ID}
    return provider


@pytest.fixture
def plugin(session_provider, client_factories):
    return ResourcePlugin(
        registry=build_default_registry(),
        session_provider=session_provider,
        client_factories=client_factories,
    )


@pytest.mark.unit
class TestAsyncLifecycle:
    @pytest.mark.asyncio
    async def test_cluster_create_then_status(self, plugin, sdk_clients):
        container_engine = sdk_clients[CONTAINER_ENGINE]
        container_engine.create_cluster.return_value = make_response(
            headers={"opc-work-request-id": "wr-1"}
        )
        container_engine.get_work_request.side_effect = [
            make_response(make_work_request("IN_PROGRESS")),
            make_response(make_work_request("SUCCEEDED", [("CREATED", "r-42")])),
        ]
        properties = {
            "CompartmentId": COMPARTMENT_ID,
            "VcnId": "ocid1.vcn.oc1..vcn1",
            "KubernetesVersion": "v1.29.1",
        }

        created = await plugin.create(
            CreateRequest(resource_type=CLUSTER, properties=json.dumps(properties))
        )
        assert created.operation_status == OperationStatus.IN_PROGRESS
        assert created.request_id == "wr-1"
        container_engine.get_cluster.assert_not_called()

        poll = StatusRequest(resource_type=CLUSTER, request_id=created.request_id)
        pending = await plugin.status(poll)
        assert pending.operation_status == OperationStatus.IN_PROGRESS
        assert pending.request_id == "wr-1"

        status = await plugin.status(poll)
        assert status.operation_status == OperationStatus.SUCCESS
        assert status.native_id == "r-42"


@pytest.mark.unit
class TestSyncLifecycle:
    @pytest.mark.asyncio
    async def test_create_reads_back_properties(self, plugin, sdk_clients):
        block_storage = sdk_clients[BLOCK_STORAGE]
        block_storage.create_volume.return_value = make_response(
            make_volume(lifecycle_state="PROVISIONING", display_name=None)
        )
        block_storage.get_volume.return_value = make_response(make_volume())

        result = await plugin.create(
            CreateRequest(
                resource_type=VOLUME,
                properties=json.dumps(
                    {"CompartmentId": COMPARTMENT_ID, "AvailabilityDomain": "AD-1"}
                ),
            )
        )

        assert result.is_success
        assert json.loads(result.resource_properties)["DisplayName"] == "data"
        block_storage.get_volume.assert_called_once_with("ocid1.volume.oc1..vol1")

    @pytest.mark.asyncio
    async def test_idempotent_delete(self, plugin, sdk_clients):
        block_storage = sdk_clients[BLOCK_STORAGE]
        block_storage.get_volume.side_effect = make_service_error(404, "NotFound")

        result = await plugin.delete(
            DeleteRequest(resource_type=VOLUME, native_id="ocid1.volume.oc1..gone")
        )

        assert result.is_success
        block_storage.delete_volume.assert_not_called()


@pytest.mark.unit
class TestErrorConversion:
    @pytest.mark.asyncio
    async def test_classified_create_error_becomes_failure(self, plugin, sdk_clients):
        sdk_clients[BLOCK_STORAGE].create_volume.side_effect = make_service_error(
            409, "Conflict", "volume limit reached"
        )

        result = await plugin.create(
            CreateRequest(
                resource_type=VOLUME,
                properties=json.dumps(
                    {"CompartmentId": COMPARTMENT_ID, "AvailabilityDomain": "AD-1"}
                ),
            )
        )

        assert result.operation_status == OperationStatus.FAILURE
        assert result.error_code == OperationErrorCode.RESOURCE_CONFLICT
        assert result.status_message == (
            "OCI::Core::Volume cannot be created: volume limit reached"
        )

    @pytest.mark.asyncio
    async def test_classified_update_error_carries_native_id(self, plugin, sdk_clients):
        block_storage = sdk_clients[BLOCK_STORAGE]
        block_storage.update_volume.side_effect = make_service_error(
            429, "TooManyRequests", "slow down"
        )

        result = await plugin.update(
            UpdateRequest(
                resource_type=VOLUME,
                native_id="ocid1.volume.oc1..vol1",
                desired_properties='{"SizeInGBs": 60}',
            )
        )

        assert result.error_code == OperationErrorCode.THROTTLING
        assert result.native_id == "ocid1.volume.oc1..vol1"

    @pytest.mark.asyncio
    async def test_unclassified_error_propagates(self, plugin, sdk_clients):
        sdk_clients[BLOCK_STORAGE].create_volume.side_effect = make_service_error(
            400, "InvalidParameter"
        )

        with pytest.raises(ProviderServiceError):
            await plugin.create(
                CreateRequest(
                    resource_type=VOLUME,
                    properties=json.dumps(
                        {"CompartmentId": COMPARTMENT_ID, "AvailabilityDomain": "AD-1"}
                    ),
                )
            )

    @pytest.mark.asyncio
    async def test_read_errors_propagate(self, plugin, sdk_clients):
        sdk_clients[BLOCK_STORAGE].get_volume.side_effect = make_service_error(
            503, "ServiceUnavailable"
        )

        with pytest.raises(ProviderServiceError):
            await plugin.read(ReadRequest(VOLUME, "ocid1.volume.oc1..vol1"))


@pytest.mark.unit
class TestUnknownResourceType:
    @pytest.mark.asyncio
    async def test_list_returns_empty(self, plugin, session_provider):
        result = await plugin.list(ListRequest(resource_type="OCI::Nope::Thing"))

        assert result.native_ids == []
        session_provider.build_config.assert_not_called()

    @pytest.mark.asyncio
    async def test_other_operations_raise(self, plugin):
        with pytest.raises(OperatorNotFoundError):
            await plugin.read(ReadRequest("OCI::Nope::Thing", "id"))
        with pytest.raises(OperatorNotFoundError):
            await plugin.delete(
                DeleteRequest(resource_type="OCI::Nope::Thing", native_id="id")
            )


@pytest.mark.unit
class TestTargetConfig:
    @pytest.mark.asyncio
    async def test_target_config_is_parsed_per_request(
        self, plugin, session_provider, sdk_clients
    ):
        sdk_clients[BLOCK_STORAGE].get_volume.return_value = make_response(make_volume())

        await plugin.read(
            ReadRequest(
                VOLUME,
                "ocid1.volume.oc1..vol1",
                target_config='{"Region": "eu-frankfurt-1", "Profile": "CI"}',
            )
        )

        target = session_provider.build_config.call_args.args[0]
        assert target.region == "eu-frankfurt-1"
        assert target.profile == "CI"


def test_rate_limit_descriptor():
    assert ResourcePlugin.rate_limit == RateLimitConfig(
        scope="namespace", max_requests_per_second=2
    )
