"""Unit tests for the block volume operator."""

import json

import pytest

from oci_provisioner.clients.oci.clients import BLOCK_STORAGE
from oci_provisioner.errors import PropertyError, ProviderServiceError
from oci_provisioner.operations.requests import (
    CreateRequest,
    DeleteRequest,
    ListRequest,
    ReadRequest,
    StatusRequest,
    UpdateRequest,
)
from oci_provisioner.operations.status import Operation, OperationErrorCode
from oci_provisioner.provisioners.core.volume import VolumeOperator
from tests.factories.oci import (
    COMPARTMENT_ID,
    make_response,
    make_service_error,
    make_volume,
)

VOLUME = "OCI::Core::Volume"


@pytest.fixture
def block_storage(sdk_clients):
    return sdk_clients[BLOCK_STORAGE]


@pytest.fixture
def operator(oci_clients):
    return VolumeOperator(oci_clients)


@pytest.mark.unit
class TestCreate:
    @pytest.mark.asyncio
    async def test_create_returns_native_id_and_properties(self, operator, block_storage):
        block_storage.create_volume.return_value = make_response(make_volume())
        request = CreateRequest(
            resource_type=VOLUME,
            properties=json.dumps(
                {
                    "CompartmentId": COMPARTMENT_ID,
                    "AvailabilityDomain": "Uocm:PHX-AD-1",
                    "SizeInGBs": 50,
                    "FreeformTags": [{"Key": "env", "Value": "dev"}],
                }
            ),
        )

        result = await operator.create(request)

        assert result.is_success
        assert result.native_id == "ocid1.volume.oc1..vol1"
        properties = json.loads(result.resource_properties)
        assert properties["SizeInGBs"] == 50
        assert properties["FreeformTags"] == [
            {"Key": "env", "Value": "dev"},
            {"Key": "team", "Value": "platform"},
        ]
        details = block_storage.create_volume.call_args.args[0]
        assert details.compartment_id == COMPARTMENT_ID
        assert details.size_in_gbs == 50
        assert details.freeform_tags == {"env": "dev"}

    @pytest.mark.asyncio
    async def test_missing_required_property(self, operator, block_storage):
        request = CreateRequest(resource_type=VOLUME, properties="{}")
        with pytest.raises(PropertyError):
            await operator.create(request)
        block_storage.create_volume.assert_not_called()


@pytest.mark.unit
class TestRead:
    @pytest.mark.asyncio
    async def test_read_found(self, operator, block_storage):
        block_storage.get_volume.return_value = make_response(make_volume())

        result = await operator.read(ReadRequest(VOLUME, "ocid1.volume.oc1..vol1"))

        assert result.is_found
        assert json.loads(result.properties)["DisplayName"] == "data"
        block_storage.get_volume.assert_called_once_with("ocid1.volume.oc1..vol1")

    @pytest.mark.asyncio
    async def test_read_not_found(self, operator, block_storage):
        block_storage.get_volume.side_effect = make_service_error(404, "NotAuthorizedOrNotFound")

        result = await operator.read(ReadRequest(VOLUME, "ocid1.volume.oc1..gone"))

        assert result.error_code == OperationErrorCode.NOT_FOUND
        assert result.resource_type == VOLUME

    @pytest.mark.asyncio
    async def test_read_other_errors_propagate(self, operator, block_storage):
        block_storage.get_volume.side_effect = make_service_error(500, "InternalServerError")

        with pytest.raises(ProviderServiceError) as exc_info:
            await operator.read(ReadRequest(VOLUME, "ocid1.volume.oc1..vol1"))
        assert exc_info.value.status == 500
        assert exc_info.value.operation_name == "get_volume"


@pytest.mark.unit
class TestUpdate:
    @pytest.mark.asyncio
    async def test_update_applies_patch_to_current_state(self, operator, block_storage):
        block_storage.get_volume.return_value = make_response(make_volume())
        block_storage.update_volume.return_value = make_response(
            make_volume(size_in_gbs=100)
        )
        request = UpdateRequest(
            resource_type=VOLUME,
            native_id="ocid1.volume.oc1..vol1",
            patch_document=json.dumps(
                [{"op": "replace", "path": "/SizeInGBs", "value": 100}]
            ),
        )

        result = await operator.update(request)

        assert result.is_success
        assert result.operation == Operation.UPDATE
        native_id, details = block_storage.update_volume.call_args.args
        assert native_id == "ocid1.volume.oc1..vol1"
        assert details.size_in_gbs == 100
        assert details.display_name == "data"


@pytest.mark.unit
class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_absent_volume_succeeds_without_delete_call(
        self, operator, block_storage
    ):
        block_storage.get_volume.side_effect = make_service_error(404, "NotFound")

        result = await operator.delete(
            DeleteRequest(resource_type=VOLUME, native_id="ocid1.volume.oc1..gone")
        )

        assert result.is_success
        assert result.native_id == "ocid1.volume.oc1..gone"
        block_storage.delete_volume.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_existing_volume(self, operator, block_storage):
        block_storage.get_volume.return_value = make_response(make_volume())
        block_storage.delete_volume.return_value = make_response()

        result = await operator.delete(
            DeleteRequest(resource_type=VOLUME, native_id="ocid1.volume.oc1..vol1")
        )

        assert result.is_success
        block_storage.delete_volume.assert_called_once_with("ocid1.volume.oc1..vol1")


@pytest.mark.unit
class TestStatusAndList:
    @pytest.mark.asyncio
    async def test_status_echoes_request_id(self, operator):
        result = await operator.status(
            StatusRequest(resource_type=VOLUME, request_id="req-1", native_id="v")
        )
        assert result.is_success
        assert result.request_id == "req-1"
        assert result.operation == Operation.CHECK_STATUS

    @pytest.mark.asyncio
    async def test_list_requires_compartment(self, operator):
        with pytest.raises(PropertyError):
            await operator.list(ListRequest(resource_type=VOLUME))

    @pytest.mark.asyncio
    async def test_list_returns_ids(self, operator, block_storage):
        block_storage.list_volumes.return_value = make_response(
            [make_volume("v1"), make_volume("v2")]
        )

        result = await operator.list(
            ListRequest(
                resource_type=VOLUME,
                additional_properties={"CompartmentId": COMPARTMENT_ID},
            )
        )

        assert result.native_ids == ["v1", "v2"]
