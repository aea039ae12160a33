"""Unit tests for the compartment operator."""

import json

import pytest

from oci_provisioner.clients.oci.clients import IDENTITY
from oci_provisioner.operations.requests import (
    CreateRequest,
    DeleteRequest,
    ListRequest,
    ReadRequest,
)
from oci_provisioner.provisioners.identity.compartment import CompartmentOperator
from tests.factories.oci import (
    COMPARTMENT_ID,
    TENANCY_ID,
    make_compartment,
    make_response,
)

COMPARTMENT = "OCI::Identity::Compartment"


@pytest.fixture
def identity(sdk_clients):
    return sdk_clients[IDENTITY]


@pytest.mark.unit
class TestRead:
    @pytest.mark.asyncio
    async def test_deleted_compartment_is_not_found(self, oci_clients, identity):
        identity.get_compartment.return_value = make_response(
            make_compartment(lifecycle_state="DELETED")
        )

        result = await CompartmentOperator(oci_clients).read(
            ReadRequest(COMPARTMENT, "ocid1.compartment.oc1..child")
        )

        assert not result.is_found

    @pytest.mark.asyncio
    async def test_root_compartment_parent_falls_back_to_own_id(
        self, oci_clients, identity
    ):
        identity.get_compartment.return_value = make_response(
            make_compartment(TENANCY_ID, compartment_id=None, name="root")
        )

        result = await CompartmentOperator(oci_clients).read(
            ReadRequest(COMPARTMENT, TENANCY_ID)
        )

        assert json.loads(result.properties)["CompartmentId"] == TENANCY_ID

    @pytest.mark.asyncio
    async def test_delete_of_deleted_compartment_is_skipped(self, oci_clients, identity):
        identity.get_compartment.return_value = make_response(
            make_compartment(lifecycle_state="DELETED")
        )

        result = await CompartmentOperator(oci_clients).delete(
            DeleteRequest(resource_type=COMPARTMENT, native_id="ocid1.compartment.oc1..child")
        )

        assert result.is_success
        identity.delete_compartment.assert_not_called()


@pytest.mark.unit
class TestCreate:
    @pytest.mark.asyncio
    async def test_create(self, oci_clients, identity):
        identity.create_compartment.return_value = make_response(make_compartment())
        request = CreateRequest(
            resource_type=COMPARTMENT,
            properties=json.dumps(
                {
                    "CompartmentId": COMPARTMENT_ID,
                    "Name": "child",
                    "Description": "child compartment",
                }
            ),
        )

        result = await CompartmentOperator(oci_clients).create(request)

        assert result.native_id == "ocid1.compartment.oc1..child"
        details = identity.create_compartment.call_args.args[0]
        assert details.name == "child"
        assert details.compartment_id == COMPARTMENT_ID


@pytest.mark.unit
class TestList:
    @pytest.mark.asyncio
    async def test_list_without_parent_includes_tenancy(self, oci_clients, identity):
        identity.list_compartments.return_value = make_response(
            [make_compartment("c1"), make_compartment("c2")]
        )

        result = await CompartmentOperator(oci_clients).list(
            ListRequest(resource_type=COMPARTMENT)
        )

        assert result.native_ids == [TENANCY_ID, "c1", "c2"]
        args, kwargs = identity.list_compartments.call_args
        assert args[0] == TENANCY_ID
        assert kwargs["compartment_id_in_subtree"] is False
        assert kwargs["access_level"] == "ACCESSIBLE"

    @pytest.mark.asyncio
    async def test_list_with_parent_lists_children_only(self, oci_clients, identity):
        identity.list_compartments.return_value = make_response([make_compartment("c1")])

        result = await CompartmentOperator(oci_clients).list(
            ListRequest(
                resource_type=COMPARTMENT,
                additional_properties={"CompartmentId": COMPARTMENT_ID},
            )
        )

        assert result.native_ids == ["c1"]
        assert identity.list_compartments.call_args.args[0] == COMPARTMENT_ID
