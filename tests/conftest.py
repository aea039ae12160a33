"""Shared fixtures: fake OCI SDK clients and a fresh operator registry."""

from typing import Dict
from unittest.mock import MagicMock

import pytest

from oci_provisioner.clients.oci.clients import (
    BLOCK_STORAGE,
    CONTAINER_ENGINE,
    IDENTITY,
    OBJECT_STORAGE,
    VIRTUAL_NETWORK,
    OCIClients,
)
from oci_provisioner.provisioners.registry import OperatorRegistry
from tests.factories.oci import TENANCY_ID

FAMILIES = (VIRTUAL_NETWORK, BLOCK_STORAGE, OBJECT_STORAGE, IDENTITY, CONTAINER_ENGINE)


@pytest.fixture
def sdk_clients() -> Dict[str, MagicMock]:
    """One MagicMock per OCI service family."""
    return {family: MagicMock(name=family) for family in FAMILIES}


@pytest.fixture
def client_factories(sdk_clients):
    return {
        family: (lambda config, client=client: client)
        for family, client in sdk_clients.items()
    }


@pytest.fixture
def oci_clients(client_factories) -> OCIClients:
    return OCIClients(
        {"tenancy": TENANCY_ID, "region": "us-ashburn-1"},
        client_factories=client_factories,
    )


@pytest.fixture
def registry() -> OperatorRegistry:
    return OperatorRegistry()
