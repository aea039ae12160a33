"""Resource operator registry.

Maps resource type names (e.g. "OCI::Core::Volume") to factories that build
an operator from a request's OCIClients.
"""

import threading
from typing import Callable, Dict, FrozenSet, Optional

import structlog

from oci_provisioner.clients.oci.clients import OCIClients
from oci_provisioner.errors import OperatorNotFoundError
from oci_provisioner.provisioners.base import ResourceOperator
from oci_provisioner.provisioners.read_after_write import ReadAfterWrite

logger = structlog.get_logger()

OperatorFactory = Callable[[OCIClients], ResourceOperator]


class OperatorRegistry:
    """Thread-safe registry of resource operator factories.

    Populated once at startup and read concurrently afterwards. Operators
    returned by get() are wrapped in ReadAfterWrite.

    Attributes:
        _factories: Dict mapping resource type to operator factory.
        _lock: Threading lock guarding _factories.
    """

    def __init__(self):
        self._factories: Dict[str, OperatorFactory] = {}
        self._lock = threading.Lock()

    def register(self, resource_type: str, factory: OperatorFactory) -> None:
        """Register a factory for a resource type. The last registration wins."""
        with self._lock:
            replaced = resource_type in self._factories
            self._factories[resource_type] = factory

        if replaced:
            logger.info("operator_replaced", resource_type=resource_type)
        else:
            logger.debug("operator_registered", resource_type=resource_type)

    def get_factory(self, resource_type: str) -> OperatorFactory:
        """Return the raw factory for a resource type.

        Raises:
            OperatorNotFoundError: If nothing is registered for the type.
        """
        with self._lock:
            factory = self._factories.get(resource_type)
        if factory is None:
            raise OperatorNotFoundError(resource_type)
        return factory

    def get(self, resource_type: str, clients: OCIClients) -> ResourceOperator:
        """Build the decorated operator for a resource type.

        Args:
            resource_type: Resource type name.
            clients: Clients of the request's target.

        Returns:
            Operator wrapped in ReadAfterWrite.

        Raises:
            OperatorNotFoundError: If nothing is registered for the type.
        """
        factory = self.get_factory(resource_type)
        return ReadAfterWrite(factory(clients))

    def get_or_none(
        self, resource_type: str, clients: OCIClients
    ) -> Optional[ResourceOperator]:
        with self._lock:
            factory = self._factories.get(resource_type)
        if factory is None:
            return None
        return ReadAfterWrite(factory(clients))

    def list_registered(self) -> FrozenSet[str]:
        with self._lock:
            return frozenset(self._factories)

    def is_registered(self, resource_type: str) -> bool:
        with self._lock:
            return resource_type in self._factories

    def clear(self) -> None:
        """Remove every registration. Primarily used for testing."""
        with self._lock:
            self._factories.clear()
        logger.debug("operator_registry_cleared")
