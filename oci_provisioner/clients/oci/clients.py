"""OCI clients facade.

One OCIClients instance exists per request. Service clients are constructed
lazily, once per service family, the first time an operator asks for them.
"""

import threading
from typing import Any, Callable, Dict, List, Mapping, Optional

import oci
import structlog

from oci_provisioner.clients.oci.executor import execute_oci_call
from oci_provisioner.clients.oci.session_provider import SessionProvider
from oci_provisioner.configuration.target import TargetConfig

logger = structlog.get_logger()

ClientFactory = Callable[[Dict[str, Any]], Any]

VIRTUAL_NETWORK = "virtual_network"
BLOCK_STORAGE = "block_storage"
OBJECT_STORAGE = "object_storage"
IDENTITY = "identity"
CONTAINER_ENGINE = "container_engine"

DEFAULT_CLIENT_FACTORIES: Mapping[str, ClientFactory] = {
    VIRTUAL_NETWORK: oci.core.VirtualNetworkClient,
    BLOCK_STORAGE: oci.core.BlockstorageClient,
    OBJECT_STORAGE: oci.object_storage.ObjectStorageClient,
    IDENTITY: oci.identity.IdentityClient,
    CONTAINER_ENGINE: oci.container_engine.ContainerEngineClient,
}


class OCIClients:
    """Facade over the OCI service clients of one target.

    Args:
        config: Resolved OCI SDK configuration dict
        client_factories: Overrides for the per-family client constructors

    Usage:
        clients = OCIClients.from_target(target_config, session_provider)
        response = await clients.execute(
            clients.block_storage().get_volume, volume_id
        )
    """

    def __init__(
        self,
        config: Dict[str, Any],
        client_factories: Optional[Mapping[str, ClientFactory]] = None,
    ) -> None:
        self._config = config
        self._factories: Dict[str, ClientFactory] = dict(DEFAULT_CLIENT_FACTORIES)
        if client_factories:
            self._factories.update(client_factories)
        self._clients: Dict[str, Any] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_target(
        cls,
        target: Optional[TargetConfig],
        session_provider: SessionProvider,
        client_factories: Optional[Mapping[str, ClientFactory]] = None,
    ) -> "OCIClients":
        return cls(session_provider.build_config(target), client_factories)

    @property
    def config(self) -> Dict[str, Any]:
        return self._config

    @property
    def tenancy(self) -> Optional[str]:
        return self._config.get("tenancy")

    def _client(self, family: str) -> Any:
        with self._lock:
            client = self._clients.get(family)
            if client is None:
                logger.debug("creating_oci_client", family=family)
                client = self._factories[family](self._config)
                self._clients[family] = client
            return client

    def virtual_network(self) -> Any:
        return self._client(VIRTUAL_NETWORK)

    def block_storage(self) -> Any:
        return self._client(BLOCK_STORAGE)

    def object_storage(self) -> Any:
        return self._client(OBJECT_STORAGE)

    def identity(self) -> Any:
        return self._client(IDENTITY)

    def container_engine(self) -> Any:
        return self._client(CONTAINER_ENGINE)

    async def execute(
        self,
        method: Callable[..., Any],
        *args: Any,
        operation_name: Optional[str] = None,
        **kwargs: Any,
    ) -> Any:
        """Run a bound SDK method in a worker thread. See execute_oci_call."""
        return await execute_oci_call(
            method, *args, operation_name=operation_name, **kwargs
        )

    async def list_all(
        self,
        method: Callable[..., Any],
        *args: Any,
        operation_name: Optional[str] = None,
        **kwargs: Any,
    ) -> List[Any]:
        """Run a paginated list call to completion and return every item."""
        response = await execute_oci_call(
            oci.pagination.list_call_get_all_results,
            method,
            *args,
            operation_name=operation_name or getattr(method, "__name__", None),
            **kwargs,
        )
        return list(response.data or [])
