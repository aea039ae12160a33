"""Provisioner entry point called by the orchestrator.

ResourcePlugin resolves the target's OCI clients for every call, looks up the
operator of the request's resource type and runs the operation. Provider
errors that classify (not found, conflict, throttling, ...) come back from
create, update and delete as FAILURE results; everything else is raised.
"""

from dataclasses import dataclass
from typing import Mapping, Optional

from oci_provisioner.clients.oci.clients import ClientFactory, OCIClients
from oci_provisioner.clients.oci.session_provider import SessionProvider
from oci_provisioner.configuration.target import TargetConfig
from oci_provisioner.errors import OperatorNotFoundError
from oci_provisioner.logging import bind_request_context, get_module_logger
from oci_provisioner.operations.builders import (
    handle_create_error,
    handle_delete_error,
    handle_update_error,
)
from oci_provisioner.operations.requests import (
    CreateRequest,
    DeleteRequest,
    ListRequest,
    ReadRequest,
    StatusRequest,
    UpdateRequest,
)
from oci_provisioner.operations.result import ListResult, ProgressResult, ReadResult
from oci_provisioner.operations.status import Operation
from oci_provisioner.provisioners.base import ResourceOperator
from oci_provisioner.provisioners.registry import OperatorRegistry

logger = get_module_logger()


@dataclass(frozen=True)
class RateLimitConfig:
    """Request rate the orchestrator may drive against one target namespace."""

    scope: str = "namespace"
    max_requests_per_second: int = 2


class ResourcePlugin:
    """Dispatch orchestrator requests to resource operators.

    Args:
        registry: Operators by resource type
        session_provider: Resolves OCI configuration from target configs
        client_factories: Overrides for the OCI client constructors
    """

    rate_limit = RateLimitConfig()

    def __init__(
        self,
        registry: OperatorRegistry,
        session_provider: SessionProvider,
        client_factories: Optional[Mapping[str, ClientFactory]] = None,
    ):
        self.registry = registry
        self.session_provider = session_provider
        self._client_factories = client_factories

    def clients_for(self, target_config: Optional[str]) -> OCIClients:
        return OCIClients.from_target(
            TargetConfig.from_json(target_config),
            self.session_provider,
            client_factories=self._client_factories,
        )

    def _operator(
        self, resource_type: str, target_config: Optional[str]
    ) -> ResourceOperator:
        if not self.registry.is_registered(resource_type):
            raise OperatorNotFoundError(resource_type)
        return self.registry.get(resource_type, self.clients_for(target_config))

    async def create(self, request: CreateRequest) -> ProgressResult:
        with bind_request_context(
            resource_type=request.resource_type, operation=Operation.CREATE.value
        ):
            operator = self._operator(request.resource_type, request.target_config)
            try:
                return await operator.create(request)
            except Exception as e:  # pylint: disable=broad-except
                result, _ = handle_create_error(
                    e, request.resource_type, request.resource_type
                )
                if result is None:
                    logger.error("create_failed", error=str(e))
                    raise
                return result

    async def update(self, request: UpdateRequest) -> ProgressResult:
        with bind_request_context(
            resource_type=request.resource_type,
            native_id=request.native_id,
            operation=Operation.UPDATE.value,
        ):
            operator = self._operator(request.resource_type, request.target_config)
            try:
                return await operator.update(request)
            except Exception as e:  # pylint: disable=broad-except
                result, _ = handle_update_error(
                    e, request.resource_type, request.native_id, request.resource_type
                )
                if result is None:
                    logger.error("update_failed", error=str(e))
                    raise
                return result

    async def delete(self, request: DeleteRequest) -> ProgressResult:
        with bind_request_context(
            resource_type=request.resource_type,
            native_id=request.native_id,
            operation=Operation.DELETE.value,
        ):
            operator = self._operator(request.resource_type, request.target_config)
            try:
                return await operator.delete(request)
            except Exception as e:  # pylint: disable=broad-except
                result, _ = handle_delete_error(
                    e, request.resource_type, request.native_id, request.resource_type
                )
                if result is None:
                    logger.error("delete_failed", error=str(e))
                    raise
                return result

    async def status(self, request: StatusRequest) -> ProgressResult:
        with bind_request_context(
            resource_type=request.resource_type,
            native_id=request.native_id,
            operation=Operation.CHECK_STATUS.value,
            request_id=request.request_id,
        ):
            operator = self._operator(request.resource_type, request.target_config)
            return await operator.status(request)

    async def read(self, request: ReadRequest) -> ReadResult:
        with bind_request_context(
            resource_type=request.resource_type, native_id=request.native_id
        ):
            operator = self._operator(request.resource_type, request.target_config)
            return await operator.read(request)

    async def list(self, request: ListRequest) -> ListResult:
        with bind_request_context(resource_type=request.resource_type):
            if not self.registry.is_registered(request.resource_type):
                logger.info("list_unregistered_resource_type")
                return ListResult(native_ids=[])
            operator = self._operator(request.resource_type, request.target_config)
            return await operator.list(request)
