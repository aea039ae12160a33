"""Base classes for resource operators.

A resource operator translates the generic create/read/update/delete/list/status
calls for one resource type into OCI SDK calls. OCIOperator carries the
plumbing every OCI resource shares; SynchronousOperator adds the behavior of
resources whose mutations complete within the API call, and WorkRequestOperator
that of resources whose mutations run as work requests.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Mapping, Optional

import structlog

from oci_provisioner.clients.oci.clients import OCIClients
from oci_provisioner.errors import PropertyError, ProvisionerError
from oci_provisioner.operations.classifiers import is_not_found
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
from oci_provisioner.provisioners.properties import serialize_properties
from oci_provisioner.provisioners.work_requests import (
    DEFAULT_MAX_ERRORS,
    WorkRequestPoller,
)

logger = structlog.get_logger()

WORK_REQUEST_HEADER = "opc-work-request-id"


class ResourceOperator(ABC):
    """Contract implemented by every resource type.

    Provider errors raised by create/update/delete are left to the caller to
    classify; read reports absence as ReadResult.not_found instead of raising.
    """

    resource_type: str = ""

    @abstractmethod
    async def create(self, request: CreateRequest) -> ProgressResult:
        pass

    @abstractmethod
    async def update(self, request: UpdateRequest) -> ProgressResult:
        pass

    @abstractmethod
    async def delete(self, request: DeleteRequest) -> ProgressResult:
        pass

    @abstractmethod
    async def status(self, request: StatusRequest) -> ProgressResult:
        pass

    @abstractmethod
    async def read(self, request: ReadRequest) -> ReadResult:
        pass

    @abstractmethod
    async def list(self, request: ListRequest) -> ListResult:
        pass


class OCIOperator(ResourceOperator):
    """Shared plumbing for operators backed by OCI service clients.

    Args:
        clients: Clients of the request's target
    """

    def __init__(self, clients: OCIClients):
        self.clients = clients

    async def fetch_or_none(
        self, method: Callable[..., Any], *args: Any, operation_name: str
    ) -> Optional[Any]:
        """Run a get call, returning None when the resource does not exist."""
        try:
            response = await self.clients.execute(
                method, *args, operation_name=operation_name
            )
        except Exception as e:  # pylint: disable=broad-except
            if is_not_found(e):
                return None
            raise
        return response.data

    def found(self, properties: Mapping[str, Any]) -> ReadResult:
        return ReadResult(
            resource_type=self.resource_type,
            properties=serialize_properties(properties),
        )

    def not_found(self) -> ReadResult:
        return ReadResult.not_found(self.resource_type)

    def require_compartment(self, request: ListRequest) -> str:
        compartment_id = request.additional_properties.get("CompartmentId")
        if not compartment_id:
            raise PropertyError(
                f"CompartmentId is required for listing {self.resource_type}"
            )
        return compartment_id

    async def exists(self, request: DeleteRequest) -> bool:
        read = await self.read(
            ReadRequest(
                resource_type=request.resource_type,
                native_id=request.native_id,
                target_config=request.target_config,
            )
        )
        if not read.is_found:
            logger.info(
                "delete_skipped_not_found",
                resource_type=self.resource_type,
                native_id=request.native_id,
            )
        return read.is_found


class SynchronousOperator(OCIOperator):
    """Operator for resources whose mutations finish within the API call.

    Deletes read first and succeed without calling the provider when the
    resource is already gone. Status has nothing to poll and reports success.
    """

    @abstractmethod
    async def delete_resource(self, native_id: str) -> None:
        pass

    async def delete(self, request: DeleteRequest) -> ProgressResult:
        if await self.exists(request):
            await self.delete_resource(request.native_id)
        return ProgressResult.success(Operation.DELETE, native_id=request.native_id)

    async def status(self, request: StatusRequest) -> ProgressResult:
        return ProgressResult.success(
            Operation.CHECK_STATUS,
            native_id=request.native_id,
            request_id=request.request_id,
        )


class WorkRequestOperator(OCIOperator):
    """Operator for resources whose mutations run as OCI work requests.

    Create, update and delete return IN_PROGRESS with the work request id as
    soon as the service accepts the call; status polls that work request.

    Args:
        clients: Clients of the request's target
        max_work_request_errors: Cap on error messages joined into a failure
    """

    def __init__(
        self, clients: OCIClients, max_work_request_errors: int = DEFAULT_MAX_ERRORS
    ):
        super().__init__(clients)
        self.max_work_request_errors = max_work_request_errors

    @abstractmethod
    def work_request_client(self) -> Any:
        """SDK client serving get_work_request for this resource's service."""

    @abstractmethod
    async def delete_resource(self, native_id: str) -> Any:
        """Issue the delete call and return the SDK response."""

    def poller(self) -> WorkRequestPoller:
        return WorkRequestPoller(
            self.work_request_client(),
            self.clients.execute,
            max_errors=self.max_work_request_errors,
        )

    def accepted(
        self, operation: Operation, response: Any, native_id: str = ""
    ) -> ProgressResult:
        work_request_id = response.headers.get(WORK_REQUEST_HEADER)
        if not work_request_id:
            raise ProvisionerError(
                f"{operation.value} of {self.resource_type} returned no work request id"
            )
        logger.info(
            "work_request_accepted",
            resource_type=self.resource_type,
            operation=operation.value,
            work_request_id=work_request_id,
        )
        return ProgressResult.in_progress(
            operation, request_id=work_request_id, native_id=native_id
        )

    async def delete(self, request: DeleteRequest) -> ProgressResult:
        if not await self.exists(request):
            return ProgressResult.success(Operation.DELETE, native_id=request.native_id)
        response = await self.delete_resource(request.native_id)
        return self.accepted(Operation.DELETE, response, native_id=request.native_id)

    async def status(self, request: StatusRequest) -> ProgressResult:
        return await self.poller().poll(request.request_id, Operation.CHECK_STATUS)
