"""Work request poller for asynchronous OCI operations.

Container Engine mutations return a work request id instead of the final
resource. Operators hand that id back as the request id of an IN_PROGRESS
result; the orchestrator then calls status, which polls the work request once
and maps its state onto a ProgressResult.
"""

from typing import Any, Awaitable, Callable, Iterable, Optional

import structlog

from oci_provisioner.errors import WorkRequestPollError
from oci_provisioner.operations.result import ProgressResult
from oci_provisioner.operations.status import Operation

logger = structlog.get_logger()

Executor = Callable[..., Awaitable[Any]]

SUCCEEDED = "SUCCEEDED"
FAILED = "FAILED"
CANCELED = "CANCELED"

# Preference order when picking the native id of a finished work request
RESOURCE_ACTION_PREFERENCE = ("CREATED", "UPDATED", "RELATED")

DEFAULT_MAX_ERRORS = 50


def in_progress_result(operation: Operation, work_request_id: str) -> ProgressResult:
    """Standard result for an operation that was accepted as a work request."""
    return ProgressResult.in_progress(operation, request_id=work_request_id)


def extract_resource_id(resources: Optional[Iterable[Any]], action_type: str) -> str:
    for resource in resources or []:
        if resource.action_type == action_type and resource.identifier:
            return resource.identifier
    return ""


class WorkRequestPoller:
    """Poll one work request and translate its state.

    The poller is stateless: polling the same terminal work request twice
    yields equal results.

    Args:
        client: Container Engine SDK client
        execute: Coroutine running a bound SDK method, typically OCIClients.execute
        max_errors: Upper bound on error messages joined into a failure message
    """

    def __init__(
        self, client: Any, execute: Executor, max_errors: int = DEFAULT_MAX_ERRORS
    ):
        self._client = client
        self._execute = execute
        self._max_errors = max_errors

    async def poll(
        self, work_request_id: str, operation: Operation = Operation.CHECK_STATUS
    ) -> ProgressResult:
        """Fetch the work request and map its state.

        Args:
            work_request_id: Work request to poll
            operation: Operation reported on the result

        Returns:
            IN_PROGRESS while the work request runs, SUCCESS with the affected
            resource's id once it succeeded, FAILURE when it failed or was
            canceled

        Raises:
            WorkRequestPollError: The work request itself could not be fetched
        """
        try:
            response = await self._execute(
                self._client.get_work_request,
                work_request_id,
                operation_name="get_work_request",
            )
        except Exception as e:  # pylint: disable=broad-except
            logger.warning(
                "work_request_poll_failed",
                work_request_id=work_request_id,
                error=str(e),
            )
            raise WorkRequestPollError(work_request_id, str(e)) from e

        work_request = response.data
        state = work_request.status
        logger.debug(
            "work_request_polled",
            work_request_id=work_request_id,
            state=state,
        )

        if state == SUCCEEDED:
            native_id = ""
            for action_type in RESOURCE_ACTION_PREFERENCE:
                native_id = extract_resource_id(work_request.resources, action_type)
                if native_id:
                    break
            return ProgressResult.success(
                operation, native_id=native_id, request_id=work_request_id
            )

        if state == FAILED:
            message = await self._error_message(
                work_request_id, work_request.compartment_id
            )
            return ProgressResult.failure(
                operation,
                status_message=message,
                request_id=work_request_id,
            )

        if state == CANCELED:
            return ProgressResult.failure(
                operation,
                status_message="Operation was canceled",
                request_id=work_request_id,
            )

        # ACCEPTED, IN_PROGRESS, CANCELING and states added later by the service
        return in_progress_result(operation, work_request_id)

    async def _error_message(
        self, work_request_id: str, compartment_id: Optional[str]
    ) -> str:
        if not compartment_id:
            return "Work request failed (no compartment ID to retrieve errors)"

        try:
            response = await self._execute(
                self._client.list_work_request_errors,
                compartment_id,
                work_request_id,
                operation_name="list_work_request_errors",
            )
        except Exception as e:  # pylint: disable=broad-except
            logger.warning(
                "work_request_errors_unavailable",
                work_request_id=work_request_id,
                error=str(e),
            )
            return f"Work request failed (could not retrieve error details: {e})"

        items = response.data or []
        if not items:
            return "Work request failed (no error details available)"

        messages = [item.message for item in items if item.message]
        if not messages:
            return "Work request failed (no error messages)"

        return "; ".join(messages[: self._max_errors])
