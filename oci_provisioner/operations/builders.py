"""Convert classified provider errors into terminal failure results.

Each entry point returns a (result, error) pair where exactly one element is
set: a FAILURE ProgressResult when the error classifies, or the original
error when it does not, so the caller propagates it as a hard failure.
"""

from typing import Optional, Tuple

import structlog
from oci_provisioner.operations.classifiers import (
    classify_provider_error,
    find_provider_error,
)
from oci_provisioner.operations.result import ProgressResult
from oci_provisioner.operations.status import Operation

logger = structlog.get_logger()

BuildResult = Tuple[Optional[ProgressResult], Optional[BaseException]]

_VERBS = {
    Operation.CREATE: "created",
    Operation.UPDATE: "updated",
    Operation.DELETE: "deleted",
}


def _build_failure(
    exc: Optional[BaseException],
    operation: Operation,
    resource_type: str,
    operation_name: str,
    native_id: str = "",
) -> BuildResult:
    if exc is None:
        return None, None

    error_code, matched = classify_provider_error(exc)
    if not matched:
        return None, exc

    # a classified error always carries provider details
    details = find_provider_error(exc)
    status_message = (
        f"{operation_name} cannot be {_VERBS[operation]}: {details.message or ''}"
    )

    logger.warning(
        "provider_error_classified",
        operation=operation.value,
        resource_type=resource_type,
        native_id=native_id,
        error_code=error_code.value,
    )
    return (
        ProgressResult.failure(
            operation,
            status_message=status_message,
            error_code=error_code,
            native_id=native_id,
        ),
        None,
    )


def handle_create_error(
    exc: Optional[BaseException], resource_type: str, operation_name: str
) -> BuildResult:
    """Build a create FAILURE result from a provider error.

    Args:
        exc: Error raised by the create call
        resource_type: Resource type label for logs
        operation_name: Name used in the status message

    Returns:
        (result, None) when classified, (None, exc) otherwise
    """
    return _build_failure(exc, Operation.CREATE, resource_type, operation_name)


def handle_update_error(
    exc: Optional[BaseException],
    resource_type: str,
    native_id: str,
    operation_name: str,
) -> BuildResult:
    """Build an update FAILURE result carrying the native id."""
    return _build_failure(
        exc, Operation.UPDATE, resource_type, operation_name, native_id=native_id
    )


def handle_delete_error(
    exc: Optional[BaseException],
    resource_type: str,
    native_id: str,
    operation_name: str,
) -> BuildResult:
    """Build a delete FAILURE result carrying the native id."""
    return _build_failure(
        exc, Operation.DELETE, resource_type, operation_name, native_id=native_id
    )
