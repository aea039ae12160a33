"""Run blocking OCI SDK calls off the event loop.

The SDK is synchronous; every call goes through execute_oci_call, which runs
it in a worker thread and turns service error responses into
ProviderServiceError so the classifier never sees an SDK type.
"""

import asyncio
from typing import Any, Callable, Optional

import oci
import structlog

from oci_provisioner.errors import ProviderServiceError

logger = structlog.get_logger()


def _opc_request_id(e: oci.exceptions.ServiceError) -> Optional[str]:
    headers = getattr(e, "headers", None) or {}
    return headers.get("opc-request-id") or getattr(e, "request_id", None)


async def execute_oci_call(
    method: Callable[..., Any],
    *args: Any,
    operation_name: Optional[str] = None,
    **kwargs: Any,
) -> Any:
    """Execute a bound SDK method in a worker thread.

    Args:
        method: Bound SDK client method, e.g. client.get_volume
        *args: Positional arguments for the method
        operation_name: Name used in logs and errors, defaults to the method name
        **kwargs: Keyword arguments for the method

    Returns:
        The SDK response object

    Raises:
        ProviderServiceError: The service answered with an error response
    """
    name = operation_name or getattr(method, "__name__", "oci_call")
    try:
        return await asyncio.to_thread(method, *args, **kwargs)
    except oci.exceptions.ServiceError as e:
        logger.warning(
            "oci_api_error",
            operation=name,
            status=e.status,
            code=e.code,
            message=e.message,
        )
        raise ProviderServiceError(
            status=e.status,
            code=e.code,
            message=e.message,
            opc_request_id=_opc_request_id(e),
            operation_name=name,
        ) from e
