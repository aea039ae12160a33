"""Request context binding for structured logging.

Binds operation-scoped context (correlation id, resource type, native id) to
every log entry emitted while a plugin call is in flight. Context variables
follow asyncio tasks, so concurrent reconciliations never mix their context.

Usage:
    from oci_provisioner.logging import bind_request_context

    with bind_request_context(resource_type="OCI::Core::Volume", operation="Create"):
        logger.info("provisioning_resource")
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    resource_type: Optional[str] = None,
    native_id: Optional[str] = None,
    operation: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind request-scoped context to all logs within the context manager.

    Args:
        correlation_id: Unique call identifier. Auto-generated if not provided.
        resource_type: Resource type handled by the call.
        native_id: Provider identifier of the resource, when known.
        operation: Operation name (Create, Update, ...).
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        None - context is bound to structlog's context vars.
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}

    if resource_type is not None:
        context["resource_type"] = resource_type

    if native_id:
        context["native_id"] = native_id

    if operation is not None:
        context["operation"] = operation

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context."""
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("correlation_id")


def clear_request_context() -> None:
    """Clear all request context from the logging context."""
    structlog.contextvars.clear_contextvars()
