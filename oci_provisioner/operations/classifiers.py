"""Error classifier for provider exceptions.

Maps an arbitrary exception, possibly wrapped in several layers of cause, to
the bounded OperationErrorCode taxonomy the orchestrator acts on. The
classifier does not know any SDK exception type: a layer takes part in
classification only if it implements the ClassifiableError protocol.

Key Functions:
- classify_provider_error(): exception -> (OperationErrorCode, matched)
- find_provider_error(): first ProviderErrorDetails in the cause chain
- is_not_found(): convenience predicate for reads

Usage:
    from oci_provisioner.operations.classifiers import classify_provider_error

    try:
        await clients.execute(client.delete_volume, volume_id)
    except Exception as exc:
        error_code, matched = classify_provider_error(exc)
        if not matched:
            raise
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Protocol, Tuple, runtime_checkable

from oci_provisioner.operations.status import OperationErrorCode

# Upper bound on the number of layers inspected in a cause chain
MAX_CAUSE_DEPTH = 32

_STATUS_CODE_MAP = {
    404: OperationErrorCode.NOT_FOUND,
    409: OperationErrorCode.RESOURCE_CONFLICT,
    429: OperationErrorCode.THROTTLING,
    500: OperationErrorCode.SERVICE_INTERNAL_ERROR,
    502: OperationErrorCode.SERVICE_INTERNAL_ERROR,
    503: OperationErrorCode.SERVICE_INTERNAL_ERROR,
    504: OperationErrorCode.SERVICE_TIMEOUT,
}

# Provider codes for cases the HTTP status does not disambiguate
_PROVIDER_CODE_MAP = {
    "NotAuthorizedOrNotFound": OperationErrorCode.NOT_FOUND,
    "TooManyRequests": OperationErrorCode.THROTTLING,
}


@dataclass(frozen=True)
class ProviderErrorDetails:
    """Transport-level details of a provider error.

    Attributes:
        status: HTTP status code
        code: Provider-specific error code
        message: Message returned by the provider
        request_id: Provider request id, when available
    """

    status: int
    code: str
    message: str = ""
    request_id: Optional[str] = None


@runtime_checkable
class ClassifiableError(Protocol):
    """Protocol for exceptions that carry provider error details."""

    def provider_error(self) -> Optional[ProviderErrorDetails]:
        ...


def iter_cause_chain(exc: Optional[BaseException]) -> Iterator[BaseException]:
    """Yield exc and its causes, outermost first.

    Follows __cause__ and falls back to __context__ for implicit chaining,
    unless the context was suppressed with "raise ... from None". Each
    exception is yielded at most once and the walk stops after
    MAX_CAUSE_DEPTH layers.
    """
    seen = set()
    current = exc
    depth = 0
    while current is not None and depth < MAX_CAUSE_DEPTH:
        if id(current) in seen:
            return
        seen.add(id(current))
        yield current
        depth += 1
        if current.__cause__ is not None:
            current = current.__cause__
        elif current.__suppress_context__:
            current = None
        else:
            current = current.__context__


def find_provider_error(
    exc: Optional[BaseException],
) -> Optional[ProviderErrorDetails]:
    """Return the details of the first provider error in the cause chain."""
    for layer in iter_cause_chain(exc):
        if isinstance(layer, ClassifiableError):
            details = layer.provider_error()
            if details is not None:
                return details
    return None


def classify_provider_error(
    exc: Optional[BaseException],
) -> Tuple[OperationErrorCode, bool]:
    """Classify a provider error into an OperationErrorCode.

    The first layer of the cause chain exposing provider details decides.
    The HTTP status is checked first, then the provider error code.

    Status Code Mapping:
    - 404: NOT_FOUND
    - 409: RESOURCE_CONFLICT
    - 429: THROTTLING
    - 500, 502, 503: SERVICE_INTERNAL_ERROR
    - 504: SERVICE_TIMEOUT

    Provider Code Mapping:
    - NotAuthorizedOrNotFound: NOT_FOUND
    - TooManyRequests: THROTTLING

    Args:
        exc: Exception to classify, or None

    Returns:
        (error_code, True) when classified, (NOT_SET, False) otherwise
    """
    details = find_provider_error(exc)
    if details is None:
        return OperationErrorCode.NOT_SET, False

    error_code = _STATUS_CODE_MAP.get(details.status)
    if error_code is not None:
        return error_code, True

    error_code = _PROVIDER_CODE_MAP.get(details.code)
    if error_code is not None:
        return error_code, True

    return OperationErrorCode.NOT_SET, False


def is_not_found(exc: Optional[BaseException]) -> bool:
    """Return True if exc is a provider error meaning the resource is absent."""
    error_code, matched = classify_provider_error(exc)
    return matched and error_code == OperationErrorCode.NOT_FOUND
