"""Operation, status and error code enumerations.

These are the values exchanged with the orchestrator: which operation a
result describes, its tri-state outcome, and the bounded error taxonomy used
to classify provider failures.
"""

from enum import Enum


class Operation(Enum):
    """Operation a progress result describes."""

    CREATE = "Create"
    UPDATE = "Update"
    DELETE = "Delete"
    CHECK_STATUS = "CheckStatus"


class OperationStatus(Enum):
    """Tri-state outcome of a write or status-check call.

    Attributes:
        SUCCESS: Operation reached a successful terminal state
        FAILURE: Operation reached a failed terminal state
        IN_PROGRESS: Operation continues asynchronously; poll with the request id
    """

    SUCCESS = "Success"
    FAILURE = "Failure"
    IN_PROGRESS = "InProgress"


class OperationErrorCode(Enum):
    """Classification of provider errors.

    Attributes:
        NOT_FOUND: Resource does not exist (or is not visible to the caller)
        RESOURCE_CONFLICT: Resource is in use, has dependents or is busy
        THROTTLING: Provider rate limit hit
        SERVICE_INTERNAL_ERROR: Provider-side 5xx failure
        SERVICE_TIMEOUT: Provider gateway timeout
        NOT_SET: Could not classify; the underlying error is fatal
    """

    NOT_FOUND = "NotFound"
    RESOURCE_CONFLICT = "ResourceConflict"
    THROTTLING = "Throttling"
    SERVICE_INTERNAL_ERROR = "ServiceInternalError"
    SERVICE_TIMEOUT = "ServiceTimeout"
    NOT_SET = "NotSet"
