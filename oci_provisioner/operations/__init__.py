"""Operation result types, status enums and error classification.

This package contains the result types exchanged with the orchestrator,
the request types passed to resource operators, the provider error
classifier and the builders that turn classified errors into failure results.
"""

from oci_provisioner.operations.classifiers import (
    ClassifiableError,
    ProviderErrorDetails,
    classify_provider_error,
    find_provider_error,
    is_not_found,
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
from oci_provisioner.operations.status import (
    Operation,
    OperationErrorCode,
    OperationStatus,
)

__all__ = [
    "ClassifiableError",
    "ProviderErrorDetails",
    "classify_provider_error",
    "find_provider_error",
    "is_not_found",
    "CreateRequest",
    "UpdateRequest",
    "DeleteRequest",
    "StatusRequest",
    "ReadRequest",
    "ListRequest",
    "ProgressResult",
    "ReadResult",
    "ListResult",
    "Operation",
    "OperationStatus",
    "OperationErrorCode",
]
