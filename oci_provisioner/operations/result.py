"""Operation result dataclasses.

Uniform result types returned from resource operators: a progress result for
create/update/delete/status, and dedicated results for read and list.
Results are frozen; code that needs a variation builds a copy with
dataclasses.replace().
"""

from dataclasses import dataclass, field
from typing import List, Optional

from oci_provisioner.operations.status import (
    Operation,
    OperationErrorCode,
    OperationStatus,
)


@dataclass(frozen=True)
class ProgressResult:
    """Outcome of a create, update, delete or status call.

    Attributes:
        operation: Operation -- operation this result describes
        operation_status: OperationStatus -- tri-state outcome
        native_id: str -- provider identifier, empty until known
        request_id: str -- handle to poll while the operation is in progress
        error_code: Optional[OperationErrorCode] -- set only on failure
        status_message: str -- human-friendly diagnostic
        resource_properties: Optional[str] -- serialized JSON properties
    """

    operation: Operation
    operation_status: OperationStatus
    native_id: str = ""
    request_id: str = ""
    error_code: Optional[OperationErrorCode] = None
    status_message: str = ""
    resource_properties: Optional[str] = None

    def __post_init__(self) -> None:
        if self.operation_status == OperationStatus.IN_PROGRESS and not self.request_id:
            raise ValueError("an in-progress result requires a request_id")

    @property
    def is_success(self) -> bool:
        return self.operation_status == OperationStatus.SUCCESS

    @property
    def is_failure(self) -> bool:
        return self.operation_status == OperationStatus.FAILURE

    @property
    def is_in_progress(self) -> bool:
        return self.operation_status == OperationStatus.IN_PROGRESS

    @classmethod
    def success(
        cls,
        operation: Operation,
        native_id: str = "",
        resource_properties: Optional[str] = None,
        request_id: str = "",
    ) -> "ProgressResult":
        """Create a SUCCESS result.

        Args:
            operation: Operation that completed
            native_id: Provider identifier of the resource
            resource_properties: Serialized properties, when the call returned them
            request_id: Request handle, echoed back for status checks

        Returns:
            ProgressResult with SUCCESS status
        """
        return cls(
            operation=operation,
            operation_status=OperationStatus.SUCCESS,
            native_id=native_id,
            request_id=request_id,
            resource_properties=resource_properties,
        )

    @classmethod
    def in_progress(
        cls, operation: Operation, request_id: str, native_id: str = ""
    ) -> "ProgressResult":
        """Create an IN_PROGRESS result carrying the handle to poll."""
        return cls(
            operation=operation,
            operation_status=OperationStatus.IN_PROGRESS,
            request_id=request_id,
            native_id=native_id,
        )

    @classmethod
    def failure(
        cls,
        operation: Operation,
        status_message: str,
        error_code: Optional[OperationErrorCode] = None,
        native_id: str = "",
        request_id: str = "",
    ) -> "ProgressResult":
        """Create a FAILURE result.

        Args:
            operation: Operation that failed
            status_message: Human-friendly failure description
            error_code: Classification of the failure, when known
            native_id: Provider identifier, when known
            request_id: Request handle of the failed operation, when known

        Returns:
            ProgressResult with FAILURE status
        """
        return cls(
            operation=operation,
            operation_status=OperationStatus.FAILURE,
            native_id=native_id,
            request_id=request_id,
            error_code=error_code,
            status_message=status_message,
        )


@dataclass(frozen=True)
class ReadResult:
    """Result of reading a single resource.

    Attributes:
        resource_type: str -- resource type that was read
        properties: str -- serialized JSON properties, empty when not found
        error_code: Optional[OperationErrorCode] -- None when the resource exists
    """

    resource_type: str
    properties: str = ""
    error_code: Optional[OperationErrorCode] = None

    @property
    def is_found(self) -> bool:
        return self.error_code is None

    @classmethod
    def not_found(cls, resource_type: str) -> "ReadResult":
        return cls(resource_type=resource_type, error_code=OperationErrorCode.NOT_FOUND)


@dataclass(frozen=True)
class ListResult:
    """Native identifiers discovered by a list call."""

    native_ids: List[str] = field(default_factory=list)
