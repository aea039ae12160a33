"""Custom exceptions for the provisioner.

All exceptions raised by the provisioner's own plumbing inherit from
ProvisionerError so callers can tell them apart from SDK or runtime errors.
Provider-side failures are surfaced as ProviderServiceError, which exposes
its transport status and provider code through the ClassifiableError protocol.
"""

from typing import Optional

from oci_provisioner.operations.classifiers import ProviderErrorDetails


class ProvisionerError(Exception):
    """Base exception for all provisioner errors.

    Example:
        try:
            await plugin.create(request)
        except ProvisionerError as e:
            logger.error("provisioner_error", error=str(e))
    """

    pass


class ProviderServiceError(ProvisionerError):
    """Raised when the OCI API answers a call with an error response.

    Wraps the SDK's service error so the rest of the code base never depends on
    the SDK exception type. The original SDK exception is kept as __cause__.

    Attributes:
        status: HTTP status code returned by the service
        code: OCI error code (e.g. "NotAuthorizedOrNotFound")
        message: Message returned by the service
        opc_request_id: OCI request id, useful when opening support tickets
        operation_name: SDK operation that failed (e.g. "get_volume")
    """

    def __init__(
        self,
        status: int,
        code: str,
        message: str,
        opc_request_id: Optional[str] = None,
        operation_name: Optional[str] = None,
    ):
        super().__init__(f"{operation_name or 'oci call'} failed ({status} {code}): {message}")
        self.status = status
        self.code = code
        self.message = message
        self.opc_request_id = opc_request_id
        self.operation_name = operation_name

    def provider_error(self) -> Optional[ProviderErrorDetails]:
        return ProviderErrorDetails(
            status=self.status,
            code=self.code,
            message=self.message,
            request_id=self.opc_request_id,
        )


class OperatorNotFoundError(ProvisionerError):
    """Raised when no operator is registered for a resource type.

    Example:
        >>> registry.get("OCI::Core::Unknown", clients)
        Traceback (most recent call last):
        ...
        OperatorNotFoundError: no provisioner registered for resource type: OCI::Core::Unknown
    """

    def __init__(self, resource_type: str):
        super().__init__(f"no provisioner registered for resource type: {resource_type}")
        self.resource_type = resource_type


class WorkRequestPollError(ProvisionerError):
    """Raised when the status of a work request itself cannot be fetched."""

    def __init__(self, work_request_id: str, message: str):
        super().__init__(f"failed to get work request {work_request_id}: {message}")
        self.work_request_id = work_request_id


class PropertyError(ProvisionerError):
    """Raised when a required resource property is missing or has the wrong type."""

    pass


class ClientConfigurationError(ProvisionerError):
    """Raised when the target configuration cannot produce a usable OCI config."""

    pass


class PatchError(ProvisionerError):
    """Base exception for failures while resolving an update's properties."""

    pass


class InvalidPropertiesError(PatchError):
    """Desired properties payload is not a JSON object."""

    pass


class PatchReadError(PatchError):
    """Reading the current resource before applying a patch failed."""

    pass


class InvalidPatchDocumentError(PatchError):
    """Patch document is malformed or contains unknown operations."""

    pass


class PatchApplicationError(PatchError):
    """Patch document could not be applied to the current snapshot."""

    pass


class InvalidMergedPropertiesError(PatchError):
    """Patched document is not a JSON object."""

    pass
