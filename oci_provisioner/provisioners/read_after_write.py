"""Read-after-write decorator for resource operators.

Successful creates and updates are followed by a read of the resource so the
returned result carries the provider's view of the properties, defaults and
computed fields included.
"""

import dataclasses

import structlog

from oci_provisioner.operations.requests import (
    CreateRequest,
    DeleteRequest,
    ListRequest,
    ReadRequest,
    StatusRequest,
    UpdateRequest,
)
from oci_provisioner.operations.result import ListResult, ProgressResult, ReadResult
from oci_provisioner.provisioners.base import ResourceOperator

logger = structlog.get_logger()


class ReadAfterWrite(ResourceOperator):
    """Wrap an operator so successful writes return freshly read properties.

    The follow-up read never turns a successful write into an error: when it
    raises or reports the resource as missing, the write's own result is
    returned unchanged.

    Args:
        inner: Operator to decorate
    """

    def __init__(self, inner: ResourceOperator):
        self._inner = inner
        self.resource_type = inner.resource_type

    @property
    def inner(self) -> ResourceOperator:
        return self._inner

    async def create(self, request: CreateRequest) -> ProgressResult:
        result = await self._inner.create(request)
        return await self._enrich(result, request.resource_type, request.target_config)

    async def update(self, request: UpdateRequest) -> ProgressResult:
        result = await self._inner.update(request)
        return await self._enrich(result, request.resource_type, request.target_config)

    async def delete(self, request: DeleteRequest) -> ProgressResult:
        return await self._inner.delete(request)

    async def status(self, request: StatusRequest) -> ProgressResult:
        return await self._inner.status(request)

    async def read(self, request: ReadRequest) -> ReadResult:
        return await self._inner.read(request)

    async def list(self, request: ListRequest) -> ListResult:
        return await self._inner.list(request)

    async def _enrich(
        self, result: ProgressResult, resource_type: str, target_config
    ) -> ProgressResult:
        if not result.is_success or not result.native_id:
            return result

        read_request = ReadRequest(
            resource_type=resource_type,
            native_id=result.native_id,
            target_config=target_config,
        )
        try:
            read = await self._inner.read(read_request)
        except Exception as e:  # pylint: disable=broad-except
            logger.warning(
                "read_after_write_failed",
                resource_type=resource_type,
                native_id=result.native_id,
                error=str(e),
            )
            return result

        if not read.is_found:
            logger.warning(
                "read_after_write_failed",
                resource_type=resource_type,
                native_id=result.native_id,
                error_code=read.error_code.value,
            )
            return result

        return dataclasses.replace(result, resource_properties=read.properties)
