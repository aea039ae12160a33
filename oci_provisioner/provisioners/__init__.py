"""Resource operators and the machinery shared between them.

build_default_registry() returns a registry holding every built-in resource
type:

    registry = build_default_registry()
    operator = registry.get("OCI::Core::Volume", clients)
    result = await operator.create(request)
"""

from oci_provisioner.provisioners.base import (
    OCIOperator,
    ResourceOperator,
    SynchronousOperator,
    WorkRequestOperator,
)
from oci_provisioner.provisioners.containerengine import (
    ClusterOperator,
    NodePoolOperator,
)
from oci_provisioner.provisioners.core import VcnOperator, VolumeOperator
from oci_provisioner.provisioners.identity import CompartmentOperator
from oci_provisioner.provisioners.objectstorage import BucketOperator
from oci_provisioner.provisioners.read_after_write import ReadAfterWrite
from oci_provisioner.provisioners.registry import OperatorFactory, OperatorRegistry
from oci_provisioner.provisioners.work_requests import (
    DEFAULT_MAX_ERRORS,
    WorkRequestPoller,
    in_progress_result,
)


def build_default_registry(
    max_work_request_errors: int = DEFAULT_MAX_ERRORS,
) -> OperatorRegistry:
    """Create a registry with every built-in resource operator registered."""
    registry = OperatorRegistry()
    registry.register(VolumeOperator.resource_type, VolumeOperator)
    registry.register(VcnOperator.resource_type, VcnOperator)
    registry.register(BucketOperator.resource_type, BucketOperator)
    registry.register(CompartmentOperator.resource_type, CompartmentOperator)
    for operator in (ClusterOperator, NodePoolOperator):
        registry.register(
            operator.resource_type,
            lambda clients, operator=operator: operator(
                clients, max_work_request_errors=max_work_request_errors
            ),
        )
    return registry


__all__ = [
    "build_default_registry",
    "OperatorRegistry",
    "OperatorFactory",
    "ResourceOperator",
    "OCIOperator",
    "SynchronousOperator",
    "WorkRequestOperator",
    "ReadAfterWrite",
    "WorkRequestPoller",
    "in_progress_result",
    "VolumeOperator",
    "VcnOperator",
    "BucketOperator",
    "CompartmentOperator",
    "ClusterOperator",
    "NodePoolOperator",
]
