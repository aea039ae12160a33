"""Container Engine for Kubernetes resources.

Mutations of these resources are asynchronous and tracked through work
requests; see provisioners.work_requests.
"""

from oci_provisioner.provisioners.containerengine.cluster import ClusterOperator
from oci_provisioner.provisioners.containerengine.node_pool import NodePoolOperator

__all__ = ["ClusterOperator", "NodePoolOperator"]
