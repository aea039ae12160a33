"""OCI clients public API.

The facade is OCIClients, which hands out lazily-constructed SDK clients per
service family and runs their blocking calls in worker threads:

    clients = OCIClients.from_target(target_config, session_provider)
    response = await clients.execute(clients.identity().get_compartment, ocid)
"""

from oci_provisioner.clients.oci.clients import OCIClients
from oci_provisioner.clients.oci.executor import execute_oci_call
from oci_provisioner.clients.oci.session_provider import SessionProvider

__all__ = ["OCIClients", "SessionProvider", "execute_oci_call"]
