"""Identity resources."""

from oci_provisioner.provisioners.identity.compartment import CompartmentOperator

__all__ = ["CompartmentOperator"]
