"""Core services: block storage and virtual networking."""

from oci_provisioner.provisioners.core.vcn import VcnOperator
from oci_provisioner.provisioners.core.volume import VolumeOperator

__all__ = ["VcnOperator", "VolumeOperator"]
