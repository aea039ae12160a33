"""Integration settings __init__ - exports all integration settings."""

from oci_provisioner.configuration.integrations.oci import OCISettings

__all__ = ["OCISettings"]
