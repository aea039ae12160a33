"""
Dependency injection services.

Provides provider functions for the process-wide singletons.
"""

from oci_provisioner.services.providers import (
    get_plugin,
    get_registry,
    get_session_provider,
    get_settings,
)

__all__ = [
    "get_settings",
    "get_session_provider",
    "get_registry",
    "get_plugin",
]
