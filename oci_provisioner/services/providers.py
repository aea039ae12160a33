"""
Factory functions for dependency injection.

Provides process-scoped singleton providers for the provisioner's core
services.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from oci_provisioner.clients.oci.session_provider import SessionProvider
from oci_provisioner.configuration.settings import Settings

if TYPE_CHECKING:
    from oci_provisioner.plugin import ResourcePlugin
    from oci_provisioner.provisioners.registry import OperatorRegistry


@lru_cache
def get_settings() -> Settings:
    """
    Get process-scoped settings singleton.

    This is the single source of truth for settings across the provisioner.
    The @lru_cache decorator ensures only ONE instance is created per process.

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_session_provider() -> SessionProvider:
    """Session provider configured with the process-wide OCI defaults."""
    return SessionProvider.from_settings(get_settings().oci)


@lru_cache
def get_registry() -> "OperatorRegistry":
    """
    Get the process-wide operator registry.

    Built once with every built-in resource type; read-only afterwards.
    """
    # pylint: disable=import-outside-toplevel
    from oci_provisioner.provisioners import build_default_registry

    return build_default_registry(
        max_work_request_errors=get_settings().oci.MAX_WORK_REQUEST_ERRORS
    )


@lru_cache
def get_plugin() -> "ResourcePlugin":
    """Plugin entry point wired with the process-wide registry and settings."""
    # pylint: disable=import-outside-toplevel
    from oci_provisioner.plugin import ResourcePlugin

    return ResourcePlugin(
        registry=get_registry(), session_provider=get_session_provider()
    )
