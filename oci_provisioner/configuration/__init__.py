"""Configuration module - public API.

Centralized configuration management using Pydantic BaseSettings for process
settings and a Pydantic model for per-request target configuration.

Exports:
    Settings: Main settings class
    OCISettings: OCI integration settings
    TargetConfig: Per-request target configuration

Example:
    ```python
    from oci_provisioner.services import get_settings

    settings = get_settings()
    profile = settings.oci.CONFIG_PROFILE
    ```
"""

from oci_provisioner.configuration.integrations import OCISettings
from oci_provisioner.configuration.settings import Settings
from oci_provisioner.configuration.target import TargetConfig

__all__ = ["Settings", "OCISettings", "TargetConfig"]
