"""OCI integration settings."""

from typing import Optional

from pydantic import Field

from oci_provisioner.configuration.base import IntegrationSettings


class OCISettings(IntegrationSettings):
    """OCI configuration settings.

    Process-wide defaults used when a request's target configuration does not
    name a config file or profile.

    Environment Variables:
        OCI_REGION: Region override applied to every client (default: none)
        OCI_CONFIG_FILE: Path of the OCI config file (default: ~/.oci/config)
        OCI_CONFIG_PROFILE: Profile inside the config file (default: DEFAULT)
        OCI_MAX_WORK_REQUEST_ERRORS: Maximum error entries fetched for a
            failed work request (default: 50)

    Example:
        ```python
        from oci_provisioner.services import get_settings

        settings = get_settings()
        profile = settings.oci.CONFIG_PROFILE
        ```
    """

    REGION: Optional[str] = Field(default=None, alias="OCI_REGION")
    CONFIG_FILE: str = Field(default="~/.oci/config", alias="OCI_CONFIG_FILE")
    CONFIG_PROFILE: str = Field(default="DEFAULT", alias="OCI_CONFIG_PROFILE")
    MAX_WORK_REQUEST_ERRORS: int = Field(
        default=50, alias="OCI_MAX_WORK_REQUEST_ERRORS"
    )
