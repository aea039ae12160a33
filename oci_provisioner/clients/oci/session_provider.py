"""Session provider for OCI client operations.

Resolves the OCI SDK configuration dict for a target: which config file and
profile to load, and which region to run against. Every service client of a
request is built from the dict returned here.
"""

from typing import Any, Callable, Dict, Optional

import oci
import structlog

from oci_provisioner.configuration.integrations.oci import OCISettings
from oci_provisioner.configuration.target import TargetConfig
from oci_provisioner.errors import ClientConfigurationError

logger = structlog.get_logger()

ConfigLoader = Callable[..., Dict[str, Any]]


class SessionProvider:
    """Centralized provider for OCI configuration resolution.

    Args:
        config_file: Config file used when the target names none
        profile: Profile used when the target names none
        region: Region override applied when the target names none
        loader: Function loading a config dict from (file_location, profile_name)
    """

    def __init__(
        self,
        config_file: str = oci.config.DEFAULT_LOCATION,
        profile: str = oci.config.DEFAULT_PROFILE,
        region: Optional[str] = None,
        loader: Optional[ConfigLoader] = None,
    ) -> None:
        self.config_file = config_file
        self.profile = profile
        self.region = region
        self._loader = loader or oci.config.from_file

    @classmethod
    def from_settings(cls, oci_settings: OCISettings) -> "SessionProvider":
        return cls(
            config_file=oci_settings.CONFIG_FILE,
            profile=oci_settings.CONFIG_PROFILE,
            region=oci_settings.REGION,
        )

    def resolve_location(self, target: TargetConfig) -> tuple[str, str]:
        """Pick the config file and profile for a target.

        Neither set: process defaults. Path only: that file with the SDK's
        default profile. Profile only: the default file with that profile.
        Both: that file and profile.
        """
        if not target.config_file_path and not target.profile:
            return self.config_file, self.profile
        if target.config_file_path and not target.profile:
            return target.config_file_path, oci.config.DEFAULT_PROFILE
        if not target.config_file_path:
            return self.config_file, target.profile
        return target.config_file_path, target.profile

    def build_config(self, target: Optional[TargetConfig] = None) -> Dict[str, Any]:
        """Load and validate the OCI config dict for a target.

        Args:
            target: Parsed target configuration; None means process defaults

        Returns:
            OCI SDK configuration dict

        Raises:
            ClientConfigurationError: When the file, profile or resulting
                configuration is unusable
        """
        target = target or TargetConfig()
        config_file, profile = self.resolve_location(target)
        logger.debug(
            "resolving_oci_config",
            config_file=config_file,
            profile=profile,
            region=target.region or self.region,
        )

        try:
            config = dict(self._loader(file_location=config_file, profile_name=profile))
            region = target.region or self.region
            if region:
                config["region"] = region
            oci.config.validate_config(config)
        except (oci.exceptions.ClientError, ValueError) as e:
            logger.warning(
                "oci_config_invalid",
                config_file=config_file,
                profile=profile,
                error=str(e),
            )
            raise ClientConfigurationError(
                f"cannot load OCI config profile {profile!r} from {config_file}: {e}"
            ) from e

        return config
