"""Per-request target configuration.

The orchestrator passes the target's configuration as a JSON document with
each request. Only the fields needed to build OCI clients are parsed; unknown
fields are ignored.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

import structlog

logger = structlog.get_logger()


class TargetConfig(BaseModel):
    """OCI target configuration.

    Attributes:
        region: Region to run against, overriding the config file's region
        profile: Profile inside the OCI config file
        config_file_path: Path of the OCI config file
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    region: Optional[str] = Field(default=None, alias="Region")
    profile: Optional[str] = Field(default=None, alias="Profile")
    config_file_path: Optional[str] = Field(default=None, alias="ConfigFilePath")

    @classmethod
    def from_json(cls, raw: Optional[str]) -> "TargetConfig":
        """Parse a target configuration document.

        A missing or malformed document yields an empty configuration, which
        resolves to the process defaults.
        """
        if not raw:
            return cls()
        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("target_config_invalid", error=str(e))
            return cls()
