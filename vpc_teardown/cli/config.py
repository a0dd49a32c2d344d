"""CLI configuration.

Settings are resolved once per process: defaults, then the YAML config file,
then environment variables. Command-line options are applied by the caller.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from ..aws.gateway import DEFAULT_BOOTSTRAP_REGION, GatewayConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "VPC_TEARDOWN_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".vpc-teardown" / "config.yaml"

ENV_OVERRIDES = {
    "AWS_PROFILE": "aws_profile",
    "VPC_TEARDOWN_BOOTSTRAP_REGION": "bootstrap_region",
    "VPC_TEARDOWN_LOG_LEVEL": "log_level",
}

BOOL_FIELDS = {"fail_on_error", "show_summary"}
OPTIONAL_FIELDS = {"aws_profile"}
TRUE_VALUES = {"true", "yes", "on", "1"}
FALSE_VALUES = {"false", "no", "off", "0"}


def _coerce(attr: str, value: Any) -> Any:
    """Convert a raw config value to the type of its field.

    Raises:
        ValueError: If the value cannot represent the field
    """
    if attr in BOOL_FIELDS:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in TRUE_VALUES:
            return True
        if isinstance(value, str) and value.strip().lower() in FALSE_VALUES:
            return False
        raise ValueError(f"Invalid value for {attr}: {value!r} (expected true or false)")

    if value is None and attr in OPTIONAL_FIELDS:
        return None
    if not isinstance(value, str) or not value:
        raise ValueError(f"Invalid value for {attr}: {value!r} (expected a non-empty string)")
    return value


@dataclass
class Config:
    """Runtime configuration.

    Attributes:
        aws_profile: AWS profile name (optional)
        bootstrap_region: Region used for region discovery
        log_level: Default log level when neither --verbose nor --quiet is given
        fail_on_error: Exit non-zero when any deletion or lookup failed
        show_summary: Print the per-region summary table after the run
    """

    aws_profile: Optional[str] = None
    bootstrap_region: str = DEFAULT_BOOTSTRAP_REGION
    log_level: str = "WARNING"
    fail_on_error: bool = False
    show_summary: bool = True

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Config":
        """Load configuration from file and environment.

        Args:
            path: Config file path (default: $VPC_TEARDOWN_CONFIG or ~/.vpc-teardown/config.yaml)

        Returns:
            Config instance

        Raises:
            ValueError: If the config file cannot be parsed, is not a mapping,
                or holds a value of the wrong type
        """
        config = cls()

        config_path = Path(path or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH)
        if config_path.is_file():
            data = cls._read_file(config_path)
            try:
                config._apply(data)
            except ValueError as e:
                raise ValueError(f"Invalid config file {config_path}: {e}") from e

        for env_var, attr in ENV_OVERRIDES.items():
            value = os.environ.get(env_var)
            if value:
                setattr(config, attr, _coerce(attr, value))

        return config

    @staticmethod
    def _read_file(config_path: Path) -> dict[str, Any]:
        try:
            with open(config_path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ValueError(f"Invalid config file {config_path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Invalid config file {config_path}: expected a mapping")

        logger.debug(f"Loaded config from {config_path}")
        return data

    def _apply(self, data: dict[str, Any]) -> None:
        known = {f.name for f in fields(self)}
        for key, value in data.items():
            attr = key.replace("-", "_")
            if attr in known:
                setattr(self, attr, _coerce(attr, value))
            else:
                logger.debug(f"Ignoring unknown config key: {key}")

    def gateway_config(self) -> GatewayConfig:
        """Connection settings handed to every region task."""
        return GatewayConfig(profile_name=self.aws_profile, bootstrap_region=self.bootstrap_region)
