"""YAML configuration parser for platformkit.

A platformkit.yaml file may pin any axis of the target platform:

    version: 1
    platform:
      os: linux
      arch: x86_64_v3
      libc: musl

Axes that are not configured are detected from the running host.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
import logging

import yaml

from ..core.arch import Arch
from ..core.exceptions import ConfigError, PlatformParseError
from ..core.libc import Libc
from ..core.operating_system import Os
from ..core.platform import Platform

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "platformkit.yaml"


@dataclass
class PlatformConfig:
    """Configured platform axes; None means detect from the host."""

    os: Optional[Os] = None
    arch: Optional[Arch] = None
    libc: Optional[Libc] = None

    def resolve(self) -> Platform:
        """
        Build a Platform, detecting any axis that is not configured.

        Returns:
            Platform combining configured and detected values
        """
        os_value = self.os if self.os is not None else Os.from_env()
        arch = self.arch if self.arch is not None else Arch.from_env()
        if self.libc is not None:
            libc = self.libc
        elif self.os is not None and not self.os.is_linux:
            # Only Linux has a libc axis; no need to probe the host
            libc = Libc.none()
        else:
            libc = Libc.from_env()
        return Platform(os=os_value, arch=arch, libc=libc)


def parse_config(config_path: Path) -> PlatformConfig:
    """
    Parse a platformkit.yaml configuration file.

    Args:
        config_path: Path to platformkit.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        raise ConfigError("Configuration file is empty")

    config = parse_config_data(data)
    logger.debug(f"Loaded platform configuration from {config_path}: {config}")
    return config


def parse_config_data(data: Any) -> PlatformConfig:
    """Parse and validate an already-loaded configuration mapping."""
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    version = data.get("version", 1)
    if version != 1:
        raise ConfigError(f"Unsupported version: {version} (expected 1)")

    section = data.get("platform") or {}
    if not isinstance(section, dict):
        raise ConfigError("platform must be a mapping")

    unknown = set(section) - {"os", "arch", "libc"}
    if unknown:
        raise ConfigError(f"Unknown platform field(s): {', '.join(sorted(unknown))}")

    return PlatformConfig(
        os=_parse_field(section, "os", Os.parse),
        arch=_parse_field(section, "arch", Arch.parse),
        libc=_parse_field(section, "libc", Libc.parse),
    )


def _parse_field(section: Dict[str, Any], name: str, parser):
    value = section.get(name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"platform.{name} must be a string, got {type(value).__name__}")
    try:
        return parser(value)
    except PlatformParseError as e:
        raise ConfigError(f"Invalid platform.{name}: {e}") from e


__all__ = [
    "DEFAULT_CONFIG_NAME",
    "PlatformConfig",
    "parse_config",
    "parse_config_data",
]
