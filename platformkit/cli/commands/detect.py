"""
Detect command implementation.

Prints the platform of the running host, with any axes pinned in the
configuration file taking precedence over detection.
"""

import json
import logging
from pathlib import Path

from platformkit.config.parser import DEFAULT_CONFIG_NAME, PlatformConfig, parse_config

logger = logging.getLogger(__name__)


def _load_config(args) -> PlatformConfig:
    config_file = args.config
    if config_file is None:
        default_config = Path.cwd() / DEFAULT_CONFIG_NAME
        if not default_config.exists():
            logger.debug("No config file found, detecting all platform axes")
            return PlatformConfig()
        config_file = default_config
    return parse_config(Path(config_file))


def run(args) -> int:
    """
    Run the detect command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    platform_info = _load_config(args).resolve()

    if args.json:
        print(
            json.dumps(
                {
                    "os": str(platform_info.os),
                    "arch": str(platform_info.arch),
                    "libc": str(platform_info.libc),
                    "platform": str(platform_info),
                },
                indent=2,
            )
        )
    else:
        print(f"OS:           {platform_info.os}")
        print(f"Architecture: {platform_info.arch}")
        print(f"Libc:         {platform_info.libc}")
        print(f"Platform:     {platform_info}")

    return 0
