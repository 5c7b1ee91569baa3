"""
Parse command implementation.

Canonicalizes an OS, architecture, libc or platform string.
"""

import logging

from platformkit.core.arch import Arch
from platformkit.core.libc import Libc
from platformkit.core.operating_system import Os
from platformkit.core.platform import Platform

logger = logging.getLogger(__name__)

_PARSERS = {
    "os": Os.parse,
    "arch": Arch.parse,
    "libc": Libc.parse,
    "platform": Platform.parse,
}


def run(args) -> int:
    """
    Run the parse command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    value = _PARSERS[args.kind](args.value)
    logger.debug(f"Parsed {args.kind} {args.value!r} as {value!r}")
    print(value)
    return 0
