"""
Supports command implementation.

Answers whether binaries built for a target architecture can run on the
host, directly or through transparent emulation.
"""

import logging

from platformkit.core.arch import Arch

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the supports command.

    Args:
        args: Parsed command-line arguments

    Returns:
        0 if the host supports the target, 1 otherwise
    """
    host = Arch.parse(args.host) if args.host else Arch.from_env()
    target = Arch.parse(args.target)

    if host.supports(target):
        print(f"{host} can run {target} binaries")
        return 0

    print(f"{host} cannot run {target} binaries")
    return 1
