"""
Rank command implementation.
"""

from platformkit.core.arch import Arch, sort_by_preference


def run(args) -> int:
    """
    Run the rank command.

    Prints one architecture per line, most preferred first.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    archs = [Arch.parse(value) for value in args.archs]
    for arch in sort_by_preference(archs):
        print(arch)
    return 0
