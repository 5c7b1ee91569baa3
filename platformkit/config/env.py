"""
Environment variables read by platformkit.
"""

import os
from typing import Mapping, Optional


class EnvVars:
    """Names of the environment variables platformkit consults."""

    # Overrides libc detection on Linux: gnu, gnueabi, gnueabihf, musl or none
    PLATFORMKIT_LIBC = "PLATFORMKIT_LIBC"


def get_libc_override(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """
    Read the libc override variable.

    Args:
        environ: Environment mapping (default: os.environ)

    Returns:
        The override value, or None if unset or empty
    """
    if environ is None:
        environ = os.environ
    value = environ.get(EnvVars.PLATFORMKIT_LIBC)
    return value or None


__all__ = ["EnvVars", "get_libc_override"]
