"""
platformkit - host platform identification.

Detects and canonicalizes the operating system, CPU architecture and C
library of a machine, ranks candidate architectures by preference and
checks binary compatibility between platforms.
"""

from platformkit.core import (
    Arch,
    ArchFamily,
    ArchVariant,
    Libc,
    LibcEnvironment,
    Os,
    OsFamily,
    Platform,
    PlatformKitError,
)

__all__ = [
    "Arch",
    "ArchFamily",
    "ArchVariant",
    "Libc",
    "LibcEnvironment",
    "Os",
    "OsFamily",
    "Platform",
    "PlatformKitError",
]
