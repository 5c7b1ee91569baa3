"""
Core functionality for platformkit.

This package contains the platform identity types and host detection.
"""

from .exceptions import (
    PlatformKitError,
    PlatformParseError,
    UnknownOsError,
    UnknownArchError,
    UnknownLibcError,
    UnsupportedVariantError,
    LibcDetectionError,
    CpuInfoError,
    ConfigError,
)

from .operating_system import (
    OsFamily,
    Os,
)

from .arch import (
    ArchVariant,
    ArchFamily,
    Arch,
    preferred_arch,
    sort_by_preference,
)

from .libc import (
    LibcEnvironment,
    Libc,
    Manylinux,
    Musllinux,
    detect_linux_libc,
)

from .cpuinfo import detect_hardware_floating_point_support

from .platform import Platform

from .tags import (
    platforms_from_tag,
    platforms_from_wheel_filename,
)

__all__ = [
    "PlatformKitError",
    "PlatformParseError",
    "UnknownOsError",
    "UnknownArchError",
    "UnknownLibcError",
    "UnsupportedVariantError",
    "LibcDetectionError",
    "CpuInfoError",
    "ConfigError",
    "OsFamily",
    "Os",
    "ArchVariant",
    "ArchFamily",
    "Arch",
    "preferred_arch",
    "sort_by_preference",
    "LibcEnvironment",
    "Libc",
    "Manylinux",
    "Musllinux",
    "detect_linux_libc",
    "detect_hardware_floating_point_support",
    "Platform",
    "platforms_from_tag",
    "platforms_from_wheel_filename",
]
