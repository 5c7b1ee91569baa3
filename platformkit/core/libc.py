"""
C library detection.

Libc is either a specific libc environment (gnu, gnueabi, gnueabihf, musl)
or "none" for hosts where the libc flavor does not select a distribution
(Windows, macOS and everything other than Linux).

On Linux the PLATFORMKIT_LIBC environment variable overrides detection.
Without it the host C library is probed; glibc hosts on 32-bit ARM are
further split into hard-float and soft-float by probing the CPU.

Usage:
    from platformkit.core.libc import Libc

    libc = Libc.from_env()
    print(libc)                    # 'gnu', 'musl', 'none', ...
"""

import enum
import logging
import os
import re
import subprocess
from dataclasses import dataclass
from typing import Optional, Union

from ..config.env import get_libc_override
from . import cpuinfo
from .arch import Arch, ArchFamily
from .exceptions import (
    CpuInfoError,
    LibcDetectionError,
    UnknownArchError,
    UnknownLibcError,
    UnknownOsError,
)
from .operating_system import Os

logger = logging.getLogger(__name__)


class LibcEnvironment(enum.Enum):
    """Libc environments with prebuilt distributions."""

    GNU = "gnu"
    GNUEABI = "gnueabi"
    GNUEABIHF = "gnueabihf"
    MUSL = "musl"


# glibc on these families may be built hard-float or soft-float
_FLOAT_ABI_FAMILIES = frozenset({ArchFamily.ARM, ArchFamily.ARMV5TE, ArchFamily.ARMV7})


# ============================================================================
# Host libc probe
# ============================================================================


@dataclass(frozen=True)
class Manylinux:
    """A glibc-based host."""

    major: int
    minor: int


@dataclass(frozen=True)
class Musllinux:
    """A musl-based host."""

    major: int
    minor: int


LibcVersion = Union[Manylinux, Musllinux]

_GLIBC_VERSION = re.compile(r"(?:glibc|gnu libc)\D*(\d+)\.(\d+)", re.IGNORECASE)
_MUSL_VERSION = re.compile(r"Version\s+(\d+)\.(\d+)")


def _glibc_version_from_confstr() -> Optional[Manylinux]:
    try:
        # e.g. 'glibc 2.31'
        version_string = os.confstr("CS_GNU_LIBC_VERSION")
    except (AttributeError, OSError, ValueError):
        return None
    if not version_string:
        return None

    name, _, version = version_string.partition(" ")
    match = re.match(r"(\d+)\.(\d+)", version)
    if name != "glibc" or not match:
        logger.debug(f"Unexpected CS_GNU_LIBC_VERSION value: {version_string}")
        return None
    return Manylinux(int(match.group(1)), int(match.group(2)))


def _libc_version_from_ldd() -> LibcVersion:
    try:
        result = subprocess.run(
            ["ldd", "--version"], capture_output=True, text=True, timeout=5
        )
    except (OSError, subprocess.SubprocessError) as e:
        raise LibcDetectionError(f"Failed to run ldd: {e}") from e

    # musl's ldd prints its banner to stderr and exits non-zero
    output = result.stdout + result.stderr

    if "musl" in output.lower():
        match = _MUSL_VERSION.search(output)
        if not match:
            raise LibcDetectionError(
                f"Could not determine musl version from ldd output: {output.strip()}"
            )
        return Musllinux(int(match.group(1)), int(match.group(2)))

    match = _GLIBC_VERSION.search(output)
    if match:
        return Manylinux(int(match.group(1)), int(match.group(2)))

    raise LibcDetectionError(
        f"Could not detect either glibc or musl libc version: {output.strip()}"
    )


def detect_linux_libc() -> LibcVersion:
    """
    Detect the C library of the running Linux host.

    Returns:
        Manylinux for glibc hosts, Musllinux for musl hosts

    Raises:
        LibcDetectionError: If neither glibc nor musl can be identified
    """
    version = _glibc_version_from_confstr()
    if version is None:
        version = _libc_version_from_ldd()
    logger.debug(f"Detected host libc: {version}")
    return version


# ============================================================================
# Libc
# ============================================================================


@dataclass(frozen=True)
class Libc:
    """
    The C runtime library flavor of a platform.

    Attributes:
        environment: Specific libc environment, or None when no libc applies
    """

    environment: Optional[LibcEnvironment] = None

    @classmethod
    def none(cls) -> "Libc":
        return cls(None)

    @classmethod
    def parse(cls, value: str) -> "Libc":
        """
        Parse a libc token: gnu, gnueabi, gnueabihf, musl or none.

        Raises:
            UnknownLibcError: If the token is not recognized
        """
        if value == "none":
            return cls.none()
        try:
            return cls(LibcEnvironment(value))
        except ValueError:
            raise UnknownLibcError(value) from None

    @classmethod
    def from_env(cls) -> "Libc":
        """
        Detect the libc of the running host.

        Linux: PLATFORMKIT_LIBC wins when set, otherwise the host is probed.
        Other operating systems always yield Libc.none().

        Raises:
            UnknownLibcError: If the override names an unknown libc
            LibcDetectionError: If the host libc probe fails
        """
        try:
            host_os = Os.from_env()
        except UnknownOsError as e:
            logger.debug(f"No libc for unrecognized host: {e}")
            return cls.none()
        if not host_os.is_linux:
            return cls.none()

        override = get_libc_override()
        if override is not None:
            logger.debug(f"Using libc override from environment: {override}")
            return cls.parse(override)

        version = detect_linux_libc()
        if isinstance(version, Musllinux):
            return cls(LibcEnvironment.MUSL)

        try:
            family = Arch.from_env().family
        except UnknownArchError as e:
            logger.debug(f"Assuming gnu for unrecognized architecture: {e}")
            return cls(LibcEnvironment.GNU)

        if family in _FLOAT_ABI_FAMILIES:
            try:
                hard_float = cpuinfo.detect_hardware_floating_point_support()
            except CpuInfoError as e:
                logger.debug(f"Hardware floating point detection failed: {e}")
                return cls(LibcEnvironment.GNU)
            if hard_float:
                return cls(LibcEnvironment.GNUEABIHF)
            return cls(LibcEnvironment.GNUEABI)

        return cls(LibcEnvironment.GNU)

    @property
    def is_none(self) -> bool:
        return self.environment is None

    @property
    def is_musl(self) -> bool:
        return self.environment is LibcEnvironment.MUSL

    def __str__(self) -> str:
        if self.environment is None:
            return "none"
        return self.environment.value


__all__ = [
    "LibcEnvironment",
    "Manylinux",
    "Musllinux",
    "LibcVersion",
    "detect_linux_libc",
    "Libc",
]
