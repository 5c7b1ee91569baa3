"""
Complete platform identity: operating system, architecture and libc.

Platform strings have the form '{os}-{arch}-{libc}', e.g. 'linux-x86_64-gnu',
'macos-aarch64-none' or 'windows-x86-none'. They are used as lookup keys
when selecting prebuilt distributions.

Usage:
    from platformkit.core.platform import Platform

    host = Platform.from_env()
    candidate = Platform.parse("macos-x86_64-none")
    if host.supports(candidate):
        print(f"{candidate} runs on {host}")
"""

import logging
from dataclasses import dataclass

from .arch import Arch
from .exceptions import PlatformParseError
from .libc import Libc
from .operating_system import Os

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Platform:
    """
    A full platform identity.

    Attributes:
        os: Operating system
        arch: CPU architecture
        libc: C library flavor
    """

    os: Os
    arch: Arch
    libc: Libc

    @classmethod
    def from_env(cls) -> "Platform":
        """
        Detect the platform of the running interpreter.

        Raises:
            UnknownOsError: If the host OS is not recognized
            UnknownArchError: If the host architecture is not recognized
            LibcDetectionError: If the host libc cannot be determined
        """
        platform_info = cls(os=Os.from_env(), arch=Arch.from_env(), libc=Libc.from_env())
        logger.debug(f"Detected platform {platform_info}")
        return platform_info

    @classmethod
    def parse(cls, value: str) -> "Platform":
        """
        Parse an '{os}-{arch}-{libc}' platform key.

        Raises:
            PlatformParseError: If the key does not have exactly three parts
            UnknownOsError, UnknownArchError, UnknownLibcError,
            UnsupportedVariantError: If a part fails to parse
        """
        parts = value.split("-")
        if len(parts) != 3:
            raise PlatformParseError(
                value, f"Invalid platform key (expected os-arch-libc): {value}"
            )
        os_part, arch_part, libc_part = parts
        return cls(
            os=Os.parse(os_part), arch=Arch.parse(arch_part), libc=Libc.parse(libc_part)
        )

    def supports(self, other: "Platform") -> bool:
        """
        Check whether binaries built for other can run on this platform.

        Requires the same OS and libc; the architecture check treats this
        platform's OS as the host OS.
        """
        if self.os != other.os or self.libc != other.libc:
            return False
        return self.arch.supports(other.arch, host_os=self.os)

    @property
    def is_musl(self) -> bool:
        return self.libc.is_musl

    @property
    def is_arm(self) -> bool:
        return self.arch.is_arm

    def __str__(self) -> str:
        return f"{self.os}-{self.arch}-{self.libc}"


__all__ = ["Platform"]
