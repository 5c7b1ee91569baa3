"""
Operating system identity.

Os wraps one member of a fixed vocabulary of canonical operating system
names. There is no "unknown" member: unrecognized input is always a parse
error, never a value.

Usage:
    from platformkit.core.operating_system import Os

    host = Os.from_env()
    print(host)                    # 'linux', 'windows', 'macos', ...
    assert Os.parse("macos") == Os.parse("darwin")
"""

import enum
import logging
import platform
from dataclasses import dataclass

from .exceptions import UnknownOsError

logger = logging.getLogger(__name__)


class OsFamily(enum.Enum):
    """Canonical operating system names."""

    AIX = "aix"
    AMDHSA = "amdhsa"
    BITRIG = "bitrig"
    CLOUDABI = "cloudabi"
    CUDA = "cuda"
    CYGWIN = "cygwin"
    DARWIN = "darwin"
    DRAGONFLY = "dragonfly"
    EMSCRIPTEN = "emscripten"
    ESPIDF = "espidf"
    FREEBSD = "freebsd"
    FUCHSIA = "fuchsia"
    HAIKU = "haiku"
    HERMIT = "hermit"
    HORIZON = "horizon"
    HURD = "hurd"
    ILLUMOS = "illumos"
    IOS = "ios"
    L4RE = "l4re"
    LINUX = "linux"
    NETBSD = "netbsd"
    OPENBSD = "openbsd"
    PSP = "psp"
    REDOX = "redox"
    SOLARIS = "solaris"
    TVOS = "tvos"
    UEFI = "uefi"
    VISIONOS = "visionos"
    VXWORKS = "vxworks"
    WASI = "wasi"
    WASIP1 = "wasip1"
    WASIP2 = "wasip2"
    WATCHOS = "watchos"
    WINDOWS = "windows"


# platform.system() results that don't lowercase to a canonical name
_SYSTEM_ALIASES = {
    "android": OsFamily.LINUX,
    "gnu": OsFamily.HURD,
}


@dataclass(frozen=True)
class Os:
    """
    A canonical operating system identity.

    Attributes:
        family: One member of OsFamily
    """

    family: OsFamily

    @classmethod
    def parse(cls, value: str) -> "Os":
        """
        Parse an operating system token.

        Accepts canonical names plus the 'macos' alias for Darwin.

        Args:
            value: OS token, case-sensitive

        Returns:
            Parsed Os

        Raises:
            UnknownOsError: If the token is not recognized

        Example:
            >>> str(Os.parse("macos"))
            'macos'
        """
        if value == "macos":
            return cls(OsFamily.DARWIN)
        try:
            return cls(OsFamily(value))
        except ValueError:
            raise UnknownOsError(value) from None

    @classmethod
    def from_env(cls) -> "Os":
        """
        Detect the operating system of the running interpreter.

        Returns:
            Os for the live host

        Raises:
            UnknownOsError: If the host OS is not in the vocabulary
        """
        system = platform.system()
        lowered = system.lower()

        if lowered.startswith("cygwin"):
            family = OsFamily.CYGWIN
        elif lowered == "sunos":
            # illumos distributions report SunOS with an illumos version string
            if "illumos" in platform.version().lower():
                family = OsFamily.ILLUMOS
            else:
                family = OsFamily.SOLARIS
        elif lowered in _SYSTEM_ALIASES:
            family = _SYSTEM_ALIASES[lowered]
        else:
            try:
                family = OsFamily(lowered)
            except ValueError:
                raise UnknownOsError(system) from None

        logger.debug(f"Detected operating system {family.value} from '{system}'")
        return cls(family)

    @property
    def is_linux(self) -> bool:
        return self.family is OsFamily.LINUX

    @property
    def is_windows(self) -> bool:
        return self.family is OsFamily.WINDOWS

    @property
    def is_macos(self) -> bool:
        return self.family is OsFamily.DARWIN

    def __str__(self) -> str:
        if self.family is OsFamily.DARWIN:
            return "macos"
        return self.family.value


__all__ = ["OsFamily", "Os"]
