"""
CPU architecture identity, preference ordering and execution compatibility.

An Arch is an architecture family plus an optional instruction-set variant.
Only x86_64 carries variants (x86-64-v2, v3, v4 micro-architecture levels).

Ordering between architectures is a policy rather than a structural
comparison: the preferred family (normally the host's native family) sorts
first, and Windows on ARM64 prefers x86_64 because prebuilt ARM64 Windows
distributions are scarce and emulation is transparent. The override only
affects ranking; an explicitly requested aarch64 arch still parses and
compares equal to itself.

Usage:
    from platformkit.core.arch import Arch, sort_by_preference

    arch = Arch.parse("x86_64_v3")
    print(arch)                           # 'x86_64_v3'
    ranked = sort_by_preference([Arch.parse("aarch64"), Arch.parse("x86_64")])
"""

import enum
import functools
import logging
import platform
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .exceptions import UnknownArchError, UnknownOsError, UnsupportedVariantError
from .operating_system import Os

logger = logging.getLogger(__name__)


@functools.total_ordering
class ArchVariant(enum.Enum):
    """x86-64 micro-architecture levels, ordered by declaration."""

    # Nehalem (2008) and newer: SSE3, SSE4
    V2 = "v2"
    # Haswell (2013) / Excavator (2015) and newer: AVX, AVX2, MOVBE
    V3 = "v3"
    # AVX-512 capable CPUs
    V4 = "v4"

    @classmethod
    def parse(cls, value: str) -> Optional["ArchVariant"]:
        """Return the variant named by value, or None if it names none."""
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def rank(self) -> int:
        return _VARIANT_ORDER.index(self)

    def __lt__(self, other):
        if not isinstance(other, ArchVariant):
            return NotImplemented
        return self.rank < other.rank

    def __str__(self) -> str:
        return self.value


_VARIANT_ORDER = list(ArchVariant)


class ArchFamily(enum.Enum):
    """Canonical CPU architecture family names."""

    AARCH64 = "aarch64"
    AARCH64_BE = "aarch64_be"
    ARM = "arm"
    ARMEB = "armeb"
    ARMV4T = "armv4t"
    ARMV5TE = "armv5te"
    ARMV6 = "armv6"
    ARMV6K = "armv6k"
    ARMV7 = "armv7"
    ARMV7A = "armv7a"
    ARMV7K = "armv7k"
    ARMV7S = "armv7s"
    ARMV8 = "armv8"
    THUMBV6M = "thumbv6m"
    THUMBV7EM = "thumbv7em"
    THUMBV7M = "thumbv7m"
    ASMJS = "asmjs"
    AVR = "avr"
    BPFEB = "bpfeb"
    BPFEL = "bpfel"
    HEXAGON = "hexagon"
    I386 = "i386"
    I586 = "i586"
    I686 = "i686"
    LOONGARCH64 = "loongarch64"
    M68K = "m68k"
    MIPS = "mips"
    MIPSEL = "mipsel"
    MIPS64 = "mips64"
    MIPS64EL = "mips64el"
    MIPSISA32R6 = "mipsisa32r6"
    MIPSISA32R6EL = "mipsisa32r6el"
    MIPSISA64R6 = "mipsisa64r6"
    MIPSISA64R6EL = "mipsisa64r6el"
    MSP430 = "msp430"
    NVPTX64 = "nvptx64"
    POWERPC = "powerpc"
    POWERPC64 = "powerpc64"
    POWERPC64LE = "powerpc64le"
    RISCV32 = "riscv32"
    RISCV32GC = "riscv32gc"
    RISCV32I = "riscv32i"
    RISCV32IMAC = "riscv32imac"
    RISCV32IMC = "riscv32imc"
    RISCV64 = "riscv64"
    RISCV64GC = "riscv64gc"
    RISCV64IMAC = "riscv64imac"
    S390X = "s390x"
    SPARC = "sparc"
    SPARC64 = "sparc64"
    SPARCV9 = "sparcv9"
    WASM32 = "wasm32"
    WASM64 = "wasm64"
    X86_64 = "x86_64"
    X86_64H = "x86_64h"
    XTENSA = "xtensa"

    @classmethod
    def parse(cls, value: str) -> "ArchFamily":
        """
        Parse an architecture family token.

        Args:
            value: Canonical family name or one of the 'x86' / 'arm64' aliases

        Returns:
            Parsed ArchFamily

        Raises:
            UnknownArchError: If the token is not recognized
        """
        if value in _FAMILY_ALIASES:
            return _FAMILY_ALIASES[value]
        try:
            return cls(value)
        except ValueError:
            raise UnknownArchError(value) from None

    @property
    def is_aarch64(self) -> bool:
        return self in (ArchFamily.AARCH64, ArchFamily.AARCH64_BE)

    @property
    def is_arm(self) -> bool:
        """32-bit ARM, including Thumb-only cores."""
        return self in _ARM32_FAMILIES

    @property
    def is_x86_32(self) -> bool:
        return self in (ArchFamily.I386, ArchFamily.I586, ArchFamily.I686)


# Only one 32-bit x86 flavor has prebuilt distributions, so "x86" means i686
_FAMILY_ALIASES = {
    "x86": ArchFamily.I686,
    "arm64": ArchFamily.AARCH64,
}

_ARM32_FAMILIES = frozenset(
    {
        ArchFamily.ARM,
        ArchFamily.ARMEB,
        ArchFamily.ARMV4T,
        ArchFamily.ARMV5TE,
        ArchFamily.ARMV6,
        ArchFamily.ARMV6K,
        ArchFamily.ARMV7,
        ArchFamily.ARMV7A,
        ArchFamily.ARMV7K,
        ArchFamily.ARMV7S,
        ArchFamily.ARMV8,
        ArchFamily.THUMBV6M,
        ArchFamily.THUMBV7EM,
        ArchFamily.THUMBV7M,
    }
)

# platform.machine() spellings that differ from the canonical family name
_MACHINE_ALIASES = {
    "amd64": ArchFamily.X86_64,
    "x64": ArchFamily.X86_64,
    "em64t": ArchFamily.X86_64,
    "arm64": ArchFamily.AARCH64,
    "x86": ArchFamily.I686,
    "i386": ArchFamily.I686,
    "i486": ArchFamily.I686,
    "i586": ArchFamily.I686,
    "i686": ArchFamily.I686,
    "i86pc": ArchFamily.X86_64,
    "armv5tel": ArchFamily.ARMV5TE,
    "armv5tejl": ArchFamily.ARMV5TE,
    "armv6l": ArchFamily.ARMV6,
    "armv7l": ArchFamily.ARMV7,
    "armv7hl": ArchFamily.ARMV7,
    "armv8l": ArchFamily.ARMV7,
    "ppc": ArchFamily.POWERPC,
    "ppc64": ArchFamily.POWERPC64,
    "ppc64le": ArchFamily.POWERPC64LE,
    "mips64el": ArchFamily.MIPS64EL,
}


def _normalize_machine(machine: str) -> ArchFamily:
    lowered = machine.lower()
    if lowered in _MACHINE_ALIASES:
        return _MACHINE_ALIASES[lowered]
    try:
        return ArchFamily(lowered)
    except ValueError:
        raise UnknownArchError(machine) from None


@functools.total_ordering
@dataclass(frozen=True, eq=True)
class Arch:
    """
    A CPU architecture family with an optional instruction-set variant.

    Invariant: variant is only set when family is x86_64. Arch.parse enforces
    this; direct construction does not.

    Attributes:
        family: Architecture family
        variant: Optional x86_64 micro-architecture level
    """

    family: ArchFamily
    variant: Optional[ArchVariant] = None

    @classmethod
    def parse(cls, value: str) -> "Arch":
        """
        Parse an architecture token such as 'aarch64', 'x86' or 'x86_64_v3'.

        A trailing '_v2', '_v3' or '_v4' is only treated as a variant when
        both the prefix and the suffix parse; otherwise the whole string is
        parsed as a bare family.

        Args:
            value: Architecture token, case-sensitive

        Returns:
            Parsed Arch

        Raises:
            UnknownArchError: If the token is not a known family
            UnsupportedVariantError: If a variant is attached to a family
                other than x86_64

        Example:
            >>> Arch.parse("x86_64_v3").variant
            <ArchVariant.V3: 'v3'>
        """
        prefix, sep, suffix = value.rpartition("_")
        if sep:
            variant = ArchVariant.parse(suffix)
            family = _try_parse_family(prefix)
            if family is not None and variant is not None:
                if family is not ArchFamily.X86_64:
                    raise UnsupportedVariantError(str(variant), family.value, value)
                return cls(family, variant)

        return cls(ArchFamily.parse(value))

    @classmethod
    def from_env(cls) -> "Arch":
        """
        Detect the native architecture of the running interpreter.

        The variant is never detected and is always None.

        Raises:
            UnknownArchError: If platform.machine() reports an unknown family
        """
        machine = platform.machine()
        family = _normalize_machine(machine)
        logger.debug(f"Detected architecture {family.value} from '{machine}'")
        return cls(family)

    @property
    def is_arm(self) -> bool:
        return self.family.is_arm

    def compare(self, other: "Arch", preferred: Optional["Arch"] = None) -> int:
        """
        Compare two architectures by preference.

        Args:
            other: Architecture to compare against
            preferred: Preferred architecture; defaults to preferred_arch()

        Returns:
            Negative if self is more preferred, positive if other is, 0 if equal
        """
        if self.family is other.family:
            return _cmp(_variant_key(self.variant), _variant_key(other.variant))

        if preferred is None:
            preferred = preferred_arch()
        return _compare_families(self, other, preferred)

    def __lt__(self, other):
        if not isinstance(other, Arch):
            return NotImplemented
        return self.compare(other) < 0

    def supports(self, other: "Arch", host_os: Optional[Os] = None) -> bool:
        """
        Check whether a host with this architecture can run binaries built for other.

        Windows and macOS on aarch64 run x86_64 binaries through transparent
        emulation. Emulation is assumed available, not verified. Variant
        compatibility (e.g. a v3 host running v2 binaries) is not considered.

        Args:
            other: Architecture the binary was built for
            host_os: Operating system of the host; defaults to Os.from_env()

        Returns:
            True if other can run on this architecture
        """
        if self == other:
            return True

        # TODO: allow higher x86_64 variants to run binaries built for lower ones
        if host_os is None:
            host_os = Os.from_env()
        if (host_os.is_windows or host_os.is_macos) and self.family.is_aarch64:
            return other.family is ArchFamily.X86_64

        return False

    def __str__(self) -> str:
        formatted = _format_family(self.family)
        if self.variant is not None:
            formatted = f"{formatted}_{self.variant}"
        return formatted


def _try_parse_family(value: str) -> Optional[ArchFamily]:
    try:
        return ArchFamily.parse(value)
    except UnknownArchError:
        return None


def _format_family(family: ArchFamily) -> str:
    if family is ArchFamily.I686:
        return "x86"
    return family.value


def _variant_key(variant: Optional[ArchVariant]) -> int:
    # No variant sorts before any concrete variant
    return -1 if variant is None else variant.rank


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def _compare_families(a: Arch, b: Arch, preferred: Optional[Arch]) -> int:
    if a.family is b.family:
        return _cmp(_variant_key(a.variant), _variant_key(b.variant))

    # Families differ here, so at most one side can match the preferred family
    if preferred is not None:
        if a.family is preferred.family:
            return -1
        if b.family is preferred.family:
            return 1
    return _cmp(a.family.value, b.family.value)


def preferred_arch(
    host_os: Optional[Os] = None, host_arch: Optional[Arch] = None
) -> Optional[Arch]:
    """
    Architecture that ranks first when sorting candidates.

    Normally the host's native architecture. On Windows ARM64 hosts x86_64
    is preferred instead, since emulated x86_64 distributions are far more
    widely available than native ones.

    Args:
        host_os: Host operating system; defaults to Os.from_env()
        host_arch: Host architecture; defaults to Arch.from_env()

    Returns:
        Preferred architecture (never carries a variant), or None when the
        host architecture is not recognized
    """
    if host_arch is None:
        try:
            host_arch = Arch.from_env()
        except UnknownArchError as e:
            logger.debug(f"No preferred architecture for unrecognized host: {e}")
            return None

    if host_arch.family is ArchFamily.AARCH64:
        if host_os is None:
            try:
                host_os = Os.from_env()
            except UnknownOsError as e:
                logger.debug(f"Unrecognized host operating system: {e}")
                return Arch(host_arch.family)
        if host_os.is_windows:
            return Arch(ArchFamily.X86_64)
    return Arch(host_arch.family)


def sort_by_preference(
    archs: Iterable[Arch], preferred: Optional[Arch] = None
) -> List[Arch]:
    """
    Sort architectures from most to least preferred.

    Args:
        archs: Candidate architectures
        preferred: Preferred architecture; defaults to preferred_arch()

    Returns:
        New list, most preferred first
    """
    if preferred is None:
        preferred = preferred_arch()
    return sorted(
        archs, key=functools.cmp_to_key(lambda a, b: _compare_families(a, b, preferred))
    )


__all__ = [
    "ArchVariant",
    "ArchFamily",
    "Arch",
    "preferred_arch",
    "sort_by_preference",
]
