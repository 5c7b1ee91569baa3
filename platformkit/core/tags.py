"""
Conversion from wheel platform tags to Platform identities.

Wheel tags (PEP 425) name the platform as e.g. 'manylinux_2_17_x86_64',
'musllinux_1_2_aarch64', 'macosx_11_0_arm64' or 'win_amd64'. This module
maps them onto Os / Arch / Libc so binary distributions described by wheel
tags can be compared with the host platform.

Usage:
    from platformkit.core.tags import platforms_from_tag

    for platform_info in platforms_from_tag("cp312-cp312-manylinux_2_17_x86_64"):
        print(platform_info)       # 'linux-x86_64-gnu'
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from packaging.tags import parse_tag
from packaging.utils import parse_wheel_filename

from .arch import Arch, ArchFamily
from .exceptions import UnknownArchError, UnknownOsError
from .libc import Libc, LibcEnvironment
from .operating_system import Os, OsFamily
from .platform import Platform

logger = logging.getLogger(__name__)


# Wheel tag architecture spellings, matched as '_'-separated suffixes
_TAG_ARCHES: Dict[str, Tuple[ArchFamily, ...]] = {
    "x86_64": (ArchFamily.X86_64,),
    "amd64": (ArchFamily.X86_64,),
    "aarch64": (ArchFamily.AARCH64,),
    "arm64": (ArchFamily.AARCH64,),
    "arm64_v8a": (ArchFamily.AARCH64,),
    "armeabi_v7a": (ArchFamily.ARMV7,),
    "armv7l": (ArchFamily.ARMV7,),
    "armv6l": (ArchFamily.ARMV6,),
    "armv5tel": (ArchFamily.ARMV5TE,),
    "i686": (ArchFamily.I686,),
    "i386": (ArchFamily.I686,),
    "x86": (ArchFamily.I686,),
    "ppc": (ArchFamily.POWERPC,),
    "ppc64": (ArchFamily.POWERPC64,),
    "ppc64le": (ArchFamily.POWERPC64LE,),
    "s390x": (ArchFamily.S390X,),
    "riscv64": (ArchFamily.RISCV64,),
    "loongarch64": (ArchFamily.LOONGARCH64,),
    "wasm32": (ArchFamily.WASM32,),
    # macOS multi-architecture builds
    "universal2": (ArchFamily.X86_64, ArchFamily.AARCH64),
    "intel": (ArchFamily.X86_64, ArchFamily.I686),
}

# Longest first
_TAG_ARCH_SUFFIXES = sorted(_TAG_ARCHES, key=len, reverse=True)

# Tag prefix -> (os, libc), checked in order
_TAG_OSES: List[Tuple[str, OsFamily, Optional[LibcEnvironment]]] = [
    ("manylinux", OsFamily.LINUX, LibcEnvironment.GNU),
    ("musllinux", OsFamily.LINUX, LibcEnvironment.MUSL),
    ("linux", OsFamily.LINUX, None),
    ("android", OsFamily.LINUX, None),
    ("macosx", OsFamily.DARWIN, None),
    ("win", OsFamily.WINDOWS, None),
    ("pyodide", OsFamily.EMSCRIPTEN, None),
    ("emscripten", OsFamily.EMSCRIPTEN, None),
    ("freebsd", OsFamily.FREEBSD, None),
    ("netbsd", OsFamily.NETBSD, None),
    ("openbsd", OsFamily.OPENBSD, None),
    ("dragonfly", OsFamily.DRAGONFLY, None),
    ("haiku", OsFamily.HAIKU, None),
    ("illumos", OsFamily.ILLUMOS, None),
    ("solaris", OsFamily.SOLARIS, None),
]


def _parse_platform_tag(platform_tag: str) -> List[Platform]:
    # 'win32' has no separator between OS and architecture
    if platform_tag == "win32":
        return [Platform(Os(OsFamily.WINDOWS), Arch(ArchFamily.I686), Libc.none())]

    for prefix, os_family, libc_env in _TAG_OSES:
        if platform_tag.startswith(prefix):
            break
    else:
        raise UnknownOsError(platform_tag)

    for suffix in _TAG_ARCH_SUFFIXES:
        if platform_tag.endswith(f"_{suffix}"):
            families = _TAG_ARCHES[suffix]
            break
    else:
        raise UnknownArchError(platform_tag)

    return [Platform(Os(os_family), Arch(family), Libc(libc_env)) for family in families]


def _collect(platform_tags: Iterable[str]) -> List[Platform]:
    platforms: List[Platform] = []
    for platform_tag in platform_tags:
        # Pure-Python distributions run anywhere
        if platform_tag == "any":
            continue
        for platform_info in _parse_platform_tag(platform_tag):
            if platform_info not in platforms:
                platforms.append(platform_info)
    return platforms


def platforms_from_tag(tag: str) -> List[Platform]:
    """
    Convert a wheel platform tag into platform identities.

    Args:
        tag: A platform tag ('manylinux_2_17_x86_64') or a full wheel tag
            ('cp312-cp312-manylinux_2_17_x86_64'); compressed tag sets such
            as 'manylinux_2_17_x86_64.manylinux2014_x86_64' are expanded

    Returns:
        Platforms without duplicates; 'any' contributes none

    Raises:
        UnknownOsError: If a platform tag names an unknown operating system
        UnknownArchError: If a platform tag names an unknown architecture

    Example:
        >>> [str(p) for p in platforms_from_tag("macosx_11_0_universal2")]
        ['macos-x86_64-none', 'macos-aarch64-none']
    """
    if "-" in tag:
        platform_tags = sorted({parsed.platform for parsed in parse_tag(tag)})
    else:
        platform_tags = tag.split(".")

    platforms = _collect(platform_tags)
    logger.debug(f"Wheel tag {tag} maps to {[str(p) for p in platforms]}")
    return platforms


def platforms_from_wheel_filename(filename: str) -> List[Platform]:
    """
    Convert the tags of a wheel filename into platform identities.

    Pure-Python wheels ('any') yield an empty list.

    Raises:
        packaging.utils.InvalidWheelFilename: If the filename is malformed
    """
    _, _, _, wheel_tags = parse_wheel_filename(filename)
    return _collect(sorted({wheel_tag.platform for wheel_tag in wheel_tags}))


__all__ = ["platforms_from_tag", "platforms_from_wheel_filename"]
