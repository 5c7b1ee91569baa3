"""
CPU capability probes.
"""

import logging
from pathlib import Path
from typing import Union

from .exceptions import CpuInfoError

logger = logging.getLogger(__name__)

CPUINFO_PATH = Path("/proc/cpuinfo")


def detect_hardware_floating_point_support(
    cpuinfo_path: Union[str, Path] = CPUINFO_PATH,
) -> bool:
    """
    Check whether the CPU executes hardware floating point instructions.

    Looks for the 'vfp' flag on the 'Features' line of /proc/cpuinfo, which
    ARM kernels use to advertise a VFP unit.

    Args:
        cpuinfo_path: Path to a cpuinfo file

    Returns:
        True for hard-float capable CPUs, False otherwise

    Raises:
        CpuInfoError: If the cpuinfo file cannot be read
    """
    try:
        content = Path(cpuinfo_path).read_text(errors="replace")
    except OSError as e:
        raise CpuInfoError(f"Failed to read {cpuinfo_path}: {e}") from e

    for line in content.splitlines():
        # Matches vfp, vfpv3, vfpd32, ...
        if line.startswith("Features") and "vfp" in line:
            logger.debug(f"Hardware floating point supported: {line.strip()}")
            return True

    return False


__all__ = ["detect_hardware_floating_point_support"]
