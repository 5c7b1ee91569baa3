"""
Unit tests for the hardware floating point probe.
"""

import pytest

from platformkit.core.cpuinfo import detect_hardware_floating_point_support
from platformkit.core.exceptions import CpuInfoError


ARMV7_HARD_FLOAT = """processor\t: 0
model name\t: ARMv7 Processor rev 4 (v7l)
BogoMIPS\t: 38.40
Features\t: half thumb fastmult vfp edsp neon vfpv3 tls vfpv4 idiva idivt vfpd32 lpae evtstrm crc32
CPU implementer\t: 0x41
CPU architecture: 7
"""

ARMV5_SOFT_FLOAT = """Processor\t: Feroceon 88FR131 rev 1 (v5l)
BogoMIPS\t: 1191.11
Features\t: swp half thumb fastmult edsp
CPU implementer\t: 0x56
"""


class TestHardwareFloatingPoint:
    """Tests for detect_hardware_floating_point_support."""

    def test_hard_float(self, tmp_path):
        """Test a CPU advertising vfp."""
        cpuinfo = tmp_path / "cpuinfo"
        cpuinfo.write_text(ARMV7_HARD_FLOAT)

        assert detect_hardware_floating_point_support(cpuinfo) is True

    def test_soft_float(self, tmp_path):
        """Test a CPU without vfp."""
        cpuinfo = tmp_path / "cpuinfo"
        cpuinfo.write_text(ARMV5_SOFT_FLOAT)

        assert detect_hardware_floating_point_support(cpuinfo) is False

    def test_vfp_outside_features_line_ignored(self, tmp_path):
        """Test only the Features line is consulted."""
        cpuinfo = tmp_path / "cpuinfo"
        cpuinfo.write_text("model name\t: vfp-less core\nFeatures\t: swp half\n")

        assert detect_hardware_floating_point_support(cpuinfo) is False

    def test_empty_file(self, tmp_path):
        """Test an empty cpuinfo reports no hardware float."""
        cpuinfo = tmp_path / "cpuinfo"
        cpuinfo.write_text("")

        assert detect_hardware_floating_point_support(cpuinfo) is False

    def test_missing_file(self, tmp_path):
        """Test an unreadable cpuinfo raises CpuInfoError."""
        with pytest.raises(CpuInfoError) as exc_info:
            detect_hardware_floating_point_support(tmp_path / "missing")

        assert "Failed to read" in str(exc_info.value)
