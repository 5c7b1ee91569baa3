"""
Unit tests for the Platform triple.
"""

import pytest
from unittest.mock import patch

from platformkit.core.arch import Arch
from platformkit.core.exceptions import (
    PlatformParseError,
    UnknownArchError,
    UnknownLibcError,
    UnknownOsError,
    UnsupportedVariantError,
)
from platformkit.core.libc import Libc, LibcEnvironment, Manylinux
from platformkit.core.operating_system import Os, OsFamily
from platformkit.core.platform import Platform


class TestPlatformParse:
    """Tests for Platform.parse and formatting."""

    def test_parse(self):
        """Test parsing a full platform key."""
        platform_info = Platform.parse("linux-x86_64_v3-gnu")

        assert platform_info.os == Os(OsFamily.LINUX)
        assert platform_info.arch == Arch.parse("x86_64_v3")
        assert platform_info.libc == Libc(LibcEnvironment.GNU)

    def test_str(self):
        """Test canonical key formatting uses each axis' canonical form."""
        platform_info = Platform.parse("darwin-arm64-none")
        assert str(platform_info) == "macos-aarch64-none"

        assert str(Platform.parse("windows-i686-none")) == "windows-x86-none"

    @pytest.mark.parametrize(
        "value", ["linux-x86_64-gnu", "macos-aarch64-none", "linux-armv7-gnueabihf"]
    )
    def test_round_trip(self, value):
        """Test formatted keys parse back to an equal Platform."""
        platform_info = Platform.parse(value)
        assert str(platform_info) == value
        assert Platform.parse(str(platform_info)) == platform_info

    @pytest.mark.parametrize("value", ["linux-x86_64", "linux", "linux-x86_64-gnu-extra", ""])
    def test_wrong_shape(self, value):
        """Test keys without exactly three parts are rejected."""
        with pytest.raises(PlatformParseError) as exc_info:
            Platform.parse(value)

        assert exc_info.value.value == value

    @pytest.mark.parametrize(
        "value,error",
        [
            ("plan9-x86_64-none", UnknownOsError),
            ("linux-sparc128-gnu", UnknownArchError),
            ("linux-x86_64-glibc", UnknownLibcError),
            ("linux-aarch64_v2-gnu", UnsupportedVariantError),
        ],
    )
    def test_invalid_part(self, value, error):
        """Test each axis error propagates unchanged."""
        with pytest.raises(error):
            Platform.parse(value)


class TestPlatformSupports:
    """Tests for Platform.supports."""

    def test_identity(self):
        """Test a platform supports itself."""
        platform_info = Platform.parse("linux-x86_64-gnu")
        assert platform_info.supports(platform_info)

    def test_macos_rosetta(self):
        """Test macOS aarch64 supports macOS x86_64."""
        host = Platform.parse("macos-aarch64-none")
        assert host.supports(Platform.parse("macos-x86_64-none"))

    def test_windows_emulation(self):
        """Test Windows aarch64 supports Windows x86_64."""
        host = Platform.parse("windows-aarch64-none")
        assert host.supports(Platform.parse("windows-x86_64-none"))

    def test_linux_no_emulation(self):
        """Test Linux aarch64 does not support x86_64."""
        host = Platform.parse("linux-aarch64-gnu")
        assert not host.supports(Platform.parse("linux-x86_64-gnu"))

    def test_libc_mismatch(self):
        """Test glibc hosts do not accept musl builds."""
        host = Platform.parse("linux-x86_64-gnu")
        assert not host.supports(Platform.parse("linux-x86_64-musl"))

    def test_os_mismatch(self):
        """Test different operating systems never match."""
        host = Platform.parse("macos-x86_64-none")
        assert not host.supports(Platform.parse("windows-x86_64-none"))

    @patch("platform.system")
    def test_uses_own_os_not_live_host(self, mock_system):
        """Test the platform's OS, not the live one, decides emulation."""
        mock_system.return_value = "Linux"

        host = Platform.parse("macos-aarch64-none")
        assert host.supports(Platform.parse("macos-x86_64-none"))


class TestPlatformFromEnv:
    """Tests for Platform.from_env."""

    @patch("platformkit.core.libc.detect_linux_libc")
    def test_linux(self, mock_probe, monkeypatch):
        """Test detection on a glibc Linux host."""
        monkeypatch.setattr("platform.system", lambda: "Linux")
        monkeypatch.setattr("platform.machine", lambda: "x86_64")
        monkeypatch.delenv("PLATFORMKIT_LIBC", raising=False)
        mock_probe.return_value = Manylinux(2, 31)

        platform_info = Platform.from_env()

        assert str(platform_info) == "linux-x86_64-gnu"
        assert not platform_info.is_musl
        assert not platform_info.is_arm

    def test_macos(self, monkeypatch):
        """Test detection on Apple Silicon."""
        monkeypatch.setattr("platform.system", lambda: "Darwin")
        monkeypatch.setattr("platform.machine", lambda: "arm64")

        assert str(Platform.from_env()) == "macos-aarch64-none"

    def test_windows_x86(self, monkeypatch):
        """Test detection on 32-bit Windows."""
        monkeypatch.setattr("platform.system", lambda: "Windows")
        monkeypatch.setattr("platform.machine", lambda: "x86")

        assert str(Platform.from_env()) == "windows-x86-none"
