"""Unit tests for configuration parser."""

import pytest
from unittest.mock import patch

from platformkit.config.parser import (
    PlatformConfig,
    parse_config,
    parse_config_data,
)
from platformkit.core.arch import Arch
from platformkit.core.exceptions import ConfigError
from platformkit.core.libc import Libc, LibcEnvironment
from platformkit.core.operating_system import Os, OsFamily


@pytest.mark.unit
def test_parse_full_config(tmp_path):
    """Test parsing a configuration that pins every axis."""
    # Arrange
    config_file = tmp_path / "platformkit.yaml"
    config_file.write_text(
        """
version: 1
platform:
  os: linux
  arch: x86_64_v3
  libc: musl
"""
    )

    # Act
    config = parse_config(config_file)

    # Assert
    assert config.os == Os(OsFamily.LINUX)
    assert config.arch == Arch.parse("x86_64_v3")
    assert config.libc == Libc(LibcEnvironment.MUSL)


@pytest.mark.unit
def test_parse_partial_config(tmp_path):
    """Test unset axes stay None."""
    config_file = tmp_path / "platformkit.yaml"
    config_file.write_text("platform:\n  arch: x86\n")

    config = parse_config(config_file)

    assert config.os is None
    assert str(config.arch) == "x86"
    assert config.libc is None


@pytest.mark.unit
def test_parse_missing_file(tmp_path):
    """Test missing configuration file raises ConfigError."""
    with pytest.raises(ConfigError, match="not found"):
        parse_config(tmp_path / "platformkit.yaml")


@pytest.mark.unit
def test_parse_empty_file(tmp_path):
    """Test empty configuration file raises ConfigError."""
    config_file = tmp_path / "platformkit.yaml"
    config_file.write_text("")

    with pytest.raises(ConfigError, match="empty"):
        parse_config(config_file)


@pytest.mark.unit
def test_parse_invalid_yaml(tmp_path):
    """Test YAML syntax errors raise ConfigError."""
    config_file = tmp_path / "platformkit.yaml"
    config_file.write_text("platform: [unclosed\n")

    with pytest.raises(ConfigError, match="Invalid YAML"):
        parse_config(config_file)


@pytest.mark.unit
def test_unsupported_version():
    """Test unknown configuration versions are rejected."""
    with pytest.raises(ConfigError, match="Unsupported version"):
        parse_config_data({"version": 2})


@pytest.mark.unit
def test_not_a_mapping():
    """Test non-mapping documents are rejected."""
    with pytest.raises(ConfigError, match="mapping"):
        parse_config_data(["linux"])

    with pytest.raises(ConfigError, match="platform must be a mapping"):
        parse_config_data({"platform": "linux-x86_64-gnu"})


@pytest.mark.unit
def test_unknown_field():
    """Test unknown platform fields are rejected."""
    with pytest.raises(ConfigError, match="distro"):
        parse_config_data({"platform": {"distro": "ubuntu"}})


@pytest.mark.unit
@pytest.mark.parametrize(
    "section,field_name",
    [
        ({"os": "plan9"}, "os"),
        ({"arch": "aarch64_v3"}, "arch"),
        ({"libc": "glibc"}, "libc"),
    ],
)
def test_invalid_values(section, field_name):
    """Test values are validated with the strict parsers."""
    with pytest.raises(ConfigError, match=f"platform.{field_name}") as exc_info:
        parse_config_data({"platform": section})

    assert exc_info.value.__cause__ is not None


@pytest.mark.unit
def test_non_string_value():
    """Test non-string values are rejected."""
    with pytest.raises(ConfigError, match="must be a string"):
        parse_config_data({"platform": {"arch": 64}})


@pytest.mark.unit
def test_resolve_all_configured():
    """Test a fully configured platform needs no detection."""
    config = PlatformConfig(
        os=Os.parse("linux"), arch=Arch.parse("aarch64"), libc=Libc.parse("musl")
    )

    with patch("platformkit.core.libc.detect_linux_libc") as mock_probe:
        platform_info = config.resolve()

    assert str(platform_info) == "linux-aarch64-musl"
    mock_probe.assert_not_called()


@pytest.mark.unit
def test_resolve_detects_missing_axes(monkeypatch):
    """Test missing axes are detected from the host."""
    monkeypatch.setattr("platform.system", lambda: "Darwin")
    monkeypatch.setattr("platform.machine", lambda: "arm64")

    platform_info = PlatformConfig(arch=Arch.parse("x86_64")).resolve()

    assert str(platform_info) == "macos-x86_64-none"


@pytest.mark.unit
def test_resolve_non_linux_os_skips_libc_probe(monkeypatch):
    """Test a configured non-Linux OS implies no libc."""
    monkeypatch.setattr("platform.system", lambda: "Linux")
    monkeypatch.setattr("platform.machine", lambda: "x86_64")

    with patch("platformkit.core.libc.detect_linux_libc") as mock_probe:
        platform_info = PlatformConfig(os=Os.parse("windows")).resolve()

    assert str(platform_info) == "windows-x86_64-none"
    mock_probe.assert_not_called()
