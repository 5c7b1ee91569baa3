"""
Centralized exception hierarchy for platformkit.

Parse errors carry the rejected input so callers can report it verbatim.
Detection errors originate from host probes rather than from parsing.
"""

from typing import Optional


# ============================================================================
# Base Exceptions
# ============================================================================


class PlatformKitError(Exception):
    """Base exception for all platformkit errors."""

    pass


# ============================================================================
# Parse Exceptions
# ============================================================================


class PlatformParseError(PlatformKitError):
    """Base exception for strings that do not name a known platform component."""

    def __init__(self, value: str, message: str = ""):
        self.value = value
        super().__init__(message or f"Unknown platform: {value}")


class UnknownOsError(PlatformParseError):
    """Raised when a string does not match any recognized operating system."""

    def __init__(self, value: str):
        super().__init__(value, f"Unknown operating system: {value}")


class UnknownArchError(PlatformParseError):
    """Raised when a string does not match any recognized architecture family."""

    def __init__(self, value: str):
        super().__init__(value, f"Unknown architecture: {value}")


class UnknownLibcError(PlatformParseError):
    """Raised when a string does not match any recognized libc environment."""

    def __init__(self, value: str):
        super().__init__(value, f"Unknown libc environment: {value}")


class UnsupportedVariantError(PlatformParseError):
    """Raised when a valid variant suffix is paired with a family that has no variants."""

    def __init__(self, variant: str, family: str, value: Optional[str] = None):
        self.variant = variant
        self.family = family
        super().__init__(
            value if value is not None else f"{family}_{variant}",
            f"Unsupported variant `{variant}` for architecture `{family}`",
        )


# ============================================================================
# Detection Exceptions
# ============================================================================


class LibcDetectionError(PlatformKitError):
    """Raised when the host C library cannot be determined."""

    pass


class CpuInfoError(PlatformKitError):
    """Raised when CPU capabilities cannot be determined."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(PlatformKitError):
    """Configuration parsing or validation error."""

    pass
