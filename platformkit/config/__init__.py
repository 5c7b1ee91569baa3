"""Configuration module for platformkit.

Environment variable overrides live in platformkit.config.env; YAML
configuration parsing lives in platformkit.config.parser.
"""

from platformkit.config.env import EnvVars, get_libc_override

__all__ = [
    "EnvVars",
    "get_libc_override",
]
