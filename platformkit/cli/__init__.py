"""
platformkit CLI module.

This module provides the command-line interface for platformkit.
"""

from .parser import CLI, main

__all__ = ["CLI", "main"]
