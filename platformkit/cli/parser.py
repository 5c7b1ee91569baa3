"""
platformkit CLI argument parser.

This module implements the command-line interface for platformkit using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from platformkit.core.exceptions import PlatformKitError

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("platformkit")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


class CLI:
    """platformkit command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="platformkit",
            description="platformkit - host platform identification",
            epilog='Use "platformkit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"platformkit {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./platformkit.yaml if present)",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_detect_command(subparsers)
        self._add_parse_command(subparsers)
        self._add_rank_command(subparsers)
        self._add_supports_command(subparsers)

        return parser

    def _add_detect_command(self, subparsers):
        """Add 'detect' subcommand."""
        parser = subparsers.add_parser(
            "detect",
            help="Detect the host platform",
            description="Detect the operating system, architecture and libc of this host",
        )
        parser.add_argument(
            "--json", action="store_true", help="Print the result as JSON"
        )

    def _add_parse_command(self, subparsers):
        """Add 'parse' subcommand."""
        parser = subparsers.add_parser(
            "parse",
            help="Canonicalize a platform string",
            description="Parse a platform string and print its canonical form",
        )
        parser.add_argument(
            "kind",
            choices=["os", "arch", "libc", "platform"],
            help="Kind of value to parse",
        )
        parser.add_argument("value", help="Value to parse (e.g., x86_64_v3, macos)")

    def _add_rank_command(self, subparsers):
        """Add 'rank' subcommand."""
        parser = subparsers.add_parser(
            "rank",
            help="Rank architectures by preference",
            description="Print architectures from most to least preferred on this host",
        )
        parser.add_argument("archs", nargs="+", metavar="ARCH", help="Architectures")

    def _add_supports_command(self, subparsers):
        """Add 'supports' subcommand."""
        parser = subparsers.add_parser(
            "supports",
            help="Check whether binaries for an architecture can run here",
            description=(
                "Exit with 0 if the host architecture can run binaries built "
                "for TARGET, 1 otherwise"
            ),
        )
        parser.add_argument("target", metavar="TARGET", help="Target architecture")
        parser.add_argument(
            "--host",
            metavar="ARCH",
            help="Host architecture (default: detected)",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        # Configure logging
        self._configure_logging(parsed_args)

        # Check if command specified
        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except PlatformKitError as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        command_map = {
            "detect": "platformkit.cli.commands.detect",
            "parse": "platformkit.cli.commands.parse",
            "rank": "platformkit.cli.commands.rank",
            "supports": "platformkit.cli.commands.supports",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
