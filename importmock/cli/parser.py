"""
importmock CLI argument parser.

This module implements the command-line interface for importmock using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from importmock.core.exceptions import ImportMockError

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("importmock")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)

# Subcommand name -> module exposing run(args) -> int
COMMANDS = {
    "resolve": "importmock.cli.commands.resolve",
    "trace": "importmock.cli.commands.trace",
}


class CLI:
    """importmock command-line interface."""

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
            prog="importmock",
            description="importmock - scoped import substitution for tests",
            epilog='Use "importmock COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"importmock {__version__}"
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
        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_resolve_command(subparsers)
        self._add_trace_command(subparsers)

        return parser

    def _add_path_option(self, parser):
        parser.add_argument(
            "--path",
            "-p",
            type=Path,
            action="append",
            metavar="DIR",
            help="Directory to prepend to sys.path (repeatable)",
        )

    def _add_resolve_command(self, subparsers):
        """Add 'resolve' subcommand."""
        parser = subparsers.add_parser(
            "resolve",
            help="Show the canonical module a specifier refers to",
            description="Resolve a module specifier the way mock_load does",
        )
        parser.add_argument("specifier", help="Module specifier (e.g. pkg.mod or .mod)")
        parser.add_argument(
            "--package",
            metavar="NAME",
            help="Package anchor for relative specifiers",
        )
        self._add_path_option(parser)

    def _add_trace_command(self, subparsers):
        """Add 'trace' subcommand."""
        parser = subparsers.add_parser(
            "trace",
            help="Import a module and print every import it performs",
            description="Import a module with the interceptor's diagnostic trace enabled",
        )
        parser.add_argument("module", help="Module to import (e.g. pkg.mod)")
        parser.add_argument(
            "--no-stack",
            action="store_true",
            help="Don't print the call sites of each import",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./.importmock.yaml)",
        )
        self._add_path_option(parser)

    def parse_args(self, args: Optional[List[str]] = None) -> argparse.Namespace:
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (defaults to sys.argv[1:])

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Command-line arguments (defaults to sys.argv[1:])

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)
        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except ImportMockError as e:
            logger.error(str(e))
            return 1
        except Exception as e:
            if parsed_args.verbose:
                logger.exception(f"Unexpected error: {e}")
            else:
                logger.error(f"Unexpected error: {e} (use --verbose for details)")
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
        module_name = COMMANDS.get(args.command)
        if module_name is None:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        logger.debug(f"Dispatching {args.command} to {module_name}")
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
