"""
rustlink CLI argument parser.

This module implements the command-line interface for rustlink using argparse.
Running ``rustlink`` without a command performs the full install.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rustlink.cli import utils

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("rustlink")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = "install"


class CLI:
    """rustlink command-line interface."""

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
            prog="rustlink",
            description="Build a custom Rust toolchain and link it into rustup",
            epilog='Use "rustlink COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"rustlink {__version__}"
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
            help="Path to settings file (default: <root>/rustlink.yaml)",
        )
        parser.add_argument(
            "--root",
            type=Path,
            metavar="PATH",
            help="Project root holding config.toml and the source submodule "
            "(default: located from the running script)",
        )
        parser.add_argument(
            "--non-interactive",
            "--ci",
            dest="non_interactive",
            action="store_true",
            help="Never wait for a keypress before exiting",
        )
        parser.add_argument(
            "--no-color", action="store_true", help="Disable colored output"
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_install_command(subparsers)
        self._add_doctor_command(subparsers)

        return parser

    def _add_install_command(self, subparsers):
        """Add 'install' subcommand."""
        parser = subparsers.add_parser(
            "install",
            help="Build, install and link the toolchain (default)",
            description="Check dependencies, stage config.toml, build the "
            "toolchain and link it into the toolchain manager",
        )
        parser.add_argument(
            "--stage",
            type=int,
            metavar="N",
            help="Bootstrap stage to build and link (default: 2)",
        )
        parser.add_argument(
            "--alias",
            metavar="NAME",
            help="Toolchain name to link under (default: rap-rust)",
        )
        parser.add_argument(
            "--target",
            dest="build_target",
            metavar="TARGET",
            help="Build driver target (default: compiler/rustc)",
        )
        parser.add_argument(
            "--no-incremental",
            dest="incremental",
            action="store_false",
            default=None,
            help="Disable incremental compilation",
        )
        parser.add_argument(
            "--build-arg",
            dest="build_args",
            action="append",
            metavar="ARG",
            help="Additional build driver argument (can be used multiple times)",
        )
        parser.add_argument(
            "--lock-timeout",
            type=float,
            metavar="SECONDS",
            help="Seconds to wait for a concurrent bootstrap (default: 10)",
        )
        parser.add_argument(
            "--no-lock",
            action="store_true",
            help="Do not guard the source directory with a lock file",
        )

    def _add_doctor_command(self, subparsers):
        """Add 'doctor' subcommand."""
        subparsers.add_parser(
            "doctor",
            help="Diagnose the bootstrap environment",
            description="Run the bootstrap checks without building anything",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Without a command, the arguments are parsed again with the default
        install command appended.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        if args is None:
            args = sys.argv[1:]
        parsed = self.parser.parse_args(args)
        if not parsed.command:
            parsed = self.parser.parse_args(list(args) + [DEFAULT_COMMAND])
        return parsed

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)
        if parsed_args.no_color:
            utils.set_color_enabled(False)

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except Exception as e:
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
            "install": "rustlink.cli.commands.install",
            "doctor": "rustlink.cli.commands.doctor",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        import importlib

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
