"""
Tests for CLI argument parser.
"""

import pytest
from pathlib import Path
from unittest.mock import patch

from rustlink.cli.parser import CLI


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_creation(self):
        cli = CLI()
        assert cli.parser is not None

    def test_no_command_defaults_to_install(self):
        """Test that running without command selects install."""
        args = CLI().parse_args([])

        assert args.command == "install"
        assert args.stage is None
        assert args.no_lock is False

    def test_global_options_without_command(self):
        args = CLI().parse_args(["--ci", "--root", "/src/rap", "-v"])

        assert args.command == "install"
        assert args.non_interactive is True
        assert args.root == Path("/src/rap")
        assert args.verbose is True

    def test_version_flag(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            CLI().run(["--version"])

        assert exc_info.value.code == 0
        assert "rustlink" in capsys.readouterr().out


class TestInstallCommand:
    """Test install command parsing."""

    def test_install_defaults(self):
        args = CLI().parse_args(["install"])

        assert args.command == "install"
        assert args.alias is None
        assert args.build_target is None
        assert args.incremental is None
        assert args.build_args is None
        assert args.lock_timeout is None

    def test_install_options(self):
        args = CLI().parse_args(
            [
                "--non-interactive",
                "install",
                "--stage",
                "1",
                "--alias",
                "dev-rust",
                "--target",
                "library/std",
                "--no-incremental",
                "--build-arg",
                "--jobs",
                "--build-arg",
                "8",
                "--lock-timeout",
                "2.5",
                "--no-lock",
            ]
        )

        assert args.stage == 1
        assert args.alias == "dev-rust"
        assert args.build_target == "library/std"
        assert args.incremental is False
        assert args.build_args == ["--jobs", "8"]
        assert args.lock_timeout == 2.5
        assert args.no_lock is True

    def test_invalid_stage(self):
        with pytest.raises(SystemExit):
            CLI().parse_args(["install", "--stage", "two"])


class TestDispatch:
    """Test command dispatch and error handling."""

    @patch("rustlink.cli.commands.doctor.run", return_value=0)
    def test_dispatch_doctor(self, mock_run):
        assert CLI().run(["doctor"]) == 0
        mock_run.assert_called_once()

    @patch("rustlink.cli.commands.install.run", return_value=2)
    def test_dispatch_default_install(self, mock_run):
        assert CLI().run(["--ci"]) == 2
        assert mock_run.call_args[0][0].command == "install"

    @patch("rustlink.cli.commands.install.run", side_effect=KeyboardInterrupt())
    def test_keyboard_interrupt(self, mock_run):
        assert CLI().run(["install", "--no-lock"]) == 130

    @patch("rustlink.cli.commands.install.run", side_effect=OSError("disk full"))
    def test_unexpected_error(self, mock_run):
        assert CLI().run(["--ci"]) == 1
