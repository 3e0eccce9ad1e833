"""
Tests for doctor command.
"""

import pytest
from unittest.mock import Mock, patch

from rustlink.cli.commands.doctor import CheckResult, EnvironmentChecker
from rustlink.cli.parser import CLI
from rustlink.core.config import BootstrapConfig


class TestEnvironmentChecker:
    """Test EnvironmentChecker class."""

    def test_check_platform_supported(self, project_root):
        result = EnvironmentChecker(BootstrapConfig(), project_root).check_platform("Darwin")

        assert result.passed is True
        assert "x86_64-apple-darwin" in result.message

    def test_check_platform_unsupported(self, project_root):
        result = EnvironmentChecker(BootstrapConfig(), project_root).check_platform("Plan9")

        assert result.passed is False
        assert "Plan9" in result.message
        assert "linux-x64" in result.fix_command

    def test_check_source_populated(self, project_root):
        assert EnvironmentChecker(BootstrapConfig(), project_root).check_source().passed

    def test_check_source_empty(self, tmp_path):
        (tmp_path / "rust").mkdir()

        result = EnvironmentChecker(BootstrapConfig(), tmp_path).check_source()

        assert result.passed is False
        assert "submodule" in result.fix_command

    def test_check_config_file(self, project_root):
        checker = EnvironmentChecker(BootstrapConfig(), project_root)
        assert checker.check_config_file().passed is True

        (project_root / "config.toml").unlink()
        result = checker.check_config_file()

        assert result.passed is False
        assert "config.toml" in result.message

    @patch("subprocess.run")
    def test_check_manager(self, mock_run, project_root):
        mock_run.return_value = Mock(returncode=0, stdout="rustup home: ~/.rustup", stderr="")

        result = EnvironmentChecker(BootstrapConfig(), project_root).check_manager()

        assert result == CheckResult("Toolchain Manager", True, "rustup is installed")

    @patch("subprocess.run", side_effect=FileNotFoundError())
    def test_check_manager_missing(self, mock_run, project_root):
        result = EnvironmentChecker(BootstrapConfig(), project_root).check_manager()

        assert result.passed is False
        assert "not found in PATH" in result.message

    def test_check_build_driver(self, project_root):
        checker = EnvironmentChecker(BootstrapConfig(), project_root)
        assert checker.check_build_driver().passed is True

        (project_root / "rust" / "x.py").unlink()
        assert checker.check_build_driver().passed is False


class TestDoctorCommand:
    """Test the doctor command end to end."""

    def test_healthy(self, project_root, fake_runner, capsys):
        with patch("platform.system", return_value="Linux"), patch(
            "subprocess.run", side_effect=fake_runner
        ):
            code = CLI().run(["--root", str(project_root), "doctor"])

        assert code == 0
        out = capsys.readouterr().out
        assert "5 passed, 0 failed" in out
        # Doctor never stages, builds or links
        assert fake_runner.calls == [["rustup", "show"]]
        assert not (project_root / "rust" / "config.toml").exists()

    def test_reports_all_failures(self, tmp_path, capsys):
        with patch("platform.system", return_value="Plan9"), patch(
            "subprocess.run", side_effect=FileNotFoundError()
        ):
            code = CLI().run(["--root", str(tmp_path), "doctor"])

        assert code == 1
        out = capsys.readouterr().out
        assert "0 passed, 5 failed" in out
        assert "[FAIL] Platform" in out
        assert "Fix: Run: git submodule update --init" in out

    def test_invalid_settings(self, project_root, capsys):
        (project_root / "rustlink.yaml").write_text("stage: two\n")

        code = CLI().run(["--root", str(project_root), "doctor"])

        assert code == 4
        assert "stage must be an integer" in capsys.readouterr().err
