"""
Tests for source directory checks and configuration staging.
"""

import pytest

from rustlink.core.exceptions import MissingSubmoduleError, StagingError
from rustlink.toolchain.source import (
    check_source_directory,
    is_empty_directory,
    stage_config,
)


class TestCheckSourceDirectory:
    """Tests for check_source_directory()."""

    def test_populated(self, project_root):
        source = project_root / "rust"
        assert check_source_directory(source) == source

    def test_missing(self, tmp_path):
        with pytest.raises(MissingSubmoduleError) as exc_info:
            check_source_directory(tmp_path / "rust")

        assert exc_info.value.reason == "missing"
        assert exc_info.value.exit_code == 2

    def test_empty(self, tmp_path):
        """Test an empty (unfetched) submodule directory is rejected."""
        (tmp_path / "rust").mkdir()

        with pytest.raises(MissingSubmoduleError) as exc_info:
            check_source_directory(tmp_path / "rust")

        assert exc_info.value.reason == "empty"

    def test_not_a_directory(self, tmp_path):
        (tmp_path / "rust").write_text("not a directory")

        with pytest.raises(MissingSubmoduleError) as exc_info:
            check_source_directory(tmp_path / "rust")

        assert exc_info.value.reason == "not a directory"

    def test_hidden_entry_counts(self, tmp_path):
        """Test a directory holding only a .git file is populated."""
        (tmp_path / "rust").mkdir()
        (tmp_path / "rust" / ".git").write_text("gitdir: ../.git/modules/rust\n")

        check_source_directory(tmp_path / "rust")


class TestIsEmptyDirectory:
    def test_empty(self, tmp_path):
        assert is_empty_directory(tmp_path) is True

    def test_not_empty(self, tmp_path):
        (tmp_path / "file").touch()
        assert is_empty_directory(tmp_path) is False

    def test_missing(self, tmp_path):
        assert is_empty_directory(tmp_path / "missing") is False


class TestStageConfig:
    """Tests for stage_config()."""

    def test_copies_into_source(self, project_root):
        source = project_root / "rust"

        staged = stage_config(project_root / "config.toml", source)

        assert staged == source / "config.toml"
        assert staged.read_text() == (project_root / "config.toml").read_text()

    def test_staged_under_build_driver_name(self, project_root):
        """Test a differently named local file is staged as config.toml."""
        local = project_root / "configs" / "rap.toml"
        local.parent.mkdir()
        local.write_text('profile = "library"\n')
        source = project_root / "rust"

        staged = stage_config(local, source)

        assert staged == source / "config.toml"
        assert staged.read_text() == 'profile = "library"\n'
        assert not (source / "rap.toml").exists()

    def test_overwrites_existing(self, project_root):
        source = project_root / "rust"
        (source / "config.toml").write_text("stale = true\n")

        stage_config(project_root / "config.toml", source)

        assert (source / "config.toml").read_text() == (
            project_root / "config.toml"
        ).read_text()

    def test_idempotent(self, project_root):
        """Test staging twice leaves the same content as staging once."""
        source = project_root / "rust"

        stage_config(project_root / "config.toml", source)
        once = (source / "config.toml").read_bytes()
        stage_config(project_root / "config.toml", source)
        twice = (source / "config.toml").read_bytes()

        assert once == twice
        assert sorted(p.name for p in source.iterdir()) == [
            "README.md",
            "config.toml",
            "x.py",
        ]

    def test_missing_config_file(self, project_root):
        (project_root / "config.toml").unlink()

        with pytest.raises(StagingError) as exc_info:
            stage_config(project_root / "config.toml", project_root / "rust")

        assert exc_info.value.exit_code == 4
        assert not (project_root / "rust" / "config.toml").exists()
