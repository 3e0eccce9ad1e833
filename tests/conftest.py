"""
Pytest configuration and shared fixtures for rustlink tests.
"""

from pathlib import Path
from typing import List
from unittest.mock import Mock

import pytest

from rustlink.cli import utils
from rustlink.core.platform import clear_platform_cache

HOST_TRIPLE = "x86_64-unknown-linux-gnu"


class FakeRunner:
    """
    Stand-in for ``subprocess.run`` that answers like rustup and x.py.

    Records every command line it receives in ``calls``.
    """

    def __init__(self, source_dir: Path):
        self.source_dir = source_dir
        self.calls: List[list] = []
        self.show_output = "Default host: x86_64-unknown-linux-gnu\nrustup home:  /home/dev/.rustup\n"
        self.show_returncode = 0
        self.build_returncode = 0
        self.link_returncode = 0
        self.build_creates_output = True
        self.build_error = None
        self.stage = 2

    def __call__(self, argv, *args, **kwargs):
        self.calls.append(list(argv))

        if argv[:2] == ["rustup", "show"]:
            return Mock(returncode=self.show_returncode, stdout=self.show_output, stderr="")

        if argv[0].endswith("x.py"):
            if self.build_error is not None:
                raise self.build_error
            if self.build_returncode == 0 and self.build_creates_output:
                output = self.source_dir / "build" / HOST_TRIPLE / f"stage{self.stage}"
                output.mkdir(parents=True, exist_ok=True)
            return Mock(returncode=self.build_returncode)

        if argv[:3] == ["rustup", "toolchain", "link"]:
            stderr = "" if self.link_returncode == 0 else "error: invalid toolchain path"
            return Mock(returncode=self.link_returncode, stdout="", stderr=stderr)

        raise AssertionError(f"Unexpected command: {argv}")


@pytest.fixture(autouse=True)
def reset_caches():
    """Reset module-level caches and color state between tests."""
    clear_platform_cache()
    utils.set_color_enabled(False)

    yield

    clear_platform_cache()
    utils.set_color_enabled(None)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Create a project with a populated toolchain source submodule."""
    root = tmp_path / "rap"
    source = root / "rust"
    source.mkdir(parents=True)

    (source / "x.py").write_text("#!/usr/bin/env python3\n")
    (source / "README.md").write_text("rust source\n")
    (root / "config.toml").write_text('profile = "compiler"\n[rust]\nchannel = "nightly"\n')

    return root


@pytest.fixture
def fake_runner(project_root: Path) -> FakeRunner:
    """Command runner for a project whose tools all succeed."""
    return FakeRunner(project_root / "rust")
