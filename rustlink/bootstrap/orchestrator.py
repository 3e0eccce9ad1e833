"""
Bootstrap orchestrator.

Runs the toolchain bootstrap as a linear pipeline of hard gates:

    DETECTING -> CHECKING_DEPS -> STAGING_CONFIG -> BUILDING -> LINKING -> DONE

Any failing step moves straight to FAILED and stops the pipeline. Side effects
of steps that already ran (such as a staged configuration file) are left in
place.

Usage:
    from rustlink.bootstrap import BootstrapOrchestrator
    from rustlink.core.config import BootstrapConfig

    result = BootstrapOrchestrator(BootstrapConfig(), root=Path("/src/rap")).run()
    sys.exit(result.exit_code)
"""

import logging
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional

from rustlink.core.config import BootstrapConfig
from rustlink.core.exceptions import RustLinkError
from rustlink.core.locking import LockManager, no_lock
from rustlink.core.platform import PlatformInfo, detect_platform
from rustlink.toolchain.build import (
    BuildInvocation,
    build_command,
    run_build,
    stage_output_path,
)
from rustlink.toolchain.manager import ToolchainManager
from rustlink.toolchain.source import check_source_directory, stage_config

logger = logging.getLogger(__name__)


class BootstrapState(Enum):
    """States of the bootstrap pipeline."""

    DETECTING = "detecting"
    CHECKING_DEPS = "checking-deps"
    STAGING_CONFIG = "staging-config"
    BUILDING = "building"
    LINKING = "linking"
    DONE = "done"
    FAILED = "failed"


_ORDER = [
    BootstrapState.DETECTING,
    BootstrapState.CHECKING_DEPS,
    BootstrapState.STAGING_CONFIG,
    BootstrapState.BUILDING,
    BootstrapState.LINKING,
    BootstrapState.DONE,
]


@dataclass
class BootstrapResult:
    """Final outcome of a bootstrap run."""

    state: BootstrapState
    exit_code: int
    history: List[BootstrapState] = field(default_factory=list)
    error: Optional[RustLinkError] = None
    platform: Optional[PlatformInfo] = None
    root: Optional[Path] = None
    build: Optional[BuildInvocation] = None

    @property
    def success(self) -> bool:
        return self.state is BootstrapState.DONE


def resolve_root(
    explicit: Optional[Path] = None,
    config_file: str = "config.toml",
    entry_script: Optional[str] = None,
) -> Path:
    """
    Locate the project root independently of how rustlink was started.

    Resolution order:
    1. ``explicit`` if given
    2. directory of the entry script, when it holds ``config_file``
    3. current working directory

    Returns:
        Absolute, symlink-resolved path
    """
    if explicit is not None:
        return Path(explicit).expanduser().resolve()

    if entry_script is None:
        entry_script = sys.argv[0] if sys.argv and sys.argv[0] else None

    if entry_script:
        script_dir = Path(entry_script).resolve().parent
        if (script_dir / config_file).is_file():
            logger.debug(f"Project root located from entry script: {script_dir}")
            return script_dir

    return Path.cwd().resolve()


class BootstrapOrchestrator:
    """
    Sequences the bootstrap steps.

    All inputs are passed in explicitly; nothing is read from or written to
    the process environment.
    """

    def __init__(
        self,
        config: BootstrapConfig,
        root: Optional[Path] = None,
        manager: Optional[ToolchainManager] = None,
        lock_manager: Optional[LockManager] = None,
        use_lock: bool = True,
        os_name: Optional[str] = None,
        announce: Optional[Callable[[str], None]] = None,
        entry_script: Optional[str] = None,
    ):
        """
        Initialize orchestrator.

        Args:
            config: Bootstrap configuration
            root: Explicit project root (self-located if None)
            manager: Toolchain manager wrapper (built from config if None)
            lock_manager: Lock manager (created for the root if None)
            use_lock: Serialize concurrent bootstraps with a file lock
            os_name: OS identifier override (detected if None)
            announce: Callback receiving phase headings
            entry_script: Entry script path used for self-location
        """
        self.config = config
        self.root_hint = root
        self.manager = manager or ToolchainManager(config.manager)
        self.lock_manager = lock_manager
        self.use_lock = use_lock
        self.os_name = os_name
        self.announce = announce or logger.info
        self.entry_script = entry_script

        self.state = BootstrapState.DETECTING
        self.history: List[BootstrapState] = [BootstrapState.DETECTING]

    def _transition(self, new_state: BootstrapState) -> None:
        if new_state is not BootstrapState.FAILED:
            if _ORDER.index(new_state) <= _ORDER.index(self.state):
                raise RuntimeError(
                    f"Invalid bootstrap transition: {self.state.value} -> {new_state.value}"
                )
        logger.debug(f"Bootstrap state: {self.state.value} -> {new_state.value}")
        self.state = new_state
        self.history.append(new_state)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def detect(self) -> PlatformInfo:
        """Step 1: map the host OS to a platform identifier."""
        self.announce("PHASE1: Checking operating system.")
        info = detect_platform(self.os_name)
        logger.info(f"Detection success: running on {info}.")
        return info

    def locate(self) -> Path:
        """Step 2: resolve the project root."""
        return resolve_root(self.root_hint, self.config.config_file, self.entry_script)

    def check_dependencies(self, root: Path) -> Path:
        """Steps 3 and 4: source directory first, then the toolchain manager."""
        self.announce(f"PHASE2: Checking build dependencies {self.config.manager}.")
        logger.info(f"Project root: {root}")
        source_dir = check_source_directory(self.config.source_path(root))
        self.manager.require(self.config.probe_marker)
        logger.info(
            f"Detection success: {self.config.manager} has been linked into "
            f"{self.config.manager} toolchain."
        )
        return source_dir

    def stage(self, root: Path, source_dir: Path) -> Path:
        """Step 5: copy the configuration file into the source directory."""
        return stage_config(self.config.config_path(root), source_dir)

    def build(self, invocation: BuildInvocation) -> BuildInvocation:
        """Step 6: run the build driver."""
        logger.info(f"Running {invocation}")
        return run_build(invocation)

    def link(self, source_dir: Path, info: PlatformInfo) -> Path:
        """Step 7: register the build output with the toolchain manager."""
        output = stage_output_path(source_dir, info.host_triple, self.config.stage)
        self.manager.link(self.config.alias, output)
        return output

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _lock(self, root: Path):
        if not self.use_lock:
            return no_lock()
        lock_manager = self.lock_manager or LockManager(root)
        return lock_manager.bootstrap_lock(timeout=self.config.lock_timeout)

    def execute(self, result: BootstrapResult) -> None:
        """
        Run every step, filling ``result`` as it goes.

        Raises:
            RustLinkError: From the first failing step
        """
        result.platform = self.detect()
        result.root = self.locate()

        self._transition(BootstrapState.CHECKING_DEPS)
        source_dir = self.check_dependencies(result.root)

        self._transition(BootstrapState.STAGING_CONFIG)
        self.announce(
            f"PHASE3: Building, installing and linking {self.config.alias} "
            f"into {self.config.manager}."
        )
        with self._lock(result.root):
            self.stage(result.root, source_dir)

            self._transition(BootstrapState.BUILDING)
            result.build = build_command(self.config, source_dir)
            self.build(result.build)

            self._transition(BootstrapState.LINKING)
            self.link(source_dir, result.platform)

        self._transition(BootstrapState.DONE)

    def run(self) -> BootstrapResult:
        """
        Run the bootstrap pipeline.

        Returns:
            BootstrapResult with exit code 0 on success, or the failing
            error's exit code
        """
        result = BootstrapResult(state=self.state, exit_code=0, history=self.history)

        try:
            self.execute(result)
        except RustLinkError as e:
            logger.debug(f"Bootstrap failed in state {self.state.value}: {e}")
            self._transition(BootstrapState.FAILED)
            result.error = e
            result.exit_code = e.exit_code

        result.state = self.state
        return result


__all__ = [
    "BootstrapState",
    "BootstrapResult",
    "BootstrapOrchestrator",
    "resolve_root",
]
