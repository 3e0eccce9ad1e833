"""
Delegated toolchain build.

The build driver of the toolchain source tree is invoked as a child process
with the source directory as its working directory. Its output streams go
straight to the terminal and are never parsed; only the exit status matters.
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from rustlink.core.config import BootstrapConfig
from rustlink.core.exceptions import BuildFailedError

logger = logging.getLogger(__name__)


@dataclass
class BuildInvocation:
    """A build driver command line and, once run, its exit status."""

    argv: List[str]
    cwd: Path
    returncode: Optional[int] = None

    def __str__(self) -> str:
        return " ".join(self.argv)


def build_command(config: BootstrapConfig, source_dir: Path) -> BuildInvocation:
    """
    Construct the build driver invocation.

    Example:
        >>> str(build_command(BootstrapConfig(), Path("/src/rust")))
        './x.py build compiler/rustc -i --stage 2'
    """
    argv = [f"./{config.build_driver}", "build", config.build_target]
    if config.incremental:
        argv.append("-i")
    argv.extend(["--stage", str(config.stage)])
    argv.extend(config.build_args)
    return BuildInvocation(argv=argv, cwd=source_dir)


def stage_output_path(source_dir: Path, host_triple: str, stage: int) -> Path:
    """Directory holding the toolchain produced by a given stage."""
    return source_dir / "build" / host_triple / f"stage{stage}"


def run_build(invocation: BuildInvocation) -> BuildInvocation:
    """
    Run the build driver and wait for it to exit.

    There is no timeout; a toolchain build may take hours.

    Raises:
        BuildFailedError: If the driver is missing or exits non-zero
    """
    logger.debug(f"Running build driver in {invocation.cwd}: {invocation}")

    try:
        result = subprocess.run(invocation.argv, cwd=invocation.cwd)
    except FileNotFoundError as e:
        # Same convention as a shell that cannot find the command
        invocation.returncode = 127
        raise BuildFailedError(127, invocation.argv) from e
    except OSError as e:
        # Not executable, or not a valid executable format
        logger.debug(f"Could not execute build driver: {e}")
        invocation.returncode = 126
        raise BuildFailedError(126, invocation.argv) from e

    invocation.returncode = result.returncode
    if result.returncode != 0:
        raise BuildFailedError(result.returncode, invocation.argv)

    logger.debug("Build driver finished successfully")
    return invocation


__all__ = [
    "BuildInvocation",
    "build_command",
    "stage_output_path",
    "run_build",
]
