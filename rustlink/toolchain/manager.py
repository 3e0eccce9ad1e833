"""
rustlink/toolchain/manager.py

Toolchain manager integration.

The toolchain manager (rustup by default) is an opaque external tool. It is
queried once to confirm it is installed, and once more to register the
freshly built toolchain under an alias.
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List

from rustlink.core.exceptions import LinkFailedError, MissingDependencyError

logger = logging.getLogger(__name__)


@dataclass
class ProbeResult:
    """Outcome of the toolchain manager status query."""

    installed: bool
    command: List[str]
    output: str = ""
    detail: str = ""


class ToolchainManager:
    """Runs the toolchain manager's status and link commands."""

    def __init__(self, executable: str = "rustup", probe_timeout: int = 60):
        """
        Initialize manager wrapper.

        Args:
            executable: Toolchain manager executable name or path
            probe_timeout: Seconds to wait for the status query
        """
        self.executable = executable
        self.probe_timeout = probe_timeout

    def status_command(self) -> List[str]:
        return [self.executable, "show"]

    def link_command(self, alias: str, toolchain_path: Path) -> List[str]:
        return [self.executable, "toolchain", "link", alias, str(toolchain_path)]

    def probe(self, marker: str) -> ProbeResult:
        """
        Query the manager and look for ``marker`` in its output.

        Never raises for a missing or broken manager; inspect the result.
        """
        command = self.status_command()
        logger.debug(f"Probing toolchain manager: {' '.join(command)}")

        try:
            result = subprocess.run(
                command, capture_output=True, text=True, timeout=self.probe_timeout
            )
        except FileNotFoundError:
            return ProbeResult(False, command, detail=f"{self.executable} not found in PATH")
        except subprocess.TimeoutExpired:
            return ProbeResult(False, command, detail=f"{self.executable} timed out")

        output = (result.stdout or "") + (result.stderr or "")

        if result.returncode != 0:
            # Only the marker decides; rustup show exits non-zero without an active toolchain
            logger.debug(f"'{' '.join(command)}' exited with code {result.returncode}")

        if marker not in output:
            return ProbeResult(
                False,
                command,
                output=output,
                detail=f"'{marker}' not reported by '{' '.join(command)}'",
            )

        return ProbeResult(True, command, output=output)

    def require(self, marker: str) -> ProbeResult:
        """
        Probe the manager and fail if it is not usable.

        Raises:
            MissingDependencyError: If the probe fails
        """
        result = self.probe(marker)
        if not result.installed:
            raise MissingDependencyError(self.executable, result.detail)
        logger.debug(f"{self.executable} is installed")
        return result

    def link(self, alias: str, toolchain_path: Path) -> None:
        """
        Register a built toolchain under ``alias``.

        Raises:
            LinkFailedError: If the toolchain output is missing or the command fails
        """
        if not toolchain_path.is_dir():
            raise LinkFailedError(
                f"Linking failed: toolchain output not found: {toolchain_path}",
                hint="Check the build log; the build did not produce this stage",
            )

        command = self.link_command(alias, toolchain_path)
        logger.debug(f"Linking toolchain: {' '.join(command)}")

        try:
            result = subprocess.run(command, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise LinkFailedError(
                f"Linking failed: {self.executable} not found in PATH"
            ) from e

        if result.returncode != 0:
            detail = (result.stderr or result.stdout or "").strip()
            msg = f"Linking failed: '{' '.join(command)}' exited with code {result.returncode}"
            if detail:
                msg += f": {detail}"
            raise LinkFailedError(msg)

        logger.info(f"Linked toolchain {alias} -> {toolchain_path}")


__all__ = [
    "ProbeResult",
    "ToolchainManager",
]
