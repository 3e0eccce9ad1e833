"""
Doctor command for diagnosing bootstrap issues.

Runs the same checks as the install pipeline, but never stages, builds or
links anything, and reports every problem at once instead of stopping at the
first one.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from rustlink.bootstrap.orchestrator import resolve_root
from rustlink.cli.utils import Color, colorize, print_error
from rustlink.core.config import BootstrapConfig, load_config
from rustlink.core.exceptions import ConfigError, MissingSubmoduleError
from rustlink.core.platform import classify_platform, get_supported_platforms
from rustlink.toolchain.manager import ToolchainManager
from rustlink.toolchain.source import check_source_directory

logger = logging.getLogger(__name__)


@dataclass
class CheckResult:
    """Result of a health check."""

    name: str
    passed: bool
    message: str
    fix_command: Optional[str] = None


class EnvironmentChecker:
    """Check bootstrap prerequisites for a project root."""

    def __init__(
        self,
        config: BootstrapConfig,
        root: Path,
        manager: Optional[ToolchainManager] = None,
    ):
        self.config = config
        self.root = root
        self.manager = manager or ToolchainManager(config.manager)

    def check_platform(self, os_name: Optional[str] = None) -> CheckResult:
        """
        Check that the host operating system is supported.

        Args:
            os_name: OS identifier override (detected if None)
        """
        import platform

        info = classify_platform(os_name if os_name is not None else platform.system())
        if info.is_supported:
            return CheckResult(name="Platform", passed=True, message=str(info))

        return CheckResult(
            name="Platform",
            passed=False,
            message=f"Unsupported operating system: {info.os_name}",
            fix_command="Run on one of: " + ", ".join(get_supported_platforms()),
        )

    def check_source(self) -> CheckResult:
        """Check that the toolchain source submodule is populated."""
        try:
            source_dir = check_source_directory(self.config.source_path(self.root))
        except MissingSubmoduleError as e:
            return CheckResult(
                name="Source Directory",
                passed=False,
                message=str(e),
                fix_command="Run: git submodule update --init",
            )

        return CheckResult(
            name="Source Directory", passed=True, message=f"Populated: {source_dir}"
        )

    def check_config_file(self) -> CheckResult:
        """Check that the build configuration to stage exists."""
        config_path = self.config.config_path(self.root)
        if config_path.is_file():
            return CheckResult(name="Build Config", passed=True, message=str(config_path))

        return CheckResult(
            name="Build Config",
            passed=False,
            message=f"Configuration file not found: {config_path}",
            fix_command=f"Create {self.config.config_file} in {self.root}",
        )

    def check_manager(self) -> CheckResult:
        """Check that the toolchain manager is installed."""
        result = self.manager.probe(self.config.probe_marker)
        if result.installed:
            return CheckResult(
                name="Toolchain Manager",
                passed=True,
                message=f"{self.config.manager} is installed",
            )

        return CheckResult(
            name="Toolchain Manager",
            passed=False,
            message=result.detail or f"{self.config.manager} not usable",
            fix_command=f"Install {self.config.manager} and make sure it is in PATH",
        )

    def check_build_driver(self) -> CheckResult:
        """Check that the source tree ships the build driver."""
        driver = self.config.source_path(self.root) / self.config.build_driver
        if driver.is_file():
            return CheckResult(name="Build Driver", passed=True, message=str(driver))

        return CheckResult(
            name="Build Driver",
            passed=False,
            message=f"Build driver not found: {driver}",
            fix_command="Run: git submodule update --init",
        )

    def run_all_checks(self, os_name: Optional[str] = None) -> List[CheckResult]:
        return [
            self.check_platform(os_name),
            self.check_source(),
            self.check_config_file(),
            self.check_manager(),
            self.check_build_driver(),
        ]


def run(args) -> int:
    """
    Run doctor command.

    Args:
        args: Parsed arguments from argparse

    Returns:
        Exit code (0 if every check passed, 1 otherwise)
    """
    quiet = args.quiet
    root = resolve_root(args.root, BootstrapConfig().config_file)

    try:
        config = load_config(args.config, root)
    except ConfigError as e:
        print_error(str(e), e.hint)
        return e.exit_code

    if not quiet:
        print(f"Running rustlink diagnostics in {root}\n")

    checks = EnvironmentChecker(config, root).run_all_checks()

    failed = 0
    for result in checks:
        if result.passed:
            if not quiet:
                print(f"{colorize('[OK]', Color.GREEN)} {result.name}: {result.message}")
            logger.debug(f"Check passed: {result.name}")
            continue

        failed += 1
        print(f"{colorize('[FAIL]', Color.RED)} {result.name}: {result.message}")
        if result.fix_command:
            print(f"   Fix: {result.fix_command}")
        logger.debug(f"Check failed: {result.name}")

    if not quiet:
        print(f"\nSummary: {len(checks) - failed} passed, {failed} failed")

    if failed:
        return 1

    if not quiet:
        print(colorize("Your environment is ready to bootstrap.", Color.GREEN))
    return 0
