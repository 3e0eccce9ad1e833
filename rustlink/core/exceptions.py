"""
Centralized exception hierarchy for rustlink.

Every bootstrap failure is fatal and maps to a distinct process exit code so
that the installer stays scriptable. The code travels with the exception as
the ``exit_code`` attribute.
"""

from typing import Optional


# ============================================================================
# Base Exceptions
# ============================================================================


class RustLinkError(Exception):
    """Base exception for all rustlink errors."""

    exit_code: int = 1

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.hint = hint


# ============================================================================
# Platform Exceptions
# ============================================================================


class UnsupportedPlatformError(RustLinkError):
    """Raised when the host operating system is not supported."""

    exit_code = 1

    def __init__(self, os_name: str):
        self.os_name = os_name
        super().__init__(
            f"Detection failed: running unsupported operating system: {os_name}."
        )


# ============================================================================
# Dependency Exceptions
# ============================================================================


class DependencyError(RustLinkError):
    """Base exception for missing prerequisites."""

    exit_code = 2


class MissingSubmoduleError(DependencyError):
    """Raised when the toolchain source directory is missing or empty."""

    def __init__(self, source_dir, reason: str = "empty"):
        self.source_dir = source_dir
        self.reason = reason
        super().__init__(
            f"Detection failed: directory of the toolchain source is {reason}: "
            f"{source_dir}",
            hint="Please update the submodule first: git submodule update --init",
        )


class MissingDependencyError(DependencyError):
    """Raised when the toolchain manager is not installed or not usable."""

    def __init__(self, manager: str, detail: str = ""):
        self.manager = manager
        msg = f"Detection failed: cannot find {manager}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg, hint=f"Please install {manager} first.")


# ============================================================================
# Build Exceptions
# ============================================================================


class BuildFailedError(RustLinkError):
    """Raised when the build driver exits non-zero.

    The driver's own exit code is propagated verbatim.
    """

    def __init__(self, returncode: int, command: Optional[list] = None):
        self.returncode = returncode
        self.command = command or []
        # Negative codes mean the driver was killed by a signal
        self.exit_code = returncode if returncode > 0 else 128 - returncode
        super().__init__(f"Build failed: build driver exited with code {returncode}")


class LinkFailedError(RustLinkError):
    """Raised when the built toolchain cannot be linked into the manager."""

    exit_code = 3


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(RustLinkError):
    """Configuration parsing or validation error."""

    exit_code = 4


class StagingError(ConfigError):
    """Raised when the configuration file cannot be staged."""

    pass


# ============================================================================
# Locking Exceptions
# ============================================================================


class BootstrapLockTimeout(RustLinkError):
    """Raised when another bootstrap holds the source directory lock."""

    exit_code = 5


__all__ = [
    "RustLinkError",
    "UnsupportedPlatformError",
    "DependencyError",
    "MissingSubmoduleError",
    "MissingDependencyError",
    "BuildFailedError",
    "LinkFailedError",
    "ConfigError",
    "StagingError",
    "BootstrapLockTimeout",
]
