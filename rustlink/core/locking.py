"""
Concurrent access control for rustlink.

Two bootstraps running against the same toolchain source directory would write
the staged configuration and the build tree at the same time. This module
provides a cross-process file lock to serialize them.

Usage:
    from rustlink.core.locking import LockManager

    lock_manager = LockManager(root)
    with lock_manager.bootstrap_lock(timeout=10):
        # Stage configuration, build and link
        pass
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from filelock import FileLock, Timeout as LockTimeout

from rustlink.core.exceptions import BootstrapLockTimeout

logger = logging.getLogger(__name__)

STATE_DIR_NAME = ".rustlink"


class LockManager:
    """
    Manages the bootstrap lock of a project.

    Uses file-based locking with the `filelock` library for cross-platform
    compatibility and automatic cleanup on process death.

    Attributes:
        lock_dir: Directory where lock files are stored
    """

    def __init__(self, root: Path, lock_dir: Optional[Path] = None):
        """
        Initialize lock manager.

        The lock directory is created lazily, on first acquisition.

        Args:
            root: Project root directory
            lock_dir: Directory for lock files (default: <root>/.rustlink)
        """
        self.lock_dir = Path(lock_dir) if lock_dir else Path(root) / STATE_DIR_NAME

    @property
    def lock_path(self) -> Path:
        return self.lock_dir / "bootstrap.lock"

    @contextmanager
    def bootstrap_lock(self, timeout: float = 10):
        """
        Acquire the bootstrap lock.

        Args:
            timeout: Maximum wait time in seconds

        Raises:
            BootstrapLockTimeout: If lock can't be acquired within timeout
        """
        self.lock_dir.mkdir(parents=True, exist_ok=True)
        lock = FileLock(self.lock_path, timeout=timeout)

        try:
            with lock:
                logger.debug(f"Acquired bootstrap lock: {self.lock_path}")
                yield
                logger.debug(f"Released bootstrap lock: {self.lock_path}")
        except LockTimeout as e:
            raise BootstrapLockTimeout(
                f"Could not acquire bootstrap lock after {timeout}s. "
                "Another rustlink process may be building this toolchain.",
                hint=f"Wait for it to finish or remove {self.lock_path}",
            ) from e


@contextmanager
def no_lock():
    """Stand-in context used when locking is disabled."""
    yield


__all__ = [
    "LockManager",
    "LockTimeout",
    "no_lock",
    "STATE_DIR_NAME",
]
