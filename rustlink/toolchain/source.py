"""
Toolchain source tree handling.

Checks that the toolchain source submodule has been fetched and stages the
local build configuration into it.
"""

import logging
import tempfile
from pathlib import Path
from typing import Union

from rustlink.core.exceptions import MissingSubmoduleError, StagingError

logger = logging.getLogger(__name__)

# Name the build driver reads its configuration from
STAGED_CONFIG_NAME = "config.toml"


def is_empty_directory(path: Union[str, Path]) -> bool:
    """
    Check if a directory is empty.

    Returns:
        True if directory exists and is empty
    """
    path = Path(path)

    if not path.is_dir():
        return False

    return not any(path.iterdir())


def check_source_directory(source_dir: Path) -> Path:
    """
    Verify that the toolchain source directory has been populated.

    Args:
        source_dir: Toolchain source directory

    Returns:
        The source directory, for chaining

    Raises:
        MissingSubmoduleError: If the directory is absent, not a directory or empty
    """
    if not source_dir.exists():
        raise MissingSubmoduleError(source_dir, reason="missing")
    if not source_dir.is_dir():
        raise MissingSubmoduleError(source_dir, reason="not a directory")
    if is_empty_directory(source_dir):
        raise MissingSubmoduleError(source_dir, reason="empty")

    logger.debug(f"Toolchain source directory populated: {source_dir}")
    return source_dir


def atomic_write(file_path: Path, content: bytes) -> None:
    """
    Write file atomically using temp file + rename.

    The destination is never left partially written; an existing file is
    replaced in one step.
    """
    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
    )
    temp_path = Path(temp_path_str)

    try:
        with open(temp_fd, "wb") as f:
            f.write(content)
        temp_path.replace(file_path)
    except Exception:
        temp_path.unlink(missing_ok=True)
        raise


def stage_config(config_file: Path, source_dir: Path) -> Path:
    """
    Copy the build configuration into the toolchain source directory.

    The file is always staged as ``config.toml``, whatever its local name.
    An existing staged file is overwritten, so staging is idempotent.

    Args:
        config_file: Local configuration file
        source_dir: Toolchain source directory

    Returns:
        Path of the staged file

    Raises:
        StagingError: If the configuration file is missing or cannot be copied
    """
    if not config_file.is_file():
        raise StagingError(
            f"Configuration file not found: {config_file}",
            hint="Create it next to the toolchain source directory",
        )

    destination = source_dir / STAGED_CONFIG_NAME
    try:
        atomic_write(destination, config_file.read_bytes())
    except OSError as e:
        raise StagingError(f"Could not stage {config_file} into {source_dir}: {e}") from e

    logger.debug(f"Staged {config_file} -> {destination}")
    return destination


__all__ = [
    "STAGED_CONFIG_NAME",
    "is_empty_directory",
    "check_source_directory",
    "atomic_write",
    "stage_config",
]
