"""YAML configuration for rustlink.

Settings are layered: built-in defaults, then an optional ``rustlink.yaml``
file, then command-line overrides. The resulting ``BootstrapConfig`` is passed
explicitly to every bootstrap step.
"""

import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from rustlink.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "rustlink.yaml"


@dataclass
class BootstrapConfig:
    """Complete bootstrap configuration."""

    source_dir: str = "rust"  # relative to the project root
    config_file: str = "config.toml"  # staged into source_dir
    manager: str = "rustup"
    probe_marker: str = "rustup"
    build_driver: str = "x.py"
    build_target: str = "compiler/rustc"
    stage: int = 2
    incremental: bool = True
    build_args: List[str] = field(default_factory=list)
    alias: str = "rap-rust"
    lock_timeout: float = 10

    def source_path(self, root: Path) -> Path:
        """Absolute toolchain source directory for a project root."""
        return (root / self.source_dir).resolve()

    def config_path(self, root: Path) -> Path:
        """Absolute path of the configuration file to stage."""
        return (root / self.config_file).resolve()


def _field_types() -> Dict[str, Any]:
    return {f.name: f.type for f in fields(BootstrapConfig)}


def _validate_value(key: str, value: Any, expected: Any) -> Any:
    """Check a single YAML value against the field type."""
    if expected is bool:
        if not isinstance(value, bool):
            raise ConfigError(f"{key} must be true or false, got {value!r}")
        return value

    if expected is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"{key} must be an integer, got {value!r}")
        if value < 0:
            raise ConfigError(f"{key} must not be negative, got {value}")
        return value

    if expected is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"{key} must be a number, got {value!r}")
        if value < 0:
            raise ConfigError(f"{key} must not be negative, got {value}")
        return float(value)

    if expected == List[str]:
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigError(f"{key} must be a list of strings")
        return list(value)

    if not isinstance(value, str) or not value:
        raise ConfigError(f"{key} must be a non-empty string, got {value!r}")
    return value


def parse_config_data(data: Dict[str, Any]) -> BootstrapConfig:
    """
    Build a configuration from already loaded YAML data.

    Raises:
        ConfigError: On unknown keys or wrongly typed values
    """
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    types = _field_types()
    unknown = sorted(set(data) - set(types))
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    values = {key: _validate_value(key, value, types[key]) for key, value in data.items()}
    return BootstrapConfig(**values)


def load_config(config_path: Optional[Path], root: Path) -> BootstrapConfig:
    """
    Load configuration for a project root.

    Args:
        config_path: Explicit settings file (must exist), or None
        root: Project root; ``rustlink.yaml`` there is used when present

    Returns:
        Parsed configuration (defaults if no file is found)

    Raises:
        ConfigError: If the file is missing, unreadable or invalid
    """
    if config_path is None:
        candidate = root / DEFAULT_CONFIG_NAME
        if not candidate.exists():
            logger.debug(f"No {DEFAULT_CONFIG_NAME} in {root}, using defaults")
            return BootstrapConfig()
        config_path = candidate
    elif not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    logger.debug(f"Loading configuration from {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e

    if data is None:
        return BootstrapConfig()

    return parse_config_data(data)


def apply_overrides(config: BootstrapConfig, **overrides) -> BootstrapConfig:
    """
    Return a copy of ``config`` with the non-None overrides applied.

    Example:
        >>> apply_overrides(BootstrapConfig(), stage=1, alias=None).stage
        1
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    types = _field_types()
    unknown = sorted(set(changes) - set(types))
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
    return replace(config, **changes)


__all__ = [
    "BootstrapConfig",
    "DEFAULT_CONFIG_NAME",
    "load_config",
    "parse_config_data",
    "apply_overrides",
]
