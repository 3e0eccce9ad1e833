"""
Core functionality for rustlink.

This package contains the foundational modules that other components depend on.
"""

from .config import (
    BootstrapConfig,
    load_config,
    apply_overrides,
)

from .locking import (
    LockManager,
    LockTimeout,
)

from .platform import (
    PlatformId,
    PlatformInfo,
    classify_platform,
    detect_platform,
    is_supported_platform,
    get_supported_platforms,
    clear_platform_cache,
)

from .exceptions import (
    RustLinkError,
    UnsupportedPlatformError,
    DependencyError,
    MissingSubmoduleError,
    MissingDependencyError,
    BuildFailedError,
    LinkFailedError,
    ConfigError,
    StagingError,
    BootstrapLockTimeout,
)

__all__ = [
    "BootstrapConfig",
    "load_config",
    "apply_overrides",
    "LockManager",
    "LockTimeout",
    "PlatformId",
    "PlatformInfo",
    "classify_platform",
    "detect_platform",
    "is_supported_platform",
    "get_supported_platforms",
    "clear_platform_cache",
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
