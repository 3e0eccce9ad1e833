"""
Platform detection for rustlink.

This module maps the host operating system identifier (as reported by
``uname -s``) to the platform identifier and host triple used to locate the
toolchain build output.

Features:
- Operating system detection (Linux, macOS, FreeBSD)
- Host triple selection for the build output directory
- Canonical platform string generation (e.g., 'linux-x64', 'macos-x64')
- Platform validation and support checking
- Detection caching (one detection per process)

Usage:
    from rustlink.core.platform import detect_platform, is_supported_platform

    platform_info = detect_platform()
    print(f"Platform: {platform_info.platform_string()}")
    print(f"Host triple: {platform_info.host_triple}")
"""

import functools
import platform
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from rustlink.core.exceptions import UnsupportedPlatformError


class PlatformId(Enum):
    """Platforms a toolchain can be bootstrapped on."""

    LINUX_X64 = "linux-x64"
    MACOS_X64 = "macos-x64"
    FREEBSD_X64 = "freebsd-x64"
    UNSUPPORTED = "unsupported"


# os identifier -> (platform id, host triple, display name)
_PLATFORM_TABLE = {
    "Linux": (PlatformId.LINUX_X64, "x86_64-unknown-linux-gnu", "Linux"),
    "Darwin": (PlatformId.MACOS_X64, "x86_64-apple-darwin", "Macintosh"),
    "FreeBSD": (PlatformId.FREEBSD_X64, "x86_64-unknown-freebsd", "FreeBSD"),
}


@dataclass(frozen=True)
class PlatformInfo:
    """
    Detected platform information.

    Attributes:
        os_name: Raw OS identifier ('Linux', 'Darwin', 'FreeBSD', ...)
        platform_id: Mapped platform identifier
        host_triple: Host triple used for build output paths (empty if unsupported)
        display_name: Human readable OS name
    """

    os_name: str
    platform_id: PlatformId
    host_triple: str = ""
    display_name: str = ""

    def platform_string(self) -> str:
        """
        Get canonical platform string.

        Example:
            >>> PlatformInfo('Linux', PlatformId.LINUX_X64).platform_string()
            'linux-x64'
        """
        return self.platform_id.value

    @property
    def is_supported(self) -> bool:
        return self.platform_id is not PlatformId.UNSUPPORTED

    def __str__(self) -> str:
        if not self.is_supported:
            return f"{self.os_name} (unsupported)"
        return f"{self.display_name} ({self.host_triple})"


def classify_platform(os_name: str) -> PlatformInfo:
    """
    Map an OS identifier to platform information.

    Unknown identifiers map to ``PlatformId.UNSUPPORTED`` rather than raising,
    so callers can decide how to report them.

    Args:
        os_name: OS identifier as reported by ``platform.system()``

    Returns:
        PlatformInfo for the identifier
    """
    entry = _PLATFORM_TABLE.get(os_name)
    if entry is None:
        return PlatformInfo(os_name=os_name, platform_id=PlatformId.UNSUPPORTED)

    platform_id, triple, display_name = entry
    return PlatformInfo(
        os_name=os_name,
        platform_id=platform_id,
        host_triple=triple,
        display_name=display_name,
    )


@functools.lru_cache(maxsize=1)
def _detect_current() -> PlatformInfo:
    return classify_platform(platform.system())


def detect_platform(os_name: Optional[str] = None) -> PlatformInfo:
    """
    Detect the host platform.

    Detection of the running host is cached; it only runs once per process.

    Args:
        os_name: OS identifier to classify instead of the running host

    Returns:
        PlatformInfo for a supported platform

    Raises:
        UnsupportedPlatformError: If the OS identifier is not supported
    """
    info = classify_platform(os_name) if os_name is not None else _detect_current()
    if not info.is_supported:
        raise UnsupportedPlatformError(info.os_name)
    return info


def is_supported_platform(info: Optional[PlatformInfo] = None) -> bool:
    """
    Check if platform is supported by rustlink.

    Args:
        info: PlatformInfo to check. If None, detects current platform.
    """
    if info is None:
        info = _detect_current()
    return info.is_supported


def get_supported_platforms() -> list[str]:
    """Get list of all supported platform strings."""
    return [platform_id.value for platform_id, _, _ in _PLATFORM_TABLE.values()]


def clear_platform_cache():
    """
    Clear the platform detection cache.

    This forces the next call to detect_platform() to re-detect.
    """
    _detect_current.cache_clear()


__all__ = [
    "PlatformId",
    "PlatformInfo",
    "classify_platform",
    "detect_platform",
    "is_supported_platform",
    "get_supported_platforms",
    "clear_platform_cache",
]
