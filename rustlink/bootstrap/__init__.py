"""
Toolchain bootstrap pipeline for rustlink.
"""

from .orchestrator import (
    BootstrapOrchestrator,
    BootstrapResult,
    BootstrapState,
    resolve_root,
)

__all__ = [
    "BootstrapOrchestrator",
    "BootstrapResult",
    "BootstrapState",
    "resolve_root",
]
