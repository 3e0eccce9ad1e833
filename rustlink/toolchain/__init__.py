"""
Toolchain handling for rustlink.

This module provides functionality for:
- Checking and staging the toolchain source tree
- Invoking the toolchain's own build driver
- Probing the toolchain manager and linking built toolchains
"""

from rustlink.toolchain.build import (
    BuildInvocation,
    build_command,
    run_build,
    stage_output_path,
)
from rustlink.toolchain.manager import ProbeResult, ToolchainManager
from rustlink.toolchain.source import check_source_directory, stage_config

__all__ = [
    "BuildInvocation",
    "build_command",
    "run_build",
    "stage_output_path",
    "ProbeResult",
    "ToolchainManager",
    "check_source_directory",
    "stage_config",
]
