"""
Install command implementation.

Builds the toolchain from its source submodule and links it into the
toolchain manager. This is what ``rustlink`` runs when no command is given.
"""

import logging
import sys

from rustlink.bootstrap import BootstrapOrchestrator
from rustlink.bootstrap.orchestrator import resolve_root
from rustlink.cli.utils import (
    Color,
    colorize,
    pause,
    print_box,
    print_error,
    print_phase,
    print_success,
    print_warning,
)
from rustlink.core.config import BootstrapConfig, apply_overrides, load_config
from rustlink.core.exceptions import ConfigError

logger = logging.getLogger(__name__)


def build_config(args, root) -> BootstrapConfig:
    """
    Build the effective configuration from settings file and flags.

    Raises:
        ConfigError: If the settings file or a flag value is invalid
    """
    config = load_config(args.config, root)

    stage = getattr(args, "stage", None)
    lock_timeout = getattr(args, "lock_timeout", None)
    for flag, value in (("--stage", stage), ("--lock-timeout", lock_timeout)):
        if value is not None and value < 0:
            raise ConfigError(f"{flag} must not be negative, got {value}")

    return apply_overrides(
        config,
        stage=stage,
        alias=getattr(args, "alias", None),
        build_target=getattr(args, "build_target", None),
        incremental=getattr(args, "incremental", None),
        build_args=getattr(args, "build_args", None),
        lock_timeout=lock_timeout,
    )


def run(args) -> int:
    """
    Run the install command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, the failing step's code otherwise)
    """
    quiet = args.quiet
    non_interactive = args.non_interactive

    root = resolve_root(args.root, BootstrapConfig().config_file)

    try:
        config = build_config(args, root)
    except ConfigError as e:
        print_error(str(e), e.hint)
        pause(non_interactive)
        return e.exit_code

    if not quiet:
        print(
            colorize(
                f"Now building {config.alias} for your toolchain.", Color.PHASE, sys.stdout
            )
        )

    use_lock = not getattr(args, "no_lock", False)
    if not use_lock:
        print_warning("Locking disabled; do not run another bootstrap on this tree")

    orchestrator = BootstrapOrchestrator(
        config,
        root=root,
        use_lock=use_lock,
        announce=(lambda message: None) if quiet else print_phase,
    )
    result = orchestrator.run()

    if result.success:
        logger.debug(f"Bootstrap history: {[s.value for s in result.history]}")
        if not quiet:
            print_success(
                f"Building success: building, installing and linking "
                f"{colorize(config.alias, Color.CYAN, sys.stdout)} finished."
            )
            print_box("Build and install all components successfully.")
    else:
        print_error(str(result.error), result.error.hint)
        logger.debug(f"Bootstrap stopped after: {[s.value for s in result.history]}")

    pause(non_interactive)
    return result.exit_code
