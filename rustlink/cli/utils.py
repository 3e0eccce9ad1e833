"""
Shared utilities for CLI commands.

Provides colored terminal output and the optional "press any key" pause used
across rustlink commands.
"""

import logging
import os
import sys
from typing import Optional

logger = logging.getLogger(__name__)


# ============================================================================
# Colors
# ============================================================================


class Color:
    """ANSI color codes"""

    GREEN = "\033[0;32m"
    YELLOW = "\033[1;33m"
    RED = "\033[1;31m"
    CYAN = "\033[1;36m"
    PHASE = "\033[4;33m"
    PHASE_BUILD = "\033[4;31m"
    UNDERLINE = "\033[4m"
    RESET = "\033[0m"


_color_enabled: Optional[bool] = None


def set_color_enabled(enabled: Optional[bool]) -> None:
    """Force colors on or off; None restores automatic detection."""
    global _color_enabled
    _color_enabled = enabled


def color_enabled(stream=None) -> bool:
    """Whether ANSI colors should be written to ``stream``."""
    if _color_enabled is not None:
        return _color_enabled
    if os.environ.get("NO_COLOR"):
        return False
    stream = stream or sys.stdout
    return hasattr(stream, "isatty") and stream.isatty()


def colorize(text: str, color: str, stream=None) -> str:
    if not color_enabled(stream):
        return text
    return f"{color}{text}{Color.RESET}"


# ============================================================================
# User Interface / Output Formatting
# ============================================================================


def print_phase(message: str):
    """Print a pipeline phase heading."""
    color = Color.PHASE_BUILD if message.startswith("PHASE3") else Color.PHASE
    print(colorize(message, color, sys.stdout))


def print_success(message: str):
    print(colorize(message, Color.GREEN, sys.stdout))


def print_box(text: str, width: int = 70, char: str = "="):
    """Print text in a box for emphasis."""
    print(char * width)
    print(colorize(text, Color.YELLOW, sys.stdout))
    print(char * width)


def print_error(message: str, details: Optional[str] = None):
    """
    Print error message to stderr in consistent format.

    Args:
        message: Main error message
        details: Optional additional details
    """
    print(colorize(f"ERROR: {message}", Color.RED, sys.stderr), file=sys.stderr)
    if details:
        print(f"  {details}", file=sys.stderr)


def print_warning(message: str):
    """Print warning message to stderr."""
    print(colorize(f"WARNING: {message}", Color.YELLOW, sys.stderr), file=sys.stderr)


# ============================================================================
# Terminal Interaction
# ============================================================================


def is_interactive(non_interactive: bool = False) -> bool:
    """Whether a human is attached to the terminal."""
    if non_interactive:
        return False
    return sys.stdin.isatty() and sys.stdout.isatty()


def _read_single_key() -> None:
    try:
        import termios
        import tty
    except ImportError:
        import msvcrt

        msvcrt.getch()
        return

    fd = sys.stdin.fileno()
    old_settings = termios.tcgetattr(fd)
    try:
        tty.setcbreak(fd)
        os.read(fd, 1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


def pause(non_interactive: bool = False, prompt: str = "Press any key to exit...") -> bool:
    """
    Wait for a single keypress when running interactively.

    Returns:
        True if the pause happened, False if it was skipped
    """
    if not is_interactive(non_interactive):
        logger.debug("Non-interactive session, skipping keypress pause")
        return False

    print(colorize(prompt, Color.UNDERLINE, sys.stdout))
    try:
        _read_single_key()
    except (OSError, EOFError) as e:
        logger.debug(f"Could not read keypress: {e}")
    return True
