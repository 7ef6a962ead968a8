"""Terminal escape sequences and the fatal-error messages of the game."""

from __future__ import annotations

import sys

ERASE_LINE = "\033[2K"
CURSOR_UP = "\033[1A"

RED = "\033[31m"
YELLOW = "\033[33m"
GREY = "\033[90m"
ORANGE = "\033[38;5;208m"
GREEN = "\033[32m"

COLOR_END = "\033[0m"


def _erase_previous_line() -> None:
    sys.stdout.write(f"{CURSOR_UP}{ERASE_LINE}\n{ERASE_LINE}")
    sys.stdout.flush()


def system_failed(erase: bool, message: str) -> int:
    """Report a failed system resource and return the exit status 1."""
    if erase:
        _erase_previous_line()
    sys.stderr.write(f"System failed: {message}\n")
    sys.stderr.write("Closing the game...\n")
    sys.stderr.flush()
    return 1


def memory_failed(erase: bool) -> int:
    """Report a failed allocation and return the exit status 1."""
    if erase:
        _erase_previous_line()
    sys.stderr.write("Memory allocation failed. Closing the game...\n")
    sys.stderr.flush()
    return 1