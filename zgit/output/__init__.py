"""Terminal Output Formatting Package

Colour is decided per stream: results go to stdout, errors to stderr, and
either may be redirected on its own.
"""

import os
import sys
from typing import Optional


class Colors:
    """ANSI escape codes for terminal colors."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    CYAN = '\033[36m'


# GetStdHandle ids
_WIN_HANDLES = {'stdout': -11, 'stderr': -12}


def _supports_color(stream, handle: str = 'stdout') -> bool:
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    if not hasattr(stream, 'isatty') or not stream.isatty():
        return False
    if sys.platform == 'win32':
        try:
            import ctypes
            kernel32 = ctypes.windll.kernel32
            kernel32.SetConsoleMode(kernel32.GetStdHandle(_WIN_HANDLES[handle]), 7)
            return True
        except (AttributeError, OSError):
            return False
    return True


def _supports_unicode() -> bool:
    if sys.platform == 'win32':
        try:
            '✓'.encode(sys.stdout.encoding or 'utf-8')
            return True
        except (UnicodeEncodeError, LookupError):
            return False
    return True


COLORS_ENABLED = _supports_color(sys.stdout, 'stdout')
STDERR_COLORS_ENABLED = _supports_color(sys.stderr, 'stderr')
UNICODE_ENABLED = _supports_unicode()

CHECK = '✓' if UNICODE_ENABLED else '[OK]'
CROSS = '✗' if UNICODE_ENABLED else '[X]'


def _colorize(text: str, *codes: str, enabled: Optional[bool] = None) -> str:
    if enabled is None:
        enabled = COLORS_ENABLED
    if not enabled:
        return text
    return f"{''.join(codes)}{text}{Colors.RESET}"


def success(text: str) -> str:
    return _colorize(text, Colors.GREEN)


def error(text: str, enabled: Optional[bool] = None) -> str:
    return _colorize(text, Colors.RED, enabled=enabled)


def info(text: str) -> str:
    return _colorize(text, Colors.CYAN)


def dim(text: str) -> str:
    return _colorize(text, Colors.DIM)


def bold(text: str) -> str:
    return _colorize(text, Colors.BOLD)


def print_success(message: str) -> None:
    print(f"{success(CHECK)} {message}")


def print_error(message: str) -> None:
    """Print a failure to stderr, coloured only if stderr is a terminal."""
    print(f"{error(CROSS, STDERR_COLORS_ENABLED)} {error(message, STDERR_COLORS_ENABLED)}", file=sys.stderr)


__all__ = [
    "Colors", "COLORS_ENABLED", "STDERR_COLORS_ENABLED", "UNICODE_ENABLED",
    "CHECK", "CROSS",
    "success", "error", "info", "dim", "bold",
    "print_success", "print_error",
]
