"""CLI Utility Functions"""

import subprocess
import sys

from zgit.errors import ZgitError


def browser_command(url: str, platform: str | None = None) -> list[str]:
    """Command that opens ``url`` in the default browser on ``platform``."""
    platform = platform or sys.platform
    if platform == 'darwin':
        return ['open', url]
    if platform.startswith('linux') or platform.startswith('freebsd'):
        return ['xdg-open', url]
    if platform == 'win32':
        return ['rundll32', 'url.dll,FileProtocolHandler', url]
    raise ZgitError(f"unsupported platform: {platform}")


def open_browser(url: str) -> None:
    """Open url in the default browser. Does not wait for the browser."""
    cmd = browser_command(url)
    try:
        subprocess.Popen(cmd, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    except FileNotFoundError:
        if sys.platform.startswith('linux'):
            raise ZgitError(f"{cmd[0]} not found. Install xdg-utils: sudo apt install xdg-utils")
        raise ZgitError(f"{cmd[0]} not found")
    except OSError as e:
        raise ZgitError(f"failed to open browser: {e}") from e


def confirm(question: str) -> bool:
    """Ask a y/N question. Anything but y/yes, or no input at all, is no."""
    try:
        answer = input(f"{question} (y/N): ")
    except (KeyboardInterrupt, EOFError):
        print()
        return False
    return answer.strip().lower() in ('y', 'yes')
