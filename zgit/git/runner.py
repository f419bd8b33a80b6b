"""Git Runner - the only place zgit spawns git."""

import logging
import shlex
import subprocess

from zgit.errors import GitError

LOG = logging.getLogger(__name__)

GIT = 'git'


def _describe(args: tuple[str, ...]) -> str:
    return shlex.join([GIT, *args])


def run_git(*args: str) -> int:
    """Run git attached to the terminal and return its exit status.

    stdin, stdout and stderr are inherited so interactive commands (editors,
    pagers, credential prompts) behave exactly as when git is called directly.
    """
    LOG.info("running %s", _describe(args))
    try:
        completed = subprocess.run([GIT, *args])
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH")
    except OSError as e:
        raise GitError(f"failed to execute git: {e}") from e
    LOG.debug("%s exited with status %d", _describe(args), completed.returncode)
    return completed.returncode


def read_git(*args: str) -> str:
    """Run a git command and return its stripped stdout."""
    LOG.debug("reading %s", _describe(args))
    try:
        result = subprocess.run(
            [GIT, *args],
            capture_output=True,
            text=True,
            check=True,
            encoding='utf-8',
            errors='replace'
        )
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or '').strip()
        message = f"Git command failed: {_describe(args)}"
        if stderr:
            message = f"{message}\n{stderr}"
        raise GitError(message, returncode=e.returncode, stderr=stderr)
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH")
    return result.stdout.strip()


def probe_git(*args: str) -> bool:
    """Return True when a git command succeeds. Output is discarded."""
    LOG.debug("probing %s", _describe(args))
    try:
        result = subprocess.run(
            [GIT, *args],
            capture_output=True,
            text=True,
            encoding='utf-8',
            errors='replace'
        )
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH")
    return result.returncode == 0
