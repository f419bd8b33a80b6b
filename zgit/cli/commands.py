"""CLI Commands"""

import logging
import os
import tempfile
import urllib.error
import urllib.request
from pathlib import Path

import argcomplete

from zgit import __build_date__, __version__
from zgit.cli.args import split_commit_args
from zgit.cli.utils import confirm, open_browser
from zgit.config import ConfigManager, user_config_path
from zgit.errors import GitError, ZgitError
from zgit.git import GitRepository, run_git
from zgit.message import render_commit_message
from zgit.output import bold, dim, info, print_success
from zgit.ticket import resolve_ticket

LOG = logging.getLogger(__name__)

DEFAULT_CONFIG_URL = "https://raw.githubusercontent.com/zhaojunlucky/zgit/main/config.yaml"
DOWNLOAD_TIMEOUT = 30
CONFIG_FILE_MODE = 0o644


def run_commit(tokens: list[str], repo: GitRepository, config_manager: ConfigManager) -> int:
    """Commit with the ticket from the branch name.

    Without -m/--message, git commit gets the arguments unchanged. With it,
    the message is rendered through the configured template and every other
    argument is forwarded after it. Returns git's exit status.
    """
    commit_args = split_commit_args(tokens)

    if not commit_args.has_message:
        LOG.info("no -m flag provided, calling git commit directly with args")
        return run_git('commit', *tokens)

    LOG.info("commit called with message: %s", commit_args.message)
    LOG.info("current working directory: %s", os.getcwd())

    repository = repo.repository_identity()
    branch = repo.current_branch()
    LOG.info("branch: %s", branch)

    config = config_manager.load()
    match = resolve_ticket(config, repository, branch)

    message = render_commit_message(config.commit_message_template, match.ticket, commit_args.message)
    LOG.info("rendered commit message: %s", message)

    return run_git('commit', '-m', message, *commit_args.passthrough)


def run_force_pull(branch: str, repo: GitRepository) -> int:
    """Recreate the current branch from origin.

    Steps run in order and stop at the first failure, so the local branch is
    only deleted once ``branch`` is checked out.
    """
    current = repo.current_branch()
    LOG.info("current branch: %s", current)
    if current == branch:
        raise ZgitError(f"already on '{branch}'; check out the branch to force-pull first or pass -b")

    steps = [
        (f"checkout to {branch}", ('checkout', branch)),
        (f"delete branch {current}", ('branch', '-D', current)),
        ("fetch from origin", ('fetch', 'origin', current)),
        (f"checkout branch {current} from origin", ('checkout', '-b', current, f"origin/{current}")),
    ]
    for description, args in steps:
        status = run_git(*args)
        if status != 0:
            raise GitError(f"failed to {description}: git exited with status {status}", returncode=status)
        LOG.info("done: %s", description)

    print_success(f"Force-pulled branch {bold(current)}")
    return 0


def _download(url: str, dest: Path) -> None:
    """Fetch url into dest. dest is replaced only after a complete download."""
    LOG.info("downloading config from %s", url)
    try:
        fd, tmp_name = tempfile.mkstemp(prefix='.config-', suffix='.yaml', dir=dest.parent)
    except OSError as e:
        raise ZgitError(f"failed to create config file in {dest.parent}: {e}") from e
    try:
        with os.fdopen(fd, 'wb') as out:
            with urllib.request.urlopen(url, timeout=DOWNLOAD_TIMEOUT) as response:
                status = getattr(response, 'status', 200)
                if status != 200:
                    raise ZgitError(f"failed to download config: HTTP {status}")
                out.write(response.read())
        os.chmod(tmp_name, CONFIG_FILE_MODE)
        os.replace(tmp_name, dest)
    except urllib.error.HTTPError as e:
        raise ZgitError(f"failed to download config: HTTP {e.code}") from e
    except urllib.error.URLError as e:
        raise ZgitError(f"failed to download config: {e.reason}") from e
    except TimeoutError as e:
        raise ZgitError(f"failed to download config: timed out after {DOWNLOAD_TIMEOUT}s") from e
    except OSError as e:
        raise ZgitError(f"failed to write config file {dest}: {e}") from e
    finally:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)


def run_init(force: bool = False, url: str = DEFAULT_CONFIG_URL, dest: Path | None = None) -> int:
    """Download the default config to the user config path."""
    dest = dest or user_config_path()

    if dest.exists() and not force:
        print(f"Config file already exists at {dest}")
        if not confirm("Do you want to override it?"):
            print(dim("Init cancelled."))
            return 0

    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ZgitError(f"failed to create config directory {dest.parent}: {e}") from e

    _download(url, dest)
    print_success(f"Config file created at {dest}")
    return 0


def run_version() -> int:
    """Print version information."""
    print("ZGit: https://gundamz.net/zgit")
    print("Author: https://exia.dev")
    print(f"ZGit version: {__version__}")
    if __build_date__:
        print(f"Build date: {__build_date__}")
    return 0


def run_open(remote: str, repo: GitRepository) -> int:
    """Open the remote's web page."""
    url = repo.web_url(remote)
    print(f"Opening {info(url)}")
    open_browser(url)
    return 0


def run_pr(remote: str, base: str | None, repo: GitRepository) -> int:
    """Open the compare page for the current branch against ``base``."""
    head = repo.current_branch()
    LOG.info("current branch: %s", head)
    web_url = repo.web_url(remote)
    base = base or repo.default_branch(remote)
    LOG.info("base branch: %s", base)

    url = f"{web_url}/compare/{base}...{head}"
    print(f"Opening {info(url)}")
    open_browser(url)
    return 0


def run_completion(shell: str) -> int:
    """Print argcomplete registration code for ``shell``."""
    print(argcomplete.shellcode(['zgit'], shell=shell))
    return 0
