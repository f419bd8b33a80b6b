"""CLI Main Entry Point

zgit handles a handful of commands itself and hands everything else to git:

    zgit commit -m "fix bug"        handled here
    zgit -C ~/src/app status        chdir, then `git status`
    zgit frobnicate --flag          `git frobnicate --flag`, git's exit status
"""

import argparse
import logging
import os
import sys

import argcomplete

from zgit import LOCAL_COMMANDS
from zgit.cli.args import Invocation, build_parser, consume_repo_dir, default_shell, subcommand_parser
from zgit.cli.commands import (
    run_commit, run_completion, run_force_pull, run_init, run_open, run_pr, run_version,
)
from zgit.config import ConfigManager
from zgit.errors import UsageError, ZgitError
from zgit.git import GitRepository, run_git
from zgit.logging_utils import configure_logging
from zgit.output import print_error

LOG = logging.getLogger(__name__)

HELP_FLAGS = ('-h', '--help')


def _change_directory(invocation: Invocation) -> None:
    """Apply -C before anything that depends on the working directory."""
    if not invocation.repo_dir:
        return
    try:
        os.chdir(os.path.expanduser(invocation.repo_dir))
    except OSError as e:
        raise ZgitError(f"failed to change to directory {invocation.repo_dir}: {e.strerror or e}") from e
    LOG.info("changed to directory: %s", os.getcwd())


def _run_help(parser: argparse.ArgumentParser, topic: str | None) -> int:
    target = subcommand_parser(parser, topic) if topic else None
    (target or parser).print_help()
    return 0


def _dispatch_local(parser: argparse.ArgumentParser, args: list[str]) -> int:
    """Run one of zgit's own subcommands. ``args[0]`` is the command name."""
    command = args[0]
    repo = GitRepository()

    # commit arguments are scanned by hand so unknown flags survive
    if command == 'commit':
        return run_commit(args[1:], repo=repo, config_manager=ConfigManager())

    ns = parser.parse_args(args)
    if ns.command == 'force-pull':
        return run_force_pull(ns.branch, repo=repo)
    if ns.command == 'init':
        return run_init(force=ns.force)
    if ns.command == 'version':
        return run_version()
    if ns.command == 'open':
        return run_open(ns.remote, repo=repo)
    if ns.command == 'pr':
        return run_pr(ns.remote, ns.base, repo=repo)
    if ns.command == 'completion':
        return run_completion(ns.shell or default_shell())
    if ns.command == 'help':
        return _run_help(parser, ns.topic)
    raise UsageError(f"unknown command: {command}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    configure_logging()
    parser = build_parser()
    argcomplete.autocomplete(parser)

    argv = list(sys.argv[1:] if argv is None else argv)

    try:
        invocation = consume_repo_dir(argv)
        _change_directory(invocation)

        args = invocation.args
        if not args or args[0] in HELP_FLAGS:
            parser.print_help()
            return 0

        if args[0] not in LOCAL_COMMANDS:
            LOG.info("passing command to git: %s", args)
            return run_git(*args)

        return _dispatch_local(parser, args)
    except UsageError as e:
        print_error(str(e))
        return 2
    except ZgitError as e:
        print_error(str(e))
        return 1


def run() -> None:
    """Console script entry point."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print()
        sys.exit(130)
