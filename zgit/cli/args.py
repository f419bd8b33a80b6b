"""CLI Argument Parsing

Only zgit's own subcommands go through argparse. The global -C option and the
commit arguments are scanned by hand so that tokens zgit does not know reach
git exactly as typed.
"""

import argparse
import os
from dataclasses import dataclass, field
from typing import Optional

from zgit import LOCAL_COMMANDS
from zgit.errors import UsageError

REPO_DIR_FLAGS = ('-C', '--repo-dir')
# shortest abbreviation of --message that git accepts
MESSAGE_ABBREV_MIN = '--mes'

# git commit short flags that take no value and may be clustered before -m,
# as in `-am "msg"`
CLUSTERABLE_COMMIT_FLAGS = frozenset('aenqsvpioz')

# git commit options whose value is the next token; the value is forwarded
# without being inspected
COMMIT_VALUE_FLAGS = frozenset({
    '-C', '-c', '-F', '-t',
    '--reuse-message', '--reedit-message', '--fixup', '--squash',
    '--file', '--author', '--date', '--template', '--cleanup',
    '--trailer', '--pathspec-from-file',
})

COMPLETION_SHELLS = ('bash', 'zsh', 'fish', 'tcsh', 'powershell')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='zgit',
        description='Git workflow helper with automatic ticket tracking',
        epilog='Any other command is passed directly to git, e.g. `zgit status`.'
    )

    parser.add_argument('-C', '--repo-dir', metavar='PATH', help='Run as if started in PATH (must come first)')

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')

    commit = subparsers.add_parser(
        'commit',
        help='Commit with the ticket from the branch name',
        description='Prefix the commit message with the ticket extracted from the current branch. '
                    'All other flags are passed to git commit unchanged.'
    )
    commit.add_argument('-m', '--message', metavar='TEXT', help='Commit message (without -m, git commit is called directly)')

    force_pull = subparsers.add_parser(
        'force-pull',
        help='Recreate the current branch from origin',
        description='Delete the local branch and check it out again from origin. '
                    'Useful after the remote branch was force-pushed.'
    )
    force_pull.add_argument('-b', '--branch', default='main', metavar='NAME', help='Branch to switch to before deleting (default: main)')

    init = subparsers.add_parser('init', help='Download the default configuration')
    init.add_argument('-f', '--force', action='store_true', help='Overwrite an existing config without asking')

    subparsers.add_parser('version', help='Show version information')

    open_ = subparsers.add_parser('open', help='Open the repository in your browser')
    open_.add_argument('-r', '--remote', default='origin', metavar='NAME', help='Remote to open (default: origin)')

    pr = subparsers.add_parser('pr', help='Open the pull request page for the current branch')
    pr.add_argument('-r', '--remote', default='origin', metavar='NAME', help='Remote name (default: origin)')
    pr.add_argument('-b', '--base', metavar='BRANCH', help="Base branch (default: remote's default branch)")

    completion = subparsers.add_parser('completion', help='Print shell completion code')
    completion.add_argument('shell', nargs='?', choices=COMPLETION_SHELLS, help='Shell (default: from $SHELL)')

    help_ = subparsers.add_parser('help', help='Show help for a command')
    help_.add_argument('topic', nargs='?', choices=LOCAL_COMMANDS, metavar='COMMAND', help='Command to describe')

    return parser


def subcommand_parser(parser: argparse.ArgumentParser, name: str) -> Optional[argparse.ArgumentParser]:
    """The sub-parser registered for ``name``, if any."""
    for action in parser._actions:
        if isinstance(action, argparse._SubParsersAction):
            return action.choices.get(name)
    return None


@dataclass
class Invocation:
    """Command line after the global -C option has been taken off."""
    repo_dir: Optional[str]
    args: list[str] = field(default_factory=list)


def consume_repo_dir(argv: list[str]) -> Invocation:
    """Take a leading -C/--repo-dir option off ``argv``.

    Accepts `-C PATH`, `-CPATH`, `--repo-dir PATH` and `--repo-dir=PATH`.
    Only the first token is examined; a later -C belongs to git.
    """
    if not argv:
        return Invocation(repo_dir=None, args=[])

    first = argv[0]
    if first in REPO_DIR_FLAGS:
        if len(argv) < 2:
            raise UsageError(f"option {first} requires a directory")
        return Invocation(repo_dir=argv[1], args=list(argv[2:]))
    if first.startswith('--repo-dir='):
        value = first[len('--repo-dir='):]
        if not value:
            raise UsageError("option --repo-dir requires a directory")
        return Invocation(repo_dir=value, args=list(argv[1:]))
    if first.startswith('-C') and not first.startswith('--'):
        return Invocation(repo_dir=first[2:], args=list(argv[1:]))
    return Invocation(repo_dir=None, args=list(argv))


def default_shell() -> str:
    shell = os.path.basename(os.environ.get('SHELL', ''))
    return shell if shell in COMPLETION_SHELLS else 'bash'


# ---------------------------------------------------------------------------
# commit argument scanning
# ---------------------------------------------------------------------------

SEEKING = 'seeking'
EXPECT_MESSAGE = 'expect-message'
FLAG_VALUE = 'flag-value'
PATHSPEC = 'pathspec'


@dataclass
class CommitArgs:
    """commit arguments split into the templated message and everything else."""
    message: Optional[str] = None
    passthrough: list[str] = field(default_factory=list)

    @property
    def has_message(self) -> bool:
        return self.message is not None


def _short_message_option(token: str) -> Optional[tuple[str, str]]:
    """Split `-m`, `-mTEXT`, `-am` and `-amTEXT` style tokens.

    Returns the boolean flags clustered before m (`-a`, or '' when there are
    none) and the text attached after it, or None when git would not read a
    message from the token.
    """
    if not token.startswith('-') or token.startswith('--'):
        return None
    letters = token[1:]
    index = letters.find('m')
    if index < 0 or not set(letters[:index]) <= CLUSTERABLE_COMMIT_FLAGS:
        return None
    cluster = '-' + letters[:index] if index else ''
    return cluster, letters[index + 1:]


def _long_message_option(token: str) -> Optional[tuple[str, Optional[str]]]:
    """Match --message and the abbreviations git accepts for it (down to --mes).

    Returns the option name and the `=` value, which is None when the message
    is the next token.
    """
    name, sep, value = token.partition('=')
    if len(name) < len(MESSAGE_ABBREV_MIN) or not '--message'.startswith(name):
        return None
    return name, value if sep else None


def split_commit_args(tokens: list[str]) -> CommitArgs:
    """Separate the commit message from the flags forwarded to git.

    A small state machine over the tokens:

    SEEKING         looking for the first -m/--message; other tokens are
                    forwarded in order
    EXPECT_MESSAGE  the previous token was a bare message flag
    FLAG_VALUE      the previous token was another option taking a value
    PATHSPEC        after `--`; everything is forwarded untouched

    Only the first message flag is taken. Later ones are forwarded as typed
    and become extra paragraphs in git.
    """
    result = CommitArgs()
    state = SEEKING
    pending_flag = None

    for token in tokens:
        if state == PATHSPEC:
            result.passthrough.append(token)
        elif state == EXPECT_MESSAGE:
            result.message = token
            state = SEEKING
        elif state == FLAG_VALUE:
            result.passthrough.append(token)
            state = SEEKING
        elif token == '--':
            result.passthrough.append(token)
            state = PATHSPEC
        elif result.has_message:
            result.passthrough.append(token)
        elif token in COMMIT_VALUE_FLAGS:
            result.passthrough.append(token)
            state = FLAG_VALUE
        else:
            long_option = _long_message_option(token)
            short_option = _short_message_option(token)
            if long_option:
                value = long_option[1]
                if value is None:
                    pending_flag = token
                    state = EXPECT_MESSAGE
                else:
                    result.message = value
            elif short_option:
                cluster, attached = short_option
                if cluster:
                    result.passthrough.append(cluster)
                if attached:
                    result.message = attached
                else:
                    pending_flag = token
                    state = EXPECT_MESSAGE
            else:
                result.passthrough.append(token)

    if state == EXPECT_MESSAGE:
        raise UsageError(f"option {pending_flag} requires a message")
    return result
