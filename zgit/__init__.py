"""
zgit

Git workflow helper: ticket-aware commit messages and transparent
pass-through of every other command to git.
"""

__version__ = "1.0.0"

# Stamped by the release build; empty for source checkouts
__build_date__ = ""

# Subcommands handled by zgit itself. Anything else is forwarded to git.
# Used by: cli/main.py (dispatch), cli/args.py (parser)
LOCAL_COMMANDS = (
    'commit',
    'force-pull',
    'init',
    'version',
    'open',
    'pr',
    'completion',
    'help',
)
