"""
Exception types used across zgit.

The CLI entry point is the only place these are caught; everything below it
raises and lets the dispatcher report the failure.
"""

from typing import Optional


class ZgitError(Exception):
    """Base class for all zgit specific errors."""


class UsageError(ZgitError):
    """Raised for malformed command lines."""


class GitError(ZgitError):
    """Raised when git operations fail."""

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class RemoteURLError(ZgitError):
    """Raised when a remote URL has a shape zgit does not understand."""


class ConfigError(ZgitError):
    """Raised when the configuration file is invalid."""


class ConfigNotFoundError(ConfigError):
    """Raised when no configuration file exists in any search location."""


class TicketNotFoundError(ZgitError):
    """Raised when no branch pattern yields a ticket."""

    def __init__(self, branch: str, repository: Optional[str]):
        self.branch = branch
        self.repository = repository
        super().__init__(
            f"no branch pattern matched branch '{branch}' "
            f"(repository: {repository or 'unknown'})"
        )


class TemplateError(ZgitError):
    """Raised when a commit message template cannot be parsed or rendered."""
