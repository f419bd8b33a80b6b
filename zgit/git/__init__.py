"""Git Operations Package"""

from zgit.errors import GitError, RemoteURLError
from zgit.git.remote import RemoteURL, parse_remote_url, repository_identity_from_url, web_url_from_url
from zgit.git.repository import GitRepository, DEFAULT_REMOTE
from zgit.git.runner import run_git, read_git, probe_git

__all__ = [
    "GitError",
    "RemoteURLError",
    "RemoteURL",
    "parse_remote_url",
    "repository_identity_from_url",
    "web_url_from_url",
    "GitRepository",
    "DEFAULT_REMOTE",
    "run_git",
    "read_git",
    "probe_git",
]
