"""Git Repository - branch and remote inspection for the current directory."""

import logging

from zgit.errors import GitError
from zgit.git.remote import parse_remote_url
from zgit.git.runner import probe_git, read_git

LOG = logging.getLogger(__name__)

DEFAULT_REMOTE = 'origin'

# Probed in order when the remote has no symbolic HEAD
CONVENTIONAL_DEFAULT_BRANCHES = ('main', 'master')


class GitRepository:
    """Reads branch and remote information from the repository in the cwd.

    Every query goes through git; nothing is cached, so a directory switch
    between calls is honored.
    """

    def current_branch(self) -> str:
        """Name of the checked-out branch.

        Fails outside a repository and on a detached HEAD; git's own message
        is carried in the GitError.
        """
        return read_git('symbolic-ref', '--short', 'HEAD')

    def verify_in_repo(self) -> None:
        """Fail fast if we're not in a git work tree."""
        if not probe_git('rev-parse', '--is-inside-work-tree'):
            raise GitError("not a git repository")

    def remote_url(self, remote: str = DEFAULT_REMOTE) -> str:
        try:
            return read_git('remote', 'get-url', remote)
        except GitError as e:
            raise GitError(f"remote '{remote}' not found", returncode=e.returncode, stderr=e.stderr)

    def repository_identity(self, remote: str = DEFAULT_REMOTE) -> str:
        """'owner/repo' derived from the URL of ``remote``."""
        self.verify_in_repo()
        identity = parse_remote_url(self.remote_url(remote)).identity
        LOG.info("repository: %s", identity)
        return identity

    def web_url(self, remote: str = DEFAULT_REMOTE) -> str:
        return parse_remote_url(self.remote_url(remote)).web_url

    def default_branch(self, remote: str = DEFAULT_REMOTE) -> str:
        """Default branch of ``remote``.

        Reads refs/remotes/<remote>/HEAD first. When the remote has no
        symbolic HEAD (common for clones made with older git or after adding a
        remote by hand), falls back to the first conventional branch that
        exists under refs/remotes/<remote>/.
        """
        head_ref = f"refs/remotes/{remote}/HEAD"
        try:
            target = read_git('symbolic-ref', head_ref)
        except GitError:
            LOG.info("%s is not set, probing conventional branch names", head_ref)
        else:
            prefix = f"refs/remotes/{remote}/"
            if target.startswith(prefix):
                return target[len(prefix):]
            if target:
                return target.rsplit('/', 1)[-1]

        for branch in CONVENTIONAL_DEFAULT_BRANCHES:
            if probe_git('rev-parse', '--verify', '--quiet', f"refs/remotes/{remote}/{branch}"):
                return branch

        raise GitError(f"could not determine default branch for remote '{remote}'")
