"""Remote URL parsing.

Purely lexical: no network access and no git calls. Supported shapes:

    git@github.com:owner/repo.git        (SSH shorthand)
    ssh://git@github.com/owner/repo.git  (SSH URI)
    https://github.com/owner/repo.git    (HTTP/HTTPS)
"""

import re
from dataclasses import dataclass
from urllib.parse import urlsplit

from zgit.errors import RemoteURLError

# user@host:path, the scp-like syntax git accepts for SSH remotes
SCP_LIKE_RE = re.compile(r'^[^@/\s]+@(?P<host>[^:/\s]+):(?!//)(?P<path>.+)$')

URI_SCHEMES = ('ssh', 'http', 'https')


@dataclass(frozen=True)
class RemoteURL:
    """A remote URL split into the parts zgit cares about."""
    scheme: str
    host: str
    path: str
    port: int | None = None

    @property
    def segments(self) -> list[str]:
        return [part for part in self.path.split('/') if part]

    @property
    def identity(self) -> str:
        """The 'owner/repo' form used to select repository rules."""
        return '/'.join(self.segments[-2:])

    @property
    def web_url(self) -> str:
        """Browser URL of the repository. SSH remotes map to https."""
        if self.scheme in ('http', 'https'):
            netloc = self.host if self.port is None else f"{self.host}:{self.port}"
            return f"{self.scheme}://{netloc}/{'/'.join(self.segments)}"
        return f"https://{self.host}/{'/'.join(self.segments)}"


def _strip(url: str) -> str:
    url = url.strip().rstrip('/')
    if url.endswith('.git'):
        url = url[:-len('.git')]
    return url


def parse_remote_url(url: str) -> RemoteURL:
    """Parse a git remote URL.

    Raises:
        RemoteURLError: for local paths, unsupported schemes, or paths that do
            not contain at least an owner and a repository segment.
    """
    cleaned = _strip(url)

    if '://' in cleaned:
        parts = urlsplit(cleaned)
        scheme = parts.scheme.lower()
        if scheme not in URI_SCHEMES:
            raise RemoteURLError(f"unsupported git URL format: {url.strip()}")
        try:
            host, port = parts.hostname, parts.port
        except ValueError as e:
            raise RemoteURLError(f"invalid port in git URL {url.strip()}: {e}") from e
        remote = RemoteURL(scheme=scheme, host=host or '', path=parts.path.strip('/'), port=port)
    else:
        match = SCP_LIKE_RE.match(cleaned)
        if not match:
            raise RemoteURLError(f"unsupported git URL format: {url.strip()}")
        remote = RemoteURL(scheme='ssh', host=match.group('host'), path=match.group('path').strip('/'))

    if not remote.host:
        raise RemoteURLError(f"git URL has no host: {url.strip()}")
    if len(remote.segments) < 2:
        raise RemoteURLError(f"git URL does not name an owner and repository: {url.strip()}")
    return remote


def repository_identity_from_url(url: str) -> str:
    """git@github.com:owner/repo.git -> owner/repo"""
    return parse_remote_url(url).identity


def web_url_from_url(url: str) -> str:
    """git@github.com:owner/repo.git -> https://github.com/owner/repo"""
    return parse_remote_url(url).web_url
