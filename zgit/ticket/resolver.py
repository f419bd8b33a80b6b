"""Ticket Resolver - find the ticket in a branch name."""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from zgit.config import GLOBAL_SCOPE, BranchPattern, Config
from zgit.errors import TicketNotFoundError

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class TicketMatch:
    """A ticket extracted from a branch name, and the rule that produced it."""
    ticket: str
    pattern: str
    scope: str

    def __str__(self) -> str:
        return self.ticket


def _tiers(config: Config, repository: Optional[str]) -> Iterator[tuple[str, tuple[BranchPattern, ...]]]:
    """Rule tiers in priority order: repository rules first, then global."""
    if repository and repository in config.repository_rules:
        yield repository, config.repository_rules[repository]
    yield GLOBAL_SCOPE, config.global_branch_patterns


def resolve_ticket(config: Config, repository: Optional[str], branch: str) -> TicketMatch:
    """Extract the ticket from ``branch``.

    Patterns are tried top to bottom; the first one whose ``ticket`` group
    takes part in a match wins, even if it captured nothing.

    Raises:
        TicketNotFoundError: when no pattern in any tier yields a ticket.
    """
    for scope, patterns in _tiers(config, repository):
        for pattern in patterns:
            ticket = pattern.extract(branch)
            if ticket is None:
                LOG.debug("pattern %s of %s did not match %s", pattern.pattern, scope, branch)
                continue
            LOG.info("found ticket: %s from branch %s (pattern %s of %s)", ticket, branch, pattern.pattern, scope)
            return TicketMatch(ticket=ticket, pattern=pattern.pattern, scope=scope)

    raise TicketNotFoundError(branch=branch, repository=repository)
