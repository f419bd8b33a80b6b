"""Ticket Resolution Package"""

from zgit.errors import TicketNotFoundError
from zgit.ticket.resolver import TicketMatch, resolve_ticket

__all__ = [
    "TicketMatch",
    "TicketNotFoundError",
    "resolve_ticket",
]
