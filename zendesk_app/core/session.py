"""Per-caller state carried between service calls."""

from __future__ import annotations

from dataclasses import dataclass

from .models import TicketModel, TicketSearchResult, UserModel


@dataclass(slots=True)
class SupportSession:
    """Cached lookups for one end user's support session.

    ``user_search`` is None until ``set_user_search`` runs; an empty list
    means the lookup ran and matched nobody. Not safe to share between
    concurrent callers.
    """

    user_search: list[UserModel] | None = None
    user_tickets: TicketSearchResult | None = None
    current_ticket: TicketModel | None = None
