"""Ticket enrichment: derived fields joined onto mapped tickets."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import asdict, dataclass
from typing import Any

import pandas as pd

from .config import CLOSED_STATUS, EXTERNAL_ID_PREFIX, ZendeskSettings
from .models import DERIVED_TICKET_FIELDS, TicketModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Enrichment:
    """One derived field: ``derive`` gets the ticket, or its id if not ``from_ticket``."""

    name: str
    derive: Callable[[Any], Any]
    from_ticket: bool = True

    def __post_init__(self):
        if self.name not in DERIVED_TICKET_FIELDS:
            raise ValueError(
                f"Unknown derived ticket field: {self.name}. "
                f"Supported fields: {sorted(DERIVED_TICKET_FIELDS)}"
            )

    def apply(self, ticket: TicketModel) -> None:
        arg = ticket if self.from_ticket else ticket.id
        setattr(ticket, self.name, self.derive(arg))


# ------------------ Derivations ------------------
def ticket_closed_at(ticket: TicketModel) -> str | None:
    return ticket.updated_at if ticket.status == CLOSED_STATUS else None


def system_user_id(ticket: TicketModel) -> int | None:
    """Parse the local user id out of an ``user_<id>`` external id.

    Malformed ids are logged and yield None rather than raising.
    """
    external_id = ticket.external_id
    if not external_id:
        return None
    prefix, _, suffix = str(external_id).partition("_")
    if f"{prefix}_" != EXTERNAL_ID_PREFIX or not suffix.isdigit():
        logger.warning("Ticket %s has malformed external_id %r", ticket.id, external_id)
        return None
    return int(suffix)


def ticket_app(field_id: int | None) -> Callable[[TicketModel], Any]:
    def derive(ticket: TicketModel) -> Any:
        for custom_field in ticket.custom_fields:
            if custom_field.id == field_id:
                return custom_field.value
        return None

    return derive


def default_enrichments(settings: ZendeskSettings) -> list[Enrichment]:
    return [
        Enrichment("closed_at", ticket_closed_at),
        Enrichment("app", ticket_app(settings.app_name_field_id)),
        Enrichment("user_id", system_user_id),
    ]


# ------------------ Pipeline ------------------
def join_params_to_tickets(
    tickets: Iterable[TicketModel],
    enrichments: Sequence[Enrichment] = (),
) -> list[TicketModel]:
    """Apply each enrichment to each ticket in place, preserving order."""
    out: list[TicketModel] = []
    for ticket in tickets:
        for enrichment in enrichments:
            enrichment.apply(ticket)
        out.append(ticket)
    return out


def tickets_as_records(tickets: Iterable[TicketModel]) -> list[dict[str, Any]]:
    return [asdict(t) for t in tickets]


def tickets_to_dataframe(tickets: Iterable[TicketModel]) -> pd.DataFrame:
    """Tabular view of tickets for display, newest update first."""
    df = pd.DataFrame(tickets_as_records(tickets))
    if df.empty:
        return df
    if "tags" in df.columns:
        df["tags"] = df["tags"].apply(lambda val: ", ".join(sorted(val)) if val else "")
    if "updated_at" in df.columns:
        df = df.sort_values(by="updated_at", ascending=False, na_position="last")
    return df.reset_index(drop=True)
