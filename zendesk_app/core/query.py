"""Search query builder for the Zendesk search DSL.

Queries are comma-joined ``field<op>"value"`` clauses prefixed with the
entity type, e.g. ``type:ticket,status:"open",``. The trailing comma is
tolerated by the remote search engine and left in place.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields
from typing import Any, ClassVar

from .config import DEFAULT_CONDITION, SEARCHABLE_TYPES


def build_query(
    entity_type: str,
    params: Mapping[str, Any],
    aliases: Mapping[str, str] | None = None,
    conditions: Mapping[str, str] | None = None,
    exclude: Iterable[str] = (),
) -> str:
    """Format search parameters as a query string.

    Parameters
    ----------
    entity_type : str
        One of ``SEARCHABLE_TYPES``; anything else yields an empty string.
    params : Mapping[str, Any]
        Field values. Falsy values (0, "", None, False) are skipped because
        the remote engine cannot search for empty values.
    aliases : Mapping[str, str] | None
        Remote field name to emit in place of a param key.
    conditions : Mapping[str, str] | None
        Operator per key (``:`` when absent), e.g. ``>`` for date bounds.
    exclude : Iterable[str]
        Keys dropped before formatting.

    Returns
    -------
    str
        The query string, or ``""`` for an unsupported entity type.

    Examples
    --------
    >>> build_query("ticket", {"status": "open", "priority": 0})
    'type:ticket,status:"open",'
    """
    excluded = set(exclude)
    remaining = {k: v for k, v in params.items() if k not in excluded}
    if entity_type not in SEARCHABLE_TYPES:
        return ""
    aliases = aliases or {}
    conditions = conditions or {}
    query = f"type:{entity_type},"
    for key, value in remaining.items():
        if not value:
            continue
        name = aliases.get(key, key)
        condition = conditions.get(key, DEFAULT_CONDITION)
        query += f'{name}{condition}"{value}",'
    return query


@dataclass(slots=True)
class SearchRequest:
    """Base for typed search requests; subclasses declare their fields."""

    entity_type: ClassVar[str] = ""
    aliases: ClassVar[Mapping[str, str]] = {}
    conditions: ClassVar[Mapping[str, str]] = {}

    def params(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def to_query(self, exclude: Iterable[str] = ()) -> str:
        return build_query(self.entity_type, self.params(), self.aliases, self.conditions, exclude)


@dataclass(slots=True)
class TicketSearch(SearchRequest):
    entity_type: ClassVar[str] = "ticket"
    aliases: ClassVar[Mapping[str, str]] = {
        "created_from": "created",
        "created_to": "created",
        "updated_from": "updated",
    }
    conditions: ClassVar[Mapping[str, str]] = {
        "created_from": ">",
        "created_to": "<",
        "updated_from": ">",
    }

    status: str | None = None
    priority: str | None = None
    subject: str | None = None
    brand: int | None = None
    created_from: str | None = None
    created_to: str | None = None
    updated_from: str | None = None


@dataclass(slots=True)
class UserSearch(SearchRequest):
    entity_type: ClassVar[str] = "user"

    user: int | None = None
    email: str | None = None
    name: str | None = None
    external_id: str | None = None


@dataclass(slots=True)
class OrganizationSearch(SearchRequest):
    entity_type: ClassVar[str] = "organization"

    name: str | None = None


@dataclass(slots=True)
class GroupSearch(SearchRequest):
    entity_type: ClassVar[str] = "group"

    name: str | None = None
