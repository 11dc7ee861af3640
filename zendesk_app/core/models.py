"""Domain data models for Zendesk tickets, comments, and users."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class CustomFieldModel:
    id: int | None
    value: Any = None


@dataclass(slots=True)
class CommentModel:
    id: int | None
    author_id: int | None
    body: str | None
    created_at: str | None
    public: bool = True
    attachments: list[dict] = field(default_factory=list)


@dataclass(slots=True)
class UserModel:
    id: int | None
    name: str | None
    email: str | None
    external_id: str | None = None
    locale_id: int | None = None


@dataclass(slots=True)
class TicketModel:
    id: int | None
    subject: str | None
    description: str | None
    status: str | None
    priority: str | None
    requester_id: int | None
    submitter_id: int | None
    assignee_id: int | None
    brand_id: int | None
    external_id: str | None
    created_at: str | None
    updated_at: str | None
    tags: list[str] = field(default_factory=list)
    custom_fields: list[CustomFieldModel] = field(default_factory=list)

    # Derived fields (populated by the enricher)
    closed_at: str | None = None
    app: Any = None
    user_id: int | None = None
    requester_email: str | None = None
    last_comment_author_name: str | None = None


# Fields the enricher is allowed to assign
DERIVED_TICKET_FIELDS: frozenset[str] = frozenset(
    {
        "closed_at",
        "app",
        "user_id",
        "requester_email",
        "last_comment_author_name",
    }
)


@dataclass(slots=True)
class TicketSearchResult:
    results: list[TicketModel] = field(default_factory=list)
    count: int = 0
