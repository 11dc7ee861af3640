"""Mapping raw Zendesk JSON (or zenpy objects) into model instances."""

from __future__ import annotations

from typing import Any

import pandas as pd
import pytz

from .config import TIMEZONE
from .models import CommentModel, CustomFieldModel, TicketModel, TicketSearchResult, UserModel


def _as_dict(raw: Any) -> dict[str, Any]:
    # zenpy API objects expose to_dict(); search results are plain JSON already
    if raw is None:
        return {}
    if isinstance(raw, dict):
        return raw
    if hasattr(raw, "to_dict"):
        return raw.to_dict()
    raise TypeError(f"Unexpected Zendesk payload type: {type(raw)!r}")


def map_custom_fields(value: Any) -> list[CustomFieldModel]:
    fields: list[CustomFieldModel] = []
    for cf in value or []:
        cf = _as_dict(cf)
        fields.append(CustomFieldModel(id=cf.get("id"), value=cf.get("value")))
    return fields


def map_ticket(raw: Any) -> TicketModel:
    data = _as_dict(raw)
    return TicketModel(
        id=data.get("id"),
        subject=data.get("subject"),
        description=data.get("description"),
        status=data.get("status"),
        priority=data.get("priority"),
        requester_id=data.get("requester_id"),
        submitter_id=data.get("submitter_id"),
        assignee_id=data.get("assignee_id"),
        brand_id=data.get("brand_id"),
        external_id=data.get("external_id"),
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
        tags=list(data.get("tags") or []),
        custom_fields=map_custom_fields(data.get("custom_fields")),
    )


def map_comment(raw: Any) -> CommentModel:
    data = _as_dict(raw)
    return CommentModel(
        id=data.get("id"),
        author_id=data.get("author_id"),
        body=data.get("body"),
        created_at=data.get("created_at"),
        public=bool(data.get("public", True)),
        attachments=list(data.get("attachments") or []),
    )


def map_user(raw: Any) -> UserModel:
    data = _as_dict(raw)
    return UserModel(
        id=data.get("id"),
        name=data.get("name"),
        email=data.get("email"),
        external_id=data.get("external_id"),
        locale_id=data.get("locale_id"),
    )


def map_search_result(raw: dict[str, Any]) -> TicketSearchResult:
    """Map a search payload, keeping only ticket rows."""
    results = [
        map_ticket(r) for r in raw.get("results") or [] if r.get("result_type", "ticket") == "ticket"
    ]
    return TicketSearchResult(results=results, count=int(raw.get("count") or 0))


def format_date(value: str | None, tz_name: str = TIMEZONE) -> str | None:
    """Render an ISO timestamp from the API as ``YYYY-MM-DD HH:MM:SS`` in ``tz_name``.

    The default keeps the UTC wall time the API returned.

    Unparseable values are returned unchanged so they still display.
    """
    if not value:
        return None
    ts = pd.to_datetime(value, utc=True, errors="coerce")
    if ts is None or pd.isna(ts):
        return value
    return ts.tz_convert(pytz.timezone(tz_name)).strftime("%Y-%m-%d %H:%M:%S")
