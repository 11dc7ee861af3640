"""SupportDeskService: ticket creation, lookup, and enrichment for end users."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any, BinaryIO

from . import sso
from .config import DEFAULT_TICKET_PRIORITY, EXTERNAL_ID_PREFIX, ZendeskSettings, load_settings
from .enrich import Enrichment, default_enrichments, join_params_to_tickets, tickets_as_records
from .mappers import format_date, map_comment, map_search_result, map_ticket, map_user
from .models import CommentModel, TicketModel, TicketSearchResult, UserModel
from .query import TicketSearch
from .session import SupportSession
from .zendesk_client import ZendeskAPI

logger = logging.getLogger(__name__)


class SupportDeskService:
    """Operations on behalf of application users.

    Lookups that find nothing return None or an empty collection; failures
    from the remote API are raised unchanged. Per-user cached state lives on
    the ``SupportSession`` the caller passes in.
    """

    def __init__(self, api: ZendeskAPI, settings: ZendeskSettings):
        self.api = api
        self.settings = settings

    @classmethod
    def from_settings(cls, settings: ZendeskSettings | None = None) -> SupportDeskService:
        settings = settings or load_settings()
        api = ZendeskAPI(settings.subdomain, settings.username, settings.token)
        return cls(api, settings)

    # ------------------ SSO ------------------
    def get_support_link(self, name: str | None, email: str | None) -> str | None:
        return sso.support_link(self.settings, name, email)

    @staticmethod
    def external_id(local_user_id: int | None) -> str | None:
        return f"{EXTERNAL_ID_PREFIX}{local_user_id}" if local_user_id else None

    @staticmethod
    def format_date(value: str | None) -> str | None:
        return format_date(value)

    # ------------------ Users ------------------
    def set_user_search(self, session: SupportSession, local_user_id: int | None) -> list[UserModel]:
        external_id = self.external_id(local_user_id)
        if external_id is None:
            # No local user to link, so nothing can match
            session.user_search = []
            return session.user_search
        raw = self.api.search_users(external_id)
        session.user_search = [map_user(u) for u in raw]
        logger.debug("User search for %s matched %d users", local_user_id, len(session.user_search))
        return session.user_search

    def current_user(self) -> UserModel:
        return map_user(self.api.me())

    def user_data(self, user_id: int, field: str | None = None) -> Any:
        """First user matching ``user_id`` in search, or one of its fields."""
        query = f"type:user,user:{user_id}"
        results = self.api.search(query).get("results") or []
        if not results:
            return None
        user = results[0]
        return user.get(field) if field else map_user(user)

    def requester_email(self, ticket: TicketModel) -> str | None:
        return self.user_data(ticket.requester_id, "email")

    def detail_enrichments(self) -> list[Enrichment]:
        # One extra search per ticket each; meant for small detail views
        return [
            *default_enrichments(self.settings),
            Enrichment("requester_email", self.requester_email),
            Enrichment("last_comment_author_name", self.last_comment_author_name, from_ticket=False),
        ]

    # ------------------ Tickets ------------------
    def create_ticket(
        self,
        session: SupportSession,
        local_user_id: int | None,
        name: str,
        email: str,
        message: str,
        subject: str,
        locale_id: int,
        app_name: str,
        brand_id: int | None,
        uploads: Sequence[str] = (),
    ) -> dict[str, Any]:
        external_id = self.external_id(local_user_id)
        # A user already linked to this external id must not be re-linked
        link_external_id = external_id if external_id and not session.user_search else None
        requester = self.api.create_or_update_user(email, name, locale_id, external_id=link_external_id)
        requester_id = requester.get("id")
        assignee = self.api.me()

        result = self.api.create_ticket(
            subject=subject,
            body=message,
            uploads=list(uploads),
            external_id=external_id,
            requester_id=requester_id,
            submitter_id=requester_id,
            assignee_id=assignee.get("id"),
            priority=DEFAULT_TICKET_PRIORITY,
            custom_fields=[{"id": self.settings.app_name_field_id, "value": app_name}],
            brand_id=brand_id,
        )
        logger.info("Created ticket for requester %s (external_id=%s)", requester_id, external_id)
        return result

    def get_user_tickets(
        self,
        session: SupportSession,
        as_records: bool = True,
        search: TicketSearch | None = None,
        page: int = 1,
        exclude: Iterable[str] = (),
        enrichments: Sequence[Enrichment] | None = None,
    ) -> list[dict[str, Any]] | list[TicketModel]:
        """Search tickets, scoped to the session's matched users if any.

        With no prior ``set_user_search`` the search is unscoped. When the
        user search ran but matched nobody, nothing is fetched. Results from
        several matched users are aggregated.
        """
        query = (search or TicketSearch()).to_query(exclude=exclude)

        if session.user_search is None:
            session.user_tickets = map_search_result(self.api.search(query, page=page))
        elif session.user_search:
            combined = TicketSearchResult()
            for user in session.user_search:
                part = map_search_result(self.api.search(f"{query}requester_id:{user.id}", page=page))
                combined.results.extend(part.results)
                combined.count += part.count
            session.user_tickets = combined
        else:
            session.user_tickets = None

        if session.user_tickets is None:
            return []

        if enrichments is None:
            enrichments = default_enrichments(self.settings)
        tickets = join_params_to_tickets(session.user_tickets.results, enrichments)
        if as_records:
            return tickets_as_records(tickets)
        return tickets

    def get_user_tickets_count(self, session: SupportSession, status: str | None = None) -> int:
        cached = session.user_tickets
        if cached is None:
            return 0
        if status:
            return sum(1 for t in cached.results if t.status == status)
        return cached.count

    def get_current_ticket(self, session: SupportSession, ticket_id: int | None = None) -> TicketModel | None:
        if ticket_id:
            session.current_ticket = map_ticket(self.api.fetch_ticket(ticket_id))
        return session.current_ticket

    # ------------------ Comments & Attachments ------------------
    def last_comment(self, ticket_id: int) -> CommentModel | None:
        comments = self.api.list_comments(
            ticket_id, sort_order="desc", order_by="created_at", per_page=1
        )
        return map_comment(comments[0]) if comments else None

    def ticket_comments(self, ticket_id: int) -> list[CommentModel]:
        return [map_comment(c) for c in self.api.list_comments(ticket_id)]

    def last_comment_author_name(self, ticket_id: int) -> str | None:
        comment = self.last_comment(ticket_id)
        if comment is None or comment.author_id is None:
            return None
        return self.user_data(comment.author_id, "name")

    def upload_file(self, file: str | BinaryIO, content_type: str, name: str) -> str:
        return self.api.upload(file, content_type, name)
