"""Zendesk API client wrapper (zenpy + raw REST v2 for search and comments)."""

from __future__ import annotations

import logging
from typing import Any, BinaryIO

import requests
from zenpy import Zenpy
from zenpy.lib.api_objects import Comment, Ticket, User

from .config import ZENDESK_DOMAIN_TEMPLATE

logger = logging.getLogger(__name__)


class ZendeskAPI:
    """Authenticated handle on one Zendesk account.

    The underlying clients are built on first use by ``connect()`` and then
    reused for the lifetime of the instance; credentials are never rotated.
    Errors from zenpy and ``requests`` propagate unchanged.
    """

    def __init__(self, subdomain: str, email: str, token: str):
        if not subdomain or not email or not token:
            raise ValueError("Missing required Zendesk credentials: subdomain, email, and token")
        # zenpy appends .zendesk.com itself
        self.subdomain = subdomain.replace(".zendesk.com", "")
        self.email = email
        self.token = token
        self.server = ZENDESK_DOMAIN_TEMPLATE.format(subdomain=self.subdomain)
        self.client: Zenpy | None = None
        self._session: requests.Session | None = None

    def connect(self) -> None:
        if self.client is not None:
            return
        logger.info("Connecting to Zendesk account %s as %s", self.subdomain, self.email)
        self.client = Zenpy(subdomain=self.subdomain, email=self.email, token=self.token)
        session = requests.Session()
        session.auth = (f"{self.email}/token", self.token)
        session.headers.update({"Accept": "application/json"})
        self._session = session

    def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        self.connect()
        url = f"{self.server}/api/v2/{path}"
        resp = self._session.get(url, params=params)
        resp.raise_for_status()
        return resp.json()

    # ------------------ Search ------------------
    def search(self, query: str, page: int = 1) -> dict[str, Any]:
        logger.debug("Zendesk search page=%s query=%s", page, query)
        return self._get("search.json", {"query": query, "page": page})

    def search_users(self, external_id: str | None) -> list[dict[str, Any]]:
        data = self._get("users/search.json", {"external_id": external_id})
        return data.get("users") or []

    # ------------------ Users ------------------
    def create_or_update_user(
        self,
        email: str,
        name: str,
        locale_id: int | None,
        external_id: str | None = None,
    ) -> dict[str, Any]:
        self.connect()
        user = User(email=email, name=name, locale_id=locale_id)
        if external_id:
            user.external_id = external_id
        return self.client.users.create_or_update(user).to_dict()

    def me(self) -> dict[str, Any]:
        self.connect()
        return self.client.users.me().to_dict()

    # ------------------ Tickets ------------------
    def create_ticket(
        self,
        *,
        subject: str,
        body: str,
        uploads: list[str],
        **fields: Any,
    ) -> dict[str, Any]:
        self.connect()
        ticket = Ticket(subject=subject, comment=Comment(body=body, uploads=uploads), **fields)
        audit = self.client.tickets.create(ticket)
        return audit.to_dict()

    def fetch_ticket(self, ticket_id: int) -> dict[str, Any]:
        self.connect()
        return self.client.tickets(id=ticket_id).to_dict()

    def list_comments(self, ticket_id: int, **params: Any) -> list[dict[str, Any]]:
        data = self._get(f"tickets/{ticket_id}/comments.json", params or None)
        return data.get("comments") or []

    # ------------------ Attachments ------------------
    def upload(self, file: str | BinaryIO, content_type: str, name: str) -> str:
        self.connect()
        upload = self.client.attachments.upload(file, target_name=name, content_type=content_type)
        return upload.token
