"""Single sign-on links into the Zendesk help center (JWT remote login)."""

from __future__ import annotations

import hashlib
import random
import time

from jose import jwt

from .config import SSO_ALGORITHM, SSO_PATH, ZENDESK_DOMAIN_TEMPLATE, ZendeskSettings


def domain_url(subdomain: str) -> str:
    return ZENDESK_DOMAIN_TEMPLATE.format(subdomain=subdomain)


def build_sso_token(name: str, email: str, key: str, now: int | None = None) -> str:
    # jti only needs to be unique per short-lived login, time + random is enough
    issued_at = int(time.time()) if now is None else now
    claims = {
        "jti": hashlib.md5(f"{issued_at}{random.random()}".encode()).hexdigest(),
        "iat": issued_at,
        "name": name,
        "email": email,
    }
    return jwt.encode(claims, key, algorithm=SSO_ALGORITHM)


def support_link(settings: ZendeskSettings, name: str | None, email: str | None) -> str | None:
    """Return a remote-login URL for the user, or None if name or email is empty."""
    if not name or not email:
        return None
    token = build_sso_token(name, email, settings.sso_key)
    return f"{domain_url(settings.subdomain)}{SSO_PATH}?jwt={token}"
