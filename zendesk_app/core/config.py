"""Central configuration, constants, and Zendesk connection settings."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

# =============================================================================
# Zendesk Connection Settings
# =============================================================================
ZENDESK_DOMAIN_TEMPLATE = "https://{subdomain}.zendesk.com"
SSO_PATH = "/access/jwt"
SSO_ALGORITHM = "HS256"
TIMEZONE = "UTC"
DEFAULT_SETTINGS_FILE = "zendesk.yaml"

# =============================================================================
# Client Locales
# Locale ids the support platform assigns to end users (documented, not enforced).
# =============================================================================
CLIENT_LOCALE_RU: int = 27
CLIENT_LOCALE_EN: int = 1

# =============================================================================
# Search Configuration
# =============================================================================
# Entity types accepted by the remote search DSL
SEARCHABLE_TYPES: frozenset[str] = frozenset(
    {
        "ticket",
        "user",
        "organization",
        "group",
    }
)
DEFAULT_CONDITION = ":"

# =============================================================================
# Ticket Defaults
# =============================================================================
DEFAULT_TICKET_PRIORITY = "normal"
CLOSED_STATUS = "closed"
EXTERNAL_ID_PREFIX = "user_"

# Custom ticket fields, keyed by local name. Values are remote field ids.
DEFAULT_CUSTOM_FIELD_IDS: dict[str, int | None] = {
    "appName": None,
}

# Environment fallbacks for each settings key
ENV_KEYS: dict[str, str] = {
    "subdomain": "ZENDESK_SUBDOMAIN",
    "username": "ZENDESK_USERNAME",
    "token": "ZENDESK_API_TOKEN",
    "sso_key": "ZENDESK_SSO_KEY",
    "redirect_page": "ZENDESK_REDIRECT_PAGE",
}
APP_NAME_FIELD_ENV = "ZENDESK_APP_NAME_FIELD_ID"
REQUIRED_KEYS: tuple[str, ...] = ("subdomain", "username", "token")


@dataclass(frozen=True, slots=True)
class ZendeskSettings:
    subdomain: str
    username: str
    token: str
    sso_key: str = ""
    redirect_page: str = ""
    custom_field_ids: Mapping[str, int | None] = field(
        default_factory=lambda: dict(DEFAULT_CUSTOM_FIELD_IDS)
    )

    @property
    def domain(self) -> str:
        return ZENDESK_DOMAIN_TEMPLATE.format(subdomain=self.subdomain)

    @property
    def app_name_field_id(self) -> int | None:
        return self.custom_field_ids.get("appName")


def _coerce_field_id(value: Any) -> int | None:
    if value in (None, ""):
        return None
    return int(value)


def load_settings(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ZendeskSettings:
    """Build settings from a YAML file with environment-variable fallbacks.

    The YAML document may hold the keys at top level or under a ``zendesk``
    section. Any key absent from the file is read from the environment
    (see ``ENV_KEYS``).

    Parameters
    ----------
    path : str | Path | None
        Settings file. Defaults to ``zendesk.yaml`` in the working directory;
        a missing file is not an error.
    environ : Mapping[str, str] | None
        Environment to read fallbacks from (defaults to ``os.environ``).

    Raises
    ------
    ValueError
        If subdomain, username, or token cannot be resolved.
    """
    env = os.environ if environ is None else environ
    yaml_path = Path(path or DEFAULT_SETTINGS_FILE)
    data: dict[str, Any] = {}
    if yaml_path.exists():
        loaded = yaml.safe_load(yaml_path.read_text()) or {}
        data = loaded.get("zendesk") or loaded

    values: dict[str, Any] = {}
    for key, env_name in ENV_KEYS.items():
        values[key] = data.get(key) or env.get(env_name, "")

    missing = [k for k in REQUIRED_KEYS if not values[k]]
    if missing:
        raise ValueError(f"Missing required Zendesk configuration: {', '.join(missing)}")

    field_ids = dict(DEFAULT_CUSTOM_FIELD_IDS)
    for name, field_id in (data.get("custom_field_ids") or {}).items():
        field_ids[name] = _coerce_field_id(field_id)
    if field_ids.get("appName") is None:
        field_ids["appName"] = _coerce_field_id(env.get(APP_NAME_FIELD_ENV))

    return ZendeskSettings(custom_field_ids=field_ids, **values)
