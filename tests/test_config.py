import pytest

from zendesk_app.core.config import load_settings


def test_load_settings_from_yaml(tmp_path):
    path = tmp_path / "zendesk.yaml"
    path.write_text(
        "zendesk:\n"
        "  subdomain: acme\n"
        "  username: agent@acme.test\n"
        "  token: abc\n"
        "  sso_key: secret\n"
        "  custom_field_ids:\n"
        "    appName: '360001'\n"
    )
    settings = load_settings(path, environ={})
    assert settings.subdomain == "acme"
    assert settings.domain == "https://acme.zendesk.com"
    assert settings.sso_key == "secret"
    assert settings.app_name_field_id == 360001


def test_load_settings_env_fallback(tmp_path):
    env = {
        "ZENDESK_SUBDOMAIN": "acme",
        "ZENDESK_USERNAME": "agent@acme.test",
        "ZENDESK_API_TOKEN": "abc",
        "ZENDESK_APP_NAME_FIELD_ID": "42",
    }
    settings = load_settings(tmp_path / "missing.yaml", environ=env)
    assert settings.token == "abc"
    assert settings.redirect_page == ""
    assert settings.app_name_field_id == 42


def test_load_settings_missing_required(tmp_path):
    with pytest.raises(ValueError, match="subdomain, username, token"):
        load_settings(tmp_path / "missing.yaml", environ={})


def test_load_settings_empty_zendesk_section(tmp_path):
    path = tmp_path / "zendesk.yaml"
    path.write_text("zendesk:\n")
    env = {"ZENDESK_SUBDOMAIN": "acme", "ZENDESK_USERNAME": "agent@acme.test", "ZENDESK_API_TOKEN": "abc"}
    settings = load_settings(path, environ=env)
    assert settings.subdomain == "acme"
    assert settings.app_name_field_id is None
