"""Settings loading."""

import pytest
from pydantic import ValidationError

from beesides.config import Settings


def test_missing_required_setting_fails(monkeypatch):
    monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_cookie_name_derived_from_project_url(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://abcdref.supabase.co/")
    monkeypatch.delenv("SESSION_COOKIE_NAME", raising=False)
    settings = Settings(_env_file=None)

    assert settings.supabase_url == "https://abcdref.supabase.co"
    assert settings.resolved_cookie_name == "sb-abcdref-auth-token"


def test_cookie_name_override(monkeypatch):
    monkeypatch.setenv("SESSION_COOKIE_NAME", "custom-session")
    assert Settings(_env_file=None).resolved_cookie_name == "custom-session"
