"""
Daily Journal API - Configuration Tests
=========================================

What we test:
    ✅ DB_USER / DB_PASS applied on top of DATABASE_URL
    ✅ PORT read from the environment
    ✅ Invalid values rejected at load time
"""

import pytest
from pydantic import ValidationError as SettingsValidationError

from journal_api.config import Settings


def test_credentials_override_url(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://placeholder@db.example:5432/journal")
    monkeypatch.setenv("DB_USER", "writer")
    monkeypatch.setenv("DB_PASS", "s3cret")

    url = Settings(_env_file=None).sqlalchemy_url

    assert url.username == "writer"
    assert url.password == "s3cret"
    assert url.host == "db.example"
    assert url.database == "journal"


def test_url_used_as_is_without_credentials(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://journal:pw@localhost/journal")
    monkeypatch.delenv("DB_USER", raising=False)
    monkeypatch.delenv("DB_PASS", raising=False)
    monkeypatch.delenv("DB_PASSWORD", raising=False)

    url = Settings(_env_file=None).sqlalchemy_url

    assert url.username == "journal"
    assert url.password == "pw"


def test_port_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8081")
    assert Settings(_env_file=None).backend_port == 8081


def test_default_port(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("BACKEND_PORT", raising=False)
    assert Settings(_env_file=None).backend_port == 3000


def test_log_level_normalized():
    assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"


@pytest.mark.parametrize(
    "overrides",
    [{"log_level": "LOUD"}, {"database_url": "not a url"}],
)
def test_invalid_settings_rejected(overrides):
    with pytest.raises(SettingsValidationError):
        Settings(_env_file=None, **overrides)


def test_cors_origins_split():
    config = Settings(_env_file=None, cors_origins="http://a.test, http://b.test")
    assert config.cors_origins_list == ["http://a.test", "http://b.test"]
