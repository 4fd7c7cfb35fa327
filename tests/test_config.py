"""Tests for settings loaded from the environment."""

import logging

import pytest

from fintrackr.config import DEFAULT_CORS_ORIGINS, DEFAULT_SECRET_KEY, load_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "FINTRACKR_DATABASE_URL",
        "FINTRACKR_DB_PATH",
        "FINTRACKR_SECRET_KEY",
        "FINTRACKR_JWT_ALGORITHM",
        "FINTRACKR_TOKEN_EXPIRE_MINUTES",
        "FINTRACKR_CORS_ORIGINS",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults(caplog):
    with caplog.at_level(logging.WARNING, logger="fintrackr.config"):
        settings = load_settings()

    assert settings.secret_key == DEFAULT_SECRET_KEY
    assert settings.token_expire_minutes == 7 * 24 * 60
    assert settings.cors_origins == DEFAULT_CORS_ORIGINS
    assert settings.database_url is None
    assert "FINTRACKR_SECRET_KEY is not set" in caplog.text


def test_environment(monkeypatch):
    monkeypatch.setenv("FINTRACKR_SECRET_KEY", "s3cret")
    monkeypatch.setenv("FINTRACKR_TOKEN_EXPIRE_MINUTES", "15")
    monkeypatch.setenv("FINTRACKR_CORS_ORIGINS", "http://a.test, http://b.test,")
    monkeypatch.setenv("FINTRACKR_DB_PATH", "/tmp/x.db")

    settings = load_settings()

    assert settings.secret_key == "s3cret"
    assert not settings.uses_default_secret
    assert settings.token_expire_minutes == 15
    assert settings.cors_origins == ("http://a.test", "http://b.test")
    assert settings.database_path == "/tmp/x.db"


def test_overrides_win_unless_none(monkeypatch):
    monkeypatch.setenv("FINTRACKR_DB_PATH", "/tmp/env.db")

    assert load_settings(database_path="/tmp/cli.db").database_path == "/tmp/cli.db"
    assert load_settings(database_path=None).database_path == "/tmp/env.db"


def test_bad_expiry(monkeypatch):
    monkeypatch.setenv("FINTRACKR_TOKEN_EXPIRE_MINUTES", "soon")

    with pytest.raises(ValueError):
        load_settings()
