"""
Tests for ibge_api/config/settings.py
"""

import pytest
from pydantic import ValidationError

from ibge_api.config.settings import Settings, get_settings, reset_settings


@pytest.fixture
def clean_settings():
    reset_settings()
    yield
    reset_settings()


def test_settings_read_from_environment(monkeypatch, clean_settings):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./env.db")
    monkeypatch.setenv("JWT_EXPIRE_MINUTES", "15")

    settings = get_settings()

    assert settings.database_url == "sqlite+aiosqlite:///./env.db"
    assert settings.jwt_expire_minutes == 15
    assert settings.is_sqlite
    assert get_settings() is settings


def test_reset_settings_picks_up_new_values(monkeypatch, clean_settings):
    monkeypatch.setenv("JWT_ALGORITHM", "HS256")
    first = get_settings()

    monkeypatch.setenv("JWT_ALGORITHM", "HS512")
    reset_settings()

    assert get_settings() is not first
    assert get_settings().jwt_algorithm == "HS512"


def test_settings_are_immutable():
    settings = Settings(JWT_SECRET_KEY="immutable-secret-0123456789abcdef")

    with pytest.raises(ValidationError):
        settings.jwt_secret_key = "changed"
