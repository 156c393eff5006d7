"""
Mood Tracker Backend — Settings Tests
=======================================

Settings are built directly with keyword arguments so the tests don't
depend on the process environment set up in conftest.py.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from app.config import Settings

PG_URL = "postgresql+asyncpg://u:p@db:5432/moods"
STAGING_URL = "postgresql+asyncpg://u:p@staging-db:5432/moods"


def test_environment_is_normalised():
    assert Settings(environment=" Production ").environment == "production"


def test_unknown_environment_rejected():
    with pytest.raises(PydanticValidationError):
        Settings(environment="qa")


def test_invalid_log_level_rejected():
    with pytest.raises(PydanticValidationError):
        Settings(log_level="verbose")


def test_staging_uses_staging_database_url():
    s = Settings(environment="staging", database_url=PG_URL, staging_database_url=STAGING_URL)
    assert s.effective_database_url == STAGING_URL


def test_staging_without_staging_url_falls_back():
    s = Settings(environment="staging", database_url=PG_URL, staging_database_url="")
    assert s.effective_database_url == PG_URL


def test_other_environments_ignore_staging_url():
    s = Settings(environment="production", database_url=PG_URL, staging_database_url=STAGING_URL)
    assert s.effective_database_url == PG_URL


def test_comma_separated_lists():
    s = Settings(cors_origins="https://a.example, https://b.example,", allowed_hosts="api.example")
    assert s.cors_origins_list == ["https://a.example", "https://b.example"]
    assert s.allowed_hosts_list == ["api.example"]


def test_production_rejects_wildcards_and_sqlite():
    s = Settings(
        environment="production",
        database_url="sqlite+aiosqlite:///./prod.db",
        cors_origins="*",
        allowed_hosts="*",
    )
    with pytest.raises(ValueError) as exc_info:
        s.validate_required_for_production()

    message = str(exc_info.value)
    assert "CORS_ORIGINS" in message
    assert "ALLOWED_HOSTS" in message
    assert "SQLite" in message


def test_valid_production_settings_pass():
    s = Settings(
        environment="production",
        database_url=PG_URL,
        cors_origins="https://moods.example",
        allowed_hosts="api.moods.example",
    )
    s.validate_required_for_production()
    assert s.is_production
    assert not s.is_sqlite


def test_development_is_permissive():
    Settings(environment="development", allowed_hosts="*").validate_required_for_production()
