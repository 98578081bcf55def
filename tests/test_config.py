from pathlib import Path

import pytest
from pydantic import ValidationError

from helpmenu.config import HelpMenuSettings


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("BOT_TOKEN", "DATABASE_URL", "HELP_IDLE_TIMEOUT", "LOG_LEVEL", "LOG_DIR", "HELP_CATALOGUE_PATH"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = HelpMenuSettings.from_env()

    assert settings.idle_timeout == 60
    assert settings.database_url == "sqlite+aiosqlite:///help_menus.db"
    assert settings.validate_settings() == (False, "BOT_TOKEN is required")


def test_values_from_env(clean_env):
    clean_env.setenv("BOT_TOKEN", "123:abc")
    clean_env.setenv("HELP_IDLE_TIMEOUT", "30")
    clean_env.setenv("LOG_DIR", "/tmp/help-logs")

    settings = HelpMenuSettings.from_env()

    assert settings.idle_timeout == 30.0
    assert settings.log_dir == Path("/tmp/help-logs")
    assert settings.validate_settings() == (True, None)


def test_sync_database_driver_is_rejected(clean_env):
    clean_env.setenv("BOT_TOKEN", "123:abc")
    clean_env.setenv("DATABASE_URL", "sqlite:///help.db")

    ok, error = HelpMenuSettings.from_env().validate_settings()

    assert ok is False
    assert "async SQLite driver" in error


def test_invalid_timeout_raises(clean_env):
    clean_env.setenv("HELP_IDLE_TIMEOUT", "-5")
    with pytest.raises(ValidationError):
        HelpMenuSettings.from_env()


def test_non_sqlite_database_is_rejected(clean_env):
    clean_env.setenv("BOT_TOKEN", "123:abc")
    clean_env.setenv("DATABASE_URL", "postgresql+asyncpg://localhost/help")

    ok, error = HelpMenuSettings.from_env().validate_settings()

    assert ok is False
    assert "SQLite" in error
