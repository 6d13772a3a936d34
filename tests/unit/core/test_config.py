from pathlib import Path

import pytest
from pydantic import ValidationError

from slatestack import __version__
from slatestack.core.config import Settings


def test_defaults(monkeypatch):
    for key in ("SLATESTACK_ENTRY_INSERT_POSITION", "SLATESTACK_STRICT_SELECT_OPTIONS"):
        monkeypatch.delenv(key, raising=False)
    settings = Settings(_env_file=None)

    assert settings.api_prefix == "/api"
    assert settings.entry_insert_position == "end"
    assert settings.strict_select_options is False
    assert settings.update_cache_ttl_seconds == 900


def test_app_version_defaults_to_package_version(monkeypatch):
    monkeypatch.delenv("SLATESTACK_APP_VERSION", raising=False)
    assert Settings(_env_file=None).app_version == __version__


def test_environment_variables(monkeypatch):
    monkeypatch.setenv("SLATESTACK_ENTRY_INSERT_POSITION", "start")
    monkeypatch.setenv("SLATESTACK_STRICT_SELECT_OPTIONS", "true")
    monkeypatch.setenv("SLATESTACK_CORS_ORIGINS", "https://a.test, https://b.test")

    settings = Settings(_env_file=None)

    assert settings.entry_insert_position == "start"
    assert settings.strict_select_options is True
    assert settings.cors_origins == ["https://a.test", "https://b.test"]


def test_invalid_insert_position():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, entry_insert_position="middle")


def test_sqlite_rejects_multiple_workers():
    with pytest.raises(ValidationError, match="SQLite does not support multiple worker"):
        Settings(_env_file=None, database_url="sqlite+aiosqlite:///./x.db", workers=4)


def test_postgres_allows_multiple_workers():
    settings = Settings(
        _env_file=None, database_url="postgresql+asyncpg://u:p@db/slatestack", workers=4
    )
    assert settings.workers == 4
    assert settings.is_sqlite is False
    assert settings.sqlite_path is None


def test_sqlite_path():
    settings = Settings(_env_file=None, database_url="sqlite+aiosqlite:///./data/content.db")
    assert settings.sqlite_path == Path("./data/content.db")

    memory = Settings(_env_file=None, database_url="sqlite+aiosqlite:///:memory:")
    assert memory.is_sqlite is True
    assert memory.sqlite_path is None


def test_api_prefix_is_normalized():
    assert Settings(_env_file=None, api_prefix="api/v1/").api_prefix == "/api/v1"
    assert Settings(_env_file=None, api_prefix="/").api_prefix == ""


def test_environment_flags():
    assert Settings(_env_file=None, environment="production").is_production
    assert Settings(_env_file=None, environment="testing").is_testing
    assert Settings(_env_file=None, environment="development").is_development
