import pytest
from pydantic import ValidationError

from jobcatalog.core.config import LoggingSettings, Settings, get_settings
from jobcatalog.infrastructure.db import DatabaseManager


def test_defaults(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("JOB_CODE_ORDERING", raising=False)
    settings = Settings(_env_file=None)

    assert settings.database_url == "sqlite+aiosqlite:///./jobcatalog.db"
    assert settings.job_code_ordering == "numeric"
    assert settings.default_page_size == 10
    assert settings.logging.level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://user:secret@db/jobs")
    monkeypatch.setenv("JOB_CODE_ORDERING", "lexicographic")
    monkeypatch.setenv("DEFAULT_PAGE_SIZE", "25")

    settings = Settings(_env_file=None)

    assert settings.database_url == "postgresql://user:secret@db/jobs"
    assert settings.job_code_ordering == "lexicographic"
    assert settings.default_page_size == 25


def test_logging_settings_use_log_prefix(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_JSON_FORMAT", "true")

    settings = LoggingSettings()

    assert settings.level == "DEBUG"
    assert settings.json_format is True


def test_unknown_code_ordering_is_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, job_code_ordering="random")


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


@pytest.mark.parametrize("url, expected", [
    ("postgresql://u:p@host/db", "postgresql+asyncpg://u:p@host/db"),
    ("sqlite:///./jobs.db", "sqlite+aiosqlite:///./jobs.db"),
    ("sqlite+aiosqlite:///:memory:", "sqlite+aiosqlite:///:memory:"),
    ("mysql://u:p@host/db", "mysql://u:p@host/db"),
])
def test_sync_urls_are_converted_to_async_drivers(url, expected):
    assert DatabaseManager._convert_to_async_url(url) == expected
