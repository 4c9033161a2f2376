from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_", extra="ignore")

    level: str = Field(default="INFO")
    json_format: bool = Field(default=False)
    format: str = Field(default="%(asctime)s - %(levelname)s - %(name)s - %(message)s")
    file: Optional[str] = Field(default=None)
    max_bytes: int = Field(default=10 * 1024 * 1024)
    backup_count: int = Field(default=5)


class Settings(BaseSettings):
    database_url: str = Field(default="sqlite+aiosqlite:///./jobcatalog.db")
    database_echo: bool = Field(default=False)
    database_pool_size: int = Field(default=5)
    database_max_overflow: int = Field(default=10)
    database_pool_timeout: int = Field(default=30)  # seconds
    database_pool_recycle: int = Field(default=1800)  # seconds

    # "lexicographic" keeps plain descending string order on jobs.code
    job_code_ordering: Literal["numeric", "lexicographic"] = Field(default="numeric")

    # Pagination
    default_page_size: int = Field(default=10)

    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", env_file_encoding="utf-8")


@lru_cache
def get_settings() -> Settings:
    return Settings()
