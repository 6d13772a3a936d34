"""Configuration management for Slatestack.

Settings come from ``SLATESTACK_*`` environment variables and an optional
``.env`` file, validated once with Pydantic Settings and cached for the life
of the process.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from slatestack import __version__

InsertPosition = Literal["start", "end"]


class Settings(BaseSettings):
    """Slatestack runtime configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SLATESTACK_",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Slatestack"
    app_version: str = __version__
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False
    api_prefix: str = "/api"

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    workers: int = Field(default=1, ge=1)

    database_url: str = "sqlite+aiosqlite:///./data/slatestack.db"
    db_pool_size: int = Field(default=5, ge=1)
    db_max_overflow: int = Field(default=10, ge=0)
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    db_echo: bool = False

    cors_origins: list[str] = Field(default=["http://localhost:3000", "http://localhost:5173"])
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = Field(default=["*"])
    cors_allow_headers: list[str] = Field(default=["*"])

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Entries
    entry_insert_position: InsertPosition = Field(
        default="end",
        description="Where new entries are placed in the manual ordering",
    )
    strict_select_options: bool = Field(
        default=False,
        description="Reject select/multi-select values not listed in the field options",
    )

    # Release lookups
    update_api_url: str = "https://api.github.com"
    update_repo_owner: str = "Labyrica"
    update_repo_name: str = "slatestack"
    update_cache_ttl_seconds: int = Field(default=15 * 60, ge=0)
    update_timeout_seconds: float = Field(default=10.0, gt=0)

    @field_validator("cors_origins", "cors_allow_methods", "cors_allow_headers", mode="before")
    @classmethod
    def split_comma_separated(cls, v: str | list[str]) -> list[str]:
        """Accept ``a, b`` as well as a JSON list from the environment."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("api_prefix")
    @classmethod
    def normalize_api_prefix(cls, v: str) -> str:
        return "/" + v.strip("/") if v.strip("/") else ""

    @field_validator("update_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @model_validator(mode="after")
    def validate_sqlite_workers(self) -> "Settings":
        """SQLite files cannot be shared safely between worker processes."""
        if self.workers > 1 and self.is_sqlite:
            raise ValueError(
                "SQLite does not support multiple worker processes. "
                f"Requested {self.workers} workers; use --workers 1 or switch to PostgreSQL."
            )
        return self

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        return self.environment == "testing"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def sqlite_path(self) -> Path | None:
        """Filesystem path of a file-backed SQLite database, if any."""
        if not self.is_sqlite or ":memory:" in self.database_url:
            return None
        return Path(self.database_url.split(":///", 1)[-1])


@lru_cache
def get_settings() -> Settings:
    """Get the cached settings instance."""
    return Settings()
