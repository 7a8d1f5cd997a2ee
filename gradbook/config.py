"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden from the environment or a .env file
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all settings: works out-of-the-box with a local data/ directory
"""

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from gradbook.core.domain_types import DEFAULT_STORAGE_KEY, MIN_GRADUATION_YEAR


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="GRADBOOK_", case_sensitive=False,
    )

    # Storage
    storage_backend: Literal["file", "memory", "sql"] = "file"
    storage_dir: str = "data"
    storage_key: str = DEFAULT_STORAGE_KEY
    memory_quota_bytes: int | None = None
    database_url: str = "sqlite:///./gradbook.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres URLs use postgres:// which SQLAlchemy no longer accepts."""
        if isinstance(v, str) and v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    # Records
    min_graduation_year: int = MIN_GRADUATION_YEAR
    seed_demo_data: bool = True

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
