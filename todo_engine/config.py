"""
Application settings for todo-engine.

Values are read from environment variables prefixed with ``TODO_``
(and an optional ``.env`` file), e.g. ``TODO_DATA_FILE=~/tasks.json``.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration."""

    # Where the persistence layer keeps the task file
    data_file: Path = Path("~/.todo_engine/tasks.json")

    # Logging
    log_level: str = "INFO"
    debug: bool = False
    json_logs: bool = False

    model_config = SettingsConfigDict(
        env_prefix="TODO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("data_file", mode="after")
    @classmethod
    def expand_user(cls, v: Path) -> Path:
        return v.expanduser()

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper() or "INFO"
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get settings (cached)."""
    return Settings()
