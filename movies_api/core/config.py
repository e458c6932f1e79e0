"""Application configuration loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "movies.json"

# Browser origins allowed to call the API. Requests without an Origin header
# (same-origin, curl, server-to-server) are always let through.
ACCEPTED_ORIGINS: frozenset[str] = frozenset(
    {
        "http://localhost:8080",
        "http://localhost:1234",
        "http://movies.com",
        "http://midu.dev.com",
        "http://127.0.0.1:5500",
    }
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=3000, alias="PORT")
    movies_data_path: Path = Field(default=DEFAULT_DATA_PATH, alias="MOVIES_DATA_PATH")
    log_level: LogLevel = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
