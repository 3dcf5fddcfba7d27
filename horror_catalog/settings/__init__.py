"""Centralized configuration for the horror catalog.

Values are read from environment variables, then from a `.env` file, and
fall back to defaults. The TMDB API key is the only credential; it is not
validated locally.

Usage:
    from horror_catalog.settings import settings

    settings.tmdb.api_key
    settings.watchlist.path
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from horror_catalog.settings.base import (
    LoggingSettings,
    WatchlistSettings,
    get_project_root,
)
from horror_catalog.settings.tmdb import TMDBSettings

__all__ = [
    "Settings",
    "settings",
    "LoggingSettings",
    "TMDBSettings",
    "WatchlistSettings",
    "get_masked_settings",
    "get_project_root",
]

ENVIRONMENTS = ("development", "production", "test")
MASK = "***MASKED***"


class Settings(BaseSettings):
    """All configuration sections.

    Components take their section as an argument and fall back to the
    shared `settings` instance.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    tmdb: TMDBSettings = Field(default_factory=TMDBSettings)
    watchlist: WatchlistSettings = Field(default_factory=WatchlistSettings)

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        env = v.lower()
        if env not in ENVIRONMENTS:
            raise ValueError(f"ENVIRONMENT must be one of {', '.join(ENVIRONMENTS)}")
        return env


settings = Settings()


def get_masked_settings(config: Settings | None = None) -> dict[str, Any]:
    """Dump settings with the API key masked, for logging.

    Args:
        config: Settings to dump. Defaults to the shared instance.
    """
    dumped = (config or settings).model_dump(mode="json")
    if dumped["tmdb"]["api_key"]:
        dumped["tmdb"]["api_key"] = MASK
    return dumped
