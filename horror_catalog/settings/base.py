"""Base configuration settings: logging and watchlist persistence."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).parent.parent.parent

# Shared by every section: values come from the environment, then .env
ENV_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_project_root() -> Path:
    """Get project root directory."""
    return _PROJECT_ROOT


class LoggingSettings(BaseSettings):
    """Logging configuration.

    Attributes:
        level: Log level name.
        log_dir: Log files directory. Empty keeps logs on the console only.
    """

    model_config = ENV_CONFIG

    level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: str = Field(default="", alias="LOG_DIR")

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return level


class WatchlistSettings(BaseSettings):
    """Watchlist persistence.

    Attributes:
        path: JSON file holding the watchlist.
        max_size: Maximum number of movies.
    """

    model_config = ENV_CONFIG

    path: Path = Field(
        default=_PROJECT_ROOT / "data" / "horror-movie-watchlist.json",
        alias="WATCHLIST_PATH",
    )
    max_size: int = Field(default=50, ge=1, alias="WATCHLIST_MAX_SIZE")
