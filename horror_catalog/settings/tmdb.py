"""TMDB API configuration."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from horror_catalog.settings.base import ENV_CONFIG

PLACEHOLDER_KEY = "your_api_key_here"


class TMDBSettings(BaseSettings):
    """TMDB API configuration.

    A missing or wrong API key is not caught here; it surfaces as an
    AuthError on the first call.

    Attributes:
        api_key: TMDB v3 API key, sent as a query parameter.
        base_url: API root, without trailing slash.
        image_base_url: Image CDN root, without size token.
        horror_genre_id: Genre used by default discovery and search filtering.
        timeout_seconds: Wall-clock bound of one request.
        requests_per_period: Admissions allowed per rolling window.
        period_seconds: Rolling window length.
        results_limit: Items kept for recommendations and similar movies.
    """

    model_config = ENV_CONFIG

    api_key: str = Field(default="", alias="TMDB_API_KEY")
    base_url: str = Field(default="https://api.themoviedb.org/3", alias="TMDB_BASE_URL")
    image_base_url: str = Field(default="https://image.tmdb.org/t/p", alias="TMDB_IMAGE_BASE_URL")
    horror_genre_id: int = Field(default=27, alias="TMDB_HORROR_GENRE_ID")

    timeout_seconds: float = Field(default=10.0, gt=0, alias="TMDB_TIMEOUT_SECONDS")

    # TMDB allows 40 requests every 10 seconds
    requests_per_period: int = Field(default=40, ge=1, alias="TMDB_REQUESTS_PER_PERIOD")
    period_seconds: float = Field(default=10.0, gt=0, alias="TMDB_PERIOD_SECONDS")

    results_limit: int = Field(default=6, ge=1, alias="TMDB_RESULTS_LIMIT")

    @property
    def is_configured(self) -> bool:
        """Whether an API key other than the placeholder is set."""
        return bool(self.api_key) and self.api_key != PLACEHOLDER_KEY

    @field_validator("base_url", "image_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")
