"""Shared pytest fixtures for catalog, cache and watchlist tests."""

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from horror_catalog.catalog import CatalogClient, CatalogTransport, RequestThrottler
from horror_catalog.settings import TMDBSettings
from tests.helpers import FakeClock

Handler = Callable[[httpx.Request], Any]


@pytest.fixture(autouse=True)
def mock_env_for_tests(monkeypatch: pytest.MonkeyPatch) -> None:
    """Mock env variables for reproducible tests."""
    monkeypatch.setenv("TMDB_API_KEY", "test_api_key_12345678901234567890")
    monkeypatch.setenv("TMDB_BASE_URL", "https://api.themoviedb.org/3")
    monkeypatch.setenv("TMDB_HORROR_GENRE_ID", "27")
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.delenv("LOG_DIR", raising=False)
    monkeypatch.delenv("WATCHLIST_PATH", raising=False)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# -------------------------------------------------------------------------
# TMDB
# -------------------------------------------------------------------------


@pytest.fixture
def tmdb_settings() -> TMDBSettings:
    return TMDBSettings(
        TMDB_API_KEY="test_key",
        TMDB_BASE_URL="https://api.themoviedb.org/3",
        TMDB_TIMEOUT_SECONDS=10,
    )


@pytest.fixture
def make_client(tmdb_settings: TMDBSettings) -> Callable[..., CatalogClient]:
    """Build a CatalogClient whose HTTP calls go to a handler function."""

    def factory(handler: Handler, tmdb: TMDBSettings | None = None) -> CatalogClient:
        config = tmdb or tmdb_settings
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        transport = CatalogTransport(
            config,
            throttler=RequestThrottler(max_requests=40, window_seconds=10),
            client=http_client,
        )
        return CatalogClient(transport, config)

    return factory


@pytest.fixture
def sample_tmdb_movie() -> dict[str, Any]:
    """Fake TMDB movie record."""
    return {
        "id": 694,
        "title": "The Shining",
        "original_title": "The Shining",
        "overview": "Jack Torrance becomes winter caretaker...",
        "release_date": "1980-05-23",
        "vote_average": 8.2,
        "vote_count": 15234,
        "popularity": 87.5,
        "poster_path": "/b6ko0IKC8MdYBBPkkA1aBPLe2yz.jpg",
        "backdrop_path": "/tWjZI4q8g6VHg36qIXJ3KXg7p6K.jpg",
        "genre_ids": [27, 53],
        "adult": False,
    }


@pytest.fixture
def sample_tmdb_detail(sample_tmdb_movie: dict[str, Any]) -> dict[str, Any]:
    """Fake TMDB details record with appended videos."""
    detail = {k: v for k, v in sample_tmdb_movie.items() if k != "genre_ids"}
    detail.update(
        {
            "genres": [{"id": 27, "name": "Horror"}, {"id": 53, "name": "Thriller"}],
            "runtime": 146,
            "tagline": "A masterpiece of modern horror.",
            "budget": 19000000,
            "revenue": 44017374,
            "videos": {
                "results": [
                    {"id": "v1", "key": "teaser1", "site": "YouTube", "type": "Teaser", "name": "Teaser"},
                    {"id": "v2", "key": "S014oGZiSdI", "site": "YouTube", "type": "Trailer", "name": "Trailer"},
                ]
            },
        }
    )
    return detail


@pytest.fixture
def mock_tmdb_response(sample_tmdb_movie: dict[str, Any]) -> dict[str, Any]:
    """Fake paged TMDB response."""
    movies = []
    for i in range(5):
        movie = sample_tmdb_movie.copy()
        movie["id"] = 694 + i
        movie["title"] = f"Horror Film {i + 1}"
        movies.append(movie)
    return {"page": 1, "total_pages": 10, "total_results": 200, "results": movies}
