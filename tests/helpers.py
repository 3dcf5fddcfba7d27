"""Test helpers shared across test modules."""

import asyncio
from typing import Any

from horror_catalog.types import MovieSummary


class FakeClock:
    """Manual clock whose sleep advances time instantly."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        await asyncio.sleep(0)


async def drain(rounds: int = 10) -> None:
    """Let pending tasks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


def make_movie(movie_id: int, title: str | None = None, **overrides: Any) -> MovieSummary:
    """Build a MovieSummary for tests."""
    data: dict[str, Any] = {
        "id": movie_id,
        "title": title or f"Horror Film {movie_id}",
        "poster_path": f"/poster{movie_id}.jpg",
        "release_date": "1980-05-23",
        "vote_average": 7.5,
        "genre_ids": (27,),
    }
    data.update(overrides)
    return MovieSummary(**data)


def make_page(
    ids: list[int],
    page: int = 1,
    total_pages: int = 1,
    total_results: int | None = None,
    genre_ids: list[int] | None = None,
) -> dict[str, Any]:
    """Build a raw paged TMDB payload."""
    return {
        "page": page,
        "total_pages": total_pages,
        "total_results": len(ids) if total_results is None else total_results,
        "results": [
            {"id": i, "title": f"Film {i}", "genre_ids": genre_ids or [27]} for i in ids
        ],
    }
