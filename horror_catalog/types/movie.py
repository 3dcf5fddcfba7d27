"""Canonical movie entities.

Read-only views of upstream catalog records. Attributes are snake_case;
serialized records use camelCase names (posterPath, genreIds, ...), which
is the shape persisted by the watchlist.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

_ENTITY_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
)


class Genre(BaseModel):
    """Catalog genre."""

    model_config = _ENTITY_CONFIG

    id: int
    name: str


class MovieSummary(BaseModel):
    """List-view movie entity.

    Attributes:
        id: Upstream catalog identifier.
        title: Display title.
        poster_path: Opaque poster image path, resolved with `image_url`.
        backdrop_path: Opaque backdrop image path.
        overview: Synopsis.
        release_date: ISO date string, may be empty.
        vote_average: Average rating in [0, 10].
        genre_ids: Ordered genre identifiers.
    """

    model_config = _ENTITY_CONFIG

    id: int
    title: str
    poster_path: str | None = None
    backdrop_path: str | None = None
    overview: str = ""
    release_date: str = ""
    vote_average: float = Field(default=0.0, ge=0.0, le=10.0)
    genre_ids: tuple[int, ...] = ()


class MovieDetail(MovieSummary):
    """Detail-view movie entity.

    Zero means unknown for runtime, budget and revenue.
    """

    runtime: int = Field(default=0, ge=0)
    genres: tuple[Genre, ...] = ()
    trailer_key: str | None = None
    tagline: str = ""
    budget: int = Field(default=0, ge=0)
    revenue: int = Field(default=0, ge=0)


WatchlistEntry = MovieSummary


class PagedResult(BaseModel, Generic[T]):
    """One page of an upstream listing."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(ge=1)
    results: tuple[T, ...] = ()
    total_pages: int = 0
    total_results: int = 0

    @property
    def has_next_page(self) -> bool:
        """Whether the upstream reports further pages."""
        return self.page < self.total_pages
