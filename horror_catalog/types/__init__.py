"""Data types package.

Exports wire-format TypedDicts and canonical entities.

Usage:
    from horror_catalog.types import MovieSummary, TMDBMovieData
"""

from horror_catalog.types.filters import (
    RatingRange,
    RuntimeFilter,
    SortKey,
    YearRange,
)
from horror_catalog.types.movie import (
    Genre,
    MovieDetail,
    MovieSummary,
    PagedResult,
    WatchlistEntry,
)
from horror_catalog.types.tmdb import (
    TMDBGenreData,
    TMDBGenreListResponse,
    TMDBMovieData,
    TMDBMovieDetailData,
    TMDBPagedResponse,
    TMDBVideoData,
    TMDBVideosData,
)

__all__ = [
    # TMDB
    "TMDBGenreData",
    "TMDBGenreListResponse",
    "TMDBMovieData",
    "TMDBMovieDetailData",
    "TMDBPagedResponse",
    "TMDBVideoData",
    "TMDBVideosData",
    # Entities
    "Genre",
    "MovieDetail",
    "MovieSummary",
    "PagedResult",
    "WatchlistEntry",
    # Filters
    "RatingRange",
    "RuntimeFilter",
    "SortKey",
    "YearRange",
]
