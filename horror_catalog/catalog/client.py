"""TMDB catalog client.

Public operations of the catalog: discovery, search, details,
recommendations, similar movies and genres. Every method returns
normalized entities; failures are catalog errors.
"""

from types import TracebackType
from typing import Any

from horror_catalog.catalog import normalizer
from horror_catalog.catalog.transport import CatalogTransport
from horror_catalog.settings import TMDBSettings, settings
from horror_catalog.types import (
    Genre,
    MovieDetail,
    MovieSummary,
    PagedResult,
    RatingRange,
    RuntimeFilter,
    SortKey,
    TMDBMovieData,
    YearRange,
)
from horror_catalog.utils.logger import setup_logger

logger = setup_logger("catalog.client")

DEFAULT_SORT = SortKey.POPULARITY_DESC.value

ENDPOINTS = {
    "discover": "/discover/movie",
    "search": "/search/movie",
    "movie": "/movie",
    "genres": "/genre/movie/list",
}

# Runtime bucket -> (min minutes, max minutes)
_RUNTIME_BOUNDS: dict[RuntimeFilter, tuple[int | None, int | None]] = {
    RuntimeFilter.SHORT: (None, 90),
    RuntimeFilter.MEDIUM: (90, 150),
    RuntimeFilter.LONG: (150, None),
}


# =============================================================================
# PARAMETER BUILDING
# =============================================================================


def runtime_bounds(runtime_filter: str | None) -> tuple[int | None, int | None]:
    """Return (gte, lte) runtime bounds for a filter name.

    Unknown names and "all" have no bounds.
    """
    try:
        bucket = RuntimeFilter(runtime_filter)
    except ValueError:
        return None, None
    return _RUNTIME_BOUNDS.get(bucket, (None, None))


def build_discover_params(
    page: int = 1,
    genre_ids: list[int] | None = None,
    year_range: YearRange | None = None,
    rating_range: RatingRange | None = None,
    runtime_filter: str | None = None,
    sort_by: str | None = None,
    default_genre_id: int = 27,
) -> dict[str, Any]:
    """Build discover query parameters.

    Selected genres are OR-joined; Horror is used when none is selected.

    Args:
        page: Page number (1-based).
        genre_ids: Selected genre IDs.
        year_range: Inclusive release year bounds.
        rating_range: Inclusive vote average bounds.
        runtime_filter: One of all/short/medium/long.
        sort_by: Upstream ordering, passed through verbatim.
        default_genre_id: Genre used when none is selected.

    Returns:
        Query parameters for /discover/movie.
    """
    genres = ",".join(str(g) for g in genre_ids) if genre_ids else str(default_genre_id)

    params: dict[str, Any] = {
        "with_genres": genres,
        "page": page,
        "sort_by": _sort_value(sort_by),
    }

    if year_range:
        params["primary_release_date.gte"] = f"{year_range.min}-01-01"
        params["primary_release_date.lte"] = f"{year_range.max}-12-31"

    if rating_range:
        params["vote_average.gte"] = rating_range.min
        params["vote_average.lte"] = rating_range.max

    runtime_gte, runtime_lte = runtime_bounds(runtime_filter)
    if runtime_gte is not None:
        params["with_runtime.gte"] = runtime_gte
    if runtime_lte is not None:
        params["with_runtime.lte"] = runtime_lte

    return params


def _sort_value(sort_by: str | None) -> str:
    if not sort_by:
        return DEFAULT_SORT
    if isinstance(sort_by, SortKey):
        return sort_by.value
    return sort_by


# =============================================================================
# CLIENT
# =============================================================================


class CatalogClient:
    """Typed client over the TMDB transport.

    Attributes:
        horror_genre_id: Genre used by default discovery and search filtering.
        results_limit: Max items kept for recommendations/similar.
    """

    def __init__(
        self,
        transport: CatalogTransport | None = None,
        tmdb: TMDBSettings | None = None,
    ) -> None:
        """Initialize client.

        Args:
            transport: Transport to use. Built from settings when omitted.
            tmdb: TMDB settings. Defaults to the shared settings.
        """
        self._settings = tmdb or settings.tmdb
        self._transport = transport or CatalogTransport(self._settings)
        self.horror_genre_id = self._settings.horror_genre_id
        self.results_limit = self._settings.results_limit

    async def __aenter__(self) -> "CatalogClient":
        await self._transport.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self._transport.__aexit__(exc_type, exc_val, exc_tb)

    # -------------------------------------------------------------------------
    # Listings
    # -------------------------------------------------------------------------

    async def discover(
        self,
        page: int = 1,
        genre_ids: list[int] | None = None,
        year_range: YearRange | None = None,
        rating_range: RatingRange | None = None,
        runtime_filter: str | None = None,
        sort_by: str | None = None,
    ) -> PagedResult[MovieSummary]:
        """Discover movies with filters.

        Args:
            page: Page number (1-based).
            genre_ids: Genre filter, Horror when empty.
            year_range: Inclusive release year bounds.
            rating_range: Inclusive vote average bounds.
            runtime_filter: One of all/short/medium/long.
            sort_by: Upstream ordering (default popularity.desc).

        Returns:
            One page of movies.
        """
        params = build_discover_params(
            page=page,
            genre_ids=genre_ids,
            year_range=year_range,
            rating_range=rating_range,
            runtime_filter=runtime_filter,
            sort_by=sort_by,
            default_genre_id=self.horror_genre_id,
        )
        payload = await self._transport.get(ENDPOINTS["discover"], params)
        return normalizer.normalize_page(payload)

    async def search(self, query: str, page: int = 1) -> PagedResult[MovieSummary]:
        """Search movies by title, keeping horror movies only.

        total_results counts the kept movies of this page, not the
        upstream total.

        Args:
            query: Search query string.
            page: Page number (1-based).

        Returns:
            One page of horror movies.
        """
        params = {"query": query, "page": page, "include_adult": "false"}
        payload = await self._transport.get(ENDPOINTS["search"], params)
        return normalizer.normalize_page(payload, item_filter=self._is_horror)

    # -------------------------------------------------------------------------
    # Single movie
    # -------------------------------------------------------------------------

    async def get_detail(self, movie_id: int) -> MovieDetail:
        """Get movie details with trailer.

        Raises:
            NotFoundError: When the movie does not exist.
        """
        payload = await self._transport.get(
            f"{ENDPOINTS['movie']}/{movie_id}",
            {"append_to_response": "videos"},
        )
        return normalizer.normalize_movie_detail(payload)

    async def get_recommendations(self, movie_id: int, page: int = 1) -> list[MovieSummary]:
        """Get recommended movies, truncated to results_limit."""
        return await self._related(movie_id, "recommendations", page)

    async def get_similar(self, movie_id: int, page: int = 1) -> list[MovieSummary]:
        """Get similar movies, truncated to results_limit."""
        return await self._related(movie_id, "similar", page)

    async def _related(self, movie_id: int, kind: str, page: int) -> list[MovieSummary]:
        payload = await self._transport.get(
            f"{ENDPOINTS['movie']}/{movie_id}/{kind}",
            {"page": page},
        )
        result = normalizer.normalize_page(payload)
        return list(result.results[: self.results_limit])

    # -------------------------------------------------------------------------
    # Genres
    # -------------------------------------------------------------------------

    async def list_genres(self) -> list[Genre]:
        """Get list of movie genres."""
        payload = await self._transport.get(ENDPOINTS["genres"])
        return normalizer.normalize_genres(payload)

    def _is_horror(self, raw: TMDBMovieData) -> bool:
        return self.horror_genre_id in (raw.get("genre_ids") or ())
