"""Cached catalog queries.

`MovieQueries` wraps each catalog operation with its cache policy;
`MovieFeed` accumulates successive pages of one discover/search query.
"""

import asyncio
from dataclasses import dataclass
from typing import Any

from horror_catalog.cache.policies import (
    DETAIL_POLICY,
    GENRES_POLICY,
    LISTING_POLICY,
    RELATED_POLICY,
)
from horror_catalog.cache.query_cache import QueryCache
from horror_catalog.catalog.client import CatalogClient
from horror_catalog.types import (
    Genre,
    MovieDetail,
    MovieSummary,
    PagedResult,
    RatingRange,
    YearRange,
)
from horror_catalog.utils.logger import setup_logger

logger = setup_logger("cache.queries")

MIN_SEARCH_LENGTH = 3


@dataclass(frozen=True)
class FeedOptions:
    """Filters of a movie feed.

    A search query of at least three characters switches the feed
    from discovery to search; the other filters then do not apply.
    """

    genre_ids: tuple[int, ...] = ()
    search_query: str = ""
    year_range: YearRange | None = None
    rating_range: RatingRange | None = None
    runtime_filter: str | None = None
    sort_by: str | None = None

    @property
    def uses_search(self) -> bool:
        return len(self.search_query.strip()) >= MIN_SEARCH_LENGTH


class MovieQueries:
    """Catalog operations served through the query cache."""

    def __init__(self, client: CatalogClient, cache: QueryCache | None = None) -> None:
        self.client = client
        self.cache = cache or QueryCache()

    async def genres(self) -> list[Genre]:
        """All catalog genres."""
        genres = await self.cache.fetch("genres", None, self.client.list_genres, GENRES_POLICY)
        return list(genres)

    async def movie_details(self, movie_id: int) -> MovieDetail | None:
        """Details of one movie, or None for a non-positive id."""
        if movie_id <= 0:
            return None
        return await self.cache.fetch(
            "movie",
            {"id": movie_id},
            lambda: self.client.get_detail(movie_id),
            DETAIL_POLICY,
        )

    async def recommendations(self, movie_id: int) -> list[MovieSummary]:
        """First recommendations for a movie."""
        if not movie_id:
            return []
        movies = await self.cache.fetch(
            "movie-recommendations",
            {"id": movie_id},
            lambda: self.client.get_recommendations(movie_id, 1),
            RELATED_POLICY,
        )
        return list(movies)

    async def similar_movies(self, movie_id: int) -> list[MovieSummary]:
        """First similar movies for a movie."""
        if not movie_id:
            return []
        movies = await self.cache.fetch(
            "similar-movies",
            {"id": movie_id},
            lambda: self.client.get_similar(movie_id, 1),
            RELATED_POLICY,
        )
        return list(movies)

    def feed(self, options: FeedOptions | None = None) -> "MovieFeed":
        """Create a paged feed sharing this cache."""
        return MovieFeed(self.client, self.cache, options or FeedOptions())


class MovieFeed:
    """Accumulates pages of one discover or search query.

    Pages are cached one by one; `movies` concatenates the loaded pages
    in order, keeping the first occurrence of each movie id.
    """

    def __init__(
        self,
        client: CatalogClient,
        cache: QueryCache,
        options: FeedOptions,
    ) -> None:
        self._client = client
        self._cache = cache
        self.options = options
        self._pages: list[PagedResult[MovieSummary]] = []
        self._running: asyncio.Task[None] | None = None

    @property
    def pages(self) -> list[PagedResult[MovieSummary]]:
        return list(self._pages)

    @property
    def movies(self) -> list[MovieSummary]:
        seen: set[int] = set()
        movies: list[MovieSummary] = []
        for page in self._pages:
            for movie in page.results:
                if movie.id not in seen:
                    seen.add(movie.id)
                    movies.append(movie)
        return movies

    @property
    def has_more(self) -> bool:
        return bool(self._pages) and self._pages[-1].has_next_page

    @property
    def is_fetching_more(self) -> bool:
        return self._running is not None and bool(self._pages)

    async def load(self) -> list[MovieSummary]:
        """Load the first page if nothing is loaded yet.

        Joins the running fetch instead of starting a second one.
        """
        if self._running is not None:
            await self._running
        elif not self._pages:
            await self._fetch(1)
        return self.movies

    async def fetch_more(self) -> bool:
        """Load the next page.

        Returns:
            True if a page was loaded, False when there is nothing
            more to load or a fetch is already running.
        """
        if self._running is not None:
            return False
        if not self._pages:
            await self._fetch(1)
            return True
        if not self.has_more:
            logger.debug("No more pages to fetch")
            return False
        await self._fetch(self._pages[-1].page + 1)
        return True

    async def _fetch(self, page: int) -> None:
        self._running = asyncio.ensure_future(self._append_page(page))
        try:
            await self._running
        finally:
            self._running = None

    async def _append_page(self, page: int) -> None:
        self._pages.append(await self._fetch_page(page))

    async def _fetch_page(self, page: int) -> PagedResult[MovieSummary]:
        opts = self.options

        if opts.uses_search:
            query = opts.search_query
            return await self._cache.fetch(
                "search",
                {"query": query, "page": page},
                lambda: self._client.search(query, page),
                LISTING_POLICY,
            )

        params: dict[str, Any] = {
            "page": page,
            "genre_ids": list(opts.genre_ids),
            "year_range": opts.year_range,
            "rating_range": opts.rating_range,
            "runtime_filter": opts.runtime_filter,
            "sort_by": opts.sort_by,
        }
        return await self._cache.fetch(
            "discover",
            params,
            lambda: self._client.discover(
                page=page,
                genre_ids=list(opts.genre_ids),
                year_range=opts.year_range,
                rating_range=opts.rating_range,
                runtime_filter=opts.runtime_filter,
                sort_by=opts.sort_by,
            ),
            LISTING_POLICY,
        )
