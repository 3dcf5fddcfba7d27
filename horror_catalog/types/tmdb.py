"""TMDB API data types.

TypedDict definitions for data structures returned by
The Movie Database (TMDB) API endpoints.
"""

from typing import NotRequired, TypedDict


class TMDBGenreData(TypedDict):
    """Genre data from TMDB API."""

    id: int
    name: str


class TMDBVideoData(TypedDict):
    """Video data appended to the movie details endpoint."""

    id: NotRequired[str]
    key: str
    site: str
    type: str
    name: NotRequired[str]


class TMDBVideosData(TypedDict):
    """Wrapper of the appended `videos` response."""

    results: list[TMDBVideoData]


class TMDBMovieData(TypedDict):
    """Movie data from TMDB discover/search/recommendations endpoints."""

    id: int
    title: str
    poster_path: NotRequired[str | None]
    backdrop_path: NotRequired[str | None]
    overview: NotRequired[str | None]
    release_date: NotRequired[str | None]
    vote_average: NotRequired[float]
    genre_ids: NotRequired[list[int]]


class TMDBMovieDetailData(TypedDict):
    """Movie data from the details endpoint with appended videos."""

    id: int
    title: str
    poster_path: NotRequired[str | None]
    backdrop_path: NotRequired[str | None]
    overview: NotRequired[str | None]
    release_date: NotRequired[str | None]
    vote_average: NotRequired[float]
    genres: NotRequired[list[TMDBGenreData]]
    runtime: NotRequired[int | None]
    tagline: NotRequired[str | None]
    budget: NotRequired[int | None]
    revenue: NotRequired[int | None]
    videos: NotRequired[TMDBVideosData]


class TMDBPagedResponse(TypedDict):
    """Envelope of paged endpoints (discover, search, recommendations)."""

    page: int
    total_pages: int
    total_results: int
    results: list[TMDBMovieData]


class TMDBGenreListResponse(TypedDict):
    """Response from TMDB genre/movie/list endpoint."""

    genres: list[TMDBGenreData]
