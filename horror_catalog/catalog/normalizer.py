"""TMDB data normalizer.

Transforms raw TMDB API payloads into the canonical movie entities.
All functions are pure; malformed records raise PayloadValidationError.
"""

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from horror_catalog.catalog.errors import PayloadValidationError
from horror_catalog.types import (
    Genre,
    MovieDetail,
    MovieSummary,
    PagedResult,
    TMDBGenreData,
    TMDBMovieData,
    TMDBMovieDetailData,
    TMDBVideoData,
)

TRAILER_SITE = "YouTube"
TRAILER_TYPE = "Trailer"

_REQUIRED_MOVIE_FIELDS = ("id", "title")


# -------------------------------------------------------------------------
# Movies
# -------------------------------------------------------------------------


def normalize_movie(raw: TMDBMovieData) -> MovieSummary:
    """Normalize a list-view movie record.

    Args:
        raw: Movie record from discover/search/recommendations.

    Returns:
        MovieSummary entity.

    Raises:
        PayloadValidationError: When `id` or `title` is missing.
    """
    _require(raw, _REQUIRED_MOVIE_FIELDS, "movie")
    return _build(
        MovieSummary,
        raw,
        genre_ids=tuple(raw.get("genre_ids") or ()),
    )


def normalize_movie_detail(raw: TMDBMovieDetailData) -> MovieDetail:
    """Normalize a movie details record with appended videos.

    Genre ids are derived from the full genre records and the trailer
    is the first YouTube video typed as a trailer.

    Args:
        raw: Details payload.

    Returns:
        MovieDetail entity.

    Raises:
        PayloadValidationError: When a required field is missing.
    """
    _require(raw, _REQUIRED_MOVIE_FIELDS, "movie detail")
    genres = tuple(normalize_genre(g) for g in raw.get("genres") or ())
    videos = (raw.get("videos") or {}).get("results") or []

    return _build(
        MovieDetail,
        raw,
        genre_ids=tuple(g.id for g in genres),
        genres=genres,
        runtime=raw.get("runtime") or 0,
        trailer_key=select_trailer_key(videos),
        tagline=raw.get("tagline") or "",
        budget=raw.get("budget") or 0,
        revenue=raw.get("revenue") or 0,
    )


def select_trailer_key(videos: list[TMDBVideoData]) -> str | None:
    """Return the key of the first YouTube trailer, if any."""
    for video in videos:
        if video.get("site") == TRAILER_SITE and video.get("type") == TRAILER_TYPE:
            return video.get("key") or None
    return None


# -------------------------------------------------------------------------
# Genres
# -------------------------------------------------------------------------


def normalize_genre(raw: TMDBGenreData) -> Genre:
    """Normalize a genre record."""
    _require(raw, ("id", "name"), "genre")
    return _validate(Genre, {"id": raw["id"], "name": raw["name"]})


def normalize_genres(payload: Mapping[str, Any]) -> list[Genre]:
    """Normalize the genre list response."""
    _require(payload, ("genres",), "genre list")
    return [normalize_genre(g) for g in payload["genres"]]


# -------------------------------------------------------------------------
# Pages
# -------------------------------------------------------------------------


def normalize_page(
    payload: Mapping[str, Any],
    item_filter: Callable[[TMDBMovieData], bool] | None = None,
) -> PagedResult[MovieSummary]:
    """Normalize a paged movie response.

    Args:
        payload: Envelope with page, results, total_pages, total_results.
        item_filter: Optional predicate on raw records. When given,
            total_results becomes the number of kept records.

    Returns:
        PagedResult of MovieSummary.
    """
    _require(payload, ("page", "results"), "page")
    raw_results = payload["results"]
    for raw in raw_results:
        _require(raw, _REQUIRED_MOVIE_FIELDS, "movie")
    if item_filter is not None:
        raw_results = [r for r in raw_results if item_filter(r)]

    results = tuple(normalize_movie(r) for r in raw_results)
    total_results = (
        len(results) if item_filter is not None else payload.get("total_results", 0)
    )

    return PagedResult[MovieSummary](
        page=payload["page"],
        results=results,
        total_pages=payload.get("total_pages", 0),
        total_results=total_results,
    )


# -------------------------------------------------------------------------
# Helpers
# -------------------------------------------------------------------------


def _require(raw: Mapping[str, Any], fields: tuple[str, ...], kind: str) -> None:
    """Raise if any required field is missing or null."""
    if not isinstance(raw, Mapping):
        raise PayloadValidationError(f"Expected {kind} object, got {type(raw).__name__}")
    missing = [f for f in fields if raw.get(f) is None]
    if missing:
        raise PayloadValidationError(
            f"{kind} record {raw.get('id', '?')} missing: {', '.join(missing)}"
        )


def _build(model: type[MovieSummary], raw: Mapping[str, Any], **extra: Any) -> Any:
    """Map shared wire fields plus model-specific ones."""
    data = {
        "id": raw["id"],
        "title": raw["title"],
        "poster_path": raw.get("poster_path"),
        "backdrop_path": raw.get("backdrop_path"),
        "overview": raw.get("overview") or "",
        "release_date": raw.get("release_date") or "",
        "vote_average": raw.get("vote_average") or 0.0,
        **extra,
    }
    return _validate(model, data)


def _validate(model: type[Any], data: dict[str, Any]) -> Any:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise PayloadValidationError(
            f"Invalid {model.__name__} record {data.get('id', '?')}: {e}"
        ) from e
