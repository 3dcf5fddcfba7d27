"""Unit tests for CatalogClient against a mocked TMDB API."""

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from horror_catalog.catalog.client import (
    CatalogClient,
    build_discover_params,
    runtime_bounds,
)
from horror_catalog.catalog.errors import AuthError, NotFoundError
from horror_catalog.types import Genre, RatingRange, RuntimeFilter, SortKey, YearRange
from tests.helpers import make_page

ClientFactory = Callable[..., CatalogClient]


def _recording_handler(
    payload: Any,
    status: int = 200,
) -> tuple[Callable[[httpx.Request], httpx.Response], list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status, json=payload)

    return handler, requests


# -------------------------------------------------------------------------
# Parameter building
# -------------------------------------------------------------------------


class TestRuntimeBounds:
    @staticmethod
    def test_short() -> None:
        assert runtime_bounds("short") == (None, 90)

    @staticmethod
    def test_medium() -> None:
        assert runtime_bounds("medium") == (90, 150)

    @staticmethod
    def test_long() -> None:
        assert runtime_bounds(RuntimeFilter.LONG) == (150, None)

    @staticmethod
    @pytest.mark.parametrize("value", ["all", "epic", "", None])
    def test_unrecognized_means_all(value: str | None) -> None:
        assert runtime_bounds(value) == (None, None)


class TestBuildDiscoverParams:
    @staticmethod
    def test_defaults() -> None:
        assert build_discover_params() == {
            "with_genres": "27",
            "page": 1,
            "sort_by": "popularity.desc",
        }

    @staticmethod
    def test_selected_genres_are_or_joined() -> None:
        params = build_discover_params(genre_ids=[27, 53, 9648])
        assert params["with_genres"] == "27,53,9648"

    @staticmethod
    def test_empty_genres_fall_back_to_horror() -> None:
        assert build_discover_params(genre_ids=[])["with_genres"] == "27"

    @staticmethod
    def test_year_and_rating_ranges() -> None:
        params = build_discover_params(
            year_range=YearRange(1970, 1989),
            rating_range=RatingRange(6.5, 9.0),
        )
        assert params["primary_release_date.gte"] == "1970-01-01"
        assert params["primary_release_date.lte"] == "1989-12-31"
        assert params["vote_average.gte"] == 6.5
        assert params["vote_average.lte"] == 9.0

    @staticmethod
    def test_medium_runtime() -> None:
        params = build_discover_params(runtime_filter="medium")
        assert params["with_runtime.gte"] == 90
        assert params["with_runtime.lte"] == 150

    @staticmethod
    def test_short_runtime_has_no_lower_bound() -> None:
        params = build_discover_params(runtime_filter="short")
        assert params["with_runtime.lte"] == 90
        assert "with_runtime.gte" not in params

    @staticmethod
    def test_long_runtime_has_no_upper_bound() -> None:
        params = build_discover_params(runtime_filter="long")
        assert params["with_runtime.gte"] == 150
        assert "with_runtime.lte" not in params

    @staticmethod
    def test_all_runtime_has_no_filter() -> None:
        params = build_discover_params(runtime_filter="all")
        assert not any(k.startswith("with_runtime") for k in params)

    @staticmethod
    def test_sort_passthrough() -> None:
        assert build_discover_params(sort_by="revenue.desc")["sort_by"] == "revenue.desc"
        assert build_discover_params(sort_by=SortKey.TITLE_ASC)["sort_by"] == "title.asc"


# -------------------------------------------------------------------------
# Operations
# -------------------------------------------------------------------------


class TestDiscover:
    @pytest.mark.asyncio
    async def test_default_discover(self, make_client: ClientFactory) -> None:
        payload = {
            "page": 1,
            "results": [{"id": 5, "title": "X", "genre_ids": [27]}],
            "total_pages": 3,
            "total_results": 60,
        }
        handler, requests = _recording_handler(payload)

        result = await make_client(handler).discover(1)

        params = requests[0].url.params
        assert requests[0].url.path.endswith("/discover/movie")
        assert params["with_genres"] == "27"
        assert params["sort_by"] == "popularity.desc"
        assert params["page"] == "1"
        assert [m.id for m in result.results] == [5]
        assert result.total_pages == 3
        assert result.total_results == 60

    @pytest.mark.asyncio
    async def test_filters_reach_upstream(self, make_client: ClientFactory) -> None:
        handler, requests = _recording_handler(make_page([1]))

        await make_client(handler).discover(
            page=2,
            genre_ids=[53],
            year_range=YearRange(2000, 2010),
            runtime_filter="long",
            sort_by="vote_average.desc",
        )

        params = requests[0].url.params
        assert params["with_genres"] == "53"
        assert params["page"] == "2"
        assert params["primary_release_date.gte"] == "2000-01-01"
        assert params["with_runtime.gte"] == "150"
        assert params["sort_by"] == "vote_average.desc"


class TestSearch:
    @pytest.mark.asyncio
    async def test_keeps_horror_only(self, make_client: ClientFactory) -> None:
        payload = {
            "page": 1,
            "total_pages": 2,
            "total_results": 40,
            "results": [
                {"id": 1, "title": "Scary", "genre_ids": [27]},
                {"id": 2, "title": "Funny", "genre_ids": [35]},
                {"id": 3, "title": "Unknown"},
            ],
        }
        handler, requests = _recording_handler(payload)

        result = await make_client(handler).search("test", 1)

        assert [m.id for m in result.results] == [1]
        assert result.total_results == 1
        assert result.total_pages == 2
        params = requests[0].url.params
        assert params["query"] == "test"
        assert params["include_adult"] == "false"


class TestDetail:
    @pytest.mark.asyncio
    async def test_appends_videos(
        self, make_client: ClientFactory, sample_tmdb_detail: dict
    ) -> None:
        handler, requests = _recording_handler(sample_tmdb_detail)

        movie = await make_client(handler).get_detail(694)

        assert requests[0].url.path.endswith("/movie/694")
        assert requests[0].url.params["append_to_response"] == "videos"
        assert movie.trailer_key == "S014oGZiSdI"

    @pytest.mark.asyncio
    async def test_not_found(self, make_client: ClientFactory) -> None:
        handler, _ = _recording_handler({"status_code": 34}, status=404)
        with pytest.raises(NotFoundError):
            await make_client(handler).get_detail(999999)

    @pytest.mark.asyncio
    async def test_bad_key(self, make_client: ClientFactory) -> None:
        handler, _ = _recording_handler({"status_code": 7}, status=401)
        with pytest.raises(AuthError):
            await make_client(handler).get_detail(1)


class TestRelated:
    @pytest.mark.asyncio
    async def test_recommendations_truncated(self, make_client: ClientFactory) -> None:
        handler, requests = _recording_handler(make_page(list(range(1, 21))))

        movies = await make_client(handler).get_recommendations(694)

        assert [m.id for m in movies] == [1, 2, 3, 4, 5, 6]
        assert requests[0].url.path.endswith("/movie/694/recommendations")
        assert requests[0].url.params["page"] == "1"

    @pytest.mark.asyncio
    async def test_similar_truncated(self, make_client: ClientFactory) -> None:
        handler, requests = _recording_handler(make_page([10, 11, 12]))

        movies = await make_client(handler).get_similar(694, page=2)

        assert [m.id for m in movies] == [10, 11, 12]
        assert requests[0].url.path.endswith("/movie/694/similar")
        assert requests[0].url.params["page"] == "2"


class TestGenres:
    @pytest.mark.asyncio
    async def test_list_genres(self, make_client: ClientFactory) -> None:
        handler, requests = _recording_handler({"genres": [{"id": 27, "name": "Horror"}]})

        genres = await make_client(handler).list_genres()

        assert genres == [Genre(id=27, name="Horror")]
        assert requests[0].url.path.endswith("/genre/movie/list")
