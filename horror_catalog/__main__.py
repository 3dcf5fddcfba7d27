"""Command line entry point. Allows python -m horror_catalog."""

import argparse
import asyncio
import sys
from collections.abc import Iterable, Sequence

from horror_catalog.catalog import CatalogClient, CatalogError, user_message
from horror_catalog.types import MovieSummary, RatingRange, RuntimeFilter, YearRange
from horror_catalog.utils.logger import set_level, setup_logger
from horror_catalog.watchlist import WatchlistStore

logger = setup_logger("horror_catalog.cli")


# =============================================================================
# ARGUMENT PARSING
# =============================================================================


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="horror_catalog",
        description="Browse horror movies from TMDB and manage a watchlist",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    discover = commands.add_parser("discover", help="Discover horror movies")
    discover.add_argument("--page", type=int, default=1)
    discover.add_argument("--genres", type=int, nargs="+", default=None, help="Genre IDs")
    discover.add_argument("--year-min", type=int, default=None)
    discover.add_argument("--year-max", type=int, default=None)
    discover.add_argument("--rating-min", type=float, default=None)
    discover.add_argument("--rating-max", type=float, default=None)
    discover.add_argument(
        "--runtime",
        choices=[r.value for r in RuntimeFilter],
        default=RuntimeFilter.ALL.value,
    )
    discover.add_argument("--sort", default=None, help="e.g. vote_average.desc")

    search = commands.add_parser("search", help="Search horror movies by title")
    search.add_argument("query")
    search.add_argument("--page", type=int, default=1)

    detail = commands.add_parser("detail", help="Show movie details")
    detail.add_argument("movie_id", type=int)

    commands.add_parser("genres", help="List genres")

    recommend = commands.add_parser("recommend", help="Recommendations for a movie")
    recommend.add_argument("movie_id", type=int)
    recommend.add_argument("--similar", action="store_true", help="Similar movies instead")

    watchlist = commands.add_parser("watchlist", help="Manage the watchlist")
    actions = watchlist.add_subparsers(dest="action", required=True)
    actions.add_parser("list")
    add = actions.add_parser("add")
    add.add_argument("movie_id", type=int)
    remove = actions.add_parser("remove")
    remove.add_argument("movie_id", type=int)
    actions.add_parser("clear")

    return parser


# =============================================================================
# COMMAND HANDLERS
# =============================================================================


def _print_movies(movies: Iterable[MovieSummary]) -> None:
    for movie in movies:
        year = movie.release_date[:4] or "????"
        print(f"{movie.id:>8}  {movie.vote_average:>4.1f}  {year}  {movie.title}")


def _range(low: float | None, high: float | None, factory: type) -> object | None:
    if low is None and high is None:
        return None
    return factory(low if low is not None else high, high if high is not None else low)


async def _run_catalog(args: argparse.Namespace) -> None:
    async with CatalogClient() as client:
        if args.command == "discover":
            page = await client.discover(
                page=args.page,
                genre_ids=args.genres,
                year_range=_range(args.year_min, args.year_max, YearRange),
                rating_range=_range(args.rating_min, args.rating_max, RatingRange),
                runtime_filter=args.runtime,
                sort_by=args.sort,
            )
            _print_movies(page.results)
            print(f"Page {page.page}/{page.total_pages} ({page.total_results} results)")

        elif args.command == "search":
            page = await client.search(args.query, args.page)
            _print_movies(page.results)
            print(f"Page {page.page}/{page.total_pages} ({page.total_results} results)")

        elif args.command == "detail":
            movie = await client.get_detail(args.movie_id)
            print(f"{movie.title} ({movie.release_date[:4]}) - {movie.runtime} min")
            if movie.tagline:
                print(movie.tagline)
            print(", ".join(g.name for g in movie.genres))
            print(movie.overview)
            if movie.trailer_key:
                print(f"Trailer: https://www.youtube.com/watch?v={movie.trailer_key}")

        elif args.command == "genres":
            for genre in await client.list_genres():
                print(f"{genre.id:>6}  {genre.name}")

        elif args.command == "recommend":
            if args.similar:
                movies = await client.get_similar(args.movie_id)
            else:
                movies = await client.get_recommendations(args.movie_id)
            _print_movies(movies)


async def _run_watchlist(args: argparse.Namespace, store: WatchlistStore) -> None:
    if args.action == "list":
        _print_movies(store)
        print(f"{len(store)}/{store.max_size} movies")

    elif args.action == "add":
        async with CatalogClient() as client:
            movie = await client.get_detail(args.movie_id)
        if store.add(movie):
            print(f"Added: {movie.title}")

    elif args.action == "remove":
        if store.remove(args.movie_id):
            print(f"Removed: {args.movie_id}")

    elif args.action == "clear":
        store.clear()
        print("Watchlist cleared")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI.

    Returns:
        Process exit status.
    """
    args = _build_parser().parse_args(argv)
    if args.verbose:
        set_level("DEBUG")

    try:
        if args.command == "watchlist":
            asyncio.run(_run_watchlist(args, WatchlistStore.from_settings()))
        else:
            asyncio.run(_run_catalog(args))
    except CatalogError as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(user_message(e), file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
