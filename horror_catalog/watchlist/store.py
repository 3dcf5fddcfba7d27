"""Persisted watchlist store.

Bounded, deduplicated, insertion-ordered collection of movies.
Every mutation rewrites the whole persisted payload; a missing or
corrupt payload loads as an empty watchlist.
"""

import json
from collections.abc import Iterator
from typing import Any

from pydantic import ValidationError

from horror_catalog.settings import WatchlistSettings, settings
from horror_catalog.types import MovieSummary, WatchlistEntry
from horror_catalog.utils.logger import setup_logger
from horror_catalog.watchlist.storage import JsonFileStorage, WatchlistStorage

logger = setup_logger("watchlist.store")

DEFAULT_MAX_SIZE = 50


class WatchlistStore:
    """User watchlist backed by a storage slot.

    Call `load()` (or build with `open`) before use.

    Attributes:
        max_size: Maximum number of entries.
    """

    def __init__(
        self,
        storage: WatchlistStorage,
        max_size: int = DEFAULT_MAX_SIZE,
    ) -> None:
        """Initialize an empty store.

        Args:
            storage: Slot holding the serialized watchlist.
            max_size: Maximum number of entries.
        """
        self._storage = storage
        self.max_size = max_size
        self._entries: list[WatchlistEntry] = []

    @classmethod
    def open(
        cls,
        storage: WatchlistStorage,
        max_size: int = DEFAULT_MAX_SIZE,
    ) -> "WatchlistStore":
        """Create a store and load its persisted entries."""
        store = cls(storage, max_size=max_size)
        store.load()
        return store

    @classmethod
    def from_settings(cls, config: WatchlistSettings | None = None) -> "WatchlistStore":
        """Open the file-backed store configured by WATCHLIST_PATH."""
        config = config or settings.watchlist
        return cls.open(JsonFileStorage(config.path), max_size=config.max_size)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def entries(self) -> tuple[WatchlistEntry, ...]:
        return tuple(self._entries)

    @property
    def is_full(self) -> bool:
        return len(self._entries) >= self.max_size

    def contains(self, movie_id: int) -> bool:
        return any(m.id == movie_id for m in self._entries)

    def __contains__(self, movie_id: object) -> bool:
        return isinstance(movie_id, int) and self.contains(movie_id)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[WatchlistEntry]:
        return iter(tuple(self._entries))

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add(self, movie: MovieSummary) -> bool:
        """Append a movie unless already present or the list is full.

        Returns:
            True if the movie was added.
        """
        if self.contains(movie.id):
            logger.warning(f'Movie "{movie.title}" is already in the watchlist')
            return False

        if self.is_full:
            logger.warning(f"Watchlist is full ({self.max_size} movies maximum)")
            return False

        self._entries.append(_as_entry(movie))
        self._save()
        return True

    def remove(self, movie_id: int) -> bool:
        """Remove a movie by id.

        Returns:
            True if a movie was removed.
        """
        remaining = [m for m in self._entries if m.id != movie_id]
        removed = len(remaining) != len(self._entries)
        self._entries = remaining
        self._save()
        return removed

    def clear(self) -> None:
        """Remove every movie."""
        self._entries = []
        self._save()

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def load(self) -> None:
        """Load entries from storage, falling back to an empty list."""
        self._entries = []

        try:
            raw = self._storage.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read watchlist: {e}")
            return

        if raw is None:
            return

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Invalid watchlist payload, starting empty: {e}")
            return

        if not isinstance(data, list):
            logger.warning("Watchlist payload is not a list, starting empty")
            return

        self._entries = self._parse_records(data)
        logger.info(f"Watchlist loaded: {len(self._entries)} movies")

    def dumps(self) -> str:
        """Serialize entries as a JSON array of camelCase records."""
        return json.dumps(
            [m.model_dump(mode="json", by_alias=True) for m in self._entries],
            ensure_ascii=False,
        )

    def _save(self) -> None:
        try:
            self._storage.write(self.dumps())
        except OSError as e:
            logger.error(f"Failed to save watchlist: {e}")

    def _parse_records(self, records: list[Any]) -> list[WatchlistEntry]:
        entries: list[WatchlistEntry] = []
        seen: set[int] = set()

        for record in records:
            try:
                entry = WatchlistEntry.model_validate(record)
            except ValidationError as e:
                logger.warning(f"Skipping invalid watchlist record: {e.error_count()} errors")
                continue

            if entry.id in seen:
                continue
            if len(entries) >= self.max_size:
                logger.warning(f"Watchlist payload exceeds {self.max_size} movies, truncating")
                break

            seen.add(entry.id)
            entries.append(entry)

        return entries


def _as_entry(movie: MovieSummary) -> WatchlistEntry:
    """Keep only summary fields, e.g. when adding a MovieDetail."""
    if type(movie) is WatchlistEntry:
        return movie
    return WatchlistEntry.model_validate(movie.model_dump(include=set(WatchlistEntry.model_fields)))
