"""Persisted watchlist."""

from horror_catalog.watchlist.storage import (
    JsonFileStorage,
    MemoryStorage,
    WatchlistStorage,
)
from horror_catalog.watchlist.store import DEFAULT_MAX_SIZE, WatchlistStore

__all__ = [
    "DEFAULT_MAX_SIZE",
    "JsonFileStorage",
    "MemoryStorage",
    "WatchlistStorage",
    "WatchlistStore",
]
