"""Durable storage slots for the watchlist payload."""

from pathlib import Path
from typing import Protocol

from horror_catalog.utils.logger import setup_logger

logger = setup_logger("watchlist.storage")


class WatchlistStorage(Protocol):
    """One named slot holding a serialized payload."""

    def read(self) -> str | None:
        """Return the stored payload, or None if the slot is empty."""
        ...

    def write(self, payload: str) -> None:
        """Overwrite the slot with the payload."""
        ...


class JsonFileStorage:
    """Store the payload in a single JSON file.

    Writes go to a temporary sibling file first, then replace the target.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> str | None:
        if not self._path.exists():
            return None
        with open(self._path, encoding="utf-8") as f:
            return f.read()

    def write(self, payload: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(payload)
        tmp_path.replace(self._path)
        logger.debug(f"Watchlist saved: {self._path.name}")


class MemoryStorage:
    """In-memory slot, for tests and ephemeral sessions."""

    def __init__(self, payload: str | None = None) -> None:
        self.payload = payload
        self.writes = 0

    def read(self) -> str | None:
        return self.payload

    def write(self, payload: str) -> None:
        self.payload = payload
        self.writes += 1
