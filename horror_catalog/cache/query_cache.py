"""Keyed query cache with request deduplication and retries.

Entries age through three bands: fresh (served as is), stale (served
and refreshed in the background) and expired (evicted). At most one
fetch per key is in flight; concurrent callers share its outcome.
"""

import asyncio
import json
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
)

from horror_catalog.cache.policies import CachePolicy
from horror_catalog.catalog.errors import RETRYABLE_ERRORS
from horror_catalog.utils.logger import setup_logger

logger = setup_logger("cache.query")

T = TypeVar("T")

Fetcher = Callable[[], Awaitable[T]]
Clock = Callable[[], float]
Sleeper = Callable[[float], Awaitable[None]]


# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass
class CacheEntry(Generic[T]):
    """Cached payload of one query.

    Attributes:
        key: Stable serialization of (operation, params).
        operation: Operation name, used for invalidation.
        payload: Fetched value.
        fetched_at: Clock time of the fetch.
        stale_time: Age after which the entry is stale.
        gc_time: Age after which the entry is evicted.
    """

    key: str
    operation: str
    payload: T
    fetched_at: float
    stale_time: float
    gc_time: float

    def age(self, now: float) -> float:
        return now - self.fetched_at

    def is_stale(self, now: float) -> bool:
        return self.age(now) >= self.stale_time

    def is_expired(self, now: float) -> bool:
        return self.age(now) >= self.gc_time


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """Settled outcome of a query: either data or a typed error."""

    data: T | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return data or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.data  # type: ignore[return-value]


# =============================================================================
# QUERY CACHE
# =============================================================================


class QueryCache:
    """In-memory query cache owned by a single event loop."""

    def __init__(
        self,
        clock: Clock = time.monotonic,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        """Initialize cache.

        Args:
            clock: Monotonic time source for entry ages.
            sleep: Coroutine used between retry attempts.
        """
        self._clock = clock
        self._sleep = sleep
        self._entries: dict[str, CacheEntry[Any]] = {}
        self._in_flight: dict[str, asyncio.Task[Any]] = {}
        self._background: set[asyncio.Task[Any]] = set()

    def __len__(self) -> int:
        return len(self._entries)

    @staticmethod
    def make_key(operation: str, params: dict[str, Any] | None = None) -> str:
        """Serialize (operation, params) independently of dict order."""
        return json.dumps(
            [operation, params or {}],
            sort_keys=True,
            separators=(",", ":"),
            default=str,
        )

    # -------------------------------------------------------------------------
    # Lookup & fetch
    # -------------------------------------------------------------------------

    async def fetch(
        self,
        operation: str,
        params: dict[str, Any] | None,
        fetcher: Fetcher[T],
        policy: CachePolicy,
    ) -> T:
        """Return the cached value or fetch it.

        Cancelling the caller does not cancel the underlying fetch; its
        result still populates the cache.

        Args:
            operation: Operation name (e.g. 'movie-detail').
            params: Operation parameters, part of the cache key.
            fetcher: Zero-argument coroutine function producing the value.
            policy: Freshness, eviction and retry policy.

        Returns:
            Cached or freshly fetched value.

        Raises:
            CatalogError: When the fetch fails or exhausts its retries.
        """
        key = self.make_key(operation, params)
        now = self._clock()
        entry = self._lookup(key, now)

        if entry is not None:
            if entry.is_stale(now):
                self._refresh_in_background(key, operation, fetcher, policy)
            return entry.payload

        task = self._start_fetch(key, operation, fetcher, policy)
        return await asyncio.shield(task)

    async def settle(
        self,
        operation: str,
        params: dict[str, Any] | None,
        fetcher: Fetcher[T],
        policy: CachePolicy,
    ) -> QueryResult[T]:
        """Like `fetch`, but return failures as a QueryResult."""
        try:
            return QueryResult(data=await self.fetch(operation, params, fetcher, policy))
        except Exception as e:
            return QueryResult(error=e)

    def peek(self, operation: str, params: dict[str, Any] | None = None) -> Any | None:
        """Return a live cached payload without fetching."""
        entry = self._lookup(self.make_key(operation, params), self._clock())
        return entry.payload if entry is not None else None

    def is_fetching(self, operation: str, params: dict[str, Any] | None = None) -> bool:
        """Whether a fetch for this query is in flight."""
        return self.make_key(operation, params) in self._in_flight

    # -------------------------------------------------------------------------
    # Eviction
    # -------------------------------------------------------------------------

    def collect_garbage(self) -> int:
        """Evict every expired entry.

        Returns:
            Number of evicted entries.
        """
        now = self._clock()
        expired = [k for k, e in self._entries.items() if e.is_expired(now)]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug(f"Evicted {len(expired)} expired entries")
        return len(expired)

    def invalidate(self, operation: str | None = None) -> int:
        """Drop cached entries, all of them or those of one operation.

        Returns:
            Number of dropped entries.
        """
        keys = [
            k
            for k, e in self._entries.items()
            if operation is None or e.operation == operation
        ]
        for key in keys:
            del self._entries[key]
        return len(keys)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _lookup(self, key: str, now: float) -> CacheEntry[Any] | None:
        entry = self._entries.get(key)
        if entry is not None and entry.is_expired(now):
            del self._entries[key]
            return None
        return entry

    def _start_fetch(
        self,
        key: str,
        operation: str,
        fetcher: Fetcher[T],
        policy: CachePolicy,
    ) -> "asyncio.Task[T]":
        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._run(key, operation, fetcher, policy))
            task.add_done_callback(_retrieve_exception)
            self._in_flight[key] = task
        return task

    def _refresh_in_background(
        self,
        key: str,
        operation: str,
        fetcher: Fetcher[Any],
        policy: CachePolicy,
    ) -> None:
        if key in self._in_flight:
            return
        logger.debug(f"Stale entry, refreshing: {operation}")
        task = self._start_fetch(key, operation, fetcher, policy)
        self._background.add(task)
        task.add_done_callback(self._on_refresh_done)

    def _on_refresh_done(self, task: "asyncio.Task[Any]") -> None:
        self._background.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.warning(f"Background refresh failed: {task.exception()}")

    async def _run(
        self,
        key: str,
        operation: str,
        fetcher: Fetcher[T],
        policy: CachePolicy,
    ) -> T:
        try:
            payload = await self._fetch_with_retry(operation, fetcher, policy)
            self._entries[key] = CacheEntry(
                key=key,
                operation=operation,
                payload=payload,
                fetched_at=self._clock(),
                stale_time=policy.stale_time,
                gc_time=policy.gc_time,
            )
            return payload
        finally:
            self._in_flight.pop(key, None)

    async def _fetch_with_retry(
        self,
        operation: str,
        fetcher: Fetcher[T],
        policy: CachePolicy,
    ) -> T:
        retrying = AsyncRetrying(
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            stop=stop_after_attempt(policy.retries),
            wait=_policy_wait(policy),
            sleep=self._sleep,
            before_sleep=_log_retry(operation),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                payload = await fetcher()
        return payload


def _policy_wait(policy: CachePolicy) -> Callable[[RetryCallState], float]:
    def wait(retry_state: RetryCallState) -> float:
        return policy.backoff(retry_state.attempt_number - 1)

    return wait


def _log_retry(operation: str) -> Callable[[RetryCallState], None]:
    def log(retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
        logger.warning(
            f"{operation} attempt {retry_state.attempt_number} failed ({error!r}), "
            f"retrying in {delay:.1f}s"
        )

    return log


def _retrieve_exception(task: "asyncio.Task[Any]") -> None:
    """Mark a task's exception as retrieved; callers still receive it."""
    if not task.cancelled():
        task.exception()
