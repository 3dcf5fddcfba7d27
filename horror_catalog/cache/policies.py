"""Per-operation cache and retry policies."""

from dataclasses import dataclass

MINUTE = 60.0
HOUR = 60 * MINUTE
DAY = 24 * HOUR


@dataclass(frozen=True)
class CachePolicy:
    """Freshness, eviction and retry policy of one operation.

    Attributes:
        stale_time: Age (s) after which an entry triggers a background refresh.
        gc_time: Age (s) after which an entry is evicted.
        retries: Total fetch attempts before giving up.
        max_backoff: Cap (s) of the exponential retry delay.
    """

    stale_time: float
    gc_time: float
    retries: int
    max_backoff: float

    def backoff(self, attempt: int) -> float:
        """Delay (s) after the given 0-based failed attempt."""
        return min(1.0 * 2**attempt, self.max_backoff)


GENRES_POLICY = CachePolicy(stale_time=DAY, gc_time=7 * DAY, retries=3, max_backoff=30.0)
DETAIL_POLICY = CachePolicy(stale_time=5 * MINUTE, gc_time=10 * MINUTE, retries=3, max_backoff=30.0)
RELATED_POLICY = CachePolicy(stale_time=10 * MINUTE, gc_time=30 * MINUTE, retries=2, max_backoff=10.0)
LISTING_POLICY = CachePolicy(stale_time=5 * MINUTE, gc_time=10 * MINUTE, retries=3, max_backoff=30.0)
