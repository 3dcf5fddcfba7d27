"""Query cache and cached catalog queries."""

from horror_catalog.cache.policies import (
    DETAIL_POLICY,
    GENRES_POLICY,
    LISTING_POLICY,
    RELATED_POLICY,
    CachePolicy,
)
from horror_catalog.cache.queries import FeedOptions, MovieFeed, MovieQueries
from horror_catalog.cache.query_cache import CacheEntry, QueryCache, QueryResult

__all__ = [
    "CacheEntry",
    "CachePolicy",
    "FeedOptions",
    "MovieFeed",
    "MovieQueries",
    "QueryCache",
    "QueryResult",
    "DETAIL_POLICY",
    "GENRES_POLICY",
    "LISTING_POLICY",
    "RELATED_POLICY",
]
