"""TMDB catalog access: throttled transport, normalizer and client."""

from horror_catalog.catalog.client import (
    CatalogClient,
    build_discover_params,
    runtime_bounds,
)
from horror_catalog.catalog.errors import (
    RETRYABLE_ERRORS,
    AuthError,
    CatalogError,
    NetworkError,
    NotFoundError,
    PayloadValidationError,
    RateLimitError,
    RequestTimeoutError,
    ServiceUnavailableError,
    UnknownApiError,
    user_message,
)
from horror_catalog.catalog.images import ImageSize, image_url
from horror_catalog.catalog.throttler import RequestThrottler
from horror_catalog.catalog.transport import CatalogRequest, CatalogTransport

__all__ = [
    "CatalogClient",
    "CatalogRequest",
    "CatalogTransport",
    "RequestThrottler",
    "build_discover_params",
    "runtime_bounds",
    "ImageSize",
    "image_url",
    # Errors
    "RETRYABLE_ERRORS",
    "AuthError",
    "CatalogError",
    "NetworkError",
    "NotFoundError",
    "PayloadValidationError",
    "RateLimitError",
    "RequestTimeoutError",
    "ServiceUnavailableError",
    "UnknownApiError",
    "user_message",
]
