"""TMDB HTTP transport.

Every call runs through a fixed middleware pipeline:

    throttle -> credentials -> timeout -> send -> error-map

Each stage is an async callable taking the request and the next handler,
so stages can be exercised one at a time.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field, replace
from types import TracebackType
from typing import Any

import httpx

from horror_catalog.catalog.errors import (
    AuthError,
    CatalogError,
    NetworkError,
    NotFoundError,
    PayloadValidationError,
    RateLimitError,
    RequestTimeoutError,
    ServiceUnavailableError,
    UnknownApiError,
)
from horror_catalog.catalog.throttler import RequestThrottler
from horror_catalog.settings import TMDBSettings, settings
from horror_catalog.utils.logger import setup_logger

logger = setup_logger("catalog.transport")


@dataclass(frozen=True)
class CatalogRequest:
    """One logical GET against the catalog.

    Attributes:
        endpoint: API path relative to the base URL.
        params: Query parameters.
    """

    endpoint: str
    params: dict[str, Any] = field(default_factory=dict)

    def with_params(self, **extra: Any) -> "CatalogRequest":
        """Return a copy with additional query parameters."""
        return replace(self, params={**self.params, **extra})


Handler = Callable[[CatalogRequest], Awaitable[Any]]
Middleware = Callable[[CatalogRequest, Handler], Awaitable[Any]]


# =============================================================================
# MIDDLEWARE STAGES
# =============================================================================


def throttle_stage(throttler: RequestThrottler) -> Middleware:
    """Queue the request until the throttler admits it."""

    async def stage(request: CatalogRequest, call_next: Handler) -> Any:
        admitted = await throttler.admit(request)
        return await call_next(admitted)

    return stage


def credentials_stage(api_key: str) -> Middleware:
    """Attach the API key as a query parameter."""

    async def stage(request: CatalogRequest, call_next: Handler) -> Any:
        return await call_next(request.with_params(api_key=api_key))

    return stage


def timeout_stage(seconds: float) -> Middleware:
    """Bound the rest of the pipeline by a wall-clock deadline."""

    async def stage(request: CatalogRequest, call_next: Handler) -> Any:
        try:
            return await asyncio.wait_for(call_next(request), timeout=seconds)
        except asyncio.TimeoutError as e:
            logger.warning(f"Request timeout: {request.endpoint}")
            raise RequestTimeoutError(
                f"Request exceeded {seconds:g}s: {request.endpoint}"
            ) from e

    return stage


async def error_map_stage(request: CatalogRequest, call_next: Handler) -> Any:
    """Convert transport failures into the catalog error taxonomy."""
    try:
        response = await call_next(request)
    except CatalogError:
        raise
    except httpx.TimeoutException as e:
        logger.warning(f"Request timeout: {request.endpoint}")
        raise RequestTimeoutError(f"Timed out: {request.endpoint}") from e
    except httpx.TransportError as e:
        logger.warning(f"Network failure on {request.endpoint}: {e}")
        raise NetworkError(f"Connection failed: {request.endpoint}") from e

    return handle_response(response, request.endpoint)


def handle_response(response: httpx.Response, endpoint: str) -> Any:
    """Handle HTTP response and extract JSON.

    Args:
        response: HTTP response object.
        endpoint: API endpoint (for messages).

    Returns:
        Decoded JSON payload, unmodified.

    Raises:
        AuthError: Credential rejected (401).
        NotFoundError: Resource not found (404).
        RateLimitError: Upstream throttling (429).
        ServiceUnavailableError: Upstream failure (500/503).
        UnknownApiError: Any other non-2xx status.
        PayloadValidationError: Body is not JSON.
    """
    status = response.status_code

    if response.is_success:
        try:
            return response.json()
        except ValueError as e:
            raise PayloadValidationError(f"Invalid JSON body: {endpoint}") from e

    if status == 401:
        raise AuthError(f"Invalid API key: {endpoint}")

    if status == 404:
        raise NotFoundError(f"Not found: {endpoint}")

    if status == 429:
        retry_after = response.headers.get("Retry-After")
        logger.warning(f"Rate limited. Retry after {retry_after or '?'}s")
        raise RateLimitError(f"Rate limited: {endpoint}", retry_after=retry_after)

    if status in (500, 503):
        logger.error(f"TMDB unavailable ({status}): {endpoint}")
        raise ServiceUnavailableError(f"TMDB unavailable ({status}): {endpoint}")

    error_msg = f"TMDB API error {status}: {endpoint}"
    logger.error(error_msg)
    raise UnknownApiError(error_msg, status_code=status)


def compose(middlewares: Sequence[Middleware], endpoint: Handler) -> Handler:
    """Chain middlewares around a terminal handler, outermost first."""
    handler = endpoint
    for middleware in reversed(middlewares):
        handler = _bind(middleware, handler)
    return handler


def _bind(middleware: Middleware, call_next: Handler) -> Handler:
    async def handler(request: CatalogRequest) -> Any:
        return await middleware(request, call_next)

    return handler


# =============================================================================
# TRANSPORT
# =============================================================================


class CatalogTransport:
    """Async HTTP transport for the TMDB API.

    Use as an async context manager, or pass a ready `httpx.AsyncClient`.
    """

    def __init__(
        self,
        tmdb: TMDBSettings | None = None,
        throttler: RequestThrottler | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize transport.

        Args:
            tmdb: TMDB settings. Defaults to the shared settings.
            throttler: Admission throttler. Built from settings when omitted.
            client: Preconfigured HTTP client (tests use a mock transport).
        """
        self._settings = tmdb or settings.tmdb
        self._throttler = throttler or RequestThrottler.from_settings(self._settings)
        self._client = client
        self._owns_client = client is None

        self._pipeline = compose(
            [
                throttle_stage(self._throttler),
                credentials_stage(self._settings.api_key),
                timeout_stage(self._settings.timeout_seconds),
                error_map_stage,
            ],
            self._send,
        )

    @property
    def throttler(self) -> RequestThrottler:
        """Admission throttler shared by every call."""
        return self._throttler

    async def __aenter__(self) -> "CatalogTransport":
        """Enter context and create HTTP client if needed."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._settings.timeout_seconds)
            self._owns_client = True
        return self

    async def __aexit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        """Exit context and close the HTTP client we created."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the owned HTTP client."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        """Execute one GET through the middleware pipeline.

        Args:
            endpoint: API endpoint path.
            params: Optional query parameters.

        Returns:
            Raw JSON payload.

        Raises:
            CatalogError: Any kind of the catalog error taxonomy.
        """
        return await self._pipeline(CatalogRequest(endpoint, dict(params or {})))

    async def _send(self, request: CatalogRequest) -> httpx.Response:
        """Terminal handler: perform the HTTP call."""
        if self._client is None:
            msg = "Transport not initialized. Use async context manager."
            raise RuntimeError(msg)

        url = f"{self._settings.base_url}{request.endpoint}"
        return await self._client.get(url, params=request.params)
