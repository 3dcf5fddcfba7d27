"""Catalog error taxonomy.

Every failure surfaced by the transport is one of the classes below.
Each kind carries a retry flag used by the query cache and a
human-readable message category for the presentation layer.
"""


class CatalogError(Exception):
    """Base exception for catalog errors."""

    retryable: bool = False
    user_message: str = "Something sinister happened..."


class AuthError(CatalogError):
    """Raised when the API credential is rejected (401)."""

    user_message = "The crypt keeper denies entry. Check your API key."


class NotFoundError(CatalogError):
    """Raised when the requested resource is absent (404)."""

    user_message = "This movie has vanished into the void..."


class RateLimitError(CatalogError):
    """Raised when the upstream throttles us (429)."""

    retryable = True
    user_message = "Too many requests. The crypt is overwhelmed..."

    def __init__(self, message: str, retry_after: str | None = None) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class ServiceUnavailableError(CatalogError):
    """Raised on upstream server failure (500/503)."""

    retryable = True
    user_message = "The crypt is locked. Try again later."


class NetworkError(CatalogError):
    """Raised when the request or its response never made it."""

    retryable = True
    user_message = "Connection lost in the fog..."


class RequestTimeoutError(CatalogError):
    """Raised when a request exceeds its deadline."""

    retryable = True
    user_message = "The spirits took too long to respond..."


class UnknownApiError(CatalogError):
    """Raised on any other non-2xx response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PayloadValidationError(CatalogError):
    """Raised when a wire payload lacks a required field."""

    user_message = "The catalog returned a cursed record..."


RETRYABLE_ERRORS: tuple[type[CatalogError], ...] = (
    NetworkError,
    RequestTimeoutError,
    ServiceUnavailableError,
    RateLimitError,
)

GENERIC_MESSAGE = CatalogError.user_message


def user_message(error: BaseException) -> str:
    """Map an error to its human-readable message category.

    Args:
        error: Any exception raised by the catalog layer.

    Returns:
        Message for the error kind, or a generic fallback.
    """
    if isinstance(error, CatalogError):
        return error.user_message
    return GENERIC_MESSAGE
