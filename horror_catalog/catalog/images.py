"""Image URL resolution for TMDB image paths."""

from enum import Enum

from horror_catalog.settings import settings


class ImageSize(str, Enum):
    """Named size buckets and their TMDB size tokens."""

    POSTER_SMALL = "w342"
    POSTER_MEDIUM = "w500"
    POSTER_LARGE = "w780"
    BACKDROP_SMALL = "w780"
    BACKDROP_LARGE = "w1280"
    ORIGINAL = "original"


def image_url(
    path: str | None,
    size: ImageSize = ImageSize.POSTER_MEDIUM,
    base_url: str | None = None,
) -> str | None:
    """Build a full image URL from an opaque TMDB path.

    Args:
        path: Image path as returned by the catalog (e.g. '/abc.jpg').
        size: Size bucket.
        base_url: Image host. Defaults to TMDB_IMAGE_BASE_URL.

    Returns:
        Full image URL or None if path is empty.
    """
    if not path:
        return None

    host = (base_url or settings.tmdb.image_base_url).rstrip("/")
    return f"{host}/{size.value}{path}"
