"""Discovery filter types."""

from enum import Enum
from typing import NamedTuple


class YearRange(NamedTuple):
    """Inclusive release year bounds."""

    min: int
    max: int


class RatingRange(NamedTuple):
    """Inclusive average rating bounds."""

    min: float
    max: float


class RuntimeFilter(str, Enum):
    """Runtime buckets accepted by discovery."""

    ALL = "all"
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class SortKey(str, Enum):
    """Upstream orderings known to the catalog.

    Any other string is still passed through verbatim.
    """

    POPULARITY_DESC = "popularity.desc"
    POPULARITY_ASC = "popularity.asc"
    RATING_DESC = "vote_average.desc"
    RATING_ASC = "vote_average.asc"
    RELEASE_DATE_DESC = "primary_release_date.desc"
    RELEASE_DATE_ASC = "primary_release_date.asc"
    TITLE_ASC = "title.asc"
    TITLE_DESC = "title.desc"
