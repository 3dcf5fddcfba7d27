"""Horror movie catalog: TMDB data access, query cache and watchlist."""

__version__ = "1.0.0"
