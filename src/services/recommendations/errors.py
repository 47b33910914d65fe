"""Recommendation errors."""


class RecommendationError(Exception):
    """Base exception for recommendation failures."""

    pass


class DataAccessError(RecommendationError):
    """Watch history or catalog could not be read (includes timeouts)."""

    pass
