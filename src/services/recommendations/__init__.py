"""Recommendation services package."""

from src.services.recommendations.basic import BasicRecommender
from src.services.recommendations.engine import RecommendationEngine, ScoredCandidate
from src.services.recommendations.errors import DataAccessError, RecommendationError
from src.services.recommendations.similarity import genre_similarity, recency_score
from src.services.recommendations.sources import (
    HistoryEntry,
    ShowSnapshot,
    SQLShowCatalog,
    SQLWatchHistoryRepository,
)

__all__ = [
    "BasicRecommender",
    "DataAccessError",
    "HistoryEntry",
    "RecommendationEngine",
    "RecommendationError",
    "SQLShowCatalog",
    "SQLWatchHistoryRepository",
    "ScoredCandidate",
    "ShowSnapshot",
    "genre_similarity",
    "recency_score",
]
