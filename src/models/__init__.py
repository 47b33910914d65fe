"""SQLAlchemy models."""

from src.models.base import Base
from src.models.show import Show
from src.models.user import User
from src.models.watchlist import WatchlistEntry, WatchStatus

__all__ = [
    "Base",
    "User",
    "Show",
    "WatchlistEntry",
    "WatchStatus",
]
