"""Database module."""

from src.db.database import (
    async_session_maker,
    engine,
    init_db,
)

__all__ = [
    "async_session_maker",
    "engine",
    "init_db",
]
