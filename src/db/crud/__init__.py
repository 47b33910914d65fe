"""CRUD operations module."""

from src.db.crud.shows import get_show_by_external_id, upsert_show
from src.db.crud.watchlist import (
    add_to_watchlist,
    get_watchlist,
    get_watchlist_entry,
    remove_from_watchlist,
    update_watchlist_entry,
)

__all__ = [
    "add_to_watchlist",
    "get_show_by_external_id",
    "get_watchlist",
    "get_watchlist_entry",
    "remove_from_watchlist",
    "update_watchlist_entry",
    "upsert_show",
]
