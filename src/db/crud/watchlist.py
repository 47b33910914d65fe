"""CRUD operations for watchlist entries."""

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.schemas import WatchlistUpdate
from src.models.watchlist import WatchlistEntry, WatchStatus


async def get_watchlist_entry(
    db: AsyncSession,
    user_id: int,
    show_id: int,
) -> WatchlistEntry | None:
    """Get a single watchlist entry (with its show) for a user."""
    result = await db.execute(
        select(WatchlistEntry).where(
            WatchlistEntry.user_id == user_id,
            WatchlistEntry.show_id == show_id,
        )
    )
    return result.scalar_one_or_none()


async def get_watchlist(
    db: AsyncSession,
    user_id: int,
    status: WatchStatus | None = None,
) -> Sequence[WatchlistEntry]:
    """Get a user's watchlist, most recently updated first."""
    query = select(WatchlistEntry).where(WatchlistEntry.user_id == user_id)
    if status is not None:
        query = query.where(WatchlistEntry.status == status)
    query = query.order_by(WatchlistEntry.updated_at.desc(), WatchlistEntry.id.desc())

    result = await db.execute(query)
    return result.scalars().all()


async def add_to_watchlist(
    db: AsyncSession,
    user_id: int,
    show_id: int,
    status: WatchStatus = WatchStatus.WATCHING,
) -> WatchlistEntry:
    """Add a show to a user's watchlist.

    Adding a show that is already listed returns the existing entry unchanged.
    """
    existing = await get_watchlist_entry(db, user_id, show_id)
    if existing:
        return existing

    entry = WatchlistEntry(user_id=user_id, show_id=show_id, status=status)
    db.add(entry)
    await db.commit()
    await db.refresh(entry)
    return entry


async def update_watchlist_entry(
    db: AsyncSession,
    user_id: int,
    show_id: int,
    data: WatchlistUpdate,
) -> WatchlistEntry | None:
    """Change status and/or rating. Passing ``rating=None`` explicitly clears it."""
    entry = await get_watchlist_entry(db, user_id, show_id)
    if not entry:
        return None

    changes = data.model_dump(exclude_unset=True)
    if "status" in changes and data.status is not None:
        entry.status = data.status
    if "rating" in changes:
        entry.rating = data.rating

    await db.commit()
    await db.refresh(entry)
    return entry


async def remove_from_watchlist(
    db: AsyncSession,
    user_id: int,
    show_id: int,
) -> bool:
    """Delete a watchlist entry."""
    entry = await get_watchlist_entry(db, user_id, show_id)
    if not entry:
        return False

    await db.delete(entry)
    await db.commit()
    return True
