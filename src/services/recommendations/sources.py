"""Read-only data sources consumed by the recommenders.

The recommenders only see immutable snapshots of a user's watchlist and of the
show catalog. Each source is a protocol so tests can pass in-memory fakes; the
SQL implementations open their own session per read, which lets the engine run
independent reads concurrently.
"""

from collections.abc import Collection, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from src.models.show import Show
from src.models.watchlist import WatchlistEntry, WatchStatus
from src.services.catalog.anilist import CatalogShow


@dataclass(frozen=True)
class ShowSnapshot:
    """A show as seen by the scoring code."""

    id: int
    title: str
    genres: tuple[str, ...] = field(default_factory=tuple)
    avg_rating: float | None = None  # 0-5
    external_id: str | None = None
    image_url: str | None = None
    synopsis: str | None = None


@dataclass(frozen=True)
class HistoryEntry:
    """One watchlist row joined with its show."""

    show_id: int
    status: WatchStatus
    rating: int | None
    updated_at: datetime
    show: ShowSnapshot


class WatchHistoryRepository(Protocol):
    async def load_retained_history(self, user_id: int) -> list[HistoryEntry]:
        """Non-dropped entries, most recently updated first."""
        ...

    async def load_known_show_ids(self, user_id: int) -> set[int]:
        """Every show id the user ever added, dropped ones included."""
        ...

    async def load_rated_history(self, user_id: int) -> list[HistoryEntry]:
        """Entries with a rating (any status), most recently updated first."""
        ...

    async def load_known_external_ids(self, user_id: int) -> set[str]:
        """Catalog ids of every show the user ever added."""
        ...


class ShowCatalog(Protocol):
    async def load_candidate_shows(self, excluding: Collection[int]) -> Sequence[ShowSnapshot]:
        """Catalog shows whose id is not in ``excluding``, in a stable order."""
        ...


class ExternalCatalog(Protocol):
    async def fetch_by_genres(self, genres: list[str]) -> list[CatalogShow]:
        ...


def to_snapshot(show: Show) -> ShowSnapshot:
    return ShowSnapshot(
        id=show.id,
        title=show.title,
        genres=tuple(show.genres or ()),
        avg_rating=show.avg_rating,
        external_id=show.external_id,
        image_url=show.image_url,
        synopsis=show.synopsis,
    )


def _to_history_entry(entry: WatchlistEntry) -> HistoryEntry:
    return HistoryEntry(
        show_id=entry.show_id,
        status=entry.status,
        rating=entry.rating,
        updated_at=entry.updated_at,
        show=to_snapshot(entry.show),
    )


class SQLWatchHistoryRepository:
    """Watch history backed by the ``watchlist`` table."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker

    async def _load_entries(self, *criteria) -> list[HistoryEntry]:
        query = (
            select(WatchlistEntry)
            .options(selectinload(WatchlistEntry.show))
            .where(*criteria)
            .order_by(WatchlistEntry.updated_at.desc(), WatchlistEntry.id.desc())
        )
        async with self._session_maker() as db:
            result = await db.execute(query)
            return [_to_history_entry(entry) for entry in result.scalars().all()]

    async def load_retained_history(self, user_id: int) -> list[HistoryEntry]:
        return await self._load_entries(
            WatchlistEntry.user_id == user_id,
            WatchlistEntry.status != WatchStatus.DROPPED,
        )

    async def load_rated_history(self, user_id: int) -> list[HistoryEntry]:
        return await self._load_entries(
            WatchlistEntry.user_id == user_id,
            WatchlistEntry.rating.is_not(None),
        )

    async def load_known_show_ids(self, user_id: int) -> set[int]:
        async with self._session_maker() as db:
            result = await db.execute(
                select(WatchlistEntry.show_id).where(WatchlistEntry.user_id == user_id)
            )
            return set(result.scalars().all())

    async def load_known_external_ids(self, user_id: int) -> set[str]:
        async with self._session_maker() as db:
            result = await db.execute(
                select(Show.external_id)
                .join(WatchlistEntry, WatchlistEntry.show_id == Show.id)
                .where(WatchlistEntry.user_id == user_id)
            )
            return set(result.scalars().all())


class SQLShowCatalog:
    """Locally cached shows as the candidate catalog, ordered by id."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker

    async def load_candidate_shows(self, excluding: Collection[int]) -> list[ShowSnapshot]:
        query = select(Show).order_by(Show.id)
        if excluding:
            query = query.where(Show.id.not_in(list(excluding)))
        async with self._session_maker() as db:
            result = await db.execute(query)
            return [to_snapshot(show) for show in result.scalars().all()]
