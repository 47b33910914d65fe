"""CRUD operations for locally cached shows."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.schemas import ShowCreate
from src.models.show import Show


async def get_show_by_external_id(db: AsyncSession, external_id: str) -> Show | None:
    """Get a cached show by its AniList id."""
    result = await db.execute(select(Show).where(Show.external_id == external_id))
    return result.scalar_one_or_none()


async def upsert_show(db: AsyncSession, data: ShowCreate) -> Show:
    """Create a show or refresh the cached catalog fields of an existing one."""
    show = await get_show_by_external_id(db, data.external_id)
    if show is None:
        show = Show(external_id=data.external_id)
        db.add(show)

    show.title = data.title
    show.synopsis = data.synopsis
    show.image_url = data.image_url
    show.episodes = data.episodes
    # Catalog genres are distinct in practice; keep first occurrence order
    show.genres = list(dict.fromkeys(data.genres))
    show.avg_rating = data.avg_rating

    await db.commit()
    await db.refresh(show)
    return show
