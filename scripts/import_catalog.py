#!/usr/bin/env python3
"""Cache popular AniList shows locally so the recommendation engine can rank them.

Usage:
    python scripts/import_catalog.py [--genres Action Drama ...] [--pages=N]

Options:
    --genres    Genres to import (default: Action Adventure Fantasy)
    --pages     Number of 50-show pages to fetch (default: 1)
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.constants import BASIC_DEFAULT_GENRES
from src.db.crud.shows import upsert_show
from src.db.database import async_session_maker, init_db
from src.models.schemas import ShowCreate
from src.services.catalog.anilist import AniListError, anilist_service
from src.utils.http_client import close_all_clients
from src.utils.logging import setup_logging

logger = logging.getLogger(__name__)


async def import_catalog(genres: list[str], pages: int) -> int:
    """Fetch shows page by page and upsert them. Returns the number of shows stored."""
    await init_db()
    stored = 0

    try:
        async with async_session_maker() as db:
            for page in range(1, pages + 1):
                shows = await anilist_service.fetch_by_genres(genres, page=page)
                if not shows:
                    break

                for show in shows:
                    await upsert_show(
                        db,
                        ShowCreate(
                            external_id=show.external_id,
                            title=show.title,
                            synopsis=show.synopsis,
                            image_url=show.image_url,
                            episodes=show.episodes,
                            genres=list(show.genres),
                            avg_rating=show.star_rating,
                        ),
                    )
                    stored += 1
                logger.info(f"Page {page}: stored {len(shows)} shows")
    finally:
        await close_all_clients()

    return stored


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Import AniList shows into the local catalog")
    parser.add_argument("--genres", nargs="+", default=list(BASIC_DEFAULT_GENRES), help="Genres to import")
    parser.add_argument("--pages", type=int, default=1, help="Pages of 50 shows to fetch")
    args = parser.parse_args()

    setup_logging("INFO")
    try:
        total = asyncio.run(import_catalog(args.genres, args.pages))
    except AniListError as e:
        logger.error(f"Catalog import failed: {e}")
        sys.exit(1)
    logger.info(f"Imported {total} shows")
