#!/usr/bin/env python3
"""Print recommendations for a user as JSON.

Runs the weighted recommendation engine against the local show catalog, or the
genre-frequency recommender against AniList with --basic.

Usage:
    python scripts/recommend.py USER_ID [--limit=N] [--basic]

Options:
    --limit     Maximum number of recommendations (default from RECOMMENDATION_LIMIT)
    --basic     Use the genre-frequency recommender
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config import get_settings
from src.db.database import async_session_maker
from src.services.catalog.anilist import anilist_service
from src.services.recommendations import (
    BasicRecommender,
    RecommendationEngine,
    RecommendationError,
    SQLShowCatalog,
    SQLWatchHistoryRepository,
)
from src.utils.cache import cache
from src.utils.http_client import close_all_clients
from src.utils.logging import setup_logging

logger = logging.getLogger(__name__)


async def recommend(user_id: int, limit: int, basic: bool) -> dict:
    """Run one recommender and return its JSON-ready result."""
    settings = get_settings()
    history = SQLWatchHistoryRepository(async_session_maker)

    if basic:
        await cache.connect()
        try:
            result = await BasicRecommender(history, anilist_service).recommend(user_id, limit=limit)
        finally:
            await cache.close()
            await close_all_clients()
    else:
        engine = RecommendationEngine(
            history,
            SQLShowCatalog(async_session_maker),
            timeout=settings.data_access_timeout,
        )
        result = await engine.recommend(user_id, limit=limit)

    return result.to_json_dict()


def main() -> int:
    parser = argparse.ArgumentParser(description="Print show recommendations for a user")
    parser.add_argument("user_id", type=int, help="User to recommend shows for")
    parser.add_argument("--limit", type=int, default=None, help="Maximum number of recommendations")
    parser.add_argument("--basic", action="store_true", help="Use the genre-frequency recommender")
    args = parser.parse_args()

    setup_logging("INFO")
    limit = args.limit if args.limit is not None else get_settings().recommendation_limit

    try:
        result = asyncio.run(recommend(args.user_id, limit, args.basic))
    except RecommendationError as e:
        logger.error(f"Recommendations failed: {e}")
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
