"""Genre-frequency recommendations straight from the external catalog."""

import asyncio
import logging
from collections import Counter
from collections.abc import Sequence

from src.constants import BASIC_DEFAULT_GENRES, BASIC_RECOMMENDATION_LIMIT, BASIC_TOP_GENRES
from src.models.schemas import BasicBasedOn, BasicRecommendation, BasicRecommendationsResult
from src.services.catalog.anilist import CatalogShow
from src.services.recommendations.errors import DataAccessError
from src.services.recommendations.sources import ExternalCatalog, HistoryEntry, WatchHistoryRepository
from src.utils.logging import LogContext

logger = logging.getLogger(__name__)


class BasicRecommender:
    """Recommend popular catalog shows in the user's most-rated genres.

    Only rated entries count towards genre frequency. Users without any fall
    back to a fixed set of broadly popular genres.
    """

    def __init__(self, history: WatchHistoryRepository, catalog: ExternalCatalog):
        self.history = history
        self.catalog = catalog

    async def recommend(
        self,
        user_id: int,
        limit: int = BASIC_RECOMMENDATION_LIMIT,
    ) -> BasicRecommendationsResult:
        """Pick catalog shows in the user's top genres that are not on their list.

        Raises:
            DataAccessError: Watchlist or catalog could not be read
        """
        log = LogContext(logger, user_id=user_id)

        try:
            rated, known_external_ids = await asyncio.gather(
                self.history.load_rated_history(user_id),
                self.history.load_known_external_ids(user_id),
            )
        except Exception as e:
            log.error(f"Failed to load watchlist: {e}", exc_info=True)
            raise DataAccessError(f"Failed to load watchlist for user {user_id}") from e

        genres = self.top_genres(rated)
        log.info(f"Fetching catalog shows for genres {genres} ({len(rated)} rated shows)")

        try:
            shows = await self.catalog.fetch_by_genres(genres)
        except Exception as e:
            log.error(f"Failed to fetch catalog shows: {e}")
            raise DataAccessError(f"Failed to fetch catalog shows for genres {genres}") from e

        picks = [show for show in shows if show.external_id not in known_external_ids]
        return BasicRecommendationsResult(
            recommendations=[self._to_recommendation(show) for show in picks[: max(limit, 0)]],
            based_on=BasicBasedOn(genres=genres, show_count=len(rated)),
        )

    @staticmethod
    def top_genres(rated: Sequence[HistoryEntry]) -> list[str]:
        """Most frequent genres among rated shows; ties keep first-seen order."""
        counts = Counter(genre for entry in rated for genre in entry.show.genres)
        top = [genre for genre, _ in counts.most_common(BASIC_TOP_GENRES)]
        return top or list(BASIC_DEFAULT_GENRES)

    @staticmethod
    def _to_recommendation(show: CatalogShow) -> BasicRecommendation:
        return BasicRecommendation(
            external_id=show.external_id,
            title=show.title,
            image_url=show.image_url,
            synopsis=show.synopsis,
            rating=show.star_rating,
            genres=list(show.genres),
        )
