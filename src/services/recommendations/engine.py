"""Recommendation engine for ranking unseen shows against a user's history."""

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from statistics import fmean

from src.constants import (
    DEFAULT_AVERAGE_RATING,
    DEFAULT_RECOMMENDATION_LIMIT,
    METADATA_TOP_GENRES,
    NEUTRAL_FACTOR,
    POPULARITY_SCALE_MAX,
    RATING_SCALE_MAX,
    WEIGHT_GENRE_MATCH,
    WEIGHT_POPULARITY,
    WEIGHT_RATING,
    WEIGHT_RECENCY,
)
from src.models.schemas import (
    BasedOn,
    MatchFactors,
    RecommendationMetadata,
    RecommendationsResult,
    RecommendedShow,
)
from src.services.recommendations.errors import DataAccessError, RecommendationError
from src.services.recommendations.similarity import genre_similarity, recency_score
from src.services.recommendations.sources import (
    HistoryEntry,
    ShowCatalog,
    ShowSnapshot,
    WatchHistoryRepository,
)
from src.utils.logging import LogContext

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class ScoredCandidate:
    """Candidate show with its factors, alive only during one scoring run."""

    show: ShowSnapshot
    factors: MatchFactors
    score: float

    def to_recommendation(self) -> RecommendedShow:
        return RecommendedShow(
            id=self.show.id,
            external_id=self.show.external_id,
            title=self.show.title,
            genres=list(self.show.genres),
            avg_rating=self.show.avg_rating,
            image_url=self.show.image_url,
            synopsis=self.show.synopsis,
            match_score=self.score,
            match_factors=self.factors,
        )


class RecommendationEngine:
    """Engine for ranking catalog shows a user has not added yet.

    Strategy:
    1. Load the user's non-dropped history and, concurrently, every show not
       already on their watchlist (dropped shows are excluded too)
    2. Summarize the history: average rating and how recently it changed
    3. Score each candidate with four factors in [0, 1]:
       - genre match: mean Jaccard similarity with each history entry
       - rating: catalog rating / 5
       - recency: the user's activity score, shared by all candidates
       - popularity: catalog rating / 100
    4. Combine with fixed weights (0.4 / 0.3 / 0.2 / 0.1), sort, truncate

    Equal scores keep the order the catalog returned candidates in.
    """

    def __init__(
        self,
        history: WatchHistoryRepository,
        catalog: ShowCatalog,
        clock: Clock = utc_now,
        timeout: float | None = None,
    ):
        self.history = history
        self.catalog = catalog
        self.clock = clock
        self.timeout = timeout

    async def recommend(
        self,
        user_id: int,
        limit: int = DEFAULT_RECOMMENDATION_LIMIT,
    ) -> RecommendationsResult:
        """Rank unseen shows for a user.

        Args:
            user_id: Owner of the watch history
            limit: Maximum number of recommendations; zero or less returns none

        Raises:
            DataAccessError: History or catalog could not be loaded in time
        """
        log = LogContext(logger, user_id=user_id)
        log.info(f"Getting recommendations with limit {limit}")

        history, candidates = await self._load(user_id, log)
        log.info(f"Found {len(history)} shows in history and {len(candidates)} candidate shows")

        average_rating = self.average_rating(history)
        recency = recency_score((entry.updated_at for entry in history), now=self.clock())
        log.debug(f"Average rating: {average_rating}, recency score: {recency}")

        scored = [self.score_candidate(show, history, recency) for show in candidates]
        # list.sort is stable, also with reverse=True
        scored.sort(key=lambda candidate: candidate.score, reverse=True)
        recommendations = [candidate.to_recommendation() for candidate in scored[: max(limit, 0)]]

        log.info(f"Returning {len(recommendations)} recommendations")
        return RecommendationsResult(
            recommendations=recommendations,
            metadata=RecommendationMetadata(
                based_on=BasedOn(
                    show_count=len(history),
                    average_rating=average_rating,
                    recency_score=recency,
                    top_genres=self.top_genres(history),
                )
            ),
        )

    async def _load(
        self,
        user_id: int,
        log: LogContext,
    ) -> tuple[list[HistoryEntry], list[ShowSnapshot]]:
        """Run the two independent reads concurrently, bounded by the timeout."""
        try:
            history, candidates = await asyncio.wait_for(
                asyncio.gather(
                    self.history.load_retained_history(user_id),
                    self._load_candidates(user_id),
                ),
                timeout=self.timeout,
            )
        except TimeoutError as e:
            if self.timeout is None:
                log.error(f"Data source timed out: {e!r}", exc_info=True)
            else:
                log.error(f"Timed out loading history and catalog (deadline {self.timeout}s): {e!r}")
            raise DataAccessError(f"Timed out loading recommendation data for user {user_id}") from e
        except RecommendationError:
            raise
        except Exception as e:
            log.error(f"Failed to load recommendation data: {e}", exc_info=True)
            raise DataAccessError(f"Failed to load recommendation data for user {user_id}") from e

        return list(history), candidates

    async def _load_candidates(self, user_id: int) -> list[ShowSnapshot]:
        known_ids = await self.history.load_known_show_ids(user_id)
        candidates = await self.catalog.load_candidate_shows(known_ids)
        return [show for show in candidates if show.id not in known_ids]

    @staticmethod
    def average_rating(history: Sequence[HistoryEntry]) -> float:
        """Mean of the user's ratings, or the scale midpoint when nothing is rated."""
        ratings = [entry.rating for entry in history if entry.rating is not None]
        return fmean(ratings) if ratings else DEFAULT_AVERAGE_RATING

    @staticmethod
    def top_genres(history: Sequence[HistoryEntry]) -> list[str]:
        """First distinct genres in encounter order across the history."""
        genres = dict.fromkeys(genre for entry in history for genre in entry.show.genres)
        return list(genres)[:METADATA_TOP_GENRES]

    @staticmethod
    def score_candidate(
        show: ShowSnapshot,
        history: Sequence[HistoryEntry],
        recency: float,
    ) -> ScoredCandidate:
        """Compute the weighted match score of one candidate. Never raises."""
        if history:
            genre_match = fmean(genre_similarity(show.genres, entry.show.genres) for entry in history)
        else:
            genre_match = 0.0

        if show.avg_rating is None:
            rating = popularity = NEUTRAL_FACTOR
        else:
            rating = show.avg_rating / RATING_SCALE_MAX
            # Same source field on a 0-100 scale, kept as is
            popularity = show.avg_rating / POPULARITY_SCALE_MAX

        score = (
            genre_match * WEIGHT_GENRE_MATCH
            + rating * WEIGHT_RATING
            + recency * WEIGHT_RECENCY
            + popularity * WEIGHT_POPULARITY
        )
        return ScoredCandidate(
            show=show,
            factors=MatchFactors(
                genre_match=genre_match,
                rating=rating,
                recency=recency,
                popularity=popularity,
            ),
            score=score,
        )
