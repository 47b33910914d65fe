"""Pure scoring helpers: genre overlap and activity recency."""

from collections.abc import Iterable
from datetime import UTC, datetime

from src.constants import DEFAULT_RECENCY_SCORE, RECENCY_WINDOW_DAYS

SECONDS_PER_DAY = 86400.0


def genre_similarity(
    genres1: Iterable[str] | None,
    genres2: Iterable[str] | None,
) -> float:
    """Jaccard index of two genre collections, between 0 and 1.

    Missing genre data on either side scores 0, and so do two empty sets:
    no shared information is not treated as a perfect match.
    """
    if genres1 is None or genres2 is None:
        return 0.0

    set1, set2 = set(genres1), set(genres2)
    union = set1 | set2
    if not union:
        return 0.0
    return len(set1 & set2) / len(union)


def as_utc(ts: datetime) -> datetime:
    """Interpret naive timestamps (as SQLite returns them) as UTC."""
    return ts.replace(tzinfo=UTC) if ts.tzinfo is None else ts


def recency_score(
    timestamps: Iterable[datetime],
    now: datetime | None = None,
) -> float:
    """Score how recently the user was active, between 0 and 1.

    Decays linearly from 1 (active right now) to 0 once the most recent
    timestamp is RECENCY_WINDOW_DAYS old. With no timestamps the score is
    neutral.
    """
    latest = max((as_utc(ts) for ts in timestamps), default=None)
    if latest is None:
        return DEFAULT_RECENCY_SCORE

    now = as_utc(now) if now is not None else datetime.now(UTC)
    days_since = (now - latest).total_seconds() / SECONDS_PER_DAY
    return min(1.0, max(0.0, 1 - days_since / RECENCY_WINDOW_DAYS))
