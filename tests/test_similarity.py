"""Tests for genre similarity and recency scoring."""

from datetime import timedelta

import pytest

from src.services.recommendations.similarity import genre_similarity, recency_score
from tests.factories import NOW


class TestGenreSimilarity:
    """Tests for the Jaccard genre similarity."""

    def test_identical_sets(self):
        assert genre_similarity(["Action", "Drama"], ["Drama", "Action"]) == 1.0

    def test_disjoint_sets(self):
        assert genre_similarity(["Action"], ["Romance"]) == 0.0

    def test_partial_overlap(self):
        """Two shared genres out of four distinct."""
        assert genre_similarity(["Action", "Drama", "Comedy"], ["Action", "Drama", "Horror"]) == 0.5

    def test_duplicates_are_ignored(self):
        assert genre_similarity(["Action", "Action"], ["Action"]) == 1.0

    def test_symmetric(self):
        a = ["Action", "Fantasy", "Mystery"]
        b = ["Fantasy", "Slice of Life"]
        assert genre_similarity(a, b) == genre_similarity(b, a)

    @pytest.mark.parametrize(
        "a, b",
        [
            ([], []),
            ([], ["Action"]),
            (["Action"], []),
            (None, ["Action"]),
            (["Action"], None),
            (None, None),
        ],
    )
    def test_empty_or_missing(self, a, b):
        assert genre_similarity(a, b) == 0.0


class TestRecencyScore:
    """Tests for the 30-day linear recency decay."""

    def test_no_timestamps_is_neutral(self):
        assert recency_score([], now=NOW) == 0.5

    def test_just_now(self):
        assert recency_score([NOW], now=NOW) == 1.0

    def test_fifteen_days_ago(self):
        assert recency_score([NOW - timedelta(days=15)], now=NOW) == pytest.approx(0.5)

    def test_thirty_days_ago(self):
        assert recency_score([NOW - timedelta(days=30)], now=NOW) == 0.0

    def test_older_than_window_clamps_to_zero(self):
        assert recency_score([NOW - timedelta(days=60)], now=NOW) == 0.0

    def test_uses_most_recent_timestamp(self):
        timestamps = [NOW - timedelta(days=29), NOW - timedelta(days=3), NOW - timedelta(days=20)]
        assert recency_score(timestamps, now=NOW) == pytest.approx(1 - 3 / 30)

    def test_future_timestamp_clamps_to_one(self):
        assert recency_score([NOW + timedelta(days=2)], now=NOW) == 1.0

    def test_naive_timestamps_are_utc(self):
        naive = (NOW - timedelta(days=6)).replace(tzinfo=None)
        assert recency_score([naive], now=NOW) == pytest.approx(0.8)

    def test_accepts_generator(self):
        assert recency_score((t for t in [NOW]), now=NOW) == 1.0

    def test_monotonic_in_age(self):
        scores = [recency_score([NOW - timedelta(days=d)], now=NOW) for d in range(0, 40, 5)]
        assert scores == sorted(scores, reverse=True)
        assert all(0.0 <= s <= 1.0 for s in scores)
