"""Tests for the genre-frequency recommender."""

import pytest

from src.models.watchlist import WatchStatus
from src.services.recommendations import BasicRecommender, DataAccessError
from tests.factories import FakeExternalCatalog, FakeHistory, make_catalog_show, make_entry, make_show


class BrokenCatalog(FakeExternalCatalog):
    async def fetch_by_genres(self, genres):
        raise ConnectionError("catalog unreachable")


class BrokenHistory(FakeHistory):
    async def load_rated_history(self, user_id: int):
        raise RuntimeError("watchlist table locked")


class TestTopGenres:
    """Tests for BasicRecommender.top_genres."""

    def test_most_frequent_first(self):
        rated = [
            make_entry(make_show(1, ("Action", "Comedy")), rating=4),
            make_entry(make_show(2, ("Action", "Drama")), rating=3),
            make_entry(make_show(3, ("Drama", "Action", "Sports")), rating=5),
        ]
        assert BasicRecommender.top_genres(rated) == ["Action", "Drama", "Comedy"]

    def test_ties_keep_first_seen_order(self):
        rated = [
            make_entry(make_show(1, ("Mecha", "Music")), rating=4),
            make_entry(make_show(2, ("Horror", "Sports")), rating=4),
        ]
        assert BasicRecommender.top_genres(rated) == ["Mecha", "Music", "Horror"]

    def test_fewer_than_three_genres(self):
        rated = [make_entry(make_show(1, ("Romance",)), rating=2)]
        assert BasicRecommender.top_genres(rated) == ["Romance"]

    def test_defaults_without_rated_shows(self):
        assert BasicRecommender.top_genres([]) == ["Action", "Adventure", "Fantasy"]

    def test_defaults_when_rated_shows_have_no_genres(self):
        rated = [make_entry(make_show(1, ()), rating=5)]
        assert BasicRecommender.top_genres(rated) == ["Action", "Adventure", "Fantasy"]


class TestBasicRecommend:
    """Tests for BasicRecommender.recommend."""

    @pytest.mark.asyncio
    async def test_recommends_unseen_catalog_shows(self):
        watched = make_show(1, ("Action", "Drama"))  # external id "1001"
        history = FakeHistory([make_entry(watched, rating=5)])
        catalog = FakeExternalCatalog([
            make_catalog_show("1001", ("Action",)),
            make_catalog_show("2001", ("Action",), average_score=86),
            make_catalog_show("2002", ("Drama",), average_score=None),
        ])

        result = await BasicRecommender(history, catalog).recommend(user_id=1)

        assert catalog.requested == [["Action", "Drama"]]
        assert [r.external_id for r in result.recommendations] == ["2001", "2002"]
        assert result.recommendations[0].rating == pytest.approx(4.3)
        assert result.recommendations[1].rating is None
        assert result.based_on.genres == ["Action", "Drama"]
        assert result.based_on.show_count == 1

    @pytest.mark.asyncio
    async def test_excludes_dropped_shows(self):
        dropped = make_show(1, ("Horror",))
        history = FakeHistory([make_entry(dropped, rating=None, status=WatchStatus.DROPPED)])
        catalog = FakeExternalCatalog([
            make_catalog_show("1001", ("Action",)),
            make_catalog_show("3001", ("Fantasy",)),
        ])

        result = await BasicRecommender(history, catalog).recommend(user_id=1)

        assert catalog.requested == [["Action", "Adventure", "Fantasy"]]
        assert [r.external_id for r in result.recommendations] == ["3001"]
        assert result.based_on.show_count == 0

    @pytest.mark.asyncio
    async def test_respects_limit(self):
        catalog = FakeExternalCatalog(
            [make_catalog_show(str(5000 + i), ("Action",)) for i in range(15)]
        )
        recommender = BasicRecommender(FakeHistory(), catalog)

        assert len((await recommender.recommend(user_id=1)).recommendations) == 10
        assert len((await recommender.recommend(user_id=1, limit=4)).recommendations) == 4
        assert (await recommender.recommend(user_id=1, limit=0)).recommendations == []

    @pytest.mark.asyncio
    async def test_catalog_failure_is_wrapped(self):
        with pytest.raises(DataAccessError) as exc_info:
            await BasicRecommender(FakeHistory(), BrokenCatalog()).recommend(user_id=1)

        assert isinstance(exc_info.value.__cause__, ConnectionError)

    @pytest.mark.asyncio
    async def test_history_failure_is_wrapped(self):
        catalog = FakeExternalCatalog([make_catalog_show("2001", ("Action",))])

        with pytest.raises(DataAccessError) as exc_info:
            await BasicRecommender(BrokenHistory(), catalog).recommend(user_id=1)

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert catalog.requested == []

    @pytest.mark.asyncio
    async def test_zero_score_has_no_rating(self):
        catalog = FakeExternalCatalog([make_catalog_show("2001", ("Action",), average_score=0)])

        result = await BasicRecommender(FakeHistory(), catalog).recommend(user_id=1)

        assert result.recommendations[0].rating is None

    @pytest.mark.asyncio
    async def test_camel_case_keys(self):
        catalog = FakeExternalCatalog([make_catalog_show("2001", ("Action",))])

        data = (await BasicRecommender(FakeHistory(), catalog).recommend(user_id=1)).to_json_dict()

        assert set(data) == {"recommendations", "basedOn"}
        assert data["basedOn"] == {"genres": ["Action", "Adventure", "Fantasy"], "showCount": 0}
        assert {"externalId", "imageUrl", "rating", "genres"} <= set(data["recommendations"][0])
