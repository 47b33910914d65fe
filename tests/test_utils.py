"""Tests for retry and cache helpers."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from src.utils.cache import RedisCache, make_cache_key
from src.utils.retry import RetryConfig, retry_async


class TestMakeCacheKey:
    """Tests for make_cache_key."""

    def test_joins_list_arguments(self):
        assert make_cache_key("anilist:genres", ["Action", "Drama"], page=2) == (
            "anitrack:anilist:genres:Action,Drama:page=2"
        )

    def test_skips_none(self):
        assert make_cache_key("ns", None, page=None) == "anitrack:ns"

    def test_hashes_long_keys(self):
        key = make_cache_key("ns", ["Genre" * 10] * 10)
        assert key.startswith("anitrack:ns:")
        assert len(key) < 40


class TestRedisCache:
    """The cache degrades to misses when Redis is not connected."""

    @pytest.mark.asyncio
    async def test_disconnected_cache_misses(self):
        cache = RedisCache(url="redis://localhost:1/0")

        assert cache.connected is False
        assert await cache.get("anything") is None
        assert await cache.set("anything", [1, 2]) is False


class TestRetryAsync:
    """Tests for retry_async."""

    @pytest.mark.asyncio
    async def test_returns_last_response_when_retries_run_out(self):
        func = AsyncMock(return_value=httpx.Response(500))

        with patch("src.utils.retry.asyncio.sleep", new=AsyncMock()):
            response = await retry_async(func, config=RetryConfig(max_retries=2))

        assert response.status_code == 500
        assert func.await_count == 3

    @pytest.mark.asyncio
    async def test_non_retryable_exception_propagates(self):
        func = AsyncMock(side_effect=ValueError("bad payload"))

        with pytest.raises(ValueError):
            await retry_async(func)

        assert func.await_count == 1

    def test_delay_is_capped(self):
        config = RetryConfig(base_delay=1.0, max_delay=5.0)
        assert [config.delay_for(a) for a in range(4)] == [1.0, 2.0, 4.0, 5.0]
