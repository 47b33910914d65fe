"""Redis caching for external catalog responses.

The cache is best effort: when Redis is unreachable every lookup is a miss and
writes are skipped, so callers never fail because of it.
"""

import hashlib
import json
from collections.abc import Callable
from datetime import timedelta
from functools import wraps
from typing import Any, TypeVar

import redis.asyncio as redis

from src.config import get_settings
from src.utils.logging import get_logger

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

CACHE_TTL_SHORT = timedelta(minutes=15)
CACHE_TTL_MEDIUM = timedelta(hours=6)

KEY_PREFIX = "anitrack"


class RedisCache:
    """Async Redis cache client with JSON serialization."""

    def __init__(self, url: str | None = None) -> None:
        self._url = url
        self._client: redis.Redis | None = None
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    def _get_client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.from_url(
                self._url or str(get_settings().redis_url),
                encoding="utf-8",
                decode_responses=True,
            )
        return self._client

    async def connect(self) -> bool:
        """Try to reach Redis; returns whether caching is enabled."""
        try:
            await self._get_client().ping()
            self._connected = True
        except Exception as e:
            logger.warning(f"Redis cache unavailable: {e}")
            self._connected = False
        return self._connected

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        self._connected = False

    async def get(self, key: str) -> Any | None:
        """Get a cached value, or None on miss, expiry or error."""
        if not self._connected:
            return None
        try:
            data = await self._get_client().get(key)
        except Exception as e:
            logger.debug(f"Cache get error for {key}: {e}")
            return None
        return json.loads(data) if data else None

    async def set(self, key: str, value: Any, ttl: timedelta | None = None) -> bool:
        """Store a JSON-serializable value with a TTL (default 6 hours)."""
        if not self._connected:
            return False
        try:
            expire_seconds = int((ttl or CACHE_TTL_MEDIUM).total_seconds())
            await self._get_client().setex(key, expire_seconds, json.dumps(value, default=str))
            return True
        except Exception as e:
            logger.debug(f"Cache set error for {key}: {e}")
            return False


cache = RedisCache()


def make_cache_key(namespace: str, *args: Any, **kwargs: Any) -> str:
    """Build a readable cache key, hashing it when it gets long.

    List and tuple arguments are joined with commas so ``["Action", "Drama"]``
    yields ``...:Action,Drama``.
    """
    parts = [KEY_PREFIX, namespace]
    for arg in args:
        if isinstance(arg, list | tuple):
            parts.append(",".join(str(a) for a in arg))
        elif arg is not None:
            parts.append(str(arg))
    for key, value in sorted(kwargs.items()):
        if value is not None:
            parts.append(f"{key}={value}")

    key_str = ":".join(parts)
    if len(key_str) > 200:
        digest = hashlib.md5(key_str.encode()).hexdigest()[:12]
        key_str = f"{KEY_PREFIX}:{namespace}:{digest}"
    return key_str


def cached(namespace: str, ttl: timedelta | None = None) -> Callable[[F], F]:
    """Cache the JSON result of an async method in Redis.

    The first positional argument (``self``) is left out of the key. ``None``
    results are never cached.

    Example:
        @cached("anilist:genres", ttl=CACHE_TTL_SHORT)
        async def _fetch_page(self, genres: list[str], page: int = 1): ...
    """

    def decorator(func: F) -> F:
        @wraps(func)
        async def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
            cache_key = make_cache_key(namespace, *args, **kwargs)

            hit = await cache.get(cache_key)
            if hit is not None:
                logger.debug(f"Cache HIT: {cache_key}")
                return hit

            logger.debug(f"Cache MISS: {cache_key}")
            result = await func(self, *args, **kwargs)
            if result is not None:
                await cache.set(cache_key, result, ttl)
            return result

        return wrapper  # type: ignore[return-value]

    return decorator
