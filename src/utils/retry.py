"""Retry with exponential backoff for external API calls."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior."""

    max_retries: int = 3
    base_delay: float = 1.0  # seconds
    max_delay: float = 30.0  # seconds
    exponential_base: float = 2.0
    retryable_exceptions: tuple[type[BaseException], ...] = (
        httpx.TimeoutException,
        httpx.ConnectError,
        httpx.ReadError,
        httpx.RemoteProtocolError,
        ConnectionError,
        TimeoutError,
    )
    retryable_status_codes: tuple[int, ...] = (429, 500, 502, 503, 504)

    def delay_for(self, attempt: int) -> float:
        return min(self.base_delay * (self.exponential_base**attempt), self.max_delay)


DEFAULT_RETRY_CONFIG = RetryConfig()


async def retry_async(
    func: Callable[..., Awaitable[httpx.Response]],
    *args: Any,
    config: RetryConfig = DEFAULT_RETRY_CONFIG,
    operation_name: str = "operation",
    **kwargs: Any,
) -> httpx.Response:
    """Call an async HTTP function, retrying transient failures.

    Transport errors listed in ``config.retryable_exceptions`` and responses with a
    retryable status code are retried with exponential backoff. Once attempts run
    out, the last response is returned as is (so the caller can inspect its status)
    or the last transport error is re-raised.

    Args:
        func: Async function returning an ``httpx.Response``
        *args: Positional arguments for the function
        config: Retry configuration
        operation_name: Name of the operation for logging
        **kwargs: Keyword arguments for the function
    """
    attempts = config.max_retries + 1

    for attempt in range(attempts):
        is_last = attempt == attempts - 1
        try:
            response = await func(*args, **kwargs)
        except config.retryable_exceptions as e:
            if is_last:
                logger.error(f"{operation_name}: Failed after {attempts} attempts: {e}")
                raise
            delay = config.delay_for(attempt)
            logger.warning(
                f"{operation_name}: {type(e).__name__}, "
                f"retrying in {delay:.1f}s (attempt {attempt + 1}/{attempts})"
            )
            await asyncio.sleep(delay)
            continue

        if response.status_code in config.retryable_status_codes and not is_last:
            delay = config.delay_for(attempt)
            logger.warning(
                f"{operation_name}: Got status {response.status_code}, "
                f"retrying in {delay:.1f}s (attempt {attempt + 1}/{attempts})"
            )
            await asyncio.sleep(delay)
            continue

        return response

    raise AssertionError("unreachable")  # pragma: no cover
