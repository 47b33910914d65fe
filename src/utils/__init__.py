"""Utility modules for the Anitrack application."""

from src.utils.logging import LogContext, get_logger, setup_logging
from src.utils.retry import RetryConfig, retry_async

__all__ = [
    # Logging
    "get_logger",
    "LogContext",
    "setup_logging",
    # Retry
    "retry_async",
    "RetryConfig",
]
