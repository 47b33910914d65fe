"""Centralized logging configuration for Anitrack."""

import logging
import sys
from collections.abc import MutableMapping
from typing import Any, Literal

from src.config import get_settings

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at DEBUG
_QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "aiosqlite", "asyncio")


def setup_logging(level: LogLevel | None = None) -> None:
    """Configure root logging for scripts and workers.

    Args:
        level: Override log level (default: INFO for production, DEBUG otherwise)
    """
    if level is None:
        level = "INFO" if get_settings().is_production else "DEBUG"

    logging.basicConfig(
        level=getattr(logging, level),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name (typically __name__)."""
    return logging.getLogger(name)


class LogContext(logging.LoggerAdapter):
    """Logger adapter that prefixes every message with key/value context.

    Usage:
        log = LogContext(logger, user_id=42)
        log.info("Scoring candidates")  # -> "[user_id=42] Scoring candidates"
    """

    def __init__(self, logger: logging.Logger, **context: Any) -> None:
        super().__init__(logger, context)
        self.prefix = " ".join(f"[{k}={v}]" for k, v in context.items())

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        return f"{self.prefix} {msg}", kwargs
