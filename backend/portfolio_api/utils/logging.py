# backend/portfolio_api/utils/logging.py
"""
Logging setup: one stdout handler on the root logger, text or JSON, with the
request's correlation ID on every record.

Usage:
    from portfolio_api.utils import setup_logging

    setup_logging()               # from settings (LOG_LEVEL, LOG_FORMAT)
    setup_logging("DEBUG", "json")

What gets logged where:
    DEBUG   - per-asset ledger detail, loader queries
    INFO    - requests, performance calculations started/finished
    WARNING - missing portfolios, over-sold positions, bad trace headers
    ERROR   - unexpected exceptions, database failures
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from portfolio_api.config import parse_log_level, settings
from portfolio_api.utils.context import get_correlation_id

# timestamp | level | correlation_id | logger_name | message
DEFAULT_TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(correlation_id)s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

NO_CORRELATION_ID = "no-correlation-id"

# Pinned to WARNING; their INFO output drowns the application's
NOISY_LOGGERS = (
    "sqlalchemy.engine",
    "httpx",
    "httpcore",
    "asyncio",
    "multipart",
)

# Attributes every LogRecord has; anything else came in through `extra=`
_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {
    "correlation_id",
    "message",
    "asctime",
    "taskName",
}


class CorrelationIdFilter(logging.Filter):
    """Sets record.correlation_id (for %(correlation_id)s) from the request context."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or NO_CORRELATION_ID
        return True


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line:

        {"timestamp": "2024-01-15T10:30:00.123000+00:00", "level": "INFO",
         "logger": "portfolio_api.services.performance.service",
         "correlation_id": "abc-123", "message": "...", "extra": {...}}

    Values passed via `extra=` that JSON cannot encode are written as str().
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "correlation_id": getattr(record, "correlation_id", NO_CORRELATION_ID),
            "message": record.getMessage(),
        }

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        extra = {
            key: value
            for key, value in vars(record).items()
            if key not in _RESERVED_ATTRS
        }
        if extra:
            entry["extra"] = extra

        return json.dumps(entry, default=str)


def _build_formatter(log_format: str) -> logging.Formatter:
    if log_format.lower() == "json":
        return JsonFormatter()
    return logging.Formatter(fmt=DEFAULT_TEXT_FORMAT, datefmt=DEFAULT_DATE_FORMAT)


def setup_logging(
        level: str | None = None,
        log_format: str | None = None,
        suppress_noisy_loggers: bool = True,
) -> None:
    """
    Replace the root logger's handlers with a single stdout handler.

    Safe to call more than once; the last call wins.

    Args:
        level: Log level name. Defaults to settings.log_level.
        log_format: 'text' or 'json'. Defaults to settings.log_format.
        suppress_noisy_loggers: Pin third-party loggers to WARNING.

    Raises:
        ValueError: If level is not a known level name
    """
    level_name = parse_log_level(level or settings.log_level)
    format_name = log_format or settings.log_format

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_build_formatter(format_name))
    handler.addFilter(CorrelationIdFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(level_name)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    if suppress_noisy_loggers:
        for logger_name in NOISY_LOGGERS:
            logging.getLogger(logger_name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logging configured: level={level_name}, format={format_name}",
        extra={"config": {"level": level_name, "format": format_name}},
    )
