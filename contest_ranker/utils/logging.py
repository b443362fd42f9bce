"""
Structured logging utilities for the contest ranker.

Centralizes logging configuration so the decoder, ranking engine, and feed
fetchers log consistently. Uses standard library logging with a
human-readable formatter by default and an optional JSON formatter for
structured logs (useful when the board runs behind a service).

Usage:
    from contest_ranker.utils.logging import configure_logging, get_logger

    configure_logging(level="INFO", json_logs=False)
    log = get_logger(__name__)
    log.info("Feed decoded", extra={"records": 120, "malformed": 2})
"""

from __future__ import annotations

import json
import logging
import logging.config
from typing import Any, Dict, Optional

from contest_ranker.config import get_settings

# Attributes every LogRecord carries; anything else was passed through `extra`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "extra"}


def _json_formatter(record: logging.LogRecord) -> str:
    """Render a log record as JSON string."""
    payload: Dict[str, Any] = {
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
    }
    for key, value in vars(record).items():
        if key not in _RESERVED_ATTRS and not key.startswith("_"):
            payload[key] = value
    nested = getattr(record, "extra", None)
    if isinstance(nested, dict):
        payload.update(nested)
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)
    if record.stack_info:
        payload["stack_info"] = record.stack_info
    return json.dumps(payload, default=str)


class JsonFormatter(logging.Formatter):
    """Minimal JSON formatter for structured logs."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record)


def configure_logging(
    level: Optional[str] = None,
    json_logs: Optional[bool] = None,
    force: bool = True,
) -> None:
    """
    Configure root logging.

    Parameters
    ----------
    level : str, optional
        Logging level name (e.g., "DEBUG", "INFO", "WARNING").
        Defaults to the LOG_LEVEL setting.
    json_logs : bool, optional
        Whether to emit logs as JSON. If False, uses a concise human formatter.
        Defaults to the LOG_JSON setting.
    force : bool
        Whether to replace handlers configured earlier. When False and the root
        logger already has handlers, the existing configuration is kept.
    """
    if not force and logging.getLogger().handlers:
        return

    settings = get_settings()
    if level is None:
        level = settings.log_level.upper()
    if json_logs is None:
        json_logs = settings.log_json
    formatter_name = "json" if json_logs else "console"

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {
                    "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
                "json": {
                    "()": JsonFormatter,
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": formatter_name,
                    "level": level,
                }
            },
            "root": {
                "handlers": ["default"],
                "level": level,
            },
        }
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger with the given name. If name is None, returns the root logger.
    """
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "JsonFormatter"]
