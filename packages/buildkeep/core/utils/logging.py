"""Logging configuration for buildkeep.

Logs go to stderr (or a file) so stdout stays free for command output.
Structured mode writes one JSON object per record, carrying the cache
context (namespace, store, workspace) that the lifecycle attaches through
:func:`get_logger`.
"""

from __future__ import annotations

import functools
import json
import logging
import sys
import time
from datetime import UTC, datetime
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Fields the cache engine attaches as logging context
CACHE_CONTEXT_FIELDS = ("namespace", "store", "workspace")


class StructuredJSONFormatter(logging.Formatter):
    """Formatter that outputs one JSON object per log record.

    Format:
    {
        "timestamp": "2026-01-29T12:00:00.000000+00:00",
        "level": "INFO",
        "logger": "buildkeep.core.caching.lifecycle",
        "message": "Restoring cache directories (...)",
        "cache": {"namespace": "node", "store": "/cache"},
        "error": {"type": "OSError", "message": "...", "traceback": "..."}
    }

    ``cache`` is present only when the record carries cache context;
    ``error`` only when it carries exception info.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        cache = {
            field: getattr(record, field)
            for field in CACHE_CONTEXT_FIELDS
            if getattr(record, field, None) is not None
        }
        if cache:
            entry["cache"] = cache

        if record.exc_info and record.exc_info[0] is not None:
            entry["error"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(entry, default=str)


def configure_logging(
    level: str = "INFO",
    format_string: str | None = None,
    filename: str | None = None,
    structured: bool = False,
) -> None:
    """Configure application-wide logging.

    Can be called multiple times; each call replaces the root handlers.

    Args:
        level: Logging level name, case-insensitive.
        format_string: Text format; ignored when structured=True.
        filename: Log file path. If None, logs to stderr.
        structured: Emit JSON lines instead of text.

    Examples:
        >>> configure_logging(level="INFO")
        >>> configure_logging(level="DEBUG", structured=True, filename="build.jsonl")
    """
    handler: logging.Handler
    if filename:
        handler = logging.FileHandler(filename)
    else:
        handler = logging.StreamHandler(sys.stderr)

    if structured:
        handler.setFormatter(StructuredJSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))

    logging.basicConfig(level=getattr(logging, level.upper()), handlers=[handler], force=True)


def get_logger(name: str, **context: Any) -> logging.Logger | logging.LoggerAdapter:
    """Get a logger, wrapped in a LoggerAdapter when cache context is given.

    Example:
        >>> log = get_logger(__name__, namespace="node", store="/cache")
        >>> log.info("Caching build directories")
    """
    named = logging.getLogger(name)
    if context:
        return logging.LoggerAdapter(named, context)
    return named


def log_performance(func):
    @functools.wraps(func)
    def wrapper_timer(*args, **kwargs):
        start_time = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed = time.perf_counter() - start_time
        logger.debug(f"Function {func.__name__!r} took {elapsed:.4f} seconds to execute.")
        return result

    return wrapper_timer
