"""
Logging setup for the search service.

Two output styles share one entry point: the human-readable line format
used by the API process, and JSON lines for log shippers. Stage
transitions carry their search id and progress map as structured fields
so either style can be filtered by search.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-35s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Chatty HTTP/SDK loggers kept at WARNING
NOISY_LOGGERS = ("httpcore", "httpx", "openai")

# Record attributes copied into JSON output when present
STRUCTURED_FIELDS = ("event", "search_id", "stage", "progress", "update")


class StructuredFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in STRUCTURED_FIELDS:
            if hasattr(record, name):
                entry[name] = getattr(record, name)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(
    level: int = logging.INFO,
    json_format: bool = False,
    log_file: Optional[str] = None,
    logger_name: Optional[str] = None,
) -> logging.Logger:
    """
    Configure handlers for the service.

    Args:
        level: Level for the configured logger
        json_format: Emit JSON lines instead of the plain line format
        log_file: Also write to this file when given
        logger_name: Logger to configure; the root logger when None

    Returns:
        The configured logger
    """
    target = logging.getLogger(logger_name)
    target.setLevel(level)
    target.handlers = []

    if json_format:
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)
        target.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return target


def log_stage_transition(
    event: str,
    search_id: str,
    progress: Mapping[str, str],
    extra: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log a progress change for a search.

    Args:
        event: Event name, e.g. "progress_update"
        search_id: Search the event belongs to
        progress: Progress map after the change
        extra: The partial update that caused it
        logger: Logger to use (defaults to the package logger)
    """
    logger = logger or logging.getLogger("tripsearch")
    summary = ", ".join(f"{stage}={status}" for stage, status in progress.items())
    logger.info(
        f"[search={search_id}] Stage transition: {event} | {summary}",
        extra={
            "event": event,
            "search_id": search_id,
            "progress": dict(progress),
            "update": dict(extra or {}),
        },
    )
