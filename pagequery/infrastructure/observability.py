"""Structured Logging — JSON and text formatters that surface paging context.

Invariants:
    - JSON records always carry timestamp, level, logger, and message
    - Context fields (page_number, page_size, total_count, error_code, path,
      resource_id) appear in both formats whenever a record carries them
    - setup_logging() is idempotent: calling it again replaces its own handler
"""

import json
import logging
from datetime import datetime, timezone

CONTEXT_FIELDS = (
    "page_number", "page_size", "total_count",
    "error_code", "path", "resource_id",
)


def record_context(record: logging.LogRecord) -> dict:
    """Context fields present on a record, in CONTEXT_FIELDS order."""
    return {
        key: record.__dict__[key]
        for key in CONTEXT_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **record_context(record),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class ContextTextFormatter(logging.Formatter):
    """Human-readable lines with key=value context appended."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s - %(message)s")

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        context = record_context(record)
        if context:
            line += " | " + " ".join(f"{k}={v}" for k, v in context.items())
        return line


_handler: logging.Handler | None = None


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the root handler for the chosen format ("json" or "text")."""
    global _handler
    if _handler is not None:
        logging.root.removeHandler(_handler)
    _handler = logging.StreamHandler()
    _handler.setFormatter(JSONFormatter() if fmt == "json" else ContextTextFormatter())
    logging.root.addHandler(_handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return _handler
