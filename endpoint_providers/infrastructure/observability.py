"""Structured Logging — formatters and root-handler setup for discovery and request faults.

Invariants:
    - Every record carries timestamp, level, logger name, and message
    - Discovery and request context (error_code, path, marker, provider, provider_count)
      is rendered in both formats whenever the record carries it
    - setup_logging owns exactly one root handler, however often it is called

Design Decisions:
    - stdlib logging with hand-written formatters, no structlog: records come from
      plain logging.getLogger(__name__) calls with extra={...}
    - Text format appends context as key=value so local runs show which provider
      or marker a line is about
    - Repeated setup swaps the owned handler (tests build many apps in one process)
"""

import logging
import json
from datetime import datetime, timezone

CONTEXT_FIELDS = ("error_code", "path", "marker", "provider", "provider_count")

_installed_handler: logging.Handler | None = None


def record_context(record: logging.LogRecord, fields=CONTEXT_FIELDS) -> dict:
    """Context extras present on record, in field order."""
    return {
        key: record.__dict__[key]
        for key in fields
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def __init__(self, fields: tuple[str, ...] = CONTEXT_FIELDS):
        super().__init__()
        self.fields = fields

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **record_context(record, self.fields),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable line with trailing key=value context."""

    def __init__(self, fields: tuple[str, ...] = CONTEXT_FIELDS):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")
        self.fields = fields

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        context = record_context(record, self.fields)
        if context:
            line += " [" + " ".join(f"{k}={v}" for k, v in context.items()) + "]"
        return line


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install (or replace) the application's root handler."""
    global _installed_handler
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    if _installed_handler is not None:
        logging.root.removeHandler(_installed_handler)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    _installed_handler = handler
    return handler
