"""Structured Logging — one JSON object per record for the hosting platform's log sink.

Invariants:
    - Every record carries timestamp (the record's creation time, UTC), level, logger
      name and message
    - Request-scoped fields (event_id, operation, error_code, path, result_count,
      validation_errors) appear only when a call site supplied them via `extra`
    - LOG_FORMAT=json emits JSON lines; any other value emits plain text for local runs

Design Decisions:
    - setup_logging is called once, from the application lifespan
"""

import logging
import json
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "event_id", "operation", "error_code", "path", "result_count",
    "validation_errors",
)


class JSONFormatter(logging.Formatter):
    """Render a LogRecord as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Attach one stream handler to the root logger in the requested format."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
