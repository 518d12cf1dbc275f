"""JSON log output for rating discovery and scoring.

Loggers attach rating context through ``extra=``; the formatter copies the
known context fields into each JSON line.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any, Dict, Iterable, Optional

CONTEXT_FIELDS = ("run_id", "component", "unit", "path", "rating", "type", "error", "count")


class JSONFormatter(logging.Formatter):
    """Render records as one JSON object per line, keeping known context fields."""

    def __init__(self, fields: Iterable[str] = CONTEXT_FIELDS) -> None:
        super().__init__()
        self.fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update({name: getattr(record, name) for name in self.fields if hasattr(record, name)})
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class ContextFilter(logging.Filter):
    """Fill in run/component defaults the call site did not pass."""

    def __init__(self, run_id: Optional[str] = None, component: Optional[str] = None) -> None:
        super().__init__()
        self.defaults = {k: v for k, v in (("run_id", run_id), ("component", component)) if v}

    def filter(self, record: logging.LogRecord) -> bool:
        for name, value in self.defaults.items():
            if not hasattr(record, name):
                setattr(record, name, value)
        return True


def configure_logging(
    run_id: Optional[str] = None,
    component: Optional[str] = None,
    level: int = logging.INFO,
    stream: Optional[IO[str]] = None,
) -> None:
    """Send root logging to stderr (or ``stream``) as JSON lines.

    stdout is left to the CLI's Rich output.
    """

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(ContextFilter(run_id, component))

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    root.addHandler(handler)


def get_logger(name: str, run_id: Optional[str] = None, component: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if run_id or component:
        logger.addFilter(ContextFilter(run_id, component))
    return logger
