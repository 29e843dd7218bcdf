"""JSON logging for scenario lifecycle, step narration and soft-assertion events.

Every record becomes one JSON line. Fields passed through `extra=` are merged
into the payload so CI log aggregation can filter on event, nodeid, step or seed.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

ROOT_LOGGER = "e2e"

_STANDARD_FIELDS = set(logging.makeLogRecord({}).__dict__.keys()) | {"message", "asctime"}


def setup_logging(level: str = "INFO") -> None:
    """Route root logging through one JSON stream handler at `level`."""

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(logging.getLevelName(level.upper()))


def get_logger(suffix: str | None = None) -> logging.Logger:
    """Return the suite logger, or a child such as `e2e.steps`."""
    return logging.getLogger(f"{ROOT_LOGGER}.{suffix}" if suffix else ROOT_LOGGER)


class JsonFormatter(logging.Formatter):
    """Serialize log records as compact JSON with `extra` fields inlined."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        data.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in _STANDARD_FIELDS and not key.startswith("_")
        )
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)
