"""JSON console logging for the lookup front-end."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from .redaction import sanitize_text

# Attributes the Open-Meteo client attaches through ``extra=``.
CONTEXT_FIELDS = ("provider", "context", "status_code")


class JsonConsoleFormatter(logging.Formatter):
    """One JSON object per record, with request context when present."""

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": sanitize_text(record.getMessage()),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                event[field] = value
        if record.exc_info:
            event["exception"] = sanitize_text(self.formatException(record.exc_info))
        return json.dumps(event, default=str)


def setup_logger(name: str = "weather_lookup", level: int = logging.WARNING) -> logging.Logger:
    """Return the lookup logger with a single JSON console handler.

    The interactive front-end shares the terminal with the rendered weather
    panel, so only warnings get through by default.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(JsonConsoleFormatter())
        logger.addHandler(handler)
    return logger
