from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import TextIO

_RECORD_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record: timestamp, level, logger, event and any ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(level: str = "WARNING", stream: TextIO | None = None) -> logging.Logger:
    logger = logging.getLogger("admin_console_sdk")
    logger.setLevel(level.upper())
    for handler in list(logger.handlers):
        if getattr(handler, "_admin_console_handler", False):
            logger.removeHandler(handler)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonLineFormatter())
    handler._admin_console_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
