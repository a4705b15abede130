"""JSON logging for the engine relay."""

import json
import logging
import logging.config
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import DEFAULT_LOG_PATH

# Per-turn keys lifted to the top level of each JSON line
TURN_FIELDS = ("conversation_id", "channel", "session_id")


def turn_fields(activity: Any, session_id: str | None = None) -> dict[str, Any]:
    """Build the logging `extra` mapping for one turn."""
    fields = {
        "conversation_id": activity.conversation.id if activity.conversation else None,
        "channel": activity.channel_id,
    }
    if session_id is not None:
        fields["session_id"] = session_id
    return fields


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with turn fields when the caller passed them."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in TURN_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_data[name] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_logging(log_level: str | None = None, log_file: str | None = None) -> None:
    """Log JSON to stdout and to a rotating file (04_logs/app.log by default).

    log_level falls back to the LOG_LEVEL env var, then INFO.
    """
    log_level = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_file = log_file or str(DEFAULT_LOG_PATH)
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"json": {"()": JSONFormatter}},
            "handlers": {
                "file": {
                    "class": "logging.handlers.RotatingFileHandler",
                    "filename": log_file,
                    "maxBytes": 10 * 1024 * 1024,
                    "backupCount": 5,
                    "formatter": "json",
                    "encoding": "utf-8",
                },
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": "ext://sys.stdout",
                },
            },
            # httpx logs every engine and connector request at INFO
            "loggers": {"httpx": {"level": "WARNING"}},
            "root": {"level": log_level, "handlers": ["file", "console"]},
        }
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
