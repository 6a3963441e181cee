"""JSON-line logging with a stable field set."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from geo6.common.constants import JSON_LOG_FIELDS, PROVIDER_NAME
from geo6.common.time_utils import utc_timestamp_iso

LOGGER_NAME = "geo6"


class JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {"timestamp": utc_timestamp_iso()}
        for field in JSON_LOG_FIELDS:
            if field in ("timestamp", "message"):
                continue
            payload[field] = getattr(record, field, None)
        payload["level"] = record.levelname
        payload["message"] = record.getMessage()
        return json.dumps(payload, ensure_ascii=False)


def build_logger(level: str = "INFO", log_path: Path | None = None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    stream = logging.StreamHandler()
    stream.setFormatter(JsonLineFormatter())
    logger.addHandler(stream)

    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(JsonLineFormatter())
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def log_event(logger: logging.Logger, message: str, *, level: int = logging.INFO, **event_fields: Any) -> None:
    event_fields.setdefault("provider", PROVIDER_NAME)
    logger.log(level, message, extra=event_fields)
