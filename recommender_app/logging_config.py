"""Structured logging helpers for the outfit recommender app.

Records are emitted as one JSON object per line by default. ``LOG_FORMAT=text``
switches to a plain single-line format, which is easier to read next to the
CLI's JSON output. Extra fields passed through :func:`log_event` are scrubbed
for owner ids, locations and image links before they reach a handler.
"""

from __future__ import annotations

import contextlib
import contextvars
import dataclasses
import enum
import json
import logging
import os
import re
import time
import uuid
from datetime import date, datetime
from typing import Any, Dict, Iterator

SERVICE_NAME = "outfit-recommender"
TEXT_FORMAT = "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s"
MAX_LOGGED_SEQUENCE = 20

CORRELATION_ID = contextvars.ContextVar("correlation_id", default=None)

_RESERVED_RECORD_KEYS = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}
_REDACT_KEYS = {
    "user_id",
    "owner_id",
    "email",
    "location",
    "image_url",
    "wardrobe",
}
_EMAIL_PATTERN = re.compile(r"[\w.\-]+@[\w.\-]+")


class JsonFormatter(logging.Formatter):
    """Emit structured JSON logs with correlation metadata."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "service": SERVICE_NAME,
            "logger": record.name,
            "message": record.getMessage(),
            "event": getattr(record, "event", None) or record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", None) or CORRELATION_ID.get(),
        }
        for key, value in record.__dict__.items():
            if key in _RESERVED_RECORD_KEYS or key in payload:
                continue
            payload[key] = redact_for_log(value)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class _CorrelationFilter(logging.Filter):
    """Guarantee ``correlation_id`` on every record so text formats never fail."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = CORRELATION_ID.get() or "-"
        return True


def configure_logging(level: int | str | None = None, fmt: str | None = None) -> None:
    """Configure root logging; ``fmt`` is ``"json"`` (default) or ``"text"``."""

    desired_level = level or os.getenv("LOG_LEVEL", "INFO")
    desired_format = (fmt or os.getenv("LOG_FORMAT", "json")).lower()
    logging.root.handlers.clear()
    handler = logging.StreamHandler()
    handler.addFilter(_CorrelationFilter())
    if desired_format == "text":
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    else:
        handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=desired_level, handlers=[handler])


def _redact_string(value: str) -> str:
    if _EMAIL_PATTERN.search(value):
        return _EMAIL_PATTERN.sub("[redacted-email]", value)
    if value.lower().startswith("http"):
        return "[redacted-url]"
    return value


def redact_for_log(payload: Any) -> Any:
    """Scrub owner ids, locations, image links and e-mail addresses from log fields.

    Enums log as their value and dates in ISO format. Sequences longer than
    ``MAX_LOGGED_SEQUENCE`` are cut short with a trailing marker so a full
    wardrobe never ends up in a single record.
    """

    if payload is None or isinstance(payload, (bool, int, float)):
        return payload
    if isinstance(payload, enum.Enum):
        return payload.value
    if isinstance(payload, (date, datetime)):
        return payload.isoformat()
    if isinstance(payload, str):
        return _redact_string(payload)
    if dataclasses.is_dataclass(payload) and not isinstance(payload, type):
        return redact_for_log(dataclasses.asdict(payload))
    if isinstance(payload, (list, tuple, set, frozenset)):
        items = list(payload)
        scrubbed = [redact_for_log(item) for item in items[:MAX_LOGGED_SEQUENCE]]
        if len(items) > MAX_LOGGED_SEQUENCE:
            scrubbed.append(f"... {len(items) - MAX_LOGGED_SEQUENCE} more")
        return scrubbed
    if isinstance(payload, dict):
        return {
            key: "[redacted]" if key in _REDACT_KEYS else redact_for_log(value) for key, value in payload.items()
        }
    return str(payload)


def get_logger(name: str) -> logging.Logger:
    """Return a module logger ensuring configuration is applied."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


def ensure_correlation_id(correlation_id: str | None = None) -> str:
    """Return the active correlation id, adopting ``correlation_id`` or minting one."""

    if correlation_id:
        CORRELATION_ID.set(correlation_id)
        return correlation_id
    current = CORRELATION_ID.get()
    if current:
        return current
    new_id = uuid.uuid4().hex
    CORRELATION_ID.set(new_id)
    return new_id


@contextlib.contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    """Temporarily set a correlation id, restoring the previous one on exit."""

    token = CORRELATION_ID.set(correlation_id or CORRELATION_ID.get() or uuid.uuid4().hex)
    try:
        yield CORRELATION_ID.get()
    finally:
        CORRELATION_ID.reset(token)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Emit a structured log entry with correlation metadata."""

    correlation_id = ensure_correlation_id(fields.pop("correlation_id", None))
    exc_info = fields.pop("exc_info", None)
    safe_fields = {
        key if key not in _RESERVED_RECORD_KEYS else f"field_{key}": value
        for key, value in redact_for_log(fields).items()
    }
    logger.log(
        level,
        event,
        exc_info=exc_info,
        extra={"event": event, "correlation_id": correlation_id, **safe_fields},
    )


@contextlib.contextmanager
def operation_context(name: str, correlation_id: str | None = None) -> Iterator[str]:
    """Scope a correlation id around an operation and log its duration at debug level."""

    logger = logging.getLogger(__name__)
    start = time.perf_counter()
    with correlation_context(correlation_id) as scoped_id:
        try:
            yield scoped_id
        finally:
            log_event(
                logger,
                logging.DEBUG,
                "operation_finished",
                operation=name,
                correlation_id=scoped_id,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )


__all__ = [
    "JsonFormatter",
    "configure_logging",
    "correlation_context",
    "ensure_correlation_id",
    "get_logger",
    "log_event",
    "redact_for_log",
    "operation_context",
]
