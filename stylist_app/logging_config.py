"""Structured logging for the closet stylist.

Logs are emitted as one JSON object per line. Every record carries the
correlation id of the request that produced it, and closet contents (photo
URLs, blobs, emails) are masked before they reach a handler.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import os
import re
import time
import uuid
from typing import Any, Dict, Iterator, Optional

CORRELATION_ID: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("correlation_id", default=None)

# attributes every LogRecord has; anything else was passed through ``extra``
_RECORD_ATTRIBUTES = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))) | {"message"}
_REDACTED_KEYS = frozenset({"user_id", "email", "image", "image_ref", "imageRef", "garments"})
_EMAIL = re.compile(r"[\w.\-]+@[\w.\-]+")
_IMAGE_PREFIXES = ("http://", "https://", "blob:", "data:")
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(correlation_id)s] %(message)s"


class JsonFormatter(logging.Formatter):
    """Render a record, plus its ``extra`` fields, as a JSON line."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        message = super().format(record)
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "message": message,
            "event": getattr(record, "event", message),
            "correlation_id": getattr(record, "correlation_id", None) or CORRELATION_ID.get(),
        }
        extras = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRIBUTES}
        for key, value in extras.items():
            payload.setdefault(key, redact_for_log(value))
        return json.dumps(payload, default=str)


class _CorrelationFilter(logging.Filter):
    """Give plain-text records a ``correlation_id`` attribute to format."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = CORRELATION_ID.get() or "-"
        return True


def configure_logging(level: int | str | None = None, fmt: str | None = None) -> None:
    """Install a single stream handler on the root logger.

    ``fmt`` is ``json`` (default) or ``text``; ``LOG_FORMAT`` sets it from the
    environment for local runs.
    """

    desired_level = level or os.getenv("LOG_LEVEL", "INFO")
    desired_format = (fmt or os.getenv("LOG_FORMAT", "json")).lower()
    handler = logging.StreamHandler()
    if desired_format == "text":
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
        handler.addFilter(_CorrelationFilter())
    else:
        handler.setFormatter(JsonFormatter())
    logging.root.handlers.clear()
    logging.basicConfig(level=desired_level, handlers=[handler])


def get_logger(name: str) -> logging.Logger:
    """Module logger; configures the root logger on first use."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


def _mask(value: str) -> str:
    if _EMAIL.search(value):
        return _EMAIL.sub("[redacted-email]", value)
    if value.lower().startswith(_IMAGE_PREFIXES):
        return "[redacted-url]"
    return value


def redact_for_log(payload: Any) -> Any:
    """Recursively mask closet photos and contact details in a log payload."""

    if payload is None or isinstance(payload, (bool, int, float)):
        return payload
    if isinstance(payload, str):
        return _mask(payload)
    if isinstance(payload, dict):
        return {
            key: "[redacted]" if key in _REDACTED_KEYS else redact_for_log(value)
            for key, value in payload.items()
        }
    if isinstance(payload, (list, tuple, set, frozenset)):
        return [redact_for_log(item) for item in payload]
    return str(payload)


def ensure_correlation_id(correlation_id: str | None = None) -> str:
    """Adopt ``correlation_id`` if given, else reuse the current one or mint a new one."""

    if correlation_id:
        CORRELATION_ID.set(correlation_id)
        return correlation_id
    current = CORRELATION_ID.get()
    if current:
        return current
    minted = uuid.uuid4().hex
    CORRELATION_ID.set(minted)
    return minted


@contextlib.contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    """Scope a correlation id; the previous one is restored on exit."""

    token = CORRELATION_ID.set(correlation_id or CORRELATION_ID.get() or uuid.uuid4().hex)
    try:
        yield CORRELATION_ID.get()
    finally:
        CORRELATION_ID.reset(token)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Log ``event`` with redacted structured fields."""

    correlation_id = ensure_correlation_id(fields.pop("correlation_id", None))
    exc_info = fields.pop("exc_info", None)
    logger.log(
        level,
        event,
        exc_info=exc_info,
        extra={"event": event, "correlation_id": correlation_id, **redact_for_log(fields)},
    )


@contextlib.contextmanager
def operation_context(name: str, **attributes: Any) -> Iterator[str]:
    """Run a block under one correlation id and log how long it took."""

    logger = logging.getLogger(__name__)
    with correlation_context(attributes.pop("correlation_id", None)) as scoped_id:
        start = time.perf_counter()
        try:
            yield scoped_id
        finally:
            logger.debug(
                "operation %s finished",
                name,
                extra={
                    "operation": name,
                    "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                    **redact_for_log(attributes),
                },
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
