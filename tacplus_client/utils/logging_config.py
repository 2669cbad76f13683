"""JSON log records for the tacplus client.

The client prints its user-facing messages as plain lines on stderr;
diagnostics go to the same stream as one JSON object per line, so a
reader (or ``jq``) can tell the two apart.
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from collections.abc import MutableMapping
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any, TextIO

__all__ = [
    "configure_logging",
    "get_logger",
    "logging_context",
    "StructuredJSONFormatter",
    "StructuredLoggerAdapter",
]

# LogRecord attributes that are not caller supplied fields
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message"}

_REDACTED_KEYS = frozenset({"secret", "shared_secret", "password"})

_context: ContextVar[dict[str, Any]] = ContextVar("tacplus_log_context", default={})
_configured = False


class StructuredJSONFormatter(logging.Formatter):
    """Render a record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": "tacplus_client",
            "pid": record.process,
        }
        payload.update(_context.get())

        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRS or key.startswith("_"):
                continue
            payload[key] = value

        for key in _REDACTED_KEYS.intersection(payload):
            payload[key] = "***"

        if record.exc_info:
            exc_type, exc, _ = record.exc_info
            payload["error"] = {
                "type": getattr(exc_type, "__name__", ""),
                "message": str(exc),
                "stack": "".join(traceback.format_exception(*record.exc_info)).strip(),
            }

        return json.dumps(payload, default=repr, ensure_ascii=True)


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """Lift keyword arguments such as ``event=`` into the record's extra fields."""

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> tuple[str, MutableMapping[str, Any]]:
        extra = dict(kwargs.pop("extra", None) or {})
        for key in list(kwargs):
            if key not in ("exc_info", "stack_info", "stacklevel"):
                extra.setdefault(key, kwargs.pop(key))
        kwargs["extra"] = extra
        return msg, kwargs


def configure_logging(level: int = logging.WARNING, *, stream: TextIO | None = None) -> None:
    """Replace the root handlers with one JSON handler on ``stream`` (stderr)."""
    global _configured

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredJSONFormatter())
    handler.setLevel(level)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)
    _configured = True


def get_logger(name: str) -> StructuredLoggerAdapter:
    if not _configured:
        configure_logging()
    return StructuredLoggerAdapter(logging.getLogger(name), {})


@contextmanager
def logging_context(**fields: Any):
    """Add ``fields`` to every record logged inside the block."""
    token = _context.set(
        {**_context.get(), **{k: v for k, v in fields.items() if v is not None}}
    )
    try:
        yield
    finally:
        _context.reset(token)
