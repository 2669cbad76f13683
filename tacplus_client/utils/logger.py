"""Project-wide logging helpers built on structured logging utilities."""

from __future__ import annotations

import logging

from .logging_config import (
    StructuredJSONFormatter,
    configure_logging,
    get_logger,
    logging_context,
)

__all__ = [
    "configure",
    "get_logger",
    "level_from_name",
    "set_level",
    "logging_context",
]


def level_from_name(name: str | None, default: int = logging.WARNING) -> int:
    """Translate a level name such as ``"debug"`` into a logging level."""
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def configure(level: str | int | None = None) -> None:
    """Configure JSON logging on stderr from a level or level name."""
    if not isinstance(level, int):
        level = level_from_name(level)
    configure_logging(level)


def set_level(name: str | None) -> None:
    """Apply a level name to the root logger and its JSON handler."""
    level = level_from_name(name)
    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers:
        if isinstance(handler.formatter, StructuredJSONFormatter):
            handler.setLevel(level)
