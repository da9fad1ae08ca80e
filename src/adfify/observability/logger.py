"""Structured JSON logger for adfify.

Each record is written as a single-line JSON object so conversion
diagnostics can be shipped to a log pipeline without extra parsing::

    {"ts": "2026-01-05T09:30:00.000000+00:00", "level": "WARNING",
     "logger": "adfify.converter", "message": "tableRow, tableCell build failed.",
     "code": "TABLE_CELL_BUILD_FAILED", "cell": {...}, "transformed": [...]}

Usage::

    from adfify.observability import get_logger

    log = get_logger("adfify.converter")
    log.warning("cell dropped", extra={"extra_fields": {"row": 2}})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any


class StructuredFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    Guaranteed keys are ``ts`` (ISO-8601 UTC), ``level``, ``logger`` and
    ``message``.  Fields passed as ``extra={"extra_fields": {...}}`` are
    merged into the top level; ``exception`` and ``stack_info`` appear
    when the record carries them.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra_fields: dict[str, Any] | None = getattr(record, "extra_fields", None)
        if extra_fields is not None:
            entry.update(extra_fields)

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            entry["stack_info"] = self.formatStack(record.stack_info)

        # Tokens and nodes are plain JSON, anything else falls back to str().
        return json.dumps(entry, default=str, ensure_ascii=False)


# One handler per logger name, so repeated get_logger calls stay idempotent.
_configured_loggers: set[str] = set()


def get_logger(
    name: str = "adfify",
    *,
    level: int | str = logging.DEBUG,
    stream: Any | None = None,
) -> logging.Logger:
    """Get or create a structured JSON logger.

    Parameters
    ----------
    name:
        Logger name.  Defaults to ``"adfify"``.
    level:
        Minimum level, as an ``int`` or a case-insensitive level name.
    stream:
        Output stream for the handler.  Defaults to ``sys.stderr``.

    Returns
    -------
    logging.Logger
        The configured logger.  Only the first call for a given *name*
        attaches a handler; later calls return the same logger untouched.
    """
    logger = logging.getLogger(name)

    if name not in _configured_loggers:
        resolved_level = (
            logging.getLevelName(level.upper())
            if isinstance(level, str)
            else level
        )
        logger.setLevel(resolved_level)

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.propagate = False

        _configured_loggers.add(name)

    return logger
