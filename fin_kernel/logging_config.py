"""
fin_kernel.logging_config -- JSON-line logging for depreciation callers.

Responsibility:
    Every engine, module and config loader logs through ``get_logger``.
    Records leave as one JSON object per line so schedule runs can be
    searched by asset, schedule or correlation id without regexes.

Record envelope:
    ``ts`` (UTC ISO-8601), ``level``, ``logger``, ``message``; then any
    bound ``LogContext`` fields; then the record's ``extra`` keys.
    Exceptions add ``exc_type``, ``exc_message``, ``exc_code`` (for FIN
    kernel errors), one ``exc_<attr>`` per public attribute and
    ``traceback``.

Failure modes:
    - ``LogContext.set`` / ``bind`` raise ValueError for unknown fields.
    - Values json cannot encode are logged via ``str``.
"""

from __future__ import annotations

import json
import logging
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

__all__ = [
    "LogContext",
    "StructuredFormatter",
    "configure_logging",
    "get_logger",
    "reset_logging",
]

# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------

_CONTEXT_FIELDS = ("correlation_id", "actor_id", "asset_id", "schedule_id", "trace_id")

_context_vars: dict[str, ContextVar[str | None]] = {
    name: ContextVar(f"fin_log_{name}", default=None) for name in _CONTEXT_FIELDS
}


def _check_fields(names: Any) -> None:
    unknown = set(names) - set(_CONTEXT_FIELDS)
    if unknown:
        raise ValueError(f"Unknown log context fields: {sorted(unknown)}")


@contextmanager
def _bound(fields: dict[str, str | None]) -> Iterator[type[LogContext]]:
    tokens: list[tuple[ContextVar[str | None], Token]] = [
        (_context_vars[name], _context_vars[name].set(value))
        for name, value in fields.items()
        if value is not None
    ]
    try:
        yield LogContext
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


class LogContext:
    """
    Request-scoped log fields, safe across threads and asyncio tasks.

    Fields: ``correlation_id``, ``actor_id``, ``asset_id``,
    ``schedule_id``, ``trace_id``.
    """

    FIELDS = _CONTEXT_FIELDS

    @classmethod
    def set(cls, **fields: str | None) -> None:
        """Set fields for the current context; None values are skipped."""
        _check_fields(fields)
        for name, value in fields.items():
            if value is not None:
                _context_vars[name].set(value)

    @classmethod
    def get_all(cls) -> dict[str, str]:
        return {
            name: value
            for name in _CONTEXT_FIELDS
            if (value := _context_vars[name].get()) is not None
        }

    @classmethod
    def clear(cls) -> None:
        for var in _context_vars.values():
            var.set(None)

    @classmethod
    def bind(cls, **fields: str | None):
        """
        Context manager: set ``fields`` on entry, restore prior values on exit.

            with LogContext.bind(asset_id="FA-0042"):
                engine.calculate(request)
        """
        _check_fields(fields)
        return _bound(fields)


# ---------------------------------------------------------------------------
# Formatter
# ---------------------------------------------------------------------------

# Attributes every LogRecord carries; anything else came in via ``extra``.
_RESERVED: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


def _encode(value: Any) -> Any:
    if isinstance(value, (Decimal, UUID)):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _exception_fields(exc: BaseException) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "exc_type": type(exc).__name__,
        "exc_message": str(exc),
    }
    code = getattr(exc, "code", None)
    if code is not None:
        fields["exc_code"] = code
    fields.update(
        (f"exc_{name}", value)
        for name, value in vars(exc).items()
        if not name.startswith("_")
    )
    return fields


class StructuredFormatter(logging.Formatter):
    """Render a record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **LogContext.get_all(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED:
                payload.setdefault(key, value)

        if record.exc_info and record.exc_info[1] is not None:
            payload.update(_exception_fields(record.exc_info[1]))
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=_encode)


# ---------------------------------------------------------------------------
# Loggers
# ---------------------------------------------------------------------------

_ROOT_NAME = "fin_kernel"


def get_logger(name: str) -> logging.Logger:
    """Logger ``fin_kernel.<name>``; e.g. ``get_logger("engines.depreciation")``."""
    return logging.getLogger(f"{_ROOT_NAME}.{name}")


_configured = False
_lock = threading.Lock()


def configure_logging(
    *,
    level: int | str = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """
    Attach a JSON handler to the ``fin_kernel`` logger.

    Only the first call has any effect until ``reset_logging``.  ``level``
    may be a number or a name such as ``"DEBUG"``.
    """
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    if handler is None:
        handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter())

    root = logging.getLogger(_ROOT_NAME)
    root.setLevel(level.upper() if isinstance(level, str) else level)
    root.propagate = False
    root.addHandler(handler)


def reset_logging() -> None:
    """Drop handlers and return to the unconfigured state. Tests only."""
    global _configured
    with _lock:
        _configured = False
    root = logging.getLogger(_ROOT_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.WARNING)
    root.propagate = True
