"""Logging setup for the timekeeping service.

Plain text by default; one JSON object per line when ``LOG_JSON`` is on.
"""

from __future__ import annotations

import json
import logging
import sys
import threading
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Optional

__all__ = ["LogContext", "StructuredFormatter", "configure_logging", "reset_logging"]

_LOGGER_PREFIX = "hr_timekeeping"


class LogContext:
    """Request-scoped log fields (safe across threads)."""

    _request_id: ContextVar[Optional[str]] = ContextVar("log_request_id", default=None)
    _employee_id: ContextVar[Optional[str]] = ContextVar("log_employee_id", default=None)

    _FIELD_NAMES = ("request_id", "employee_id")

    @classmethod
    def set(cls, *, request_id: Optional[str] = None, employee_id: Optional[str] = None) -> None:
        """Only non-None values are updated."""
        if request_id is not None:
            cls._request_id.set(request_id)
        if employee_id is not None:
            cls._employee_id.set(employee_id)

    @classmethod
    def get_all(cls) -> dict[str, str]:
        ctx: dict[str, str] = {}
        for name in cls._FIELD_NAMES:
            val = getattr(cls, f"_{name}").get()
            if val is not None:
                ctx[name] = val
        return ctx

    @classmethod
    def clear(cls) -> None:
        for name in cls._FIELD_NAMES:
            getattr(cls, f"_{name}").set(None)


_STDLIB_KEYS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()) | {"message", "taskName"}


class StructuredFormatter(logging.Formatter):
    """Formats each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(LogContext.get_all())

        for key, val in vars(record).items():
            if key not in _STDLIB_KEYS and key not in payload:
                payload[key] = val

        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            payload["exc_type"] = type(exc).__name__
            payload["exc_message"] = str(exc)
            code = getattr(exc, "code", None)
            if code is not None:
                payload["exc_code"] = getattr(code, "value", code)
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class _ContextTextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        ctx = LogContext.get_all()
        if ctx:
            line += " [" + " ".join(f"{k}={v}" for k, v in ctx.items()) + "]"
        return line


_configured = False
_lock = threading.Lock()


def configure_logging(
    level: str | int = logging.INFO,
    json_format: bool = False,
    *,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Configure the ``hr_timekeeping`` logger hierarchy (idempotent)."""
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger(_LOGGER_PREFIX)
    root_logger.setLevel(level)
    root_logger.propagate = False

    h = handler or logging.StreamHandler(sys.stderr)
    if json_format:
        h.setFormatter(StructuredFormatter())
    else:
        h.setFormatter(_ContextTextFormatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root_logger.addHandler(h)


def reset_logging() -> None:
    """Reset logging configuration. FOR TESTING ONLY."""
    global _configured
    with _lock:
        _configured = False
    logger = logging.getLogger(_LOGGER_PREFIX)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
