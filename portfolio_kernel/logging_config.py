"""
Structured JSON logging for the portfolio kernel.

Every record under the ``portfolio_kernel`` logger is written as one JSON
line. Fields passed through ``extra=`` become top-level keys, and fields
bound with ``LogContext.bind`` (the evaluation id of a running
``Portfolio.evaluate``, the name of the rate sheet being loaded) are
attached to every record emitted inside the ``with`` block.
"""

__all__ = [
    "StructuredFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
import threading
from collections.abc import Generator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from types import MappingProxyType
from typing import Any

_EMPTY: Mapping[str, str] = MappingProxyType({})

_bound_fields: ContextVar[Mapping[str, str]] = ContextVar(
    "portfolio_log_context", default=_EMPTY
)


class LogContext:
    """Context-local log fields, safe across threads and tasks."""

    FIELDS = frozenset({"correlation_id", "evaluation_id", "rate_sheet"})

    @classmethod
    def get_all(cls) -> dict[str, str]:
        return dict(_bound_fields.get())

    @classmethod
    def clear(cls) -> None:
        _bound_fields.set(_EMPTY)

    @classmethod
    @contextmanager
    def bind(cls, **fields: str | None) -> Generator[type["LogContext"], None, None]:
        """
        Bind fields for the duration of a ``with`` block.

        Unknown names and None values are ignored. The previous bindings
        are restored on exit, including after an exception.
        """
        updates = {
            name: value
            for name, value in fields.items()
            if name in cls.FIELDS and value is not None
        }
        token = _bound_fields.set(MappingProxyType({**_bound_fields.get(), **updates}))
        try:
            yield cls
        finally:
            _bound_fields.reset(token)


_STDLIB_KEYS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "taskName"}


class StructuredFormatter(logging.Formatter):
    """Formats each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **LogContext.get_all(),
        }

        for key, val in vars(record).items():
            if key not in _STDLIB_KEYS and key not in payload:
                payload[key] = val

        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            payload["exc_type"] = type(exc).__name__
            payload["exc_code"] = getattr(exc, "code", None)
            payload["exc_message"] = str(exc)
            payload["traceback"] = self.formatException(record.exc_info)

        # Decimal and other non-JSON values serialize through str
        return json.dumps(payload, default=str)


_LOGGER_PREFIX = "portfolio_kernel"


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the portfolio_kernel namespace."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


_configured = False
_lock = threading.Lock()


def configure_logging(
    *,
    level: int = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """Attach a JSON handler to the portfolio_kernel logger once per process."""
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    kernel_logger = logging.getLogger(_LOGGER_PREFIX)
    kernel_logger.setLevel(level)
    kernel_logger.propagate = False

    h = handler if handler is not None else logging.StreamHandler(stream or sys.stderr)
    h.setFormatter(StructuredFormatter())
    kernel_logger.addHandler(h)


def reset_logging() -> None:
    """Undo configure_logging. Used between tests."""
    global _configured
    with _lock:
        _configured = False
    kernel_logger = logging.getLogger(_LOGGER_PREFIX)
    kernel_logger.handlers.clear()
    kernel_logger.setLevel(logging.WARNING)
    kernel_logger.propagate = True
