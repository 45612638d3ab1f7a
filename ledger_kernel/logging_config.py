"""
Structured logging for the ledger kernel.

Every kernel event is one JSON object per line. The log message is a
snake_case event name (``transaction_posted``, ``trial_balance_computed``,
...), written to the ``event`` key; its data goes in ``extra``.

Which ledger, and which transaction reference, an event concerns is carried
by ``LogContext`` rather than repeated in every ``extra`` dict: the Ledger
and TrialBalance bind ``ledger_id`` around their work, and posting binds
``transaction_reference`` as well. Anything logged inside that scope (the
kernel's own events or a caller's) is stamped with the same fields.

Only the ``ledger_kernel`` logger hierarchy is configured; the root logger
and other libraries are left alone.
"""

__all__ = [
    "CONTEXT_FIELDS",
    "LogContext",
    "StructuredFormatter",
    "configure_logging",
    "get_logger",
    "reset_logging",
]

import json
import logging
import sys
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime
from types import MappingProxyType
from typing import Any, TextIO

_LOGGER_PREFIX = "ledger_kernel"

CONTEXT_FIELDS: tuple[str, ...] = ("ledger_id", "transaction_reference")

_EMPTY: Mapping[str, str] = MappingProxyType({})

_context: ContextVar[Mapping[str, str]] = ContextVar(
    "ledger_kernel_log_context", default=_EMPTY
)


class LogContext:
    """
    Scoped log fields shared by every record emitted inside a ``bind``.

    Backed by a single ContextVar, so each thread and each asyncio task sees
    its own bindings. Bindings nest; leaving a ``bind`` block restores the
    enclosing values exactly.
    """

    @staticmethod
    def get_all() -> dict[str, str]:
        return dict(_context.get())

    @staticmethod
    @contextmanager
    def bind(**fields: Any) -> Iterator[None]:
        """
        Add fields for the duration of the block. None values are skipped.

        Raises:
            TypeError: for a field name outside CONTEXT_FIELDS.
        """
        unknown = set(fields) - set(CONTEXT_FIELDS)
        if unknown:
            raise TypeError(f"Unknown log context fields: {sorted(unknown)}")
        merged = dict(_context.get())
        merged.update({k: str(v) for k, v in fields.items() if v is not None})
        token = _context.set(MappingProxyType(merged))
        try:
            yield
        finally:
            _context.reset(token)

    @staticmethod
    def clear() -> None:
        _context.set(_EMPTY)


def _json_default(value: Any) -> str:
    # Decimal, UUID, Account, ... render through str(); Decimal keeps every digit.
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


# Attributes every LogRecord has; anything else came from ``extra``.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


class StructuredFormatter(logging.Formatter):
    """
    Renders a record as a single JSON line.

    Key order: ts, level, logger, event, then context fields, then extras.
    Exceptions add ``error`` (a dict of the exception's code, type, message
    and structured attributes) and ``traceback``.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        payload.update(_context.get())
        payload.update(
            (k, v) for k, v in vars(record).items()
            if k not in _RECORD_ATTRS and k not in payload
        )
        if record.exc_info and record.exc_info[1] is not None:
            payload["error"] = self._error_fields(record.exc_info[1])
            payload["traceback"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=_json_default)

    @staticmethod
    def _error_fields(exc: BaseException) -> dict[str, Any]:
        fields: dict[str, Any] = {
            "type": type(exc).__name__,
            "message": str(exc),
        }
        code = getattr(exc, "code", None)
        if code is not None:
            fields["code"] = code
        fields.update((k, v) for k, v in vars(exc).items() if not k.startswith("_"))
        return fields


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``ledger_kernel`` namespace."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


def _kernel_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if isinstance(h.formatter, StructuredFormatter)]


def configure_logging(
    *,
    level: int = logging.INFO,
    stream: TextIO | None = None,
    handler: logging.Handler | None = None,
) -> logging.Logger:
    """
    Attach a JSON handler to the ``ledger_kernel`` logger.

    Idempotent: if a structured handler is already attached, only the
    level is updated.
    """
    logger = logging.getLogger(_LOGGER_PREFIX)
    logger.setLevel(level)
    if _kernel_handlers(logger):
        return logger
    if handler is None:
        handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def reset_logging() -> None:
    """Detach structured handlers and restore propagation. Used by tests."""
    logger = logging.getLogger(_LOGGER_PREFIX)
    for handler in _kernel_handlers(logger):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
