"""
abi_bindgen.logging — log setup for the CLI and batch runs
==========================================================

Standard-library logging with two formatters:

- ``plain`` (default): one human-readable line per record
- ``json``: newline-delimited JSON, handy when a CI job collects output

Library modules only ever call ``logging.getLogger(__name__)``; nothing is
configured on import. The CLI calls :func:`setup_logging` once per process.

Per-run context (e.g. the ABI file being generated) is bound with
:func:`context` and attached to every record emitted inside the block. The
context lives in a ``contextvars.ContextVar``, so concurrent batch workers
never see each other's fields.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional, TextIO

__all__ = [
    "setup_logging",
    "context",
    "JsonFormatter",
    "PlainFormatter",
]

_CTX: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar("_CTX", default={})

_HANDLER_NAME = "abi-bindgen"


@contextlib.contextmanager
def context(**fields: Any) -> Iterator[None]:
    """Context manager to temporarily bind fields."""
    prev = _CTX.get()
    merged = dict(prev)
    merged.update({k: v for k, v in fields.items() if v is not None})
    token = _CTX.set(merged)
    try:
        yield
    finally:
        _CTX.reset(token)


def _iso_utc(ts: float) -> str:
    return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat()


class _ContextFilter(logging.Filter):
    """Inject the bound context into the record as 'ctx'."""
    def filter(self, record: logging.LogRecord) -> bool:
        record.ctx = dict(_CTX.get())
        return True


class JsonFormatter(logging.Formatter):
    """Emit newline-delimited JSON."""

    def format(self, record: logging.LogRecord) -> str:
        base: Dict[str, Any] = {
            "ts": _iso_utc(record.created),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        ctx = getattr(record, "ctx", None)
        if ctx:
            base["ctx"] = ctx
        if record.exc_info:
            base["exc"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
            }
        return json.dumps(base, default=str, separators=(",", ":"))


class PlainFormatter(logging.Formatter):
    """Human-friendly single-line formatter."""

    def format(self, record: logging.LogRecord) -> str:
        ctx = getattr(record, "ctx", None)
        ctx_str = " " + " ".join(f"{k}={v}" for k, v in ctx.items()) if ctx else ""
        line = f"{record.levelname:<8} {record.name}: {record.getMessage()}{ctx_str}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(
    level: str = "WARNING",
    fmt: str = "plain",
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure the ``abi_bindgen`` logger hierarchy.

    Calling again replaces the previously installed handler, so the CLI may
    be invoked repeatedly in one process (as tests do).
    """
    logger = logging.getLogger("abi_bindgen")
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    for h in list(logger.handlers):
        if h.get_name() == _HANDLER_NAME:
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream=stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.addFilter(_ContextFilter())
    handler.setFormatter(JsonFormatter() if fmt.lower() == "json" else PlainFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger
