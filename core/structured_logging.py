"""Structured logging helpers with run and source-file correlation context."""

from __future__ import annotations

import contextvars
import logging
import os
import uuid
from contextlib import contextmanager
from typing import Iterator, Union

_RUN_ID_VAR: contextvars.ContextVar[str] = contextvars.ContextVar(
    "run_id", default="-"
)
_SOURCE_VAR: contextvars.ContextVar[str] = contextvars.ContextVar(
    "source", default="-"
)

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | run_id=%(run_id)s | source=%(source)s | "
    "%(name)s | %(message)s"
)


class _CorrelationFilter(logging.Filter):
    """Inject run and source fields into all log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _RUN_ID_VAR.get("-")
        record.source = _SOURCE_VAR.get("-")
        return True


def _ensure_filter_on_root_handlers() -> None:
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, _CorrelationFilter) for f in handler.filters):
            handler.addFilter(_CorrelationFilter())


def configure_structured_logging(level: int = logging.INFO) -> None:
    """Configure root logging format with run/source context."""
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    else:
        root_logger.setLevel(level)
        formatter = logging.Formatter(LOG_FORMAT)
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)
    _ensure_filter_on_root_handlers()


def set_run_id(run_id: str | None = None) -> str:
    """Set or generate run correlation ID."""
    value = run_id or str(uuid.uuid4())
    _RUN_ID_VAR.set(value)
    return value


def get_run_id() -> str:
    """Get current run correlation ID."""
    return _RUN_ID_VAR.get("-")


@contextmanager
def source_scope(path: Union[str, os.PathLike]) -> Iterator[None]:
    """Tag records emitted inside the block with ``source=<path>``."""
    token = _SOURCE_VAR.set(os.fspath(path))
    try:
        yield
    finally:
        _SOURCE_VAR.reset(token)
