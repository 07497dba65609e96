"""Structured logging helpers for polysql."""

from __future__ import annotations

import logging
import time
import uuid
from contextvars import ContextVar
from typing import IO, Any, Iterable, Optional

from .redaction import redact_params

ROOT_LOGGER = "polysql"
DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(correlation_id)s | %(name)s | %(message)s"

_correlation_id: ContextVar[str | None] = ContextVar("polysql_correlation_id", default=None)


class CorrelationIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id()
        return True


def configure_logging(
    level: int = logging.INFO,
    *,
    stream: IO[str] | None = None,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Logger:
    logger = logging.getLogger(ROOT_LOGGER)
    if logger.handlers:
        return logger
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt))
    handler.addFilter(CorrelationIdFilter())
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def set_correlation_id(value: Optional[str] = None) -> str:
    token = value or uuid.uuid4().hex
    _correlation_id.set(token)
    return token


def get_correlation_id() -> str:
    cid = _correlation_id.get()
    if cid is None:
        cid = set_correlation_id()
    return cid


class time_call:
    """
    Context manager logging how long a statement took.

    Durations at or above ``threshold_ms`` are logged at WARNING, the rest at
    DEBUG. Parameters are redacted before they reach the log record.
    """

    def __init__(
        self,
        name: str,
        logger: logging.Logger,
        *,
        sql: str | None = None,
        params: Iterable[Any] | None = None,
        threshold_ms: float = 100,
    ) -> None:
        self.name = name
        self.logger = logger
        self.sql = sql
        self.params = redact_params(params) if params is not None else None
        self.threshold_ms = threshold_ms
        self.elapsed_ms = 0.0
        self._start = 0.0

    def __enter__(self) -> "time_call":
        self._start = time.monotonic()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.elapsed_ms = (time.monotonic() - self._start) * 1000
        level = logging.WARNING if self.elapsed_ms >= self.threshold_ms else logging.DEBUG
        extra = {"sql": self.sql, "params": self.params, "elapsed_ms": self.elapsed_ms}
        if exc_type is not None:
            self.logger.log(
                level, "%s failed after %.2fms: %s", self.name, self.elapsed_ms, exc, extra=extra
            )
            return
        self.logger.log(level, "%s took %.2fms", self.name, self.elapsed_ms, extra=extra)
