"""
Environment-driven settings for polysql.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from .dialects.base import IDENTIFIER_PATTERN
from .errors import ConfigurationError

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def parse_bool(value: str, *, key: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean value for '{key}': {value!r}")


def parse_int(value: str, *, key: str, minimum: int | None = None) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid integer value for '{key}': {value!r}") from exc
    if minimum is not None and parsed < minimum:
        raise ConfigurationError(f"Value for '{key}' must be >= {minimum}, got {parsed}")
    return parsed


def parse_float(value: str, *, key: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid float value for '{key}': {value!r}") from exc


@dataclass(frozen=True)
class CompilerSettings:
    """
    Tunables shared by the query builder and schema builder.
    """

    insert_chunk_size: int = 1000
    slow_query_ms: float = 100.0
    deleted_at_column: str = "deleted_at"
    redact_query_log: bool = True

    def __post_init__(self) -> None:
        if self.insert_chunk_size < 1:
            raise ConfigurationError("insert_chunk_size must be a positive integer")
        if not IDENTIFIER_PATTERN.fullmatch(self.deleted_at_column):
            raise ConfigurationError(
                f"deleted_at_column is not a valid identifier: {self.deleted_at_column!r}"
            )

    @classmethod
    def from_env(
        cls, prefix: str = "POLYSQL_", environ: Mapping[str, str] | None = None
    ) -> "CompilerSettings":
        """
        Build settings from ``<prefix><FIELD>`` environment variables.
        """

        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        raw = env.get(f"{prefix}INSERT_CHUNK_SIZE")
        if raw:
            values["insert_chunk_size"] = parse_int(raw, key="insert_chunk_size", minimum=1)
        raw = env.get(f"{prefix}SLOW_QUERY_MS")
        if raw:
            values["slow_query_ms"] = parse_float(raw, key="slow_query_ms")
        raw = env.get(f"{prefix}DELETED_AT_COLUMN")
        if raw:
            values["deleted_at_column"] = raw.strip()
        raw = env.get(f"{prefix}REDACT_QUERY_LOG")
        if raw:
            values["redact_query_log"] = parse_bool(raw, key="redact_query_log")
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> "CompilerSettings":
        known = {item.name for item in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigurationError(f"Unknown settings: {', '.join(sorted(unknown))}")
        return replace(self, **overrides)
