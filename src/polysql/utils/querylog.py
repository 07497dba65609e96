"""
Append-only log of statements handed to connections.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from threading import RLock
from typing import Any, Dict, List, Sequence

from .redaction import redact_params


@dataclass(frozen=True)
class QueryLogEntry:
    connection: str
    sql: str
    params: tuple[Any, ...]
    elapsed_ms: float
    logged_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class QueryLog:
    """
    Records executed statements per connection name.

    Entries are only ever appended; readers receive copies, so concurrent
    reads never observe a half-written list.
    """

    def __init__(self, *, redact: bool = True, max_entries: int | None = None) -> None:
        self.redact = redact
        self.max_entries = max_entries
        self._entries: Dict[str, List[QueryLogEntry]] = {}
        self._lock = RLock()

    def add(
        self,
        sql: str,
        params: Sequence[Any] = (),
        *,
        connection: str = "default",
        elapsed_ms: float = 0.0,
    ) -> QueryLogEntry:
        values = redact_params(params) if self.redact else list(params)
        entry = QueryLogEntry(
            connection=connection,
            sql=" ".join(sql.split()),
            params=tuple(values),
            elapsed_ms=elapsed_ms,
        )
        with self._lock:
            bucket = self._entries.setdefault(connection, [])
            bucket.append(entry)
            if self.max_entries is not None and len(bucket) > self.max_entries:
                del bucket[: len(bucket) - self.max_entries]
        return entry

    def get(self, connection: str = "default") -> List[QueryLogEntry]:
        with self._lock:
            return list(self._entries.get(connection, ()))

    def count(self, connection: str = "default") -> int:
        with self._lock:
            return len(self._entries.get(connection, ()))

    def connections(self) -> List[str]:
        with self._lock:
            return sorted(self._entries)

    def clear(self, connection: str | None = None) -> None:
        with self._lock:
            if connection is None:
                self._entries.clear()
            else:
                self._entries.pop(connection, None)
