"""
Compiled statement container and human-readable rendering.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Iterator, Sequence, Tuple

if TYPE_CHECKING:
    from ..dialects.base import Dialect

PLACEHOLDER = "?"
_PLACEHOLDER_RE = re.compile(r"\?")
_ESCAPES = {"\\": "\\\\", "'": "\\'", '"': '\\"', "\x00": "\\0"}


@dataclass(frozen=True)
class CompiledQuery:
    """
    One SQL statement with ``?`` placeholders and its ordered bindings.
    """

    sql: str
    params: Tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", tuple(self.params))

    def __iter__(self) -> Iterator[Any]:
        yield self.sql
        yield list(self.params)

    @property
    def placeholder_count(self) -> int:
        return self.sql.count(PLACEHOLDER)

    def debug(self) -> str:
        return interpolate(self.sql, self.params)

    def render(self, param_style: str = "qmark") -> str:
        """
        Rewrite the ``?`` placeholders for a DB-API ``paramstyle``.

        Supported styles: ``qmark``, ``format``, ``numeric`` and ``dollar``.
        """

        if param_style == "qmark":
            return self.sql
        if param_style == "format":
            return self.sql.replace("%", "%%").replace(PLACEHOLDER, "%s")
        if param_style in ("numeric", "dollar"):
            prefix = ":" if param_style == "numeric" else "$"
            counter = iter(range(1, self.placeholder_count + 1))
            return _PLACEHOLDER_RE.sub(lambda _: f"{prefix}{next(counter)}", self.sql)
        raise ValueError(f"Unsupported parameter style '{param_style}'")

    def for_dialect(self, dialect: Dialect) -> str:
        """Return the SQL using the placeholder style of ``dialect``'s usual driver."""

        return self.render(dialect.param_style)


def literal(value: Any) -> str:
    """Render ``value`` for display only. Never execute the result."""

    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        value = bytes(value).decode("utf-8", errors="replace")
    text = "".join(_ESCAPES.get(char, char) for char in str(value))
    return f"'{text}'"


def interpolate(sql: str, params: Sequence[Any]) -> str:
    values = iter(params)

    def substitute(match: re.Match[str]) -> str:
        try:
            return literal(next(values))
        except StopIteration:
            return match.group(0)

    return _PLACEHOLDER_RE.sub(substitute, sql)
