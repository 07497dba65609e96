"""
Accumulated query builder state.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, List, Optional

from ..dialects.pagination import page_offset


@dataclass
class QueryState:
    """
    Everything a builder has collected for one statement.

    Clause text is stored already quoted. WHERE fragments carry their own
    ``AND``/``OR`` prefix, except the first, which carries none. Bindings are
    appended when their clause is added and kept per clause, so
    :attr:`bindings` always follows placeholder order in the compiled SQL.
    """

    table: Optional[str] = None
    columns: List[str] = field(default_factory=lambda: ["*"])
    distinct: bool = False
    joins: List[str] = field(default_factory=list)
    wheres: List[str] = field(default_factory=list)
    where_bindings: List[Any] = field(default_factory=list)
    groups: List[str] = field(default_factory=list)
    havings: List[str] = field(default_factory=list)
    having_bindings: List[Any] = field(default_factory=list)
    orders: List[str] = field(default_factory=list)
    limit: Optional[int] = None
    page: Optional[int] = None
    soft_delete: bool = False

    @property
    def bindings(self) -> List[Any]:
        return [*self.where_bindings, *self.having_bindings]

    @property
    def offset(self) -> Optional[int]:
        if self.page is None or self.limit is None:
            return None
        return page_offset(self.limit, self.page)

    @property
    def has_where(self) -> bool:
        return bool(self.wheres)

    @property
    def ordered(self) -> bool:
        return bool(self.orders)

    def next_prefix(self, compare: str) -> str:
        return f"{compare} " if self.wheres else ""

    def copy(self) -> "QueryState":
        return replace(
            self,
            columns=list(self.columns),
            joins=list(self.joins),
            wheres=list(self.wheres),
            where_bindings=list(self.where_bindings),
            groups=list(self.groups),
            havings=list(self.havings),
            having_bindings=list(self.having_bindings),
            orders=list(self.orders),
        )
