"""
Fluent query builder accumulating :class:`QueryState` and optionally running
the compiled statements through a bound connection.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..config import CompilerSettings
from ..dialects import Dialect, resolve_dialect
from ..errors import (
    InvalidDirection,
    InvalidJoinType,
    InvalidOperator,
    MissingConnection,
    PaginationRequiresLimit,
    QueryBuilderError,
    RecordNotFound,
)
from ..utils.logging import get_logger, time_call
from ..utils.querylog import QueryLog
from .compiled import CompiledQuery
from .compiler import QueryCompiler
from .state import QueryState

if TYPE_CHECKING:
    from ..connection import Connection, Cursor

OPERATORS = frozenset({"=", "!=", "<>", "<", "<=", ">", ">=", "LIKE", "NOT LIKE"})
JOIN_TYPES = frozenset({"INNER", "LEFT", "RIGHT"})
DIRECTIONS = frozenset({"ASC", "DESC"})
COMPARES = frozenset({"AND", "OR"})

_AGGREGATE = re.compile(r"^(COUNT|SUM|AVG|MIN|MAX)\(\s*(DISTINCT\s+)?([^)]*?)\s*\)$", re.IGNORECASE)
_ALIAS = re.compile(r"^(.+?)\s+AS\s+(\S+)$", re.IGNORECASE)
_TABLE_ALIAS = re.compile(r"^(\S+)\s+(?:AS\s+)?(\S+)$", re.IGNORECASE)


class _Unset:
    def __repr__(self) -> str:
        return "<unset>"


_UNSET: Any = _Unset()

Row = Dict[str, Any]


class QueryBuilder:
    """
    Chainable builder for one statement at a time.

    Fluent calls validate their arguments immediately and append to the
    builder state. ``build()`` and the ``compile_*`` methods never mutate that
    state; execution calls reset it once the statement ran.
    """

    def __init__(
        self,
        dialect: Dialect | str,
        *,
        connection: "Connection | None" = None,
        connection_name: str = "default",
        query_log: QueryLog | None = None,
        settings: CompilerSettings | None = None,
    ) -> None:
        self.dialect = resolve_dialect(dialect)
        self.compiler = QueryCompiler(self.dialect)
        self.connection = connection
        self.connection_name = connection_name
        self.settings = settings or CompilerSettings()
        self.query_log = query_log or QueryLog(redact=self.settings.redact_query_log)
        self.logger = get_logger("query.builder")
        self._state = QueryState()
        self._table_name: Optional[str] = None

    @classmethod
    def using(cls, connection: "Connection", **kwargs: Any) -> "QueryBuilder":
        return cls(connection.dialect, connection=connection, **kwargs)

    def __repr__(self) -> str:
        return f"QueryBuilder({self.dialect.name!r}, table={self._table_name!r})"

    # Target ----------------------------------------------------------------
    def table(self, name: str) -> "QueryBuilder":
        """
        Start a new statement against ``name``; ``"users u"`` and
        ``"users AS u"`` attach an alias.
        """

        self.reset()
        name = name.strip()
        match = _TABLE_ALIAS.match(name)
        if match:
            table, alias = match.groups()
            self._state.table = (
                f"{self.dialect.format_table(table)} {self.dialect.quote_identifier(alias)}"
            )
        else:
            table = name
            self._state.table = self.dialect.format_table(table)
        self._table_name = table
        return self

    # Projection ------------------------------------------------------------
    def select(self, *columns: str) -> "QueryBuilder":
        expressions: List[str] = []
        for item in columns:
            for part in item.split(","):
                if part.strip():
                    expressions.append(self._column(part))
        self._state.columns = expressions or ["*"]
        return self

    def distinct(self) -> "QueryBuilder":
        self._state.distinct = True
        return self

    # Joins -----------------------------------------------------------------
    def join(
        self, table: str, first: str, operator: str, second: str, type: str = "INNER"
    ) -> "QueryBuilder":
        join_type = str(type).upper()
        if join_type not in JOIN_TYPES:
            raise InvalidJoinType(type)
        op = self._operator(operator)
        target = self._join_target(table)
        self._state.joins.append(
            f"{join_type} JOIN {target} ON {self._column(first)} {op} {self._column(second)}"
        )
        return self

    def left_join(self, table: str, first: str, operator: str, second: str) -> "QueryBuilder":
        return self.join(table, first, operator, second, type="LEFT")

    def right_join(self, table: str, first: str, operator: str, second: str) -> "QueryBuilder":
        return self.join(table, first, operator, second, type="RIGHT")

    # WHERE -----------------------------------------------------------------
    def where(
        self,
        column: str | Mapping[str, Any],
        operator: Any = None,
        value: Any = _UNSET,
        *,
        compare: str = "AND",
    ) -> "QueryBuilder":
        """
        Add a comparison. ``where("id", 5)`` means ``=``; a mapping adds one
        equality per key. Comparing with ``None`` renders ``IS [NOT] NULL``.
        """

        compare = self._compare(compare)
        if isinstance(column, Mapping):
            for name, item in column.items():
                self.where(name, "=", item, compare=compare)
            return self
        if value is _UNSET:
            operator, value = "=", operator
        op = self._operator(operator)
        if value is None:
            if op == "=":
                return self._append_where(compare, f"{self._column(column)} IS NULL")
            if op in ("!=", "<>"):
                return self._append_where(compare, f"{self._column(column)} IS NOT NULL")
            raise QueryBuilderError(f"Operator '{op}' cannot compare against NULL")
        return self._append_where(compare, f"{self._column(column)} {op} ?", value)

    def or_where(self, column: str | Mapping[str, Any], operator: Any = None, value: Any = _UNSET) -> "QueryBuilder":
        return self.where(column, operator, value, compare="OR")

    def where_not(
        self, column: str, operator: Any = None, value: Any = _UNSET, *, compare: str = "AND"
    ) -> "QueryBuilder":
        compare = self._compare(compare)
        if value is _UNSET:
            operator, value = "=", operator
        op = self._operator(operator)
        if value is None:
            raise QueryBuilderError("where_not() cannot compare against NULL; use not_null()")
        return self._append_where(compare, f"NOT ({self._column(column)} {op} ?)", value)

    def where_in(
        self, column: str, values: Iterable[Any], *, compare: str = "AND", negate: bool = False
    ) -> "QueryBuilder":
        compare = self._compare(compare)
        items = list(values)
        if not items:
            raise QueryBuilderError(f"where_in() on '{column}' requires at least one value")
        keyword = "NOT IN" if negate else "IN"
        placeholders = ", ".join("?" for _ in items)
        return self._append_where(compare, f"{self._column(column)} {keyword} ({placeholders})", *items)

    def where_not_in(self, column: str, values: Iterable[Any], *, compare: str = "AND") -> "QueryBuilder":
        return self.where_in(column, values, compare=compare, negate=True)

    def is_null(self, column: str, *, compare: str = "AND") -> "QueryBuilder":
        return self._append_where(self._compare(compare), f"{self._column(column)} IS NULL")

    def not_null(self, column: str, *, compare: str = "AND") -> "QueryBuilder":
        return self._append_where(self._compare(compare), f"{self._column(column)} IS NOT NULL")

    def between(self, column: str, low: Any, high: Any, *, compare: str = "AND") -> "QueryBuilder":
        compare = self._compare(compare)
        return self._append_where(compare, f"{self._column(column)} BETWEEN ? AND ?", low, high)

    def where_group(
        self, callback: Callable[["QueryBuilder"], Any], *, compare: str = "AND"
    ) -> "QueryBuilder":
        """
        Run ``callback`` against a nested builder and append its conditions
        as one parenthesized fragment. An empty group adds nothing.
        """

        compare = self._compare(compare)
        nested = QueryBuilder(self.dialect, settings=self.settings)
        nested._state.table = self._state.table
        callback(nested)
        if not nested._state.wheres:
            return self
        fragment = "(" + " ".join(nested._state.wheres) + ")"
        return self._append_where(compare, fragment, *nested._state.where_bindings)

    def or_where_group(self, callback: Callable[["QueryBuilder"], Any]) -> "QueryBuilder":
        return self.where_group(callback, compare="OR")

    # Grouping / ordering -----------------------------------------------------
    def group_by(self, *columns: str) -> "QueryBuilder":
        self._state.groups.extend(self._column(column) for column in columns)
        return self

    def having(self, column: str, operator: Any = None, value: Any = _UNSET) -> "QueryBuilder":
        if value is _UNSET:
            operator, value = "=", operator
        op = self._operator(operator)
        self._state.havings.append(f"{self._column(column)} {op} ?")
        self._state.having_bindings.append(value)
        return self

    def order(self, column: str, direction: str = "ASC") -> "QueryBuilder":
        normalized = str(direction).upper()
        if normalized not in DIRECTIONS:
            raise InvalidDirection(direction)
        self._state.orders.append(f"{self._column(column)} {normalized}")
        return self

    def limit(self, value: int) -> "QueryBuilder":
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise QueryBuilderError(f"limit() expects a non-negative integer, got {value!r}")
        self._state.limit = value
        return self

    def page(self, value: int) -> "QueryBuilder":
        if self._state.limit is None:
            raise PaginationRequiresLimit()
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise QueryBuilderError(f"page() expects a positive integer, got {value!r}")
        self._state.page = value
        return self

    # Soft deletes ------------------------------------------------------------
    def soft(self) -> "QueryBuilder":
        """Make ``delete()`` stamp the deleted-at column instead of removing rows."""

        self._state.soft_delete = True
        return self

    def without_trashed(self) -> "QueryBuilder":
        return self.is_null(self.settings.deleted_at_column)

    def only_trashed(self) -> "QueryBuilder":
        return self.not_null(self.settings.deleted_at_column)

    # Inspection --------------------------------------------------------------
    def build(self) -> str:
        return self.compiler.compile_select(self._state).sql

    @property
    def bindings(self) -> List[Any]:
        return list(self._state.bindings)

    @property
    def state(self) -> QueryState:
        return self._state.copy()

    def to_sql(self) -> Tuple[str, List[Any]]:
        sql, params = self.compile_select()
        return sql, params

    def debug(self) -> str:
        return self.compile_select().debug()

    def reset(self) -> "QueryBuilder":
        self._state = QueryState()
        self._table_name = None
        return self

    # Compile-only ------------------------------------------------------------
    def compile_select(self) -> CompiledQuery:
        return self.compiler.compile_select(self._state)

    def compile_count(self, column: str = "*") -> CompiledQuery:
        return self.compiler.compile_count(self._state, column)

    def compile_exists(self) -> CompiledQuery:
        return self.compiler.compile_exists(self._state)

    def compile_insert(self, rows: Mapping[str, Any] | Sequence[Mapping[str, Any]]) -> List[CompiledQuery]:
        return self.compiler.compile_insert(
            self._state, rows, chunk_size=self.settings.insert_chunk_size
        )

    def compile_update(self, values: Mapping[str, Any]) -> CompiledQuery:
        return self.compiler.compile_update(self._state, values)

    def compile_delete(self) -> CompiledQuery:
        if self._state.soft_delete:
            return self.compiler.compile_update(
                self._state, {self.settings.deleted_at_column: _now()}
            )
        return self.compiler.compile_delete(self._state)

    def compile_restore(self) -> CompiledQuery:
        return self.compiler.compile_update(self._state, {self.settings.deleted_at_column: None})

    def compile_increment(
        self,
        column: str,
        amount: int | float | Decimal = 1,
        extra: Mapping[str, Any] | None = None,
        *,
        operator: str = "+",
    ) -> CompiledQuery:
        return self.compiler.compile_increment(
            self._state, column, amount, extra=extra, operator=operator
        )

    # Execution ---------------------------------------------------------------
    def get(self) -> List[Row]:
        self._require_connection("get")
        cursor = self._run(self.compile_select(), "select")
        rows = _rows(cursor)
        self.reset()
        return rows

    def first(self) -> Optional[Row]:
        """
        Return the first matching row or ``None``.

        A single-row read without any WHERE or ORDER BY would return an
        arbitrary row, so it is refused.
        """

        self._require_connection("first")
        if not self._state.has_where and not self._state.ordered:
            raise QueryBuilderError("first() requires a where() or order() clause")
        state = self._state.copy()
        state.limit, state.page = 1, None
        cursor = self._run(self.compiler.compile_select(state), "first")
        rows = _rows(cursor)
        self.reset()
        return rows[0] if rows else None

    def first_or_fail(self) -> Row:
        table = self._table_name or ""
        row = self.first()
        if row is None:
            raise RecordNotFound(table)
        return row

    def count(self, column: str = "*") -> int:
        self._require_connection("count")
        cursor = self._run(self.compile_count(column), "count")
        row = cursor.fetchone()
        self.reset()
        return int(_first_value(row) or 0)

    def pluck(self, column: str) -> List[Any]:
        self._require_connection("pluck")
        state = self._state.copy()
        state.columns = [self._column(column)]
        cursor = self._run(self.compiler.compile_select(state), "pluck")
        values = [_first_value(row) for row in cursor.fetchall()]
        self.reset()
        return values

    def exists(self) -> bool:
        self._require_connection("exists")
        cursor = self._run(self.compile_exists(), "exists")
        found = cursor.fetchone() is not None
        self.reset()
        return found

    def insert(self, rows: Mapping[str, Any] | Sequence[Mapping[str, Any]]) -> Any:
        """
        Insert one row or many. Returns the driver's ``lastrowid`` from the
        final statement.
        """

        self._require_connection("insert")
        statements = self.compile_insert(rows)
        cursor = None
        for statement in statements:
            cursor = self._run(statement, "insert")
        self.reset()
        return getattr(cursor, "lastrowid", None)

    def update(self, values: Mapping[str, Any]) -> int:
        self._require_connection("update")
        cursor = self._run(self.compile_update(values), "update")
        self.reset()
        return cursor.rowcount

    def delete(self) -> int:
        self._require_connection("delete")
        cursor = self._run(self.compile_delete(), "delete")
        self.reset()
        return cursor.rowcount

    def restore(self) -> int:
        self._require_connection("restore")
        cursor = self._run(self.compile_restore(), "restore")
        self.reset()
        return cursor.rowcount

    def increment(
        self, column: str, amount: int | float | Decimal = 1, extra: Mapping[str, Any] | None = None
    ) -> int:
        self._require_connection("increment")
        cursor = self._run(self.compile_increment(column, amount, extra), "increment")
        self.reset()
        return cursor.rowcount

    def decrement(
        self, column: str, amount: int | float | Decimal = 1, extra: Mapping[str, Any] | None = None
    ) -> int:
        self._require_connection("decrement")
        compiled = self.compile_increment(column, amount, extra, operator="-")
        cursor = self._run(compiled, "decrement")
        self.reset()
        return cursor.rowcount

    def chunk(self, size: int, callback: Callable[[List[Row]], Any]) -> None:
        """
        Feed ``callback`` pages of ``size`` rows until the table is exhausted
        or the callback returns ``False``.
        """

        self._require_connection("chunk")
        if isinstance(size, bool) or not isinstance(size, int) or size < 1:
            raise QueryBuilderError(f"chunk() size must be a positive integer, got {size!r}")
        base = self._state.copy()
        number = 1
        while True:
            state = base.copy()
            state.limit, state.page = size, number
            rows = _rows(self._run(self.compiler.compile_select(state), "chunk"))
            if not rows or callback(rows) is False or len(rows) < size:
                break
            number += 1
        self.reset()

    def execute(self, sql: str, params: Sequence[Any] = ()) -> "Cursor":
        self._require_connection("execute")
        return self._run(CompiledQuery(sql, params), "execute")

    # Helpers -----------------------------------------------------------------
    def _run(self, compiled: CompiledQuery, operation: str) -> "Cursor":
        connection = self._require_connection(operation)
        with time_call(
            f"query.{operation}",
            self.logger,
            sql=compiled.sql,
            params=compiled.params,
            threshold_ms=self.settings.slow_query_ms,
        ) as timer:
            cursor = connection.execute(compiled.sql, list(compiled.params))
        self.query_log.add(
            compiled.sql,
            compiled.params,
            connection=self.connection_name,
            elapsed_ms=timer.elapsed_ms,
        )
        return cursor

    def _require_connection(self, operation: str) -> "Connection":
        if self.connection is None:
            raise MissingConnection(operation)
        return self.connection

    def _append_where(self, compare: str, fragment: str, *bindings: Any) -> "QueryBuilder":
        self._state.wheres.append(self._state.next_prefix(compare) + fragment)
        self._state.where_bindings.extend(bindings)
        return self

    def _column(self, expression: str) -> str:
        expression = expression.strip()
        alias = _ALIAS.match(expression)
        if alias:
            base, name = alias.groups()
            return f"{self._column(base)} AS {self.dialect.quote_identifier(name)}"
        if expression == "*":
            return "*"
        if expression.endswith(".*"):
            return f"{self.dialect.quote_identifier(expression[:-2])}.*"
        aggregate = _AGGREGATE.match(expression)
        if aggregate:
            function, distinct, inner = aggregate.groups()
            argument = "*" if inner == "*" else self.dialect.quote_identifier(inner)
            prefix = "DISTINCT " if distinct else ""
            return f"{function.upper()}({prefix}{argument})"
        return self.dialect.quote_identifier(expression)

    def _join_target(self, table: str) -> str:
        match = _TABLE_ALIAS.match(table.strip())
        if match:
            name, alias = match.groups()
            return f"{self.dialect.format_table(name)} {self.dialect.quote_identifier(alias)}"
        return self.dialect.format_table(table.strip())

    @staticmethod
    def _operator(operator: Any) -> str:
        if not isinstance(operator, str):
            raise InvalidOperator(operator)
        normalized = " ".join(operator.upper().split())
        if normalized not in OPERATORS:
            raise InvalidOperator(operator)
        return normalized

    @staticmethod
    def _compare(compare: str) -> str:
        normalized = str(compare).upper()
        if normalized not in COMPARES:
            raise QueryBuilderError(f"Invalid boolean connector {compare!r}; expected AND or OR")
        return normalized


def _now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def _rows(cursor: "Cursor") -> List[Row]:
    fetched = cursor.fetchall()
    names = [item[0] for item in cursor.description or ()]
    rows: List[Row] = []
    for row in fetched:
        if isinstance(row, Mapping):
            rows.append(dict(row))
        else:
            rows.append(dict(zip(names, row)))
    return rows


def _first_value(row: Any) -> Any:
    if row is None:
        return None
    if isinstance(row, Mapping):
        return next(iter(row.values()), None)
    return row[0]


__all__ = ["QueryBuilder", "OPERATORS", "JOIN_TYPES", "DIRECTIONS"]
