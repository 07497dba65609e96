"""
DML compilation translating builder state into SQL text and bindings.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, List, Mapping, Sequence

from ..dialects import Dialect, paginate, resolve_dialect
from ..dialects.base import InsertStyle
from ..errors import (
    EmptyInsert,
    InconsistentInsertColumns,
    MissingTable,
    MissingWhereClause,
    QueryBuilderError,
    UnsupportedClause,
)
from .compiled import CompiledQuery
from .state import QueryState

Row = Mapping[str, Any]


class QueryCompiler:
    """
    Compile :class:`QueryState` into parameterized statements for a dialect.

    Compilation never mutates the state it reads, so compiling twice yields
    the same text and bindings.
    """

    def __init__(self, dialect: Dialect | str) -> None:
        self.dialect = resolve_dialect(dialect)

    # SELECT ----------------------------------------------------------------
    def compile_select(self, state: QueryState) -> CompiledQuery:
        head = "SELECT DISTINCT" if state.distinct else "SELECT"
        sql = f"{head} {', '.join(state.columns)} FROM {self._table(state)}"
        sql += self._joins(state) + self._where(state) + self._grouping(state)
        if state.orders:
            sql += " ORDER BY " + ", ".join(state.orders)
        sql = paginate(
            sql,
            self.dialect,
            limit=state.limit,
            offset=state.offset,
            ordered=state.ordered,
        )
        return CompiledQuery(sql, state.bindings)

    def compile_count(self, state: QueryState, column: str = "*") -> CompiledQuery:
        if column == "*":
            expression = "COUNT(*)"
        else:
            quoted = self.dialect.quote_identifier(column)
            expression = f"COUNT(DISTINCT {quoted})" if state.distinct else f"COUNT({quoted})"
        alias = self.dialect.quote_identifier("aggregate")
        sql = f"SELECT {expression} AS {alias} FROM {self._table(state)}"
        sql += self._joins(state) + self._where(state) + self._grouping(state)
        return CompiledQuery(sql, state.bindings)

    def compile_exists(self, state: QueryState) -> CompiledQuery:
        alias = self.dialect.quote_identifier("found")
        sql = f"SELECT 1 AS {alias} FROM {self._table(state)}"
        sql += self._joins(state) + self._where(state) + self._grouping(state)
        sql = paginate(sql, self.dialect, limit=1, offset=None, ordered=False)
        return CompiledQuery(sql, state.bindings)

    # INSERT ----------------------------------------------------------------
    def compile_insert(
        self,
        state: QueryState,
        rows: Row | Sequence[Row],
        *,
        chunk_size: int = 1000,
    ) -> List[CompiledQuery]:
        """
        Compile one or many rows into as few INSERT statements as the dialect
        allows. Every row is validated before any statement is produced.
        """

        quoted_table = self._table(state)
        records = [rows] if isinstance(rows, Mapping) else list(rows)
        if not records:
            raise EmptyInsert()
        if not isinstance(records[0], Mapping):
            raise InconsistentInsertColumns(0, (), ())
        if not records[0]:
            raise EmptyInsert()

        columns = list(records[0].keys())
        expected = set(columns)
        for index, record in enumerate(records):
            if not isinstance(record, Mapping) or set(record.keys()) != expected:
                received = record.keys() if isinstance(record, Mapping) else ()
                raise InconsistentInsertColumns(index, expected, received)

        column_sql = ", ".join(self.dialect.quote_identifier(column) for column in columns)
        row_sql = "(" + ", ".join("?" for _ in columns) + ")"
        target = f"{quoted_table} ({column_sql})"

        per_statement = max(1, min(chunk_size, self.dialect.max_parameters // len(columns)))
        if self.dialect.max_insert_rows:
            per_statement = min(per_statement, self.dialect.max_insert_rows)
        if self.dialect.insert_style is InsertStyle.SINGLE:
            per_statement = 1

        statements: List[CompiledQuery] = []
        for start in range(0, len(records), per_statement):
            chunk = records[start : start + per_statement]
            params = [record[column] for record in chunk for column in columns]
            if len(chunk) > 1 and self.dialect.insert_style is InsertStyle.INSERT_ALL:
                intos = " ".join(f"INTO {target} VALUES {row_sql}" for _ in chunk)
                sql = f"INSERT ALL {intos} SELECT 1 FROM DUAL"
            else:
                sql = f"INSERT INTO {target} VALUES " + ", ".join(row_sql for _ in chunk)
            statements.append(CompiledQuery(sql, params))
        return statements

    # UPDATE / DELETE ---------------------------------------------------------
    def compile_update(self, state: QueryState, values: Row) -> CompiledQuery:
        self._guard(state, "update")
        if not values:
            raise QueryBuilderError("update() requires at least one column to set")
        assignments = [f"{self.dialect.quote_identifier(column)} = ?" for column in values]
        sql = f"UPDATE {self._table(state)} SET {', '.join(assignments)}" + self._where(state)
        return CompiledQuery(sql, [*values.values(), *state.where_bindings])

    def compile_increment(
        self,
        state: QueryState,
        column: str,
        amount: int | float | Decimal = 1,
        *,
        extra: Row | None = None,
        operator: str = "+",
    ) -> CompiledQuery:
        operation = "increment" if operator == "+" else "decrement"
        self._guard(state, operation)
        if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
            raise QueryBuilderError(f"{operation}() amount must be numeric, got {amount!r}")
        quoted = self.dialect.quote_identifier(column)
        assignments = [f"{quoted} = {quoted} {operator} ?"]
        params: List[Any] = [amount]
        for name, value in (extra or {}).items():
            assignments.append(f"{self.dialect.quote_identifier(name)} = ?")
            params.append(value)
        sql = f"UPDATE {self._table(state)} SET {', '.join(assignments)}" + self._where(state)
        return CompiledQuery(sql, [*params, *state.where_bindings])

    def compile_delete(self, state: QueryState) -> CompiledQuery:
        self._guard(state, "delete")
        sql = f"DELETE FROM {self._table(state)}" + self._where(state)
        return CompiledQuery(sql, state.where_bindings)

    # Helpers ---------------------------------------------------------------
    def _guard(self, state: QueryState, operation: str) -> None:
        self._table(state)
        if not state.has_where:
            raise MissingWhereClause(operation)
        if state.joins:
            raise UnsupportedClause(f"{operation}() cannot be combined with joins")

    def _table(self, state: QueryState) -> str:
        if not state.table:
            raise MissingTable()
        return state.table

    def _joins(self, state: QueryState) -> str:
        return "".join(f" {join}" for join in state.joins)

    def _where(self, state: QueryState) -> str:
        if not state.wheres:
            return ""
        return " WHERE " + " ".join(state.wheres)

    def _grouping(self, state: QueryState) -> str:
        sql = ""
        if state.groups:
            sql += " GROUP BY " + ", ".join(state.groups)
        if state.havings:
            sql += " HAVING " + " AND ".join(state.havings)
        return sql

