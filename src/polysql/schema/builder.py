"""
Schema builder facade producing DDL for one dialect.
"""

from __future__ import annotations

from typing import Callable, List

from ..config import CompilerSettings
from ..dialects import Dialect
from ..query.compiled import CompiledQuery
from ..utils import get_logger
from .blueprint import Blueprint
from .grammar import SchemaGrammar

BlueprintCallback = Callable[[Blueprint], object]


class SchemaBuilder:
    """
    Builds blueprints through callbacks and compiles them for its dialect.

    Nothing is executed here; every method returns statements for the caller
    to run.
    """

    def __init__(self, dialect: Dialect | str, *, settings: CompilerSettings | None = None) -> None:
        self.grammar = SchemaGrammar(dialect)
        self.dialect = self.grammar.dialect
        self.settings = settings or CompilerSettings()
        self.logger = get_logger("schema.builder")

    def create(self, table: str, callback: BlueprintCallback) -> List[str]:
        blueprint = Blueprint(table, settings=self.settings)
        callback(blueprint)
        return self.create_table_sql(blueprint)

    def table(self, table: str, callback: BlueprintCallback) -> List[str]:
        blueprint = Blueprint(table, settings=self.settings)
        callback(blueprint)
        return self.alter_table_sql(blueprint)

    def create_table_sql(self, blueprint: Blueprint) -> List[str]:
        statements = self.grammar.compile_create(blueprint)
        self.logger.info(
            "Compiled CREATE TABLE for %s (%s statements, %s)",
            blueprint.table,
            len(statements),
            self.dialect.name,
        )
        return statements

    def alter_table_sql(self, blueprint: Blueprint) -> List[str]:
        return self.grammar.compile_add_columns(blueprint)

    def drop(self, table: str) -> List[str]:
        self._warn_destructive("DROP TABLE", table)
        return self.grammar.compile_drop(table)

    def drop_if_exists(self, table: str) -> List[str]:
        self._warn_destructive("DROP TABLE", table)
        return self.grammar.compile_drop_if_exists(table)

    def truncate(self, table: str) -> List[str]:
        self._warn_destructive("TRUNCATE", table)
        return self.grammar.compile_truncate(table)

    def rename(self, old: str, new: str) -> List[str]:
        statements = self.grammar.compile_rename(old, new)
        self.logger.info("Compiled RENAME of %s to %s (%s)", old, new, self.dialect.name)
        return statements

    def has_table(self, table: str) -> CompiledQuery:
        return self.grammar.compile_table_exists(table)

    def has_column(self, table: str, column: str) -> CompiledQuery:
        return self.grammar.compile_column_exists(table, column)

    def columns(self, table: str) -> CompiledQuery:
        return self.grammar.compile_columns(table)

    def _warn_destructive(self, kind: str, table: str) -> None:
        self.logger.warning(
            "%s generated for %s; confirm destructive migration before applying.",
            kind,
            table,
        )
