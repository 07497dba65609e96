"""
DDL grammar compiling blueprints into dialect-specific statements.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from ..dialects import Dialect, resolve_dialect
from ..dialects.base import CreateGuard, SetStyle
from ..dialects.types import ColumnType
from ..errors import EmptyTable, InvalidDefault, MissingColumnType, UnsupportedOperation
from ..query.compiled import CompiledQuery
from ..utils import get_logger
from .blueprint import Blueprint, ForeignKeySpec, IndexSpec
from .column import ColumnSpec, NoDefault, Raw
from .types import constraint_name, emulated_check, type_for


class SchemaGrammar:
    """
    Produces ordered, ``;``-terminated DDL statements for one dialect.

    Column text is always assembled as
    ``name type [UNSIGNED] [DEFAULT] [NULL|NOT NULL] [auto] [PRIMARY KEY] [CHECK]``.
    """

    def __init__(self, dialect: Dialect | str) -> None:
        self.dialect = resolve_dialect(dialect)
        self.logger = get_logger("schema.grammar")

    # Public API ------------------------------------------------------------
    def compile_create(self, blueprint: Blueprint) -> List[str]:
        self._prepare(blueprint)
        table = self.dialect.format_table(blueprint.table)

        definitions = [self.column_definition(column) for column in blueprint.columns]
        if blueprint.composite_primary:
            definitions.append(f"PRIMARY KEY ({self._column_list(blueprint.composite_primary)})")
        definitions.extend(self._emulated_checks(blueprint))
        definitions.extend(self.foreign_key_definition(fk) for fk in blueprint.foreign_keys)

        create = f"{self._create_head(blueprint.table, table)} ({', '.join(definitions)})"
        statements = [f"{create}{self._table_options(blueprint)};"]
        statements.extend(self._index_statements(blueprint))
        blueprint.lock()
        self._log(blueprint.table, statements)
        return statements

    def compile_add_columns(self, blueprint: Blueprint) -> List[str]:
        self._prepare(blueprint, columns_required=False)
        table = self.dialect.format_table(blueprint.table)
        keyword = self.dialect.add_column_keyword

        statements = [
            f"ALTER TABLE {table} {keyword} {self.column_definition(column)};"
            for column in blueprint.columns
        ]
        constraints: List[str] = []
        if blueprint.composite_primary:
            name = self.dialect.quote_identifier(constraint_name("pk", blueprint.table, "key"))
            columns = self._column_list(blueprint.composite_primary)
            constraints.append(f"CONSTRAINT {name} PRIMARY KEY ({columns})")
        constraints.extend(self._emulated_checks(blueprint))
        constraints.extend(self.foreign_key_definition(fk) for fk in blueprint.foreign_keys)
        if constraints and not self.dialect.capabilities.supports_alter_constraints:
            raise UnsupportedOperation(
                f"{self.dialect.name} cannot add constraints to existing table '{blueprint.table}'"
            )
        statements.extend(f"ALTER TABLE {table} ADD {constraint};" for constraint in constraints)
        statements.extend(self._index_statements(blueprint))
        blueprint.lock()
        self._log(blueprint.table, statements)
        return statements

    def compile_drop(self, table: str) -> List[str]:
        return [f"DROP TABLE {self.dialect.format_table(table)};"]

    def compile_drop_if_exists(self, table: str) -> List[str]:
        quoted = self.dialect.format_table(table)
        if self.dialect.capabilities.supports_drop_if_exists:
            return [f"DROP TABLE IF EXISTS {quoted};"]
        if self.dialect.create_guard is CreateGuard.SYSOBJECTS:
            literal = self.dialect.quote_string(table)
            return [f"IF OBJECT_ID(N{literal}, N'U') IS NOT NULL DROP TABLE {quoted};"]
        return self.compile_drop(table)

    def compile_rename(self, old: str, new: str) -> List[str]:
        template = self.dialect.rename_template
        old_quoted = self.dialect.format_table(old)
        new_quoted = self.dialect.format_table(new)
        if template is None:
            raise UnsupportedOperation(f"{self.dialect.name} does not support renaming tables")
        return [
            template.format(
                old=old_quoted,
                new=new_quoted,
                old_literal=self.dialect.quote_string(old),
                new_literal=self.dialect.quote_string(_bare(new)),
            )
        ]

    def compile_truncate(self, table: str) -> List[str]:
        quoted = self.dialect.format_table(table)
        return [self.dialect.truncate_template.format(table=quoted)]

    def compile_table_exists(self, table: str) -> CompiledQuery:
        self.dialect.format_table(table)
        return CompiledQuery(self._catalog().table_exists, (_bare(table),))

    def compile_column_exists(self, table: str, column: str) -> CompiledQuery:
        self.dialect.format_table(table)
        self.dialect.quote_identifier(column)
        return CompiledQuery(self._catalog().column_exists, (_bare(table), column))

    def compile_columns(self, table: str) -> CompiledQuery:
        self.dialect.format_table(table)
        return CompiledQuery(self._catalog().columns, (_bare(table),))

    # Column text -----------------------------------------------------------
    def column_definition(self, column: ColumnSpec) -> str:
        dialect = self.dialect
        parts = [dialect.quote_identifier(column.name), type_for(column, dialect)]
        checks: List[str] = []

        if column.is_unsigned:
            if dialect.capabilities.has_unsigned:
                parts.append("UNSIGNED")
            else:
                checks.append(f"{dialect.quote_identifier(column.name)} >= 0")

        default = self.default_literal(column)
        if default is not None:
            parts.append(f"DEFAULT {default}")

        if not column.nullable:
            parts.append("NOT NULL")
        elif dialect.capabilities.supports_explicit_null:
            parts.append("NULL")

        if column.is_auto and dialect.auto_increment:
            parts.append(dialect.auto_increment)
        if column.is_primary:
            parts.append("PRIMARY KEY")

        if column.comment_text:
            if dialect.capabilities.supports_column_comments:
                parts.append(f"COMMENT {dialect.quote_string(column.comment_text)}")
            else:
                self.logger.debug(
                    "Column comment on %s.%s ignored for %s", column.table, column.name, dialect.name
                )

        if column.check_expression:
            checks.append(column.check_expression)
        parts.extend(f"CHECK ({expression})" for expression in checks)
        return " ".join(parts)

    def default_literal(self, column: ColumnSpec) -> Optional[str]:
        default = column.effective_default
        if default is NoDefault:
            return None
        value = default.value
        if isinstance(value, Raw):
            return value.expression

        if column.type is ColumnType.BOOLEAN:
            if not isinstance(value, bool):
                raise InvalidDefault(
                    f"Boolean column '{column.name}' needs a bool default, got {value!r}"
                )
            return self.dialect.boolean_literal(value)

        if column.type is ColumnType.SET and self.dialect.set_style is SetStyle.ARRAY:
            if not isinstance(value, str):
                raise InvalidDefault(f"SET column '{column.name}' needs a str default")
            items = ",".join(self.dialect.quote_string(item) for item in value.split(","))
            return f"ARRAY[{items}]"

        if column.type is ColumnType.ENUM and value not in column.values:
            raise InvalidDefault(
                f"Default {value!r} is not one of {list(column.values)} on '{column.name}'"
            )

        if isinstance(value, bool):
            return self.dialect.boolean_literal(value)
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        if isinstance(value, str):
            return self.dialect.quote_string(value)
        raise InvalidDefault(f"Unsupported default {value!r} on column '{column.name}'")

    def foreign_key_definition(self, fk: ForeignKeySpec) -> str:
        if fk.referenced_table is None:
            raise UnsupportedOperation(
                f"Foreign key on {fk.blueprint.table}({', '.join(fk.columns)}) needs on(table)"
            )
        name = fk.constraint_name or constraint_name("fk", fk.blueprint.table, "_".join(fk.columns))
        sql = (
            f"CONSTRAINT {self.dialect.quote_identifier(name)} "
            f"FOREIGN KEY ({self._column_list(fk.columns)}) "
            f"REFERENCES {self.dialect.format_table(fk.referenced_table)} "
            f"({self._column_list(fk.referenced_columns)})"
        )
        if fk.delete_action:
            sql += f" ON DELETE {fk.delete_action}"
        if fk.update_action:
            sql += f" ON UPDATE {fk.update_action}"
        return sql

    # Helpers ---------------------------------------------------------------
    def _prepare(self, blueprint: Blueprint, *, columns_required: bool = True) -> None:
        blueprint._ensure_unlocked()
        has_keys = bool(blueprint.foreign_keys or blueprint.indexes or blueprint.composite_primary)
        if not blueprint.columns and (columns_required or not has_keys):
            raise EmptyTable(blueprint.table)
        for column in blueprint.columns:
            if column.type is None:
                raise MissingColumnType(blueprint.table, column.name)

    def _create_head(self, table_name: str, quoted: str) -> str:
        guard = self.dialect.create_guard
        if guard is CreateGuard.IF_NOT_EXISTS:
            return f"CREATE TABLE IF NOT EXISTS {quoted}"
        if guard is CreateGuard.SYSOBJECTS:
            literal = self.dialect.quote_string(_bare(table_name))
            return (
                f"IF NOT EXISTS (SELECT * FROM sysobjects WHERE name = {literal} AND xtype = 'U') "
                f"CREATE TABLE {quoted}"
            )
        return f"CREATE TABLE {quoted}"

    def _table_options(self, blueprint: Blueprint) -> str:
        options = blueprint.options
        if options.is_empty():
            return ""
        if not self.dialect.capabilities.supports_table_options:
            self.logger.debug("Table options for %s ignored for %s", blueprint.table, self.dialect.name)
            return ""
        parts: List[str] = []
        if options.engine:
            parts.append(f"ENGINE={options.engine}")
        if options.charset:
            parts.append(f"DEFAULT CHARSET={options.charset}")
        if options.collation:
            parts.append(f"COLLATE={options.collation}")
        return " " + " ".join(parts)

    def _emulated_checks(self, blueprint: Blueprint) -> List[str]:
        fragments: List[str] = []
        for column in blueprint.columns:
            fragment = emulated_check(column, self.dialect)
            if fragment:
                fragments.append(fragment)
        return fragments

    def _index_statements(self, blueprint: Blueprint) -> List[str]:
        specs: List[IndexSpec] = []
        for column in blueprint.columns:
            if column.is_primary:
                continue
            if column.is_unique:
                specs.append(IndexSpec((column.name,), unique=True))
            elif column.is_index:
                specs.append(IndexSpec((column.name,)))
        specs.extend(blueprint.indexes)
        return [self._index_statement(blueprint.table, spec) for spec in specs]

    def _index_statement(self, table: str, spec: IndexSpec) -> str:
        prefix = "uq" if spec.unique else "idx"
        name = spec.name or constraint_name(prefix, table, "_".join(spec.columns))
        kind = "UNIQUE INDEX" if spec.unique else "INDEX"
        guard = "IF NOT EXISTS " if self.dialect.capabilities.supports_index_if_not_exists else ""
        return (
            f"CREATE {kind} {guard}{self.dialect.quote_identifier(name)} "
            f"ON {self.dialect.format_table(table)} ({self._column_list(spec.columns)});"
        )

    def _column_list(self, columns) -> str:
        return ", ".join(self.dialect.quote_identifier(column) for column in columns)

    def _catalog(self):
        if self.dialect.catalog is None:
            raise UnsupportedOperation(f"{self.dialect.name} has no catalog queries configured")
        return self.dialect.catalog

    def _log(self, table: str, statements: List[str]) -> None:
        for statement in statements:
            self.logger.debug("DDL for %s: %s", table, statement, extra={"sql": statement})


def _bare(table: str) -> str:
    return table.rsplit(".", 1)[-1]


# Functional entry points -----------------------------------------------------
def compile_create(blueprint: Blueprint, dialect: Dialect | str) -> List[str]:
    return SchemaGrammar(dialect).compile_create(blueprint)


def compile_add_columns(blueprint: Blueprint, dialect: Dialect | str) -> List[str]:
    return SchemaGrammar(dialect).compile_add_columns(blueprint)


def compile_drop(table: str, dialect: Dialect | str, *, if_exists: bool = True) -> List[str]:
    grammar = SchemaGrammar(dialect)
    return grammar.compile_drop_if_exists(table) if if_exists else grammar.compile_drop(table)


def compile_rename(old: str, new: str, dialect: Dialect | str) -> List[str]:
    return SchemaGrammar(dialect).compile_rename(old, new)


def compile_truncate(table: str, dialect: Dialect | str) -> List[str]:
    return SchemaGrammar(dialect).compile_truncate(table)


def compile_table_exists(table: str, dialect: Dialect | str) -> CompiledQuery:
    return SchemaGrammar(dialect).compile_table_exists(table)


def compile_column_exists(table: str, column: str, dialect: Dialect | str) -> CompiledQuery:
    return SchemaGrammar(dialect).compile_column_exists(table, column)


def compile_columns(table: str, dialect: Dialect | str) -> CompiledQuery:
    return SchemaGrammar(dialect).compile_columns(table)
