"""
Dialect descriptors describing how each database spells SQL.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Mapping, Tuple

from ..errors import InvalidIdentifier
from .types import ColumnType, TypeName

IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?")


class PaginationStyle(str, Enum):
    LIMIT_OFFSET = "limit_offset"
    TOP = "top"
    OFFSET_FETCH = "offset_fetch"
    ROWS_RANGE = "rows_range"


class EnumStyle(str, Enum):
    NATIVE = "native"
    INLINE_CHECK = "inline_check"
    NAMED_CONSTRAINT = "named_constraint"


class SetStyle(str, Enum):
    NATIVE = "native"
    ARRAY = "array"
    OR_EQUALS = "or_equals"
    LIKE = "like"
    REGEXP = "regexp"
    CONTAINING = "containing"


class CreateGuard(str, Enum):
    IF_NOT_EXISTS = "if_not_exists"
    SYSOBJECTS = "sysobjects"
    NONE = "none"


class InsertStyle(str, Enum):
    VALUES = "values"
    INSERT_ALL = "insert_all"
    SINGLE = "single"


@dataclass(frozen=True)
class DialectCapabilities:
    """
    Feature flags describing what a backend spells natively.
    """

    has_unsigned: bool = False
    supports_table_options: bool = False
    supports_column_comments: bool = False
    supports_drop_if_exists: bool = True
    supports_index_if_not_exists: bool = False
    supports_alter_constraints: bool = True
    supports_explicit_null: bool = True
    backslash_escapes: bool = False


@dataclass(frozen=True)
class CatalogQueries:
    """
    Parameterized introspection queries against the system catalog.

    Table queries bind the table name; column queries bind table then column.
    """

    table_exists: str
    column_exists: str
    columns: str


@dataclass(frozen=True, eq=False)
class Dialect:
    """
    Immutable description of one target database.

    Instances are plain data; the schema and query grammars read these
    attributes instead of branching on the dialect name.
    """

    name: str
    quote_pair: Tuple[str, str]
    boolean_literals: Tuple[str, str]
    auto_increment: str
    pagination: PaginationStyle
    capabilities: DialectCapabilities
    types: Mapping[ColumnType, TypeName]
    enum_style: EnumStyle = EnumStyle.NAMED_CONSTRAINT
    set_style: SetStyle = SetStyle.LIKE
    serial_types: Mapping[ColumnType, str] = field(default_factory=dict)
    aliases: Tuple[str, ...] = ()
    create_guard: CreateGuard = CreateGuard.IF_NOT_EXISTS
    add_column_keyword: str = "ADD COLUMN"
    insert_style: InsertStyle = InsertStyle.VALUES
    max_parameters: int = 65535
    max_insert_rows: int | None = None
    param_style: str = "qmark"
    rename_template: str | None = "ALTER TABLE {old} RENAME TO {new};"
    truncate_template: str = "TRUNCATE TABLE {table};"
    catalog: CatalogQueries | None = None

    # Identifiers -----------------------------------------------------------
    def quote_identifier(self, identifier: str) -> str:
        if not isinstance(identifier, str) or not IDENTIFIER_PATTERN.fullmatch(identifier):
            raise InvalidIdentifier(identifier)
        return ".".join(self._wrap(segment) for segment in identifier.split("."))

    def format_table(self, table_name: str) -> str:
        return self.quote_identifier(table_name)

    def unquote_identifier(self, quoted: str) -> str:
        """
        Reverse :meth:`quote_identifier`, returning the bare dotted name.
        """

        opening, closing = self.quote_pair
        segments: List[str] = []
        index = 0
        while index < len(quoted):
            if quoted[index] != opening:
                raise InvalidIdentifier(quoted)
            index += 1
            chars: List[str] = []
            while True:
                if index >= len(quoted):
                    raise InvalidIdentifier(quoted)
                char = quoted[index]
                if char == closing:
                    if quoted[index + 1 : index + 2] == closing:
                        chars.append(closing)
                        index += 2
                        continue
                    index += 1
                    break
                chars.append(char)
                index += 1
            segments.append("".join(chars))
            if index < len(quoted):
                if quoted[index] != ".":
                    raise InvalidIdentifier(quoted)
                index += 1
        return ".".join(segments)

    def _wrap(self, segment: str) -> str:
        opening, closing = self.quote_pair
        escaped = segment.replace(closing, closing * 2)
        return f"{opening}{escaped}{closing}"

    # Literals --------------------------------------------------------------
    def quote_string(self, value: str) -> str:
        escaped = value
        if self.capabilities.backslash_escapes:
            escaped = escaped.replace("\\", "\\\\")
        escaped = escaped.replace("'", "''")
        return f"'{escaped}'"

    def boolean_literal(self, value: bool) -> str:
        return self.boolean_literals[0] if value else self.boolean_literals[1]

    # Types -----------------------------------------------------------------
    def type_name(self, column_type: ColumnType) -> TypeName:
        return self.types[column_type]

    def serial_type(self, column_type: ColumnType) -> str | None:
        return self.serial_types.get(column_type)

    @property
    def names(self) -> Tuple[str, ...]:
        return (self.name, *self.aliases)
