"""
Resolution of abstract column types into dialect SQL type names.

ENUM and SET are emulated where the dialect lacks them: the declared type
falls back to a text type and membership is enforced by a CHECK. Some
dialects carry that CHECK inline in the type; the others get a named
constraint appended after the column list.
"""

from __future__ import annotations

import re
from typing import Optional

from ..dialects.base import Dialect, EnumStyle, SetStyle
from ..dialects.types import ColumnType
from ..errors import MissingColumnType
from .column import ColumnSpec


def constraint_name(prefix: str, table: str, column: str) -> str:
    return f"{prefix}_{table.replace('.', '_')}_{column}"


def type_for(column: ColumnSpec, dialect: Dialect) -> str:
    """
    Return the SQL type for ``column``, including any inline CHECK.
    """

    if column.type is None:
        raise MissingColumnType(column.table, column.name)

    if column.type is ColumnType.ENUM:
        return _enum_type(column, dialect)
    if column.type is ColumnType.SET:
        return _set_type(column, dialect)
    if column.is_auto:
        serial = dialect.serial_type(column.type)
        if serial:
            return serial
    return dialect.type_name(column.type).render(column.size)


def emulated_check(column: ColumnSpec, dialect: Dialect) -> Optional[str]:
    """
    Return the named ``CONSTRAINT ... CHECK`` fragment for dialects that keep
    ENUM/SET membership outside the column definition, else ``None``.
    """

    if column.type is ColumnType.ENUM and dialect.enum_style is EnumStyle.NAMED_CONSTRAINT:
        return _named_check(column, dialect, _in_expression(column, dialect))
    if column.type is ColumnType.SET and dialect.set_style in (
        SetStyle.LIKE,
        SetStyle.REGEXP,
        SetStyle.CONTAINING,
    ):
        return _named_check(column, dialect, set_expression(column, dialect))
    return None


def value_list(column: ColumnSpec, dialect: Dialect) -> str:
    return ",".join(dialect.quote_string(value) for value in column.values)


def set_expression(column: ColumnSpec, dialect: Dialect) -> str:
    name = dialect.quote_identifier(column.name)
    style = dialect.set_style
    if style is SetStyle.ARRAY:
        return f"{name} <@ ARRAY[{value_list(column, dialect)}]"
    if style is SetStyle.OR_EQUALS:
        return " OR ".join(f"{name} = {dialect.quote_string(v)}" for v in column.values)
    if style is SetStyle.LIKE:
        return " OR ".join(
            f"{name} LIKE {dialect.quote_string(f'%{v}%')}" for v in column.values
        )
    if style is SetStyle.REGEXP:
        alternatives = "|".join(re.escape(value) for value in column.values)
        return f"REGEXP_LIKE({name}, {dialect.quote_string(f'({alternatives})')})"
    if style is SetStyle.CONTAINING:
        return " OR ".join(f"{name} CONTAINING {dialect.quote_string(v)}" for v in column.values)
    raise ValueError(f"SET style '{style}' has no CHECK expression")


# Helpers -------------------------------------------------------------------
def _enum_type(column: ColumnSpec, dialect: Dialect) -> str:
    style = dialect.enum_style
    if style is EnumStyle.NATIVE:
        return f"ENUM({value_list(column, dialect)})"
    base = dialect.type_name(ColumnType.ENUM).render(column.size)
    if style is EnumStyle.INLINE_CHECK:
        return f"{base} {_named_check(column, dialect, _in_expression(column, dialect))}"
    return base


def _set_type(column: ColumnSpec, dialect: Dialect) -> str:
    style = dialect.set_style
    if style is SetStyle.NATIVE:
        return f"SET({value_list(column, dialect)})"
    base = dialect.type_name(ColumnType.SET).render(column.size)
    if style in (SetStyle.ARRAY, SetStyle.OR_EQUALS):
        return f"{base} {_named_check(column, dialect, set_expression(column, dialect))}"
    return base


def _in_expression(column: ColumnSpec, dialect: Dialect) -> str:
    return f"{dialect.quote_identifier(column.name)} IN ({value_list(column, dialect)})"


def _named_check(column: ColumnSpec, dialect: Dialect, expression: str) -> str:
    name = dialect.quote_identifier(constraint_name("chk", column.table, column.name))
    return f"CONSTRAINT {name} CHECK ({expression})"
