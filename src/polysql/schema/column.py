"""
Column definitions collected by a :class:`~polysql.schema.blueprint.Blueprint`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Tuple, Union

from ..dialects.types import ColumnType
from ..errors import InvalidColumnDefinition, InvalidIdentifier

if TYPE_CHECKING:
    from .blueprint import Blueprint

COLUMN_NAME_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class _NoDefault:
    """Sentinel meaning "no DEFAULT clause", distinct from a NULL default."""

    _instance: "_NoDefault | None" = None

    def __new__(cls) -> "_NoDefault":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NoDefault"

    def __bool__(self) -> bool:
        return False


NoDefault = _NoDefault()


@dataclass(frozen=True)
class DefaultValue:
    value: Any


@dataclass(frozen=True)
class Raw:
    """SQL expression emitted verbatim, e.g. ``Raw("CURRENT_TIMESTAMP")``."""

    expression: str

    def __str__(self) -> str:
        return self.expression


Default = Union[_NoDefault, DefaultValue]


class ColumnSpec:
    """
    Fluent description of one column.

    Flags are stored as declared; the properties (:attr:`nullable`,
    :attr:`effective_default`, :attr:`is_primary`) apply the column invariants against
    the final state, so call order never matters.
    """

    def __init__(self, blueprint: "Blueprint", name: str) -> None:
        if not isinstance(name, str) or not COLUMN_NAME_PATTERN.fullmatch(name):
            raise InvalidIdentifier(name)
        self.blueprint = blueprint
        self.name = name
        self.type: ColumnType | None = None
        self.size: int | str | None = None
        self.values: Tuple[str, ...] = ()
        self.check_expression: str | None = None
        self.comment_text: str | None = None
        self._nullable = False
        self._default: Default = NoDefault
        self._unsigned = False
        self._auto = False
        self._primary = False
        self._unique = False
        self._index = False

    def __repr__(self) -> str:
        kind = self.type.value if self.type else None
        return f"ColumnSpec({self.blueprint.table}.{self.name}, type={kind})"

    # Effective state -------------------------------------------------------
    @property
    def table(self) -> str:
        return self.blueprint.table

    @property
    def is_auto(self) -> bool:
        return self._auto

    @property
    def is_primary(self) -> bool:
        return self._primary or self._auto

    @property
    def is_unique(self) -> bool:
        return self._unique

    @property
    def is_index(self) -> bool:
        return self._index

    @property
    def is_unsigned(self) -> bool:
        return self._unsigned

    @property
    def is_special(self) -> bool:
        return self.type is not None and self.type.is_spatial

    @property
    def nullable(self) -> bool:
        if self.is_primary or self._unique or self._auto:
            return False
        if self.name in (self.blueprint.composite_primary or ()):
            return False
        return self._nullable

    @property
    def effective_default(self) -> Default:
        if self._auto or self._unique or self.is_special:
            return NoDefault
        return self._default

    @property
    def declared_default(self) -> Default:
        return self._default

    # Types -----------------------------------------------------------------
    def type_of(self, column_type: ColumnType, length: int | str | None = None) -> "ColumnSpec":
        self._mutate()
        self.type = ColumnType(column_type)
        if length is not None:
            self._set_size(length)
        return self

    def int(self, length: int | None = None) -> "ColumnSpec":
        return self.type_of(ColumnType.INT, length)

    def tinyint(self, length: int | None = None) -> "ColumnSpec":
        return self.type_of(ColumnType.TINYINT, length)

    def smallint(self, length: int | None = None) -> "ColumnSpec":
        return self.type_of(ColumnType.SMALLINT, length)

    def mediumint(self, length: int | None = None) -> "ColumnSpec":
        return self.type_of(ColumnType.MEDIUMINT, length)

    def bigint(self, length: int | None = None) -> "ColumnSpec":
        return self.type_of(ColumnType.BIGINT, length)

    def char(self, length: int | None = None) -> "ColumnSpec":
        return self.type_of(ColumnType.CHAR, length)

    def varchar(self, length: int | None = None) -> "ColumnSpec":
        return self.type_of(ColumnType.VARCHAR, length)

    string = varchar

    def text(self) -> "ColumnSpec":
        return self.type_of(ColumnType.TEXT)

    def mediumtext(self) -> "ColumnSpec":
        return self.type_of(ColumnType.MEDIUMTEXT)

    def longtext(self) -> "ColumnSpec":
        return self.type_of(ColumnType.LONGTEXT)

    def decimal(self, precision: int | None = None, scale: int | None = None) -> "ColumnSpec":
        self.type_of(ColumnType.DECIMAL)
        if precision is not None:
            self._set_size(f"{precision},{scale}" if scale is not None else precision)
        elif scale is not None:
            raise InvalidColumnDefinition(f"Column '{self.name}': scale requires a precision")
        return self

    def float(self) -> "ColumnSpec":
        return self.type_of(ColumnType.FLOAT)

    def double(self) -> "ColumnSpec":
        return self.type_of(ColumnType.DOUBLE)

    def date(self) -> "ColumnSpec":
        return self.type_of(ColumnType.DATE)

    def datetime(self) -> "ColumnSpec":
        return self.type_of(ColumnType.DATETIME)

    def timestamp(self) -> "ColumnSpec":
        return self.type_of(ColumnType.TIMESTAMP)

    def time(self) -> "ColumnSpec":
        return self.type_of(ColumnType.TIME)

    def year(self) -> "ColumnSpec":
        return self.type_of(ColumnType.YEAR)

    def boolean(self) -> "ColumnSpec":
        return self.type_of(ColumnType.BOOLEAN)

    def json(self) -> "ColumnSpec":
        return self.type_of(ColumnType.JSON)

    def blob(self) -> "ColumnSpec":
        return self.type_of(ColumnType.BLOB)

    def longblob(self) -> "ColumnSpec":
        return self.type_of(ColumnType.LONGBLOB)

    def geometry(self) -> "ColumnSpec":
        return self.type_of(ColumnType.GEOMETRY)

    def point(self) -> "ColumnSpec":
        return self.type_of(ColumnType.POINT)

    def linestring(self) -> "ColumnSpec":
        return self.type_of(ColumnType.LINESTRING)

    def polygon(self) -> "ColumnSpec":
        return self.type_of(ColumnType.POLYGON)

    def multipoint(self) -> "ColumnSpec":
        return self.type_of(ColumnType.MULTIPOINT)

    def multilinestring(self) -> "ColumnSpec":
        return self.type_of(ColumnType.MULTILINESTRING)

    def multipolygon(self) -> "ColumnSpec":
        return self.type_of(ColumnType.MULTIPOLYGON)

    def enum(self, *values: str | Iterable[str]) -> "ColumnSpec":
        self.type_of(ColumnType.ENUM)
        self.values = self._collect_values(values)
        return self

    def set(self, *values: str | Iterable[str]) -> "ColumnSpec":
        self.type_of(ColumnType.SET)
        self.values = self._collect_values(values)
        return self

    # Modifiers -------------------------------------------------------------
    def length(self, size: int | str) -> "ColumnSpec":
        self._mutate()
        self._set_size(size)
        return self

    def unsigned(self) -> "ColumnSpec":
        self._mutate()
        self._unsigned = True
        return self

    def null(self) -> "ColumnSpec":
        self._mutate()
        self._nullable = True
        return self

    def not_null(self) -> "ColumnSpec":
        self._mutate()
        self._nullable = False
        return self

    def default(self, value: Any) -> "ColumnSpec":
        self._mutate()
        if value is None:
            # An explicit NULL default only makes the column nullable.
            self._nullable = True
            self._default = NoDefault
        else:
            self._default = DefaultValue(value)
        return self

    def use_current(self) -> "ColumnSpec":
        return self.default(Raw("CURRENT_TIMESTAMP"))

    def auto(self) -> "ColumnSpec":
        self._mutate()
        self.blueprint._claim_primary(self.name)
        self._auto = True
        self._primary = True
        return self

    def primary(self) -> "ColumnSpec":
        self._mutate()
        self.blueprint._claim_primary(self.name)
        self._primary = True
        return self

    def unique(self) -> "ColumnSpec":
        self._mutate()
        self._unique = True
        return self

    def index(self) -> "ColumnSpec":
        self._mutate()
        self._index = True
        return self

    def check(self, expression: str) -> "ColumnSpec":
        self._mutate()
        if not expression or not expression.strip():
            raise InvalidColumnDefinition(f"Column '{self.name}': empty CHECK expression")
        self.check_expression = expression.strip()
        return self

    def comment(self, text: str) -> "ColumnSpec":
        self._mutate()
        self.comment_text = text
        return self

    # Internal helpers ------------------------------------------------------
    def _mutate(self) -> None:
        self.blueprint._ensure_unlocked()

    def _set_size(self, size: int | str) -> None:
        if isinstance(size, bool):
            raise InvalidColumnDefinition(f"Column '{self.name}': invalid length {size!r}")
        if isinstance(size, int):
            if size <= 0:
                raise InvalidColumnDefinition(f"Column '{self.name}': length must be positive")
            self.size = size
            return
        if isinstance(size, str) and re.fullmatch(r"\d+(\s*,\s*\d+)?|MAX", size.strip()):
            self.size = size.replace(" ", "")
            return
        raise InvalidColumnDefinition(f"Column '{self.name}': invalid length {size!r}")

    def _collect_values(self, values: Tuple[str | Iterable[str], ...]) -> Tuple[str, ...]:
        flat: list[str] = []
        for item in values:
            if isinstance(item, str) or not isinstance(item, Iterable):
                flat.append(item)
            else:
                flat.extend(item)
        if not flat:
            raise InvalidColumnDefinition(f"Column '{self.name}': ENUM/SET requires values")
        for value in flat:
            if not isinstance(value, str):
                raise InvalidColumnDefinition(
                    f"Column '{self.name}': ENUM/SET values must be strings, got {value!r}"
                )
        return tuple(dict.fromkeys(flat))
