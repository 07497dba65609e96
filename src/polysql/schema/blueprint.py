"""
Table blueprints: the in-memory model compiled into DDL.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple

from ..dialects.base import IDENTIFIER_PATTERN
from ..errors import (
    BlueprintLocked,
    DuplicatePrimaryKey,
    InvalidColumnDefinition,
    InvalidForeignKeyAction,
    InvalidIdentifier,
)
from .column import COLUMN_NAME_PATTERN, ColumnSpec

if TYPE_CHECKING:
    from ..config import CompilerSettings

FOREIGN_KEY_ACTIONS = frozenset({"CASCADE", "SET NULL", "SET DEFAULT", "RESTRICT", "NO ACTION"})
_OPTION_PATTERN = re.compile(r"[A-Za-z0-9_]+")


@dataclass(frozen=True)
class IndexSpec:
    columns: Tuple[str, ...]
    unique: bool = False
    name: Optional[str] = None


@dataclass
class TableOptions:
    engine: Optional[str] = None
    charset: Optional[str] = None
    collation: Optional[str] = None

    def is_empty(self) -> bool:
        return not (self.engine or self.charset or self.collation)


class ForeignKeySpec:
    """
    Fluent foreign key: ``foreign("user_id").references("id").on("users")``.
    """

    def __init__(self, blueprint: "Blueprint", columns: Tuple[str, ...]) -> None:
        self.blueprint = blueprint
        self.columns = columns
        self.referenced_columns: Tuple[str, ...] = ("id",)
        self.referenced_table: Optional[str] = None
        self.delete_action: Optional[str] = None
        self.update_action: Optional[str] = None
        self.constraint_name: Optional[str] = None

    def references(self, *columns: str) -> "ForeignKeySpec":
        self.blueprint._ensure_unlocked()
        self.referenced_columns = _validate_columns(columns)
        return self

    def on(self, table: str) -> "ForeignKeySpec":
        self.blueprint._ensure_unlocked()
        self.referenced_table = _validate_table(table)
        return self

    def on_delete(self, action: str) -> "ForeignKeySpec":
        self.blueprint._ensure_unlocked()
        self.delete_action = _validate_action(action)
        return self

    def on_update(self, action: str) -> "ForeignKeySpec":
        self.blueprint._ensure_unlocked()
        self.update_action = _validate_action(action)
        return self

    def cascade(self) -> "ForeignKeySpec":
        return self.on_delete("CASCADE").on_update("CASCADE")

    def named(self, name: str) -> "ForeignKeySpec":
        self.blueprint._ensure_unlocked()
        if not COLUMN_NAME_PATTERN.fullmatch(name):
            raise InvalidIdentifier(name)
        self.constraint_name = name
        return self


class Blueprint:
    """
    Ordered columns, keys and options for one table.

    A blueprint is written once and locked when compiled; any change after
    that raises :class:`~polysql.errors.BlueprintLocked`.
    """

    def __init__(self, table: str, *, settings: "CompilerSettings | None" = None) -> None:
        self.table = _validate_table(table)
        self.settings = settings
        self.columns: List[ColumnSpec] = []
        self.indexes: List[IndexSpec] = []
        self.foreign_keys: List[ForeignKeySpec] = []
        self.options = TableOptions()
        self.composite_primary: Optional[Tuple[str, ...]] = None
        self.locked = False
        self._columns_by_name: Dict[str, ColumnSpec] = {}
        self._primary_owner: Optional[str] = None

    def __repr__(self) -> str:
        return f"Blueprint({self.table!r}, columns={len(self.columns)}, locked={self.locked})"

    # Columns ---------------------------------------------------------------
    def column(self, name: str) -> ColumnSpec:
        self._ensure_unlocked()
        if name in self._columns_by_name:
            raise InvalidColumnDefinition(f"Column '{name}' already defined on '{self.table}'")
        spec = ColumnSpec(self, name)
        self.columns.append(spec)
        self._columns_by_name[name] = spec
        return spec

    def get_column(self, name: str) -> ColumnSpec:
        try:
            return self._columns_by_name[name]
        except KeyError:
            raise KeyError(f"Unknown column '{name}' on table '{self.table}'") from None

    def has_column(self, name: str) -> bool:
        return name in self._columns_by_name

    def id(self, name: str = "id") -> ColumnSpec:
        return self.column(name).bigint().unsigned().auto()

    def increments(self, name: str = "id") -> ColumnSpec:
        return self.column(name).int().unsigned().auto()

    def uid(self, name: str = "uid") -> ColumnSpec:
        return self.column(name).char(36).unique()

    def timestamps(self) -> Tuple[ColumnSpec, ColumnSpec]:
        created = self.column("created_at").timestamp().null()
        updated = self.column("updated_at").timestamp().null()
        return created, updated

    def soft_deletes(self, name: str | None = None) -> ColumnSpec:
        column_name = name or (self.settings.deleted_at_column if self.settings else "deleted_at")
        return self.column(column_name).timestamp().null()

    # Keys ------------------------------------------------------------------
    def primary(self, *columns: str) -> "Blueprint":
        self._ensure_unlocked()
        names = _validate_columns(columns)
        self._claim_primary(f"({', '.join(names)})")
        self.composite_primary = names
        return self

    def unique(self, *columns: str, name: str | None = None) -> "Blueprint":
        return self._add_index(columns, unique=True, name=name)

    def index(self, *columns: str, name: str | None = None) -> "Blueprint":
        return self._add_index(columns, unique=False, name=name)

    def foreign(self, *columns: str) -> ForeignKeySpec:
        self._ensure_unlocked()
        spec = ForeignKeySpec(self, _validate_columns(columns))
        self.foreign_keys.append(spec)
        return spec

    @property
    def primary_key(self) -> Optional[str]:
        return self._primary_owner

    # Options ---------------------------------------------------------------
    def engine(self, value: str) -> "Blueprint":
        self.options.engine = self._option(value)
        return self

    def charset(self, value: str) -> "Blueprint":
        self.options.charset = self._option(value)
        return self

    def collation(self, value: str) -> "Blueprint":
        self.options.collation = self._option(value)
        return self

    # Locking ---------------------------------------------------------------
    def lock(self) -> None:
        self._ensure_unlocked()
        self.locked = True

    def _ensure_unlocked(self) -> None:
        if self.locked:
            raise BlueprintLocked(self.table)

    def _claim_primary(self, owner: str) -> None:
        if self._primary_owner is not None and self._primary_owner != owner:
            raise DuplicatePrimaryKey(self.table, self._primary_owner, owner)
        self._primary_owner = owner

    def _add_index(self, columns: Iterable[str], *, unique: bool, name: str | None) -> "Blueprint":
        self._ensure_unlocked()
        if name is not None and not COLUMN_NAME_PATTERN.fullmatch(name):
            raise InvalidIdentifier(name)
        self.indexes.append(IndexSpec(_validate_columns(tuple(columns)), unique=unique, name=name))
        return self

    def _option(self, value: str) -> str:
        self._ensure_unlocked()
        if not isinstance(value, str) or not _OPTION_PATTERN.fullmatch(value):
            raise InvalidIdentifier(value)
        return value


def _validate_table(table: str) -> str:
    if not isinstance(table, str) or not IDENTIFIER_PATTERN.fullmatch(table):
        raise InvalidIdentifier(table)
    return table


def _validate_columns(columns: Iterable[str]) -> Tuple[str, ...]:
    names = tuple(columns)
    if not names:
        raise InvalidColumnDefinition("At least one column name is required")
    for name in names:
        if not isinstance(name, str) or not COLUMN_NAME_PATTERN.fullmatch(name):
            raise InvalidIdentifier(name)
    return names


def _validate_action(action: str) -> str:
    normalized = " ".join(str(action).upper().split())
    if normalized not in FOREIGN_KEY_ACTIONS:
        raise InvalidForeignKeyAction(action)
    return normalized
