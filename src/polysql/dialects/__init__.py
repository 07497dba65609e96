"""
Dialect descriptors, identifier quoting, and the driver registry.
"""

from .base import (
    IDENTIFIER_PATTERN,
    CatalogQueries,
    CreateGuard,
    Dialect,
    DialectCapabilities,
    EnumStyle,
    InsertStyle,
    PaginationStyle,
    SetStyle,
)
from .firebird import FIREBIRD
from .mysql import MYSQL
from .oracle import ORACLE
from .pagination import page_offset, paginate
from .postgres import POSTGRES
from .registry import (
    DialectRegistry,
    available_dialects,
    get_dialect,
    quote,
    register_dialect,
    registry,
    resolve_dialect,
)
from .sqlite import SQLITE
from .sqlsrv import SQLSRV
from .types import ColumnType, TypeName

__all__ = [
    "IDENTIFIER_PATTERN",
    "CatalogQueries",
    "ColumnType",
    "CreateGuard",
    "Dialect",
    "DialectCapabilities",
    "DialectRegistry",
    "EnumStyle",
    "InsertStyle",
    "PaginationStyle",
    "SetStyle",
    "TypeName",
    "MYSQL",
    "POSTGRES",
    "SQLITE",
    "SQLSRV",
    "ORACLE",
    "FIREBIRD",
    "available_dialects",
    "get_dialect",
    "page_offset",
    "paginate",
    "quote",
    "register_dialect",
    "registry",
    "resolve_dialect",
]
