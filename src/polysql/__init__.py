"""
polysql public package initialization.

Driver-agnostic DDL and DML compilation for MySQL, PostgreSQL, SQLite,
SQL Server, Oracle and Firebird.
"""

from .config import CompilerSettings  # noqa: F401
from .connection import ConnectionConfig, ConnectionRegistry  # noqa: F401
from .dialects import ColumnType, Dialect, available_dialects, get_dialect, quote  # noqa: F401
from .errors import PolySQLError  # noqa: F401
from .query import CompiledQuery, QueryBuilder, QueryCompiler  # noqa: F401
from .schema import Blueprint, SchemaBuilder, SchemaGrammar  # noqa: F401
from .utils import QueryLog, configure_logging  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "Blueprint",
    "ColumnType",
    "CompiledQuery",
    "CompilerSettings",
    "ConnectionConfig",
    "ConnectionRegistry",
    "Dialect",
    "PolySQLError",
    "QueryBuilder",
    "QueryCompiler",
    "QueryLog",
    "SchemaBuilder",
    "SchemaGrammar",
    "available_dialects",
    "configure_logging",
    "get_dialect",
    "quote",
]
