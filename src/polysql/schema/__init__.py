"""
Schema blueprints and DDL compilation.
"""

from .blueprint import Blueprint, ForeignKeySpec, IndexSpec, TableOptions
from .builder import SchemaBuilder
from .column import ColumnSpec, DefaultValue, NoDefault, Raw
from .grammar import (
    SchemaGrammar,
    compile_add_columns,
    compile_column_exists,
    compile_columns,
    compile_create,
    compile_drop,
    compile_rename,
    compile_table_exists,
    compile_truncate,
)
from .types import emulated_check, type_for

__all__ = [
    "Blueprint",
    "ColumnSpec",
    "DefaultValue",
    "ForeignKeySpec",
    "IndexSpec",
    "NoDefault",
    "Raw",
    "SchemaBuilder",
    "SchemaGrammar",
    "TableOptions",
    "compile_add_columns",
    "compile_column_exists",
    "compile_columns",
    "compile_create",
    "compile_drop",
    "compile_rename",
    "compile_table_exists",
    "compile_truncate",
    "emulated_check",
    "type_for",
]
