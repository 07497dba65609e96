"""
Firebird / InterBase dialect.
"""

from __future__ import annotations

from .base import (
    CatalogQueries,
    CreateGuard,
    Dialect,
    DialectCapabilities,
    EnumStyle,
    InsertStyle,
    PaginationStyle,
    SetStyle,
)
from .types import ColumnType, TypeName, type_map

_BLOB_TEXT = TypeName("BLOB SUB_TYPE TEXT")
_BLOB = TypeName("BLOB")

FIREBIRD = Dialect(
    name="firebird",
    aliases=("ibase", "interbase"),
    quote_pair=('"', '"'),
    boolean_literals=("TRUE", "FALSE"),
    auto_increment="GENERATED BY DEFAULT AS IDENTITY",
    pagination=PaginationStyle.ROWS_RANGE,
    capabilities=DialectCapabilities(
        supports_drop_if_exists=False,
        supports_explicit_null=False,
    ),
    types=type_map(
        {
            ColumnType.INT: TypeName("INTEGER"),
            ColumnType.TINYINT: TypeName("SMALLINT"),
            ColumnType.MEDIUMINT: TypeName("BIGINT"),
            ColumnType.TEXT: _BLOB_TEXT,
            ColumnType.MEDIUMTEXT: _BLOB_TEXT,
            ColumnType.LONGTEXT: _BLOB_TEXT,
            ColumnType.DOUBLE: TypeName("DOUBLE PRECISION"),
            ColumnType.DATETIME: TypeName("TIMESTAMP"),
            ColumnType.YEAR: TypeName("SMALLINT"),
            ColumnType.JSON: _BLOB_TEXT,
            ColumnType.LONGBLOB: _BLOB,
            ColumnType.ENUM: TypeName("VARCHAR", 255),
            ColumnType.SET: TypeName("VARCHAR", 255),
            ColumnType.GEOMETRY: _BLOB,
            ColumnType.POINT: _BLOB,
            ColumnType.LINESTRING: _BLOB,
            ColumnType.POLYGON: _BLOB,
            ColumnType.MULTIPOINT: _BLOB,
            ColumnType.MULTILINESTRING: _BLOB,
            ColumnType.MULTIPOLYGON: _BLOB,
        }
    ),
    enum_style=EnumStyle.NAMED_CONSTRAINT,
    set_style=SetStyle.CONTAINING,
    create_guard=CreateGuard.NONE,
    add_column_keyword="ADD",
    insert_style=InsertStyle.SINGLE,
    max_parameters=1500,
    param_style="qmark",
    rename_template=None,
    truncate_template="DELETE FROM {table};",
    catalog=CatalogQueries(
        table_exists="SELECT COUNT(*) FROM RDB$RELATIONS WHERE RDB$RELATION_NAME = ?",
        column_exists=(
            "SELECT COUNT(*) FROM RDB$RELATION_FIELDS "
            "WHERE RDB$RELATION_NAME = ? AND RDB$FIELD_NAME = ?"
        ),
        columns=(
            "SELECT RDB$FIELD_NAME, RDB$FIELD_SOURCE, RDB$NULL_FLAG, RDB$DEFAULT_SOURCE "
            "FROM RDB$RELATION_FIELDS WHERE RDB$RELATION_NAME = ? ORDER BY RDB$FIELD_POSITION"
        ),
    ),
)