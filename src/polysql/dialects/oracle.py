"""
Oracle dialect.
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

_NUMBER = TypeName("NUMBER")
_CLOB = TypeName("CLOB")
_VARCHAR2 = TypeName("VARCHAR2", 255)
_SDO = TypeName("SDO_GEOMETRY")

ORACLE = Dialect(
    name="oci",
    aliases=("oracle",),
    quote_pair=('"', '"'),
    boolean_literals=("1", "0"),
    auto_increment="GENERATED BY DEFAULT AS IDENTITY",
    pagination=PaginationStyle.OFFSET_FETCH,
    capabilities=DialectCapabilities(supports_drop_if_exists=False),
    types=type_map(
        {
            ColumnType.INT: _NUMBER,
            ColumnType.TINYINT: _NUMBER,
            ColumnType.SMALLINT: _NUMBER,
            ColumnType.MEDIUMINT: _NUMBER,
            ColumnType.BIGINT: _NUMBER,
            ColumnType.VARCHAR: _VARCHAR2,
            ColumnType.TEXT: _CLOB,
            ColumnType.MEDIUMTEXT: _CLOB,
            ColumnType.LONGTEXT: _CLOB,
            ColumnType.DECIMAL: TypeName("NUMBER", "8,2"),
            ColumnType.FLOAT: TypeName("BINARY_FLOAT"),
            ColumnType.DOUBLE: TypeName("BINARY_DOUBLE"),
            ColumnType.DATETIME: TypeName("TIMESTAMP"),
            ColumnType.TIME: TypeName("TIMESTAMP"),
            ColumnType.YEAR: TypeName("NUMBER", 4),
            ColumnType.BOOLEAN: TypeName("NUMBER", 1),
            ColumnType.JSON: _CLOB,
            ColumnType.LONGBLOB: TypeName("BLOB"),
            ColumnType.ENUM: _VARCHAR2,
            ColumnType.SET: _VARCHAR2,
            ColumnType.GEOMETRY: _SDO,
            ColumnType.POINT: _SDO,
            ColumnType.LINESTRING: _SDO,
            ColumnType.POLYGON: _SDO,
            ColumnType.MULTIPOINT: _SDO,
            ColumnType.MULTILINESTRING: _SDO,
            ColumnType.MULTIPOLYGON: _SDO,
        }
    ),
    enum_style=EnumStyle.NAMED_CONSTRAINT,
    set_style=SetStyle.REGEXP,
    create_guard=CreateGuard.NONE,
    add_column_keyword="ADD",
    insert_style=InsertStyle.INSERT_ALL,
    param_style="numeric",
    rename_template="RENAME {old} TO {new};",
    catalog=CatalogQueries(
        table_exists="SELECT COUNT(*) FROM user_tables WHERE table_name = ?",
        column_exists=(
            "SELECT COUNT(*) FROM user_tab_columns WHERE table_name = ? AND column_name = ?"
        ),
        columns=(
            "SELECT column_name, data_type, nullable, data_default "
            "FROM user_tab_columns WHERE table_name = ? ORDER BY column_id"
        ),
    ),
)