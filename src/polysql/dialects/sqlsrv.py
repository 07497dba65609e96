"""
Microsoft SQL Server dialect.
"""

from __future__ import annotations

from .base import (
    CatalogQueries,
    CreateGuard,
    Dialect,
    DialectCapabilities,
    EnumStyle,
    PaginationStyle,
    SetStyle,
)
from .types import ColumnType, TypeName, type_map

_VARCHAR_MAX = TypeName("VARCHAR", "MAX")
_NVARCHAR_MAX = TypeName("NVARCHAR", "MAX")
_VARBINARY_MAX = TypeName("VARBINARY", "MAX")

SQLSRV = Dialect(
    name="sqlsrv",
    aliases=("mssql", "sqlserver"),
    quote_pair=("[", "]"),
    boolean_literals=("1", "0"),
    auto_increment="IDENTITY(1,1)",
    pagination=PaginationStyle.TOP,
    capabilities=DialectCapabilities(supports_drop_if_exists=False),
    types=type_map(
        {
            ColumnType.TINYINT: TypeName("SMALLINT"),
            ColumnType.MEDIUMINT: TypeName("INT"),
            ColumnType.TEXT: _VARCHAR_MAX,
            ColumnType.MEDIUMTEXT: _VARCHAR_MAX,
            ColumnType.LONGTEXT: _VARCHAR_MAX,
            ColumnType.DOUBLE: TypeName("FLOAT(53)"),
            ColumnType.DATETIME: TypeName("DATETIME2"),
            ColumnType.TIMESTAMP: TypeName("DATETIME2"),
            ColumnType.YEAR: TypeName("SMALLINT"),
            ColumnType.BOOLEAN: TypeName("BIT"),
            ColumnType.JSON: _NVARCHAR_MAX,
            ColumnType.BLOB: _VARBINARY_MAX,
            ColumnType.LONGBLOB: _VARBINARY_MAX,
            ColumnType.ENUM: _NVARCHAR_MAX,
            ColumnType.SET: _NVARCHAR_MAX,
            ColumnType.POINT: TypeName("GEOMETRY"),
            ColumnType.LINESTRING: TypeName("GEOMETRY"),
            ColumnType.POLYGON: TypeName("GEOMETRY"),
            ColumnType.MULTIPOINT: TypeName("GEOMETRY"),
            ColumnType.MULTILINESTRING: TypeName("GEOMETRY"),
            ColumnType.MULTIPOLYGON: TypeName("GEOMETRY"),
        }
    ),
    enum_style=EnumStyle.NAMED_CONSTRAINT,
    set_style=SetStyle.LIKE,
    create_guard=CreateGuard.SYSOBJECTS,
    add_column_keyword="ADD",
    max_parameters=2100,
    max_insert_rows=1000,
    rename_template="EXEC sp_rename {old_literal}, {new_literal};",
    catalog=CatalogQueries(
        table_exists="SELECT COUNT(*) FROM INFORMATION_SCHEMA.TABLES WHERE TABLE_NAME = ?",
        column_exists=(
            "SELECT COUNT(*) FROM INFORMATION_SCHEMA.COLUMNS "
            "WHERE TABLE_NAME = ? AND COLUMN_NAME = ?"
        ),
        columns=(
            "SELECT COLUMN_NAME, DATA_TYPE, IS_NULLABLE, COLUMN_DEFAULT "
            "FROM INFORMATION_SCHEMA.COLUMNS WHERE TABLE_NAME = ? ORDER BY ORDINAL_POSITION"
        ),
    ),
)