"""
SQLite dialect.
"""

from __future__ import annotations

from .base import CatalogQueries, Dialect, DialectCapabilities, EnumStyle, PaginationStyle, SetStyle
from .types import ColumnType, TypeName, type_map

_INTEGER = TypeName("INTEGER")
_TEXT = TypeName("TEXT")
_BLOB = TypeName("BLOB")

SQLITE = Dialect(
    name="sqlite",
    aliases=("sqlite3",),
    quote_pair=('"', '"'),
    boolean_literals=("1", "0"),
    # INTEGER PRIMARY KEY aliases the rowid, which already auto-increments.
    auto_increment="",
    pagination=PaginationStyle.LIMIT_OFFSET,
    capabilities=DialectCapabilities(
        supports_index_if_not_exists=True,
        supports_alter_constraints=False,
    ),
    types=type_map(
        {
            ColumnType.INT: _INTEGER,
            ColumnType.TINYINT: _INTEGER,
            ColumnType.SMALLINT: _INTEGER,
            ColumnType.MEDIUMINT: _INTEGER,
            ColumnType.BIGINT: _INTEGER,
            ColumnType.MEDIUMTEXT: _TEXT,
            ColumnType.LONGTEXT: _TEXT,
            ColumnType.DECIMAL: TypeName("NUMERIC"),
            ColumnType.FLOAT: TypeName("REAL"),
            ColumnType.DOUBLE: TypeName("REAL"),
            ColumnType.YEAR: _INTEGER,
            ColumnType.BOOLEAN: _INTEGER,
            ColumnType.JSON: _TEXT,
            ColumnType.LONGBLOB: _BLOB,
            ColumnType.ENUM: _TEXT,
            ColumnType.SET: _TEXT,
            ColumnType.GEOMETRY: _BLOB,
            ColumnType.POINT: _BLOB,
            ColumnType.LINESTRING: _BLOB,
            ColumnType.POLYGON: _BLOB,
            ColumnType.MULTIPOINT: _BLOB,
            ColumnType.MULTILINESTRING: _BLOB,
            ColumnType.MULTIPOLYGON: _BLOB,
        }
    ),
    enum_style=EnumStyle.INLINE_CHECK,
    set_style=SetStyle.OR_EQUALS,
    max_parameters=32766,
    truncate_template="DELETE FROM {table};",
    catalog=CatalogQueries(
        table_exists="SELECT COUNT(*) FROM sqlite_master WHERE type = 'table' AND name = ?",
        column_exists="SELECT COUNT(*) FROM pragma_table_info(?) WHERE name = ?",
        columns='SELECT name, type, "notnull", dflt_value FROM pragma_table_info(?) ORDER BY cid',
    ),
)