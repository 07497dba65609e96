"""
PostgreSQL dialect.
"""

from __future__ import annotations

from .base import CatalogQueries, Dialect, DialectCapabilities, EnumStyle, PaginationStyle, SetStyle
from .types import ColumnType, TypeName, type_map

POSTGRES = Dialect(
    name="pgsql",
    aliases=("postgres", "postgresql", "psql"),
    quote_pair=('"', '"'),
    boolean_literals=("TRUE", "FALSE"),
    # SERIAL types carry the sequence, so no keyword is emitted.
    auto_increment="",
    pagination=PaginationStyle.LIMIT_OFFSET,
    capabilities=DialectCapabilities(
        supports_index_if_not_exists=True,
    ),
    types=type_map(
        {
            ColumnType.INT: TypeName("INTEGER"),
            ColumnType.TINYINT: TypeName("SMALLINT"),
            ColumnType.MEDIUMINT: TypeName("INTEGER"),
            ColumnType.MEDIUMTEXT: TypeName("TEXT"),
            ColumnType.LONGTEXT: TypeName("TEXT"),
            ColumnType.FLOAT: TypeName("REAL"),
            ColumnType.DOUBLE: TypeName("DOUBLE PRECISION"),
            ColumnType.DATETIME: TypeName("TIMESTAMP"),
            ColumnType.YEAR: TypeName("SMALLINT"),
            ColumnType.JSON: TypeName("JSONB"),
            ColumnType.BLOB: TypeName("BYTEA"),
            ColumnType.LONGBLOB: TypeName("BYTEA"),
            ColumnType.ENUM: TypeName("TEXT"),
            ColumnType.SET: TypeName("TEXT[]"),
            ColumnType.POINT: TypeName("GEOMETRY(POINT)"),
            ColumnType.LINESTRING: TypeName("GEOMETRY(LINESTRING)"),
            ColumnType.POLYGON: TypeName("GEOMETRY(POLYGON)"),
            ColumnType.MULTIPOINT: TypeName("GEOMETRY(MULTIPOINT)"),
            ColumnType.MULTILINESTRING: TypeName("GEOMETRY(MULTILINESTRING)"),
            ColumnType.MULTIPOLYGON: TypeName("GEOMETRY(MULTIPOLYGON)"),
        }
    ),
    enum_style=EnumStyle.INLINE_CHECK,
    set_style=SetStyle.ARRAY,
    serial_types={
        ColumnType.INT: "SERIAL",
        ColumnType.MEDIUMINT: "SERIAL",
        ColumnType.TINYINT: "SMALLSERIAL",
        ColumnType.SMALLINT: "SMALLSERIAL",
        ColumnType.BIGINT: "BIGSERIAL",
    },
    param_style="format",
    catalog=CatalogQueries(
        table_exists=(
            "SELECT COUNT(*) FROM information_schema.tables "
            "WHERE table_schema = current_schema() AND table_name = ?"
        ),
        column_exists=(
            "SELECT COUNT(*) FROM information_schema.columns "
            "WHERE table_schema = current_schema() AND table_name = ? AND column_name = ?"
        ),
        columns=(
            "SELECT column_name, data_type, is_nullable, column_default "
            "FROM information_schema.columns "
            "WHERE table_schema = current_schema() AND table_name = ? ORDER BY ordinal_position"
        ),
    ),
)