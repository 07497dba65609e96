"""
Base column types shared by every dialect.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping


class ColumnType(str, Enum):
    """Closed set of abstract column types a blueprint can declare."""

    INT = "int"
    TINYINT = "tinyint"
    SMALLINT = "smallint"
    MEDIUMINT = "mediumint"
    BIGINT = "bigint"
    CHAR = "char"
    VARCHAR = "varchar"
    TEXT = "text"
    MEDIUMTEXT = "mediumtext"
    LONGTEXT = "longtext"
    DECIMAL = "decimal"
    FLOAT = "float"
    DOUBLE = "double"
    DATE = "date"
    DATETIME = "datetime"
    TIMESTAMP = "timestamp"
    TIME = "time"
    YEAR = "year"
    BOOLEAN = "boolean"
    JSON = "json"
    BLOB = "blob"
    LONGBLOB = "longblob"
    ENUM = "enum"
    SET = "set"
    GEOMETRY = "geometry"
    POINT = "point"
    LINESTRING = "linestring"
    POLYGON = "polygon"
    MULTIPOINT = "multipoint"
    MULTILINESTRING = "multilinestring"
    MULTIPOLYGON = "multipolygon"

    @property
    def is_integer(self) -> bool:
        return self in INTEGER_TYPES

    @property
    def is_spatial(self) -> bool:
        return self in SPATIAL_TYPES


INTEGER_TYPES = frozenset(
    {
        ColumnType.INT,
        ColumnType.TINYINT,
        ColumnType.SMALLINT,
        ColumnType.MEDIUMINT,
        ColumnType.BIGINT,
    }
)

SPATIAL_TYPES = frozenset(
    {
        ColumnType.GEOMETRY,
        ColumnType.POINT,
        ColumnType.LINESTRING,
        ColumnType.POLYGON,
        ColumnType.MULTIPOINT,
        ColumnType.MULTILINESTRING,
        ColumnType.MULTIPOLYGON,
    }
)


@dataclass(frozen=True)
class TypeName:
    """
    SQL spelling of a base type plus the length used when the column sets none.
    """

    name: str
    length: int | str | None = None

    def render(self, length: int | str | None = None) -> str:
        size = length if length is not None else self.length
        if size is None or "(" in self.name:
            return self.name
        return f"{self.name}({size})"


# MySQL spelling doubles as the base map every other dialect overrides.
BASE_TYPES: Mapping[ColumnType, TypeName] = {
    ColumnType.INT: TypeName("INT"),
    ColumnType.TINYINT: TypeName("TINYINT"),
    ColumnType.SMALLINT: TypeName("SMALLINT"),
    ColumnType.MEDIUMINT: TypeName("MEDIUMINT"),
    ColumnType.BIGINT: TypeName("BIGINT"),
    ColumnType.CHAR: TypeName("CHAR", 255),
    ColumnType.VARCHAR: TypeName("VARCHAR", 255),
    ColumnType.TEXT: TypeName("TEXT"),
    ColumnType.MEDIUMTEXT: TypeName("MEDIUMTEXT"),
    ColumnType.LONGTEXT: TypeName("LONGTEXT"),
    ColumnType.DECIMAL: TypeName("DECIMAL", "8,2"),
    ColumnType.FLOAT: TypeName("FLOAT"),
    ColumnType.DOUBLE: TypeName("DOUBLE"),
    ColumnType.DATE: TypeName("DATE"),
    ColumnType.DATETIME: TypeName("DATETIME"),
    ColumnType.TIMESTAMP: TypeName("TIMESTAMP"),
    ColumnType.TIME: TypeName("TIME"),
    ColumnType.YEAR: TypeName("YEAR"),
    ColumnType.BOOLEAN: TypeName("BOOLEAN"),
    ColumnType.JSON: TypeName("JSON"),
    ColumnType.BLOB: TypeName("BLOB"),
    ColumnType.LONGBLOB: TypeName("LONGBLOB"),
    ColumnType.ENUM: TypeName("ENUM"),
    ColumnType.SET: TypeName("SET"),
    ColumnType.GEOMETRY: TypeName("GEOMETRY"),
    ColumnType.POINT: TypeName("POINT"),
    ColumnType.LINESTRING: TypeName("LINESTRING"),
    ColumnType.POLYGON: TypeName("POLYGON"),
    ColumnType.MULTIPOINT: TypeName("MULTIPOINT"),
    ColumnType.MULTILINESTRING: TypeName("MULTILINESTRING"),
    ColumnType.MULTIPOLYGON: TypeName("MULTIPOLYGON"),
}


def type_map(overrides: Mapping[ColumnType, TypeName]) -> Dict[ColumnType, TypeName]:
    merged = dict(BASE_TYPES)
    merged.update(overrides)
    return merged
