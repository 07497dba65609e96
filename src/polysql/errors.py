"""
Error taxonomy for polysql.

Every error is raised synchronously at the point of misuse. None of them are
transient, so nothing in this package retries.
"""

from __future__ import annotations

from typing import Iterable


class PolySQLError(Exception):
    """Base error for every failure raised by polysql."""


class ConfigurationError(PolySQLError):
    """Raised when settings or DSN values cannot be parsed."""


class UnsupportedDriver(PolySQLError):
    """Raised when a dialect name is not known to the registry."""

    def __init__(self, name: str, available: Iterable[str] = ()) -> None:
        self.name = name
        self.available = tuple(sorted(available))
        message = f"Unsupported driver '{name}'"
        if self.available:
            message += f". Available: {', '.join(self.available)}"
        super().__init__(message)


class InvalidIdentifier(PolySQLError, ValueError):
    """Raised when a table or column name fails the identifier grammar."""

    def __init__(self, identifier: object) -> None:
        self.identifier = identifier
        super().__init__(f"Invalid identifier {identifier!r}")


# Schema definition ------------------------------------------------------
class SchemaError(PolySQLError):
    """Base error for blueprint misuse."""


class MissingColumnType(SchemaError):
    def __init__(self, table: str, column: str) -> None:
        super().__init__(f"Column '{column}' on table '{table}' has no type")


class EmptyTable(SchemaError):
    def __init__(self, table: str) -> None:
        super().__init__(f"Table '{table}' has no columns")


class DuplicatePrimaryKey(SchemaError):
    def __init__(self, table: str, existing: str, column: str) -> None:
        super().__init__(
            f"Table '{table}' already has primary key '{existing}'; cannot add '{column}'"
        )


class BlueprintLocked(SchemaError):
    def __init__(self, table: str) -> None:
        super().__init__(f"Blueprint for table '{table}' is locked and cannot be modified")


class InvalidDefault(SchemaError):
    """Raised when a default value does not fit the column type."""


class InvalidColumnDefinition(SchemaError):
    """Raised when a column call receives unusable arguments."""


class InvalidForeignKeyAction(SchemaError):
    def __init__(self, action: str) -> None:
        super().__init__(f"Invalid foreign key action '{action}'")


class UnsupportedOperation(SchemaError):
    """Raised when a dialect cannot express the requested statement."""


# Query builder ----------------------------------------------------------
class QueryBuilderError(PolySQLError):
    """Base error for query builder misuse."""


class InvalidOperator(QueryBuilderError):
    def __init__(self, operator: object) -> None:
        super().__init__(f"Invalid comparison operator {operator!r}")


class InvalidJoinType(QueryBuilderError):
    def __init__(self, join_type: object) -> None:
        super().__init__(f"Invalid join type {join_type!r}; expected INNER, LEFT or RIGHT")


class InvalidDirection(QueryBuilderError):
    def __init__(self, direction: object) -> None:
        super().__init__(f"Invalid order direction {direction!r}; expected ASC or DESC")


class MissingWhereClause(QueryBuilderError):
    def __init__(self, operation: str) -> None:
        super().__init__(f"{operation} requires at least one WHERE condition")


class InconsistentInsertColumns(QueryBuilderError):
    def __init__(self, row_index: int, expected: Iterable[str], received: Iterable[str]) -> None:
        self.row_index = row_index
        super().__init__(
            f"Insert row {row_index} has columns {sorted(received)}; expected {sorted(expected)}"
        )


class PaginationRequiresOrder(QueryBuilderError):
    def __init__(self, dialect: str) -> None:
        super().__init__(f"Offset pagination on '{dialect}' requires an ORDER BY clause")


class PaginationRequiresLimit(QueryBuilderError):
    def __init__(self) -> None:
        super().__init__("page() requires limit() to be set first")


class MissingTable(QueryBuilderError):
    def __init__(self) -> None:
        super().__init__("No table selected; call table() first")


class EmptyInsert(QueryBuilderError):
    def __init__(self) -> None:
        super().__init__("insert() requires at least one row with at least one column")


class UnsupportedClause(QueryBuilderError):
    """Raised when a clause cannot be combined with the statement kind."""


class RecordNotFound(QueryBuilderError):
    def __init__(self, table: str) -> None:
        super().__init__(f"No record found in '{table}'")


class MissingConnection(QueryBuilderError):
    def __init__(self, operation: str) -> None:
        super().__init__(f"{operation}() needs a bound connection; use compile_* for SQL only")


__all__ = [
    "PolySQLError",
    "ConfigurationError",
    "UnsupportedDriver",
    "InvalidIdentifier",
    "SchemaError",
    "MissingColumnType",
    "EmptyTable",
    "DuplicatePrimaryKey",
    "BlueprintLocked",
    "InvalidDefault",
    "InvalidColumnDefinition",
    "InvalidForeignKeyAction",
    "UnsupportedOperation",
    "QueryBuilderError",
    "InvalidOperator",
    "InvalidJoinType",
    "InvalidDirection",
    "MissingWhereClause",
    "InconsistentInsertColumns",
    "PaginationRequiresOrder",
    "PaginationRequiresLimit",
    "MissingTable",
    "EmptyInsert",
    "UnsupportedClause",
    "RecordNotFound",
    "MissingConnection",
]
