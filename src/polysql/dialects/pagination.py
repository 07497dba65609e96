"""
Dialect-aware LIMIT/OFFSET rendering.
"""

from __future__ import annotations

from ..errors import PaginationRequiresOrder
from .base import Dialect, PaginationStyle


def page_offset(limit: int, page: int) -> int:
    return (page - 1) * limit


def paginate(
    sql: str,
    dialect: Dialect,
    *,
    limit: int | None,
    offset: int | None,
    ordered: bool,
) -> str:
    """
    Apply ``limit``/``offset`` to a compiled SELECT using the dialect's style.

    ``offset`` is ``None`` when no page was requested. SQL Server and Oracle
    refuse offset pagination without an ORDER BY.
    """

    if limit is None:
        return sql

    style = dialect.pagination
    if style is PaginationStyle.LIMIT_OFFSET:
        clause = f" LIMIT {limit}"
        if offset is not None:
            clause += f" OFFSET {offset}"
        return sql + clause

    if style is PaginationStyle.TOP:
        if offset is None:
            return _insert_top(sql, limit)
        if not ordered:
            raise PaginationRequiresOrder(dialect.name)
        return f"{sql} OFFSET {offset} ROWS FETCH NEXT {limit} ROWS ONLY"

    if style is PaginationStyle.OFFSET_FETCH:
        if offset is None:
            return f"{sql} FETCH FIRST {limit} ROWS ONLY"
        if not ordered:
            raise PaginationRequiresOrder(dialect.name)
        return f"{sql} OFFSET {offset} ROWS FETCH NEXT {limit} ROWS ONLY"

    if style is PaginationStyle.ROWS_RANGE:
        start = (offset or 0) + 1
        end = start + limit - 1
        return f"{sql} ROWS {start} TO {end}"

    raise ValueError(f"Unknown pagination style '{style}'")


def _insert_top(sql: str, limit: int) -> str:
    for prefix in ("SELECT DISTINCT ", "SELECT "):
        if sql.startswith(prefix):
            return f"{prefix}TOP {limit} {sql[len(prefix):]}"
    raise ValueError("TOP pagination requires a SELECT statement")
