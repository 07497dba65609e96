"""
MySQL / MariaDB dialect.
"""

from __future__ import annotations

from .base import CatalogQueries, Dialect, DialectCapabilities, EnumStyle, PaginationStyle, SetStyle
from .types import BASE_TYPES

MYSQL = Dialect(
    name="mysql",
    aliases=("mariadb",),
    quote_pair=("`", "`"),
    boolean_literals=("1", "0"),
    auto_increment="AUTO_INCREMENT",
    pagination=PaginationStyle.LIMIT_OFFSET,
    capabilities=DialectCapabilities(
        has_unsigned=True,
        supports_table_options=True,
        supports_column_comments=True,
        backslash_escapes=True,
    ),
    types=dict(BASE_TYPES),
    enum_style=EnumStyle.NATIVE,
    set_style=SetStyle.NATIVE,
    param_style="format",
    rename_template="RENAME TABLE {old} TO {new};",
    catalog=CatalogQueries(
        table_exists=(
            "SELECT COUNT(*) FROM information_schema.tables "
            "WHERE table_schema = DATABASE() AND table_name = ?"
        ),
        column_exists=(
            "SELECT COUNT(*) FROM information_schema.columns "
            "WHERE table_schema = DATABASE() AND table_name = ? AND column_name = ?"
        ),
        columns=(
            "SELECT column_name, column_type, is_nullable, column_default "
            "FROM information_schema.columns "
            "WHERE table_schema = DATABASE() AND table_name = ? ORDER BY ordinal_position"
        ),
    ),
)