import pytest

from polysql.dialects import FIREBIRD, MYSQL, ORACLE, POSTGRES, SQLITE, SQLSRV, page_offset, paginate
from polysql.errors import PaginationRequiresOrder

BASE = 'SELECT * FROM "t"'


def test_page_offset_is_one_based():
    assert page_offset(10, 1) == 0
    assert page_offset(10, 3) == 20


def test_no_limit_leaves_sql_untouched():
    for dialect in (MYSQL, SQLSRV, ORACLE, FIREBIRD):
        assert paginate(BASE, dialect, limit=None, offset=None, ordered=False) == BASE


@pytest.mark.parametrize("dialect", [MYSQL, POSTGRES, SQLITE])
def test_limit_offset_dialects(dialect):
    assert paginate(BASE, dialect, limit=10, offset=None, ordered=False) == BASE + " LIMIT 10"
    assert (
        paginate(BASE, dialect, limit=10, offset=20, ordered=False)
        == BASE + " LIMIT 10 OFFSET 20"
    )


def test_sqlsrv_uses_top_without_offset():
    assert paginate("SELECT * FROM [t]", SQLSRV, limit=10, offset=None, ordered=False) == (
        "SELECT TOP 10 * FROM [t]"
    )
    assert paginate("SELECT DISTINCT [a] FROM [t]", SQLSRV, limit=5, offset=None, ordered=False) == (
        "SELECT DISTINCT TOP 5 [a] FROM [t]"
    )


def test_sqlsrv_offset_requires_order():
    sql = "SELECT * FROM [t] ORDER BY [id] ASC"
    assert paginate(sql, SQLSRV, limit=10, offset=10, ordered=True) == (
        sql + " OFFSET 10 ROWS FETCH NEXT 10 ROWS ONLY"
    )
    with pytest.raises(PaginationRequiresOrder):
        paginate("SELECT * FROM [t]", SQLSRV, limit=10, offset=10, ordered=False)


def test_oracle_fetch_first_and_offset():
    assert paginate(BASE, ORACLE, limit=5, offset=None, ordered=False) == (
        BASE + " FETCH FIRST 5 ROWS ONLY"
    )
    assert paginate(BASE, ORACLE, limit=5, offset=0, ordered=True) == (
        BASE + " OFFSET 0 ROWS FETCH NEXT 5 ROWS ONLY"
    )
    with pytest.raises(PaginationRequiresOrder):
        paginate(BASE, ORACLE, limit=5, offset=5, ordered=False)


def test_firebird_rows_range():
    assert paginate(BASE, FIREBIRD, limit=10, offset=None, ordered=False) == BASE + " ROWS 1 TO 10"
    assert paginate(BASE, FIREBIRD, limit=10, offset=20, ordered=False) == BASE + " ROWS 21 TO 30"
