import pytest

from polysql.errors import (
    EmptyInsert,
    InconsistentInsertColumns,
    MissingTable,
    MissingWhereClause,
    PaginationRequiresOrder,
    QueryBuilderError,
    UnsupportedClause,
)
from polysql.query import QueryBuilder, QueryCompiler, QueryState


def test_select_with_where_order_and_page():
    qb = QueryBuilder("pgsql").table("users").where("age", ">", 18).order("name").limit(10).page(2)
    assert qb.build() == 'SELECT * FROM "users" WHERE "age" > ? ORDER BY "name" ASC LIMIT 10 OFFSET 10'
    assert qb.bindings == [18]


def test_sqlsrv_top_and_offset_fetch():
    assert QueryBuilder("sqlsrv").table("t").limit(10).build() == "SELECT TOP 10 * FROM [t]"

    ordered = QueryBuilder("sqlsrv").table("t").order("id").limit(10).page(2)
    assert ordered.build() == (
        "SELECT * FROM [t] ORDER BY [id] ASC OFFSET 10 ROWS FETCH NEXT 10 ROWS ONLY"
    )

    unordered = QueryBuilder("sqlsrv").table("t").limit(10).page(2)
    with pytest.raises(PaginationRequiresOrder):
        unordered.build()


def test_page_one_still_counts_as_offset():
    qb = QueryBuilder("oci").table("t").order("id", "desc").limit(5).page(1)
    assert qb.build() == 'SELECT * FROM "t" ORDER BY "id" DESC OFFSET 0 ROWS FETCH NEXT 5 ROWS ONLY'
    assert QueryBuilder("oci").table("t").limit(5).build() == 'SELECT * FROM "t" FETCH FIRST 5 ROWS ONLY'


def test_firebird_rows_clause():
    qb = QueryBuilder("firebird").table("t").limit(10).page(3)
    assert qb.build() == 'SELECT * FROM "t" ROWS 21 TO 30'


def test_bindings_follow_placeholder_order():
    qb = (
        QueryBuilder("sqlite")
        .table("orders")
        .select("customer_id", "SUM(total) AS spent")
        .where("status", "paid")
        .where_group(lambda q: q.where("region", "eu").or_where("region", "us"))
        .group_by("customer_id")
        .having("SUM(total)", ">", 100)
        .where("year", 2024)
    )
    sql, params = qb.to_sql()
    assert sql == (
        'SELECT "customer_id", SUM("total") AS "spent" FROM "orders" '
        'WHERE "status" = ? AND ("region" = ? OR "region" = ?) AND "year" = ? '
        'GROUP BY "customer_id" HAVING SUM("total") > ?'
    )
    assert params == ["paid", "eu", "us", 2024, 100]
    assert sql.count("?") == len(params)


def test_build_is_idempotent():
    qb = QueryBuilder("mysql").table("users").where_in("id", [1, 2, 3]).order("id").limit(3)
    first = (qb.build(), qb.bindings)
    second = (qb.build(), qb.bindings)
    assert first == second
    assert qb.build() == "SELECT * FROM `users` WHERE `id` IN (?, ?, ?) ORDER BY `id` ASC LIMIT 3"


def test_count_ignores_order_and_pagination():
    qb = QueryBuilder("pgsql").table("users").where("active", True).order("id").limit(10).page(3)
    compiled = qb.compile_count()
    assert compiled.sql == 'SELECT COUNT(*) AS "aggregate" FROM "users" WHERE "active" = ?'
    assert compiled.params == (True,)

    distinct = QueryBuilder("pgsql").table("users").distinct().compile_count("email")
    assert distinct.sql == 'SELECT COUNT(DISTINCT "email") AS "aggregate" FROM "users"'


def test_exists_limits_to_one_row():
    assert QueryBuilder("sqlite").table("users").where("email", "a@b.c").compile_exists().sql == (
        'SELECT 1 AS "found" FROM "users" WHERE "email" = ? LIMIT 1'
    )
    assert QueryBuilder("sqlsrv").table("users").compile_exists().sql == (
        "SELECT TOP 1 1 AS [found] FROM [users]"
    )


def test_insert_many_rows_in_one_statement():
    statements = QueryBuilder("mysql").table("t").compile_insert([{"a": 1, "b": 2}, {"a": 3, "b": 4}])
    assert len(statements) == 1
    assert statements[0].sql == "INSERT INTO `t` (`a`, `b`) VALUES (?, ?), (?, ?)"
    assert statements[0].params == (1, 2, 3, 4)


def test_insert_single_mapping():
    (statement,) = QueryBuilder("pgsql").table("t").compile_insert({"name": "x"})
    assert statement.sql == 'INSERT INTO "t" ("name") VALUES (?)'


def test_inconsistent_insert_rows_fail_before_any_statement():
    with pytest.raises(InconsistentInsertColumns) as excinfo:
        QueryBuilder("mysql").table("t").compile_insert([{"a": 1}, {"b": 2}])
    assert excinfo.value.row_index == 1


def test_empty_insert():
    with pytest.raises(EmptyInsert):
        QueryBuilder("mysql").table("t").compile_insert([])
    with pytest.raises(EmptyInsert):
        QueryBuilder("mysql").table("t").compile_insert({})


def test_insert_chunks_respect_parameter_ceiling():
    compiler = QueryCompiler("sqlsrv")
    rows = [{"a": i, "b": i, "c": i} for i in range(1500)]
    statements = compiler.compile_insert(QueryState(table="[t]"), rows, chunk_size=1000)
    assert [len(statement.params) // 3 for statement in statements] == [700, 700, 100]
    for statement in statements:
        assert statement.placeholder_count == len(statement.params)


def test_insert_chunk_size():
    statements = QueryCompiler("sqlite").compile_insert(
        QueryState(table='"t"'), [{"a": i} for i in range(5)], chunk_size=2
    )
    assert [statement.params for statement in statements] == [(0, 1), (2, 3), (4,)]


def test_oracle_insert_all_and_firebird_single_rows():
    rows = [{"a": 1}, {"a": 2}]
    (oracle,) = QueryBuilder("oci").table("t").compile_insert(rows)
    assert oracle.sql == (
        'INSERT ALL INTO "t" ("a") VALUES (?) INTO "t" ("a") VALUES (?) SELECT 1 FROM DUAL'
    )
    firebird = QueryBuilder("firebird").table("t").compile_insert(rows)
    assert [statement.sql for statement in firebird] == ['INSERT INTO "t" ("a") VALUES (?)'] * 2


def test_update_delete_and_increment():
    qb = QueryBuilder("pgsql").table("users").where("id", 5)
    update = qb.compile_update({"name": "x", "age": 3})
    assert update.sql == 'UPDATE "users" SET "name" = ?, "age" = ? WHERE "id" = ?'
    assert update.params == ("x", 3, 5)

    assert qb.compile_delete().sql == 'DELETE FROM "users" WHERE "id" = ?'

    increment = qb.compile_increment("visits", 2, {"seen_at": "now"})
    assert increment.sql == (
        'UPDATE "users" SET "visits" = "visits" + ?, "seen_at" = ? WHERE "id" = ?'
    )
    assert increment.params == (2, "now", 5)

    decrement = qb.compile_increment("stock", operator="-")
    assert decrement.sql == 'UPDATE "users" SET "stock" = "stock" - ? WHERE "id" = ?'


def test_increment_amount_must_be_numeric():
    qb = QueryBuilder("pgsql").table("users").where("id", 5)
    with pytest.raises(QueryBuilderError):
        qb.compile_increment("visits", "2")
    with pytest.raises(QueryBuilderError):
        qb.compile_increment("visits", True)


@pytest.mark.parametrize(
    "operation",
    [
        lambda qb: qb.compile_update({"name": "x"}),
        lambda qb: qb.compile_delete(),
        lambda qb: qb.compile_increment("visits"),
        lambda qb: qb.compile_increment("visits", operator="-"),
    ],
)
def test_mutations_without_where_are_refused_without_touching_state(operation):
    qb = QueryBuilder("mysql").table("users").order("id")
    before = qb.state
    with pytest.raises(MissingWhereClause):
        operation(qb)
    assert qb.state == before


def test_update_with_join_is_unsupported():
    qb = QueryBuilder("mysql").table("users u").join("teams t", "t.id", "=", "u.team_id").where("t.id", 1)
    with pytest.raises(UnsupportedClause):
        qb.compile_update({"name": "x"})


def test_update_requires_values():
    with pytest.raises(QueryBuilderError):
        QueryBuilder("mysql").table("users").where("id", 1).compile_update({})


def test_missing_table():
    with pytest.raises(MissingTable):
        QueryBuilder("mysql").where("id", 1).build()


def test_insert_rows_must_be_mappings():
    with pytest.raises(InconsistentInsertColumns) as excinfo:
        QueryBuilder("mysql").table("t").compile_insert([("a", 1)])
    assert excinfo.value.row_index == 0


def test_sqlsrv_insert_stays_within_row_constructor_limit():
    compiler = QueryCompiler("sqlsrv")
    rows = [{"a": i} for i in range(1500)]
    statements = compiler.compile_insert(QueryState(table="[t]"), rows, chunk_size=5000)
    assert [len(statement.params) for statement in statements] == [1000, 500]

    (pgsql,) = QueryCompiler("pgsql").compile_insert(QueryState(table='"t"'), rows, chunk_size=5000)
    assert len(pgsql.params) == 1500
