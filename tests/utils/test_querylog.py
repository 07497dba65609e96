import threading

from polysql.utils import QueryLog


def test_entries_are_grouped_by_connection():
    log = QueryLog()
    log.add("SELECT  *\n FROM t", [1], connection="primary", elapsed_ms=1.5)
    log.add("SELECT 2", connection="replica")

    (entry,) = log.get("primary")
    assert entry.sql == "SELECT * FROM t"
    assert entry.params == (1,)
    assert entry.elapsed_ms == 1.5
    assert log.connections() == ["primary", "replica"]
    assert log.count("replica") == 1
    assert log.get("missing") == []


def test_params_are_redacted_unless_disabled():
    redacted = QueryLog()
    redacted.add("UPDATE t SET token = ?", ["secret-value"])
    assert redacted.get()[0].params == ("***",)

    raw = QueryLog(redact=False)
    raw.add("UPDATE t SET token = ?", ["secret-value"])
    assert raw.get()[0].params == ("secret-value",)


def test_max_entries_keeps_newest():
    log = QueryLog(max_entries=2)
    for number in range(4):
        log.add(f"SELECT {number}")
    assert [entry.sql for entry in log.get()] == ["SELECT 2", "SELECT 3"]


def test_clear_one_or_all():
    log = QueryLog()
    log.add("SELECT 1", connection="a")
    log.add("SELECT 1", connection="b")
    log.clear("a")
    assert log.connections() == ["b"]
    log.clear()
    assert log.connections() == []


def test_concurrent_appends_are_not_lost():
    log = QueryLog()

    def worker():
        for _ in range(200):
            log.add("SELECT 1")

    threads = [threading.Thread(target=worker) for _ in range(5)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert log.count() == 1000
