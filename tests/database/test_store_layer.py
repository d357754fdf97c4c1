from __future__ import annotations

from pathlib import Path

import mysql.connector
import pytest

from src.school_attendance.school_attendance.core.exceptions import StoreReadError, StoreWriteError
from src.school_attendance.school_attendance.database.bootstrap import _strip_create_db_and_use, iter_sql_statements
from src.school_attendance.school_attendance.database.connection import DBConfig, is_store_configured
from src.school_attendance.school_attendance.database.mysql_base import dump_json, load_json
from src.school_attendance.school_attendance.database.mysql_document_store import MySQLDocumentStore

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


@pytest.mark.parametrize(
    "config, expected",
    [
        ({"host": "localhost", "database": "absensi_db"}, True),
        ({"host": "ISI_DISINI", "database": "absensi_db"}, False),
        ({"host": "localhost", "database": ""}, False),
        ({}, False),
        (None, False),
    ],
)
def test_is_store_configured(config, expected):
    assert is_store_configured(config) is expected


def test_db_config_defaults_port():
    assert DBConfig.from_dict({"host": " db ", "database": "x"}).port == 3306
    assert DBConfig.from_dict({"host": " db ", "database": "x"}).host == "db"


def test_schema_statements_without_database_switch():
    sql = _strip_create_db_and_use(SCHEMA.read_text(encoding="utf-8"))
    statements = list(iter_sql_statements(sql))

    assert len(statements) == 1
    assert statements[0].startswith("CREATE TABLE IF NOT EXISTS documents")
    assert "USE " not in sql


def test_iter_sql_statements_ignores_semicolons_in_quotes():
    sql = "-- comment\nINSERT INTO t VALUES ('a;b');\nSELECT 1"
    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", "SELECT 1"]


def test_json_helpers():
    assert load_json(None) == {}
    assert load_json(b'{"name": "Andi"}') == {"name": "Andi"}
    assert load_json({"a": 1}) == {"a": 1}
    assert dump_json({"name": "Éka", "b": 1, "a": 2}) == '{"a": 2, "b": 1, "name": "Éka"}'


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self._result = []

    def execute(self, sql, params=()):
        self._conn.statements.append((" ".join(sql.split()), params))
        if self._conn.fail_on and self._conn.fail_on in sql:
            raise mysql.connector.Error("Lost connection to MySQL server")
        if sql.lstrip().startswith("SELECT doc_id"):
            self._result = [{"doc_id": "s1", "data": '{"name": "Andi"}'}]
        elif "GROUP BY collection" in sql:
            self._result = [{"collection": "students", "n": self._conn.count, "changed_at": None}]
        else:
            self._result = []

    def fetchone(self):
        return self._result[0] if self._result else None

    def fetchall(self):
        return list(self._result)

    def close(self):
        pass


class FakeConnection:
    def __init__(self):
        self.statements = []
        self.commits = 0
        self.rollbacks = 0
        self.fail_on = ""
        self.count = 1

    def cursor(self, dictionary=True):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        pass


class FakeFactory:
    def __init__(self):
        self.conn = FakeConnection()

    def connect(self):
        return self.conn


def test_mysql_store_batch_is_one_transaction():
    factory = FakeFactory()
    store = MySQLDocumentStore(factory)

    store.batch().set("students", "s1", {"name": "Andi"}).delete("attendance", "s1-2026-10-19").commit()

    kinds = [sql.split()[0] for sql, _ in factory.conn.statements]
    assert kinds == ["INSERT", "DELETE"]
    assert factory.conn.commits == 1


def test_mysql_store_wraps_driver_errors():
    factory = FakeFactory()
    factory.conn.fail_on = "DELETE"
    store = MySQLDocumentStore(factory)

    with pytest.raises(StoreWriteError) as exc:
        store.batch().set("students", "s1", {"name": "Andi"}).delete("students", "s2").commit()

    assert exc.value.retryable is True
    assert factory.conn.rollbacks == 1
    assert factory.conn.commits == 0


def test_mysql_store_poll_notifies_changed_collections():
    factory = FakeFactory()
    store = MySQLDocumentStore(factory)
    seen = []
    store.subscribe("students", lambda snaps: seen.append([s.doc_id for s in snaps]))

    assert store.poll() == ["students"]
    assert store.poll() == []
    factory.conn.count = 2
    assert store.poll() == ["students"]
    assert seen == [["s1"], ["s1"], ["s1"]]


def test_mysql_store_poll_failure_keeps_replica(caplog):
    factory = FakeFactory()
    store = MySQLDocumentStore(factory)
    store.subscribe("students", lambda snaps: None)
    factory.conn.fail_on = "GROUP BY"

    assert store.poll() == []
    assert "Change poll failed" in caplog.text


def test_mysql_store_read_errors_are_wrapped():
    factory = FakeFactory()
    factory.conn.fail_on = "SELECT"
    store = MySQLDocumentStore(factory)

    with pytest.raises(StoreReadError) as exc:
        store.list("students")

    assert exc.value.retryable is True


def test_mysql_store_commit_survives_failed_listener_reload(caplog):
    factory = FakeFactory()
    store = MySQLDocumentStore(factory)
    seen = []
    store.subscribe("students", lambda snaps: seen.append([s.doc_id for s in snaps]))
    factory.conn.fail_on = "SELECT doc_id"
    commits = factory.conn.commits

    store.set("students", "s2", {"name": "Budi"})

    assert factory.conn.commits == commits + 1
    assert seen == [["s1"]]
    assert "reloading listeners failed" in caplog.text

    factory.conn.fail_on = ""
    assert store.poll() == ["students"]
    assert seen == [["s1"], ["s1"]]
