from __future__ import annotations

import json
from pathlib import Path

import mysql.connector
import pytest

from src.shop_worklog.shop_worklog.core.exceptions import ConflictError, StorageError
from src.shop_worklog.shop_worklog.entries.model import Entry
from src.shop_worklog.shop_worklog.entries.mysql_entry_repository import MySQLEntryRepository


class FakeCursor:
    def __init__(self, rows=None, error=None):
        self.rows = rows or []
        self.error = error
        self.executed = []
        self.rowcount = 0
        self.closed = False

    def execute(self, sql, params=None):
        if self.error:
            raise self.error
        self.executed.append((" ".join(sql.split()), params))
        self.rowcount = len(self.rows)

    def fetchone(self):
        return self.rows[0] if self.rows else None

    def fetchall(self):
        return list(self.rows)

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, cursor):
        self.cursor = cursor
        self.connections = []

    def connect(self):
        conn = FakeConnection(self.cursor)
        self.connections.append(conn)
        return conn


def _row(**overrides):
    row = {
        "id": "wo-1",
        "entry_date": "2024-03-12T08:00:00.000Z",
        "mechanic": "A",
        "bus": "B-1",
        "service_type": "Oil",
        "odometer": "1000",
        "labor_hours": "",
        "notes": None,
        "photos": json.dumps(["a.jpg"]),
        "parts": json.dumps([{"desc": "Oil", "qty": 5, "unit": 8}]),
        "start_time": "2024-03-12T08:00:00.000Z",
        "end_time": "2024-03-12T09:30:00.000Z",
        "duration_hours": 1.5,
    }
    row.update(overrides)
    return row


def test_save_is_single_replace_statement():
    cur = FakeCursor()
    factory = FakeFactory(cur)
    repo = MySQLEntryRepository(factory)

    repo.save(Entry(entry_id="wo-1", date="2024-03-12T08:00:00.000Z", photos=["x"], parts=[{"qty": 1}]))

    assert len(cur.executed) == 1
    sql, params = cur.executed[0]
    assert sql.startswith("REPLACE INTO entries(")
    assert params[0] == "wo-1"
    assert params[8] == '["x"]'
    assert params[9] == '[{"qty": 1}]'
    assert factory.connections[0].committed
    assert factory.connections[0].closed


def test_rows_decode_into_entries():
    repo = MySQLEntryRepository(FakeFactory(FakeCursor(rows=[_row()])))

    entry = repo.get_by_id("wo-1")

    assert entry.date == "2024-03-12T08:00:00.000Z"
    assert entry.photos == ["a.jpg"]
    assert entry.parts == [{"desc": "Oil", "qty": 5, "unit": 8}]
    assert entry.duration_hours == 1.5


def test_malformed_lists_do_not_fail_the_read():
    rows = [_row(photos="{broken", parts="not json"), _row(id="wo-2", photos=None, parts=None)]
    entries = MySQLEntryRepository(FakeFactory(FakeCursor(rows=rows))).list_all()

    assert [e.entry_id for e in entries] == ["wo-1", "wo-2"]
    assert all(e.photos == [] and e.parts == [] for e in entries)


def test_list_between_passes_bounds_and_orders_ascending():
    cur = FakeCursor(rows=[_row()])
    MySQLEntryRepository(FakeFactory(cur)).list_between(start="S", end="E")

    sql, params = cur.executed[0]
    assert "entry_date >= %s AND entry_date <= %s" in sql
    assert "ORDER BY entry_date ASC" in sql
    assert params == ("S", "E")


def test_delete_reports_whether_a_row_went_away():
    assert MySQLEntryRepository(FakeFactory(FakeCursor(rows=[]))).delete("nope") is False


def test_driver_errors_become_storage_errors():
    cur = FakeCursor(error=mysql.connector.errors.OperationalError(msg="Lost connection"))
    factory = FakeFactory(cur)

    with pytest.raises(StorageError, match="Lost connection"):
        MySQLEntryRepository(factory).list_all()

    assert factory.connections[0].rolled_back
    assert factory.connections[0].closed


def test_integrity_errors_become_conflicts():
    cur = FakeCursor(error=mysql.connector.errors.IntegrityError(msg="Duplicate entry"))

    with pytest.raises(ConflictError):
        MySQLEntryRepository(FakeFactory(cur)).save(Entry(entry_id="x", date="d"))


def _entries_columns() -> dict[str, str]:
    schema = (Path(__file__).resolve().parents[2] / "database" / "schema.sql").read_text(encoding="utf-8")
    ddl = schema[schema.index("CREATE TABLE IF NOT EXISTS entries (") :]
    body = ddl[ddl.index("(") + 1 : ddl.index(") ENGINE")]
    columns = {}
    for line in body.splitlines():
        line = line.strip().rstrip(",")
        if line and not line.startswith(("KEY", "--")):
            name, definition = line.split(None, 1)
            columns[name] = definition
    return columns


def test_entry_ids_compare_byte_for_byte():
    # "wo-1" and "WO-1" must be two rows, so REPLACE INTO never overwrites the other one.
    id_column = _entries_columns()["id"]
    assert "COLLATE utf8mb4_bin" in id_column
    assert "PRIMARY KEY" in id_column


@pytest.mark.parametrize("column", ["bus", "service_type", "odometer", "labor_hours", "notes"])
def test_free_text_columns_are_unbounded(column):
    assert _entries_columns()[column].startswith("TEXT")
