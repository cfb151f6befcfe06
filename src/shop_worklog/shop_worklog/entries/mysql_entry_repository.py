from __future__ import annotations

from typing import Any, Optional, Sequence

from ..common.numbers import to_number
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .codec import decode_list, encode_list
from .model import Entry
from .repository import EntryRepository

_COLUMNS = """
    id, entry_date, mechanic, bus, service_type, odometer, labor_hours, notes,
    photos, parts, start_time, end_time, duration_hours
"""


def _to_entry(r: dict[str, Any]) -> Entry:
    return Entry(
        entry_id=r["id"],
        date=r["entry_date"],
        mechanic=r.get("mechanic"),
        bus=r.get("bus"),
        service_type=r.get("service_type"),
        odometer=r.get("odometer"),
        labor_hours=r.get("labor_hours") or "",
        notes=r.get("notes"),
        photos=decode_list(r.get("photos")),
        parts=decode_list(r.get("parts")),
        start_time=r.get("start_time"),
        end_time=r.get("end_time"),
        duration_hours=to_number(r.get("duration_hours")),
    )


class MySQLEntryRepository(EntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, entry: Entry) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                REPLACE INTO entries({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    entry.entry_id,
                    entry.date,
                    entry.mechanic,
                    entry.bus,
                    entry.service_type,
                    entry.odometer,
                    entry.labor_hours,
                    entry.notes,
                    encode_list(entry.photos),
                    encode_list(entry.parts),
                    entry.start_time,
                    entry.end_time,
                    float(entry.duration_hours),
                ),
            )

    def get_by_id(self, entry_id: str) -> Optional[Entry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM entries WHERE id=%s", (entry_id,))
            r = fetchone(cur)
            if not r:
                return None
            return _to_entry(r)

    def delete(self, entry_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM entries WHERE id=%s", (entry_id,))
            return cur.rowcount > 0

    def list_all(self) -> Sequence[Entry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM entries ORDER BY entry_date DESC")
            return [_to_entry(r) for r in fetchall(cur)]

    def list_between(self, *, start: str, end: str) -> Sequence[Entry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM entries
                WHERE entry_date >= %s AND entry_date <= %s
                ORDER BY entry_date ASC, id ASC
                """,
                (start, end),
            )
            return [_to_entry(r) for r in fetchall(cur)]
