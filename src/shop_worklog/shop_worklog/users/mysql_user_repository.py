from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository


def _to_user(row: dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        name=row["name"],
        pin_hash=row.get("pin_hash") or "",
        role=Role(row["role"]),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id, name, pin_hash, role FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_name(self, name: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id, name, pin_hash, role FROM users WHERE LOWER(name)=LOWER(%s)",
                (name,),
            )
            row = fetchone(cur)
            return _to_user(row) if row else None

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id, name, pin_hash, role FROM users ORDER BY name ASC")
            return [_to_user(r) for r in fetchall(cur)]

    def has_admin(self) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id FROM users WHERE role=%s LIMIT 1", (Role.ADMIN.value,))
            return fetchone(cur) is not None

    def create_user(self, *, name: str, role: Role, pin_hash: str = "") -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO users(name, pin_hash, role) VALUES(%s,%s,%s)",
                (name, pin_hash, role.value),
            )
            return int(cur.lastrowid)

    def set_pin_hash(self, user_id: int, pin_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET pin_hash=%s WHERE user_id=%s", (pin_hash, user_id))
            return cur.rowcount > 0

    def clear_pin(self, name: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET pin_hash='' WHERE name=%s", (name,))
            return cur.rowcount > 0

    def rename(self, old_name: str, new_name: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET name=%s WHERE name=%s", (new_name, old_name))
            return cur.rowcount > 0

    def delete_by_name(self, name: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE name=%s", (name,))
            return cur.rowcount > 0
