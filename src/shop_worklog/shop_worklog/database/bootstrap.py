from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from ..core.enums import Role
from ..users.repository import UserRepository

logger = logging.getLogger(__name__)

DEFAULT_MECHANICS = (
    "Angel Ramos",
    "Fasso Yolanola",
    "Hecktor Hernandez",
    "Joe D.",
    "Jorge Martinez",
    "Jose Rivas",
    "Jose Tenesaca",
    "Justin Tenesaca",
    "LuzFazo",
    "Marco Naula",
    "Marcial Rosendo",
    "Parkash Singh",
    "Ronaldo Guatemala",
    "Selvin Telles",
    "Shirlene Rawana",
    "Wilmer Guanuchi",
)
FIRST_MECHANIC_PIN = 1001
DEFAULT_ADMINS = (("Admin 1", "9991"), ("Admin 2", "9992"), ("Admin 3", "9993"))


@dataclass(frozen=True)
class DBTarget:
    host: str
    port: int
    user: str
    password: str
    database: str


def _as_target(db_config: dict) -> DBTarget:
    return DBTarget(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "shop_worklog")),
    )


def _connect(target: DBTarget, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    target = _as_target(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)

    sql = _strip_comments(_strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8")))

    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()


def ensure_default_users(users: UserRepository) -> bool:
    """Seed the shop's mechanics and admins, only while no admin exists yet.

    Returns True when seeding happened.
    """
    if users.has_admin():
        return False

    seeds = [
        (name, str(FIRST_MECHANIC_PIN + i), Role.MECHANIC)
        for i, name in enumerate(sorted(DEFAULT_MECHANICS, key=str.lower))
    ]
    seeds += [(name, pin, Role.ADMIN) for name, pin in DEFAULT_ADMINS]

    for name, pin, role in seeds:
        if users.get_by_name(name):
            continue
        users.create_user(name=name, role=role, pin_hash=generate_password_hash(pin))

    logger.info("Seeded default admins + mechanics")
    return True
