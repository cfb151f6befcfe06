from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .database.connection import DBConfig, DatabaseConnection
from .entries.mysql_entry_repository import MySQLEntryRepository
from .entries.repository import EntryRepository
from .entries.service import EntryService
from .reports.service import WeeklyReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    entries_repo: EntryRepository
    users_repo: UserRepository

    entry_service: EntryService
    weekly_report_service: WeeklyReportService
    auth_service: AuthService
    user_service: UserService


def build_services(
    *,
    entries_repo: EntryRepository,
    users_repo: UserRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    return Container(
        conn=conn,
        entries_repo=entries_repo,
        users_repo=users_repo,
        entry_service=EntryService(entries_repo),
        weekly_report_service=WeeklyReportService(entries_repo),
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
    )


def build_container(*, db_config: dict) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    return build_services(
        entries_repo=MySQLEntryRepository(conn),
        users_repo=MySQLUserRepository(conn),
        conn=conn,
    )
