from __future__ import annotations

from datetime import datetime
from typing import Optional

import pytest

from src.shop_worklog.shop_worklog.container import build_services
from src.shop_worklog.shop_worklog.core.enums import Role
from src.shop_worklog.shop_worklog.entries.codec import decode_list, encode_list
from src.shop_worklog.shop_worklog.entries.model import Entry
from src.shop_worklog.shop_worklog.users.model import User


class InMemoryEntries:
    """Stores rows the way the table does: photos/parts as JSON text."""

    def __init__(self):
        self.rows: dict[str, dict] = {}

    def save(self, entry: Entry) -> None:
        self.rows[entry.entry_id] = {
            **entry.__dict__,
            "photos": encode_list(entry.photos),
            "parts": encode_list(entry.parts),
        }

    def _load(self, row: dict) -> Entry:
        return Entry(**{**row, "photos": decode_list(row["photos"]), "parts": decode_list(row["parts"])})

    def get_by_id(self, entry_id: str) -> Optional[Entry]:
        row = self.rows.get(entry_id)
        return self._load(row) if row else None

    def delete(self, entry_id: str) -> bool:
        return self.rows.pop(entry_id, None) is not None

    def list_all(self):
        items = [self._load(r) for r in self.rows.values()]
        items.sort(key=lambda e: e.date, reverse=True)
        return items

    def list_between(self, *, start: str, end: str):
        items = [self._load(r) for r in self.rows.values() if start <= r["date"] <= end]
        items.sort(key=lambda e: (e.date, e.entry_id))
        return items


class InMemoryUsers:
    def __init__(self):
        self.by_id: dict[int, User] = {}
        self._id = 0

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.by_id.get(user_id)

    def get_by_name(self, name: str) -> Optional[User]:
        for u in self.by_id.values():
            if u.name.lower() == name.lower():
                return u
        return None

    def list_all(self):
        return sorted(self.by_id.values(), key=lambda u: u.name.lower())

    def has_admin(self) -> bool:
        return any(u.role == Role.ADMIN for u in self.by_id.values())

    def create_user(self, *, name: str, role: Role, pin_hash: str = "") -> int:
        self._id += 1
        self.by_id[self._id] = User(user_id=self._id, name=name, pin_hash=pin_hash, role=role)
        return self._id

    def _replace(self, user: User, **changes) -> None:
        self.by_id[user.user_id] = User(**{**user.__dict__, **changes})

    def set_pin_hash(self, user_id: int, pin_hash: str) -> bool:
        user = self.by_id.get(user_id)
        if not user:
            return False
        self._replace(user, pin_hash=pin_hash)
        return True

    def clear_pin(self, name: str) -> bool:
        user = self.get_by_name(name)
        if not user:
            return False
        self._replace(user, pin_hash="")
        return True

    def rename(self, old_name: str, new_name: str) -> bool:
        user = self.get_by_name(old_name)
        if not user:
            return False
        self._replace(user, name=new_name)
        return True

    def delete_by_name(self, name: str) -> bool:
        user = self.get_by_name(name)
        if not user:
            return False
        del self.by_id[user.user_id]
        return True


@pytest.fixture
def fixed_now() -> datetime:
    # Thursday
    return datetime(2024, 3, 14, 10, 0, 0)


@pytest.fixture
def entries_repo() -> InMemoryEntries:
    return InMemoryEntries()


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def container(entries_repo, users_repo):
    return build_services(entries_repo=entries_repo, users_repo=users_repo)
