from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note: name lookups are case-insensitive.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[User]:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        """All users ordered by name."""

        raise NotImplementedError

    def has_admin(self) -> bool:
        raise NotImplementedError

    def create_user(self, *, name: str, role: Role, pin_hash: str = "") -> int:
        raise NotImplementedError

    def set_pin_hash(self, user_id: int, pin_hash: str) -> bool:
        raise NotImplementedError

    def clear_pin(self, name: str) -> bool:
        raise NotImplementedError

    def rename(self, old_name: str, new_name: str) -> bool:
        raise NotImplementedError

    def delete_by_name(self, name: str) -> bool:
        raise NotImplementedError
