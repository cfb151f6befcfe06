from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a shop user.

    Note: plain data object (no DB access). ``pin_hash`` is empty until the
    user claims a PIN on first login.
    """

    user_id: int
    name: str
    pin_hash: str
    role: Role

    @property
    def pin_set(self) -> bool:
        return bool(self.pin_hash)


@dataclass(frozen=True)
class UserSummary:
    """What the API returns for a user (never the PIN)."""

    user_id: int
    name: str
    role: Role
    pin_set: bool

    @classmethod
    def of(cls, user: User) -> "UserSummary":
        return cls(user_id=user.user_id, name=user.name, role=user.role, pin_set=user.pin_set)

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "role": self.role.value,
            "pinSet": self.pin_set,
        }
