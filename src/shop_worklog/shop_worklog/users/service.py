from __future__ import annotations

import logging
from typing import Any

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_non_empty, require_pin, require_role
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from .model import UserSummary
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: PIN login, claiming the PIN on first use."""

    def __init__(self, users: UserRepository):
        self._users = users

    def login(self, name: Any, pin: Any) -> UserSummary:
        if name is None or not str(name).strip() or pin is None or str(pin) == "":
            raise ValidationError("name + 4-digit pin required")
        pin = require_pin(pin)

        user = self._users.get_by_name(str(name).strip())
        if not user:
            raise NotFoundError("user not found")

        if not user.pin_set:
            self._users.set_pin_hash(user.user_id, generate_password_hash(pin))
            claimed = self._users.get_by_id(user.user_id)
            if not claimed:
                raise NotFoundError("user not found")
            logger.info("User %s claimed a PIN", claimed.name)
            return UserSummary.of(claimed)

        try:
            ok = check_password_hash(user.pin_hash, pin)
        except ValueError:
            # e.g. a legacy plain-text PIN in the column
            ok = False

        if not ok:
            raise AuthenticationError("wrong pin")
        return UserSummary.of(user)


class UserService:
    """Use case: manage users (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self) -> list[UserSummary]:
        return [UserSummary.of(u) for u in self._users.list_all()]

    def create(self, *, name: Any, role: Any) -> UserSummary:
        if not name or not role:
            raise ValidationError("name & role required")
        name = require_non_empty(name, "name")
        role = require_role(role)

        if self._users.get_by_name(name):
            raise ConflictError(f"User {name!r} already exists")

        user_id = self._users.create_user(name=name, role=role)
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("user not found")
        logger.info("Created %s user %s", role.value, name)
        return UserSummary.of(user)

    def rename(self, *, old_name: Any, new_name: Any) -> None:
        if not old_name or not new_name:
            raise ValidationError("oldName + newName required")
        old_name = require_non_empty(old_name, "oldName")
        new_name = require_non_empty(new_name, "newName")

        current = self._users.get_by_name(old_name)
        if not current:
            return

        existing = self._users.get_by_name(new_name)
        if existing and existing.user_id != current.user_id:
            raise ConflictError(f"User {new_name!r} already exists")

        self._users.rename(current.name, new_name)

    def reset_pin(self, *, name: Any) -> None:
        if name and self._users.clear_pin(str(name)):
            logger.info("Reset PIN for %s", name)

    def delete(self, *, name: Any) -> None:
        if name and self._users.delete_by_name(str(name)):
            logger.info("Deleted user %s", name)
