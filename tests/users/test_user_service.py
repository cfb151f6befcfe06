from __future__ import annotations

import pytest
from werkzeug.security import check_password_hash

from src.shop_worklog.shop_worklog.core.enums import Role
from src.shop_worklog.shop_worklog.core.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.shop_worklog.shop_worklog.database.bootstrap import DEFAULT_MECHANICS, ensure_default_users
from src.shop_worklog.shop_worklog.users.service import AuthService, UserService


def test_first_login_claims_pin(users_repo):
    user_id = users_repo.create_user(name="Jose Rivas", role=Role.MECHANIC)

    user = AuthService(users_repo).login("jose rivas", "4321")

    assert user.to_dict() == {"id": user_id, "name": "Jose Rivas", "role": "mechanic", "pinSet": True}
    assert check_password_hash(users_repo.get_by_id(user_id).pin_hash, "4321")


def test_claimed_pin_is_verified_afterwards(users_repo):
    users_repo.create_user(name="Jose Rivas", role=Role.MECHANIC)
    auth = AuthService(users_repo)
    auth.login("Jose Rivas", "4321")

    assert auth.login("JOSE RIVAS", "4321").name == "Jose Rivas"
    with pytest.raises(AuthenticationError, match="wrong pin"):
        auth.login("Jose Rivas", "1234")


@pytest.mark.parametrize("name, pin", [("", "1234"), ("A", ""), ("A", "123"), ("A", "12345"), (None, None)])
def test_login_requires_name_and_four_char_pin(users_repo, name, pin):
    with pytest.raises(ValidationError):
        AuthService(users_repo).login(name, pin)


def test_login_unknown_user(users_repo):
    with pytest.raises(NotFoundError):
        AuthService(users_repo).login("Nobody", "1234")


def test_plaintext_legacy_pin_never_matches(users_repo):
    users_repo.create_user(name="Old", role=Role.MECHANIC, pin_hash="1001")
    with pytest.raises(AuthenticationError):
        AuthService(users_repo).login("Old", "1001")


def test_list_users_reports_pin_set(users_repo):
    svc = UserService(users_repo)
    svc.create(name="  Zed ", role="mechanic")
    svc.create(name="Amy", role="admin")
    AuthService(users_repo).login("Zed", "0000")

    assert [u.to_dict() for u in svc.list_users()] == [
        {"id": 2, "name": "Amy", "role": "admin", "pinSet": False},
        {"id": 1, "name": "Zed", "role": "mechanic", "pinSet": True},
    ]


def test_create_validates_and_rejects_duplicates(users_repo):
    svc = UserService(users_repo)
    svc.create(name="Amy", role="mechanic")

    with pytest.raises(ValidationError):
        svc.create(name="", role="mechanic")
    with pytest.raises(ValidationError):
        svc.create(name="Bob", role="janitor")
    with pytest.raises(ConflictError):
        svc.create(name="AMY", role="admin")


def test_rename(users_repo):
    svc = UserService(users_repo)
    svc.create(name="Amy", role="mechanic")
    svc.create(name="Bob", role="mechanic")

    with pytest.raises(ConflictError):
        svc.rename(old_name="Amy", new_name="bob")
    with pytest.raises(ValidationError):
        svc.rename(old_name="Amy", new_name="")

    svc.rename(old_name="Amy", new_name=" Amelia ")
    svc.rename(old_name="Bob", new_name="BOB")
    svc.rename(old_name="Ghost", new_name="Casper")

    assert [u.name for u in svc.list_users()] == ["Amelia", "BOB"]


def test_reset_pin_and_delete(users_repo):
    svc = UserService(users_repo)
    svc.create(name="Amy", role="mechanic")
    AuthService(users_repo).login("Amy", "1111")

    svc.reset_pin(name="Amy")
    assert svc.list_users()[0].pin_set is False

    svc.delete(name="Amy")
    svc.delete(name="Amy")
    assert svc.list_users() == []


def test_default_users_seed_only_without_admin(users_repo):
    assert ensure_default_users(users_repo) is True
    users = users_repo.list_all()
    assert len(users) == len(DEFAULT_MECHANICS) + 3
    assert sum(1 for u in users if u.role == Role.ADMIN) == 3

    assert AuthService(users_repo).login("Angel Ramos", "1001").role == Role.MECHANIC
    assert AuthService(users_repo).login("Admin 1", "9991").role == Role.ADMIN

    assert ensure_default_users(users_repo) is False
