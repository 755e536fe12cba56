from __future__ import annotations

import threading

import pytest
from sqlalchemy import update

from coinboard.core.errors import EmailDuplicationError, UserNotFoundError
from coinboard.core.security import verify_password
from coinboard.db import models
from coinboard.repositories.sql_repository import SQLRepository, unit_of_work
from coinboard.services.user_service import UserService


def test_register_creates_active_user_with_default_role(temp_db):
    svc = UserService()
    user = svc.register("a@x.com", "A", "p")

    assert user.id is not None
    assert user.email == "a@x.com"
    assert user.deleted is False
    assert user.password_hash != "p"
    assert verify_password("p", user.password_hash)
    assert [role.name for role in svc.roles(user.id)] == ["USER"]


def test_register_twice_with_same_email_fails(temp_db):
    svc = UserService()
    svc.register("a@x.com", "A", "p")

    with pytest.raises(EmailDuplicationError) as excinfo:
        svc.register("a@x.com", "Other", "q")
    assert excinfo.value.email == "a@x.com"


def test_email_match_is_exact(temp_db):
    svc = UserService()
    svc.register("a@x.com", "A", "p")
    assert svc.register("A@x.com", "B", "p").email == "A@x.com"


def test_racing_registration_is_caught_by_unique_index(temp_db, monkeypatch):
    svc = UserService()
    svc.register("a@x.com", "A", "p")
    # Simulate a concurrent transaction that checked before the first insert committed.
    monkeypatch.setattr(SQLRepository, "exists_active_email", lambda self, email: False)

    with pytest.raises(EmailDuplicationError):
        svc.register("a@x.com", "B", "p")


def test_email_is_reusable_after_soft_delete(temp_db):
    svc = UserService()
    first = svc.register("a@x.com", "A", "p")
    svc.soft_delete(first.id)

    second = svc.register("a@x.com", "A2", "p2")
    assert second.id != first.id


def test_modify_replaces_name_and_password_only(temp_db):
    svc = UserService()
    user = svc.register("a@x.com", "A", "p")

    updated = svc.modify(user.id, "B", "new-pass")

    assert updated.id == user.id
    assert updated.email == "a@x.com"
    assert updated.name == "B"
    assert verify_password("new-pass", updated.password_hash)
    assert not verify_password("p", updated.password_hash)
    assert svc.get(user.id).name == "B"


def test_modify_unknown_user_fails(temp_db):
    with pytest.raises(UserNotFoundError):
        UserService().modify(999, "B", "p")


def test_modify_deleted_user_fails(temp_db):
    svc = UserService()
    user = svc.register("a@x.com", "A", "p")
    svc.soft_delete(user.id)

    with pytest.raises(UserNotFoundError):
        svc.modify(user.id, "B", "p")


def test_soft_delete_marks_user_and_second_delete_fails(temp_db):
    svc = UserService()
    user = svc.register("a@x.com", "A", "p")

    deleted = svc.soft_delete(user.id)
    assert deleted.deleted is True
    assert deleted.deleted_at is not None

    with pytest.raises(UserNotFoundError):
        svc.soft_delete(user.id)

    # The row survives with its flag set.
    with unit_of_work() as repo:
        stored = repo.get_user(user.id)
    assert stored is not None
    assert stored.deleted is True


def test_soft_delete_unknown_user_fails(temp_db):
    with pytest.raises(UserNotFoundError):
        UserService().soft_delete(12345)


def _user_soft_deleted(user_id):
    return update(models.User).where(models.User.id == user_id).values(deleted=True)


def test_soft_delete_of_user_deleted_mid_transaction_is_not_found(temp_db, write_after_lookup):
    svc = UserService()
    user = svc.register("a@x.com", "A", "p")
    write_after_lookup("get_user", _user_soft_deleted)

    with pytest.raises(UserNotFoundError):
        svc.soft_delete(user.id)


def test_modify_of_user_deleted_mid_transaction_is_not_found(temp_db, write_after_lookup):
    svc = UserService()
    user = svc.register("a@x.com", "A", "p")
    write_after_lookup("get_user", _user_soft_deleted)

    with pytest.raises(UserNotFoundError):
        svc.modify(user.id, "B", "q")


def test_overlapping_soft_deletes_succeed_once(temp_db):
    svc = UserService()
    user = svc.register("a@x.com", "A", "p")
    start = threading.Barrier(2)
    outcomes = []

    def soft_delete():
        start.wait()
        try:
            svc.soft_delete(user.id)
            outcomes.append("deleted")
        except UserNotFoundError:
            outcomes.append("not found")

    threads = [threading.Thread(target=soft_delete) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(outcomes) == ["deleted", "not found"]
