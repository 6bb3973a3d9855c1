"""Tests for UserService against the transactional SQLite session."""

from __future__ import annotations

from uuid import uuid4

import bcrypt
import pytest
from accounts.models import User, UserProfile
from accounts.repositories import RepositoryError, UserRepository
from accounts.security import PasswordHasher
from accounts.services import (
    ConflictError,
    InvalidProfileError,
    NotFoundError,
    PersistenceError,
    UserCreateIn,
    UserListItemOut,
    UserPublicOut,
    UserService,
    UserUpdateIn,
)
from sqlalchemy import func, select

from tests.factories.user import UserFactory


def _create_in(**overrides) -> UserCreateIn:
    fields = {
        "email": "mock@mail.com",
        "name": "Mock User",
        "username": "mock",
        "position": "Analyst",
        "profile": UserProfile.STANDARD,
        "password": "mock123!",
        "cpf": "056.065.766-86",
    }
    fields.update(overrides)
    return UserCreateIn(**fields)


def _count(session) -> int:
    return session.execute(select(func.count()).select_from(User)).scalar_one()


@pytest.fixture()
def service(session):
    return UserService(hasher=PasswordHasher(rounds=4))


class TestCreateUser:
    def test_returns_public_view(self, service):
        out = service.create_user(_create_in())
        assert out == UserPublicOut(
            username="mock",
            email="mock@mail.com",
            name="Mock User",
            position="Analyst",
            profile=UserProfile.STANDARD,
            cpf="056.065.766-86",
        )
        assert not hasattr(out, "id")
        assert not hasattr(out, "password")

    def test_stores_salted_hash_and_token(self, service, session):
        service.create_user(_create_in())
        stored = session.execute(select(User)).scalar_one()
        assert stored.password != "mock123!"
        assert stored.password.startswith(stored.salt[:29])
        assert bcrypt.checkpw(b"mock123!", stored.password.encode())
        assert len(stored.confirmation_token) == 64
        assert stored.id is not None

    def test_same_password_different_salts(self, service, session):
        service.create_user(_create_in())
        service.create_user(_create_in(email="b@mail.com", username="b", cpf="111.444.777-35"))
        first, second = session.execute(select(User)).scalars().all()
        assert first.salt != second.salt
        assert first.password != second.password
        assert first.confirmation_token != second.confirmation_token

    def test_second_create_with_same_data_conflicts_on_cpf(self, service, session):
        service.create_user(_create_in())
        with pytest.raises(ConflictError) as excinfo:
            service.create_user(_create_in())
        assert excinfo.value.field == "cpf"
        assert excinfo.value.message == "CPF already in use"
        assert _count(session) == 1

    @pytest.mark.parametrize(
        "overrides, field, message",
        [
            (
                {"cpf": "111.444.777-35"},
                "username",
                "Username already in use",
            ),
            (
                {"cpf": "111.444.777-35", "username": "other"},
                "email",
                "Email address already in use",
            ),
        ],
    )
    def test_conflict_reports_field(self, service, overrides, field, message):
        service.create_user(_create_in())
        with pytest.raises(ConflictError) as excinfo:
            service.create_user(_create_in(**overrides))
        assert excinfo.value.field == field
        assert excinfo.value.message == message

    def test_unknown_profile_rejected_before_hashing(self, session):
        hasher = PasswordHasher(rounds=4)
        calls = []
        service = UserService(
            hasher=hasher,
            token_factory=lambda: calls.append("token") or "t" * 64,
        )
        with pytest.raises(InvalidProfileError):
            service.create_user(_create_in(profile="ROOT"))
        assert calls == []
        assert _count(session) == 0

    def test_profile_given_by_name(self, service):
        assert service.create_user(_create_in(profile="admin")).profile is UserProfile.ADMIN

    def test_injected_token_factory(self, session):
        service = UserService(hasher=PasswordHasher(rounds=4), token_factory=lambda: "f" * 64)
        service.create_user(_create_in())
        assert session.execute(select(User.confirmation_token)).scalar_one() == "f" * 64

    def test_storage_failure_is_persistence_error(self, service, session, monkeypatch):
        def broken_add(self, instance):
            raise RepositoryError("database is down")

        monkeypatch.setattr(UserRepository, "add", broken_add)
        with pytest.raises(PersistenceError) as excinfo:
            service.create_user(_create_in())
        assert excinfo.value.message == "Error saving user to the database"


class TestFindUsers:
    def test_lists_every_user_with_ids(self, service):
        users = UserFactory.create_batch(2)
        items = service.find_users()
        assert all(isinstance(item, UserListItemOut) for item in items)
        assert {item.id for item in items} == {u.id for u in users}

    def test_single_user_after_create(self, service):
        service.create_user(_create_in())
        (item,) = service.find_users()
        assert item.email == "mock@mail.com"
        assert item.cpf == "056.065.766-86"

    def test_empty_store_is_not_found(self, service):
        with pytest.raises(NotFoundError) as excinfo:
            service.find_users()
        assert excinfo.value.message == "No users registered"


class TestFindUserById:
    def test_returns_public_view(self, service):
        user = UserFactory(username="alice")
        out = service.find_user_by_id(user.id)
        assert out.username == "alice"
        assert not hasattr(out, "id")

    def test_accepts_string_ids(self, service):
        user = UserFactory()
        assert service.find_user_by_id(str(user.id)).email == user.email

    @pytest.mark.parametrize("user_id", [uuid4(), "not-a-uuid"])
    def test_unknown_or_malformed_id(self, service, user_id):
        with pytest.raises(NotFoundError):
            service.find_user_by_id(user_id)


class TestUpdateUser:
    def test_merges_non_empty_fields(self, service):
        created = UserFactory(name="Old", position="Intern")
        out = service.update_user(created.id, UserUpdateIn(name="New", position=""))
        assert out.name == "New"
        assert out.position == "Intern"

    def test_empty_update_is_identity(self, service):
        user = UserFactory()
        before = service.find_user_by_id(user.id)
        after = service.update_user(
            user.id, UserUpdateIn(name="", username="", email="", position="", profile="", cpf="")
        )
        assert after == before

    def test_changes_are_persisted(self, service, session):
        user = UserFactory()
        service.update_user(user.id, UserUpdateIn(profile="ADMIN", email="NEW@mail.com"))
        session.expire_all()
        stored = session.get(User, user.id)
        assert stored.profile is UserProfile.ADMIN
        assert stored.email == "new@mail.com"

    def test_credentials_untouched(self, service, session):
        user = UserFactory()
        password, salt, token = user.password, user.salt, user.confirmation_token
        service.update_user(user.id, UserUpdateIn(name="Renamed"))
        session.expire_all()
        stored = session.get(User, user.id)
        assert (stored.password, stored.salt, stored.confirmation_token) == (password, salt, token)

    def test_unknown_user(self, service):
        with pytest.raises(NotFoundError):
            service.update_user(uuid4(), UserUpdateIn(name="x"))

    def test_unknown_profile(self, service):
        user = UserFactory()
        with pytest.raises(InvalidProfileError):
            service.update_user(user.id, UserUpdateIn(profile="ROOT"))

    def test_duplicate_value_is_persistence_error(self, service):
        first = UserFactory()
        second = UserFactory()
        with pytest.raises(PersistenceError) as excinfo:
            service.update_user(second.id, UserUpdateIn(username=first.username))
        assert excinfo.value.message == "Error saving user data to the database"


class TestDeleteUser:
    def test_deletes_and_second_delete_is_not_found(self, service):
        user_id = UserFactory().id
        service.delete_user(user_id)
        with pytest.raises(NotFoundError):
            service.find_user_by_id(user_id)
        with pytest.raises(NotFoundError) as excinfo:
            service.delete_user(user_id)
        assert excinfo.value.message == "No user was found with the given ID"

    def test_unknown_id(self, service):
        with pytest.raises(NotFoundError):
            service.delete_user(uuid4())

    def test_other_users_untouched(self, service, session):
        keep_id = UserFactory().id
        service.delete_user(UserFactory().id)
        assert [item.id for item in service.find_users()] == [keep_id]
