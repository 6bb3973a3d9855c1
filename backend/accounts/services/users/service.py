"""
UserService
===========

Application service for the user lifecycle:

- Create accounts (salted bcrypt hash + confirmation token, one write).
- List and fetch public user views.
- Partial updates where empty values keep the stored ones.
- Hard delete by id.

Storage failures are classified into the service error taxonomy; nothing is
recovered locally.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any
from uuid import UUID

from accounts.models.enums import UnknownProfileError, UserProfile
from accounts.models.user import InvalidUserField, User
from accounts.repositories.errors import RepositoryError, UniqueViolationError
from accounts.security.passwords import PasswordHasher
from accounts.security.tokens import generate_confirmation_token
from accounts.services._shared.base import BaseService, ServiceContext, UowFactory
from accounts.services._shared.errors import (
    ConflictError,
    InvalidFieldError,
    InvalidProfileError,
    NotFoundError,
    PersistenceError,
)
from accounts.services.users.dto import (
    UserCreateIn,
    UserListItemOut,
    UserPublicOut,
    UserUpdateIn,
)

log = logging.getLogger(__name__)

#: Client-facing conflict messages per unique field
CONFLICT_MESSAGES: dict[str, str] = {
    "cpf": "CPF already in use",
    "username": "Username already in use",
    "email": "Email address already in use",
}

MSG_NO_USERS = "No users registered"
MSG_USER_NOT_FOUND = "User not found"
MSG_DELETE_NOT_FOUND = "No user was found with the given ID"
MSG_CREATE_FAILED = "Error saving user to the database"
MSG_UPDATE_FAILED = "Error saving user data to the database"

#: Fields a partial update may overwrite, in assignment order
UPDATABLE_FIELDS: tuple[str, ...] = ("name", "username", "email", "position", "profile", "cpf")


def resolve_profile(value: UserProfile | str) -> UserProfile:
    """Resolve ``value`` to a :class:`UserProfile` or raise :class:`InvalidProfileError`."""
    try:
        return UserProfile.parse(value)
    except UnknownProfileError as exc:
        raise InvalidProfileError(value) from exc


def _coerce_id(user_id: UUID | str) -> UUID | None:
    if isinstance(user_id, UUID):
        return user_id
    try:
        return UUID(str(user_id))
    except ValueError:
        return None


class UserService(BaseService):
    """
    Orchestrates create/read/update/delete for :class:`User`.

    Collaborators are injected through the constructor so tests (or other
    front ends) can substitute storage, hashing and token generation.
    """

    def __init__(
        self,
        *,
        ctx: ServiceContext | None = None,
        uow_factory: UowFactory | None = None,
        ro_uow_factory: UowFactory | None = None,
        hasher: PasswordHasher | None = None,
        token_factory: Callable[[], str] | None = None,
    ) -> None:
        super().__init__(ctx=ctx, uow_factory=uow_factory, ro_uow_factory=ro_uow_factory)
        self.hasher = hasher or PasswordHasher()
        self.token_factory = token_factory or generate_confirmation_token

    # --------------------------------------------------------------------- #
    # Create
    # --------------------------------------------------------------------- #

    def create_user(self, dto: UserCreateIn) -> UserPublicOut:
        """
        Create a user account.

        Token, salt and hash are all computed before the single save, so a
        failed save leaves nothing behind.

        :param dto: Creation input.
        :type dto: UserCreateIn
        :returns: Public view (no id, token, password or salt).
        :rtype: UserPublicOut
        :raises InvalidProfileError: When ``dto.profile`` is not a known profile.
        :raises ConflictError: When cpf, username or email is already taken.
        :raises InvalidFieldError: When a value fails the model's own checks.
        :raises PersistenceError: On any other storage failure.
        """
        profile = resolve_profile(dto.profile)
        token = self.token_factory()
        salt = self.hasher.generate_salt()
        password_hash = self.hasher.hash(dto.password, salt)

        try:
            with self.rw_uow() as uow:
                user = uow.users.create(
                    email=dto.email,
                    name=dto.name,
                    username=dto.username,
                    position=dto.position,
                    profile=profile,
                    cpf=dto.cpf,
                    password=password_hash,
                    salt=salt,
                    confirmation_token=token,
                )
                uow.users.add(user)
                created_id = user.id
                out = self._to_public(user)
        except UniqueViolationError as exc:
            log.warning("user.create.conflict", extra={"field": exc.field})
            raise ConflictError("User", exc.field, CONFLICT_MESSAGES.get(exc.field)) from exc
        except InvalidUserField as exc:
            raise InvalidFieldError(exc.field, str(exc)) from exc
        except RepositoryError as exc:
            log.error("user.create.failed", exc_info=True)
            raise PersistenceError(MSG_CREATE_FAILED) from exc

        log.info("user.created", extra={"user_id": str(created_id)})
        return out

    # --------------------------------------------------------------------- #
    # Retrieval
    # --------------------------------------------------------------------- #

    def find_users(self) -> list[UserListItemOut]:
        """
        Return every registered user.

        :returns: Public list views, oldest first.
        :rtype: list[UserListItemOut]
        :raises NotFoundError: When no user is registered at all.
        :raises PersistenceError: When the storage read fails.
        """
        try:
            with self.ro_uow() as uow:
                users = uow.users.list_all()
                items = [self._to_list_item(user) for user in users]
        except RepositoryError as exc:
            log.error("user.list.failed", exc_info=True)
            raise PersistenceError("Error reading users from the database") from exc

        if not items:
            raise NotFoundError("User", MSG_NO_USERS)
        return items

    def find_user_by_id(self, user_id: UUID | str) -> UserPublicOut:
        """
        Retrieve one user.

        :param user_id: User identifier; malformed values are treated as unknown.
        :returns: Public view.
        :rtype: UserPublicOut
        :raises NotFoundError: If the user does not exist.
        """
        key = _coerce_id(user_id)
        if key is None:
            raise NotFoundError("User", MSG_USER_NOT_FOUND)

        try:
            with self.ro_uow() as uow:
                user = uow.users.get(key)
                out = self._to_public(user) if user is not None else None
        except RepositoryError as exc:
            log.error("user.get.failed", exc_info=True)
            raise PersistenceError("Error reading user from the database") from exc

        if out is None:
            raise NotFoundError("User", MSG_USER_NOT_FOUND)
        return out

    # --------------------------------------------------------------------- #
    # Update
    # --------------------------------------------------------------------- #

    def update_user(self, user_id: UUID | str, dto: UserUpdateIn) -> UserPublicOut:
        """
        Merge ``dto`` into the stored user.

        A field is overwritten only when its new value is non-empty; ``None``
        and ``""`` keep the stored value. Unlike creation, every storage
        failure (uniqueness included) is reported as a persistence failure.

        :param user_id: User identifier.
        :param dto: Partial update.
        :type dto: UserUpdateIn
        :returns: Public view of the merged record.
        :rtype: UserPublicOut
        :raises NotFoundError: If the user does not exist.
        :raises InvalidProfileError: When a non-empty profile is unknown.
        :raises InvalidFieldError: When a merged value fails the model's own checks.
        :raises PersistenceError: When the save fails.
        """
        key = _coerce_id(user_id)
        if key is None:
            raise NotFoundError("User", MSG_USER_NOT_FOUND)

        changes = self._collect_changes(dto)

        try:
            with self.rw_uow() as uow:
                user = uow.users.get(key)
                if user is None:
                    raise NotFoundError("User", MSG_USER_NOT_FOUND)
                for field, value in changes.items():
                    setattr(user, field, value)
                uow.users.save(user)
                out = self._to_public(user)
        except InvalidUserField as exc:
            raise InvalidFieldError(exc.field, str(exc)) from exc
        except RepositoryError as exc:
            log.error("user.update.failed", extra={"user_id": str(key)}, exc_info=True)
            raise PersistenceError(MSG_UPDATE_FAILED) from exc

        log.info("user.updated", extra={"user_id": str(key)})
        return out

    # --------------------------------------------------------------------- #
    # Delete
    # --------------------------------------------------------------------- #

    def delete_user(self, user_id: UUID | str) -> None:
        """
        Hard-delete a user by id.

        :param user_id: User identifier.
        :raises NotFoundError: When nothing was deleted.
        :raises PersistenceError: When the delete fails.
        """
        key = _coerce_id(user_id)
        if key is None:
            raise NotFoundError("User", MSG_DELETE_NOT_FOUND)

        try:
            with self.rw_uow() as uow:
                result = uow.users.delete_by_id(key)
                if result is None or result.affected == 0:
                    raise NotFoundError("User", MSG_DELETE_NOT_FOUND)
        except RepositoryError as exc:
            log.error("user.delete.failed", extra={"user_id": str(key)}, exc_info=True)
            raise PersistenceError("Error deleting user from the database") from exc

        log.info("user.deleted", extra={"user_id": str(key)})

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _collect_changes(dto: UserUpdateIn) -> dict[str, Any]:
        changes: dict[str, Any] = {}
        for field in UPDATABLE_FIELDS:
            value = getattr(dto, field)
            if not value:
                continue
            changes[field] = resolve_profile(value) if field == "profile" else value
        return changes

    @staticmethod
    def _to_public(user: User) -> UserPublicOut:
        """
        Map ORM ``User`` to :class:`UserPublicOut`.
        """
        return UserPublicOut(
            username=user.username,
            email=user.email,
            name=user.name,
            position=user.position,
            profile=user.profile,
            cpf=user.cpf,
        )

    @staticmethod
    def _to_list_item(user: User) -> UserListItemOut:
        return UserListItemOut(
            id=user.id,
            username=user.username,
            email=user.email,
            name=user.name,
            position=user.position,
            profile=user.profile,
            cpf=user.cpf,
        )
