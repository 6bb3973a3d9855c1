"""User repository: persistence and uniqueness reporting for :class:`User`."""

from __future__ import annotations

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from accounts.models.user import User
from accounts.repositories.base import BaseRepository
from accounts.repositories.errors import (
    RepositoryError,
    UniqueViolationError,
    is_unique_violation,
    violates,
)

#: Unique columns, in the order they are reported when a message names several
UNIQUE_FIELDS: tuple[str, ...] = ("cpf", "username", "email")


def violated_unique_field(exc: IntegrityError) -> str | None:
    """Return the first field of :data:`UNIQUE_FIELDS` named by ``exc``.

    Both the constraint name (``uq_users_cpf``) and the SQLite column spelling
    (``users.cpf``) are recognised, as is PostgreSQL's ``Key (cpf)=`` detail.
    """
    table = User.__tablename__
    for field in UNIQUE_FIELDS:
        if violates(exc, f"uq_{table}_{field}", f"{table}.{field}", f"key ({field})"):
            return field
    return None


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Unique constraint failures are reported as
    :class:`~accounts.repositories.errors.UniqueViolationError` carrying the
    offending field; every other storage failure is a plain
    :class:`~accounts.repositories.errors.RepositoryError`.
    """

    model = User

    def _sortable_fields(self):
        return {
            "email": User.email,
            "username": User.username,
            "name": User.name,
            "created_at": User.created_at,
        }

    def _default_sort(self) -> list[str]:
        return ["created_at"]

    def _translate_integrity_error(self, exc: IntegrityError) -> RepositoryError:
        if is_unique_violation(exc):
            field = violated_unique_field(exc)
            if field is not None:
                return UniqueViolationError("User", field)
        return super()._translate_integrity_error(exc)

    def taken_unique_field(self, user: User) -> str | None:
        """Return the first of :data:`UNIQUE_FIELDS` another row already holds.

        :raises RepositoryError: When the lookup fails.
        """
        clauses = [getattr(User, field) == getattr(user, field) for field in UNIQUE_FIELDS]
        stmt = select(User.cpf, User.username, User.email).where(or_(*clauses))
        if user.id is not None:
            stmt = stmt.where(User.id != user.id)
        try:
            rows = self.session.execute(stmt).all()
        except SQLAlchemyError as exc:
            raise RepositoryError("Failed to check User uniqueness") from exc
        for field in UNIQUE_FIELDS:
            if any(getattr(row, field) == getattr(user, field) for row in rows):
                return field
        return None

    def add(self, user: User) -> User:
        """Stage a new user, reporting the highest-precedence taken field.

        :raises UniqueViolationError: When cpf, username or email is taken.
        :raises RepositoryError: When the flush fails otherwise.
        """
        # SQLite names only one violated column per insert, so look up every
        # clash first. Concurrent inserts still fall through to the
        # IntegrityError mapping in _translate_integrity_error.
        field = self.taken_unique_field(user)
        if field is not None:
            raise UniqueViolationError("User", field)
        return super().add(user)

    def save(self, user: User) -> User:
        """Flush changes made to an already-loaded user.

        :raises RepositoryError: When the flush fails.
        """
        self.session.add(user)
        self.flush()
        return user
