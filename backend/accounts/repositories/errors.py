"""
Persistence-level exceptions raised by repositories and units of work.

Repositories translate SQLAlchemy/driver errors into these types so services
can classify failures without parsing database messages themselves.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

#: SQLSTATE reported by PostgreSQL for unique constraint violations
UNIQUE_VIOLATION_SQLSTATE = "23505"


def _orig_message(exc: IntegrityError) -> str:
    return str(exc.orig).lower() if exc.orig is not None else str(exc).lower()


def violates(exc: IntegrityError, *markers: str) -> bool:
    """
    Check whether an IntegrityError mentions any of ``markers``.

    PostgreSQL reports the constraint name (``uq_users_email``) and the key
    (``Key (email)=...``); SQLite reports the qualified column
    (``UNIQUE constraint failed: users.email``). Callers pass every spelling
    they accept.

    :param exc: The exception raised by SQLAlchemy during flush/commit.
    :type exc: IntegrityError
    :param markers: Constraint names or ``table.column`` strings to look for.
    :type markers: str
    :returns: ``True`` if any marker appears in the driver message.
    :rtype: bool
    """
    message = _orig_message(exc)
    return any(marker.lower() in message for marker in markers)


def is_unique_violation(exc: IntegrityError) -> bool:
    """Return ``True`` when ``exc`` reports a unique constraint violation."""
    orig = exc.orig
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate is not None:
        return str(sqlstate) == UNIQUE_VIOLATION_SQLSTATE
    message = _orig_message(exc)
    return "unique" in message or "duplicate" in message


class RepositoryError(Exception):
    """Base class for storage failures surfaced by repositories."""


class UniqueViolationError(RepositoryError):
    """
    A unique constraint rejected the write.

    :param entity: Entity name (e.g., ``"User"``).
    :param field: Public name of the column whose uniqueness was violated.
    """

    def __init__(self, entity: str, field: str) -> None:
        super().__init__(f"{entity}.{field} must be unique")
        self.entity = entity
        self.field = field
