"""Tests for driver error classification helpers."""

from __future__ import annotations

from accounts.repositories.errors import is_unique_violation, violates
from sqlalchemy.exc import IntegrityError


class _PgError(Exception):
    def __init__(self, message: str, pgcode: str) -> None:
        super().__init__(message)
        self.pgcode = pgcode


def _wrap(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT", {}, orig)


def test_violates_is_case_insensitive():
    exc = _wrap(Exception("UNIQUE constraint failed: USERS.EMAIL"))
    assert violates(exc, "users.email")
    assert not violates(exc, "users.cpf")


def test_unique_violation_from_sqlstate():
    assert is_unique_violation(_wrap(_PgError("boom", "23505")))
    assert not is_unique_violation(_wrap(_PgError("duplicate", "23502")))


def test_unique_violation_from_message():
    assert is_unique_violation(_wrap(Exception("UNIQUE constraint failed: users.cpf")))
    assert not is_unique_violation(_wrap(Exception("NOT NULL constraint failed: users.cpf")))
