"""Tests for the bcrypt password hasher."""

from __future__ import annotations

import bcrypt
import pytest
from accounts.security import PasswordHasher


@pytest.fixture()
def hasher():
    return PasswordHasher(rounds=4)


class TestPasswordHasher:
    def test_salt_encodes_work_factor(self, hasher):
        assert hasher.generate_salt().startswith("$2b$04$")

    def test_salts_are_random(self, hasher):
        assert hasher.generate_salt() != hasher.generate_salt()

    def test_hash_is_deterministic_for_same_salt(self, hasher):
        salt = hasher.generate_salt()
        assert hasher.hash("mock123!", salt) == hasher.hash("mock123!", salt)

    def test_hash_differs_across_salts(self, hasher):
        first = hasher.hash("mock123!", hasher.generate_salt())
        second = hasher.hash("mock123!", hasher.generate_salt())
        assert first != second

    def test_hash_never_contains_plaintext(self, hasher):
        digest = hasher.hash("mock123!", hasher.generate_salt())
        assert "mock123!" not in digest

    def test_hash_verifies_with_bcrypt(self, hasher):
        digest = hasher.hash("mock123!", hasher.generate_salt())
        assert bcrypt.checkpw(b"mock123!", digest.encode())
        assert not bcrypt.checkpw(b"wrong", digest.encode())

    def test_empty_password_rejected(self, hasher):
        with pytest.raises(ValueError):
            hasher.hash("", hasher.generate_salt())

    @pytest.mark.parametrize("rounds", [3, 32])
    def test_rounds_out_of_range(self, rounds):
        with pytest.raises(ValueError):
            PasswordHasher(rounds=rounds)

    def test_rounds_property(self):
        assert PasswordHasher(rounds=5).rounds == 5
