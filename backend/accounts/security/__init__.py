"""Credential primitives: password hashing and confirmation tokens."""

from __future__ import annotations

from .passwords import PasswordHasher
from .tokens import DEFAULT_TOKEN_BYTES, generate_confirmation_token

__all__ = ["DEFAULT_TOKEN_BYTES", "PasswordHasher", "generate_confirmation_token"]
