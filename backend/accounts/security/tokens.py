"""Opaque random tokens issued to new accounts."""

from __future__ import annotations

import secrets

DEFAULT_TOKEN_BYTES = 32


def generate_confirmation_token(nbytes: int = DEFAULT_TOKEN_BYTES) -> str:
    """Return ``nbytes`` of CSPRNG output, hex encoded (``2 * nbytes`` chars)."""
    if nbytes < 1:
        raise ValueError("Token length must be at least one byte.")
    return secrets.token_hex(nbytes)
