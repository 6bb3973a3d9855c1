"""Repository package exposing persistence-layer access for the domain models."""

from __future__ import annotations

from accounts.repositories.base import (
    BaseRepository,
    DeleteResult,
    apply_sorting,
    parse_sort_tokens,
)
from accounts.repositories.errors import RepositoryError, UniqueViolationError
from accounts.repositories.user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    "DeleteResult",
    "apply_sorting",
    "parse_sort_tokens",
    # Errors
    "RepositoryError",
    "UniqueViolationError",
    # Domain
    "UserRepository",
]
