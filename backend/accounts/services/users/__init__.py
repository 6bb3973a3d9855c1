"""User lifecycle service and its DTOs."""

from __future__ import annotations

from .dto import UserCreateIn, UserListItemOut, UserPublicOut, UserUpdateIn
from .service import UserService

__all__ = [
    "UserService",
    "UserCreateIn",
    "UserUpdateIn",
    "UserPublicOut",
    "UserListItemOut",
]
