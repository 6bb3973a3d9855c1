"""Service layer public API.

Callers import from :mod:`accounts.services` without knowing the internal
structure.

Re-exports
----------
- Base primitives (from ``accounts.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Service errors (from ``accounts.services._shared.errors``)
    * :class:`ServiceError` and its subclasses

- User lifecycle (from ``accounts.services.users``)
    * :class:`UserService`
    * DTOs: :class:`UserCreateIn`, :class:`UserUpdateIn`,
      :class:`UserPublicOut`, :class:`UserListItemOut`
"""

from __future__ import annotations

from ._shared.base import BaseService, ServiceContext
from ._shared.errors import (
    ConflictError,
    InvalidFieldError,
    InvalidProfileError,
    NotFoundError,
    PersistenceError,
    ServiceError,
)
from .users import (
    UserCreateIn,
    UserListItemOut,
    UserPublicOut,
    UserService,
    UserUpdateIn,
)

__all__ = [
    # Base
    "BaseService",
    "ServiceContext",
    # Errors
    "ServiceError",
    "NotFoundError",
    "ConflictError",
    "PersistenceError",
    "InvalidProfileError",
    "InvalidFieldError",
    # Users
    "UserService",
    "UserCreateIn",
    "UserUpdateIn",
    "UserPublicOut",
    "UserListItemOut",
]
