"""
DTOs for UserService.

Input contracts carry raw (already shape-validated) values; output contracts
are the public user views and never include ``password``, ``salt`` or
``confirmation_token``.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from accounts.models.enums import UserProfile

# --------------------------------------------------------------------------- #
# Input
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserCreateIn:
    """
    Input payload for account creation.

    :param email: Login email.
    :type email: str
    :param name: Display name.
    :type name: str
    :param username: Public handle (unique).
    :type username: str
    :param position: Free-text role label.
    :type position: str
    :param profile: Access level, as a member or its raw name.
    :type profile: UserProfile | str
    :param password: Raw password (hashed by the service).
    :type password: str
    :param cpf: Tax id formatted ``000.000.000-00`` (unique).
    :type cpf: str
    """

    email: str
    name: str
    username: str
    position: str
    profile: UserProfile | str
    password: str
    cpf: str


@dataclass(frozen=True, slots=True)
class UserUpdateIn:
    """
    Partial update payload.

    ``None`` and ``""`` both mean "keep the stored value".
    """

    name: str | None = None
    username: str | None = None
    email: str | None = None
    position: str | None = None
    profile: UserProfile | str | None = None
    cpf: str | None = None


# --------------------------------------------------------------------------- #
# Output
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Public-safe user payload.
    """

    username: str
    email: str
    name: str
    position: str
    profile: UserProfile
    cpf: str


@dataclass(frozen=True, slots=True)
class UserListItemOut(UserPublicOut):
    """
    Public-safe user payload for listings, which also expose the identifier.
    """

    id: UUID
