"""Convenience exports for application schemas."""

from __future__ import annotations

from .user import UserCreateSchema, UserListItemSchema, UserSchema, UserUpdateSchema
from .validators import CPF, cpf_check_digits, format_cpf, is_valid_cpf

__all__ = [
    "CPF",
    "cpf_check_digits",
    "format_cpf",
    "is_valid_cpf",
    "UserCreateSchema",
    "UserListItemSchema",
    "UserSchema",
    "UserUpdateSchema",
]
