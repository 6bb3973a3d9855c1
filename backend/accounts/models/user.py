"""User model definition for the accounts service."""

from __future__ import annotations

from sqlalchemy import Enum, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates

from accounts.core.extensions import db

from .base import ReprMixin, TimestampMixin, UUIDPKMixin
from .enums import UserProfile


class InvalidUserField(ValueError):
    """A column validator rejected ``value`` for ``field``."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class User(UUIDPKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Registered account.

    Fields
    ------
    email : str
        Login email. Stored normalized (lowercase, trimmed). Unique.
    username : str
        Public handle. Unique.
    name : str
        Display name.
    position : str
        Free-text role label.
    profile : UserProfile
        Access level.
    cpf : str
        Brazilian tax id, formatted ``000.000.000-00``. Unique.
    password : str
        bcrypt hash of the password. Never serialized.
    salt : str
        bcrypt salt used to derive ``password``. Never serialized.
    confirmation_token : str
        Random hex token issued at signup for out-of-band confirmation.
    """

    __tablename__ = "users"
    __repr_attrs__ = ("id", "username")

    # Columns
    email: Mapped[str] = mapped_column(String(200), nullable=False)
    username: Mapped[str] = mapped_column(String(50), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    position: Mapped[str] = mapped_column(String(200), nullable=False)
    profile: Mapped[UserProfile] = mapped_column(
        Enum(UserProfile, name="user_profile", validate_strings=True),
        nullable=False,
    )
    cpf: Mapped[str] = mapped_column(String(14), nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    salt: Mapped[str] = mapped_column(String(255), nullable=False)
    confirmation_token: Mapped[str | None] = mapped_column(String(64), nullable=True)

    # Constraint names are part of the repository contract (see UserRepository)
    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        UniqueConstraint("username", name="uq_users_username"),
        UniqueConstraint("cpf", name="uq_users_cpf"),
        Index("ix_users_created_at", "created_at"),
    )

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and sanity-check the email.

        :raises InvalidUserField: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise InvalidUserField("email", "Email is required.")
        v = value.strip().lower()
        # Full validation happens in the API schemas.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise InvalidUserField("email", "Email format looks invalid.")
        return v

    @validates("username", "name", "position")
    def _strip_required_text(self, key: str, value: str) -> str:
        """Trim required free-text columns and reject blank values."""
        if not isinstance(value, str) or not value.strip():
            raise InvalidUserField(key, f"{key.capitalize()} is required.")
        return value.strip()

    @validates("profile")
    def _coerce_profile(self, key: str, value: UserProfile | str) -> UserProfile:
        """Only enumeration members are ever stored."""
        return UserProfile.parse(value)
