"""Closed enumerations used by the persisted models."""

from __future__ import annotations

import enum


class UnknownProfileError(ValueError):
    """Raised when a value does not name any :class:`UserProfile` member."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Unknown user profile: {value!r}")
        self.value = value


class UserProfile(str, enum.Enum):
    """Access level assigned to every user account."""

    ADMIN = "ADMIN"
    STANDARD = "STANDARD"

    @classmethod
    def choices(cls) -> list[str]:
        """Return the accepted raw values, in declaration order."""
        return [member.value for member in cls]

    @classmethod
    def parse(cls, value: UserProfile | str) -> UserProfile:
        """Resolve ``value`` to a member or raise :class:`UnknownProfileError`.

        Members pass through unchanged; strings are matched against member
        values after trimming and upper-casing.

        :param value: Member or raw profile name.
        :type value: UserProfile | str
        :returns: The matching member.
        :rtype: UserProfile
        :raises UnknownProfileError: When no member matches.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            for member in cls:
                if member.value == key:
                    return member
        raise UnknownProfileError(value)
