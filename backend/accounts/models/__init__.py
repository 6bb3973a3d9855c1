from accounts.models.enums import UnknownProfileError, UserProfile
from accounts.models.user import InvalidUserField, User

__all__ = [
    "InvalidUserField",
    "UnknownProfileError",
    "User",
    "UserProfile",
]
