"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
helpers. The translation to HTTP responses (RFC 7807) is handled by
``BaseService.translate_exceptions()`` and the API error handlers.
"""

from __future__ import annotations


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    :param message: Human-readable message, safe to show to API clients.
    :type message: str
    """

    default_message = "Service error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(ServiceError):
    """
    Raised when a requested entity (or any entity, for listings) is missing.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param message: Client-facing message.
    :type message: str
    """

    def __init__(self, entity: str, message: str | None = None) -> None:
        super().__init__(message or f"{entity} not found")
        self.entity = entity


class ConflictError(ServiceError):
    """
    Raised when a unique constraint rejected a write.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param field: Field whose value is already taken.
    :type field: str
    :param message: Client-facing message.
    :type message: str
    """

    def __init__(self, entity: str, field: str, message: str | None = None) -> None:
        super().__init__(message or f"{entity} {field} already in use")
        self.entity = entity
        self.field = field


class PersistenceError(ServiceError):
    """Raised when storage failed for a reason other than a recognised conflict."""

    default_message = "Error saving data to the database"


class InvalidProfileError(ServiceError):
    """
    Raised when a profile value is not a member of the closed enumeration.

    :param value: The rejected raw value.
    """

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid user profile: {value!r}")
        self.value = value


class InvalidFieldError(ServiceError):
    """
    Raised when a field value is rejected by the entity's own validation.

    :param field: Offending field name.
    :param message: Client-facing message.
    """

    def __init__(self, field: str, message: str | None = None) -> None:
        super().__init__(message or f"Invalid value for {field}")
        self.field = field
