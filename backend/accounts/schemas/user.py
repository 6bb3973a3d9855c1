"""User resource schemas.

Input schemas are the validation layer: ``schema.validate(payload)`` returns
``{field: [messages]}`` and ``schema.load(payload)`` raises
:class:`marshmallow.ValidationError` (rendered as 422 by the error handlers).
Output schemas never declare ``password``, ``salt`` or ``confirmation_token``.
"""

from __future__ import annotations

from typing import Any

from marshmallow import Schema, fields, pre_load, validate

from accounts.models.enums import UserProfile

from .validators import CPF, DottedDomain, NotBlank

PROFILE_ERROR = f"Profile must be one of: {', '.join(UserProfile.choices())}"


def _required(message: str) -> dict[str, str]:
    return {"required": message, "null": message}


class UserCreateSchema(Schema):
    """Payload for creating a new user account."""

    email = fields.Email(
        required=True,
        validate=[
            DottedDomain(),
            validate.Length(max=200, error="Email address must be under 200 characters"),
        ],
        error_messages={**_required("Provide an email address"), "invalid": "Provide a valid email address"},
    )
    name = fields.String(
        required=True,
        validate=[
            NotBlank(error="Provide the user's name"),
            validate.Length(max=200, error="Name must be under 200 characters"),
        ],
        error_messages=_required("Provide the user's name"),
    )
    username = fields.String(
        required=True,
        validate=[
            NotBlank(error="Provide a username"),
            validate.Length(max=50, error="Username must be under 50 characters"),
        ],
        error_messages=_required("Provide a username"),
    )
    position = fields.String(
        required=True,
        validate=[
            NotBlank(error="Provide a position"),
            validate.Length(max=200, error="Position must be under 200 characters"),
        ],
        error_messages=_required("Provide a position"),
    )
    profile = fields.Enum(
        UserProfile,
        by_value=True,
        required=True,
        error_messages={**_required("Provide a user profile"), "unknown": PROFILE_ERROR},
    )
    password = fields.String(
        required=True,
        load_only=True,
        validate=validate.Length(min=6, error="Password must be at least 6 characters"),
        error_messages=_required("Provide a password"),
    )
    cpf = fields.String(
        required=True,
        validate=CPF(),
        error_messages=_required("Provide a CPF"),
    )


class UserUpdateSchema(Schema):
    """Partial update payload.

    Blank strings and nulls are dropped before validation, so they mean
    "keep the stored value" rather than failing the email or CPF checks.
    """

    name = fields.String(validate=validate.Length(max=200, error="Name must be under 200 characters"))
    username = fields.String(validate=validate.Length(max=50, error="Username must be under 50 characters"))
    email = fields.Email(
        validate=[
            DottedDomain(),
            validate.Length(max=200, error="Email address must be under 200 characters"),
        ],
        error_messages={"invalid": "Provide a valid email address"},
    )
    position = fields.String(validate=validate.Length(max=200, error="Position must be under 200 characters"))
    profile = fields.Enum(UserProfile, by_value=True, error_messages={"unknown": PROFILE_ERROR})
    cpf = fields.String(validate=CPF())

    @pre_load
    def drop_blank_values(self, data: Any, **_: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return {
            key: value
            for key, value in data.items()
            if value is not None and not (isinstance(value, str) and not value.strip())
        }


class UserSchema(Schema):
    """Public representation of a user."""

    username = fields.String(required=True)
    email = fields.Email(required=True)
    name = fields.String(required=True)
    position = fields.String(required=True)
    profile = fields.Enum(UserProfile, by_value=True, required=True)
    cpf = fields.String(required=True)


class UserListItemSchema(UserSchema):
    """Listing representation; the only public view carrying the id."""

    id = fields.UUID(required=True)
