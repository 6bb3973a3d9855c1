"""Tests for the user marshmallow schemas."""

from __future__ import annotations

from uuid import uuid4

import pytest
from accounts.models import UserProfile
from accounts.schemas import UserCreateSchema, UserListItemSchema, UserSchema, UserUpdateSchema
from accounts.services import UserListItemOut, UserPublicOut
from marshmallow import ValidationError


@pytest.fixture()
def payload():
    return {
        "email": "mock@mail.com",
        "name": "Mock User",
        "username": "mock",
        "position": "Analyst",
        "profile": "STANDARD",
        "password": "mock123!",
        "cpf": "056.065.766-86",
    }


class TestUserCreateSchema:
    def test_valid_payload_has_no_errors(self, payload):
        assert UserCreateSchema().validate(payload) == {}

    def test_load_resolves_profile(self, payload):
        data = UserCreateSchema().load(payload)
        assert data["profile"] is UserProfile.STANDARD
        assert data["password"] == "mock123!"

    def test_every_field_required(self):
        errors = UserCreateSchema().validate({})
        assert set(errors) == {
            "email",
            "name",
            "username",
            "position",
            "profile",
            "password",
            "cpf",
        }
        assert errors["cpf"] == ["Provide a CPF"]

    @pytest.mark.parametrize(
        "field, value, message",
        [
            ("email", "not-an-email", "Provide a valid email address"),
            ("password", "12345", "Password must be at least 6 characters"),
            ("cpf", "056.065.766", "Provide a CPF with 14 characters"),
            ("cpf", "056.065.766-00", "Provide a valid CPF"),
            ("username", "x" * 51, "Username must be under 50 characters"),
            ("name", "", "Provide the user's name"),
            ("name", "   ", "Provide the user's name"),
            ("username", " ", "Provide a username"),
            ("position", "\t", "Provide a position"),
            ("email", "mock@localhost", "Provide a valid email address"),
        ],
    )
    def test_field_messages(self, payload, field, value, message):
        payload[field] = value
        errors = UserCreateSchema().validate(payload)
        assert errors == {field: [message]}

    def test_unknown_profile(self, payload):
        payload["profile"] = "ROOT"
        errors = UserCreateSchema().validate(payload)
        assert errors["profile"] == ["Profile must be one of: ADMIN, STANDARD"]

    def test_null_field(self, payload):
        payload["email"] = None
        with pytest.raises(ValidationError) as excinfo:
            UserCreateSchema().load(payload)
        assert excinfo.value.messages == {"email": ["Provide an email address"]}


class TestUserUpdateSchema:
    def test_empty_payload_is_valid(self):
        assert UserUpdateSchema().load({}) == {}

    def test_blank_values_dropped(self):
        data = UserUpdateSchema().load({"email": "", "cpf": "   ", "name": None, "position": "Lead"})
        assert data == {"position": "Lead"}

    def test_invalid_values_still_rejected(self):
        errors = UserUpdateSchema().validate({"email": "nope", "cpf": "123.456.789-00"})
        assert set(errors) == {"email", "cpf"}

    def test_email_needs_dotted_domain(self):
        errors = UserUpdateSchema().validate({"email": "x@localhost"})
        assert errors == {"email": ["Provide a valid email address"]}


class TestUserOutputSchemas:
    def test_public_view_has_no_secrets_or_id(self):
        out = UserPublicOut(
            username="mock",
            email="mock@mail.com",
            name="Mock User",
            position="Analyst",
            profile=UserProfile.ADMIN,
            cpf="056.065.766-86",
        )
        data = UserSchema().dump(out)
        assert data == {
            "username": "mock",
            "email": "mock@mail.com",
            "name": "Mock User",
            "position": "Analyst",
            "profile": "ADMIN",
            "cpf": "056.065.766-86",
        }

    def test_list_item_includes_id(self):
        user_id = uuid4()
        out = UserListItemOut(
            username="mock",
            email="mock@mail.com",
            name="Mock User",
            position="Analyst",
            profile=UserProfile.STANDARD,
            cpf="056.065.766-86",
            id=user_id,
        )
        data = UserListItemSchema().dump(out)
        assert data["id"] == str(user_id)
        assert data["profile"] == "STANDARD"
