"""User endpoints."""

from __future__ import annotations

from uuid import UUID

from flask import Blueprint, request

from accounts.api.deps import get_user_service, json_response, timing
from accounts.schemas import (
    UserCreateSchema,
    UserListItemSchema,
    UserSchema,
    UserUpdateSchema,
)
from accounts.services import UserCreateIn, UserUpdateIn

bp = Blueprint("users", __name__)

user_schema = UserSchema()
user_list_schema = UserListItemSchema(many=True)
user_create_schema = UserCreateSchema()
user_update_schema = UserUpdateSchema()


@bp.post("")
@timing
def create_user():
    """Create a user account."""

    payload = user_create_schema.load(request.get_json(silent=True) or {})
    user = get_user_service().create_user(UserCreateIn(**payload))
    return json_response({"data": user_schema.dump(user)}, status=201)


@bp.get("")
@timing
def list_users():
    """Return every registered user."""

    users = get_user_service().find_users()
    return json_response({"data": user_list_schema.dump(users)})


@bp.get("/<uuid:user_id>")
@timing
def get_user(user_id: UUID):
    """Return one user."""

    user = get_user_service().find_user_by_id(user_id)
    return json_response({"data": user_schema.dump(user)})


@bp.patch("/<uuid:user_id>")
@timing
def update_user(user_id: UUID):
    """Apply a partial update; blank fields keep their stored values."""

    payload = user_update_schema.load(request.get_json(silent=True) or {})
    user = get_user_service().update_user(user_id, UserUpdateIn(**payload))
    return json_response({"data": user_schema.dump(user)})


@bp.delete("/<uuid:user_id>")
@timing
def delete_user(user_id: UUID):
    """Delete a user."""

    get_user_service().delete_user(user_id)
    return "", 204
