"""Flask CLI commands for operating on user accounts without the HTTP API."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext
from marshmallow import ValidationError

from accounts.api.deps import build_user_service
from accounts.models.enums import UserProfile
from accounts.schemas import UserCreateSchema
from accounts.services import NotFoundError, ServiceError, UserCreateIn, UserService

LOGGER = logging.getLogger(__name__)


def _build_service() -> UserService:
    return build_user_service(current_app.config)


def _echo_errors(messages: dict) -> None:
    """Print marshmallow field errors one per line."""
    for field, errors in sorted(messages.items()):
        for error in errors if isinstance(errors, list) else [errors]:
            click.echo(f"  {field}: {error}", err=True)


@click.group("users")
def users_cli() -> None:
    """Manage user accounts."""


@users_cli.command("create")
@click.option("--email", required=True, help="Login email address.")
@click.option("--username", required=True, help="Unique public handle.")
@click.option("--name", required=True, help="Display name.")
@click.option("--position", required=True, help="Role label, e.g. 'Analyst'.")
@click.option(
    "--profile",
    type=click.Choice(UserProfile.choices(), case_sensitive=False),
    default=UserProfile.STANDARD.value,
    show_default=True,
)
@click.option("--cpf", required=True, help="CPF formatted as 000.000.000-00.")
@click.password_option(help="Account password (prompted when omitted).")
@with_appcontext
def create_command(
    email: str,
    username: str,
    name: str,
    position: str,
    profile: str,
    cpf: str,
    password: str,
) -> None:
    """Create a user account."""
    raw = {
        "email": email,
        "username": username,
        "name": name,
        "position": position,
        "profile": profile.upper(),
        "cpf": cpf,
        "password": password,
    }
    try:
        payload = UserCreateSchema().load(raw)
    except ValidationError as exc:
        click.echo("Invalid user data:", err=True)
        _echo_errors(exc.normalized_messages())
        raise click.exceptions.Exit(1) from exc

    try:
        user = _build_service().create_user(UserCreateIn(**payload))
    except ServiceError as exc:
        raise click.ClickException(exc.message) from exc

    LOGGER.info("cli.user.created")
    click.echo(f"Created user {user.username} <{user.email}>")


@users_cli.command("list")
@with_appcontext
def list_command() -> None:
    """List registered users."""
    try:
        users = _build_service().find_users()
    except NotFoundError as exc:
        click.echo(exc.message)
        return
    except ServiceError as exc:
        raise click.ClickException(exc.message) from exc

    width = max(len(user.username) for user in users)
    for user in users:
        click.echo(
            f"{user.id}  {user.username.ljust(width)}  {user.profile.value:<8}  {user.email}"
        )
