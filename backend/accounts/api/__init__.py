"""HTTP surface: versioned blueprints plus service error translation."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def join_prefix(*segments: str) -> str:
    """Join URL segments into one absolute prefix, skipping empty ones.

    >>> join_prefix("/api/", "v1", "/users")
    '/api/v1/users'
    >>> join_prefix("/api/v1", "")
    '/api/v1'
    """
    parts = [segment.strip("/") for segment in segments if segment.strip("/")]
    return "/" + "/".join(parts)


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Mount each ``(blueprint, relative_prefix)`` under ``base_prefix``."""
    for blueprint, relative in entries:
        app.register_blueprint(blueprint, url_prefix=join_prefix(base_prefix, relative))


def init_app(app: Flask) -> None:
    """Mount API v1 and install the service error handler."""
    from accounts.api.errors import register_service_error_handler
    from accounts.api.v1 import API_VERSION, REGISTRY

    base = join_prefix(app.config.get("API_BASE_PREFIX", "/api"), API_VERSION)
    register_blueprint_group(app, base_prefix=base, entries=REGISTRY)
    register_service_error_handler(app)


__all__ = ["init_app", "join_prefix", "register_blueprint_group"]
