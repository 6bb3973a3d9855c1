"""Version 1 of the accounts API."""

from __future__ import annotations

from flask import Blueprint

from .health import bp as health
from .users import bp as users

API_VERSION = "v1"

#: ``(blueprint, prefix relative to /api/v1)`` pairs mounted by ``accounts.api``
REGISTRY: tuple[tuple[Blueprint, str], ...] = (
    (health, ""),
    (users, "users"),
)
