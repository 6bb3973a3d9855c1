"""Liveness and database reachability probe."""

from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from accounts.api.deps import json_response, timing
from accounts.core.extensions import db

bp = Blueprint("health", __name__)


def _database_status() -> str:
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        current_app.logger.exception("healthcheck.db_error")
        return "fail"
    return "ok"


@bp.get("/health")
@timing
def healthcheck():
    """Report process liveness, database reachability and the deployed version."""
    return json_response(
        {
            "status": "ok",
            "db": _database_status(),
            "version": current_app.config.get("APP_VERSION", "dev"),
        }
    )
