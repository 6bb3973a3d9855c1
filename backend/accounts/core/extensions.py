"""Extension singletons bound to the app in :func:`init_app`."""

from __future__ import annotations

from flask import Flask
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

# Deterministic constraint names; UserRepository matches ``uq_users_<column>``.
NAMING_CONVENTION = {
    "pk": "pk_%(table_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)

# Repositories flush explicitly.
db: SQLAlchemy = SQLAlchemy(metadata=metadata, session_options={"autoflush": False})
migrate = Migrate(render_as_batch=True)


def init_app(app: Flask) -> None:
    """Bind SQLAlchemy and Alembic to ``app``.

    The models package is imported between the two so the metadata Alembic
    autogenerates from is complete.
    """
    db.init_app(app)

    import accounts.models  # noqa: F401

    migrate.init_app(app, db)
