"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside an outer transaction against an in-memory SQLite
database; sessions join it through SAVEPOINTs so data changes never leak
between cases.
"""

from __future__ import annotations

import os

import pytest
from accounts.core.extensions import db as _db  # Flask-SQLAlchemy instance
from accounts.factory import create_app  # application factory under test
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker


class TestConfig:
    """Settings for the application under test: in-memory SQLite, cheap bcrypt."""

    TESTING = True
    DEBUG = False
    API_BASE_PREFIX = "/api"
    SECRET_KEY = "testing"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    BCRYPT_ROUNDS = 4
    CONFIRMATION_TOKEN_BYTES = 32
    LOG_LEVEL = "WARNING"
    CORS_ORIGINS = "*"


@pytest.fixture(scope="session")
def app():
    """Build the accounts app once per session from :class:`TestConfig`."""
    # DATABASE_URL from the shell must not reach the test app
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestConfig, instance_relative_config=False)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create the schema once and drop it when the session ends.

    pysqlite defers ``BEGIN`` until the first DML statement, which would turn
    the first SAVEPOINT into the outermost transaction. The listeners below
    hand transaction control back to SQLAlchemy.
    """
    with app.app_context():
        engine = _db.engine

        @event.listens_for(engine, "connect")
        def _disable_pysqlite_transactions(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None

        @event.listens_for(engine, "begin")
        def _emit_begin(conn):
            conn.exec_driver_sql("BEGIN")

        _db.create_all()

    yield _db

    with app.app_context():
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(app, db):
    """One connection shared by every test; the in-memory database lives on it."""
    with app.app_context():
        conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(app, db, connection):
    """Scoped session swapped in for ``db.session`` for the length of one test.

    ``commit()`` inside application code only releases a SAVEPOINT; the
    enclosing transaction is rolled back afterwards.
    """
    # fresh app context, so flask.g never carries over between tests
    ctx = app.app_context()
    ctx.push()
    top_trans = connection.begin()

    SessionFactory = sessionmaker(
        bind=connection,
        join_transaction_mode="create_savepoint",
        autoflush=False,
    )
    scoped = scoped_session(SessionFactory)

    original_session = db.session
    db.session.remove()
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        top_trans.rollback()
        ctx.pop()


@pytest.fixture()
def client(app, session):
    """Flask test client sharing the transactional session."""
    return app.test_client()


@pytest.fixture(scope="session")
def faker():
    """Seeded Faker for reproducible names and addresses."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


@pytest.fixture(autouse=True)
def _factories_session(session):
    """Point every factory at the current test session."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield
    SQLAlchemySession.set(None)
