"""Environment-driven settings for the accounts service.

``APP_ENV`` selects one of the classes below; each reads its values from the
process environment (a ``.env`` file is honoured in development).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

ENV_VAR: Final[str] = "APP_ENV"  # development | testing | production
TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "y", "on"})

load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Read a boolean flag.

    Unset variables yield ``default``; anything else is true only when it is
    one of :data:`TRUTHY` (case-insensitive).
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in TRUTHY


def env_int(name: str, default: int) -> int:
    """Read an integer, treating unset or blank values as ``default``."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


class BaseConfig:
    """Settings shared by every environment.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Mount point of the versioned API (``/api`` -> ``/api/v1/...``).
    SQLALCHEMY_DATABASE_URI: str
        From ``DATABASE_URL``; a local SQLite file when unset.
    BCRYPT_ROUNDS: int
        Work factor used for new password salts.
    CONFIRMATION_TOKEN_BYTES: int
        Random bytes per confirmation token; the stored hex string is twice
        as long and must fit the 64-character column.
    LOG_LEVEL: str
        Root logger level.
    CORS_ORIGINS: str
        Comma-separated allowed origins, or ``*``.
    USE_PROXYFIX / PROXY_HOPS:
        Trust ``X-Forwarded-*`` headers from this many reverse proxies.
    """

    API_BASE_PREFIX = "/api"
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    APP_VERSION = os.getenv("APP_VERSION", "dev")

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    BCRYPT_ROUNDS = env_int("BCRYPT_ROUNDS", 12)
    CONFIRMATION_TOKEN_BYTES = env_int("CONFIRMATION_TOKEN_BYTES", 32)

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    CORS_MAX_AGE = env_int("CORS_MAX_AGE", 600)

    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)
    PROXY_HOPS = env_int("PROXY_HOPS", 1)

    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Local development: debug on unless ``FLASK_DEBUG`` says otherwise."""

    DEBUG = env_bool("FLASK_DEBUG", True)


class TestingConfig(BaseConfig):
    """Automated test runs.

    In-memory SQLite unless ``TEST_DATABASE_URL`` is set, and bcrypt at its
    minimum work factor.
    """

    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    BCRYPT_ROUNDS = 4


class ProductionConfig(BaseConfig):
    SQLALCHEMY_ECHO = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the settings class named by ``APP_ENV`` (development by default)."""
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
