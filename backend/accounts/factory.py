"""Flask application factory for the accounts service."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from flask import Flask

from accounts.core.config import BaseConfig, get_config
from accounts.core.logger import configure_logging

Initializer = Callable[[Flask], None]


def _initializers() -> Sequence[Initializer]:
    """Return the ``init_app`` hooks in wiring order."""
    from accounts import cli
    from accounts.api import init_app as init_api
    from accounts.core import cors, errors, extensions, proxy
    from accounts.core.logger import init_app as init_logging

    return (
        proxy.init_app,
        extensions.init_app,
        init_logging,
        cors.init_app,
        init_api,
        errors.init_app,
        cli.init_app,
    )


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build the application.

    :param config: Settings object or import path; ``APP_ENV`` decides when
        omitted.
    :param instance_relative_config: Also read ``instance/<filename>`` when it
        exists, for per-deployment overrides.
    :param instance_config_filename: Name of that override file.
    """
    app = Flask(__name__, instance_relative_config=instance_relative_config)
    app.config.from_object(config if config is not None else get_config())
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    for initializer in _initializers():
        initializer(app)

    return app
