"""Translate service-layer errors into RFC 7807 responses."""

from __future__ import annotations

import logging

from flask import Flask

from accounts.core.errors import APIError, problem_response
from accounts.services._shared.base import BaseService
from accounts.services._shared.errors import ServiceError

log = logging.getLogger(__name__)


def handle_service_error(err: ServiceError):
    """Render a :class:`ServiceError` through :meth:`BaseService.translate_exceptions`."""

    translated = BaseService.translate_exceptions(err)
    if not isinstance(translated, APIError):  # pragma: no cover - every ServiceError maps
        raise translated
    level = log.error if translated.status_code >= 500 else log.warning
    level(
        "ServiceError: %s code=%s status=%s msg=%s",
        type(err).__name__,
        translated.code,
        translated.status_code,
        translated.message,
    )
    return problem_response(translated.to_problem()), translated.status_code


def register_service_error_handler(app: Flask) -> None:
    """Attach :func:`handle_service_error` to ``app``."""
    app.register_error_handler(ServiceError, handle_service_error)
