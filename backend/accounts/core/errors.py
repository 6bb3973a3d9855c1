"""RFC 7807 (``application/problem+json``) error responses.

Every error leaving the API is rendered by :func:`problem_response` from a
problem dict built by :func:`as_problem`. Client-facing messages never
include driver text or tracebacks; those go to the log.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, has_request_context, jsonify, request
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from accounts.core.logger import ensure_request_id

log = logging.getLogger(__name__)

#: Stable ``code`` values for bare HTTP errors
STATUS_CODES: dict[int, str] = {
    400: "bad_request",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    413: "payload_too_large",
    415: "unsupported_media_type",
    422: "unprocessable_entity",
    500: "internal_server_error",
    503: "service_unavailable",
}


def code_for_status(status: int) -> str:
    return STATUS_CODES.get(int(status), "error")


def as_problem(
    *,
    status: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Build a problem details dict.

    :param status: HTTP status code.
    :param code: Machine-readable error code (snake_case).
    :param message: Client-safe summary, sent as ``detail``.
    :param details: Optional structured context (field names, validation map).
    :returns: Problem dict including the request correlation id.
    :rtype: dict
    """
    problem: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(int(status)).phrase,
        "status": int(status),
        "detail": message,
        "instance": request.path if has_request_context() else None,
        "code": code,
        "request_id": ensure_request_id(),
    }
    if details:
        problem["details"] = details
    return problem


def problem_response(problem: dict[str, Any]) -> Response:
    """Wrap ``problem`` in a response carrying the problem+json media type."""
    response = jsonify(problem)
    response.mimetype = "application/problem+json"
    return response


def _reply(
    status: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
    *,
    exc_info: bool = False,
):
    level = logging.ERROR if status >= 500 else logging.WARNING
    log.log(level, "%s status=%s detail=%s", code, status, message, exc_info=exc_info)
    problem = as_problem(status=status, code=code, message=message, details=details)
    return problem_response(problem), status


class APIError(Exception):
    """
    An error with a known HTTP rendering.

    Parameters
    ----------
    message : str
        Client-safe description, rendered as ``detail``.
    status_code : int, optional
        HTTP status. Defaults to ``400``.
    code : str, optional
        Machine-readable identifier.
    details : dict[str, Any] | None, optional
        Structured context rendered as ``details``.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str = "bad_request",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code
        self.details = details or {}

    def to_problem(self) -> dict[str, Any]:
        return as_problem(
            status=self.status_code,
            code=self.code,
            message=self.message,
            details=self.details or None,
        )


def _field_details(field: str | None) -> dict[str, Any] | None:
    return {"field": field} if field else None


class NotFound(APIError):
    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, HTTPStatus.NOT_FOUND, "not_found")


class Conflict(APIError):
    """409; ``field`` names the unique column that was already taken."""

    def __init__(self, message: str = "Conflict", *, field: str | None = None) -> None:
        super().__init__(message, HTTPStatus.CONFLICT, "conflict", _field_details(field))


class UnprocessableEntity(APIError):
    """422 for well-formed input carrying unusable values."""

    def __init__(self, message: str = "Unprocessable entity", *, field: str | None = None) -> None:
        super().__init__(
            message, HTTPStatus.UNPROCESSABLE_ENTITY, "unprocessable_entity", _field_details(field)
        )


class PersistenceFailure(APIError):
    """500 when storage failed for a reason the client cannot fix."""

    def __init__(self, message: str = "Persistence failure") -> None:
        super().__init__(message, HTTPStatus.INTERNAL_SERVER_ERROR, "persistence_error")


def init_app(app: Flask) -> None:
    """Register problem+json handlers; 5xx are logged with tracebacks."""

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        return _reply(err.status_code, err.code, err.message, err.details or None)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        else:
            message = (err.description or HTTPStatus(status).phrase).strip()
        return _reply(status, code_for_status(status), message)

    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        errors = err.normalized_messages()
        return _reply(
            HTTPStatus.UNPROCESSABLE_ENTITY,
            "validation_error",
            "Validation failed",
            {"errors": errors},
        )

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        return _reply(HTTPStatus.CONFLICT, "conflict", "Resource conflict", exc_info=True)

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        return _reply(
            HTTPStatus.SERVICE_UNAVAILABLE,
            "service_unavailable",
            "Service temporarily unavailable",
            exc_info=True,
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        return _reply(
            HTTPStatus.INTERNAL_SERVER_ERROR,
            "internal_server_error",
            "Unexpected error",
            exc_info=True,
        )
