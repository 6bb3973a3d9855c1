"""Per-request plumbing shared by the v1 handlers."""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from functools import partial, wraps
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request

from accounts.core.logger import ensure_request_id
from accounts.security import DEFAULT_TOKEN_BYTES, PasswordHasher, generate_confirmation_token
from accounts.services import ServiceContext, UserService

Handler = TypeVar("Handler", bound=Callable[..., Any])


def build_user_service(config: Mapping[str, Any], *, request_id: str | None = None) -> UserService:
    """Build a :class:`UserService` from ``BCRYPT_ROUNDS`` and ``CONFIRMATION_TOKEN_BYTES``."""
    token_bytes = int(config.get("CONFIRMATION_TOKEN_BYTES", DEFAULT_TOKEN_BYTES))
    return UserService(
        ctx=ServiceContext(request_id=request_id),
        hasher=PasswordHasher(rounds=int(config.get("BCRYPT_ROUNDS", 12))),
        token_factory=partial(generate_confirmation_token, token_bytes),
    )


def get_user_service() -> UserService:
    return build_user_service(current_app.config, request_id=ensure_request_id())


def json_response(payload: Any, *, status: int = 200) -> Response:
    response = jsonify(payload)
    response.status_code = status
    return response


def timing(handler: Handler) -> Handler:
    """Log the handler's wall time at DEBUG as ``request.elapsed``."""

    @wraps(handler)
    def timed(*args: Any, **kwargs: Any):
        started = time.perf_counter()
        try:
            return handler(*args, **kwargs)
        finally:
            current_app.logger.debug(
                "request.elapsed",
                extra={
                    "endpoint": request.endpoint,
                    "elapsed_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )

    return timed  # type: ignore[return-value]
