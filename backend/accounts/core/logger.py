"""JSON logging for the accounts service.

Every record is written to stdout as one JSON object. Records emitted while a
request is being served carry that request's correlation id, taken from the
``X-Request-ID`` / ``X-Correlation-ID`` headers or minted on first use.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")

# ``extra=`` keys copied into the JSON payload when present on a record
EXTRA_KEYS = ("endpoint", "elapsed_ms", "user_id", "field", "method", "path", "status")

log = logging.getLogger("accounts.http")


class JSONFormatter(logging.Formatter):
    """Serialize a record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, Any] = {
            "time": stamp.isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        payload.update({key: getattr(record, key) for key in EXTRA_KEYS if hasattr(record, key)})
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class RequestIdFilter(logging.Filter):
    """Stamp ``request_id`` on each record (``None`` outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = ensure_request_id() if has_request_context() else None
        return True


def _incoming_request_id() -> str | None:
    for header in CORRELATION_HEADERS:
        value = request.headers.get(header, "").strip()
        if value:
            return value
    return None


def ensure_request_id() -> str:
    """Return the correlation id of the current request.

    The first call within a request reads the correlation headers (or mints a
    UUID4) and caches the result on :data:`flask.g`. Outside a request every
    call returns a fresh UUID4.
    """
    if not has_request_context():
        return str(uuid4())
    cached = g.get("request_id")
    if cached is None:
        cached = _incoming_request_id() or str(uuid4())
        g.request_id = cached
    return cached


def _resolve_level(level: str | int) -> int | str:
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else name


def configure_logging(level: str | int = "INFO") -> None:
    """Replace the root handlers with a single JSON stdout handler."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_resolve_level(level))


def init_app(app: Flask) -> None:
    """Assign request ids, log one line per request and echo the id back."""

    app.logger.addFilter(RequestIdFilter())

    @app.before_request
    def _start_request() -> None:
        # g outlives the request when an app context was already pushed
        g.pop("request_id", None)
        ensure_request_id()
        g.request_started = time.perf_counter()

    @app.after_request
    def _finish_request(response):
        started = g.get("request_started")
        elapsed = (time.perf_counter() - started) * 1000 if started is not None else None
        log.info(
            "request.completed",
            extra={
                "method": request.method,
                "path": request.path,
                "status": response.status_code,
                "elapsed_ms": round(elapsed, 2) if elapsed is not None else None,
            },
        )
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        return response


__all__ = [
    "JSONFormatter",
    "RequestIdFilter",
    "configure_logging",
    "ensure_request_id",
    "init_app",
]
