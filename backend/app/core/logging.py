"""Logging setup for the estimator service.

Each request carries an ID, either the caller's ``X-Request-ID`` or a fresh
one. It is echoed back as a response header and stamped on every record
logged while the request is handled, in text and JSON output alike.
"""

from __future__ import annotations

import json
import logging
import re
import time
import uuid
from contextvars import ContextVar
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

ACCESS_LOGGER = "solar_estimator.access"
REQUEST_ID_HEADER = "X-Request-ID"

# Incoming IDs are written into log lines; anything else gets a fresh one
_REQUEST_ID_RE = re.compile(r"[A-Za-z0-9._-]{1,64}")

# ``extra=`` keys kept in JSON output: access-log timing plus estimate outcome
STRUCTURED_FIELDS = (
    "method",
    "path",
    "status_code",
    "duration_ms",
    "client_ip",
    "geocoding_source",
    "irradiance",
    "annual_kwh",
)

TEXT_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] [%(request_id)s] %(message)s"


def new_request_id(incoming: str | None) -> str:
    if incoming and _REQUEST_ID_RE.fullmatch(incoming):
        return incoming
    return uuid.uuid4().hex[:12]


class RequestIdFilter(logging.Filter):
    """Copy the current request ID onto every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "request_id": getattr(record, "request_id", request_id_var.get()),
            "message": record.getMessage(),
        }
        entry.update(
            (field, getattr(record, field))
            for field in STRUCTURED_FIELDS
            if getattr(record, field, None) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Assign the request ID and write one access-log line per request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        rid = new_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = request_id_var.set(rid)
        access = logging.getLogger(ACCESS_LOGGER)
        fields: dict[str, Any] = {
            "method": request.method,
            "path": request.url.path,
            "client_ip": request.client.host if request.client else "unknown",
        }
        start = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception:
                fields["duration_ms"] = round((time.perf_counter() - start) * 1000, 1)
                access.exception("%s %s failed", request.method, request.url.path, extra=fields)
                raise

            fields["status_code"] = response.status_code
            fields["duration_ms"] = round((time.perf_counter() - start) * 1000, 1)
            response.headers[REQUEST_ID_HEADER] = rid
            access.info(
                "%s %s %s %.1fms",
                request.method,
                request.url.path,
                response.status_code,
                fields["duration_ms"],
                extra=fields,
            )
            return response
        finally:
            request_id_var.reset(token)


def setup_logging(json_format: bool = False, level: int = logging.INFO) -> None:
    """Install a single stderr handler on the root logger."""
    handler = logging.StreamHandler()
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(JSONFormatter() if json_format else logging.Formatter(TEXT_FORMAT, "%Y-%m-%d %H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # httpx logs each geocoding/NREL call at INFO; the access logger covers ours
    for noisy in ("httpx", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
