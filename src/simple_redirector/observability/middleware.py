"""Request middleware for the redirector.

``RequestIdMiddleware`` binds an ``X-Request-ID`` to the request context
so every structlog event carries it. ``AccessMiddleware`` times each
request once and turns the result into both the HTTP Prometheus series
and a ``request_completed`` log line.

Register ``AccessMiddleware`` first and ``RequestIdMiddleware`` last, so
the request ID is already bound when the access record is written.
"""

from __future__ import annotations

import re
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from .logging import get_logger, request_id_ctx
from .metrics import (
    HTTP_REQUEST_DURATION_SECONDS,
    HTTP_REQUESTS_IN_FLIGHT,
    HTTP_REQUESTS_TOTAL,
)

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

_VALID_REQUEST_ID = re.compile(r"^[a-zA-Z0-9\-]{8,128}$")

# Mapped paths are client-chosen; only operational paths keep their own label.
_OPERATIONAL_PATHS = frozenset({"/healthy", "/metrics"})
_MAPPED_PATH_LABEL = "/{path}"


def path_label(path: str) -> str:
    """Metric label for a request path: operational path or ``/{path}``."""
    return path if path in _OPERATIONAL_PATHS else _MAPPED_PATH_LABEL


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Reuse a well-formed incoming ``X-Request-ID`` or mint a UUID4."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER, "")
        if not _VALID_REQUEST_ID.match(rid):
            rid = str(uuid.uuid4())

        token = request_id_ctx.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response


class AccessMiddleware(BaseHTTPMiddleware):
    """Record HTTP metrics and an access log line for every request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        method = request.method
        label = path_label(request.url.path)
        status = "500"

        HTTP_REQUESTS_IN_FLIGHT.inc()
        start = time.perf_counter()
        try:
            response = await call_next(request)
            status = str(response.status_code)
        finally:
            duration = time.perf_counter() - start
            HTTP_REQUESTS_IN_FLIGHT.dec()
            HTTP_REQUEST_DURATION_SECONDS.labels(method=method, path=label).observe(duration)
            HTTP_REQUESTS_TOTAL.labels(method=method, path=label, status=status).inc()

        logger.info(
            "request_completed",
            method=method,
            host=request.headers.get("host", ""),
            path=request.url.path,
            status=response.status_code,
            duration_ms=round(duration * 1000, 2),
            remote=request.client.host if request.client else None,
            user_agent=request.headers.get("user-agent", ""),
        )
        return response
