"""Observability infrastructure for the redirector.

Provides structured logging, Prometheus metrics, and request-ID
correlation middleware.

Quick start::

    from simple_redirector.observability import configure_logging, get_logger
    from simple_redirector.observability.middleware import (
        AccessMiddleware,
        RequestIdMiddleware,
    )

    configure_logging()
    app.add_middleware(AccessMiddleware)
    app.add_middleware(RequestIdMiddleware)
"""

from .logging import configure_logging, get_logger, parse_log_level, request_id_ctx
from .metrics import REDIRECT_COUNTS, metrics_text

__all__ = [
    "REDIRECT_COUNTS",
    "configure_logging",
    "get_logger",
    "metrics_text",
    "parse_log_level",
    "request_id_ctx",
]
