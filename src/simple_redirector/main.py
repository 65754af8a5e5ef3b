"""Redirector FastAPI application factory.

The create_app() factory is the single entry point for building the
redirector ASGI application. It wires middleware (request-ID and access
metrics/logging) and mounts one catch-all GET route on the dispatcher,
with the mapping table and renderer injected.

Usage:
    # Production (mapping file and template read from settings)
    settings = RedirectorSettings.from_env()
    app = create_app(settings)

    # Testing (full DI control)
    app = create_app(settings, table=parse(document), renderer=renderer)
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from . import __version__
from .mapping import MappingTable, load_mapping_file
from .observability.logging import get_logger
from .observability.middleware import AccessMiddleware, RequestIdMiddleware
from .rendering import InterstitialRenderer
from .routing import RedirectDispatcher
from .settings import RedirectorSettings

logger = get_logger(__name__)


def create_app(
    settings: RedirectorSettings | None = None,
    *,
    table: MappingTable | None = None,
    renderer: InterstitialRenderer | None = None,
) -> FastAPI:
    """Create a configured redirector FastAPI application.

    Args:
        settings: Application settings. Defaults to local-dev settings.
        table: Pre-built mapping table. When None, the file at
            ``settings.mapping_path`` is loaded.
        renderer: Interstitial renderer. When None, one is built from
            ``settings.template_path`` and ``settings.performance_mode``.

    Returns:
        Configured FastAPI application ready for uvicorn.run().

    Raises:
        ValueError: If settings validation fails.
        MappingError: If the mapping file cannot be loaded.
        InterstitialTemplateError: If the template cannot be loaded.
    """
    if settings is None:
        settings = RedirectorSettings()

    errors = settings.validate()
    if errors:
        raise ValueError(
            "Redirector settings validation failed:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )

    if table is None:
        table = load_mapping_file(settings.mapping_path)
    if renderer is None:
        renderer = InterstitialRenderer(
            settings.template_path or None,
            performance_mode=settings.performance_mode,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "redirector_startup",
            hosts=len(table),
            performance_mode=settings.performance_mode,
        )
        yield
        logger.info("redirector_shutdown")

    app = FastAPI(
        title="Simple Redirector",
        description="Host and path based redirect service",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.table = table
    app.state.settings = settings

    # ── Middleware stack (applied in reverse order) ──────────────
    # Order of execution: RequestID -> Access -> dispatcher
    app.add_middleware(AccessMiddleware)
    app.add_middleware(RequestIdMiddleware)

    # ── Routes ──────────────────────────────────────────────────
    # Every GET, operational endpoints included, goes through the
    # dispatcher because their availability depends on the Host header.
    app.add_api_route(
        "/{path:path}",
        RedirectDispatcher(table, renderer).handle,
        methods=["GET"],
        include_in_schema=False,
    )

    return app
