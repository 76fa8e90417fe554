"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import CollectorRegistry, generate_latest
from starlette.responses import Response

from lnaddrd import __version__
from lnaddrd.api.routes import router
from lnaddrd.config.settings import AppConfig
from lnaddrd.engine import LnaddrdEngine
from lnaddrd.errors.lnaddr_errors import LnaddrError
from lnaddrd.metrics.middleware import PrometheusMiddleware

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle hooks.

    Builds the engine (datastore, LNURL client, service) on startup and
    shuts it down on exit.
    """
    config: AppConfig = app.state.config
    engine = LnaddrdEngine(config)
    try:
        await engine.initialize()
        app.state.engine = engine
        logger.info("lnaddrd engine initialized for domains %s", config.lnurl.domains)
        yield
    finally:
        await engine.close()
        logger.info("lnaddrd engine shut down")


def create_app(*, config: AppConfig | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Args:
        config: Optional AppConfig. If *None*, a default config is created
            from environment variables.
    """
    if config is None:
        config = AppConfig()

    app = FastAPI(
        title="lnaddrd",
        version=__version__,
        description="Lightning address directory",
        debug=config.debug,
        lifespan=_lifespan,
    )

    # Store config on app.state for lifespan access
    app.state.config = config

    # -- Error handler --
    @app.exception_handler(LnaddrError)
    async def _lnaddr_error_handler(request: Request, exc: LnaddrError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={"code": exc.code, "message": exc.message},
        )

    # -- Base routes --
    @app.get("/health", tags=["base"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    # -- Prometheus --
    if config.metrics.enabled:
        registry = CollectorRegistry()
        app.state.metrics_registry = registry
        app.add_middleware(PrometheusMiddleware, registry=registry)

        @app.get("/metrics", tags=["base"], include_in_schema=False)
        async def metrics_endpoint() -> Response:
            """Prometheus metrics endpoint."""
            return Response(
                content=generate_latest(registry),
                media_type="text/plain; version=0.0.4; charset=utf-8",
            )

    app.include_router(router)

    return app
