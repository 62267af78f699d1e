"""FastAPI application factory (create_app)."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request
from starlette.responses import Response

from marquee.infrastructure.config import AppConfig
from marquee.interfaces.app_state import AppState
from marquee.interfaces.composition import lifespan

log = structlog.get_logger(__name__)


def create_app(config: AppConfig) -> FastAPI:
    """Create FastAPI app — configuration ONLY, NO resource initialization.

    Resources (HTTP client, cache, catalog client) are created in lifespan().
    """
    app = FastAPI(
        title="Marquee",
        description="Browse the TMDB catalog and watch through embed providers",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config

    from marquee.interfaces.api.catalog.router import router as catalog_router
    from marquee.interfaces.api.playback.router import router as playback_router
    from marquee.interfaces.api.search.router import router as search_router

    app.include_router(catalog_router, prefix="/api/v1")
    app.include_router(search_router, prefix="/api/v1")
    app.include_router(playback_router, prefix="/api/v1")

    @app.get("/api/v1/healthz")
    async def healthz() -> dict[str, str | bool | list[str]]:
        """Liveness probe — returns 200 as long as the process is running."""
        state = app.state
        registry = getattr(state, "provider_registry", None)
        return {
            "status": "ok",
            "catalog_configured": bool(state.config.tmdb_api_key),
            "providers": registry.names() if registry else [],
        }

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ):
        start = time.perf_counter()
        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            status_code = getattr(locals().get("response", None), "status_code", 500)

            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                query=str(request.url.query),
                status_code=status_code,
                duration_ms=round(duration_ms, 2),
                client_host=(request.client.host if request.client else None),
            )

    return app
