"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from marquee.application.use_cases.catalog_browse import CatalogBrowseUseCase
from marquee.infrastructure.cache import DiskcacheAdapter
from marquee.infrastructure.providers.registry import EmbedProviderRegistry
from marquee.infrastructure.tmdb.client import HttpxTmdbClient
from marquee.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: Initialize and cleanup all resources (DI Composition Root).

    Order matters:
        1. Cache (required by the catalog client)
        2. HTTP Client
        3. Catalog client (uses HTTP client + cache)
        4. Catalog browse use case
        5. Embed provider registry (from config)
    """
    state = cast(AppState, app.state)
    config = state.config

    # 1) Cache
    cache = DiskcacheAdapter(
        directory=config.cache_dir,
        ttl_seconds=config.cache_ttl_seconds,
    )
    await cache.__aenter__()
    state.cache = cache
    log.info("cache_initialized", enabled=cache.enabled)

    if config.environment == "dev":
        await cache.clear()

    # 2) HTTP client
    state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        headers={"User-Agent": config.http_user_agent},
    )
    log.info("http_client_initialized", timeout=config.http_timeout_seconds)

    # 3) Catalog client (a missing key surfaces as a page error, not a crash)
    if not config.tmdb_api_key:
        log.warning("tmdb_api_key_missing")
    state.catalog_client = HttpxTmdbClient(
        api_key=config.tmdb_api_key,
        http_client=state.http_client,
        cache=state.cache,
        language=config.tmdb_language,
    )
    log.info("catalog_client_initialized", language=config.tmdb_language)

    # 4) Browse use case
    state.catalog_uc = CatalogBrowseUseCase(catalog=state.catalog_client)

    # 5) Embed providers
    state.provider_registry = EmbedProviderRegistry.from_config(
        config.playback.providers
    )
    log.info("embed_providers_initialized", providers=state.provider_registry.names())

    log.info("app_startup_complete")

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("http_client_closed")

        await state.cache.aclose()
        log.info("cache_closed")

        log.info("app_shutdown_complete")
