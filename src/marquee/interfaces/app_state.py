"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from marquee.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from marquee.application.use_cases.catalog_browse import CatalogBrowseUseCase
    from marquee.domain.ports import CachePort, CatalogClientPort
    from marquee.infrastructure.providers.registry import EmbedProviderRegistry


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan(). Search and playback
    sessions are not stored here; each WebSocket connection owns its own.
    """

    # Configuration
    config: AppConfig

    # Infrastructure
    cache: CachePort
    http_client: httpx.AsyncClient

    # Domain Ports
    catalog_client: CatalogClientPort

    # Application Services
    catalog_uc: CatalogBrowseUseCase

    # Embed providers (ordered, cycle order)
    provider_registry: EmbedProviderRegistry
