"""Port for catalog metadata lookups."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from marquee.domain.entities.catalog import (
    CatalogPreview,
    EpisodeSummary,
    ListCategory,
    MediaKind,
    SeasonSummary,
    TitleDetail,
)


@runtime_checkable
class CatalogClientPort(Protocol):
    """Async interface for the movie/TV metadata API.

    Implementations raise ``CatalogCredentialError`` when the API key is
    missing or rejected, and ``CatalogUnavailableError`` on network or
    unexpected HTTP failures.
    """

    async def search_multi(self, query: str, page: int = 1) -> list[dict[str, Any]]:
        """Multi-type search. Returns raw records tagged with ``media_type``."""
        ...

    async def list_category(
        self, media_kind: MediaKind, category: ListCategory, page: int = 1
    ) -> list[CatalogPreview]:
        """Curated list (trending, popular, top rated) for a media kind."""
        ...

    async def movie_detail(self, movie_id: int) -> TitleDetail | None:
        """Movie detail, None if the id is unknown."""
        ...

    async def series_detail(self, series_id: int) -> TitleDetail | None:
        """Series detail, None if the id is unknown."""
        ...

    async def seasons(self, series_id: int) -> list[SeasonSummary]:
        ...

    async def episodes(
        self, series_id: int, season_number: int
    ) -> list[EpisodeSummary]:
        ...
