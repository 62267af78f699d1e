"""Catalog browse use case — curated lists, featured title, detail pages."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Generic, TypeVar

import structlog

from marquee.domain.entities.catalog import (
    LIST_CATEGORIES,
    CatalogPreview,
    EpisodeSummary,
    ListCategory,
    MediaKind,
    PageError,
    SeasonSummary,
    TitleDetail,
)
from marquee.domain.exceptions import CatalogCredentialError, CatalogError
from marquee.domain.ports.catalog import CatalogClientPort

log = structlog.get_logger(__name__)

T = TypeVar("T")

MISSING_KEY_MESSAGE = "Catalog API key is missing."
FETCH_FAILED_MESSAGE = "Failed to load content. Please try again."


@dataclass(frozen=True)
class PageResult(Generic[T]):
    """Data for one page or widget, or the error it should show instead."""

    data: T
    error: PageError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CatalogBrowseUseCase:
    """Read-only catalog pages backed by the injected CatalogClientPort.

    Network-origin failures never escape: they come back as a ``PageResult``
    carrying a ``PageError`` and an empty payload.
    """

    def __init__(self, catalog: CatalogClientPort) -> None:
        self._catalog = catalog
        self._credential_reported = False

    async def category_list(
        self, media_kind: MediaKind, category: ListCategory, page: int = 1
    ) -> PageResult[list[CatalogPreview]]:
        return await self._guard(
            self._catalog.list_category(media_kind, category, page=page),
            empty=[],
            op="list",
            media_kind=media_kind,
            category=category,
            page=page,
        )

    async def browse(
        self, media_kind: MediaKind
    ) -> PageResult[dict[ListCategory, list[CatalogPreview]]]:
        """All curated rows for a browse page; any failing row fails the page."""

        async def _rows() -> dict[ListCategory, list[CatalogPreview]]:
            rows = await asyncio.gather(
                *(
                    self._catalog.list_category(media_kind, category)
                    for category in LIST_CATEGORIES
                )
            )
            return dict(zip(LIST_CATEGORIES, rows))

        return await self._guard(_rows(), empty={}, op="browse", media_kind=media_kind)

    async def featured(
        self, media_kind: MediaKind = "movie"
    ) -> PageResult[CatalogPreview | None]:
        """Hero title for the home page: the first trending entry."""
        result = await self.category_list(media_kind, "trending")
        if not result.ok:
            return PageResult(data=None, error=result.error)
        return PageResult(data=result.data[0] if result.data else None)

    async def detail(
        self, media_kind: MediaKind, catalog_id: int
    ) -> PageResult[TitleDetail | None]:
        if media_kind == "movie":
            fetch = self._catalog.movie_detail(catalog_id)
        else:
            fetch = self._catalog.series_detail(catalog_id)
        return await self._guard(
            fetch, empty=None, op="detail", media_kind=media_kind, catalog_id=catalog_id
        )

    async def seasons(self, series_id: int) -> PageResult[list[SeasonSummary]]:
        return await self._guard(
            self._catalog.seasons(series_id),
            empty=[],
            op="seasons",
            series_id=series_id,
        )

    async def episodes(
        self, series_id: int, season_number: int
    ) -> PageResult[list[EpisodeSummary]]:
        return await self._guard(
            self._catalog.episodes(series_id, season_number),
            empty=[],
            op="episodes",
            series_id=series_id,
            season_number=season_number,
        )

    async def _guard(
        self, fetch: Awaitable[T], *, empty: Any, op: str, **context: Any
    ) -> PageResult[Any]:
        try:
            return PageResult(data=await fetch)
        except CatalogCredentialError:
            if not self._credential_reported:
                log.error("catalog_credential_missing", op=op, **context)
                self._credential_reported = True
            return PageResult(
                data=empty,
                error=PageError(message=MISSING_KEY_MESSAGE, recoverable=False),
            )
        except CatalogError:
            log.warning("catalog_fetch_error", op=op, exc_info=True, **context)
            return PageResult(
                data=empty,
                error=PageError(message=FETCH_FAILED_MESSAGE, recoverable=True),
            )
