"""Catalog REST endpoints (curated lists, featured title, detail pages)."""

from __future__ import annotations

from typing import Any, Callable, cast

import structlog
from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from marquee.application.use_cases.catalog_browse import (
    CatalogBrowseUseCase,
    PageResult,
)
from marquee.domain.entities.catalog import (
    CatalogPreview,
    EpisodeSummary,
    ListCategory,
    MediaKind,
    SeasonSummary,
    TitleDetail,
)
from marquee.infrastructure.tmdb.client import image_url
from marquee.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/catalog", tags=["catalog"])


def _format_preview(preview: CatalogPreview) -> dict[str, Any]:
    return {
        "id": preview.id,
        "media_kind": preview.media_kind,
        "title": preview.title,
        "overview": preview.overview,
        "year": preview.year,
        "rating": preview.rating,
        "poster_url": image_url(preview.poster_path, "w500"),
        "backdrop_url": image_url(preview.backdrop_path, "original"),
    }


def _format_detail(detail: TitleDetail) -> dict[str, Any]:
    return {
        "id": detail.id,
        "media_kind": detail.media_kind,
        "title": detail.title,
        "overview": detail.overview,
        "year": detail.year,
        "rating": detail.rating,
        "genres": list(detail.genres),
        "runtime_minutes": detail.runtime_minutes,
        "number_of_seasons": detail.number_of_seasons,
        "poster_url": image_url(detail.poster_path, "w500"),
        "backdrop_url": image_url(detail.backdrop_path, "original"),
    }


def _format_season(season: SeasonSummary) -> dict[str, Any]:
    return {
        "season_number": season.season_number,
        "name": season.name,
        "episode_count": season.episode_count,
        "year": season.year,
        "poster_url": image_url(season.poster_path, "w300"),
    }


def _format_episode(episode: EpisodeSummary) -> dict[str, Any]:
    return {
        "episode_number": episode.episode_number,
        "name": episode.name,
        "overview": episode.overview,
        "air_date": episode.air_date,
        "still_url": image_url(episode.still_path, "w300"),
    }


def _respond(result: PageResult[Any], render: Callable[[Any], Any]) -> JSONResponse:
    """Map a PageResult to HTTP: 502 recoverable, 503 unconfigured, 404 missing."""
    if result.error is not None:
        status = 502 if result.error.recoverable else 503
        return JSONResponse(
            {"error": result.error.message, "recoverable": result.error.recoverable},
            status_code=status,
        )
    if result.data is None:
        return JSONResponse({"error": "Not found"}, status_code=404)
    return JSONResponse(render(result.data))


def _use_case(request: Request) -> CatalogBrowseUseCase:
    state = cast(AppState, request.app.state)
    return state.catalog_uc


@router.get("/{media_kind}/browse")
async def browse(request: Request, media_kind: MediaKind) -> JSONResponse:
    """All curated rows for a browse page."""
    result = await _use_case(request).browse(media_kind)
    return _respond(
        result,
        lambda rows: {
            category: [_format_preview(p) for p in previews]
            for category, previews in rows.items()
        },
    )


@router.get("/{media_kind}/featured")
async def featured(request: Request, media_kind: MediaKind) -> JSONResponse:
    result = await _use_case(request).featured(media_kind)
    return _respond(result, _format_preview)


@router.get("/{media_kind}/list/{category}")
async def category_list(
    request: Request,
    media_kind: MediaKind,
    category: ListCategory,
    page: int = Query(default=1, ge=1),
) -> JSONResponse:
    result = await _use_case(request).category_list(media_kind, category, page=page)
    return _respond(
        result,
        lambda previews: {
            "page": page,
            "results": [_format_preview(p) for p in previews],
        },
    )


@router.get("/movie/{catalog_id}")
async def movie_detail(request: Request, catalog_id: int) -> JSONResponse:
    result = await _use_case(request).detail("movie", catalog_id)
    return _respond(result, _format_detail)


@router.get("/series/{catalog_id}")
async def series_detail(request: Request, catalog_id: int) -> JSONResponse:
    result = await _use_case(request).detail("series", catalog_id)
    return _respond(result, _format_detail)


@router.get("/series/{catalog_id}/seasons")
async def seasons(request: Request, catalog_id: int) -> JSONResponse:
    result = await _use_case(request).seasons(catalog_id)
    return _respond(result, lambda rows: [_format_season(s) for s in rows])


@router.get("/series/{catalog_id}/seasons/{season_number}/episodes")
async def episodes(
    request: Request, catalog_id: int, season_number: int
) -> JSONResponse:
    result = await _use_case(request).episodes(catalog_id, season_number)
    return _respond(result, lambda rows: [_format_episode(e) for e in rows])
