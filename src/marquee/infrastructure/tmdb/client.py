"""TMDB API client — async httpx implementation with caching."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from marquee.domain.entities.catalog import (
    LIST_CATEGORIES,
    CatalogPreview,
    EpisodeSummary,
    ListCategory,
    MediaKind,
    SeasonSummary,
    TitleDetail,
    parse_year,
    to_catalog_kind,
)
from marquee.domain.exceptions import CatalogCredentialError, CatalogUnavailableError
from marquee.domain.ports.cache import CachePort

log = structlog.get_logger(__name__)

_BASE_URL = "https://api.themoviedb.org/3"
_IMAGE_BASE = "https://image.tmdb.org/t/p"

# Cache TTLs (seconds)
_TTL_LIST = 21_600  # 6 hours
_TTL_DETAIL = 86_400  # 24 hours

# category -> path template over the catalog kind
_LIST_PATHS: dict[ListCategory, str] = {
    "trending": "/trending/{kind}/week",
    "popular": "/{kind}/popular",
    "top_rated": "/{kind}/top_rated",
}


def image_url(path: str | None, size: str = "w500") -> str | None:
    """Absolute image URL for a TMDB poster/backdrop/still path."""
    if not path:
        return None
    return f"{_IMAGE_BASE}/{size}{path}"


def _rating(item: dict[str, Any]) -> float | None:
    value = item.get("vote_average")
    return float(value) if value else None


class HttpxTmdbClient:
    """Async TMDB client using httpx + CachePort.

    Implements ``CatalogClientPort`` from domain.ports.catalog. Multi-type
    search is never cached; lists and details are.
    """

    def __init__(
        self,
        *,
        api_key: str | None,
        http_client: httpx.AsyncClient,
        cache: CachePort,
        language: str = "en-US",
    ) -> None:
        self._api_key = api_key
        self._http = http_client
        self._cache = cache
        self._language = language

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _params(self, **extra: Any) -> dict[str, Any]:
        return {"api_key": self._api_key, "language": self._language, **extra}

    async def _get(self, path: str, **extra: Any) -> dict[str, Any] | None:
        """GET a catalog resource. Returns parsed JSON, or None on 404.

        Raises:
            CatalogCredentialError: no API key configured, or HTTP 401.
            CatalogUnavailableError: network failure or other HTTP error.
        """
        if not self._api_key:
            raise CatalogCredentialError("TMDB API key is not configured")

        url = f"{_BASE_URL}{path}"
        try:
            resp = await self._http.get(url, params=self._params(**extra))
        except httpx.HTTPError as exc:
            log.warning("tmdb_network_error", path=path, error=type(exc).__name__)
            raise CatalogUnavailableError(f"TMDB request failed: {path}") from exc

        if resp.status_code == 401:
            log.error("tmdb_api_key_invalid", status=401)
            raise CatalogCredentialError("TMDB rejected the API key")
        if resp.status_code == 404:
            log.debug("tmdb_resource_not_found", path=path)
            return None
        if resp.is_error:
            log.warning("tmdb_http_error", path=path, status=resp.status_code)
            raise CatalogUnavailableError(
                f"TMDB returned HTTP {resp.status_code} for {path}"
            )

        try:
            return resp.json()
        except ValueError as exc:
            log.warning("tmdb_invalid_json", path=path)
            raise CatalogUnavailableError(f"TMDB returned invalid JSON: {path}") from exc

    def _cache_key(self, *parts: Any) -> str:
        return ":".join(["tmdb", self._language, *map(str, parts)])

    @staticmethod
    def _to_preview(item: dict[str, Any], media_kind: MediaKind) -> CatalogPreview:
        return CatalogPreview(
            id=item.get("id", 0),
            media_kind=media_kind,
            title=item.get("title") or item.get("name") or "",
            poster_path=item.get("poster_path") or None,
            backdrop_path=item.get("backdrop_path") or None,
            overview=item.get("overview", ""),
            year=parse_year(item.get("release_date") or item.get("first_air_date")),
            rating=_rating(item),
        )

    @staticmethod
    def _to_detail(data: dict[str, Any], media_kind: MediaKind) -> TitleDetail:
        return TitleDetail(
            id=data.get("id", 0),
            media_kind=media_kind,
            title=data.get("title") or data.get("name") or "",
            overview=data.get("overview", ""),
            poster_path=data.get("poster_path") or None,
            backdrop_path=data.get("backdrop_path") or None,
            year=parse_year(data.get("release_date") or data.get("first_air_date")),
            rating=_rating(data),
            genres=[g["name"] for g in data.get("genres", []) if g.get("name")],
            runtime_minutes=data.get("runtime") or None,
            number_of_seasons=data.get("number_of_seasons"),
        )

    async def _series_payload(self, series_id: int) -> dict[str, Any] | None:
        """Raw ``/tv/{id}`` payload, shared by series_detail() and seasons()."""
        cache_key = self._cache_key("tv", series_id)
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        data = await self._get(f"/tv/{series_id}")
        if data is not None:
            await self._cache.set(cache_key, data, ttl=_TTL_DETAIL)
        return data

    # ------------------------------------------------------------------
    # Public API (CatalogClientPort)
    # ------------------------------------------------------------------

    async def search_multi(self, query: str, page: int = 1) -> list[dict[str, Any]]:
        """Multi-type search. Raw records, ``media_type`` left as TMDB sends it."""
        data = await self._get(
            "/search/multi", query=query, page=page, include_adult="false"
        )
        if data is None:
            return []
        return list(data.get("results", []))

    async def list_category(
        self, media_kind: MediaKind, category: ListCategory, page: int = 1
    ) -> list[CatalogPreview]:
        if category not in LIST_CATEGORIES:
            raise ValueError(f"Unknown list category: {category!r}")
        kind = to_catalog_kind(media_kind)
        cache_key = self._cache_key("list", kind, category, page)
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        data = await self._get(_LIST_PATHS[category].format(kind=kind), page=page)
        if data is None:
            return []

        previews = [self._to_preview(i, media_kind) for i in data.get("results", [])]
        await self._cache.set(cache_key, previews, ttl=_TTL_LIST)
        return previews

    async def movie_detail(self, movie_id: int) -> TitleDetail | None:
        cache_key = self._cache_key("movie", movie_id)
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return self._to_detail(cached, "movie")

        data = await self._get(f"/movie/{movie_id}")
        if data is None:
            return None
        await self._cache.set(cache_key, data, ttl=_TTL_DETAIL)
        return self._to_detail(data, "movie")

    async def series_detail(self, series_id: int) -> TitleDetail | None:
        data = await self._series_payload(series_id)
        if data is None:
            return None
        return self._to_detail(data, "series")

    async def seasons(self, series_id: int) -> list[SeasonSummary]:
        data = await self._series_payload(series_id)
        if data is None:
            return []
        return [
            SeasonSummary(
                season_number=s.get("season_number", 0),
                name=s.get("name") or f"Season {s.get('season_number', 0)}",
                episode_count=s.get("episode_count") or 0,
                year=parse_year(s.get("air_date")),
                poster_path=s.get("poster_path") or None,
            )
            for s in data.get("seasons", [])
        ]

    async def episodes(
        self, series_id: int, season_number: int
    ) -> list[EpisodeSummary]:
        cache_key = self._cache_key("tv", series_id, "season", season_number)
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        data = await self._get(f"/tv/{series_id}/season/{season_number}")
        if data is None:
            return []

        episodes = [
            EpisodeSummary(
                episode_number=e.get("episode_number", 0),
                name=e.get("name", ""),
                overview=e.get("overview", ""),
                still_path=e.get("still_path") or None,
                air_date=e.get("air_date") or None,
            )
            for e in data.get("episodes", [])
        ]
        await self._cache.set(cache_key, episodes, ttl=_TTL_LIST)
        return episodes
