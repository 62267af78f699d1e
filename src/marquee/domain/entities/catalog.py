"""Domain entities for the media catalog.

Pure value objects — no framework dependencies, no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Literal

MediaKind = Literal["movie", "series"]
CatalogKind = Literal["movie", "tv"]
ListCategory = Literal["trending", "popular", "top_rated"]

LIST_CATEGORIES: tuple[ListCategory, ...] = ("trending", "popular", "top_rated")

# Catalog wire kind <-> domain media kind
_KIND_FROM_CATALOG: dict[str, MediaKind] = {"movie": "movie", "tv": "series"}
_KIND_TO_CATALOG: dict[MediaKind, CatalogKind] = {"movie": "movie", "series": "tv"}


def to_catalog_kind(media_kind: MediaKind) -> CatalogKind:
    """Map a domain media kind to the catalog's path segment ("movie"/"tv")."""
    try:
        return _KIND_TO_CATALOG[media_kind]
    except KeyError:
        raise ValueError(f"Unsupported media kind: {media_kind!r}") from None


def from_catalog_kind(kind: str | None) -> MediaKind | None:
    """Map a catalog kind discriminator to a media kind, None for other kinds."""
    if kind is None:
        return None
    return _KIND_FROM_CATALOG.get(kind)


def parse_year(date_str: str | None) -> int | None:
    """Return the year of an ISO date string ("1999-03-31" -> 1999)."""
    if not date_str or len(date_str) < 4 or not date_str[:4].isdigit():
        return None
    return int(date_str[:4])


@dataclass(frozen=True)
class ResultItem:
    """One search hit, projected from a raw catalog record."""

    media_kind: MediaKind
    id: int
    display_title: str
    poster_path: str | None = None
    year: int | None = None


def project_search_results(records: Iterable[dict[str, Any]]) -> list[ResultItem]:
    """Keep movie/series records of a multi-type search, in original order.

    Records of any other kind (``person``, ``collection``, ...) or without a
    usable id are dropped.
    """
    items: list[ResultItem] = []
    for record in records:
        media_kind = from_catalog_kind(record.get("media_type"))
        if media_kind is None:
            continue
        raw_id = record.get("id")
        if not isinstance(raw_id, int):
            continue
        date_str = record.get("release_date") or record.get("first_air_date")
        items.append(
            ResultItem(
                media_kind=media_kind,
                id=raw_id,
                display_title=record.get("title") or record.get("name") or "",
                poster_path=record.get("poster_path") or None,
                year=parse_year(date_str),
            )
        )
    return items


@dataclass(frozen=True)
class NavigationTarget:
    """Where the router should go after a selection."""

    media_kind: MediaKind
    catalog_id: int

    @property
    def path(self) -> str:
        return f"/{to_catalog_kind(self.media_kind)}/{self.catalog_id}"


@dataclass(frozen=True)
class CatalogPreview:
    """A title in a curated list (trending, popular, top rated)."""

    id: int
    media_kind: MediaKind
    title: str
    poster_path: str | None = None
    backdrop_path: str | None = None
    overview: str = ""
    year: int | None = None
    rating: float | None = None


@dataclass(frozen=True)
class TitleDetail:
    """Detail page data for a movie or a series."""

    id: int
    media_kind: MediaKind
    title: str
    overview: str = ""
    poster_path: str | None = None
    backdrop_path: str | None = None
    year: int | None = None
    rating: float | None = None
    genres: list[str] = field(default_factory=list)
    runtime_minutes: int | None = None  # movies only
    number_of_seasons: int | None = None  # series only


@dataclass(frozen=True)
class SeasonSummary:
    season_number: int
    name: str
    episode_count: int = 0
    year: int | None = None
    poster_path: str | None = None


@dataclass(frozen=True)
class EpisodeSummary:
    episode_number: int
    name: str
    overview: str = ""
    still_path: str | None = None
    air_date: str | None = None


@dataclass(frozen=True)
class PageError:
    """Error shown locally on a page or overlay.

    ``recoverable`` is False for static misconfiguration (missing API key),
    which must not be retried.
    """

    message: str
    recoverable: bool = True
