"""Tests for catalog value objects and search result projection."""

from __future__ import annotations

import pytest

from marquee.domain.entities.catalog import (
    NavigationTarget,
    ResultItem,
    from_catalog_kind,
    parse_year,
    project_search_results,
    to_catalog_kind,
)


class TestKindMapping:
    def test_series_maps_to_tv(self) -> None:
        assert to_catalog_kind("series") == "tv"
        assert to_catalog_kind("movie") == "movie"

    def test_unknown_kind_raises(self) -> None:
        with pytest.raises(ValueError, match="Unsupported media kind"):
            to_catalog_kind("person")  # type: ignore[arg-type]

    def test_from_catalog_kind(self) -> None:
        assert from_catalog_kind("tv") == "series"
        assert from_catalog_kind("movie") == "movie"
        assert from_catalog_kind("person") is None
        assert from_catalog_kind(None) is None


class TestParseYear:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [("1999-03-31", 1999), ("2008", 2008), ("", None), (None, None), ("n/a", None)],
    )
    def test_parse_year(self, value: str | None, expected: int | None) -> None:
        assert parse_year(value) == expected


class TestProjectSearchResults:
    def test_keeps_only_movies_and_series_in_order(self) -> None:
        records = [
            {"id": 1, "media_type": "tv", "name": "Dark", "first_air_date": "2017-12-01"},
            {"id": 2, "media_type": "person", "name": "Someone"},
            {"id": 3, "media_type": "movie", "title": "Heat", "release_date": "1995-12-15"},
            {"id": 4, "media_type": "collection", "name": "Box"},
        ]

        items = project_search_results(records)

        assert items == [
            ResultItem(media_kind="series", id=1, display_title="Dark", year=2017),
            ResultItem(media_kind="movie", id=3, display_title="Heat", year=1995),
        ]

    def test_record_without_kind_is_dropped(self) -> None:
        assert project_search_results([{"id": 1, "title": "Untyped"}]) == []

    def test_missing_poster_and_date(self) -> None:
        [item] = project_search_results(
            [{"id": 9, "media_type": "movie", "title": "Bare", "poster_path": None}]
        )
        assert item.poster_path is None
        assert item.year is None

    def test_non_integer_id_is_dropped(self) -> None:
        assert project_search_results([{"id": "x", "media_type": "movie"}]) == []


class TestNavigationTarget:
    def test_paths(self) -> None:
        assert NavigationTarget("movie", 603).path == "/movie/603"
        assert NavigationTarget("series", 1396).path == "/tv/1396"

    def test_target_is_kind_and_id_only(self) -> None:
        with pytest.raises(TypeError):
            NavigationTarget("series", 1396, 2, 5)  # type: ignore[call-arg]
