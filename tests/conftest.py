"""Shared test fixtures for the marquee test suite."""

from __future__ import annotations

import pytest

from fakes import FakeCatalog
from marquee.domain.entities.catalog import ResultItem
from marquee.domain.entities.playback import EmbedProvider, PlaybackRequest
from marquee.infrastructure.config.defaults import DEFAULT_PROVIDERS


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def fake_catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture()
def providers() -> tuple[EmbedProvider, ...]:
    """The default three-provider table (vidsrc, 2embed, superembed)."""
    return tuple(EmbedProvider(**row) for row in DEFAULT_PROVIDERS)


@pytest.fixture()
def movie_request() -> PlaybackRequest:
    return PlaybackRequest(media_kind="movie", catalog_id=603, title="The Matrix")


@pytest.fixture()
def episode_request() -> PlaybackRequest:
    return PlaybackRequest(
        media_kind="series", catalog_id=1396, season=2, episode=5, title="Breaking Bad"
    )


@pytest.fixture()
def tv_result() -> ResultItem:
    return ResultItem(
        media_kind="series",
        id=1396,
        display_title="Breaking Bad",
        poster_path="/ggFHVNu6YYI5L9pCfOacjizRGt.jpg",
        year=2008,
    )
