"""Tests for PlaybackRequest validation and EmbedProvider URL templates."""

from __future__ import annotations

import pytest

from marquee.domain.entities.playback import EmbedProvider, PlaybackRequest

_PROVIDER = EmbedProvider(
    name="demo",
    label="Demo",
    movie_template="https://demo.example/movie/{id}",
    show_template="https://demo.example/tv/{id}",
    episode_template="https://demo.example/tv/{id}/{season}/{episode}",
)


class TestPlaybackRequest:
    def test_movie_rejects_season(self) -> None:
        with pytest.raises(ValueError, match="does not take season"):
            PlaybackRequest(media_kind="movie", catalog_id=1, season=1)

    def test_rejects_non_positive_id(self) -> None:
        with pytest.raises(ValueError, match="positive"):
            PlaybackRequest(media_kind="movie", catalog_id=0)

    def test_rejects_unknown_kind(self) -> None:
        with pytest.raises(ValueError, match="Unsupported media kind"):
            PlaybackRequest(media_kind="person", catalog_id=1)  # type: ignore[arg-type]

    def test_rejects_negative_episode(self) -> None:
        with pytest.raises(ValueError, match="episode must be >= 0"):
            PlaybackRequest(media_kind="series", catalog_id=1, season=1, episode=-1)

    def test_episode_target_requires_both(self) -> None:
        assert PlaybackRequest("series", 1, season=1).episode_target is None
        assert PlaybackRequest("series", 1, episode=3).episode_target is None
        assert PlaybackRequest("series", 1, season=1, episode=3).episode_target == (1, 3)

    def test_season_zero_is_a_real_season(self) -> None:
        assert PlaybackRequest("series", 1, season=0, episode=1).episode_target == (0, 1)


class TestEmbedProviderBuildUrl:
    def test_movie(self) -> None:
        assert _PROVIDER.build_url(PlaybackRequest("movie", 603)) == (
            "https://demo.example/movie/603"
        )

    def test_show_level_when_episode_missing(self) -> None:
        request = PlaybackRequest("series", 1396, season=2)
        assert _PROVIDER.build_url(request) == "https://demo.example/tv/1396"

    def test_episode(self) -> None:
        request = PlaybackRequest("series", 1396, season=2, episode=5)
        assert _PROVIDER.build_url(request) == "https://demo.example/tv/1396/2/5"
