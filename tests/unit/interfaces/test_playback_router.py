"""Tests for the playback router (provider table, sources, player WebSocket)."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.testclient import TestClient

from marquee.infrastructure.config.schema import PlaybackConfig
from marquee.infrastructure.providers.registry import EmbedProviderRegistry
from marquee.interfaces.api.playback.router import router


def _make_app() -> FastAPI:
    """Create a minimal FastAPI app with the playback router."""
    app = FastAPI()
    app.include_router(router)
    app.state.provider_registry = EmbedProviderRegistry.from_config(
        PlaybackConfig().providers
    )
    return app


class TestProviders:
    def test_lists_providers_in_cycle_order(self) -> None:
        client = TestClient(_make_app())

        resp = client.get("/playback/providers")

        assert resp.status_code == 200
        assert resp.json() == [
            {"index": 0, "name": "vidsrc", "label": "Vidsrc"},
            {"index": 1, "name": "2embed", "label": "2Embed"},
            {"index": 2, "name": "superembed", "label": "SuperEmbed"},
        ]


class TestSources:
    def test_episode_sources(self) -> None:
        client = TestClient(_make_app())

        resp = client.get(
            "/playback/sources/series/1396", params={"season": 2, "episode": 5}
        )

        assert resp.status_code == 200
        assert [s["url"] for s in resp.json()["sources"]] == [
            "https://vidsrc.xyz/embed/tv?tmdb=1396&season=2&episode=5",
            "https://2embed.org/embed/tv?tmdb=1396&s=2&e=5",
            "https://multiembed.mov/?video=tmdb:1396&s=2&e=5",
        ]

    def test_series_without_episode_uses_show_urls(self) -> None:
        client = TestClient(_make_app())

        resp = client.get("/playback/sources/series/1396", params={"season": 2})

        assert resp.json()["sources"][0]["url"] == "https://vidsrc.xyz/embed/tv?tmdb=1396"

    def test_movie_with_season_is_rejected(self) -> None:
        client = TestClient(_make_app())

        resp = client.get("/playback/sources/movie/603", params={"season": 1})

        assert resp.status_code == 422
        assert "season" in resp.json()["error"]


class TestPlaybackSocket:
    def test_fail_and_advance_cycle(self) -> None:
        client = TestClient(_make_app())

        with client.websocket_connect("/playback/ws") as ws:
            ws.send_json({"type": "open", "media_kind": "movie", "id": 603})
            opened = ws.receive_json()
            ws.send_json({"type": "failed"})
            failed = ws.receive_json()
            ws.send_json({"type": "advance"})
            advanced = ws.receive_json()
            ws.send_json({"type": "loaded"})
            playing = ws.receive_json()

        assert opened["type"] == "playback_state"
        assert opened["provider"] == "vidsrc"
        assert opened["load_state"] == "pending"
        assert opened["title"] == "Now Playing"
        assert failed["load_state"] == "failed"
        assert failed["error"] == (
            "Failed to load the video player. Please try a different source."
        )
        assert advanced["provider"] == "2embed"
        assert advanced["embed_url"] == "https://2embed.org/embed/movie?tmdb=603"
        assert advanced["error"] is None
        assert playing["load_state"] == "playing"
        assert playing["confirm_on_leave"] is True

    def test_advance_while_pending_is_error(self) -> None:
        client = TestClient(_make_app())

        with client.websocket_connect("/playback/ws") as ws:
            ws.send_json(
                {"type": "open", "media_kind": "series", "id": 1396, "title": "Breaking Bad"}
            )
            opened = ws.receive_json()
            ws.send_json({"type": "advance"})
            error = ws.receive_json()

        assert opened["title"] == "Breaking Bad"
        assert error == {"type": "error", "message": "Cannot switch source while pending"}

    def test_dismiss_advisory(self) -> None:
        client = TestClient(_make_app())

        with client.websocket_connect("/playback/ws") as ws:
            ws.send_json({"type": "open", "media_kind": "movie", "id": 603})
            opened = ws.receive_json()
            ws.send_json({"type": "dismiss_advisory"})
            dismissed = ws.receive_json()

        assert opened["show_advisory"] is True
        assert dismissed["show_advisory"] is False
        assert dismissed["advisory_message"] is None

    def test_actions_without_session_are_errors(self) -> None:
        client = TestClient(_make_app())

        with client.websocket_connect("/playback/ws") as ws:
            ws.send_json({"type": "dismiss_advisory"})
            error = ws.receive_json()
            ws.send_json({"type": "open", "media_kind": "movie", "id": "x"})
            bad_open = ws.receive_json()
            ws.send_json({"type": "open", "media_kind": "movie", "id": 1, "season": 1})
            movie_season = ws.receive_json()

        assert error == {"type": "error", "message": "No open playback session"}
        assert bad_open["message"] == "'id' must be an integer"
        assert "does not take season" in movie_season["message"]
