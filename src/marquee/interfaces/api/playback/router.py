"""Playback endpoints: provider table, source URLs and the player WebSocket."""

from __future__ import annotations

import asyncio
from typing import Any, cast

import structlog
from fastapi import APIRouter, Query, Request, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse

from marquee.application.use_cases.source_resolver import SourceResolver
from marquee.domain.entities.catalog import MediaKind
from marquee.domain.entities.playback import PlaybackRequest, PlaybackSnapshot
from marquee.domain.exceptions import PlaybackError
from marquee.interfaces.api.websocket import (
    MessageError,
    error_frame,
    parse_message,
    pump,
    stop_pump,
)
from marquee.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/playback", tags=["playback"])


def _format_playback_state(snapshot: PlaybackSnapshot) -> dict[str, Any]:
    return {
        "type": "playback_state",
        "provider": snapshot.provider,
        "provider_label": snapshot.provider_label,
        "provider_index": snapshot.provider_index,
        "provider_count": snapshot.provider_count,
        "embed_url": snapshot.embed_url,
        "load_state": snapshot.load_state.value,
        "show_advisory": snapshot.show_advisory,
        "advisory_message": snapshot.advisory_message,
        "error": snapshot.error,
        "title": snapshot.title,
        "confirm_on_leave": snapshot.confirm_on_leave,
    }


def _optional_int(message: dict[str, Any], key: str) -> int | None:
    value = message.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise MessageError(f"'{key}' must be an integer")
    return value


def _parse_open(message: dict[str, Any]) -> PlaybackRequest:
    catalog_id = _optional_int(message, "id")
    if catalog_id is None:
        raise MessageError("'open' needs an integer 'id'")
    title = message.get("title") or ""
    if not isinstance(title, str):
        raise MessageError("'title' must be a string")
    try:
        return PlaybackRequest(
            media_kind=message.get("media_kind"),  # type: ignore[arg-type]
            catalog_id=catalog_id,
            season=_optional_int(message, "season"),
            episode=_optional_int(message, "episode"),
            title=title,
        )
    except ValueError as exc:
        raise MessageError(str(exc)) from exc


def _dispatch(resolver: SourceResolver, kind: str, message: dict[str, Any]) -> None:
    if kind == "open":
        resolver.open(_parse_open(message))
    elif kind == "loaded":
        resolver.on_load()
    elif kind == "failed":
        resolver.on_error()
    elif kind == "advance":
        resolver.advance_provider()
    elif kind == "dismiss_advisory":
        resolver.dismiss_advisory()
    elif kind == "close":
        resolver.close()
    else:
        raise MessageError(f"Unknown message type: {kind!r}")


@router.get("/providers")
async def providers(request: Request) -> list[dict[str, Any]]:
    """Embed providers in the order they are tried."""
    state = cast(AppState, request.app.state)
    return [
        {"index": index, "name": p.name, "label": p.label}
        for index, p in enumerate(state.provider_registry.ordered())
    ]


@router.get("/sources/{media_kind}/{catalog_id}")
async def sources(
    request: Request,
    media_kind: MediaKind,
    catalog_id: int,
    season: int | None = Query(default=None),
    episode: int | None = Query(default=None),
) -> JSONResponse:
    """Every provider's embed URL for one title, in cycle order."""
    state = cast(AppState, request.app.state)
    try:
        playback = PlaybackRequest(
            media_kind=media_kind,
            catalog_id=catalog_id,
            season=season,
            episode=episode,
        )
    except ValueError as exc:
        return JSONResponse({"error": str(exc)}, status_code=422)

    ordered = state.provider_registry.ordered()
    resolver = SourceResolver(ordered)
    return JSONResponse(
        {
            "media_kind": media_kind,
            "id": catalog_id,
            "season": season,
            "episode": episode,
            "sources": [
                {"provider": p.name, "label": p.label, "url": url}
                for p, url in zip(ordered, resolver.embed_urls(playback))
            ],
        }
    )


@router.websocket("/ws")
async def playback_ws(websocket: WebSocket) -> None:
    state = cast(AppState, websocket.app.state)

    await websocket.accept()
    outbox: asyncio.Queue[dict[str, Any]] = asyncio.Queue()
    resolver = SourceResolver(
        state.provider_registry.ordered(),
        listener=lambda snapshot: outbox.put_nowait(_format_playback_state(snapshot)),
    )
    sender = asyncio.create_task(pump(websocket, outbox))
    log.info("playback_session_connected")

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                kind, message = parse_message(raw)
                _dispatch(resolver, kind, message)
            except (MessageError, PlaybackError) as exc:
                log.debug("playback_message_rejected", reason=str(exc))
                outbox.put_nowait(error_frame(str(exc)))
    except WebSocketDisconnect:
        log.info("playback_session_disconnected")
    finally:
        await stop_pump(sender)
        resolver.close()
