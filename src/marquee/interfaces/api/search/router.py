"""Search WebSocket: one QueryController per connection."""

from __future__ import annotations

import asyncio
from typing import Any, cast

import structlog
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from marquee.application.use_cases.query_controller import QueryController
from marquee.domain.entities.catalog import NavigationTarget, ResultItem
from marquee.domain.entities.search import SearchSnapshot
from marquee.infrastructure.tmdb.client import image_url
from marquee.interfaces.api.websocket import (
    MessageError,
    error_frame,
    parse_message,
    pump,
    stop_pump,
)
from marquee.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/search", tags=["search"])


def _format_result(item: ResultItem) -> dict[str, Any]:
    return {
        "media_kind": item.media_kind,
        "id": item.id,
        "title": item.display_title,
        "year": item.year,
        "poster_url": image_url(item.poster_path, "w92"),
    }


def _format_search_state(snapshot: SearchSnapshot) -> dict[str, Any]:
    return {
        "type": "search_state",
        "query": snapshot.query_text,
        "status": snapshot.status.value,
        "results": [_format_result(r) for r in snapshot.results],
        "error": snapshot.error,
        "empty_message": snapshot.empty_message,
        "open": snapshot.is_open,
    }


def _format_navigate(target: NavigationTarget) -> dict[str, Any]:
    return {
        "type": "navigate",
        "path": target.path,
        "media_kind": target.media_kind,
        "id": target.catalog_id,
    }


def _find_result(controller: QueryController, message: dict[str, Any]) -> ResultItem:
    media_kind = message.get("media_kind")
    catalog_id = message.get("id")
    for item in controller.session.results:
        if item.media_kind == media_kind and item.id == catalog_id:
            return item
    raise MessageError(f"No search result {media_kind}/{catalog_id}")


def _dispatch(controller: QueryController, kind: str, message: dict[str, Any]) -> None:
    if kind == "query":
        text = message.get("text")
        if not isinstance(text, str):
            raise MessageError("'query' needs a string 'text'")
        controller.set_query_text(text)
    elif kind == "submit":
        controller.flush()
    elif kind == "select":
        controller.select_result(_find_result(controller, message))
    elif kind == "open":
        controller.open()
    elif kind == "close":
        controller.close()
    else:
        raise MessageError(f"Unknown message type: {kind!r}")


@router.websocket("/ws")
async def search_ws(websocket: WebSocket) -> None:
    state = cast(AppState, websocket.app.state)
    config = state.config

    await websocket.accept()
    outbox: asyncio.Queue[dict[str, Any]] = asyncio.Queue()
    controller = QueryController(
        state.catalog_client,
        debounce_seconds=config.search.debounce_seconds,
        min_query_length=config.search.min_query_length,
        listener=lambda snapshot: outbox.put_nowait(_format_search_state(snapshot)),
        navigate=lambda target: outbox.put_nowait(_format_navigate(target)),
    )
    sender = asyncio.create_task(pump(websocket, outbox))
    log.info("search_session_connected")

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                kind, message = parse_message(raw)
                _dispatch(controller, kind, message)
            except MessageError as exc:
                log.debug("search_message_rejected", reason=str(exc))
                outbox.put_nowait(error_frame(str(exc)))
    except WebSocketDisconnect:
        log.info("search_session_disconnected")
    finally:
        await stop_pump(sender)
        controller.close()
