"""Shared plumbing for the session WebSockets (search, playback)."""

from __future__ import annotations

import asyncio
import json
from contextlib import suppress
from typing import Any

import structlog
from fastapi import WebSocket, WebSocketDisconnect

log = structlog.get_logger(__name__)


class MessageError(ValueError):
    """A client message that cannot be acted on; answered with an error frame."""


def parse_message(raw: str) -> tuple[str, dict[str, Any]]:
    """Decode one client frame into ``(type, payload)``."""
    try:
        message = json.loads(raw)
    except ValueError as exc:
        raise MessageError("Message is not valid JSON") from exc
    if not isinstance(message, dict):
        raise MessageError("Message must be a JSON object")
    kind = message.get("type")
    if not isinstance(kind, str):
        raise MessageError("Message needs a string 'type'")
    return kind, message


def error_frame(message: str) -> dict[str, str]:
    return {"type": "error", "message": message}


async def pump(websocket: WebSocket, outbox: asyncio.Queue[dict[str, Any]]) -> None:
    """Forward queued frames to the client until the socket goes away."""
    try:
        while True:
            frame = await outbox.get()
            await websocket.send_json(frame)
    except WebSocketDisconnect:
        log.debug("websocket_send_disconnected")


async def stop_pump(task: asyncio.Task[None]) -> None:
    task.cancel()
    with suppress(asyncio.CancelledError):
        await task
