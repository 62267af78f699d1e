"""Playback source resolver — picks an embed provider and cycles on failure.

State machine per open player::

    open ──> pending ──load──> playing
                │
              error
                v
             failed ──advance──> pending (next provider, wraps around)

Embed frames only report load/error, so a failure is surfaced to the user
with an explicit "try a different source" action; nothing retries on its own.
"""

from __future__ import annotations

from typing import Callable, Sequence

import structlog

from marquee.domain.entities.playback import (
    ADVISORY_MESSAGE,
    DEFAULT_PLAYER_TITLE,
    LOAD_FAILED_MESSAGE,
    EmbedProvider,
    LoadState,
    PlaybackRequest,
    PlaybackSession,
    PlaybackSnapshot,
)
from marquee.domain.exceptions import (
    InvalidTransitionError,
    PlaybackSessionClosedError,
)

log = structlog.get_logger(__name__)

PlaybackListener = Callable[[PlaybackSnapshot], None]


def build_embed_url(provider: EmbedProvider, request: PlaybackRequest) -> str:
    """Pure mapping (provider, request) -> embed URL."""
    return provider.build_url(request)


class SourceResolver:
    """Owns the lifecycle of one playback attempt at a time."""

    def __init__(
        self,
        providers: Sequence[EmbedProvider],
        *,
        listener: PlaybackListener | None = None,
    ) -> None:
        if not providers:
            raise ValueError("SourceResolver needs at least one embed provider")
        self._providers = tuple(providers)
        self._listener = listener
        self._session: PlaybackSession | None = None

    @property
    def providers(self) -> tuple[EmbedProvider, ...]:
        return self._providers

    @property
    def session(self) -> PlaybackSession | None:
        return self._session

    def embed_urls(self, request: PlaybackRequest) -> list[str]:
        """Every provider's URL for *request*, in cycle order."""
        return [build_embed_url(p, request) for p in self._providers]

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def open(self, request: PlaybackRequest) -> PlaybackSnapshot:
        self._session = PlaybackSession(request=request)
        log.info(
            "playback_opened",
            media_kind=request.media_kind,
            catalog_id=request.catalog_id,
            season=request.season,
            episode=request.episode,
            provider=self._providers[0].name,
        )
        return self._emit()

    def on_load(self) -> PlaybackSnapshot | None:
        session = self._live_session()
        if session is None:
            log.debug("playback_load_after_close")
            return None
        if session.load_state is LoadState.PENDING:
            session.load_state = LoadState.PLAYING
            log.info("playback_started", provider=self._provider(session).name)
            return self._emit()
        if session.load_state is LoadState.FAILED:
            log.debug("playback_load_ignored", state=session.load_state.value)
        return self.snapshot()

    def on_error(self) -> PlaybackSnapshot | None:
        session = self._live_session()
        if session is None:
            log.debug("playback_error_after_close")
            return None
        if session.load_state is LoadState.PENDING:
            session.load_state = LoadState.FAILED
            log.warning("playback_provider_failed", provider=self._provider(session).name)
            return self._emit()
        if session.load_state is LoadState.PLAYING:
            log.debug("playback_error_ignored", state=session.load_state.value)
        return self.snapshot()

    def advance_provider(self) -> PlaybackSnapshot:
        session = self._require_session()
        if session.load_state is not LoadState.FAILED:
            raise InvalidTransitionError(
                f"Cannot switch source while {session.load_state.value}"
            )
        previous = self._provider(session).name
        session.provider_index = (session.provider_index + 1) % len(self._providers)
        session.load_state = LoadState.PENDING
        log.info(
            "playback_provider_advanced",
            previous=previous,
            provider=self._provider(session).name,
            provider_index=session.provider_index,
        )
        return self._emit()

    def dismiss_advisory(self) -> PlaybackSnapshot:
        session = self._require_session()
        if not session.dismissed_advisory:
            session.dismissed_advisory = True
            return self._emit()
        return self.snapshot()

    def close(self) -> None:
        if self._session is None or self._session.closed:
            return
        self._session.closed = True
        log.info("playback_closed", catalog_id=self._session.request.catalog_id)
        self._session = None

    def snapshot(self) -> PlaybackSnapshot:
        session = self._require_session()
        provider = self._provider(session)
        failed = session.load_state is LoadState.FAILED
        return PlaybackSnapshot(
            provider=provider.name,
            provider_label=provider.label,
            provider_index=session.provider_index,
            provider_count=len(self._providers),
            embed_url=build_embed_url(provider, session.request),
            load_state=session.load_state,
            show_advisory=not session.dismissed_advisory,
            advisory_message=None if session.dismissed_advisory else ADVISORY_MESSAGE,
            error=LOAD_FAILED_MESSAGE if failed else None,
            title=session.request.title or DEFAULT_PLAYER_TITLE,
            confirm_on_leave=session.load_state is LoadState.PLAYING,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _provider(self, session: PlaybackSession) -> EmbedProvider:
        return self._providers[session.provider_index]

    def _live_session(self) -> PlaybackSession | None:
        if self._session is None or self._session.closed:
            return None
        return self._session

    def _require_session(self) -> PlaybackSession:
        session = self._live_session()
        if session is None:
            raise PlaybackSessionClosedError("No open playback session")
        return session

    def _emit(self) -> PlaybackSnapshot:
        snapshot = self.snapshot()
        if self._listener is not None:
            self._listener(snapshot)
        return snapshot
