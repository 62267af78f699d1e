"""Interactive search controller — debounced input, last-issued request wins.

Keystrokes arrive through ``set_query_text``. Only the timer tied to the
latest debounce epoch may fire; a fired timer either resets the session to
idle (short query) or issues a catalog search tagged with a fresh request
epoch. A response is committed only if its epoch is still the session's
current request epoch when it arrives, so an earlier request that resolves
late can never overwrite a later one.

All methods must be called from the running event loop.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable

import structlog

from marquee.domain.entities.catalog import (
    NavigationTarget,
    ResultItem,
    project_search_results,
)
from marquee.domain.entities.search import SearchSession, SearchSnapshot
from marquee.domain.exceptions import CatalogCredentialError, CatalogError
from marquee.domain.ports.catalog import CatalogClientPort

log = structlog.get_logger(__name__)

SearchListener = Callable[[SearchSnapshot], None]
Navigator = Callable[[NavigationTarget], None]

SEARCH_FAILED_MESSAGE = "Failed to search. Please try again."
MISSING_KEY_MESSAGE = "Catalog API key is missing."


class QueryController:
    """Owns the lifecycle of one search session.

    Args:
        catalog: Catalog client used for the multi-type search.
        debounce_seconds: Quiet period before a search is issued.
        min_query_length: Trimmed queries shorter than this never hit the API.
        listener: Called with a fresh snapshot after every transition.
        navigate: Receives the target produced by ``select_result``.
    """

    def __init__(
        self,
        catalog: CatalogClientPort,
        *,
        debounce_seconds: float = 0.3,
        min_query_length: int = 2,
        listener: SearchListener | None = None,
        navigate: Navigator | None = None,
    ) -> None:
        if debounce_seconds < 0:
            raise ValueError("debounce_seconds must be >= 0")
        if min_query_length < 1:
            raise ValueError("min_query_length must be >= 1")
        self._catalog = catalog
        self._debounce = debounce_seconds
        self._min_length = min_query_length
        self._listener = listener
        self._navigate = navigate
        self._session = SearchSession()
        self._timer: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task[None]] = set()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def session(self) -> SearchSession:
        return self._session

    @property
    def pending_requests(self) -> int:
        return len(self._tasks)

    def snapshot(self) -> SearchSnapshot:
        return SearchSnapshot.of(self._session)

    def open(self) -> SearchSnapshot:
        """Start a fresh session; anything outstanding for the old one dies."""
        self._teardown()
        self._session = SearchSession()
        self._emit()
        return self.snapshot()

    def set_query_text(self, text: str) -> None:
        session = self._session
        if session.closed:
            log.debug("search_input_after_close")
            return

        epoch = session.edit(text)
        self._cancel_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(
            self._debounce, self._on_debounce_elapsed, session, epoch
        )
        self._emit()

    def flush(self) -> None:
        """Fire the pending debounce timer right away (e.g. on Enter)."""
        session = self._session
        if session.closed or self._timer is None:
            return
        self._cancel_timer()
        self._on_debounce_elapsed(session, session.debounce_epoch)

    def select_result(self, item: ResultItem) -> NavigationTarget:
        """Close the search surface and hand the selection to the router."""
        target = NavigationTarget(media_kind=item.media_kind, catalog_id=item.id)
        self._session.query_text = ""
        self._teardown()
        log.info(
            "search_result_selected",
            media_kind=item.media_kind,
            catalog_id=item.id,
        )
        self._emit()
        if self._navigate is not None:
            self._navigate(target)
        return target

    def close(self) -> None:
        if self._session.closed:
            return
        self._teardown()
        self._emit()

    async def drain(self) -> None:
        """Wait until no search request is outstanding."""
        while self._tasks:
            await asyncio.wait(set(self._tasks))

    # ------------------------------------------------------------------
    # Timer / request plumbing
    # ------------------------------------------------------------------

    def _on_debounce_elapsed(self, session: SearchSession, epoch: int) -> None:
        if (
            session is not self._session
            or session.closed
            or epoch != session.debounce_epoch
        ):
            return
        self._timer = None

        query = session.trimmed_query
        if len(query) < self._min_length:
            session.reset_idle()
            self._emit()
            return

        request_epoch = session.begin_request()
        log.debug("search_issued", query=query, epoch=request_epoch)
        task = asyncio.get_running_loop().create_task(
            self._run_search(session, query, request_epoch)
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._emit()

    async def _run_search(
        self, session: SearchSession, query: str, epoch: int
    ) -> None:
        try:
            records = await self._catalog.search_multi(query)
        except CatalogCredentialError:
            log.error("search_credential_missing", epoch=epoch)
            self._apply_failure(session, epoch, MISSING_KEY_MESSAGE)
            return
        except CatalogError:
            log.warning("search_failed", query=query, epoch=epoch, exc_info=True)
            self._apply_failure(session, epoch, SEARCH_FAILED_MESSAGE)
            return
        self._apply_results(session, epoch, records)

    def _apply_results(
        self, session: SearchSession, epoch: int, records: list[dict[str, Any]]
    ) -> None:
        items = project_search_results(records)
        if not session.commit(epoch, items):
            log.debug(
                "search_stale_discarded",
                epoch=epoch,
                current_epoch=session.request_epoch,
            )
            return
        log.info("search_committed", epoch=epoch, results=len(items))
        self._emit_for(session)

    def _apply_failure(self, session: SearchSession, epoch: int, message: str) -> None:
        if not session.fail(epoch, message):
            log.debug(
                "search_stale_failure_discarded",
                epoch=epoch,
                current_epoch=session.request_epoch,
            )
            return
        self._emit_for(session)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _teardown(self) -> None:
        self._cancel_timer()
        for task in self._tasks:
            task.cancel()
        self._session.close()

    def _emit_for(self, session: SearchSession) -> None:
        if session is self._session:
            self._emit()

    def _emit(self) -> None:
        if self._listener is not None:
            self._listener(self.snapshot())
