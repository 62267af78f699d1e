"""Search session state.

The debounce and request epochs are explicit fields so the acceptance rule
(last *issued* request wins, regardless of arrival order) can be exercised
without any timer or network.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from .catalog import ResultItem


class SearchStatus(str, Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass
class SearchSession:
    """Ephemeral state of one mounted search widget."""

    query_text: str = ""
    debounce_epoch: int = 0
    request_epoch: int = 0
    # Requests up to this epoch were superseded by a short query.
    cleared_epoch: int = 0
    status: SearchStatus = SearchStatus.IDLE
    results: tuple[ResultItem, ...] = ()
    # Query text of the request in flight and of the last committed results.
    requested_query: str = ""
    committed_query: str = ""
    error: str | None = None
    closed: bool = False

    @property
    def trimmed_query(self) -> str:
        return self.query_text.strip()

    def edit(self, text: str) -> int:
        """Record a keystroke and return the new debounce epoch."""
        self.query_text = text
        self.debounce_epoch += 1
        self.status = SearchStatus.DEBOUNCING
        return self.debounce_epoch

    def reset_idle(self) -> None:
        """Empty the result set and retire any request still in flight."""
        self.status = SearchStatus.IDLE
        self.results = ()
        self.error = None
        self.cleared_epoch = self.request_epoch
        self.committed_query = ""

    def begin_request(self) -> int:
        """Mark a new request as issued and return its epoch."""
        self.request_epoch += 1
        self.requested_query = self.trimmed_query
        self.status = SearchStatus.LOADING
        self.error = None
        return self.request_epoch

    def is_current(self, epoch: int) -> bool:
        return (
            not self.closed
            and epoch == self.request_epoch
            and epoch > self.cleared_epoch
        )

    def commit(self, epoch: int, items: Sequence[ResultItem]) -> bool:
        """Commit results for *epoch*. Returns False if the response is stale."""
        if not self.is_current(epoch):
            return False
        self.results = tuple(items)
        self.committed_query = self.requested_query
        self.status = SearchStatus.READY
        self.error = None
        return True

    def fail(self, epoch: int, message: str) -> bool:
        """Record a failure for *epoch*; results stay as they were."""
        if not self.is_current(epoch):
            return False
        self.status = SearchStatus.ERROR
        self.error = message
        return True

    def close(self) -> None:
        self.closed = True


@dataclass(frozen=True)
class SearchSnapshot:
    """Render-ready view of a search session."""

    query_text: str
    status: SearchStatus
    results: tuple[ResultItem, ...] = field(default_factory=tuple)
    error: str | None = None
    empty_message: str | None = None
    is_open: bool = True

    @classmethod
    def of(cls, session: SearchSession) -> SearchSnapshot:
        empty_message = None
        if session.status is SearchStatus.READY and not session.results:
            empty_message = f'No results found for "{session.committed_query}"'
        return cls(
            query_text=session.query_text,
            status=session.status,
            results=session.results,
            error=session.error,
            empty_message=empty_message,
            is_open=not session.closed,
        )
