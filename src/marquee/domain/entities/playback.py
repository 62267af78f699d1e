"""Domain entities for playback through third-party embed providers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .catalog import MediaKind

ADVISORY_MESSAGE = (
    "This is a third-party player. Use an ad blocker for the best experience."
)
LOAD_FAILED_MESSAGE = (
    "Failed to load the video player. Please try a different source."
)
DEFAULT_PLAYER_TITLE = "Now Playing"


@dataclass(frozen=True)
class PlaybackRequest:
    """What to play. Created once per "Play" action.

    Movies carry no season/episode. A series request with both season and
    episode targets that episode; otherwise it targets the show.
    """

    media_kind: MediaKind
    catalog_id: int
    season: int | None = None
    episode: int | None = None
    title: str = ""

    def __post_init__(self) -> None:
        if self.media_kind not in ("movie", "series"):
            raise ValueError(f"Unsupported media kind: {self.media_kind!r}")
        if self.catalog_id <= 0:
            raise ValueError("catalog_id must be a positive integer")
        if self.media_kind == "movie" and (
            self.season is not None or self.episode is not None
        ):
            raise ValueError("Movie playback does not take season or episode")
        for name in ("season", "episode"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be >= 0")

    @property
    def episode_target(self) -> tuple[int, int] | None:
        """(season, episode) when a specific episode is targeted."""
        if self.season is None or self.episode is None:
            return None
        return self.season, self.episode


@dataclass(frozen=True)
class EmbedProvider:
    """A third-party embed site, described purely by its URL templates.

    Templates are ``str.format`` patterns over ``{id}``, ``{season}`` and
    ``{episode}``.
    """

    name: str
    label: str
    movie_template: str
    show_template: str
    episode_template: str

    def build_url(self, request: PlaybackRequest) -> str:
        if request.media_kind == "movie":
            return self.movie_template.format(id=request.catalog_id)
        target = request.episode_target
        if target is None:
            return self.show_template.format(id=request.catalog_id)
        season, episode = target
        return self.episode_template.format(
            id=request.catalog_id, season=season, episode=episode
        )


class LoadState(str, Enum):
    PENDING = "pending"
    PLAYING = "playing"
    FAILED = "failed"


@dataclass
class PlaybackSession:
    """Ephemeral state of one open player."""

    request: PlaybackRequest
    provider_index: int = 0
    load_state: LoadState = LoadState.PENDING
    dismissed_advisory: bool = False
    closed: bool = False


@dataclass(frozen=True)
class PlaybackSnapshot:
    """Render-ready view of a playback session."""

    provider: str
    provider_label: str
    provider_index: int
    provider_count: int
    embed_url: str
    load_state: LoadState
    show_advisory: bool
    advisory_message: str | None
    error: str | None
    title: str
    confirm_on_leave: bool
