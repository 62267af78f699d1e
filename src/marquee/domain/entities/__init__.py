from .catalog import (
    LIST_CATEGORIES,
    CatalogPreview,
    EpisodeSummary,
    ListCategory,
    MediaKind,
    NavigationTarget,
    PageError,
    ResultItem,
    SeasonSummary,
    TitleDetail,
    project_search_results,
)
from .playback import (
    EmbedProvider,
    LoadState,
    PlaybackRequest,
    PlaybackSession,
    PlaybackSnapshot,
)
from .search import SearchSession, SearchSnapshot, SearchStatus

__all__ = [
    "LIST_CATEGORIES",
    "CatalogPreview",
    "EmbedProvider",
    "EpisodeSummary",
    "ListCategory",
    "LoadState",
    "MediaKind",
    "NavigationTarget",
    "PageError",
    "PlaybackRequest",
    "PlaybackSession",
    "PlaybackSnapshot",
    "ResultItem",
    "SearchSession",
    "SearchSnapshot",
    "SearchStatus",
    "SeasonSummary",
    "TitleDetail",
    "project_search_results",
]
