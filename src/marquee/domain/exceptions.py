"""Domain exceptions."""

from __future__ import annotations


class MarqueeError(Exception):
    """Base class for all marquee errors."""


class CatalogError(MarqueeError):
    """Base class for catalog API failures."""


class CatalogCredentialError(CatalogError):
    """Raised when the catalog API key is missing or rejected."""


class CatalogUnavailableError(CatalogError):
    """Raised on network failures and unexpected HTTP errors."""


class PlaybackError(MarqueeError):
    """Base class for playback session errors."""


class InvalidTransitionError(PlaybackError):
    """Raised when an action is not valid in the current load state."""


class PlaybackSessionClosedError(PlaybackError):
    """Raised when a user action targets a closed or never-opened session."""


class UnknownProviderError(PlaybackError):
    """Raised when an embed provider name is not in the provider table."""
