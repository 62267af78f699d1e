"""Ordered table of embed providers, keyed by name."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from marquee.domain.entities.playback import EmbedProvider
from marquee.domain.exceptions import UnknownProviderError
from marquee.infrastructure.config.schema import EmbedProviderConfig

log = structlog.get_logger(__name__)


class EmbedProviderRegistry:
    """Holds the embed providers in cycle order.

    Adding a provider is one ``register()`` call (or one row in the
    ``playback.providers`` config section); nothing else changes.
    """

    def __init__(self, providers: Iterable[EmbedProvider] | None = None) -> None:
        self._providers: dict[str, EmbedProvider] = {}
        for provider in providers or []:
            self.register(provider)

    @classmethod
    def from_config(cls, rows: Iterable[EmbedProviderConfig]) -> EmbedProviderRegistry:
        return cls(EmbedProvider(**row.model_dump()) for row in rows)

    def register(self, provider: EmbedProvider) -> None:
        """Append a provider to the end of the cycle.

        Raises:
            ValueError: A provider with the same name is already registered.
        """
        if provider.name in self._providers:
            raise ValueError(f"Embed provider already registered: {provider.name!r}")
        self._providers[provider.name] = provider
        log.debug("embed_provider_registered", provider=provider.name)

    def get(self, name: str) -> EmbedProvider:
        try:
            return self._providers[name]
        except KeyError:
            raise UnknownProviderError(f"Unknown embed provider: {name!r}") from None

    def names(self) -> list[str]:
        return list(self._providers)

    def ordered(self) -> tuple[EmbedProvider, ...]:
        """Providers in registration order; index 0 is tried first."""
        return tuple(self._providers.values())

    def __len__(self) -> int:
        return len(self._providers)

    def __contains__(self, name: object) -> bool:
        return name in self._providers
