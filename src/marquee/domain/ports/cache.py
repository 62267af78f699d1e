"""Cache Port - async key-value store for catalog responses."""

from __future__ import annotations

from typing import Any, Protocol


class CachePort(Protocol):
    """Port for an async key-value cache with TTL support.

    Only catalog data (lists, details) goes through here, never user state.

    Adapters support async context-manager semantics:
        async with cache:
            await cache.set("key", value)
    """

    async def get(self, key: str) -> Any:
        """Retrieve value. None = not found / expired."""
        ...

    async def set(self, key: str, value: Any, *, ttl: int | None = None) -> None:
        """Set value with optional TTL (seconds)."""
        ...

    async def clear(self) -> None:
        """Delete all keys."""
        ...

    async def aclose(self) -> None:
        """Release the underlying store."""
        ...

    async def __aenter__(self) -> CachePort: ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None: ...
