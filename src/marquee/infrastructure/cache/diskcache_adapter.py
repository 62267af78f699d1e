"""Diskcache adapter — SQLite-backed catalog response cache, no daemon."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Optional

import structlog
from diskcache import Cache as DiskCache

log = structlog.get_logger(__name__)


class DiskcacheAdapter:
    """Async wrapper around the sync-only ``diskcache.Cache``.

    Disk I/O runs in ``asyncio.to_thread``; a semaphore bounds parallel
    SQLite access. A default TTL of 0 turns the adapter into a no-op store
    (reads miss, writes are dropped).

    Args:
        directory: SQLite DB directory.
        ttl_seconds: TTL used by ``set()`` when none is given.
        max_concurrent: Max parallel disk operations.
    """

    def __init__(
        self,
        directory: str | Path = "./.cache/marquee",
        ttl_seconds: int = 3600,
        max_concurrent: int = 10,
    ) -> None:
        self.directory = Path(directory)
        self.default_ttl = ttl_seconds
        self._cache: DiskCache | None = None
        self._semaphore = asyncio.Semaphore(max_concurrent)

    @property
    def enabled(self) -> bool:
        return self.default_ttl > 0

    async def __aenter__(self) -> DiskcacheAdapter:
        if self._cache is None and self.enabled:
            self._cache = await asyncio.to_thread(DiskCache, str(self.directory))
            log.info(
                "diskcache_opened",
                path=str(self.directory),
                default_ttl=self.default_ttl,
            )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._cache is not None:
            await asyncio.to_thread(self._cache.close)
            self._cache = None
            log.info("diskcache_closed", directory=str(self.directory))

    def _require_open(self) -> DiskCache:
        if self._cache is None:
            raise RuntimeError(
                "Cache not initialized. Use 'async with cache:' or await cache.__aenter__()"
            )
        return self._cache

    async def get(self, key: str) -> Optional[Any]:
        if not self.enabled:
            return None
        cache = self._require_open()
        async with self._semaphore:
            value = await asyncio.to_thread(cache.get, key, default=None)
        log.debug("cache_get", key=key, hit=value is not None)
        return value

    async def set(self, key: str, value: Any, *, ttl: int | None = None) -> None:
        if not self.enabled:
            return
        cache = self._require_open()
        expire = ttl if ttl is not None else self.default_ttl
        async with self._semaphore:
            await asyncio.to_thread(cache.set, key, value, expire=expire)
        log.debug("cache_set", key=key, ttl=expire)

    async def clear(self) -> None:
        if self._cache is None:
            return
        async with self._semaphore:
            await asyncio.to_thread(self._cache.clear)
        log.info("cache_cleared", directory=str(self.directory))
