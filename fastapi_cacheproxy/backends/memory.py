from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from logging import getLogger
from typing import Optional

from fastapi_cacheproxy.types import CachedResponse
from fastapi_cacheproxy.types import CacheEntry

from .base import BaseCacheBackend

DEFAULT_TTL = 3600

logger = getLogger(__name__)


class MemoryBackend(BaseCacheBackend):
    """In-memory cache backend implementation.

    Expired entries are evicted lazily on lookup and by a periodic sweep
    started with :meth:`start_cleanup`. ``keys()`` and ``size()`` only report
    entries that have not expired yet.
    """

    def __init__(
        self,
        ttl: int = DEFAULT_TTL,
        cleanup_interval: float = 60,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.cache: dict[str, CacheEntry] = {}
        self.lock = asyncio.Lock()
        self.ttl = ttl
        self.cleanup_interval = cleanup_interval
        self.clock = clock
        self._cleanup_task: Optional[asyncio.Task[None]] = None

    async def get(self, key: str) -> Optional[CacheEntry]:
        async with self.lock:
            entry = self.cache.get(key)
            if entry is None:
                return None
            if entry.is_expired(self.clock()):
                del self.cache[key]
                return None
            return entry

    async def set(self, key: str, value: CachedResponse) -> CacheEntry:
        async with self.lock:
            entry = CacheEntry(value=value, stored_at=self.clock(), ttl=self.ttl)
            self.cache[key] = entry
            return entry

    async def clear(self) -> int:
        async with self.lock:
            now = self.clock()
            removed = sum(1 for v in self.cache.values() if not v.is_expired(now))
            self.cache.clear()
            return removed

    async def keys(self) -> set[str]:
        async with self.lock:
            now = self.clock()
            return {k for k, v in self.cache.items() if not v.is_expired(now)}

    async def size(self) -> int:
        return len(await self.keys())

    async def cleanup(self) -> int:
        async with self.lock:
            now = self.clock()
            expired_keys = [k for k, v in self.cache.items() if v.is_expired(now)]
            for key in expired_keys:
                self.cache.pop(key, None)
        if expired_keys:
            logger.debug("Swept %d expired cache entries", len(expired_keys))
        return len(expired_keys)

    async def _cleanup_loop(self) -> None:
        while True:
            await asyncio.sleep(self.cleanup_interval)
            await self.cleanup()

    def start_cleanup(self) -> None:
        """Start the periodic sweep on the running event loop."""
        if self._cleanup_task is not None and not self._cleanup_task.done():
            return
        self._cleanup_task = asyncio.get_running_loop().create_task(
            self._cleanup_loop()
        )

    def stop_cleanup(self) -> None:
        """Cancel the periodic sweep if it is running."""
        if self._cleanup_task is not None:
            self._cleanup_task.cancel()
            self._cleanup_task = None
