from __future__ import annotations

from abc import ABC
from abc import abstractmethod
from typing import Optional

from fastapi_cacheproxy.types import CachedResponse
from fastapi_cacheproxy.types import CacheEntry


class BaseCacheBackend(ABC):
    """Base class for all cache backends."""

    @abstractmethod
    async def get(self, key: str) -> Optional[CacheEntry]:
        """Retrieve an unexpired cache entry."""

    @abstractmethod
    async def set(self, key: str, value: CachedResponse) -> CacheEntry:
        """Store a response in the cache, replacing any previous entry."""

    @abstractmethod
    async def clear(self) -> int:
        """Clear all cached responses and return how many were removed."""

    @abstractmethod
    async def keys(self) -> set[str]:
        """Return the keys of all unexpired entries."""

    @abstractmethod
    async def size(self) -> int:
        """Return the number of unexpired entries."""

    def start_cleanup(self) -> None:
        """Start background expiry of stale entries, if the backend needs it."""

    def stop_cleanup(self) -> None:
        """Stop background expiry started by :meth:`start_cleanup`."""
