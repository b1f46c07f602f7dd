"""Cache backend implementations for FastAPI-CacheProxy."""

from .base import BaseCacheBackend
from .memory import MemoryBackend

__all__ = [
    "BaseCacheBackend",
    "MemoryBackend",
]
