"""Type definitions and type aliases for FastAPI-CacheProxy."""

from dataclasses import dataclass

# Ordered (name, value) pairs; names are lower-case and may repeat
HeaderList = tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class CachedResponse:
    """Body and headers of an upstream response, as stored in the cache."""

    body: bytes
    headers: HeaderList = ()


@dataclass(frozen=True)
class CacheEntry:
    """Cache entry with the time it was stored and its time-to-live.

    Args:
        value: The cached response
        stored_at: Epoch timestamp when the entry was stored
        ttl: Time-to-live in seconds
    """

    value: CachedResponse
    stored_at: float
    ttl: int

    @property
    def expires_at(self) -> float:
        return self.stored_at + self.ttl

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at
