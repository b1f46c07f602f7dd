"""Append-only record of proxy decisions."""

import asyncio
from collections import deque
from datetime import datetime
from datetime import timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel
from pydantic import Field


class LogStatus(str, Enum):
    """Outcome recorded for a proxy decision."""

    HIT = "HIT"
    MISS = "MISS"
    ERROR = "ERROR"
    CACHE_CLEARED = "CACHE_CLEARED"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LogEntry(BaseModel):
    """A single activity log record."""

    status: LogStatus
    url: str | None = None
    time: datetime = Field(default_factory=_utcnow)
    error: str | None = Field(default=None, description="Transport error message")
    cleared: int | None = Field(
        default=None, description="Number of cache entries removed"
    )


class ActivityLog:
    """In-memory activity log.

    Entries are kept in insertion order. ``max_entries`` caps the log by
    discarding the oldest records; ``None`` keeps everything.
    """

    def __init__(self, max_entries: Optional[int] = None) -> None:
        self.entries: deque[LogEntry] = deque(maxlen=max_entries)
        self.lock = asyncio.Lock()

    async def record(self, entry: LogEntry) -> LogEntry:
        async with self.lock:
            self.entries.append(entry)
        return entry

    async def all(self) -> list[LogEntry]:
        async with self.lock:
            return list(self.entries)

    async def clear(self) -> None:
        async with self.lock:
            self.entries.clear()

    async def hit(self, url: str) -> LogEntry:
        return await self.record(LogEntry(status=LogStatus.HIT, url=url))

    async def miss(self, url: str) -> LogEntry:
        return await self.record(LogEntry(status=LogStatus.MISS, url=url))

    async def error(self, url: str, message: str) -> LogEntry:
        return await self.record(
            LogEntry(status=LogStatus.ERROR, url=url, error=message)
        )

    async def cache_cleared(self, count: int) -> LogEntry:
        return await self.record(
            LogEntry(status=LogStatus.CACHE_CLEARED, cleared=count)
        )

    def __len__(self) -> int:
        return len(self.entries)
