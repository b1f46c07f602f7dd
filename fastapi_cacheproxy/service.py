"""Proxy orchestrator: cache lookup, upstream forwarding and activity logging."""

import time
from collections.abc import Callable
from logging import getLogger
from typing import Any
from typing import Optional

import httpx
from fastapi import Response
from fastapi.responses import JSONResponse
from starlette.status import HTTP_200_OK
from starlette.status import HTTP_405_METHOD_NOT_ALLOWED

from fastapi_cacheproxy.activity import ActivityLog
from fastapi_cacheproxy.activity import LogEntry
from fastapi_cacheproxy.backends import BaseCacheBackend
from fastapi_cacheproxy.backends import MemoryBackend
from fastapi_cacheproxy.config import ProxyConfig
from fastapi_cacheproxy.fetcher import FetchSuccess
from fastapi_cacheproxy.fetcher import UpstreamFetcher
from fastapi_cacheproxy.headers import HIT_EXCLUDED_HEADERS
from fastapi_cacheproxy.headers import filter_headers
from fastapi_cacheproxy.types import HeaderList

CACHE_STATUS_HEADER = "X-Cache"

logger = getLogger(__name__)


def build_cache_key(origin: str, path: str, query: str = "") -> str:
    """Return the full upstream URL for ``path`` and ``query``."""
    url = f"{origin.rstrip('/')}{path}"
    if query:
        url = f"{url}?{query}"
    return url


def _build_response(
    status_code: int,
    body: bytes,
    headers: HeaderList,
    cache_status: str,
) -> Response:
    response = Response(content=body, status_code=status_code)
    for name, value in headers:
        response.headers.append(name, value)
    response.headers[CACHE_STATUS_HEADER] = cache_status
    return response


def _error_response(status_code: int, message: str, url: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "url": url},
    )


class ProxyService:
    """Forward GET requests to the origin, caching responses by URL.

    One instance is created per application and handed to the route handlers;
    it owns the cache backend, the upstream fetcher and the activity log.
    """

    def __init__(
        self,
        origin: str,
        backend: BaseCacheBackend,
        fetcher: UpstreamFetcher,
        activity: ActivityLog,
    ) -> None:
        self.origin = origin.rstrip("/")
        self.backend = backend
        self.fetcher = fetcher
        self.activity = activity

    @classmethod
    def from_config(
        cls,
        config: ProxyConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], float] = time.time,
    ) -> "ProxyService":
        backend = MemoryBackend(
            ttl=config.cache_ttl,
            cleanup_interval=config.cleanup_interval,
            clock=clock,
        )
        fetcher = UpstreamFetcher(
            timeout=config.fetch_timeout,
            user_agent=config.user_agent,
            transport=transport,
        )
        activity = ActivityLog(max_entries=config.activity_log_limit)
        return cls(config.origin, backend, fetcher, activity)

    def startup(self) -> None:
        self.backend.start_cleanup()
        logger.info("Proxying requests to: %s", self.origin)

    async def aclose(self) -> None:
        self.backend.stop_cleanup()
        await self.fetcher.aclose()

    async def handle_request(
        self, method: str, path: str, query: str = ""
    ) -> Response:
        """Serve ``path``/``query`` from the cache or from the origin.

        Args:
            method: HTTP method of the incoming request; only GET is proxied
            path: Request path, starting with ``/``
            query: Raw query string without the leading ``?``

        Returns:
            The cached or upstream response marked with ``X-Cache``, or a JSON
            ``{"error", "url"}`` body when the origin cannot be reached
        """
        url = build_cache_key(self.origin, path, query)

        if method.upper() != "GET":
            return _error_response(
                HTTP_405_METHOD_NOT_ALLOWED, "Only GET requests are proxied", url
            )

        entry = await self.backend.get(url)
        if entry is not None:
            logger.info("Cache HIT for: %s", url)
            await self.activity.hit(url)
            return _build_response(
                HTTP_200_OK,
                entry.value.body,
                filter_headers(entry.value.headers, HIT_EXCLUDED_HEADERS),
                "HIT",
            )

        logger.info("Cache MISS - Forwarding request to: %s", url)
        result = await self.fetcher.fetch(url)

        if isinstance(result, FetchSuccess):
            await self.backend.set(url, result.to_cached())
            await self.activity.miss(url)
            return _build_response(
                result.status_code, result.body, result.headers, "MISS"
            )

        await self.activity.error(url, result.message)
        return _error_response(result.status_code, result.message, url)

    async def get_logs(self) -> list[LogEntry]:
        return await self.activity.all()

    async def clear_cache(self) -> dict[str, str]:
        removed = await self.backend.clear()
        await self.activity.cache_cleared(removed)
        logger.info("Cache cleared - %d items removed", removed)
        return {"message": "Cache cleared successfully"}

    async def get_stats(self) -> dict[str, Any]:
        keys = sorted(await self.backend.keys())
        return {"total_items": len(keys), "keys": keys}
