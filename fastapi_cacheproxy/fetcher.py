"""Upstream fetcher: GETs a URL from the origin and returns a tagged result."""

import asyncio
from dataclasses import dataclass
from logging import getLogger
from typing import Optional
from typing import Union

import httpx

from fastapi_cacheproxy.headers import FRAMING_HEADERS
from fastapi_cacheproxy.headers import SENSITIVE_HEADERS
from fastapi_cacheproxy.headers import filter_headers
from fastapi_cacheproxy.types import CachedResponse
from fastapi_cacheproxy.types import HeaderList

DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "CachingProxy/1.0"

logger = getLogger(__name__)


@dataclass(frozen=True)
class FetchSuccess:
    """Any HTTP response from the origin, whatever its status code."""

    status_code: int
    headers: HeaderList
    body: bytes

    def to_cached(self) -> CachedResponse:
        return CachedResponse(body=self.body, headers=self.headers)


@dataclass(frozen=True)
class TransportError:
    """The origin could not be reached or did not answer in time."""

    message: str
    status_code: int = 500


FetchResult = Union[FetchSuccess, TransportError]


class UpstreamFetcher:
    """Issue GET requests to the origin through a shared ``httpx.AsyncClient``.

    Args:
        timeout: Seconds allowed for the whole request
        user_agent: Value of the outbound ``User-Agent`` header
        transport: Optional httpx transport, e.g. ``httpx.MockTransport``
        client: Optional pre-built client; the caller then owns its lifetime
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": user_agent},
            follow_redirects=True,
            transport=transport,
        )

    async def fetch(self, url: str) -> FetchResult:
        """GET ``url`` from the origin.

        Returns:
            ``FetchSuccess`` for every HTTP response, including 4xx and 5xx,
            or ``TransportError`` for timeouts and network failures
        """
        try:
            # httpx timeouts apply per network phase; this bounds the whole fetch
            response = await asyncio.wait_for(self.client.get(url), self.timeout)
        except asyncio.TimeoutError:
            message = f"Upstream request timed out after {self.timeout}s"
            logger.error("Request failed for %s: %s", url, message)
            return TransportError(message=message)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            message = str(e) or e.__class__.__name__
            logger.error("Request failed for %s: %s", url, message)
            return TransportError(message=message)

        headers = filter_headers(
            response.headers.multi_items(),
            SENSITIVE_HEADERS | FRAMING_HEADERS,
        )
        return FetchSuccess(
            status_code=response.status_code,
            headers=headers,
            body=response.content,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
