from collections.abc import AsyncGenerator
from collections.abc import Iterator
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from fastapi_cacheproxy.app import create_app
from fastapi_cacheproxy.config import ProxyConfig
from fastapi_cacheproxy.service import ProxyService

ORIGIN = "http://example.test"


class FakeClock:
    """Manually advanced time source for expiry tests."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeOrigin:
    """httpx request handler standing in for the origin server.

    Responses are registered per path (including the query string); unknown
    paths answer ``200`` with the path as body.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[str, httpx.Response] = {}
        self.failure: type[httpx.RequestError] | None = None

    def add(
        self,
        path: str,
        status_code: int = 200,
        content: bytes = b"",
        headers: list[tuple[str, str]] | None = None,
    ) -> None:
        self.routes[path] = httpx.Response(
            status_code, content=content, headers=headers or []
        )

    def fail_with(self, error: type[httpx.RequestError]) -> None:
        self.failure = error

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.failure is not None:
            raise self.failure("origin unreachable", request=request)

        path = request.url.raw_path.decode()
        route = self.routes.get(path)
        if route is None:
            return httpx.Response(200, content=path.encode())
        return httpx.Response(
            route.status_code,
            content=route.content,
            headers=route.headers.multi_items(),
        )

    @property
    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def origin() -> FakeOrigin:
    return FakeOrigin()


@pytest.fixture
def config() -> ProxyConfig:
    return ProxyConfig(origin=ORIGIN)


@pytest_asyncio.fixture
async def service(
    config: ProxyConfig, origin: FakeOrigin, clock: FakeClock
) -> AsyncGenerator[ProxyService, Any]:
    proxy = ProxyService.from_config(
        config, transport=httpx.MockTransport(origin), clock=clock
    )
    yield proxy
    await proxy.aclose()


@pytest.fixture
def client(
    config: ProxyConfig, origin: FakeOrigin, clock: FakeClock
) -> Iterator[TestClient]:
    app = create_app(config, transport=httpx.MockTransport(origin), clock=clock)
    with TestClient(app) as test_client:
        yield test_client
