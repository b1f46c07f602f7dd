"""Application factory for the caching proxy."""

import time
from collections.abc import AsyncIterator
from collections.abc import Callable
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI

from fastapi_cacheproxy.config import ProxyConfig
from fastapi_cacheproxy.routes import add_routes
from fastapi_cacheproxy.service import ProxyService


def create_app(
    config: ProxyConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    clock: Callable[[], float] = time.time,
) -> FastAPI:
    """Create a FastAPI application proxying to ``config.origin``.

    Args:
        config: Proxy settings
        transport: Optional httpx transport used for upstream requests
        clock: Time source for cache expiry

    Returns:
        The application; its lifespan creates and closes the ``ProxyService``
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        service = ProxyService.from_config(config, transport=transport, clock=clock)
        app.state.proxy_service = service
        service.startup()
        try:
            yield
        finally:
            await service.aclose()
            app.state.proxy_service = None

    app = FastAPI(
        title="Caching Proxy",
        description=f"Forward caching proxy for {config.origin}",
        lifespan=lifespan,
    )
    add_routes(app)
    return app
