"""Routes exposing the proxy, its activity log and cache controls."""

from typing import Any

from fastapi import FastAPI
from fastapi import Request
from fastapi import Response
from starlette.status import HTTP_204_NO_CONTENT

from fastapi_cacheproxy.activity import LogEntry
from fastapi_cacheproxy.dependencies import ProxyServiceDep


def add_routes(app: FastAPI) -> None:
    """Register the proxy routes on ``app``.

    The catch-all proxy route is registered last so that ``/logs``,
    ``/clear-cache``, ``/stats`` and ``/favicon.ico`` take precedence.
    """

    @app.get("/logs", response_model=list[LogEntry], response_model_exclude_none=True)
    async def get_logs(service: ProxyServiceDep) -> list[LogEntry]:
        return await service.get_logs()

    @app.post("/clear-cache")
    async def clear_cache(service: ProxyServiceDep) -> dict[str, str]:
        return await service.clear_cache()

    @app.get("/stats")
    async def get_stats(service: ProxyServiceDep) -> dict[str, Any]:
        return await service.get_stats()

    # Browsers probe for this on every page load
    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon() -> Response:
        return Response(status_code=HTTP_204_NO_CONTENT)

    @app.get("/{path:path}", include_in_schema=False)
    async def proxy(request: Request, service: ProxyServiceDep) -> Response:
        # Percent-encoded as received, so "/a%3Fb" and "/a?b" stay distinct
        raw_path = request.scope.get("raw_path")
        if raw_path:
            path = raw_path.split(b"?", 1)[0].decode("latin-1")
        else:
            path = request.url.path
        return await service.handle_request(request.method, path, request.url.query)
