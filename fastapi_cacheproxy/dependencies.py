"""FastAPI dependencies for accessing the proxy service."""

from typing import Annotated

from fastapi import Depends
from fastapi import Request

from fastapi_cacheproxy.exceptions import ServiceNotConfiguredError
from fastapi_cacheproxy.service import ProxyService


def get_proxy_service(request: Request) -> ProxyService:
    """Get the proxy service attached to the application.

    Raises:
        ServiceNotConfiguredError: If the application lifespan has not
            installed a service
    """
    service: ProxyService | None = getattr(
        request.app.state, "proxy_service", None
    )
    if service is None:
        msg = "Proxy service is not set. Create the app with create_app()."
        raise ServiceNotConfiguredError(msg)
    return service


ProxyServiceDep = Annotated[ProxyService, Depends(get_proxy_service)]
