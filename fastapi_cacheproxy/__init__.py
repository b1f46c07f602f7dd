"""FastAPI-CacheProxy: a forward caching proxy built on FastAPI and httpx."""

from .activity import ActivityLog as ActivityLog
from .activity import LogEntry as LogEntry
from .activity import LogStatus as LogStatus
from .app import create_app as create_app
from .backends import BaseCacheBackend as BaseCacheBackend
from .backends import MemoryBackend as MemoryBackend
from .config import ProxyConfig as ProxyConfig
from .dependencies import get_proxy_service as get_proxy_service
from .fetcher import FetchSuccess as FetchSuccess
from .fetcher import TransportError as TransportError
from .fetcher import UpstreamFetcher as UpstreamFetcher
from .routes import add_routes as add_routes
from .service import ProxyService as ProxyService
from .service import build_cache_key as build_cache_key

__all__ = [
    "ActivityLog",
    "BaseCacheBackend",
    "FetchSuccess",
    "LogEntry",
    "LogStatus",
    "MemoryBackend",
    "ProxyConfig",
    "ProxyService",
    "TransportError",
    "UpstreamFetcher",
    "add_routes",
    "build_cache_key",
    "create_app",
    "get_proxy_service",
]
