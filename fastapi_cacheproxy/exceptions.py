class CacheProxyError(Exception):
    """Base class for all exceptions in FastAPI-CacheProxy."""


class ConfigError(CacheProxyError):
    """Exception raised when the proxy configuration is invalid."""


class ServiceNotConfiguredError(CacheProxyError):
    """Exception raised when no proxy service is attached to the application."""
