"""Proxy configuration settings."""

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel
from pydantic import Field
from pydantic import ValidationError
from pydantic import field_validator

from fastapi_cacheproxy.exceptions import ConfigError

ENV_PREFIX = "PROXY_"


class ProxyConfig(BaseModel):
    """Proxy configuration settings."""

    # Upstream
    origin: str = Field(
        ...,
        description="Base URL of the origin server, e.g. http://example.test",
    )
    fetch_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Upstream request timeout in seconds",
    )
    user_agent: str = Field(
        default="CachingProxy/1.0",
        description="User-Agent sent to the origin",
    )

    # Cache
    cache_ttl: int = Field(
        default=3600,
        gt=0,
        description="Time-to-live applied to every cache entry, in seconds",
    )
    cleanup_interval: float = Field(
        default=60,
        gt=0,
        description="Seconds between sweeps of expired cache entries",
    )

    # Activity log
    activity_log_limit: int | None = Field(
        default=None,
        gt=0,
        description="Maximum number of activity log entries kept (None = unbounded)",
    )

    # Listener
    host: str = Field(default="127.0.0.1", description="Address to listen on")
    port: int = Field(default=3000, ge=1, le=65535, description="Port to listen on")

    @field_validator("origin")
    @classmethod
    def _normalize_origin(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            msg = "origin must be an http:// or https:// URL"
            raise ValueError(msg)
        return value.rstrip("/")

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> "ProxyConfig":
        """Build a config from ``PROXY_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``
            overrides: Values that take precedence over the environment;
                ``None`` values are ignored

        Raises:
            ConfigError: If the resulting settings are invalid
        """
        environ = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for name in cls.model_fields:
            env_name = f"{ENV_PREFIX}{name.upper()}"
            if environ.get(env_name):
                values[name] = environ[env_name]
        values.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigError(str(e)) from e
