"""Run the caching proxy with uvicorn."""

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import Optional

import uvicorn

from fastapi_cacheproxy.app import create_app
from fastapi_cacheproxy.config import ProxyConfig
from fastapi_cacheproxy.exceptions import ConfigError

logger = logging.getLogger("fastapi_cacheproxy")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="fastapi_cacheproxy",
        description="Forward caching proxy for a single origin server.",
    )
    parser.add_argument("--origin", help="Origin base URL (env: PROXY_ORIGIN)")
    parser.add_argument("--host", help="Listen address (env: PROXY_HOST)")
    parser.add_argument("--port", type=int, help="Listen port (env: PROXY_PORT)")
    parser.add_argument(
        "--cache-ttl", type=int, help="Cache TTL in seconds (env: PROXY_CACHE_TTL)"
    )
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error"],
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = ProxyConfig.from_env(
            origin=args.origin,
            host=args.host,
            port=args.port,
            cache_ttl=args.cache_ttl,
        )
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    logger.info("Caching proxy running on port %d", config.port)
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=args.log_level,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
