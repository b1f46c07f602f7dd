"""Header denylists and filtering for proxied responses."""

from collections.abc import Iterable

from fastapi_cacheproxy.types import HeaderList

# Credentials and session state are never cached or relayed to other clients
SENSITIVE_HEADERS = frozenset({"set-cookie", "authorization"})

# Describe how the upstream body was framed on the wire; the body handed back
# by httpx is already decoded, so Starlette re-frames it on the way out
FRAMING_HEADERS = frozenset(
    {
        "content-encoding",
        "content-length",
        "transfer-encoding",
        "connection",
        "keep-alive",
    }
)

# Dropped when replaying a cached entry
HIT_EXCLUDED_HEADERS = frozenset({"content-encoding"})


def filter_headers(
    headers: Iterable[tuple[str, str]],
    denylist: frozenset[str],
) -> HeaderList:
    """Return ``headers`` without the names in ``denylist``.

    Names are compared case-insensitively and returned lower-case; order and
    repeated names are preserved.
    """
    return tuple(
        (name.lower(), value)
        for name, value in headers
        if name.lower() not in denylist
    )
