"""Integration tests for cache hit behavior.

Requests go through the FastAPI app to a fake origin served by
``httpx.MockTransport``:
- First request for a URL is a MISS and is fetched from the origin
- Later requests within the TTL are HITs served without touching the origin
- Expired or cleared entries are fetched again
"""

import httpx


def test_example_scenario(client, origin):
    origin.add("/data?x=1", content=b"hello", headers=[("content-type", "text/plain")])

    response1 = client.get("/data?x=1")
    assert response1.status_code == 200
    assert response1.content == b"hello"
    assert response1.headers["x-cache"] == "MISS"
    assert response1.headers["content-type"] == "text/plain"
    assert origin.urls == ["http://example.test/data?x=1"]

    response2 = client.get("/data?x=1")
    assert response2.status_code == 200
    assert response2.content == b"hello"
    assert response2.headers["x-cache"] == "HIT"
    assert len(origin.requests) == 1

    assert client.post("/clear-cache").status_code == 200

    response3 = client.get("/data?x=1")
    assert response3.headers["x-cache"] == "MISS"
    assert len(origin.requests) == 2


def test_hits_are_byte_for_byte_identical(client, origin):
    origin.add(
        "/image.png",
        content=bytes(range(256)),
        headers=[("content-type", "image/png"), ("cache-control", "max-age=60")],
    )
    client.get("/image.png")

    responses = [client.get("/image.png") for _ in range(3)]

    assert len(origin.requests) == 1
    for response in responses:
        assert response.headers["x-cache"] == "HIT"
        assert response.content == bytes(range(256))
        assert response.headers["content-type"] == "image/png"
        assert response.headers["cache-control"] == "max-age=60"


def test_ttl_expiry(client, origin, clock):
    client.get("/data")

    clock.advance(3599)
    assert client.get("/data").headers["x-cache"] == "HIT"

    clock.advance(1)
    assert client.get("/data").headers["x-cache"] == "MISS"
    assert len(origin.requests) == 2


def test_set_cookie_and_authorization_are_stripped(client, origin):
    origin.add(
        "/profile",
        content=b"{}",
        headers=[
            ("content-type", "application/json"),
            ("set-cookie", "session=abc"),
            ("authorization", "Basic c2VjcmV0"),
        ],
    )

    for expected in ("MISS", "HIT"):
        response = client.get("/profile")
        assert response.headers["x-cache"] == expected
        assert "set-cookie" not in response.headers
        assert "authorization" not in response.headers
        assert not response.cookies


def test_unreachable_origin(client, origin):
    origin.fail_with(httpx.ConnectTimeout)

    response = client.get("/slow?id=7")

    assert response.status_code == 500
    assert response.json() == {
        "error": "origin unreachable",
        "url": "http://example.test/slow?id=7",
    }
    assert client.get("/stats").json()["total_items"] == 0
    assert client.get("/logs").json()[-1]["status"] == "ERROR"


def test_origin_recovers_after_error(client, origin):
    origin.fail_with(httpx.ConnectError)
    assert client.get("/flaky").status_code == 500

    origin.failure = None
    response = client.get("/flaky")

    assert response.status_code == 200
    assert response.headers["x-cache"] == "MISS"


def test_upstream_error_page_is_cached(client, origin):
    origin.add("/gone", status_code=503, content=b"maintenance")

    miss = client.get("/gone")
    hit = client.get("/gone")

    assert miss.status_code == 503
    assert miss.headers["x-cache"] == "MISS"
    assert hit.status_code == 200
    assert hit.content == b"maintenance"
    assert hit.headers["x-cache"] == "HIT"
    assert len(origin.requests) == 1
