"""Tests for the command line entry point."""

from fastapi import FastAPI

from fastapi_cacheproxy import __main__ as cli


def test_main_runs_uvicorn(monkeypatch):
    calls = []
    monkeypatch.setattr(cli.uvicorn, "run", lambda app, **kw: calls.append((app, kw)))
    monkeypatch.delenv("PROXY_PORT", raising=False)
    monkeypatch.delenv("PROXY_HOST", raising=False)

    exit_code = cli.main(["--origin", "http://example.test/", "--port", "4000"])

    assert exit_code == 0
    app, kwargs = calls[0]
    assert isinstance(app, FastAPI)
    assert kwargs["port"] == 4000
    assert kwargs["host"] == "127.0.0.1"


def test_main_rejects_missing_origin(monkeypatch):
    monkeypatch.delenv("PROXY_ORIGIN", raising=False)
    monkeypatch.setattr(cli.uvicorn, "run", lambda *a, **kw: None)

    assert cli.main([]) == 2
