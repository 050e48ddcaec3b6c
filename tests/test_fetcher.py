# File: tests/test_fetcher.py
# ProfileFetcher against a local aiohttp server
from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from aiohttp import web

from follower_scout.config import ScoutConfig
from follower_scout.fetcher import FetchError, ProfileFetcher


# --------------------------------------------------------------------------- #
#                               Helper utilities                              #
# --------------------------------------------------------------------------- #


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


def make_config(base: str, **overrides) -> ScoutConfig:
    values = dict(
        profile_url_template=f"{base}/@{{username}}",
        timeout=1.0,
        user_agent="TestAgent/1.0",
        retry_backoff=0.0,
        snippet_chars=10,
    )
    values.update(overrides)
    return ScoutConfig(**values)


# --------------------------------------------------------------------------- #
#                                  Fixtures                                   #
# --------------------------------------------------------------------------- #


@pytest_asyncio.fixture
async def profile_server(unused_tcp_port: int) -> AsyncIterator[tuple[str, dict]]:
    app = web.Application()
    state = {"flaky_calls": 0, "headers": None}

    async def handle_profile(request: web.Request):
        state["headers"] = request.headers.copy()
        return web.Response(text='<html>{"followerCount":48213}</html>', content_type="text/html")

    async def handle_missing(_):
        return web.Response(status=404, text="user not found " * 5)

    async def handle_slow(_):
        await asyncio.sleep(2)
        return web.Response(text="too late", content_type="text/html")

    async def handle_flaky(_):
        state["flaky_calls"] += 1
        if state["flaky_calls"] <= 2:
            return web.Response(status=503)
        return web.Response(text="<html>recovered</html>", content_type="text/html")

    app.router.add_get("/@boy.throb", handle_profile)
    app.router.add_get("/@missing", handle_missing)
    app.router.add_get("/@slow", handle_slow)
    app.router.add_get("/@flaky", handle_flaky)

    async for url in _serve_app(app, unused_tcp_port):
        yield url, state


# --------------------------------------------------------------------------- #
#                                   Tests                                     #
# --------------------------------------------------------------------------- #


@pytest.mark.asyncio()
async def test_fetch_success_sends_browser_headers(profile_server):
    base, state = profile_server
    async with ProfileFetcher(make_config(base)) as fetcher:
        page = await fetcher.fetch(f"{base}/@boy.throb")

    assert page.status == 200
    assert '"followerCount":48213' in page.text
    assert state["headers"]["User-Agent"] == "TestAgent/1.0"
    assert state["headers"]["Accept-Language"] == "en-US,en;q=0.9"
    assert "text/html" in state["headers"]["Accept"]


@pytest.mark.asyncio()
async def test_non_success_status_raises(profile_server):
    base, _ = profile_server
    async with ProfileFetcher(make_config(base)) as fetcher:
        with pytest.raises(FetchError) as info:
            await fetcher.fetch(f"{base}/@missing")

    assert info.value.kind == "http_status"
    assert info.value.status == 404
    assert str(info.value) == "fetch returned 404"
    assert info.value.body == "user not f"


@pytest.mark.asyncio()
async def test_timeout_is_a_fetch_failure(profile_server):
    base, _ = profile_server
    async with ProfileFetcher(make_config(base, timeout=0.5)) as fetcher:
        with pytest.raises(FetchError) as info:
            await fetcher.fetch(f"{base}/@slow")
    assert info.value.kind == "timeout"


@pytest.mark.asyncio()
async def test_network_error(unused_tcp_port: int):
    base = f"http://localhost:{unused_tcp_port}"
    async with ProfileFetcher(make_config(base)) as fetcher:
        with pytest.raises(FetchError) as info:
            await fetcher.fetch(f"{base}/@nobody")
    assert info.value.kind == "network_error"


@pytest.mark.asyncio()
async def test_retry_on_server_error(profile_server):
    base, state = profile_server
    async with ProfileFetcher(make_config(base, retry_times=3)) as fetcher:
        page = await fetcher.fetch(f"{base}/@flaky")
    assert "recovered" in page.text
    assert state["flaky_calls"] == 3


@pytest.mark.asyncio()
async def test_no_retry_by_default(profile_server):
    base, state = profile_server
    async with ProfileFetcher(make_config(base)) as fetcher:
        with pytest.raises(FetchError) as info:
            await fetcher.fetch(f"{base}/@flaky")
    assert info.value.status == 503
    assert state["flaky_calls"] == 1


@pytest.mark.asyncio()
async def test_fetch_requires_session():
    fetcher = ProfileFetcher(ScoutConfig())
    with pytest.raises(RuntimeError):
        await fetcher.fetch("http://example.com/@x")
