# File: tests/conftest.py
import json

import pytest

from follower_scout.cache import ResultCache
from follower_scout.config import ScoutConfig
from follower_scout.fetcher import FetchedPage, FetchError


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedFetcher:
    """Returns a fixed page (or raises) and records requested URLs."""

    def __init__(self, html: str = "", error: FetchError | None = None) -> None:
        self.html = html
        self.error = error
        self.calls: list[str] = []

    async def fetch(self, url: str) -> FetchedPage:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return FetchedPage(url=url, status=200, text=self.html)


def sigi_page(state: dict) -> str:
    """Profile page with the state in a <script id="SIGI_STATE"> block."""
    return (
        "<html><head><title>profile</title></head><body>"
        f'<script id="SIGI_STATE" type="application/json">{json.dumps(state)}</script>'
        "</body></html>"
    )


def meta_page(description: str, body: str = "") -> str:
    return (
        "<html><head>"
        f'<meta property="og:description" content="{description}">'
        f"</head><body>{body}</body></html>"
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def cache(clock) -> ResultCache:
    return ResultCache(ttl=60.0, clock=clock)


@pytest.fixture()
def basic_config() -> ScoutConfig:
    """Config pointing at a placeholder host; tests replace the fetcher."""
    return ScoutConfig(
        profile_url_template="http://example.com/@{username}",
        default_username="boy.throb",
        cache_ttl=60.0,
        timeout=2.0,
        user_agent="TestAgent/1.0",
        snippet_chars=100,
    )
