# File: follower_scout/service.py
"""follower_scout.service: fetch-or-serve-cached follower lookups.

Flow of :meth:`FollowerService.lookup`::

    identifier -> normalize -> cache hit?  -> cached result
                                   miss    -> fetch -> extract -> cache -> result

The result is always one of three explicit states (``found``, ``not_found``,
``error``), never an exception, so consumers can tell a legitimate zero from
"nothing on the page" and from a failed fetch.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional, Protocol
from urllib.parse import quote

from follower_scout.cache import ResultCache
from follower_scout.config import ScoutConfig
from follower_scout.extractor import extract
from follower_scout.fetcher import FetchedPage, FetchError, ProfileFetcher
from follower_scout.logger import lookup_logger

__all__ = ["FollowerLookup", "FollowerService", "LookupStatus", "lookup_followers", "profile_url"]


class LookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass(slots=True, frozen=True)
class FollowerLookup:
    """Outcome of one lookup, as cached and as returned to consumers."""

    username: str
    status: LookupStatus
    followers: Optional[int] = None
    source: Optional[str] = None
    note: Optional[str] = None
    error: Optional[str] = None
    cached: bool = False
    debug: Optional[Dict[str, Any]] = None

    def to_payload(self) -> Dict[str, Any]:
        """JSON body served by the HTTP endpoint and printed by the CLI."""
        payload: Dict[str, Any] = {
            "followers": self.followers,
            "status": self.status.value,
            "cached": self.cached,
        }
        if self.source is not None:
            payload["source"] = self.source
        if self.note is not None:
            payload["note"] = self.note
        if self.error is not None:
            payload["error"] = self.error
        if self.debug is not None:
            payload["debug"] = self.debug
        return payload


def profile_url(config: ScoutConfig, username: str) -> str:
    """Profile page URL for an already normalized *username*, path-quoted."""
    return config.profile_url_template.format(username=quote(username, safe=""))


class PageFetcher(Protocol):
    async def fetch(self, url: str) -> FetchedPage: ...


class FollowerService:
    """Looks up follower counts through an injected fetcher and cache."""

    def __init__(self, config: ScoutConfig, fetcher: PageFetcher, cache: ResultCache) -> None:
        self.config = config
        self.fetcher = fetcher
        self.cache = cache

    def normalize_username(self, identifier: Optional[str]) -> str:
        """Strip whitespace and a leading ``@``; fall back to the default profile."""
        username = (identifier or "").strip().removeprefix("@").strip()
        return username or self.config.default_username

    def profile_url(self, username: str) -> str:
        return profile_url(self.config, username)

    async def lookup(self, identifier: Optional[str], *, debug: bool = False) -> FollowerLookup:
        username = self.normalize_username(identifier)
        log = lookup_logger(username)

        entry = self.cache.get(username)
        if entry is not None:
            log.debug("Cache hit (age %.1f s): %s", self.cache.age(entry), entry.value.followers)
            return replace(entry.value, cached=True)

        url = self.profile_url(username)
        log.info("Fetching %s", url)
        try:
            page = await self.fetcher.fetch(url)
        except FetchError as exc:
            log.warning("Fetch failed (%s): %s", exc.kind, exc)
            result = FollowerLookup(
                username=username,
                status=LookupStatus.ERROR,
                note=str(exc),
                error=exc.kind,
            )
            # cached too, so a failing source is not hammered within the TTL
            self.cache.put(username, result)
            if debug:
                result = replace(result, debug={"url": url, "status": exc.status, "body_snippet": exc.body})
            return result

        extraction = extract(page.text)
        if extraction.found:
            result = FollowerLookup(
                username=username,
                status=LookupStatus.FOUND,
                followers=extraction.count,
                source=extraction.source.value if extraction.source else None,
            )
            log.info("%d followers (%s)", extraction.count, result.source)
        else:
            result = FollowerLookup(
                username=username,
                status=LookupStatus.NOT_FOUND,
                note="no follower value found",
            )
            log.warning("No follower value found in %d chars", len(page.text))

        self.cache.put(username, result)
        if debug:
            result = replace(
                result,
                debug={
                    "url": url,
                    "fetched_chars": len(page.text),
                    "source_detected": result.source,
                    "snippet": page.text[: self.config.snippet_chars],
                },
            )
        return result


async def lookup_followers(
    config: ScoutConfig, identifier: Optional[str], *, debug: bool = False
) -> FollowerLookup:
    """One-shot lookup with its own session and a fresh cache (used by the CLI)."""
    async with ProfileFetcher(config) as fetcher:
        service = FollowerService(config, fetcher, ResultCache(config.cache_ttl))
        return await service.lookup(identifier, debug=debug)
