# follower_scout/fetcher.py
"""
Fetcher module: downloads a profile page with browser-like headers, a bounded
timeout and optional retry/backoff on 5xx/429.
"""
from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass
from typing import Optional, Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout

from follower_scout.config import ScoutConfig
from follower_scout.logger import logger

_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8"


@dataclass(slots=True)
class FetchedPage:
    """A successfully downloaded profile page."""

    url: str
    status: int
    text: str


class FetchError(RuntimeError):
    """Raised when the profile page could not be downloaded."""

    def __init__(self, message: str, *, kind: str, status: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.kind = kind
        self.status = status
        self.body = body


class ProfileFetcher:
    """Owns the HTTP session used to download profile pages."""

    _RETRY_STATUS: Sequence[int] = tuple(range(500, 600)) + (429,)

    def __init__(self, config: ScoutConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> ProfileFetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={
                    "User-Agent": self.config.user_agent,
                    "Accept": _ACCEPT,
                    "Accept-Language": self.config.accept_language,
                },
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def fetch(self, url: str) -> FetchedPage:
        """
        Download *url* and return its body.

        Raises FetchError on network errors, timeouts and non-2xx statuses.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")

        attempts = 0
        while True:
            try:
                async with self.session.get(url) as resp:
                    status = resp.status
                    text = await resp.text(errors="replace")
            except asyncio.TimeoutError as exc:
                logger.warning("Timed out fetching %s after %.1f s", url, self.config.timeout)
                raise FetchError(f"timed out after {self.config.timeout:g}s", kind="timeout") from exc
            except ClientError as exc:
                logger.error("Network error fetching %s: %s", url, exc)
                raise FetchError(str(exc) or type(exc).__name__, kind="network_error") from exc

            if status in self._RETRY_STATUS and attempts < self.config.retry_times:
                attempts += 1
                backoff = min(60.0, self.config.retry_backoff * (2**attempts + random.random()))
                logger.debug("Retry %d/%d for %s after %.2f s", attempts, self.config.retry_times, url, backoff)
                await asyncio.sleep(backoff)
                continue

            if not 200 <= status < 300:
                logger.warning("Fetch returned %s for %s", status, url)
                raise FetchError(
                    f"fetch returned {status}",
                    kind="http_status",
                    status=status,
                    body=text[: self.config.snippet_chars],
                )

            logger.debug("Fetched %d chars from %s", len(text), url)
            return FetchedPage(url=url, status=status, text=text)


__all__ = ["FetchError", "FetchedPage", "ProfileFetcher"]
