# === FILE: follower_scout/extractor/strategies.py ===
"""The three follower-count strategies, from most to least reliable.

Every strategy takes a :class:`ProfilePage` and returns an ``int`` or ``None``.
A strategy never raises for malformed input: broken JSON, missing tags or
unmatched patterns simply yield ``None`` so the chain can fall through.
"""
from __future__ import annotations

import json
import re
from collections.abc import Iterator, Sequence
from functools import cached_property
from typing import Any, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from follower_scout.extractor.deep_search import find_follower_count
from follower_scout.extractor.numbers import to_number
from follower_scout.logger import logger

__all__: Sequence[str] = (
    "ProfilePage",
    "STATE_SCRIPT_IDS",
    "from_embedded_state",
    "from_meta_description",
    "from_raw_patterns",
)

#: ids of <script> blocks that carry the hydration state, in priority order
STATE_SCRIPT_IDS: Sequence[str] = ("SIGI_STATE", "__UNIVERSAL_DATA_FOR_REHYDRATION__")

_WINDOW_STATE_RE = re.compile(r"window\[['\"]SIGI_STATE['\"]\]\s*=\s*({[\s\S]*?});", re.IGNORECASE)

# a number, optionally suffixed with K/M, right before "follower(s)"
_HUMAN_COUNT_RE = re.compile(r"([0-9][0-9.,]*(?:\s*[kKmM])?)\s*followers?", re.IGNORECASE)

_RAW_KEY_RES: Sequence[re.Pattern[str]] = (
    re.compile(r'"followerCount"\s*:\s*([0-9]{2,})', re.IGNORECASE),
    re.compile(r'"follower_count"\s*:\s*([0-9]{2,})', re.IGNORECASE),
    re.compile(r'"fans"\s*:\s*([0-9]{2,})', re.IGNORECASE),
    re.compile(r'"fan_count"\s*:\s*([0-9]{2,})', re.IGNORECASE),
)


class ProfilePage:
    """Raw HTML plus a lazily built soup shared by the strategies."""

    def __init__(self, html: str) -> None:
        self.html = html

    @cached_property
    def soup(self) -> BeautifulSoup:
        return BeautifulSoup(self.html, "html.parser")


# ---------------------------------------------------------------------------
# Embedded structured state
# ---------------------------------------------------------------------------


def _state_blobs(page: ProfilePage) -> Iterator[str]:
    for script_id in STATE_SCRIPT_IDS:
        tag = page.soup.find("script", id=script_id)
        if isinstance(tag, Tag):
            text = tag.get_text().strip()
            if text:
                yield text
    for match in _WINDOW_STATE_RE.finditer(page.html):
        yield match.group(1)


def _parse_state(blob: str) -> Optional[Any]:
    try:
        return json.loads(blob)
    except (ValueError, RecursionError) as exc:
        logger.debug("Embedded state is not valid JSON: %s", exc)
        return None


def from_embedded_state(page: ProfilePage) -> Optional[int]:
    """Search the JSON hydration state injected by the profile site."""
    for blob in _state_blobs(page):
        state = _parse_state(blob)
        if state is None:
            continue
        found = find_follower_count(state)
        if found is not None:
            return found
    return None


# ---------------------------------------------------------------------------
# Social preview description
# ---------------------------------------------------------------------------


def from_meta_description(page: ProfilePage) -> Optional[int]:
    """Read "<n> Followers" from the ``og:description`` meta tag."""
    tag = page.soup.find("meta", attrs={"property": "og:description"})
    if not isinstance(tag, Tag):
        return None
    content = tag.get("content")
    if not isinstance(content, str) or not content:
        return None
    for match in _HUMAN_COUNT_RE.finditer(content):
        number = to_number(match.group(1))
        if number is not None:
            return number
    logger.debug("og:description has no follower token: %.120s", content)
    return None


# ---------------------------------------------------------------------------
# Raw text patterns
# ---------------------------------------------------------------------------


def from_raw_patterns(page: ProfilePage) -> Optional[int]:
    """Last resort: JSON-like fragments, then any "<n> followers" in the markup."""
    for regex in _RAW_KEY_RES:
        match = regex.search(page.html)
        if match:
            number = to_number(match.group(1))
            if number is not None:
                return number
    for match in _HUMAN_COUNT_RE.finditer(page.html):
        number = to_number(match.group(1))
        if number is not None:
            return number
    return None
