# File: follower_scout/cache.py
"""follower_scout.cache: in-memory TTL cache for lookup results.

The cache is created once at process start and handed to the service; there is
no module-level instance. Entries older than ``ttl`` are never returned, so a
caller that gets ``None`` knows it has to fetch again. The store is unbounded:
in practice a single profile is watched, and expired entries are dropped when
they are touched.
"""
from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from cachetools import TTLCache

__all__ = ["CacheEntry", "ResultCache", "normalize_key"]

Clock = Callable[[], float]


def normalize_key(identifier: str) -> str:
    """``"@Name"``, ``"name"`` and ``" Name "`` all map to ``"name"``."""
    return identifier.strip().removeprefix("@").strip().lower()


@dataclass(slots=True, frozen=True)
class CacheEntry:
    key: str
    value: Any
    fetched_at: float


class ResultCache:
    """Thread-safe TTL map keyed by the normalized identifier."""

    def __init__(self, ttl: float, clock: Clock = time.monotonic) -> None:
        if ttl <= 0:
            raise ValueError("ttl must be > 0")
        self.ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()
        # an entry stays visible while clock() < fetched_at + ttl
        self._store: TTLCache[str, CacheEntry] = TTLCache(maxsize=math.inf, ttl=ttl, timer=clock)

    def get(self, identifier: str) -> Optional[CacheEntry]:
        """Return the entry for *identifier* if it is younger than the TTL."""
        with self._lock:
            return self._store.get(normalize_key(identifier))

    def put(self, identifier: str, value: Any) -> CacheEntry:
        """Store *value*, replacing any previous entry for the same key."""
        key = normalize_key(identifier)
        with self._lock:
            entry = CacheEntry(key=key, value=value, fetched_at=self._clock())
            self._store[key] = entry
        return entry

    def age(self, entry: CacheEntry) -> float:
        return self._clock() - entry.fetched_at

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __contains__(self, identifier: object) -> bool:
        if not isinstance(identifier, str):
            return False
        return self.get(identifier) is not None

    def __len__(self) -> int:
        with self._lock:
            self._store.expire()
            return len(self._store)
