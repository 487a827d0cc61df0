#!/usr/bin/env python3
"""
Response cache for channel analyses.

The analyzer only needs `get(key)` and `set(key, value, ttl)`; entries
expire implicitly once `ttl` seconds have passed since they were written.
Values are stored as JSON so a cached response is the same data the API
serves, and a distributed store can replace the in-process one.
"""
import json
import time
from typing import Any, Callable, Dict, Optional, Tuple

CACHE_VERSION = "yt-backend-v5"
ONE_HOUR = 60 * 60


def make_cache_key(query: str, count: int, scope: str = "") -> str:
    """Versioned key for (query, count); `scope` separates non-default tables or windows."""
    key = f"{CACHE_VERSION}-{query}-{count}"
    return f"{key}-{scope}" if scope else key


class ResponseCache:
    """Interface for caches used by the analyzer."""

    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: str, value: Any, ttl: float = ONE_HOUR) -> None:
        raise NotImplementedError


class NullCache(ResponseCache):
    """Never stores anything."""

    def get(self, key: str) -> Optional[Any]:
        return None

    def set(self, key: str, value: Any, ttl: float = ONE_HOUR) -> None:
        return None


class InMemoryCache(ResponseCache):
    """In-process key -> (written_at, ttl, json) mapping."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._entries: Dict[str, Tuple[float, float, str]] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        written_at, ttl, payload = entry
        if self._clock() - written_at >= ttl:
            self._entries.pop(key, None)
            return None
        return json.loads(payload)

    def set(self, key: str, value: Any, ttl: float = ONE_HOUR) -> None:
        self._entries[key] = (self._clock(), ttl, json.dumps(value))

    def __len__(self) -> int:
        return len(self._entries)
