"""In-process query cache for provider responses.

A plain key -> value mapping. It is a latency optimization only: when it
reaches ``max_entries`` it is emptied rather than evicting selectively, and
callers may clear it at any time without changing any result.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Hashable
from typing import Any

logger = logging.getLogger(__name__)

_MISSING = object()


def _env_cache_size() -> int:
    return int(os.getenv("RYANDATA_GEOCODE_CACHE_SIZE", "512"))


def cache_enabled_from_env() -> bool:
    return os.getenv("RYANDATA_GEOCODE_CACHE", "1").lower() not in {"0", "false", "no"}


class QueryCache:
    """Bounded dictionary keyed by ``(operation, *arguments)`` tuples."""

    def __init__(self, max_entries: int | None = None) -> None:
        self._max_entries = _env_cache_size() if max_entries is None else max_entries
        self._data: dict[Hashable, Any] = {}
        self._hits = 0
        self._misses = 0

    def get(self, key: Hashable, default: Any = None) -> Any:
        value = self._data.get(key, _MISSING)
        if value is _MISSING:
            self._misses += 1
            return default
        self._hits += 1
        logger.debug("Query cache hit: %s", key)
        return value

    def __contains__(self, key: Hashable) -> bool:
        return key in self._data

    def put(self, key: Hashable, value: Any) -> None:
        if self._max_entries <= 0:
            return
        if key not in self._data and len(self._data) >= self._max_entries:
            logger.debug("Query cache full (%d entries), dropping all entries", len(self._data))
            self._data.clear()
        self._data[key] = value

    def clear(self) -> None:
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)

    @property
    def stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dict with entries, hits and misses.
        """
        return {"entries": len(self._data), "hits": self._hits, "misses": self._misses}
