"""In-process query cache with prefix invalidation"""

import logging
import time
from typing import Any, Awaitable, Callable, Optional, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class QueryCache:
    """Query results keyed by tuples such as ("site-classes", campground_id).

    Mutations call ``invalidate`` with a key prefix after they succeed; the
    next read goes back to the API.
    """

    def __init__(self, ttl_seconds: float = 0):
        self.ttl_seconds = ttl_seconds
        self._entries: dict[tuple, tuple[float, Any]] = {}

    def _fresh(self, stored_at: float) -> bool:
        if self.ttl_seconds <= 0:
            return True
        return time.monotonic() - stored_at < self.ttl_seconds

    def get(self, key: tuple) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None or not self._fresh(entry[0]):
            return None
        return entry[1]

    def set(self, key: tuple, value: Any) -> None:
        self._entries[key] = (time.monotonic(), value)

    async def fetch(self, key: tuple, loader: Callable[[], Awaitable[T]]) -> T:
        """Return the cached value for key, loading it on a miss"""
        entry = self._entries.get(key)
        if entry is not None and self._fresh(entry[0]):
            return entry[1]

        logger.debug(f"Cache miss {key}")
        value = await loader()
        self.set(key, value)
        return value

    def invalidate(self, prefix: tuple) -> int:
        """Drop every entry whose key starts with prefix"""
        stale = [key for key in self._entries if key[:len(prefix)] == prefix]
        for key in stale:
            del self._entries[key]
        if stale:
            logger.debug(f"Invalidated {len(stale)} cache entries for {prefix}")
        return len(stale)

    def __len__(self) -> int:
        return len(self._entries)
