"""Keyed query cache with prefix invalidation.

Keys are tuples such as ``("time_entries", "weekly")``; invalidating
``("time_entries",)`` drops every key that starts with it. One instance per
browser session, passed explicitly to whatever needs it.
"""
import logging
import time
from typing import Any, Callable, Dict, Hashable, Tuple

from core.errors import AuthError, BackendError

logger = logging.getLogger(__name__)

Key = Tuple[Hashable, ...]


class QueryCache:
    def __init__(self, ttl: float = 5.0, retries: int = 3, retry_delay: float = 0.5,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        self.ttl = ttl
        self.retries = retries
        self.retry_delay = retry_delay
        self.clock = clock
        self.sleep = sleep
        self._entries: Dict[Key, Tuple[float, Any]] = {}

    def has(self, key: Key) -> bool:
        hit = self._entries.get(tuple(key))
        return hit is not None and self.clock() - hit[0] < self.ttl

    def fetch(self, key: Key, fn: Callable[[], Any]) -> Any:
        key = tuple(key)
        if self.has(key):
            return self._entries[key][1]
        value = self._run(key, fn)
        self._entries[key] = (self.clock(), value)
        return value

    def _run(self, key: Key, fn: Callable[[], Any]) -> Any:
        attempt = 0
        while True:
            try:
                return fn()
            except AuthError:
                raise
            except BackendError as e:
                if attempt >= self.retries:
                    raise
                delay = self.retry_delay * (2 ** attempt)
                attempt += 1
                logger.warning("query %s failed (%s), retry %d/%d in %.1fs",
                               key, e, attempt, self.retries, delay)
                if delay:
                    self.sleep(delay)

    def invalidate(self, *prefix: Hashable) -> int:
        stale = [k for k in self._entries if k[:len(prefix)] == prefix]
        for k in stale:
            del self._entries[k]
        return len(stale)

    def clear(self):
        self._entries.clear()
