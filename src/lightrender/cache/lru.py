"""Bounded least-recently-used map.

Both `get()` and `set()` count as a use. When the map is full, `set()` of a
new key evicts the entry that was used least recently, which is not
necessarily the one inserted first.

Thread-Safety:
    Every operation holds an RLock; OrderedDict reordering is not atomic.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from collections.abc import Hashable
from typing import Generic, TypeVar

from lightrender.runtime.metrics import CACHE_EVICTION, MetricsRecorder

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LRUCache(Generic[K, V]):
    """LRU map with hit/miss/eviction counters.

    Example:
        >>> cache = LRUCache(2)
        >>> cache.set("a", 1); cache.set("b", 2)
        >>> cache.get("a")
        1
        >>> cache.set("c", 3)  # evicts "b", read less recently than "a"
        >>> cache.has("b")
        False
    """

    __slots__ = ("_data", "_lock", "evictions", "hits", "limit", "metrics", "misses")

    def __init__(self, limit: int, metrics: MetricsRecorder | None = None):
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.limit = limit
        self.metrics = metrics
        self._data: OrderedDict[K, V] = OrderedDict()
        self._lock = threading.RLock()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def get(self, key: K, default: V | None = None) -> V | None:
        with self._lock:
            try:
                value = self._data[key]
            except KeyError:
                self.misses += 1
                return default
            self._data.move_to_end(key)
            self.hits += 1
            return value

    def set(self, key: K, value: V) -> None:
        evicted: K | None = None
        with self._lock:
            if key in self._data:
                self._data.move_to_end(key)
            elif len(self._data) >= self.limit:
                evicted, _ = self._data.popitem(last=False)
                self.evictions += 1
            self._data[key] = value
        if evicted is not None:
            logger.debug("Evicted %r from response cache", evicted)
            if self.metrics is not None:
                self.metrics.increment(CACHE_EVICTION)

    def delete(self, key: K) -> bool:
        with self._lock:
            return self._data.pop(key, None) is not None

    def has(self, key: K) -> bool:
        """Membership test that does not refresh recency."""
        with self._lock:
            return key in self._data

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def keys(self) -> list[K]:
        """Keys from least to most recently used."""
        with self._lock:
            return list(self._data)

    def __contains__(self, key: object) -> bool:
        return self.has(key)  # type: ignore[arg-type]

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
