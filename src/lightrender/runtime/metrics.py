"""Named counters and timings for pool, cache and render activity.

The recorder owns no transport. Collectors subscribe a listener and
forward events wherever they like (StatsD, Prometheus, a log line):

    >>> seen = []
    >>> metrics = MetricsRecorder()
    >>> unsubscribe = metrics.subscribe(lambda name, value: seen.append(name))
    >>> metrics.increment("cache.hit")
    >>> seen
    ['cache.hit']

Thread-Safety:
    Counter updates take a lock. Listeners are called outside the lock
    and must be thread-safe themselves.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from time import perf_counter

logger = logging.getLogger(__name__)

Listener = Callable[[str, float], None]

POOL_REUSE = "pool.reuse"
POOL_CREATE = "pool.create"
POOL_DISCARD = "pool.discard"
CACHE_HIT = "cache.hit"
CACHE_MISS = "cache.miss"
CACHE_EVICTION = "cache.eviction"
CACHE_JOIN = "cache.join"
RENDER_DURATION = "render.duration"
HYDRATION_REJECTED = "hydration.rejected"
WARMUP_FAILURE = "warmup.failure"

# Samples kept per timing name; older samples are dropped
TIMING_WINDOW = 1024


class MetricsRecorder:
    """Thread-safe counters and timings with listener fan-out.

    Only the most recent ``timing_window`` samples of each timing are kept.
    """

    __slots__ = ("_counters", "_listeners", "_lock", "_timings", "timing_window")

    def __init__(self, timing_window: int = TIMING_WINDOW) -> None:
        self.timing_window = timing_window
        self._counters: dict[str, int] = {}
        self._timings: dict[str, deque[float]] = {}
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it."""
        with self._lock:
            self._listeners = [*self._listeners, listener]

        def unsubscribe() -> None:
            with self._lock:
                self._listeners = [fn for fn in self._listeners if fn is not listener]

        return unsubscribe

    def increment(self, name: str, amount: int = 1) -> None:
        with self._lock:
            self._counters[name] = self._counters.get(name, 0) + amount
            listeners = self._listeners
        self._emit(listeners, name, amount)

    def timing(self, name: str, seconds: float) -> None:
        with self._lock:
            samples = self._timings.get(name)
            if samples is None:
                samples = self._timings[name] = deque(maxlen=self.timing_window)
            samples.append(seconds)
            listeners = self._listeners
        self._emit(listeners, name, seconds)

    @contextmanager
    def timed(self, name: str) -> Iterator[None]:
        """Record the wall-clock duration of the with-block under ``name``."""
        start = perf_counter()
        try:
            yield
        finally:
            self.timing(name, perf_counter() - start)

    def count(self, name: str) -> int:
        with self._lock:
            return self._counters.get(name, 0)

    def timings(self, name: str) -> list[float]:
        with self._lock:
            return list(self._timings.get(name, ()))

    def snapshot(self) -> dict[str, int]:
        """Copy of every counter."""
        with self._lock:
            return dict(self._counters)

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()
            self._timings.clear()

    @staticmethod
    def _emit(listeners: list[Listener], name: str, value: float) -> None:
        for listener in listeners:
            try:
                listener(name, value)
            except Exception:
                # Listener errors are logged, never raised
                logger.exception("Metrics listener failed for %s", name)
