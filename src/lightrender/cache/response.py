"""Response cache with single-flight rendering.

`ResponseCache` maps cache keys to finished HTML (an `LRUCache`) and keeps
an in-flight registry so that at most one render per key runs at a time:

    ```
    render_with_cache(key, build)
      ├── cached?            → return it
      ├── in flight?         → wait for the leader's result (cache.join)
      └── otherwise (leader) → register, build + render, store, resolve,
                               always unregister (success or failure)
    ```

The "check cache, check in-flight, else register" step is a single
critical section, so two callers can never both decide to lead.

Sync and async callers share one registry of `concurrent.futures.Future`
objects: a thread may join a render led by a coroutine and vice versa.
An async leader runs the build in its own task, shielded from caller
cancellation, so an abandoned request still populates the cache.

There is no timeout here. Callers that need one wrap the call
(``asyncio.wait_for``, ``future.result(timeout=...)``).

"""

from __future__ import annotations

import asyncio
import inspect
import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future
from typing import TYPE_CHECKING, Any

from lightrender.cache.lru import LRUCache
from lightrender.runtime.exceptions import BuilderResultError
from lightrender.runtime.metrics import CACHE_HIT, CACHE_JOIN, CACHE_MISS, MetricsRecorder

if TYPE_CHECKING:
    from lightrender.runtime.core import Runtime

logger = logging.getLogger(__name__)

# Builders return a Document or finished HTML; async builders may return an awaitable of either
Builder = Callable[[], Any]
AsyncBuilder = Callable[[], Any]


def resolve_build_result(result: Any) -> str:
    """Render a builder's Document, or pass finished HTML through.

    Raises:
        BuilderResultError: If the result is neither a Document nor a str
    """
    from lightrender.dom.document import Document

    if isinstance(result, Document):
        return result.render()
    if isinstance(result, str):
        return result
    raise BuilderResultError(result)


class ResponseCache:
    """LRU response cache plus single-flight registry.

    Example:
        >>> cache = ResponseCache(limit=100)
        >>> html = cache.render_with_cache("home", build_home)  # renders
        >>> html = cache.render_with_cache("home", build_home)  # cached
    """

    __slots__ = ("_in_flight", "_lock", "_lru", "_tasks", "metrics")

    def __init__(self, limit: int, metrics: MetricsRecorder | None = None):
        self._lru: LRUCache[str, str] = LRUCache(limit, metrics)
        self.metrics = metrics
        self._lock = threading.Lock()
        self._in_flight: dict[str, Future[str]] = {}
        # Strong references to async leader tasks until they finish
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def limit(self) -> int:
        return self._lru.limit

    # -- plain map operations -----------------------------------------------

    def get(self, key: str) -> str | None:
        value = self._lru.get(key)
        self._count(CACHE_HIT if value is not None else CACHE_MISS)
        return value

    def set(self, key: str, value: str) -> None:
        self._lru.set(key, value)

    def delete(self, key: str) -> bool:
        return self._lru.delete(key)

    def clear(self, pattern: str | None = None) -> None:
        """Drop everything, or only keys containing ``pattern``.

        In-flight entries are forgotten too; their leaders still finish and
        store their results.
        """
        with self._lock:
            if pattern is None:
                self._lru.clear()
                self._in_flight.clear()
                return
            for key in self._lru.keys():
                if pattern in key:
                    self._lru.delete(key)
            for key in [key for key in self._in_flight if pattern in key]:
                del self._in_flight[key]

    def __contains__(self, key: object) -> bool:
        return key in self._lru

    def __len__(self) -> int:
        return len(self._lru)

    def in_flight(self) -> list[str]:
        with self._lock:
            return list(self._in_flight)

    def stats(self) -> dict[str, Any]:
        size = len(self._lru)
        with self._lock:
            in_flight = len(self._in_flight)
        return {
            "size": size,
            "limit": self.limit,
            "usage": f"{size / self.limit * 100:.2f}%",
            "keys": self._lru.keys(),
            "hits": self._lru.hits,
            "misses": self._lru.misses,
            "evictions": self._lru.evictions,
            "in_flight": in_flight,
        }

    # -- single flight ------------------------------------------------------

    def _join_or_lead(self, key: str) -> str | tuple[Future[str], bool]:
        """Atomically return the cached HTML, or (future, is_leader)."""
        with self._lock:
            cached = self.get(key)
            if cached is not None:
                return cached
            future = self._in_flight.get(key)
            if future is not None:
                return future, False
            future = Future()
            future.set_running_or_notify_cancel()
            self._in_flight[key] = future
            return future, True

    def _finish(self, key: str, future: Future[str]) -> None:
        with self._lock:
            if self._in_flight.get(key) is future:
                del self._in_flight[key]

    def _joined(self, key: str) -> None:
        logger.debug("Joining in-flight render for %r", key)
        self._count(CACHE_JOIN)

    def render_with_cache(self, key: str, build: Builder) -> str:
        """Return cached HTML for ``key`` or render it exactly once.

        Followers block until the leader finishes and receive the same
        string, or the same exception. An empty key bypasses the cache.

        Do not call this from a running event loop while an async render
        of the same key is in flight; use `render_with_cache_async()`.
        """
        if not key:
            return resolve_build_result(build())

        outcome = self._join_or_lead(key)
        if isinstance(outcome, str):
            return outcome
        future, leader = outcome
        if not leader:
            self._joined(key)
            return future.result()

        try:
            html = resolve_build_result(build())
        except BaseException as exc:
            future.set_exception(exc)
            raise
        else:
            self.set(key, html)
            future.set_result(html)
            return html
        finally:
            self._finish(key, future)

    async def render_with_cache_async(self, key: str, build: AsyncBuilder) -> str:
        """Async variant; ``build`` may return a Document, a str or an awaitable."""
        if not key:
            return await _build_async(build)

        outcome = self._join_or_lead(key)
        if isinstance(outcome, str):
            return outcome
        future, leader = outcome
        if leader:
            task = asyncio.ensure_future(self._lead_async(key, build, future))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
        else:
            self._joined(key)
        # shield: a cancelled caller must not cancel the shared render
        return await asyncio.shield(asyncio.wrap_future(future))

    async def _lead_async(self, key: str, build: AsyncBuilder, future: Future[str]) -> None:
        try:
            html = await _build_async(build)
        except Exception as exc:
            future.set_exception(exc)
        except BaseException as exc:
            future.set_exception(exc)
            raise
        else:
            self.set(key, html)
            future.set_result(html)
        finally:
            self._finish(key, future)

    def _count(self, name: str) -> None:
        if self.metrics is not None:
            self.metrics.increment(name)


async def _build_async(build: AsyncBuilder) -> str:
    result = build()
    if inspect.isawaitable(result):
        result = await result
    return resolve_build_result(result)


def clear_cache(pattern: str | None = None, runtime: Runtime | None = None) -> None:
    """Clear the runtime's response cache (all keys, or keys containing ``pattern``)."""
    from lightrender.runtime.core import get_runtime

    (runtime or get_runtime()).cache.clear(pattern)


def get_cache_stats(runtime: Runtime | None = None) -> dict[str, Any]:
    """Cache and pool statistics of the runtime."""
    from lightrender.runtime.core import get_runtime

    return (runtime or get_runtime()).stats()
