"""Object pool for nodes and scratch containers.

Rendering a page creates hundreds of short-lived nodes and lists. The
pool keeps bounded free lists so those objects are re-initialized in
place instead of reallocated.

Kinds:
    ``nodes``: `Node` instances, re-initialized with ``(tag, document)``
    ``lists``: scratch lists (render context collections)
    ``dicts``: scratch dicts

Recycling Rule:
    Releasing a node first releases every child node, depth first, and
    only then clears the node's own fields. Skipping the recursion would
    leave descendants referenced from a pooled parent and let stale
    state resurface on reuse.

Thread-Safety:
    Free lists are shared per runtime; every operation holds a lock.
"""

from __future__ import annotations

import threading
from typing import Any

from lightrender.dom.node import Node
from lightrender.runtime.exceptions import InvalidTagError
from lightrender.runtime.metrics import POOL_CREATE, POOL_DISCARD, POOL_REUSE, MetricsRecorder

KINDS = ("nodes", "lists", "dicts")


class ObjectPool:
    """Bounded free lists keyed by kind.

    Example:
        >>> pool = ObjectPool(capacity=10)
        >>> items = pool.acquire("lists")
        >>> pool.release("lists", items)
        >>> pool.acquire("lists") is items
        True
    """

    __slots__ = ("_free", "_lock", "capacity", "metrics")

    def __init__(self, capacity: int, metrics: MetricsRecorder | None = None):
        self.capacity = capacity
        self.metrics = metrics
        self._free: dict[str, list[Any]] = {kind: [] for kind in KINDS}
        self._lock = threading.Lock()

    def _free_list(self, kind: str) -> list[Any]:
        try:
            return self._free[kind]
        except KeyError:
            raise ValueError(f"Unknown pool kind {kind!r}; expected one of {KINDS}") from None

    def acquire(self, kind: str, *init_args: Any) -> Any:
        """Pop and re-initialize a free instance, or construct a new one."""
        free = self._free_list(kind)
        with self._lock:
            item = free.pop() if free else None
        if item is None:
            self._count(POOL_CREATE)
            if kind == "nodes":
                return Node(*init_args)
            return [] if kind == "lists" else {}
        self._count(POOL_REUSE)
        if kind == "nodes":
            try:
                item._reset(*init_args)
            except InvalidTagError:
                # Put the instance back untouched
                self._push(free, item)
                raise
        return item

    def release(self, kind: str, item: Any) -> None:
        """Clear ``item`` and keep it for reuse unless the pool is full."""
        free = self._free_list(kind)
        if kind == "nodes":
            if not isinstance(item, Node) or item._pooled:
                return
            for child in item.children:
                if isinstance(child, Node):
                    self.release("nodes", child)
            item._clear()
            item._pooled = True
        elif kind == "lists":
            if not isinstance(item, list):
                return
            item.clear()
        else:
            if not isinstance(item, dict):
                return
            item.clear()
        self._push(free, item)

    def _push(self, free: list[Any], item: Any) -> None:
        with self._lock:
            if len(free) < self.capacity:
                free.append(item)
                return
        self._count(POOL_DISCARD)

    def _count(self, name: str) -> None:
        if self.metrics is not None:
            self.metrics.increment(name)

    def stats(self) -> dict[str, int]:
        """Number of free instances per kind."""
        with self._lock:
            return {kind: len(items) for kind, items in self._free.items()}

    def reset(self) -> None:
        """Drop every free instance (test hook)."""
        with self._lock:
            for items in self._free.values():
                items.clear()
