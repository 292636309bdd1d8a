"""Runtime: explicit owner of process-wide mutable state.

The object pool, the response cache and the metrics recorder live on a
`Runtime` instead of in module globals. Documents, `warmup()` and the
cache helpers take an optional ``runtime=`` argument and fall back to
the default runtime, which is created lazily from the environment.

Lifecycle:
    Created at process start (first `get_runtime()` call), reset only
    through `reset_runtime()`, which exists for tests.

Architecture:
    ```
    Runtime
    ├── config: RenderConfig     # immutable settings
    ├── metrics: MetricsRecorder # counters, timings, listeners
    ├── pool: ObjectPool         # nodes / lists / dicts free lists
    └── cache: ResponseCache     # LRU + single-flight registry
    ```
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any

from lightrender.runtime.config import RenderConfig
from lightrender.runtime.metrics import MetricsRecorder

if TYPE_CHECKING:
    from lightrender.cache.response import ResponseCache
    from lightrender.dom.pool import ObjectPool


class Runtime:
    """Bundle of config, pool, cache and metrics shared by many documents.

    Example:
        >>> runtime = Runtime(RenderConfig(mode="prod", cache_limit=100))
        >>> doc = create_document(runtime=runtime)
    """

    __slots__ = ("cache", "config", "metrics", "pool")

    def __init__(self, config: RenderConfig | None = None) -> None:
        # Deferred imports: pool and cache import the dom package, which
        # resolves the default runtime through this module.
        from lightrender.cache.response import ResponseCache
        from lightrender.dom.pool import ObjectPool

        self.config = config or RenderConfig()
        self.metrics = MetricsRecorder()
        self.pool: ObjectPool = ObjectPool(self.config.pool_size, metrics=self.metrics)
        self.cache: ResponseCache = ResponseCache(self.config.cache_limit, metrics=self.metrics)

    def stats(self) -> dict[str, Any]:
        """Cache statistics plus pool free-list sizes."""
        stats = self.cache.stats()
        stats["pool"] = self.pool.stats()
        return stats

    def __repr__(self) -> str:
        return f"Runtime(mode={self.config.mode!r}, cache={len(self.cache)})"


_default_runtime: Runtime | None = None
_default_lock = threading.Lock()


def get_runtime() -> Runtime:
    """Return the default runtime, creating it from the environment once."""
    global _default_runtime
    runtime = _default_runtime
    if runtime is None:
        with _default_lock:
            if _default_runtime is None:
                _default_runtime = Runtime(RenderConfig.from_env())
            runtime = _default_runtime
    return runtime


def reset_runtime(config: RenderConfig | None = None) -> Runtime:
    """Replace the default runtime (test hook).

    Args:
        config: Config for the new runtime; read from the environment if omitted

    Returns:
        The new default runtime
    """
    global _default_runtime
    with _default_lock:
        _default_runtime = Runtime(config or RenderConfig.from_env())
        return _default_runtime
