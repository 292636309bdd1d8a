"""Response caching: LRU map, single-flight rendering and warmup."""

from lightrender.cache.lru import LRUCache
from lightrender.cache.response import (
    ResponseCache,
    clear_cache,
    get_cache_stats,
    resolve_build_result,
)
from lightrender.cache.warmup import WarmupResult, parse_route, warmup

__all__ = [
    "LRUCache",
    "ResponseCache",
    "WarmupResult",
    "clear_cache",
    "get_cache_stats",
    "parse_route",
    "resolve_build_result",
    "warmup",
]
