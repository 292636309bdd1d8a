"""Eager cache population.

    >>> results = warmup([{"key": "home", "builder": build_home}])
    >>> results[0].to_dict()
    {'key': 'home', 'success': True, 'size': 1834}

Descriptors are validated before any builder runs; a malformed one
raises `RouteDescriptorError`. After that, each route is isolated: a
builder that raises or returns something unrenderable is reported in its
`WarmupResult` and the remaining routes still run.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from lightrender.cache.response import resolve_build_result
from lightrender.runtime.exceptions import RouteDescriptorError
from lightrender.runtime.metrics import WARMUP_FAILURE

if TYPE_CHECKING:
    from lightrender.runtime.core import Runtime

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WarmupResult:
    """Outcome of warming one route."""

    key: str
    success: bool
    size: int | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"key": self.key, "success": self.success}
        if self.size is not None:
            data["size"] = self.size
        if self.error is not None:
            data["error"] = self.error
        return data


def parse_route(route: Any, index: int | None = None) -> tuple[str, Callable[[], Any]]:
    """Extract ``(key, builder)`` from a mapping, a 2-tuple or an object.

    Raises:
        RouteDescriptorError: If the key is not a non-empty str or the
            builder is not callable
    """
    if isinstance(route, Mapping):
        key, builder = route.get("key"), route.get("builder")
    elif isinstance(route, tuple):
        if len(route) != 2:
            raise RouteDescriptorError("tuple routes must be (key, builder)", index=index)
        key, builder = route
    else:
        key, builder = getattr(route, "key", None), getattr(route, "builder", None)
    if not isinstance(key, str) or not key:
        raise RouteDescriptorError(f"key must be a non-empty string, got {key!r}", index=index)
    if not callable(builder):
        raise RouteDescriptorError(f"builder for {key!r} is not callable", index=index)
    return key, builder


def warmup(routes: Iterable[Any], runtime: Runtime | None = None) -> list[WarmupResult]:
    """Render every route and store the HTML in the runtime's cache.

    Args:
        routes: ``{"key", "builder"}`` descriptors; builders take no
            arguments and return a Document or finished HTML
        runtime: Target runtime (default runtime if omitted)

    Returns:
        One WarmupResult per route, in input order
    """
    if runtime is None:
        from lightrender.runtime.core import get_runtime

        runtime = get_runtime()

    parsed = [parse_route(route, index) for index, route in enumerate(routes)]
    results: list[WarmupResult] = []
    for key, builder in parsed:
        try:
            html = resolve_build_result(builder())
        except Exception as exc:
            logger.warning("Warmup of %r failed: %s", key, exc)
            runtime.metrics.increment(WARMUP_FAILURE)
            results.append(WarmupResult(key, False, error=str(exc)))
            continue
        runtime.cache.set(key, html)
        results.append(WarmupResult(key, True, size=len(html)))
    return results
