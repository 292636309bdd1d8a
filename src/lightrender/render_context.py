"""LightRender RenderContext: per-render side-channel state.

While the renderer walks a document tree it produces HTML and, on the
side, collects everything the page needs beyond markup: scoped CSS
fragments, state snapshots, computed sources, state bindings and event
listeners. That side channel is a `RenderContext`, one per render call,
discarded (its lists returned to the pool) once the hydration script
has been compiled.

The current context is tracked in a ContextVar so helpers deep inside a
render can reach it without threading it through every call.

Thread Safety:
    ContextVars are per-thread and per-async-task, so concurrent renders
    never share a context.

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from lightrender.client import ClientFunction
    from lightrender.dom.pool import ObjectPool


@dataclass(frozen=True, slots=True)
class StateEntry:
    """Captured state of one element; ``tag`` picks value vs textContent."""

    id: str
    value: Any
    tag: str


@dataclass(frozen=True, slots=True)
class ComputedEntry:
    id: str
    source: str


@dataclass(frozen=True, slots=True)
class BindingEntry:
    """Reactive text binding: ``id`` shows ``template(state[state_key])``."""

    id: str
    state_key: str
    source: str


@dataclass(frozen=True, slots=True)
class EventBinding:
    """Event listener recorded by `Node.on()` or `Node.bind_state()`.

    Attributes:
        event: DOM event name ("click", "input", ...)
        node_id: Id of the element the listener is attached to
        target_id: Id substituted for the state-id placeholder, if any
        fn: Listener source
    """

    event: str
    node_id: str
    target_id: str | None
    fn: ClientFunction


@dataclass
class RenderContext:
    """Side-channel data collected during one render call.

    Attributes:
        styles: Scoped CSS fragments, in first-seen order, de-duplicated
        states: Captured state snapshots
        computed: Validated computed sources
        state_bindings: Reactive text bindings
        events: Event listeners, in render order
    """

    styles: list[str] = field(default_factory=list)
    states: list[StateEntry] = field(default_factory=list)
    computed: list[ComputedEntry] = field(default_factory=list)
    state_bindings: list[BindingEntry] = field(default_factory=list)
    events: list[EventBinding] = field(default_factory=list)

    _seen_styles: set[str] = field(default_factory=set, repr=False)

    @classmethod
    def from_pool(cls, pool: ObjectPool) -> RenderContext:
        """Build a context whose lists are borrowed from ``pool``."""
        return cls(
            styles=pool.acquire("lists"),
            states=pool.acquire("lists"),
            computed=pool.acquire("lists"),
            state_bindings=pool.acquire("lists"),
            events=pool.acquire("lists"),
        )

    def release_to(self, pool: ObjectPool) -> None:
        """Return the borrowed lists; the context must not be used afterwards."""
        for items in (self.styles, self.states, self.computed, self.state_bindings, self.events):
            pool.release("lists", items)
        self._seen_styles.clear()

    def add_style(self, fragment: str) -> None:
        """Collect a CSS fragment once, however many nodes share it."""
        if fragment and fragment not in self._seen_styles:
            self._seen_styles.add(fragment)
            self.styles.append(fragment)

    @property
    def needs_hydration(self) -> bool:
        return bool(self.states or self.computed or self.state_bindings or self.events)


# Module-level ContextVar
_render_context: ContextVar[RenderContext | None] = ContextVar(
    "render_context",
    default=None,
)


def get_render_context() -> RenderContext | None:
    """Get current render context (None if not in render)."""
    return _render_context.get()


def get_render_context_required() -> RenderContext:
    """Get current render context, raise if not in render.

    Raises:
        RuntimeError: If not in a render context
    """
    ctx = _render_context.get()
    if ctx is None:
        raise RuntimeError("Not in a render context")
    return ctx


@contextmanager
def render_context(
    pool: ObjectPool | None = None,
) -> Iterator[RenderContext]:
    """Context manager for render-scoped state.

    Creates a new RenderContext and sets it as the current context for
    the duration of the with block. When ``pool`` is given, the context's
    lists are borrowed from it and returned on exit.

    Example:
        with render_context(runtime.pool) as ctx:
            body = render_body(doc.body, runtime)
            script = compile_client(ctx, runtime)
    """
    ctx = RenderContext.from_pool(pool) if pool is not None else RenderContext()
    token: Token[RenderContext | None] = _render_context.set(ctx)
    try:
        yield ctx
    finally:
        _render_context.reset(token)
        if pool is not None:
            ctx.release_to(pool)
