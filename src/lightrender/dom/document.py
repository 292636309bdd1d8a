"""Document: one page, built per request and destroyed by `render()`.

Architecture:
    ```
    Document
    ├── body: list[Node]         # top-level nodes, render order
    ├── head: Head               # title, meta, links, styles, scripts
    ├── state_store: dict        # node id → state snapshot
    ├── runtime: Runtime         # pool, cache, metrics, config
    └── use_cache / cache_key    # response-cache participation
    ```

Render Pipeline:
    ```
    cache hit? ──yes──▶ clear() ─▶ cached HTML
        │no
        ▼
    render_context(pool) ─▶ render_body ─▶ compile_client ─▶ assemble_document
        ─▶ minify (prod) ─▶ cache.set (if participating) ─▶ clear() ─▶ HTML
    ```

After `render()` returns, every node has been released to the pool and
the state store is empty; the document can be reused for a new page.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from lightrender.dom.head import Head
from lightrender.dom.node import Node
from lightrender.render.html import assemble_document, minify_html, render_body
from lightrender.render.hydration import compile_client
from lightrender.render_context import render_context
from lightrender.runtime.core import Runtime, get_runtime
from lightrender.runtime.metrics import RENDER_DURATION
from lightrender.utils.ids import IdGenerator


class Document:
    """A page under construction.

    Example:
        >>> doc = create_document()
        >>> doc.title("Hello")
        >>> doc.use(doc.create("h1").text("Hello <World>"))
        >>> html = doc.render()
        >>> "<h1>Hello &lt;World&gt;</h1>" in html
        True
    """

    __slots__ = ("body", "cache_key", "head", "next_id", "runtime", "state_store", "use_cache")

    def __init__(
        self,
        use_cache: bool = False,
        cache_key: str | None = None,
        runtime: Runtime | None = None,
    ):
        self.runtime = runtime or get_runtime()
        self.body: list[Node] = []
        self.head = Head(self.runtime.config.max_css_value)
        self.next_id = IdGenerator()
        self.state_store: dict[str, Any] = {}
        self.use_cache = use_cache
        self.cache_key = cache_key

    # -- head delegation ----------------------------------------------------

    def title(self, text: Any) -> Document:
        self.head.title(text)
        return self

    def add_meta(self, mapping: Mapping[str, Any] | None = None, **attrs: Any) -> Document:
        self.head.add_meta(mapping, **attrs)
        return self

    def add_link(self, href: str) -> Document:
        self.head.add_link(href)
        return self

    def add_style(self, css_text: str) -> Document:
        self.head.add_style(css_text)
        return self

    def add_script(self, src: str) -> Document:
        self.head.add_script(src)
        return self

    # -- tree building ------------------------------------------------------

    def create_element(self, tag: str) -> Node:
        """Acquire a pooled node owned by this document.

        Raises:
            InvalidTagError: If ``tag`` is empty or malformed
        """
        return self.runtime.pool.acquire("nodes", tag, self)

    def create(self, tag: str) -> Node:
        """Shorthand for `create_element()`."""
        return self.create_element(tag)

    def use(self, *nodes: Node) -> Document:
        """Append top-level nodes to the body."""
        for node in nodes:
            if isinstance(node, Node):
                self.body.append(node)
        return self

    def use_fragment(self, fn: Callable[[Document], Node | Iterable[Node] | None]) -> Document:
        """Append the node or nodes returned by ``fn(self)`` (layouts, partials)."""
        result = fn(self)
        if result is None:
            return self
        if isinstance(result, Node):
            return self.use(result)
        return self.use(*(node for node in result if isinstance(node, Node)))

    # -- lifecycle ----------------------------------------------------------

    def clear(self) -> None:
        """Release every node to the pool and forget all page state."""
        pool = self.runtime.pool
        for node in self.body:
            pool.release("nodes", node)
        self.body.clear()
        self.state_store.clear()
        self.head.clear()

    def render(self) -> str:
        """Render the page to a complete HTML string and clear the document."""
        cache = self.runtime.cache
        participating = self.use_cache and bool(self.cache_key)
        if participating:
            cached = cache.get(self.cache_key)
            if cached is not None:
                self.clear()
                return cached

        try:
            html = self._render_uncached()
        finally:
            self.clear()

        if participating:
            cache.set(self.cache_key, html)
        return html

    def _render_uncached(self) -> str:
        runtime = self.runtime
        config = runtime.config
        with runtime.metrics.timed(RENDER_DURATION), render_context(runtime.pool) as ctx:
            body_html = render_body(self.body, runtime)
            script = compile_client(ctx, runtime)
            html = assemble_document(self.head.render(), ctx, body_html, script, config.lang)
        if config.is_production:
            html = minify_html(html)
        return html

    # -- export / import ----------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Structural export: head fields, body tree and the global state map."""
        return {
            "head": self.head.to_dict(),
            "body": [node.to_dict() for node in self.body],
            "state": dict(self.state_store),
        }

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.to_dict(), **kwargs)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], runtime: Runtime | None = None) -> Document:
        """Rebuild a document from `to_dict()` output (data fields only).

        Client sources (computed, bindings, events) are never restored.
        """
        from lightrender.dom.serialize import load_document

        return load_document(cls(runtime=runtime), data)

    @classmethod
    def from_json(cls, text: str, runtime: Runtime | None = None) -> Document:
        return cls.from_dict(json.loads(text), runtime=runtime)

    def __repr__(self) -> str:
        return f"<Document body={len(self.body)} cache_key={self.cache_key!r}>"


def create_document(
    use_cache: bool = False,
    cache_key: str | None = None,
    runtime: Runtime | None = None,
) -> Document:
    """Create a document bound to ``runtime`` (the default runtime if omitted)."""
    return Document(use_cache=use_cache, cache_key=cache_key, runtime=runtime)
