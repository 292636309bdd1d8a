"""LightRender: server-side HTML builder with client hydration.

Build a tree of nodes in Python, render it to a complete HTML document,
and ship a small script that restores state, computed values and event
listeners in the browser.

Quickstart:
    >>> from lightrender import create_document
    >>> doc = create_document()
    >>> doc.title("Counter")
    >>> count = doc.create("span").state(0)
    >>> button = doc.create("button").text("+1").bind_state(
    ...     count, "click", "function(){ state['__STATE_ID__'] += 1; }"
    ... )
    >>> doc.use(count, button)
    >>> html = doc.render()

Response caching:
    >>> from lightrender import get_runtime
    >>> cache = get_runtime().cache
    >>> html = cache.render_with_cache("home", build_home)

Architecture:
    Document → Nodes → render_node() → HTML + RenderContext
             → compile_client() → hydration script → page envelope
             → (optional) ResponseCache → pool recycles the nodes

Pipeline stages:
1. **Build**: Nodes acquired from the object pool, configured by chaining
2. **Render**: Recursive serialization; styles, states, computed sources,
   bindings and events collected on the side
3. **Hydrate**: Side-channel data compiled to one deferred script
4. **Recycle**: Nodes released to the pool, children first

Thread-Safety:
- Rendering a document touches only that document and a ContextVar-scoped
  render context
- The object pool, LRU cache and in-flight registry are lock-protected
- Single-flight join is one critical section: at most one render per key

Client Functions:
Browser behaviour is JavaScript source (`str` or `ClientFunction`), never a
Python callable. Sources are validated against size limits and a script
breakout deny-list; they are trusted page-author code, not a sandbox.

"""

from lightrender.cache import (
    LRUCache,
    ResponseCache,
    WarmupResult,
    clear_cache,
    get_cache_stats,
    warmup,
)
from lightrender.client import ClientFunction, validate_source
from lightrender.dom import Document, Head, Node, ObjectPool, create_document
from lightrender.render import compile_client, minify_html, render_node
from lightrender.render_context import (
    RenderContext,
    get_render_context,
    get_render_context_required,
    render_context,
)
from lightrender.runtime import (
    BuilderResultError,
    ClientSourceError,
    ErrorCode,
    InvalidTagError,
    LightRenderError,
    MetricsRecorder,
    RenderConfig,
    RouteDescriptorError,
    Runtime,
    SourceDeniedError,
    SourceTooLargeError,
    StructuralError,
    get_runtime,
    reset_runtime,
)
from lightrender.utils import html_escape

__version__ = "1.0.1"

__all__ = [
    "BuilderResultError",
    "ClientFunction",
    "ClientSourceError",
    "Document",
    "ErrorCode",
    "Head",
    "InvalidTagError",
    "LRUCache",
    "LightRenderError",
    "MetricsRecorder",
    "Node",
    "ObjectPool",
    "RenderConfig",
    "RenderContext",
    "ResponseCache",
    "RouteDescriptorError",
    "Runtime",
    "SourceDeniedError",
    "SourceTooLargeError",
    "StructuralError",
    "WarmupResult",
    "__version__",
    "clear_cache",
    "compile_client",
    "create_document",
    "get_cache_stats",
    "get_render_context",
    "get_render_context_required",
    "get_runtime",
    "html_escape",
    "minify_html",
    "render_context",
    "render_node",
    "reset_runtime",
    "validate_source",
    "warmup",
]
