"""Tree-to-string renderer.

`render_node()` serializes a node and its subtree while pushing side-channel
data into the current `RenderContext`:

    ```
    <tag attrs>        attributes escaped, in insertion order
      ctx.styles         ← inline_style_fragment
      ctx.states         ← (id, value, tag)
      ctx.computed       ← (id, re-validated source)
      ctx.state_bindings ← (id, state key, source)
      children...        skipped entirely for void elements
    </tag>             omitted for void elements
      ctx.events         ← node events, after the subtree
    ```

StringBuilder Pattern:
    Each call collects parts in a list and joins once, O(n) in output size.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

from lightrender.dom.node import Node
from lightrender.render_context import (
    BindingEntry,
    ComputedEntry,
    RenderContext,
    StateEntry,
    get_render_context_required,
)
from lightrender.runtime.exceptions import ClientSourceError
from lightrender.runtime.metrics import HYDRATION_REJECTED
from lightrender.utils.constants import VOID_ELEMENTS
from lightrender.utils.html import html_escape

if TYPE_CHECKING:
    from lightrender.runtime.core import Runtime

logger = logging.getLogger(__name__)

# Alternatives are tried left to right: protected elements are matched whole
# and kept, so gaps inside them are never seen.
_MINIFY_RE = re.compile(
    r"(?P<keep><(?P<tag>pre|textarea|script|style)\b[^>]*>.*?</(?P=tag)\s*>)"
    r"|(?P<gap>(?<=>)[ \t\r\f\v]*\n\s*(?=<))"
    r"|(?P<wide>(?<=>)[ \t]{4,}(?=<))",
    re.IGNORECASE | re.DOTALL,
)


def render_attributes(attributes: dict[str, object]) -> str:
    """Render ``name="value"`` pairs; True is a bare attribute, None/False omitted."""
    parts: list[str] = []
    for name, value in attributes.items():
        if value is None or value is False:
            continue
        if value is True:
            parts.append(f" {name}")
        else:
            parts.append(f' {name}="{html_escape(value)}"')
    return "".join(parts)


def render_node(node: Node | str | None, ctx: RenderContext, runtime: Runtime) -> str:
    """Render one node (or pre-escaped text) and collect its hydration data."""
    if node is None:
        return ""
    if not isinstance(node, Node):
        return node

    parts = ["<", node.tag, render_attributes(node.attributes), ">"]

    if node.inline_style_fragment:
        ctx.add_style(node.inline_style_fragment)

    node_id = node.attributes.get("id")
    if node.has_state:
        ctx.states.append(StateEntry(node_id, node.captured_state, node.tag))

    if node.computed_fn is not None:
        try:
            node.computed_fn.validate(runtime.config)
        except ClientSourceError as exc:
            _skip(runtime, "computed", node_id, exc)
        else:
            ctx.computed.append(ComputedEntry(node_id, node.computed_fn.source))

    for state_key, template in node.state_bindings:
        ctx.state_bindings.append(BindingEntry(node_id, state_key, template.source))

    if node.tag not in VOID_ELEMENTS:
        for child in node.children:
            parts.append(render_node(child, ctx, runtime))
        parts.append(f"</{node.tag}>")

    ctx.events.extend(node.events)
    return "".join(parts)


def render_body(
    nodes: Iterable[Node],
    runtime: Runtime,
    ctx: RenderContext | None = None,
) -> str:
    """Render top-level nodes into ``ctx``, defaulting to the active render context.

    Raises:
        RuntimeError: If no ``ctx`` is given and no render is active
    """
    if ctx is None:
        ctx = get_render_context_required()
    return "".join(render_node(node, ctx, runtime) for node in nodes)


def assemble_document(
    head_html: str,
    ctx: RenderContext,
    body_html: str,
    script: str,
    lang: str = "en",
) -> str:
    """Wrap head, collected styles, body and hydration script in the page envelope."""
    styles = f"<style>{''.join(ctx.styles)}</style>" if ctx.styles else ""
    script_tag = f"<script>{script}</script>" if script else ""
    return (
        f'<!DOCTYPE html><html lang="{html_escape(lang)}">'
        f"<head>{head_html}{styles}</head>"
        f"<body>{body_html}{script_tag}</body></html>"
    )


def minify_html(html: str) -> str:
    """Collapse clearly insignificant whitespace between tags.

    Gaps containing a newline are removed; runs of four or more spaces or
    tabs become one space. ``pre``, ``textarea``, ``script`` and ``style``
    content is left as is.
    """
    return _MINIFY_RE.sub(_minify_match, html).strip()


def _minify_match(match: re.Match[str]) -> str:
    if match.group("keep") is not None:
        return match.group("keep")
    if match.group("gap") is not None:
        return ""
    return " "


def _skip(runtime: Runtime, kind: str, node_id: str | None, exc: ClientSourceError) -> None:
    runtime.metrics.increment(HYDRATION_REJECTED)
    if not runtime.config.is_production:
        logger.warning("Skipping %s for #%s: %s", kind, node_id, exc)
