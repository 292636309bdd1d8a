"""Rendering: tree-to-HTML serialization and hydration script compilation."""

from lightrender.render.html import (
    assemble_document,
    minify_html,
    render_attributes,
    render_body,
    render_node,
)
from lightrender.render.hydration import compile_client, hydration_property

__all__ = [
    "assemble_document",
    "compile_client",
    "hydration_property",
    "minify_html",
    "render_attributes",
    "render_body",
    "render_node",
]
