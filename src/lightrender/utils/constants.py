"""Shared constants for LightRender."""

from __future__ import annotations

# Elements that never have children or a closing tag
# Source: WHATWG HTML Living Standard, "void elements"
VOID_ELEMENTS: frozenset[str] = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# Form controls whose hydrated state is written to `.value`, not `.textContent`
VALUE_TAGS: frozenset[str] = frozenset({"input", "textarea", "select"})

# Placeholder inside bind_state() sources, replaced by the target element id
STATE_ID_PLACEHOLDER = "__STATE_ID__"

# Substitution tokens recognised in client function sources
SUBSTITUTION_TOKENS: frozenset[str] = frozenset({STATE_ID_PLACEHOLDER})

# Sequences that would break out of an inline <script> element.
# Matched case-insensitively.
DENIED_SOURCE_SEQUENCES: tuple[str, ...] = (
    "</script",
    "<!--",
)

# Characters removed from css values (rule terminators and markup)
CSS_VALUE_STRIP_CHARS = ";{}<>"

# Default document title when none is set
DEFAULT_TITLE = "Document"

# Namespace object installed on `window` by the hydration script
CLIENT_NAMESPACE = "__lr"
