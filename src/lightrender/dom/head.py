"""Document head: title, meta, stylesheet links, styles and scripts."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from lightrender.utils.constants import DEFAULT_TITLE
from lightrender.utils.css import build_rules, merge_style_maps, to_kebab
from lightrender.utils.html import html_escape


class Head:
    """Aggregates ``<head>`` declarations for one document.

    Raw styles added with `add_style()` are trusted CSS and are emitted
    verbatim. Everything else is escaped or sanitized.
    """

    __slots__ = (
        "class_styles",
        "global_styles",
        "links",
        "max_css_value",
        "metas",
        "scripts",
        "styles",
        "title_text",
    )

    def __init__(self, max_css_value: int = 256) -> None:
        self.max_css_value = max_css_value
        self.title_text = html_escape(DEFAULT_TITLE)
        self.metas: list[dict[str, Any]] = []
        self.links: list[str] = []
        self.styles: list[str] = []
        self.scripts: list[str] = []
        self.global_styles: list[str] = []
        self.class_styles: dict[str, str] = {}

    def title(self, text: Any) -> Head:
        self.title_text = html_escape(text)
        return self

    def add_meta(self, mapping: Mapping[str, Any] | None = None, **attrs: Any) -> Head:
        """Add a ``<meta>`` tag, e.g. ``add_meta(name="viewport", content="...")``."""
        meta = dict(mapping) if mapping else {}
        meta.update(attrs)
        if meta:
            self.metas.append(meta)
        return self

    def add_link(self, href: str) -> Head:
        """Add a stylesheet link once."""
        if href not in self.links:
            self.links.append(href)
        return self

    def add_style(self, css_text: str) -> Head:
        self.styles.append(css_text)
        return self

    def add_script(self, src: str) -> Head:
        self.scripts.append(src)
        return self

    def global_css(
        self, selector: str, rules: Mapping[str, Any] | None = None, **props: Any
    ) -> Head:
        """Add a rule set for an arbitrary selector."""
        body = build_rules(merge_style_maps(rules, props), self.max_css_value)
        self.global_styles.append(f"{selector}{{{body}}}")
        return self

    def add_class(self, name: str, rules: Mapping[str, Any] | None = None, **props: Any) -> Head:
        """Define a named class; redefining a name replaces its rules."""
        self.class_styles[to_kebab(name)] = build_rules(
            merge_style_maps(rules, props), self.max_css_value
        )
        return self

    def clear(self) -> None:
        self.title_text = html_escape(DEFAULT_TITLE)
        self.metas.clear()
        self.links.clear()
        self.styles.clear()
        self.scripts.clear()
        self.global_styles.clear()
        self.class_styles.clear()

    def render(self) -> str:
        parts = ['<meta charset="UTF-8"><title>', self.title_text, "</title>"]
        for meta in self.metas:
            parts.append("<meta")
            for key, value in meta.items():
                parts.append(f' {to_kebab(key)}="{html_escape(value)}"')
            parts.append(">")
        for href in self.links:
            parts.append(f'<link rel="stylesheet" href="{html_escape(href)}">')
        if self.class_styles or self.global_styles or self.styles:
            parts.append("<style>")
            for name, body in self.class_styles.items():
                parts.append(f".{name}{{{body}}}")
            parts.extend(self.global_styles)
            parts.extend(self.styles)
            parts.append("</style>")
        for src in self.scripts:
            parts.append(f'<script src="{html_escape(src)}"></script>')
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title_text,
            "metas": [dict(meta) for meta in self.metas],
            "links": list(self.links),
            "styles": list(self.styles),
            "scripts": list(self.scripts),
            "globalStyles": list(self.global_styles),
            "classStyles": dict(self.class_styles),
        }
