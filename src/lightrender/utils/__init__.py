"""Pure helper functions: escaping, CSS sanitizing, id generation."""

from lightrender.utils.css import (
    build_rules,
    merge_style_maps,
    sanitize_css_property,
    sanitize_css_value,
    scoped_class_name,
    style_hash,
    to_kebab,
)
from lightrender.utils.html import escape_json_for_script, html_escape
from lightrender.utils.ids import IdGenerator, next_id

__all__ = [
    "IdGenerator",
    "build_rules",
    "escape_json_for_script",
    "html_escape",
    "merge_style_maps",
    "next_id",
    "sanitize_css_property",
    "sanitize_css_value",
    "scoped_class_name",
    "style_hash",
    "to_kebab",
]
