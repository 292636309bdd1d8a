"""CSS helpers: property-name normalization, value sanitizing, scoped classes.

Scoped class names are derived from a 32-bit FNV-style hash of the rule
text, so two nodes with identical style maps always share one class and
the collected stylesheet can de-duplicate their rules.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from functools import lru_cache
from typing import Any

from lightrender.utils.constants import CSS_VALUE_STRIP_CHARS

_UPPER_RE = re.compile(r"[A-Z]")
_PROPERTY_RE = re.compile(r"[^a-z0-9-]")
_CSS_COMMENT_RE = re.compile(r"/\*|\*/")
_STRIP_TABLE = str.maketrans("", "", CSS_VALUE_STRIP_CHARS)

_FNV_OFFSET = 2166136261
_MASK_32 = 0xFFFFFFFF
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


@lru_cache(maxsize=512)
def to_kebab(name: str) -> str:
    """Convert a camelCase or snake_case name to kebab-case.

    A trailing underscore (used to dodge Python keywords) is dropped.

    Example:
        >>> to_kebab("marginTop")
        'margin-top'
        >>> to_kebab("class_")
        'class'
        >>> to_kebab("data_user_id")
        'data-user-id'
    """
    if not name or not isinstance(name, str):
        return ""
    name = name.rstrip("_") or name
    name = _UPPER_RE.sub(lambda m: "-" + m.group(0).lower(), name)
    return name.replace("_", "-")


def sanitize_css_property(name: str) -> str:
    """Kebab-case a property name and drop anything outside ``[a-z0-9-]``."""
    return _PROPERTY_RE.sub("", to_kebab(name))


def sanitize_css_value(value: Any, max_length: int) -> str:
    """Remove rule terminators, then comment delimiters until none remain, then truncate."""
    text = str(value).translate(_STRIP_TABLE)
    while True:
        stripped = _CSS_COMMENT_RE.sub("", text)
        if stripped == text:
            break
        text = stripped
    text = text.strip()
    return text[:max_length]


def to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def style_hash(text: str) -> str:
    """Deterministic 32-bit content hash, base-36 encoded."""
    h = _FNV_OFFSET
    for ch in text:
        h ^= ord(ch)
        h = (h + (h << 1) + (h << 4) + (h << 7) + (h << 8) + (h << 24)) & _MASK_32
    return to_base36(h)


def scoped_class_name(rules: str) -> str:
    return "c" + style_hash(rules)


def build_rules(declarations: Iterable[tuple[str, Any]], max_value_length: int) -> str:
    """Join ``(property, value)`` pairs into a ``prop:value;`` rule list.

    Declarations whose property or value sanitizes to an empty string
    are skipped.
    """
    parts: list[str] = []
    for prop, value in declarations:
        if value is None:
            continue
        name = sanitize_css_property(prop)
        cleaned = sanitize_css_value(value, max_value_length)
        if name and cleaned:
            parts.append(f"{name}:{cleaned};")
    return "".join(parts)


def merge_style_maps(
    style_map: Mapping[str, Any] | None, props: Mapping[str, Any]
) -> list[tuple[str, Any]]:
    """Combine a positional style map with keyword properties (keywords win)."""
    merged: dict[str, Any] = dict(style_map) if style_map else {}
    merged.update(props)
    return list(merged.items())
