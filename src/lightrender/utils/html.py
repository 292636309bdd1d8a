"""HTML and script escaping helpers.

All escaping is single-pass via `str.translate()`, which is O(n) and
allocation-light compared to chained `str.replace()` calls.

Thread-Safety:
    Module tables are built once at import and never mutated.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

_ESCAPE_TABLE = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#39;",
    }
)

# JSON is valid JavaScript, but a few characters are not safe inside <script>
_SCRIPT_JSON_TABLE = str.maketrans(
    {
        "<": "\\u003c",
        ">": "\\u003e",
        "&": "\\u0026",
        "\u2028": "\\u2028",
        "\u2029": "\\u2029",
    }
)


def html_escape(value: Any) -> str:
    """Escape a value for text or double-quoted attribute positions.

    Non-strings are converted with ``str()`` first.

    Example:
        >>> html_escape('<b class="x">')
        '&lt;b class=&quot;x&quot;&gt;'
    """
    if not isinstance(value, str):
        value = str(value)
    return value.translate(_ESCAPE_TABLE)


def escape_json_for_script(value: Any, default: Callable[[Any], Any] | None = None) -> str:
    """Serialize ``value`` as JSON that can be embedded in an inline script.

    Args:
        value: Any JSON-serializable value
        default: Fallback converter for unsupported objects (see ``json.dumps``)

    Raises:
        TypeError: If the value is not JSON-serializable and no default is given
    """
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=default).translate(
        _SCRIPT_JSON_TABLE
    )
