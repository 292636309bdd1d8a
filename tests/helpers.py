"""Assertion and extraction helpers shared by the test modules."""

from __future__ import annotations


def body_of(html: str) -> str:
    """Markup between <body> and the hydration script (if any)."""
    body = html.split("<body>", 1)[1].rsplit("</body>", 1)[0]
    return body.split("<script>", 1)[0]


def script_of(html: str) -> str:
    """Inline hydration script, or "" when there is none."""
    if "<script>" not in html:
        return ""
    return html.split("<script>", 1)[1].split("</script>", 1)[0]


def assert_contains(html: str, *expected_parts: str) -> None:
    """Assert rendered output contains all expected parts."""
    for part in expected_parts:
        assert part in html, (
            f"Rendered output missing expected content:\n"
            f"  Missing: {part!r}\n"
            f"  Actual: {html!r}"
        )
