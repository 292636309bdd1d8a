"""Exceptions for LightRender.

Exception Hierarchy:
LightRenderError (base)
├── StructuralError           # Raised immediately, aborts the operation
│   ├── InvalidTagError       # Missing or malformed tag name
│   ├── RouteDescriptorError  # Malformed warmup/cache route descriptor
│   └── BuilderResultError    # Builder returned neither Document nor str
└── ClientSourceError         # Client function failed validation
    ├── SourceTooLargeError   # Source exceeds the size limit of its kind
    └── SourceDeniedError     # Source contains a deny-listed sequence

Handling Discipline:
Structural errors propagate to the caller. Client source errors are
raised by `validate_source()` but swallowed by the Node builder methods,
which log them in development mode and simply omit the hydration
feature. Builder failures during warmup are captured per route.

Example:
    ```
    LR-STR-001: Invalid tag name '1div'
      Docs: https://lightrender.dev/docs/errors/#lr-str-001
    ```

"""

from __future__ import annotations

from enum import Enum

_DOCS_BASE = "https://lightrender.dev/docs/errors"


class ErrorCode(Enum):
    """Searchable error codes.

    Format: LR-{CATEGORY}-{NUMBER}
    Categories: STR (structural), SRC (client source validation)
    """

    # Structural errors (LR-STR-xxx)
    INVALID_TAG = "LR-STR-001"
    INVALID_ROUTE = "LR-STR-002"
    INVALID_BUILDER_RESULT = "LR-STR-003"

    # Client source validation (LR-SRC-xxx)
    SOURCE_TOO_LARGE = "LR-SRC-001"
    SOURCE_DENIED = "LR-SRC-002"
    SOURCE_INVALID = "LR-SRC-003"

    @property
    def docs_url(self) -> str:
        """Documentation URL for this error code."""
        return f"{_DOCS_BASE}/#{self.value.lower()}"

    @property
    def category(self) -> str:
        """Error category ('structural' or 'source')."""
        prefix = self.value.split("-")[1]
        return {"STR": "structural", "SRC": "source"}.get(prefix, "unknown")


class LightRenderError(Exception):
    """Base exception for all LightRender errors.

    Attributes:
        code: Optional ErrorCode for searchable error identification.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format the error as a short, human-readable summary.

        Returns:
            ``"<code>: <message>"`` followed by a docs line when a code is set.
        """
        header = str(self)
        parts: list[str] = []
        if self.code:
            code_str = self.code.value
            if code_str not in header:
                header = f"{code_str}: {header}"
        parts.append(header)
        if self.code:
            parts.append(f"  Docs: {self.code.docs_url}")
        return "\n".join(parts)


class StructuralError(LightRenderError):
    """Malformed input that makes the requested operation impossible."""


class InvalidTagError(StructuralError):
    """Tag name is missing or not a valid element name.

    Example:
        >>> doc.create("")
        InvalidTagError: Invalid tag name ''
    """

    code: ErrorCode | None = ErrorCode.INVALID_TAG

    def __init__(self, tag: object):
        self.tag = tag
        super().__init__(f"Invalid tag name {tag!r}")


class RouteDescriptorError(StructuralError):
    """Warmup route is not a ``{key, builder}`` pair."""

    code: ErrorCode | None = ErrorCode.INVALID_ROUTE

    def __init__(self, message: str, *, index: int | None = None):
        self.index = index
        if index is not None:
            message = f"Route #{index}: {message}"
        super().__init__(message)


class BuilderResultError(StructuralError):
    """Builder returned something that cannot be rendered."""

    code: ErrorCode | None = ErrorCode.INVALID_BUILDER_RESULT

    def __init__(self, result: object):
        self.result = result
        super().__init__(
            f"Builder must return a Document or str, got {type(result).__name__}"
        )


class ClientSourceError(LightRenderError):
    """Client function source failed validation.

    Attributes:
        kind: Source category ("computed" or "event")
    """

    code: ErrorCode | None = ErrorCode.SOURCE_INVALID

    def __init__(self, message: str, *, kind: str):
        self.kind = kind
        super().__init__(message)


class SourceTooLargeError(ClientSourceError):
    """Source exceeds the maximum length for its kind."""

    code: ErrorCode | None = ErrorCode.SOURCE_TOO_LARGE

    def __init__(self, *, kind: str, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(
            f"{kind} source is {length} characters, limit is {limit}",
            kind=kind,
        )


class SourceDeniedError(ClientSourceError):
    """Source contains a sequence that would break out of a script element."""

    code: ErrorCode | None = ErrorCode.SOURCE_DENIED

    def __init__(self, *, kind: str, sequence: str):
        self.sequence = sequence
        super().__init__(f"{kind} source contains denied sequence {sequence!r}", kind=kind)
