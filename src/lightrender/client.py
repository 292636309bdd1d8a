"""Client functions: JavaScript behaviour captured for hydration.

A server-side Python callable cannot run in the browser, so client
behaviour is carried as source text. `ClientFunction` is the tagged value
the builder methods store:

    ```
    ClientFunction
    ├── source: str             # JavaScript function expression
    ├── kind: "computed"|"event"# selects the size limit
    └── tokens: frozenset[str]  # substitution placeholders present
    ```

Validation:
    `validate_source()` rejects sources that exceed the kind's size limit
    and sources containing a sequence that would terminate the inline
    ``<script>`` element. This is advisory: sources come from the page
    author, not from end users, and are not sandboxed.

Example:
    >>> fn = ClientFunction.of("function(){ state['__STATE_ID__'] += 1 }", "event")
    >>> fn.tokens
    frozenset({'__STATE_ID__'})
    >>> fn.substitute({"__STATE_ID__": "id-x1"}).source
    "function(){ state['id-x1'] += 1 }"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Literal

from lightrender.runtime.config import RenderConfig
from lightrender.runtime.exceptions import (
    ClientSourceError,
    SourceDeniedError,
    SourceTooLargeError,
)
from lightrender.utils.constants import DENIED_SOURCE_SEQUENCES, SUBSTITUTION_TOKENS

SourceKind = Literal["computed", "event"]

_KINDS = ("computed", "event")


def _find_tokens(source: str) -> frozenset[str]:
    return frozenset(token for token in SUBSTITUTION_TOKENS if token in source)


@dataclass(frozen=True, slots=True)
class ClientFunction:
    """JavaScript function source plus the metadata needed to embed it."""

    source: str
    kind: SourceKind = "event"
    tokens: frozenset[str] = field(default=frozenset(), compare=False)

    @classmethod
    def of(cls, value: str | ClientFunction, kind: SourceKind) -> ClientFunction:
        """Coerce a source string (or an existing instance) to ``kind``.

        Raises:
            ClientSourceError: If ``value`` is neither a str nor a ClientFunction
        """
        if kind not in _KINDS:
            raise ValueError(f"kind must be one of {_KINDS}, got {kind!r}")
        if isinstance(value, ClientFunction):
            source = value.source
        elif isinstance(value, str):
            source = value
        else:
            raise ClientSourceError(
                f"client functions are JavaScript source strings, got {type(value).__name__}",
                kind=kind,
            )
        source = source.strip()
        return cls(source=source, kind=kind, tokens=_find_tokens(source))

    def substitute(self, mapping: Mapping[str, str]) -> ClientFunction:
        """Textually replace every occurrence of each known token."""
        source = self.source
        for token in self.tokens:
            if token in mapping:
                source = source.replace(token, mapping[token])
        return ClientFunction(source=source, kind=self.kind, tokens=_find_tokens(source))

    def validate(self, config: RenderConfig) -> ClientFunction:
        validate_source(self.source, self.kind, config)
        return self

    def __str__(self) -> str:
        return self.source


def validate_source(source: str, kind: str, config: RenderConfig) -> str:
    """Check a client function source against size and deny-list rules.

    Args:
        source: JavaScript source text
        kind: "computed" or "event"; selects the size limit
        config: Supplies the limits

    Returns:
        The source, unchanged

    Raises:
        SourceTooLargeError: Source is longer than the kind's limit
        SourceDeniedError: Source contains a deny-listed sequence
    """
    limit = config.source_limit(kind)
    if len(source) > limit:
        raise SourceTooLargeError(kind=kind, length=len(source), limit=limit)
    if not source:
        raise ClientSourceError(f"{kind} source is empty", kind=kind)
    lowered = source.lower()
    for sequence in DENIED_SOURCE_SEQUENCES:
        if sequence in lowered:
            raise SourceDeniedError(kind=kind, sequence=sequence)
    return source
