"""Node: mutable builder for one markup element.

Every builder method returns the node itself so calls chain:

    >>> doc = create_document()
    >>> card = doc.create("div").css(padding="8px").text("Hello <world>")

Hydration Invariant:
    A node carrying state, a computed source, bindings or events always
    has an ``id`` attribute (assigned automatically when absent). The id
    is the only link between the server tree and the client DOM.

Validation Discipline:
    Client sources passed to `computed()`, `bind()`, `on()` and
    `bind_state()` are validated immediately. A rejected source never
    raises out of the builder: it is logged in development mode, dropped
    silently in production, and the chain continues.

Lifecycle:
    Nodes are acquired from the runtime's `ObjectPool` by a Document and
    released back to it (children first) after the document renders.
    Do not keep references to nodes past `Document.render()`.
"""

from __future__ import annotations

import copy
import logging
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from lightrender.client import ClientFunction, SourceKind
from lightrender.render_context import EventBinding
from lightrender.runtime.exceptions import ClientSourceError, InvalidTagError
from lightrender.runtime.metrics import HYDRATION_REJECTED
from lightrender.utils.css import build_rules, merge_style_maps, scoped_class_name, to_kebab
from lightrender.utils.html import html_escape
from lightrender.utils.ids import next_id

if TYPE_CHECKING:
    from lightrender.dom.document import Document
    from lightrender.runtime.core import Runtime

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"[a-z][a-z0-9]*(?:-[a-z0-9]+)*")


def normalize_tag(tag: object) -> str:
    """Kebab-case a tag name and check it is a valid element name.

    Raises:
        InvalidTagError: If the tag is empty or malformed
    """
    if not isinstance(tag, str):
        raise InvalidTagError(tag)
    name = tag.strip()
    if name.isupper() or name.islower():
        name = name.lower()
    normalized = to_kebab(name).lstrip("-")
    if not _TAG_RE.fullmatch(normalized):
        raise InvalidTagError(tag)
    return normalized


class Node:
    """One markup element: tag, attributes, children and hydration data.

    Attributes:
        tag: Normalized element name
        attributes: Attribute name → value, rendered in insertion order
        children: Child Nodes and pre-escaped text, in render order
        inline_style_fragment: Scoped CSS rules produced by `css()`
        captured_state: State snapshot (meaningful when ``has_state``)
        computed_fn: Computed source run in the browser against client state
        state_bindings: ``(state_key, template)`` reactive text bindings
        events: Recorded event listeners
    """

    __slots__ = (
        "_document",
        "_pooled",
        "attributes",
        "captured_state",
        "children",
        "computed_fn",
        "events",
        "has_state",
        "inline_style_fragment",
        "state_bindings",
        "tag",
    )

    def __init__(self, tag: str, document: Document | None = None):
        self.attributes: dict[str, Any] = {}
        self.children: list[Node | str] = []
        self.state_bindings: list[tuple[str, ClientFunction]] = []
        self.events: list[EventBinding] = []
        self._reset(tag, document)

    def _reset(self, tag: str, document: Document | None = None) -> None:
        """Re-initialize in place for (re)use; containers keep their identity."""
        self.tag = normalize_tag(tag)
        self.attributes.clear()
        self.children.clear()
        self.state_bindings.clear()
        self.events.clear()
        self.inline_style_fragment = ""
        self.captured_state: Any = None
        self.has_state = False
        self.computed_fn: ClientFunction | None = None
        self._document = document
        self._pooled = False

    def _clear(self) -> None:
        """Drop every structural field (children must already be released)."""
        self.attributes.clear()
        self.children.clear()
        self.state_bindings.clear()
        self.events.clear()
        self.inline_style_fragment = ""
        self.captured_state = None
        self.has_state = False
        self.computed_fn = None
        self._document = None

    # -- properties ---------------------------------------------------------

    @property
    def document(self) -> Document | None:
        return self._document

    @property
    def node_id(self) -> str | None:
        return self.attributes.get("id")

    @property
    def requires_hydration(self) -> bool:
        return bool(
            self.has_state or self.computed_fn or self.state_bindings or self.events
        )

    def _runtime(self) -> Runtime:
        if self._document is not None:
            return self._document.runtime
        from lightrender.runtime.core import get_runtime

        return get_runtime()

    def _ensure_id(self) -> str:
        node_id = self.attributes.get("id")
        if not node_id:
            self.id()
            node_id = self.attributes["id"]
        return node_id

    # -- builder methods ----------------------------------------------------

    def attribute(self, name: str, value: Any) -> Node:
        """Set an attribute under its kebab-case name. Values are not validated."""
        self.attributes[to_kebab(name)] = value
        return self

    def attributes_from(self, mapping: Mapping[str, Any] | None = None, **attrs: Any) -> Node:
        """Set several attributes at once; keywords override the mapping."""
        if mapping:
            for name, value in mapping.items():
                self.attribute(name, value)
        for name, value in attrs.items():
            self.attribute(name, value)
        return self

    def id(self, value: str | None = None) -> Node:
        """Set the element id, generating a process-unique one if omitted."""
        if not value:
            value = self._document.next_id() if self._document is not None else next_id()
        self.attributes["id"] = value
        return self

    def text(self, content: Any) -> Node:
        """Append escaped text. ``None`` is ignored."""
        if content is not None:
            self.children.append(html_escape(content))
        return self

    def append(self, child: Any) -> Node:
        """Append a Node as-is, markup objects via ``__html__``, anything else as text."""
        if child is None:
            return self
        if isinstance(child, Node):
            self.children.append(child)
        elif hasattr(child, "__html__"):
            self.children.append(str(child.__html__()))
        else:
            self.children.append(html_escape(child))
        return self

    def append_unsafe(self, html: str) -> Node:
        """Append raw HTML without escaping. Trusted input only."""
        if html is not None:
            self.children.append(str(html))
        return self

    def css(self, style_map: Mapping[str, Any] | None = None, **props: Any) -> Node:
        """Attach scoped styles through a content-hashed class.

        Example:
            >>> node.css({"marginTop": "4px"}, color="red")
            # class="c1x2y3z", fragment ".c1x2y3z{margin-top:4px;color:red;}"
        """
        config = self._runtime().config
        rules = build_rules(merge_style_maps(style_map, props), config.max_css_value)
        if not rules:
            return self
        class_name = scoped_class_name(rules)
        existing = self.attributes.get("class")
        if existing:
            if class_name not in str(existing).split():
                self.attributes["class"] = f"{existing} {class_name}"
        else:
            self.attributes["class"] = class_name
        self.inline_style_fragment += f".{class_name}{{{rules}}}"
        return self

    def state(self, value: Any) -> Node:
        """Capture a state snapshot to be restored in the browser."""
        node_id = self._ensure_id()
        snapshot = copy.deepcopy(value)
        self.captured_state = snapshot
        self.has_state = True
        if self._document is not None:
            self._document.state_store[node_id] = snapshot
        return self

    def computed(self, fn: str | ClientFunction) -> Node:
        """Run ``fn(state)`` in the browser and show the result as text."""
        captured = self._capture(fn, "computed")
        if captured is not None:
            self._ensure_id()
            self.computed_fn = captured
        return self

    def bind(self, state_source: Node | str, template: str | ClientFunction) -> Node:
        """Re-render this node's text whenever a state value changes.

        Args:
            state_source: Node holding the state, or a state key
            template: Source of ``(value) => text``
        """
        captured = self._capture(template, "computed")
        if captured is None:
            return self
        if isinstance(state_source, Node):
            key = state_source._ensure_id()
        elif isinstance(state_source, str) and state_source:
            key = state_source
        else:
            self._reject("computed", ClientSourceError("binding needs a state key", kind="computed"))
            return self
        self._ensure_id()
        self.state_bindings.append((key, captured))
        return self

    def on(self, event: str, fn: str | ClientFunction) -> Node:
        """Attach an event listener in the browser."""
        captured = self._capture(fn, "event", event=event)
        if captured is not None:
            node_id = self._ensure_id()
            self.events.append(EventBinding(event, node_id, None, captured))
        return self

    def bind_state(self, target: Node, event: str, fn: str | ClientFunction) -> Node:
        """Attach a listener that manipulates ``target``'s state.

        Every ``__STATE_ID__`` in the source is replaced with the target's
        id when the hydration script is compiled.
        """
        if not isinstance(target, Node):
            self._reject("event", ClientSourceError("bind_state target must be a Node", kind="event"))
            return self
        captured = self._capture(fn, "event", event=event)
        if captured is not None:
            target_id = target._ensure_id()
            node_id = self._ensure_id()
            self.events.append(EventBinding(event, node_id, target_id, captured))
        return self

    # -- validation ---------------------------------------------------------

    def _capture(
        self, fn: str | ClientFunction, kind: SourceKind, *, event: str | None = None
    ) -> ClientFunction | None:
        try:
            if event is not None and (not isinstance(event, str) or not event.strip()):
                raise ClientSourceError(f"invalid event name {event!r}", kind=kind)
            return ClientFunction.of(fn, kind).validate(self._runtime().config)
        except ClientSourceError as exc:
            self._reject(kind, exc)
            return None

    def _reject(self, kind: str, exc: ClientSourceError) -> None:
        runtime = self._runtime()
        runtime.metrics.increment(HYDRATION_REJECTED)
        if not runtime.config.is_production:
            logger.warning("Ignoring %s source on <%s>: %s", kind, self.tag, exc)

    # -- export -------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Structural export. Client sources are included for inspection only."""
        data: dict[str, Any] = {"type": "element", "tag": self.tag}
        if self.attributes:
            data["attributes"] = dict(self.attributes)
        data["children"] = [
            child.to_dict() if isinstance(child, Node) else {"type": "text", "value": child}
            for child in self.children
        ]
        if self.inline_style_fragment:
            data["cssFragment"] = self.inline_style_fragment
        if self.has_state:
            data["state"] = self.captured_state
        if self.state_bindings:
            data["stateBindings"] = [
                {"stateKey": key, "source": fn.source} for key, fn in self.state_bindings
            ]
        if self.events:
            data["events"] = [
                {
                    "event": binding.event,
                    "id": binding.node_id,
                    "targetId": binding.target_id,
                    "source": binding.fn.source,
                }
                for binding in self.events
            ]
        if self.computed_fn is not None:
            data["computedSource"] = self.computed_fn.source
        return data

    def __repr__(self) -> str:
        node_id = self.attributes.get("id")
        suffix = f" id={node_id!r}" if node_id else ""
        return f"<Node {self.tag}{suffix} children={len(self.children)}>"
