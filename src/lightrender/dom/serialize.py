"""Import of the structural export format.

Format:
    ```
    {
      "head": {"title", "metas", "links", "styles", "scripts",
               "globalStyles", "classStyles"},
      "body": [node, ...],
      "state": {node_id: value, ...}
    }
    node := {"type": "element", "tag", "attributes"?, "children"?,
             "cssFragment"?, "state"?, "stateBindings"?, "events"?,
             "computedSource"?}
          | {"type": "text", "value"}      # value is already escaped
    ```

Only data round-trips. ``stateBindings``, ``events`` and ``computedSource``
are exported for inspection but never restored: a client function is
behaviour supplied by page code, not data.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from lightrender.runtime.exceptions import StructuralError

if TYPE_CHECKING:
    from lightrender.dom.document import Document
    from lightrender.dom.node import Node


def load_node(doc: Document, data: Mapping[str, Any]) -> Node:
    """Recreate an element node (and its subtree) inside ``doc``.

    Raises:
        StructuralError: If the mapping is not an element node
        InvalidTagError: If the tag is malformed
    """
    if data.get("type") != "element":
        raise StructuralError(f"Expected an element node, got type {data.get('type')!r}")
    node = doc.create(data.get("tag", ""))
    for name, value in (data.get("attributes") or {}).items():
        node.attributes[name] = value
    for child in data.get("children") or ():
        if child.get("type") == "text":
            node.children.append(str(child.get("value", "")))
        else:
            node.children.append(load_node(doc, child))
    node.inline_style_fragment = data.get("cssFragment", "") or ""
    if "state" in data:
        node.state(data["state"])
    return node


def load_document(doc: Document, data: Mapping[str, Any]) -> Document:
    head = data.get("head") or {}
    if "title" in head:
        doc.head.title_text = str(head["title"])
    doc.head.metas.extend(dict(meta) for meta in head.get("metas", ()))
    for href in head.get("links", ()):
        doc.head.add_link(href)
    doc.head.styles.extend(head.get("styles", ()))
    doc.head.scripts.extend(head.get("scripts", ()))
    doc.head.global_styles.extend(head.get("globalStyles", ()))
    doc.head.class_styles.update(head.get("classStyles", {}))

    for entry in data.get("body", ()):
        doc.use(load_node(doc, entry))
    for node_id, value in (data.get("state") or {}).items():
        doc.state_store.setdefault(node_id, value)
    return doc
