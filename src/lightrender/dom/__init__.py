"""Markup tree: nodes, head, document and the object pool that recycles them."""

from lightrender.dom.node import Node, normalize_tag
from lightrender.dom.pool import ObjectPool
from lightrender.dom.head import Head
from lightrender.dom.document import Document, create_document

__all__ = [
    "Document",
    "Head",
    "Node",
    "ObjectPool",
    "create_document",
    "normalize_tag",
]
