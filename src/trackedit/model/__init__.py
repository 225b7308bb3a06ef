"""Document tree model: nodes, fragments, slices and resolved positions."""

from .fragment import Fragment
from .node import Node
from .replace import ReplaceError
from .resolved_pos import ResolvedPos
from .schema import (
    BLOCKQUOTE,
    DOC,
    HORIZONTAL_RULE,
    NODE_TYPES,
    PARAGRAPH,
    TEXT,
    NodeType,
    blockquote,
    doc,
    doc_from_text,
    horizontal_rule,
    paragraph,
    text,
)
from .slice import Slice

__all__ = [
    "Fragment",
    "Node",
    "NodeType",
    "NODE_TYPES",
    "ReplaceError",
    "ResolvedPos",
    "Slice",
    "DOC",
    "PARAGRAPH",
    "BLOCKQUOTE",
    "HORIZONTAL_RULE",
    "TEXT",
    "doc",
    "paragraph",
    "blockquote",
    "horizontal_rule",
    "text",
    "doc_from_text",
]
