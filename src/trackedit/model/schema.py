"""Node types understood by the document model, plus tree builders."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .fragment import Fragment
from .node import Node
from .replace import ReplaceError

BLOCK = "block"
INLINE = "inline"


@dataclass(slots=True, frozen=True)
class NodeType:
    """Describes a kind of node: its name, the group it belongs to and what it may contain.

    ``content`` is ``"block"``, ``"inline"`` or ``""`` for leaf nodes.
    """

    name: str
    group: str
    content: str = ""

    @property
    def is_text(self) -> bool:
        return self.name == "text"

    @property
    def is_leaf(self) -> bool:
        return not self.content

    @property
    def is_block(self) -> bool:
        return self.group == BLOCK

    @property
    def is_inline(self) -> bool:
        return self.group == INLINE

    @property
    def is_textblock(self) -> bool:
        return self.is_block and self.content == INLINE

    def compatible_content(self, other: NodeType) -> bool:
        """Return ``True`` when nodes of both types can be joined into one."""

        return self == other or (bool(self.content) and self.content == other.content)

    def check_content(self, content: Fragment) -> None:
        if self.is_leaf:
            if content.size:
                raise ReplaceError(f"Leaf node {self.name} cannot hold content {content}")
            return
        for child in content:
            if child.type.group != self.content:
                raise ReplaceError(f"Invalid content for node {self.name}: {content}")

    def create(self, content: Fragment | Node | Iterable[Node] | None = None) -> Node:
        if self.is_text:
            raise ValueError("Use create_text() for text nodes")
        fragment = Fragment.from_value(content)
        self.check_content(fragment)
        return Node(self, fragment)

    def create_text(self, text: str) -> Node:
        if not self.is_text:
            raise ValueError(f"{self.name} is not a text node type")
        if not text:
            raise ValueError("Empty text nodes are not allowed")
        return Node(self, Fragment.EMPTY, text)


DOC = NodeType("doc", group="", content=BLOCK)
PARAGRAPH = NodeType("paragraph", group=BLOCK, content=INLINE)
BLOCKQUOTE = NodeType("blockquote", group=BLOCK, content=BLOCK)
HORIZONTAL_RULE = NodeType("horizontal_rule", group=BLOCK)
TEXT = NodeType("text", group=INLINE)

NODE_TYPES: dict[str, NodeType] = {
    node_type.name: node_type for node_type in (DOC, PARAGRAPH, BLOCKQUOTE, HORIZONTAL_RULE, TEXT)
}


def text(value: str) -> Node:
    return TEXT.create_text(value)


def _inline(children: Iterable[Node | str]) -> list[Node]:
    return [text(child) if isinstance(child, str) else child for child in children if child != ""]


def doc(*children: Node) -> Node:
    return DOC.create(children)


def paragraph(*children: Node | str) -> Node:
    return PARAGRAPH.create(_inline(children))


def blockquote(*children: Node) -> Node:
    return BLOCKQUOTE.create(children)


def horizontal_rule() -> Node:
    return HORIZONTAL_RULE.create()


def doc_from_text(value: str) -> Node:
    """Build a document with one paragraph per line of ``value``."""

    return doc(*(paragraph(line) for line in value.split("\n")))


__all__ = [
    "NodeType",
    "NODE_TYPES",
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
