"""Immutable document tree nodes."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .fragment import Fragment
from .replace import replace
from .resolved_pos import ResolvedPos
from .slice import Slice

if TYPE_CHECKING:
    from .schema import NodeType


@dataclass(slots=True, frozen=True, repr=False)
class Node:
    """A node in the document tree.

    Positions count one token for entering and one for leaving every
    non-leaf node, one per character of text, and one per leaf node. Two
    nodes compare equal when their type and full content are equal.
    """

    type: NodeType
    content: Fragment = field(default_factory=lambda: Fragment.EMPTY)
    text: str | None = None

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------
    @property
    def node_size(self) -> int:
        if self.text is not None:
            return len(self.text)
        if self.type.is_leaf:
            return 1
        return self.content.size + 2

    @property
    def child_count(self) -> int:
        return self.content.child_count

    @property
    def first_child(self) -> Node | None:
        return self.content.first_child

    @property
    def last_child(self) -> Node | None:
        return self.content.last_child

    @property
    def is_text(self) -> bool:
        return self.type.is_text

    @property
    def is_leaf(self) -> bool:
        return self.type.is_leaf

    @property
    def is_block(self) -> bool:
        return self.type.is_block

    @property
    def is_inline(self) -> bool:
        return self.type.is_inline

    @property
    def is_textblock(self) -> bool:
        return self.type.is_textblock

    @property
    def text_content(self) -> str:
        if self.text is not None:
            return self.text
        return self.text_between(0, self.content.size)

    def child(self, index: int) -> Node:
        return self.content.child(index)

    def maybe_child(self, index: int) -> Node | None:
        return self.content.maybe_child(index)

    def same_markup(self, other: Node) -> bool:
        return self.type == other.type

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------
    def copy(self, content: Fragment | None = None) -> Node:
        """Return a node of the same type holding ``content``."""

        if content is None or content is self.content:
            return self
        return Node(self.type, content)

    def with_text(self, text: str) -> Node:
        if text == self.text:
            return self
        return Node(self.type, Fragment.EMPTY, text)

    def cut(self, start: int = 0, end: int | None = None) -> Node:
        if self.text is not None:
            if end is None:
                end = len(self.text)
            if start == 0 and end == len(self.text):
                return self
            return self.with_text(self.text[start:end])
        if end is None:
            end = self.content.size
        if start == 0 and end == self.content.size:
            return self
        return self.copy(self.content.cut(start, end))

    def resolve(self, pos: int) -> ResolvedPos:
        return ResolvedPos.resolve(self, pos)

    def slice(self, start: int, end: int | None = None, include_parents: bool = False) -> Slice:
        """Cut the content between two positions into a :class:`Slice`."""

        if end is None:
            end = self.content.size
        if start == end:
            return Slice.EMPTY
        from_pos, to_pos = self.resolve(start), self.resolve(end)
        depth = 0 if include_parents else from_pos.shared_depth(end)
        node_start = from_pos.start(depth)
        node = from_pos.node(depth)
        content = node.content.cut(from_pos.pos - node_start, to_pos.pos - node_start)
        return Slice(content, from_pos.depth - depth, to_pos.depth - depth)

    def replace(self, start: int, end: int, slice: Slice) -> Node:
        """Return a copy of this document with ``[start, end)`` replaced by ``slice``."""

        return replace(self.resolve(start), self.resolve(end), slice)

    def text_between(
        self,
        start: int,
        end: int,
        block_separator: str = "",
        leaf_text: str = "",
    ) -> str:
        return self.content.text_between(start, end, block_separator, leaf_text)

    def __str__(self) -> str:
        if self.text is not None:
            return json.dumps(self.text)
        name = self.type.name
        if self.content.size:
            name += f"({self.content.to_string_inner()})"
        return name

    __repr__ = __str__


__all__ = ["Node"]
