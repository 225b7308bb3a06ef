"""Positions resolved against a document into their ancestor chain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .node import Node


@dataclass(slots=True, frozen=True, repr=False)
class ResolvedPos:
    """A document position plus, per depth, the ancestor, child index and offset.

    ``path[d]`` is ``(node, index, offset)`` where ``node`` is the ancestor at
    depth ``d``, ``index`` the child index the position points into and
    ``offset`` the absolute position where that child starts.
    """

    pos: int
    path: tuple[tuple[Node, int, int], ...]
    parent_offset: int

    @classmethod
    def resolve(cls, doc: Node, pos: int) -> ResolvedPos:
        if not 0 <= pos <= doc.content.size:
            raise IndexError(f"Position {pos} out of range")
        path: list[tuple[Node, int, int]] = []
        start = 0
        parent_offset = pos
        node = doc
        while True:
            index, offset = node.content.find_index(parent_offset)
            remainder = parent_offset - offset
            path.append((node, index, start + offset))
            if not remainder:
                break
            node = node.child(index)
            if node.is_text:
                break
            parent_offset = remainder - 1
            start += offset + 1
        return cls(pos, tuple(path), parent_offset)

    def _depth(self, value: int | None) -> int:
        if value is None:
            return self.depth
        if value < 0:
            return self.depth + value
        return value

    @property
    def depth(self) -> int:
        return len(self.path) - 1

    @property
    def parent(self) -> Node:
        return self.node(self.depth)

    @property
    def doc(self) -> Node:
        return self.node(0)

    def node(self, depth: int | None = None) -> Node:
        return self.path[self._depth(depth)][0]

    def index(self, depth: int | None = None) -> int:
        return self.path[self._depth(depth)][1]

    def index_after(self, depth: int | None = None) -> int:
        depth = self._depth(depth)
        return self.index(depth) + (0 if depth == self.depth and not self.text_offset else 1)

    def start(self, depth: int | None = None) -> int:
        depth = self._depth(depth)
        return 0 if depth == 0 else self.path[depth - 1][2] + 1

    def end(self, depth: int | None = None) -> int:
        depth = self._depth(depth)
        return self.start(depth) + self.node(depth).content.size

    def before(self, depth: int | None = None) -> int:
        depth = self._depth(depth)
        if not depth:
            raise ValueError("There is no position before the top-level node")
        return self.pos if depth == self.depth + 1 else self.path[depth - 1][2]

    def after(self, depth: int | None = None) -> int:
        depth = self._depth(depth)
        if not depth:
            raise ValueError("There is no position after the top-level node")
        if depth == self.depth + 1:
            return self.pos
        return self.path[depth - 1][2] + self.node(depth).node_size

    @property
    def text_offset(self) -> int:
        """Offset into the text node the position points into, or 0."""

        return self.pos - self.path[-1][2]

    @property
    def node_after(self) -> Node | None:
        parent = self.parent
        index = self.index(self.depth)
        if index == parent.child_count:
            return None
        offset = self.text_offset
        child = parent.child(index)
        return child.cut(offset) if offset else child

    @property
    def node_before(self) -> Node | None:
        index = self.index(self.depth)
        offset = self.text_offset
        if offset:
            return self.parent.child(index).cut(0, offset)
        return None if index == 0 else self.parent.child(index - 1)

    def shared_depth(self, pos: int) -> int:
        """Return the deepest depth whose node also contains ``pos``."""

        for depth in range(self.depth, 0, -1):
            if self.start(depth) <= pos <= self.end(depth):
                return depth
        return 0

    def __str__(self) -> str:
        parts = [f"{self.node(depth).type.name}_{self.index(depth - 1)}" for depth in range(1, self.depth + 1)]
        return "/".join(parts) + f":{self.parent_offset}"

    __repr__ = __str__


__all__ = ["ResolvedPos"]
