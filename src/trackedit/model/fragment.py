"""Immutable child sequences used as node content."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, Iterator

from .diff import find_diff_end, find_diff_start

if TYPE_CHECKING:
    from .node import Node


def add_node(child: Node, target: list[Node]) -> None:
    """Append ``child`` to ``target``, joining it onto a preceding text node."""

    if target and child.is_text and child.same_markup(target[-1]):
        target[-1] = target[-1].with_text(target[-1].text + child.text)
    else:
        target.append(child)


@dataclass(slots=True, frozen=True, repr=False)
class Fragment:
    """Ordered, immutable sequence of child nodes with a cached ``size``."""

    content: tuple[Node, ...] = ()
    size: int = field(init=False, default=0)

    EMPTY: ClassVar[Fragment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "size", sum(child.node_size for child in self.content))

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_nodes(cls, nodes: Iterable[Node]) -> Fragment:
        """Build a normalized fragment: adjacent text joined, empty text dropped."""

        joined: list[Node] = []
        for node in nodes:
            if node.is_text and not node.text:
                continue
            add_node(node, joined)
        if not joined:
            return cls.EMPTY
        return cls(tuple(joined))

    @classmethod
    def from_value(cls, value: Any) -> Fragment:
        """Coerce ``None``, a node, a fragment or an iterable of nodes."""

        if value is None:
            return cls.EMPTY
        if isinstance(value, Fragment):
            return value
        if isinstance(value, Iterable):
            return cls.from_nodes(value)
        return cls((value,))

    # ------------------------------------------------------------------
    # Child access
    # ------------------------------------------------------------------
    @property
    def child_count(self) -> int:
        return len(self.content)

    @property
    def first_child(self) -> Node | None:
        return self.content[0] if self.content else None

    @property
    def last_child(self) -> Node | None:
        return self.content[-1] if self.content else None

    def child(self, index: int) -> Node:
        if not 0 <= index < len(self.content):
            raise IndexError(f"Index {index} out of range for {self}")
        return self.content[index]

    def maybe_child(self, index: int) -> Node | None:
        if 0 <= index < len(self.content):
            return self.content[index]
        return None

    def __iter__(self) -> Iterator[Node]:
        return iter(self.content)

    def find_index(self, pos: int, round_: int = -1) -> tuple[int, int]:
        """Return ``(index, offset)`` of the child at ``pos``.

        When ``pos`` falls on a child boundary the child after it is returned;
        inside a child, ``round_ > 0`` rounds up to the next boundary.
        """

        if pos == 0:
            return 0, pos
        if pos == self.size:
            return len(self.content), pos
        if pos > self.size or pos < 0:
            raise IndexError(f"Position {pos} outside of fragment ({self})")
        current = 0
        for index, child in enumerate(self.content):
            end = current + child.node_size
            if end >= pos:
                if end == pos or round_ > 0:
                    return index + 1, end
                return index, current
            current = end
        raise IndexError(f"Position {pos} outside of fragment ({self})")  # pragma: no cover

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------
    def cut(self, start: int, end: int | None = None) -> Fragment:
        """Return the sub-fragment between ``start`` and ``end``."""

        if end is None:
            end = self.size
        if start == 0 and end == self.size:
            return self
        result: list[Node] = []
        if end > start:
            pos = 0
            for child in self.content:
                if pos >= end:
                    break
                child_end = pos + child.node_size
                if child_end > start:
                    if pos < start or child_end > end:
                        if child.is_text:
                            child = child.cut(max(0, start - pos), min(len(child.text), end - pos))
                        else:
                            child = child.cut(max(0, start - pos - 1), min(child.content.size, end - pos - 1))
                    result.append(child)
                pos = child_end
        return Fragment(tuple(result))

    def append(self, other: Fragment) -> Fragment:
        """Concatenate ``other``, joining text nodes that meet at the seam."""

        if not other.size:
            return self
        if not self.size:
            return other
        last, first = self.last_child, other.first_child
        content = list(self.content)
        rest = other.content
        if last.is_text and last.same_markup(first):
            content[-1] = last.with_text(last.text + first.text)
            rest = rest[1:]
        content.extend(rest)
        return Fragment(tuple(content))

    def replace_child(self, index: int, node: Node) -> Fragment:
        current = self.child(index)
        if current is node:
            return self
        content = list(self.content)
        content[index] = node
        return Fragment(tuple(content))

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------
    def iter_nodes_between(self, start: int, end: int, node_start: int = 0) -> Iterator[tuple[Node, int]]:
        """Yield ``(node, absolute_pos)`` for every descendant overlapping the range."""

        pos = 0
        for child in self.content:
            if pos >= end:
                break
            child_end = pos + child.node_size
            if child_end > start:
                yield child, node_start + pos
                if child.content.size:
                    inner = pos + 1
                    yield from child.content.iter_nodes_between(
                        max(0, start - inner),
                        min(child.content.size, end - inner),
                        node_start + inner,
                    )
            pos = child_end

    def text_between(
        self,
        start: int,
        end: int,
        block_separator: str = "",
        leaf_text: str = "",
    ) -> str:
        """Flatten the text in ``[start, end)``, separating textblocks when asked."""

        parts: list[str] = []
        first = True
        for node, pos in self.iter_nodes_between(start, end):
            if node.is_text:
                node_text = node.text[max(start, pos) - pos : end - pos]
            elif node.is_leaf:
                node_text = leaf_text
            else:
                node_text = ""
            if block_separator and ((node.is_block and node.is_leaf and node_text) or node.is_textblock):
                if first:
                    first = False
                else:
                    parts.append(block_separator)
            parts.append(node_text)
        return "".join(parts)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------
    def find_diff_start(self, other: Fragment, pos: int = 0) -> int | None:
        return find_diff_start(self, other, pos)

    def find_diff_end(
        self,
        other: Fragment,
        pos: int | None = None,
        other_pos: int | None = None,
    ) -> tuple[int, int] | None:
        if pos is None:
            pos = self.size
        if other_pos is None:
            other_pos = other.size
        return find_diff_end(self, other, pos, other_pos)

    def to_string_inner(self) -> str:
        return ", ".join(str(child) for child in self.content)

    def __str__(self) -> str:
        return f"<{self.to_string_inner()}>"

    __repr__ = __str__


Fragment.EMPTY = Fragment()

__all__ = ["Fragment", "add_node"]
