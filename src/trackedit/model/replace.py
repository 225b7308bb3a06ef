"""Structural replacement of a document range with a slice."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .fragment import Fragment, add_node

if TYPE_CHECKING:
    from .node import Node
    from .resolved_pos import ResolvedPos
    from .slice import Slice


class ReplaceError(ValueError):
    """Raised when a slice cannot be placed at the given range."""


def replace(from_pos: ResolvedPos, to_pos: ResolvedPos, slice: Slice) -> Node:
    """Return the document of ``from_pos`` with ``[from_pos, to_pos)`` replaced."""

    if slice.open_start > from_pos.depth:
        raise ReplaceError("Inserted content deeper than insertion position")
    if from_pos.depth - slice.open_start != to_pos.depth - slice.open_end:
        raise ReplaceError("Inconsistent open depths")
    return _replace_outer(from_pos, to_pos, slice, 0)


def _replace_outer(from_pos: ResolvedPos, to_pos: ResolvedPos, slice: Slice, depth: int) -> Node:
    index = from_pos.index(depth)
    node = from_pos.node(depth)
    if index == to_pos.index(depth) and depth < from_pos.depth - slice.open_start:
        inner = _replace_outer(from_pos, to_pos, slice, depth + 1)
        return node.copy(node.content.replace_child(index, inner))
    if not slice.content.size:
        return _close(node, _replace_two_way(from_pos, to_pos, depth))
    if not slice.open_start and not slice.open_end and from_pos.depth == depth and to_pos.depth == depth:
        parent = from_pos.parent
        content = parent.content
        joined = content.cut(0, from_pos.parent_offset).append(slice.content).append(content.cut(to_pos.parent_offset))
        return _close(parent, joined)
    start, end = _prepare_slice_for_replace(slice, from_pos)
    return _close(node, _replace_three_way(from_pos, start, end, to_pos, depth))


def _check_join(main: Node, sub: Node) -> None:
    if not sub.type.compatible_content(main.type):
        raise ReplaceError(f"Cannot join {sub.type.name} onto {main.type.name}")


def _joinable(before: ResolvedPos, after: ResolvedPos, depth: int) -> Node:
    node = before.node(depth)
    _check_join(node, after.node(depth))
    return node


def _add_range(
    start: ResolvedPos | None,
    end: ResolvedPos | None,
    depth: int,
    target: list[Node],
) -> None:
    node = (end or start).node(depth)
    start_index = 0
    end_index = end.index(depth) if end is not None else node.child_count
    if start is not None:
        start_index = start.index(depth)
        if start.depth > depth:
            start_index += 1
        elif start.text_offset:
            add_node(start.node_after, target)
            start_index += 1
    for index in range(start_index, end_index):
        add_node(node.child(index), target)
    if end is not None and end.depth == depth and end.text_offset:
        add_node(end.node_before, target)


def _close(node: Node, content: Fragment) -> Node:
    node.type.check_content(content)
    return node.copy(content)


def _replace_three_way(
    from_pos: ResolvedPos,
    start: ResolvedPos,
    end: ResolvedPos,
    to_pos: ResolvedPos,
    depth: int,
) -> Fragment:
    open_start = _joinable(from_pos, start, depth + 1) if from_pos.depth > depth else None
    open_end = _joinable(end, to_pos, depth + 1) if to_pos.depth > depth else None

    content: list[Node] = []
    _add_range(None, from_pos, depth, content)
    if open_start is not None and open_end is not None and start.index(depth) == end.index(depth):
        _check_join(open_start, open_end)
        add_node(_close(open_start, _replace_three_way(from_pos, start, end, to_pos, depth + 1)), content)
    else:
        if open_start is not None:
            add_node(_close(open_start, _replace_two_way(from_pos, start, depth + 1)), content)
        _add_range(start, end, depth, content)
        if open_end is not None:
            add_node(_close(open_end, _replace_two_way(end, to_pos, depth + 1)), content)
    _add_range(to_pos, None, depth, content)
    return Fragment(tuple(content))


def _replace_two_way(from_pos: ResolvedPos, to_pos: ResolvedPos, depth: int) -> Fragment:
    content: list[Node] = []
    _add_range(None, from_pos, depth, content)
    if from_pos.depth > depth:
        node = _joinable(from_pos, to_pos, depth + 1)
        add_node(_close(node, _replace_two_way(from_pos, to_pos, depth + 1)), content)
    _add_range(to_pos, None, depth, content)
    return Fragment(tuple(content))


def _prepare_slice_for_replace(slice: Slice, along: ResolvedPos) -> tuple[ResolvedPos, ResolvedPos]:
    """Wrap the slice in copies of ``along``'s ancestors and resolve its inner edges."""

    extra = along.depth - slice.open_start
    parent = along.node(extra)
    node = parent.copy(slice.content)
    for depth in range(extra - 1, -1, -1):
        node = along.node(depth).copy(Fragment((node,)))
    return (
        node.resolve(slice.open_start + extra),
        node.resolve(node.content.size - slice.open_end - extra),
    )


__all__ = ["ReplaceError", "replace"]
