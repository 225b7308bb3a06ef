"""Structural divergence search between two child sequences."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .fragment import Fragment


def find_diff_start(a: Fragment, b: Fragment, pos: int) -> int | None:
    """Return the first position where ``a`` and ``b`` diverge, scanning forward.

    ``pos`` is the absolute position of the start of both sequences. Children
    that compare equal are skipped whole; text is only compared character by
    character when both children are text nodes of the same markup.
    """

    index = 0
    while True:
        if index == a.child_count or index == b.child_count:
            return None if a.child_count == b.child_count else pos
        child_a, child_b = a.child(index), b.child(index)
        index += 1
        if child_a is child_b:
            pos += child_a.node_size
            continue
        if not child_a.same_markup(child_b):
            return pos
        if child_a.is_text and child_a.text != child_b.text:
            text_a, text_b = child_a.text, child_b.text
            same = 0
            limit = min(len(text_a), len(text_b))
            while same < limit and text_a[same] == text_b[same]:
                same += 1
            return pos + same
        if child_a.content.size or child_b.content.size:
            inner = find_diff_start(child_a.content, child_b.content, pos + 1)
            if inner is not None:
                return inner
        pos += child_a.node_size


def find_diff_end(a: Fragment, b: Fragment, pos_a: int, pos_b: int) -> tuple[int, int] | None:
    """Return the last divergence as ``(pos_in_a, pos_in_b)``, scanning backward.

    ``pos_a``/``pos_b`` are the absolute end positions of the two sequences.
    """

    index_a, index_b = a.child_count, b.child_count
    while True:
        if index_a == 0 or index_b == 0:
            return None if index_a == index_b else (pos_a, pos_b)
        index_a -= 1
        index_b -= 1
        child_a, child_b = a.child(index_a), b.child(index_b)
        size = child_a.node_size
        if child_a is child_b:
            pos_a -= size
            pos_b -= size
            continue
        if not child_a.same_markup(child_b):
            return pos_a, pos_b
        if child_a.is_text and child_a.text != child_b.text:
            text_a, text_b = child_a.text, child_b.text
            same = 0
            limit = min(len(text_a), len(text_b))
            while same < limit and text_a[-same - 1] == text_b[-same - 1]:
                same += 1
            return pos_a - same, pos_b - same
        if child_a.content.size or child_b.content.size:
            inner = find_diff_end(child_a.content, child_b.content, pos_a - 1, pos_b - 1)
            if inner is not None:
                return inner
        pos_a -= size
        pos_b -= size


__all__ = ["find_diff_start", "find_diff_end"]
