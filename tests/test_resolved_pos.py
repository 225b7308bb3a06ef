"""Tests for resolving positions against a document tree."""

from __future__ import annotations

import pytest

from trackedit.model import Node


def test_resolve_at_paragraph_start(two_paragraphs: Node) -> None:
    resolved = two_paragraphs.resolve(6)

    assert resolved.depth == 1
    assert resolved.parent == two_paragraphs.child(1)
    assert resolved.parent_offset == 0
    assert resolved.index(0) == 1
    assert resolved.start(1) == 6
    assert resolved.end(1) == 9
    assert resolved.before(1) == 5
    assert resolved.after(1) == 10
    assert resolved.node_before is None
    assert resolved.node_after.text == "bar"


def test_resolve_inside_text(two_paragraphs: Node) -> None:
    resolved = two_paragraphs.resolve(8)

    assert resolved.depth == 1
    assert resolved.parent_offset == 2
    assert resolved.text_offset == 2
    assert resolved.node_before.text == "ba"
    assert resolved.node_after.text == "r"


def test_resolve_between_blocks(two_paragraphs: Node) -> None:
    resolved = two_paragraphs.resolve(5)

    assert resolved.depth == 0
    assert resolved.index(0) == 1
    assert resolved.node_before == two_paragraphs.child(0)
    assert resolved.node_after == two_paragraphs.child(1)


def test_shared_depth(two_paragraphs: Node) -> None:
    resolved = two_paragraphs.resolve(2)

    assert resolved.shared_depth(4) == 1
    assert resolved.shared_depth(6) == 0


def test_nested_positions(nested_doc: Node) -> None:
    resolved = nested_doc.resolve(8)

    assert resolved.depth == 2
    assert resolved.node(1).type.name == "blockquote"
    assert resolved.start(2) == 7
    assert str(resolved) == "blockquote_1/paragraph_0:1"


@pytest.mark.parametrize("pos", [-1, 11])
def test_resolve_out_of_range(two_paragraphs: Node, pos: int) -> None:
    with pytest.raises(IndexError):
        two_paragraphs.resolve(pos)
