"""Tests for slicing and structural replacement."""

from __future__ import annotations

import pytest

from trackedit.model import Fragment, ReplaceError, Slice, blockquote, doc, doc_from_text, paragraph, text


def test_slice_across_paragraphs_keeps_boundaries() -> None:
    document = doc_from_text("foo\nbar\nbaz")

    sliced = document.slice(4, 11)

    assert str(sliced) == '<paragraph, paragraph("bar"), paragraph>(1,1)'
    assert sliced.size == 7


def test_slice_inside_text_is_flat() -> None:
    sliced = doc_from_text("foobar").slice(2, 4)

    assert str(sliced) == '<"oo">(0,0)'
    assert sliced.size == 2


def test_empty_range_slices_to_empty() -> None:
    assert doc_from_text("foo").slice(2, 2) is Slice.EMPTY


def test_delete_text() -> None:
    assert doc_from_text("foo").replace(2, 3, Slice.EMPTY) == doc_from_text("fo")


def test_delete_across_paragraphs_joins_them() -> None:
    document = doc_from_text("foo\nbar")

    assert document.replace(4, 6, Slice.EMPTY) == doc_from_text("foobar")


def test_insert_text() -> None:
    replaced = doc_from_text("foo").replace(2, 2, Slice(Fragment((text("hi"),))))

    assert replaced == doc_from_text("fhioo")


def test_insert_open_slice_splits_paragraph() -> None:
    separator = Slice(Fragment((paragraph(), paragraph())), 1, 1)

    assert doc_from_text("foobar").replace(4, 4, separator) == doc_from_text("foo\nbar")


def test_reinserting_sliced_content_restores_document() -> None:
    document = doc_from_text("foo\nbar\nbaz")
    removed = document.slice(4, 11)
    shortened = document.replace(4, 11, Slice.EMPTY)

    assert shortened == doc_from_text("foobaz")
    assert shortened.replace(4, 4, removed) == document


def test_replace_inside_blockquote() -> None:
    document = doc(blockquote(paragraph("abc")))

    assert document.replace(3, 4, Slice(Fragment((text("X"),)))) == doc(blockquote(paragraph("aXc")))


def test_open_depth_deeper_than_position_fails() -> None:
    with pytest.raises(ReplaceError):
        doc_from_text("foo").replace(2, 2, Slice(Fragment((paragraph("x"),)), 2, 0))


def test_inconsistent_open_depths_fail() -> None:
    with pytest.raises(ReplaceError):
        doc_from_text("foo").replace(2, 2, Slice(Fragment((paragraph("x"),)), 1, 0))


def test_block_inside_textblock_fails() -> None:
    with pytest.raises(ReplaceError):
        doc_from_text("foo").replace(2, 2, Slice(Fragment((paragraph("x"),))))
