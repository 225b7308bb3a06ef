"""Tests for folding edited spans into the change set."""

from __future__ import annotations

from trackedit.model import Slice, doc_from_text
from trackedit.tracking import ChangeSet, MinimizeSide, TrackedChange, apply_and_slice, record_range


def test_untouched_span_creates_change_with_original_content() -> None:
    changes = ChangeSet()

    update = record_range(doc_from_text("foobar"), 2, 4, "a", changes)

    assert update is None
    assert len(changes) == 1
    created = changes[0]
    assert (created.start, created.end, created.author) == (2, 4, "a")
    assert str(created.deleted) == '<"oo">(0,0)'


def test_edit_inside_change_keeps_its_deleted_content() -> None:
    existing = TrackedChange(2, 2, doc_from_text("oo").slice(1, 3), "a")
    changes = ChangeSet([existing])

    update = record_range(doc_from_text("fbar"), 2, 2, "a", changes)

    assert update is not None
    assert update.side is MinimizeSide.START
    assert update.change.deleted is existing.deleted
    assert existing not in changes
    assert update.change in changes


def test_extending_a_change_recomputes_deleted_content() -> None:
    # "hi" was inserted into "foo"; now the "o" right after it is deleted.
    changes = ChangeSet([TrackedChange(2, 4, Slice.EMPTY, "a")])

    update = record_range(doc_from_text("fhioo"), 4, 5, "a", changes)

    merged = update.change
    assert (merged.start, merged.end) == (2, 5)
    assert str(merged.deleted) == '<"o">(0,0)'
    assert update.side is MinimizeSide.END


def test_span_bridging_two_changes_absorbs_both() -> None:
    # "X" and "Y" were inserted into "foo" around the first "o".
    first = TrackedChange(2, 3, Slice.EMPTY, "a")
    second = TrackedChange(4, 5, Slice.EMPTY, "a")
    changes = ChangeSet([first, second])

    update = record_range(doc_from_text("fXoYo"), 3, 4, "a", changes)

    assert len(changes) == 1
    merged = changes[0]
    assert merged is update.change
    assert (merged.start, merged.end) == (2, 5)
    assert str(merged.deleted) == '<"o">(0,0)'


def test_other_authors_changes_are_not_merged() -> None:
    foreign = TrackedChange(2, 4, Slice.EMPTY, "b")
    changes = ChangeSet([foreign])

    update = record_range(doc_from_text("fhioo"), 3, 3, "a", changes)

    assert update is None
    assert [change.author for change in changes] == ["b", "a"]
    assert changes[0] is foreign


def test_new_change_is_inserted_in_start_order() -> None:
    later = TrackedChange(5, 5, doc_from_text("x").slice(1, 2), "a")
    changes = ChangeSet([TrackedChange(1, 2, Slice.EMPTY, "b"), later])

    record_range(doc_from_text("foobar"), 3, 3, "a", changes)

    assert [change.start for change in changes] == [1, 3, 5]


def test_apply_and_slice_rebuilds_original_span() -> None:
    changes = [TrackedChange(2, 3, Slice.EMPTY, "a"), TrackedChange(4, 5, Slice.EMPTY, "a")]

    restored = apply_and_slice(doc_from_text("fXoYo"), changes, 2, 5)

    assert str(restored) == '<"o">(0,0)'
