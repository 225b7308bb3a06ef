"""Tests for tracked change records and the change set container."""

from __future__ import annotations

import pytest

from trackedit.model import Slice, doc_from_text
from trackedit.tracking import ChangeKind, ChangeSet, ChangeSetInvariantError, ErrorCode, TrackedChange
from trackedit.transform import StepMap


def _deleted(text: str) -> Slice:
    return doc_from_text(text).slice(1, 1 + len(text))


def test_end_before_start_is_rejected() -> None:
    with pytest.raises(ValueError):
        TrackedChange(3, 2, Slice.EMPTY, "a")


def test_kind_follows_range_and_deleted_content() -> None:
    assert TrackedChange(2, 4, Slice.EMPTY, "a").kind is ChangeKind.INSERTION
    assert TrackedChange(2, 2, _deleted("oo"), "a").kind is ChangeKind.DELETION
    assert TrackedChange(2, 4, _deleted("oo"), "a").kind is ChangeKind.REPLACEMENT
    assert TrackedChange(2, 2, Slice.EMPTY, "a").is_degenerate


def test_inclusive_mapping_absorbs_adjacent_insertions() -> None:
    change = TrackedChange(2, 4, Slice.EMPTY, "a")
    step_map = StepMap(((4, 0, 2),))

    grown = change.map(step_map, inclusive=True)

    assert (grown.start, grown.end) == (2, 6)
    assert change.map(step_map) is change


def test_collapsed_deletion_survives_foreign_insertion() -> None:
    change = TrackedChange(2, 2, _deleted("oo"), "a")

    mapped = change.map(StepMap(((2, 0, 3),)))

    assert (mapped.start, mapped.end) == (5, 5)
    assert mapped.deleted is change.deleted


def test_insertion_deleted_by_mapping_disappears() -> None:
    change = TrackedChange(2, 4, Slice.EMPTY, "a")

    assert change.map(StepMap(((2, 2, 0),))) is None
    assert change.map(StepMap(((1, 4, 0),)), inclusive=True) is None


def test_deleted_text_flattens_blocks() -> None:
    change = TrackedChange(2, 2, doc_from_text("foo\nbar").slice(2, 7), "a")

    assert change.deleted_text() == "oo b"
    assert change.to_dict() == {
        "start": 2,
        "end": 2,
        "author": "a",
        "kind": "deletion",
        "deleted": '<paragraph("oo"), paragraph("b")>',
        "deleted_text": "oo b",
    }


def test_insert_keeps_start_order_across_authors() -> None:
    changes = ChangeSet()
    late = TrackedChange(8, 9, Slice.EMPTY, "a")
    early = TrackedChange(1, 2, Slice.EMPTY, "b")
    middle = TrackedChange(4, 4, _deleted("x"), "a")

    for change in (late, early, middle):
        changes.insert(change)

    assert list(changes) == [early, middle, late]
    assert changes.index_of(middle) == 1


def test_membership_and_removal_use_identity() -> None:
    tracked = TrackedChange(2, 4, Slice.EMPTY, "a")
    lookalike = TrackedChange(2, 4, Slice.EMPTY, "a")
    changes = ChangeSet([tracked])

    assert tracked in changes
    assert lookalike not in changes
    assert not changes.remove(lookalike)
    assert changes.remove(tracked)
    assert len(changes) == 0


def test_merge_replaces_absorbed_changes() -> None:
    first = TrackedChange(2, 3, Slice.EMPTY, "a")
    second = TrackedChange(5, 6, Slice.EMPTY, "a")
    other = TrackedChange(4, 4, _deleted("q"), "b")
    changes = ChangeSet([first, other, second])
    merged = TrackedChange(2, 6, _deleted("xyz"), "a")

    changes.merge([first, second], merged)

    assert changes.snapshot() == (merged, other)


def test_merge_of_untracked_change_fails() -> None:
    changes = ChangeSet()

    with pytest.raises(ChangeSetInvariantError) as excinfo:
        changes.merge([TrackedChange(1, 2, Slice.EMPTY, "a")], TrackedChange(1, 3, Slice.EMPTY, "a"))

    assert excinfo.value.reason == ErrorCode.CHANGE_NOT_FOUND


@pytest.mark.parametrize(
    "changes, reason",
    [
        ([TrackedChange(2, 4, Slice.EMPTY, "a"), TrackedChange(4, 6, Slice.EMPTY, "a")], ErrorCode.SAME_AUTHOR_OVERLAP),
        ([TrackedChange(2, 2, Slice.EMPTY, "a")], ErrorCode.DEGENERATE_CHANGE),
        ([TrackedChange(2, 40, Slice.EMPTY, "a")], ErrorCode.OUT_OF_BOUNDS),
    ],
)
def test_check_invariants_reports_reason(changes: list[TrackedChange], reason: str) -> None:
    with pytest.raises(ChangeSetInvariantError) as excinfo:
        ChangeSet(changes).check_invariants(doc_size=10)

    assert excinfo.value.reason == reason
    assert excinfo.value.details()["reason"] == reason


def test_touching_changes_by_different_authors_are_allowed() -> None:
    ChangeSet(
        [TrackedChange(2, 4, Slice.EMPTY, "a"), TrackedChange(4, 6, Slice.EMPTY, "b")]
    ).check_invariants(doc_size=10)
