"""Shared edit helpers for tracker tests.

Each helper returns a callable that builds a transform against the
tracker's current document and applies it through the tracker, so a
scenario reads as a list of edits:

    tracker = run_edits("foo", ins(2, "hi"))
    assert format_changes(tracker) == "2-4<>"
"""

from __future__ import annotations

from typing import Callable, Iterable

from trackedit.model import doc_from_text
from trackedit.tracking import ChangeTracker, TrackedChange
from trackedit.settings import TrackerSettings

Edit = Callable[[ChangeTracker], None]

AUTHOR = "x"


def ins(at: int, text: str, end: int | None = None, *, author: str | None = None) -> Edit:
    def edit(tracker: ChangeTracker) -> None:
        tracker.apply(tracker.transform().insert_text(at, text, end), author)

    return edit


def delete(start: int, end: int, *, author: str | None = None) -> Edit:
    def edit(tracker: ChangeTracker) -> None:
        tracker.apply(tracker.transform().delete(start, end), author)

    return edit


def split(at: int, *, author: str | None = None) -> Edit:
    def edit(tracker: ChangeTracker) -> None:
        tracker.apply(tracker.transform().split(at), author)

    return edit


def make_tracker(text: str, author: str | None = AUTHOR) -> ChangeTracker:
    return ChangeTracker(doc_from_text(text), author, settings=TrackerSettings(check_invariants=True))


def run_edits(text: str, *edits: Edit, author: str | None = AUTHOR) -> ChangeTracker:
    tracker = make_tracker(text, author)
    for edit in edits:
        edit(tracker)
    return tracker


def format_changes(source: ChangeTracker | Iterable[TrackedChange]) -> str:
    """Render changes as ``start-end<deleted content>`` joined by spaces."""

    changes = source.changes if isinstance(source, ChangeTracker) else source
    return " ".join(f"{change.start}-{change.end}{change.deleted.content}" for change in changes)
