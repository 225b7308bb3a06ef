"""Host-facing change tracker: state threading, accept and revert."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable

from ..model import Node
from ..settings import TrackerSettings
from ..transform import Transform, TransformError
from ..utils.logging import format_change_set
from .changes import AuthorId, ChangeSet, TrackedChange
from .errors import ErrorCode
from .mapper import map_changes
from .recorder import RecordedUpdate, record_range

LOGGER = logging.getLogger(__name__)

REVERTING_META = "reverting"
ADD_TO_HISTORY_META = "add_to_history"
SCROLL_INTO_VIEW_META = "scroll_into_view"


@dataclass(slots=True, frozen=True)
class TrackerState:
    """Immutable tracker snapshot threaded through every edit by the host."""

    author: AuthorId | None = None
    changes: tuple[TrackedChange, ...] = ()
    settings: TrackerSettings = field(default_factory=TrackerSettings)


@dataclass(slots=True, frozen=True)
class Resolution:
    """Outcome of accepting or reverting a change.

    ``transform`` is only set for a successful revert and must be applied
    by the host to restore the deleted content. ``reason`` holds an
    :class:`ErrorCode` when a tracked change could not be resolved.
    """

    state: TrackerState
    found: bool
    transform: Transform | None = None
    reason: str | None = None


def init_tracker(author: AuthorId | None = None, *, settings: TrackerSettings | None = None) -> TrackerState:
    settings = settings or TrackerSettings()
    if author is None:
        author = settings.default_author
    return TrackerState(author=author, settings=settings)


def on_edit_applied(
    state: TrackerState,
    transform: Transform,
    author: AuthorId | None = None,
    *,
    is_revert_or_external: bool = False,
) -> TrackerState:
    """Return the tracker state after ``transform`` has been applied to the document.

    Every step first folds its replaced ranges into the author's changes,
    then maps the whole set into the post-step document. Edits without an
    author, or marked as reverting, are only mapped.
    """

    if author is None:
        author = state.author
    if transform.get_meta(REVERTING_META):
        is_revert_or_external = True
    track = author is not None and not is_revert_or_external

    changes = ChangeSet(state.changes)
    for applied in transform.iter_steps():
        updated: list[RecordedUpdate] = []
        if track:
            for old_start, old_end, new_start, new_end in applied.step_map.iter_ranges():
                if old_start == old_end and new_start == new_end:
                    continue
                update = record_range(applied.doc_before, old_start, old_end, author, changes)
                if update is not None:
                    updated.append(update)
        changes = ChangeSet(
            map_changes(
                changes,
                applied.step_map,
                author if track else None,
                updated,
                applied.doc_after,
            )
        )
        if state.settings.check_invariants:
            changes.check_invariants(applied.doc_after.content.size)

    LOGGER.debug(
        "Processed %d step(s) (%s); %d change(s) tracked",
        len(transform.steps),
        "tracked" if track else "mapped only",
        len(changes),
    )
    if state.settings.debug_logging:
        LOGGER.debug("Change set after edit:\n%s", format_change_set(changes))
    return replace(state, changes=changes.snapshot())


def list_changes(state: TrackerState) -> tuple[TrackedChange, ...]:
    return state.changes


def _forget(state: TrackerState, change: TrackedChange) -> TrackerState | None:
    changes = ChangeSet(state.changes)
    if not changes.remove(change):
        LOGGER.debug("Change %r is not tracked", change)
        return None
    return replace(state, changes=changes.snapshot())


def accept_change(state: TrackerState, change: TrackedChange) -> Resolution:
    """Keep the content of ``change`` and stop tracking it."""

    remaining = _forget(state, change)
    if remaining is None:
        return Resolution(state, False, reason=ErrorCode.CHANGE_NOT_FOUND)
    LOGGER.info("Accepted %s at %d-%d by %r", change.kind.value, change.start, change.end, change.author)
    return Resolution(remaining, True)


def revert_change(state: TrackerState, change: TrackedChange, doc: Node) -> Resolution:
    """Stop tracking ``change`` and build the edit restoring its deleted content in ``doc``.

    When the deleted content no longer fits at the change's position the
    change stays tracked and the resolution carries no transform.
    """

    remaining = _forget(state, change)
    if remaining is None:
        return Resolution(state, False, reason=ErrorCode.CHANGE_NOT_FOUND)
    try:
        transform = Transform(doc).replace(change.start, change.end, change.deleted)
    except TransformError as exc:
        LOGGER.warning("Cannot revert %r: %s", change, exc)
        return Resolution(state, True, reason=ErrorCode.REVERT_CONFLICT)
    transform.set_meta(REVERTING_META, True).set_meta(ADD_TO_HISTORY_META, False).set_meta(
        SCROLL_INTO_VIEW_META, True
    )
    LOGGER.info("Reverted %s at %d-%d by %r", change.kind.value, change.start, change.end, change.author)
    return Resolution(remaining, True, transform)


class ChangeTracker:
    """Stateful wrapper keeping a document and its tracker state in step."""

    def __init__(
        self,
        doc: Node,
        author: AuthorId | None = None,
        *,
        settings: TrackerSettings | None = None,
        changes: Iterable[TrackedChange] = (),
    ) -> None:
        self.doc = doc
        self._state = replace(init_tracker(author, settings=settings), changes=tuple(changes))

    @property
    def state(self) -> TrackerState:
        return self._state

    @property
    def author(self) -> AuthorId | None:
        return self._state.author

    @author.setter
    def author(self, value: AuthorId | None) -> None:
        self._state = replace(self._state, author=value)

    @property
    def changes(self) -> tuple[TrackedChange, ...]:
        return list_changes(self._state)

    def transform(self) -> Transform:
        """Start a new transform against the current document."""

        return Transform(self.doc)

    def apply(self, transform: Transform, author: AuthorId | None = None, *, external: bool = False) -> Node:
        if transform.before is not self.doc and transform.before != self.doc:
            raise TransformError("Transform was not built against the tracked document")
        self._state = on_edit_applied(self._state, transform, author, is_revert_or_external=external)
        self.doc = transform.doc
        return self.doc

    def accept(self, change: TrackedChange) -> bool:
        resolution = accept_change(self._state, change)
        self._state = resolution.state
        return resolution.found

    def revert(self, change: TrackedChange) -> bool:
        resolution = revert_change(self._state, change, self.doc)
        if resolution.transform is None:
            return False
        self._state = on_edit_applied(resolution.state, resolution.transform)
        self.doc = resolution.transform.doc
        return True


__all__ = [
    "ADD_TO_HISTORY_META",
    "REVERTING_META",
    "SCROLL_INTO_VIEW_META",
    "ChangeTracker",
    "Resolution",
    "TrackerState",
    "accept_change",
    "init_tracker",
    "list_changes",
    "on_edit_applied",
    "revert_change",
]
