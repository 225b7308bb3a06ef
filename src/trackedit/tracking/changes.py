"""Tracked change records and the ordered set that holds them."""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Hashable, Iterable, Iterator, Sequence

from ..model import Slice
from ..transform import Mapping, StepMap
from .errors import ChangeSetInvariantError, ErrorCode

LOGGER = logging.getLogger(__name__)

AuthorId = Hashable


class ChangeKind(str, Enum):
    INSERTION = "insertion"
    DELETION = "deletion"
    REPLACEMENT = "replacement"


@dataclass(slots=True, frozen=True, eq=False, repr=False)
class TrackedChange:
    """An attributed span of the current document that differs from what was there before.

    ``[start, end)`` holds the new content (empty for a pure deletion) and
    ``deleted`` the content it replaced (empty for a pure insertion). Changes
    compare by identity: two records with equal fields are still distinct
    annotations.
    """

    start: int
    end: int
    deleted: Slice
    author: AuthorId

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"Change end {self.end} precedes start {self.start}")

    @property
    def kind(self) -> ChangeKind:
        if not self.deleted.size:
            return ChangeKind.INSERTION
        if self.start == self.end:
            return ChangeKind.DELETION
        return ChangeKind.REPLACEMENT

    @property
    def is_degenerate(self) -> bool:
        """``True`` when the change neither spans content nor remembers any."""

        return self.start == self.end and not self.deleted.size

    def map(self, step_map: StepMap | Mapping, inclusive: bool = False) -> TrackedChange | None:
        """Project the change through ``step_map``; ``None`` when it collapses away.

        Inclusive mapping lets the boundaries absorb content inserted right
        at them (used for the editing author's own changes). A collapsed
        change keeps a single bias so that content inserted at its position
        never turns it inside out.
        """

        if inclusive:
            start = step_map.map(self.start, -1)
            end = step_map.map(self.end, 1)
        elif self.start == self.end:
            start = end = step_map.map(self.start, 1)
        else:
            start = step_map.map(self.start, 1)
            end = step_map.map(self.end, -1)
        if start > end or (start == end and not self.deleted.size):
            return None
        if start == self.start and end == self.end:
            return self
        return TrackedChange(start, end, self.deleted, self.author)

    def deleted_text(self, separator: str = " ") -> str:
        content = self.deleted.content
        return content.text_between(0, content.size, separator)

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": self.start,
            "end": self.end,
            "author": self.author,
            "kind": self.kind.value,
            "deleted": str(self.deleted.content),
            "deleted_text": self.deleted_text(),
        }

    def __repr__(self) -> str:
        return f"TrackedChange({self.start}-{self.end}{self.deleted.content} by {self.author!r})"


def _start(change: TrackedChange) -> int:
    return change.start


class ChangeSet:
    """Changes sorted by ``start``; same-author changes never overlap or touch."""

    def __init__(self, changes: Iterable[TrackedChange] = ()) -> None:
        self._changes: list[TrackedChange] = sorted(changes, key=_start)

    def __iter__(self) -> Iterator[TrackedChange]:
        return iter(self._changes)

    def __len__(self) -> int:
        return len(self._changes)

    def __getitem__(self, index: int) -> TrackedChange:
        return self._changes[index]

    def __contains__(self, change: object) -> bool:
        return self.index_of(change) is not None

    def __repr__(self) -> str:
        return f"ChangeSet({self._changes!r})"

    def snapshot(self) -> tuple[TrackedChange, ...]:
        return tuple(self._changes)

    def index_of(self, change: object) -> int | None:
        for index, candidate in enumerate(self._changes):
            if candidate is change:
                return index
        return None

    def insert(self, change: TrackedChange) -> int:
        """Add ``change`` after any existing change with the same start."""

        index = bisect.bisect_right(self._changes, change.start, key=_start)
        self._changes.insert(index, change)
        return index

    def merge(self, absorbed: Sequence[TrackedChange], merged: TrackedChange) -> int:
        """Replace every change in ``absorbed`` with the single ``merged`` change."""

        for change in absorbed:
            if not self.remove(change):
                raise ChangeSetInvariantError(
                    "Cannot merge a change that is not tracked",
                    reason=ErrorCode.CHANGE_NOT_FOUND,
                    changes=(change,),
                )
        return self.insert(merged)

    def remove(self, change: TrackedChange) -> bool:
        index = self.index_of(change)
        if index is None:
            return False
        del self._changes[index]
        return True

    def check_invariants(self, doc_size: int | None = None) -> None:
        """Raise :class:`ChangeSetInvariantError` on the first broken rule."""

        last_by_author: dict[AuthorId, TrackedChange] = {}
        previous: TrackedChange | None = None
        for index, change in enumerate(self._changes):
            if change.is_degenerate:
                raise ChangeSetInvariantError(
                    f"Degenerate change {change!r} is still tracked",
                    reason=ErrorCode.DEGENERATE_CHANGE,
                    index=index,
                    changes=(change,),
                )
            if previous is not None and change.start < previous.start:
                raise ChangeSetInvariantError(
                    f"Change {change!r} is out of order",
                    reason=ErrorCode.UNSORTED,
                    index=index,
                    changes=(previous, change),
                )
            if doc_size is not None and change.end > doc_size:
                raise ChangeSetInvariantError(
                    f"Change {change!r} ends past the document ({doc_size})",
                    reason=ErrorCode.OUT_OF_BOUNDS,
                    index=index,
                    changes=(change,),
                )
            prior = last_by_author.get(change.author)
            if prior is not None and change.start <= prior.end:
                raise ChangeSetInvariantError(
                    f"Changes {prior!r} and {change!r} by the same author overlap",
                    reason=ErrorCode.SAME_AUTHOR_OVERLAP,
                    index=index,
                    changes=(prior, change),
                )
            last_by_author[change.author] = change
            previous = change


__all__ = ["AuthorId", "ChangeKind", "ChangeSet", "TrackedChange"]
