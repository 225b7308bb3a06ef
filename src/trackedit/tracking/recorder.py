"""Folding freshly edited spans into the tracked change set."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence

from ..model import Node, Slice
from ..transform import Transform, TransformError
from .changes import AuthorId, ChangeSet, TrackedChange

LOGGER = logging.getLogger(__name__)


class MinimizeSide(IntEnum):
    """Which boundary of a merged change may be trimmed after the step applies."""

    START = -1
    END = 1


@dataclass(slots=True, frozen=True)
class RecordedUpdate:
    """A change the recorder merged during the current step, and the side to minimize."""

    change: TrackedChange
    side: MinimizeSide


def apply_and_slice(doc: Node, changes: Sequence[TrackedChange], start: int, end: int) -> Slice:
    """Undo ``changes`` in ``doc`` and slice what ``[start, end)`` looked like before them.

    ``changes`` must be sorted and non-overlapping; they are reverted from
    the last to the first so earlier positions stay valid.
    """

    transform = Transform(doc)
    for change in reversed(changes):
        transform.replace(change.start, change.end, change.deleted)
    return transform.doc.slice(start, transform.mapping.map(end))


def restores_cleanly(change: TrackedChange, doc: Node) -> bool:
    """Whether putting ``change.deleted`` back over ``[start, end)`` of ``doc`` is a valid replace.

    A change stops restoring cleanly when another author's step cuts
    through the structure it inserted, e.g. deletes one side of a
    paragraph break.
    """

    try:
        Transform(doc).replace(change.start, change.end, change.deleted)
    except TransformError:
        return False
    return True


def record_range(
    doc: Node,
    start: int,
    end: int,
    author: AuthorId,
    changes: ChangeSet,
) -> RecordedUpdate | None:
    """Make ``changes`` cover the span ``[start, end)`` of ``doc`` edited by ``author``.

    ``doc`` is the document before the step. The author's changes touching
    the span are merged into one, which is returned so it can be minimized
    once the step has been applied. When nothing is touched a new change
    holding the original content of the span is inserted and ``None`` is
    returned.
    """

    run: list[TrackedChange] = []
    new_content = False
    for change in changes:
        if not run:
            if change.author != author or change.end < start:
                continue
            if change.start > end:
                break
            run.append(change)
            new_content = start < change.start or end > change.end
            continue
        if change.author != author:
            continue
        if change.start > end:
            break
        run.append(change)
        new_content = True

    if not run:
        created = TrackedChange(start, end, doc.slice(start, end), author)
        changes.insert(created)
        LOGGER.debug("Recorded new change %r", created)
        return None

    first = run[0]
    new_start = min(first.start, start)
    new_end = max(run[-1].end, end)
    deleted = apply_and_slice(doc, run, new_start, new_end) if new_content else first.deleted
    merged = TrackedChange(new_start, new_end, deleted, author)
    changes.merge(run, merged)
    side = MinimizeSide.START if start <= first.start else MinimizeSide.END
    LOGGER.debug("Merged %d change(s) into %r (minimize %s)", len(run), merged, side.name.lower())
    return RecordedUpdate(merged, side)


__all__ = ["MinimizeSide", "RecordedUpdate", "apply_and_slice", "record_range", "restores_cleanly"]
