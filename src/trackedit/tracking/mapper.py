"""Projecting the change set through one step's position map."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from ..model import Node, Slice
from ..transform import Mapping, StepMap, Transform, TransformError
from .changes import AuthorId, TrackedChange
from .minimizer import minimize_change
from .recorder import RecordedUpdate, apply_and_slice, restores_cleanly

LOGGER = logging.getLogger(__name__)


def map_changes(
    changes: Iterable[TrackedChange],
    step_map: StepMap | Mapping,
    author: AuthorId | None = None,
    updated: Sequence[RecordedUpdate] = (),
    doc_after: Node | None = None,
) -> list[TrackedChange]:
    """Return the next generation of ``changes`` after the step behind ``step_map``.

    Changes by ``author`` are mapped inclusively. Changes listed in
    ``updated`` are minimized against ``doc_after`` once mapped. The result
    is sorted by start and, when ``doc_after`` is given, same-author changes
    that ended up touching are merged. Other authors' changes that the step
    cut through so that their deleted content no longer fits back are
    dropped.
    """

    sides = {id(update.change): update.side for update in updated}
    if sides and doc_after is None:
        raise ValueError("doc_after is required to minimize updated changes")

    result: list[TrackedChange] = []
    suspects: dict[int, TrackedChange] = {}
    for change in changes:
        own = author is not None and change.author == author
        mapped = change.map(step_map, own)
        if mapped is None:
            LOGGER.debug("Dropped %r: collapsed by mapping", change)
            continue
        side = sides.get(id(change))
        if side is not None:
            mapped = minimize_change(mapped, doc_after, side)
            if mapped is None:
                continue
        elif not own and _touched_by(change, step_map):
            suspects[id(mapped)] = mapped
        result.append(mapped)

    result.sort(key=lambda change: change.start)
    if doc_after is None:
        return result

    result = coalesce_changes(result, doc_after)
    broken = {
        id(change)
        for change in result
        if id(change) in suspects and not restores_cleanly(change, doc_after)
    }
    if broken:
        for change in result:
            if id(change) in broken:
                LOGGER.debug("Dropped %r: the step cut through its content", change)
        # Dropping may leave neighbours by one author touching again.
        result = coalesce_changes([change for change in result if id(change) not in broken], doc_after)
    return result


def coalesce_changes(changes: Sequence[TrackedChange], doc: Node) -> list[TrackedChange]:
    """Merge same-author changes of a sorted sequence that touch in ``doc``.

    This happens when another author deletes everything between two of
    someone's changes. Pairs whose combined deleted content cannot be
    placed back into ``doc`` are left apart.
    """

    result: list[TrackedChange] = []
    last_index: dict[AuthorId, int] = {}
    for change in changes:
        index = last_index.get(change.author)
        if index is not None and change.start <= result[index].end:
            previous = result[index]
            merged = _merge_pair(previous, change, doc)
            if merged is not None:
                LOGGER.debug("Coalesced %r and %r into %r", previous, change, merged)
                result[index] = merged
                continue
            LOGGER.debug("Left %r and %r apart: their content does not fit back", previous, change)
        last_index[change.author] = len(result)
        result.append(change)
    return result


def _merge_pair(previous: TrackedChange, change: TrackedChange, doc: Node) -> TrackedChange | None:
    end = max(previous.end, change.end)
    try:
        deleted = apply_and_slice(doc, (previous, change), previous.start, end)
    except TransformError:
        # One side alone is unbalanced, e.g. half of a paragraph break.
        deleted = _joined_deleted(previous, change)
        if deleted is None:
            return None
        try:
            Transform(doc).replace(previous.start, end, deleted)
        except TransformError:
            return None
    return TrackedChange(previous.start, end, deleted, change.author)


def _joined_deleted(previous: TrackedChange, change: TrackedChange) -> Slice | None:
    if not previous.deleted.size:
        return change.deleted
    if not change.deleted.size:
        return previous.deleted
    return None


def _touched_by(change: TrackedChange, step_map: StepMap | Mapping) -> bool:
    if not isinstance(step_map, StepMap):
        return True
    return any(
        old_start <= change.end and old_end >= change.start
        for old_start, old_end, _, _ in step_map.iter_ranges()
    )


__all__ = ["coalesce_changes", "map_changes"]
