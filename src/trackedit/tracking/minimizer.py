"""Trimming merged changes down to the region that structurally differs."""

from __future__ import annotations

import logging

from ..model import Node
from ..transform import Transform
from .changes import TrackedChange
from .recorder import MinimizeSide

LOGGER = logging.getLogger(__name__)


def minimize_change(change: TrackedChange, doc: Node, side: MinimizeSide) -> TrackedChange | None:
    """Shrink one boundary of ``change`` to where ``doc`` really diverges from its original.

    ``doc`` is the document after the step. Substituting ``change.deleted``
    back into ``[start, end)`` rebuilds the content as it was; both versions
    are compared node by node inside their deepest common container. Returns
    ``None`` when the two versions are identical, and ``change`` itself when
    nothing can be trimmed.
    """

    transform = Transform(doc).replace(change.start, change.end, change.deleted)
    original = transform.doc

    current_pos = doc.resolve(change.start)
    original_pos = original.resolve(change.start)
    original_end = change.start + change.deleted.size
    depth = min(current_pos.depth, original_pos.depth)
    while depth > 0 and (change.end > current_pos.end(depth) or original_end > original_pos.end(depth)):
        depth -= 1

    content = current_pos.node(depth).content
    original_content = original_pos.node(depth).content

    if side == MinimizeSide.START:
        diff_start = content.find_diff_start(original_content, current_pos.start(depth))
        if diff_start is None:
            LOGGER.debug("Dropped %r: content matches its original", change)
            return None
        # The trimmed start must still fall inside both versions of the span.
        if diff_start <= change.start or diff_start >= change.end or diff_start > original_end:
            return change
        trimmed = TrackedChange(diff_start, change.end, original.slice(diff_start, original_end), change.author)
    else:
        diff_end = content.find_diff_end(original_content, current_pos.end(depth), original_pos.end(depth))
        if diff_end is None:
            LOGGER.debug("Dropped %r: content matches its original", change)
            return None
        end, end_original = diff_end
        if end >= change.end or end <= change.start or end_original <= change.start:
            return change
        trimmed = TrackedChange(change.start, end, original.slice(change.start, end_original), change.author)

    LOGGER.debug("Minimized %r to %r", change, trimmed)
    return trimmed


__all__ = ["minimize_change"]
