"""Atomic document steps."""

from __future__ import annotations

from dataclasses import dataclass

from ..model import Node, ReplaceError, Slice
from .step_map import StepMap


@dataclass(slots=True, frozen=True)
class StepResult:
    """Outcome of applying a step: the new document, or why it failed."""

    doc: Node | None
    failed: str | None = None

    @classmethod
    def ok(cls, doc: Node) -> StepResult:
        return cls(doc)

    @classmethod
    def fail(cls, message: str) -> StepResult:
        return cls(None, message)

    @classmethod
    def from_replace(cls, doc: Node, start: int, end: int, slice: Slice) -> StepResult:
        try:
            return cls.ok(doc.replace(start, end, slice))
        except ReplaceError as exc:
            return cls.fail(str(exc))


@dataclass(slots=True, frozen=True)
class ReplaceStep:
    """Replace ``[start, end)`` with ``slice``.

    A ``structure`` step only moves node boundaries around (e.g. a split) and
    refuses to apply when it would overwrite actual content.
    """

    start: int
    end: int
    slice: Slice
    structure: bool = False

    def apply(self, doc: Node) -> StepResult:
        if self.structure and _content_between(doc, self.start, self.end):
            return StepResult.fail("Structure replace would overwrite content")
        return StepResult.from_replace(doc, self.start, self.end, self.slice)

    def get_map(self) -> StepMap:
        return StepMap(((self.start, self.end - self.start, self.slice.size),))

    def invert(self, doc: Node) -> ReplaceStep:
        """Return the step that undoes this one when applied after it."""

        return ReplaceStep(self.start, self.start + self.slice.size, doc.slice(self.start, self.end))


def _content_between(doc: Node, start: int, end: int) -> bool:
    resolved = doc.resolve(start)
    distance = end - start
    depth = resolved.depth
    while distance > 0 and depth > 0 and resolved.index_after(depth) == resolved.node(depth).child_count:
        depth -= 1
        distance -= 1
    if distance > 0:
        following = resolved.node(depth).maybe_child(resolved.index_after(depth))
        while distance > 0:
            if following is None or following.is_leaf:
                return True
            following = following.first_child
            distance -= 1
    return False


__all__ = ["ReplaceStep", "StepResult"]
