"""Edit operations built from a sequence of replace steps."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Iterator

from ..model import TEXT, Fragment, Node, Slice
from .step_map import Mapping, StepMap
from .steps import ReplaceStep

LOGGER = logging.getLogger(__name__)


class TransformError(RuntimeError):
    """Raised when a step cannot be applied to the current document."""

    def __init__(self, message: str, *, step: ReplaceStep | None = None) -> None:
        super().__init__(message)
        self.step = step

    def details(self) -> dict[str, Any]:
        if self.step is None:
            return {"message": str(self)}
        return {
            "message": str(self),
            "start": self.step.start,
            "end": self.step.end,
            "slice": str(self.step.slice),
        }


@dataclass(slots=True, frozen=True)
class AppliedStep:
    """One atomic step together with the documents around it and its position map."""

    index: int
    step: ReplaceStep
    doc_before: Node
    doc_after: Node
    step_map: StepMap


class Transform:
    """Accumulates steps against a starting document.

    ``docs[i]`` is the document before step ``i``; ``doc`` is the document
    after the last step.
    """

    def __init__(self, doc: Node) -> None:
        self.doc = doc
        self.steps: list[ReplaceStep] = []
        self.docs: list[Node] = []
        self.mapping = Mapping()
        self._meta: dict[str, Any] = {}

    @property
    def before(self) -> Node:
        return self.docs[0] if self.docs else self.doc

    @property
    def doc_changed(self) -> bool:
        return bool(self.steps)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------
    def step(self, step: ReplaceStep) -> Transform:
        result = step.apply(self.doc)
        if result.failed:
            raise TransformError(result.failed, step=step)
        self._add_step(step, result.doc)
        return self

    def maybe_step(self, step: ReplaceStep) -> bool:
        result = step.apply(self.doc)
        if result.failed:
            LOGGER.debug("Step %s-%s rejected: %s", step.start, step.end, result.failed)
            return False
        self._add_step(step, result.doc)
        return True

    def _add_step(self, step: ReplaceStep, doc: Node) -> None:
        self.docs.append(self.doc)
        self.steps.append(step)
        self.mapping.append_map(step.get_map())
        self.doc = doc

    def iter_steps(self) -> Iterator[AppliedStep]:
        """Yield every step with its pre-step document, post-step document and map."""

        for index, step in enumerate(self.steps):
            doc_after = self.docs[index + 1] if index + 1 < len(self.docs) else self.doc
            yield AppliedStep(index, step, self.docs[index], doc_after, self.mapping.maps[index])

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------
    def replace(self, start: int, end: int | None = None, replacement: Slice = Slice.EMPTY) -> Transform:
        """Replace ``[start, end)`` with ``replacement``; an empty no-op adds no step."""

        if end is None:
            end = start
        if start == end and not replacement.size:
            return self
        return self.step(ReplaceStep(start, end, replacement))

    def replace_with(self, start: int, end: int, content: Node | Fragment | Iterable[Node]) -> Transform:
        return self.replace(start, end, Slice(Fragment.from_value(content)))

    def delete(self, start: int, end: int) -> Transform:
        return self.replace(start, end, Slice.EMPTY)

    def insert(self, pos: int, content: Node | Fragment | Iterable[Node]) -> Transform:
        return self.replace_with(pos, pos, content)

    def insert_text(self, pos: int, value: str, end: int | None = None) -> Transform:
        """Insert ``value`` at ``pos``, replacing ``[pos, end)`` when ``end`` is given."""

        if not value:
            return self.delete(pos, pos if end is None else end)
        return self.replace_with(pos, pos if end is None else end, TEXT.create_text(value))

    def split(self, pos: int, depth: int = 1) -> Transform:
        """Split the ``depth`` innermost nodes around ``pos`` into two."""

        resolved = self.doc.resolve(pos)
        before = after = Fragment.EMPTY
        for level in range(resolved.depth, resolved.depth - depth, -1):
            before = Fragment((resolved.node(level).copy(before),))
            after = Fragment((resolved.node(level).copy(after),))
        return self.step(ReplaceStep(pos, pos, Slice(before.append(after), depth, depth), structure=True))

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------
    def set_meta(self, key: str, value: Any) -> Transform:
        self._meta[key] = value
        return self

    def get_meta(self, key: str, default: Any = None) -> Any:
        return self._meta.get(key, default)


__all__ = ["AppliedStep", "Transform", "TransformError"]
