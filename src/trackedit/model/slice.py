"""Slices: fragments cut out of a document with open ends."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .fragment import Fragment


@dataclass(slots=True, frozen=True, repr=False)
class Slice:
    """A fragment plus the depth to which each side is left open.

    ``open_start``/``open_end`` count the nodes at either edge that were cut
    through rather than included whole (e.g. deleting across a paragraph
    break leaves both paragraphs open by one).
    """

    content: Fragment
    open_start: int = 0
    open_end: int = 0

    EMPTY: ClassVar[Slice]

    @property
    def size(self) -> int:
        """Return the number of positions this slice occupies when inserted."""

        return self.content.size - self.open_start - self.open_end

    @property
    def is_empty(self) -> bool:
        return self.size == 0

    def __str__(self) -> str:
        return f"{self.content}({self.open_start},{self.open_end})"

    __repr__ = __str__


Slice.EMPTY = Slice(Fragment.EMPTY)

__all__ = ["Slice"]
