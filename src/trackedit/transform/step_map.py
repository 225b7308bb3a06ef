"""Position maps produced by replace steps."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Iterator

Range = tuple[int, int, int]


@dataclass(slots=True, frozen=True)
class MapResult:
    """A mapped position and whether the content at its side was deleted."""

    pos: int
    deleted: bool = False


@dataclass(slots=True, frozen=True)
class StepMap:
    """Maps positions across one step.

    ``ranges`` holds ``(old_start, old_size, new_size)`` triples in old-document
    coordinates, sorted by start. ``assoc`` picks the side a position at the
    edge of a replaced range sticks to: ``-1`` stays before inserted content,
    ``1`` moves after it.
    """

    ranges: tuple[Range, ...] = ()
    inverted: bool = False

    EMPTY: ClassVar[StepMap]

    def map(self, pos: int, assoc: int = 1) -> int:
        return self._map(pos, assoc).pos

    def map_result(self, pos: int, assoc: int = 1) -> MapResult:
        return self._map(pos, assoc)

    def _map(self, pos: int, assoc: int) -> MapResult:
        diff = 0
        for start, old_size, new_size in self.ranges:
            if self.inverted:
                old_size, new_size = new_size, old_size
                start -= diff
            if start > pos:
                break
            end = start + old_size
            if pos <= end:
                if not old_size:
                    side = assoc
                elif pos == start:
                    side = -1
                elif pos == end:
                    side = 1
                else:
                    side = assoc
                result = start + diff + (0 if side < 0 else new_size)
                deleted = pos != (start if assoc < 0 else end)
                return MapResult(result, deleted)
            diff += new_size - old_size
        return MapResult(pos + diff)

    def iter_ranges(self) -> Iterator[tuple[int, int, int, int]]:
        """Yield ``(old_start, old_end, new_start, new_end)`` for every replaced range."""

        diff = 0
        for start, old_size, new_size in self.ranges:
            if self.inverted:
                old_size, new_size = new_size, old_size
                old_start = start - diff
            else:
                old_start = start
            new_start = old_start + diff
            yield old_start, old_start + old_size, new_start, new_start + new_size
            diff += new_size - old_size

    def invert(self) -> StepMap:
        return StepMap(self.ranges, not self.inverted)


StepMap.EMPTY = StepMap()


@dataclass(slots=True)
class Mapping:
    """A pipeline of step maps applied in order."""

    maps: list[StepMap] = field(default_factory=list)

    def append_map(self, step_map: StepMap) -> None:
        self.maps.append(step_map)

    def map(self, pos: int, assoc: int = 1) -> int:
        for step_map in self.maps:
            pos = step_map.map(pos, assoc)
        return pos

    def map_result(self, pos: int, assoc: int = 1) -> MapResult:
        deleted = False
        for step_map in self.maps:
            result = step_map.map_result(pos, assoc)
            pos = result.pos
            deleted = deleted or result.deleted
        return MapResult(pos, deleted)


__all__ = ["MapResult", "Mapping", "Range", "StepMap"]
