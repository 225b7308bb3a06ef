"""Tests for position maps."""

from __future__ import annotations

import pytest

from trackedit.transform import Mapping, StepMap


def test_positions_before_and_after_a_replacement() -> None:
    step_map = StepMap(((2, 0, 3),))

    assert step_map.map(1) == 1
    assert step_map.map(5) == 8


@pytest.mark.parametrize("assoc, expected", [(-1, 2), (1, 5)])
def test_insertion_point_sticks_to_the_requested_side(assoc: int, expected: int) -> None:
    assert StepMap(((2, 0, 3),)).map(2, assoc) == expected


def test_positions_inside_deleted_range_collapse() -> None:
    step_map = StepMap(((2, 4, 0),))

    result = step_map.map_result(4)

    assert result.pos == 2
    assert result.deleted
    assert step_map.map(6) == 2
    assert step_map.map(7) == 3


def test_range_boundaries_of_a_replacement() -> None:
    step_map = StepMap(((2, 2, 5),))

    assert step_map.map(2, 1) == 2
    assert step_map.map(4, -1) == 7
    assert step_map.map(3, -1) == 2
    assert step_map.map(3, 1) == 7


def test_invert_maps_back() -> None:
    step_map = StepMap(((2, 0, 3),))
    inverted = step_map.invert()

    assert inverted.map(8) == 5
    assert inverted.map(3) == 2
    assert inverted.map(1) == 1


def test_iter_ranges_reports_old_and_new_coordinates() -> None:
    step_map = StepMap(((2, 1, 3), (6, 2, 0)))

    assert list(step_map.iter_ranges()) == [(2, 3, 2, 5), (6, 8, 8, 8)]


def test_mapping_composes_in_order() -> None:
    mapping = Mapping()
    mapping.append_map(StepMap(((2, 0, 2),)))
    mapping.append_map(StepMap(((0, 1, 0),)))

    assert mapping.map(3) == 4
    assert mapping.map_result(0).deleted
