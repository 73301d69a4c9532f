"""Tests for the scoring predicates and per-family scoring.

Validates that:
- Stack / two-color / three-color / matching predicates follow the table
  in field_gen.scoring
- Each family scores its columns the documented way
- Marking any piece contacted never raises any scoring field
"""

import numpy as np
import pytest

from field_gen.pieces import Beam, PinColor, make_column
from field_gen.sampling import Level
from field_gen.scoring import (
    EMPTY_SCORING,
    ScenarioScoring,
    StructureScoring,
    is_not_touching,
    is_stack,
    is_stack_matching_goal,
    is_three_color_stack,
    is_two_color_stack,
)
from field_gen.structures import (
    beam_on_floor,
    floor_goal,
    square_goal,
    stacks_on_floor,
    standoff_goal,
    starting_pin,
    triangle_goal,
)
from field_gen.structures.base import InvalidCaseError

# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


class TestPredicates:
    def test_not_touching(self):
        beam = Beam()
        assert is_not_touching(beam)
        beam.robot1_contacted = True
        assert not is_not_touching(beam)

    @pytest.mark.parametrize(
        "colors, with_beam, expected",
        [
            ([], False, False),
            (["red"], False, False),
            (["red", "blue"], False, True),
            ([], True, False),
            (["red"], True, True),
        ],
    )
    def test_is_stack(self, colors, with_beam, expected):
        beam = Beam() if with_beam else None
        assert is_stack(make_column(colors), beam) is expected

    def test_touched_pin_breaks_stack(self):
        column = make_column(["red", "blue", "orange"])
        column[1].robot2_contacted = True
        assert not is_stack(column)

    def test_touched_beam_breaks_stack(self):
        beam = Beam(robot1_contacted=True)
        assert not is_stack(make_column(["red", "blue"]), beam)

    @pytest.mark.parametrize(
        "colors, with_beam, two, three",
        [
            (["red", "blue"], False, True, False),
            (["red", "red"], False, False, False),
            (["red", "red"], True, True, False),
            (["orange"], True, True, False),
            (["red", "blue"], True, False, True),
            (["red", "blue", "orange"], False, False, True),
            (["red", "blue", "red"], False, True, False),
        ],
    )
    def test_color_counts(self, colors, with_beam, two, three):
        beam = Beam() if with_beam else None
        column = make_column(colors)
        assert is_two_color_stack(column, beam) is two
        assert is_three_color_stack(column, beam) is three

    def test_matching_goal_uses_bottom_pin(self):
        assert is_stack_matching_goal(make_column(["orange", "red"]), PinColor.ORANGE)
        assert is_stack_matching_goal(make_column(["orange", "red"]), "orange")
        assert not is_stack_matching_goal(make_column(["red", "orange"]), PinColor.ORANGE)
        assert not is_stack_matching_goal(make_column(["orange"]), PinColor.ORANGE)


class TestScoringRecords:
    def test_add(self):
        a = StructureScoring(connected_pins=2, matching_goals=1)
        b = StructureScoring(connected_pins=3, connected_beams=1)
        total = a + b
        assert total.connected_pins == 5
        assert total.connected_beams == 1
        assert total.matching_goals == 1

    def test_scenario_totals(self):
        scoring = ScenarioScoring(
            structures=(StructureScoring(two_color_stacks=1), StructureScoring(two_color_stacks=2)),
            starting_pins=3,
        )
        assert scoring.totals().two_color_stacks == 3
        assert ScenarioScoring().totals() == EMPTY_SCORING


# ---------------------------------------------------------------------------
# Per-family scoring
# ---------------------------------------------------------------------------


class TestFamilyScoring:
    def test_floor_goal_within_area(self):
        case = floor_goal.Case.with_columns(
            make_column(["orange", "red", "blue"]),
            make_column(["orange", "blue"]),
            make_column(["red", "orange"]),
            make_column(["orange"]),
            within_area=(True, False, True, True),
        )
        s = case.scoring()
        assert s.connected_pins == 7
        assert s.three_color_stacks == 1
        assert s.two_color_stacks == 2
        # top_right is outside, bottom_left has a red bottom, bottom_right is a single pin
        assert s.matching_goals == 1
        assert s.connected_beams == 0
        assert s.stacks_placed_on_standoff_goal == 0

    def test_empty_floor_goal(self):
        assert floor_goal.Case.empty().scoring() == EMPTY_SCORING

    def test_square_goal(self):
        case = square_goal.Case.one_column(PinColor.BLUE, make_column(["blue", "red"]))
        s = case.scoring()
        assert (s.connected_pins, s.two_color_stacks, s.matching_goals) == (2, 1, 1)
        red_goal = square_goal.Case.one_column(PinColor.RED, make_column(["blue", "red"]))
        assert red_goal.scoring().matching_goals == 0

    def test_triangle_goal(self):
        case = triangle_goal.Case.with_columns(
            PinColor.RED,
            make_column(["red", "blue"]),
            make_column(["red", "blue", "orange"]),
            make_column(["red"]),
        )
        s = case.scoring()
        assert s.connected_pins == 5
        assert s.matching_goals == 2
        assert s.two_color_stacks == 1
        assert s.three_color_stacks == 1

    def test_standoff_beam_with_columns(self):
        case = standoff_goal.Case.beam_with_columns(
            make_column(["red", "blue"]), make_column(["orange"]), ()
        )
        s = case.scoring()
        assert s.connected_pins == 3
        assert s.connected_beams == 1
        assert s.stacks_placed_on_standoff_goal == 2
        # bottom [R B] without beam, top [O] + beam
        assert s.two_color_stacks == 2
        assert s.matching_goals == 0

    def test_standoff_one_column(self):
        s = standoff_goal.Case.one_column(make_column(["red", "orange", "blue"])).scoring()
        assert s.stacks_placed_on_standoff_goal == 1
        assert s.three_color_stacks == 1
        assert s.connected_beams == 0
        single = standoff_goal.Case.one_column(make_column(["red"])).scoring()
        assert single.stacks_placed_on_standoff_goal == 0

    def test_standoff_beam_only(self):
        s = standoff_goal.Case.beam_only().scoring()
        assert s.connected_beams == 1
        assert s.connected_pins == 0

    def test_beam_on_floor(self):
        assert beam_on_floor.Case.beam_only().scoring().connected_beams == 0

        case = beam_on_floor.Case.beam_on_two_columns(
            make_column(["red"]), make_column(["blue"]), make_column(["orange", "red"])
        )
        s = case.scoring()
        # the bottom columns are single pins, only the top column stacks
        assert s.connected_pins == 2
        assert s.connected_beams == 1
        assert s.three_color_stacks == 1

    def test_stacks_on_floor(self):
        case = stacks_on_floor.Case(
            (make_column(["red", "blue"]), make_column(["orange", "orange", "orange"]))
        )
        s = case.scoring()
        assert s.connected_pins == 5
        assert s.two_color_stacks == 1
        assert s.three_color_stacks == 0
        assert s.matching_goals == 0

    def test_starting_pin_scores_nothing(self):
        assert starting_pin.Case().scoring() == EMPTY_SCORING


# ---------------------------------------------------------------------------
# Contact monotonicity
# ---------------------------------------------------------------------------


def _random_cases(seed: int, n: int):
    rng = np.random.default_rng(seed)
    gens = [
        standoff_goal.random_case,
        beam_on_floor.random_case,
        floor_goal.random_case,
        lambda r, lv: square_goal.random_case(r, lv, goal_color=PinColor.RED),
        lambda r, lv: triangle_goal.random_case(r, lv, goal_color=PinColor.BLUE),
        stacks_on_floor.random_case,
    ]
    for i in range(n):
        try:
            yield gens[i % len(gens)](rng, Level.HARD)
        except InvalidCaseError:
            continue


class TestMonotonicity:
    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_contact_never_increases_scoring(self, seed):
        rng = np.random.default_rng(100 + seed)
        for case in _random_cases(seed, 60):
            pieces = case.elements()
            before = case.scoring().as_dict()
            victim = pieces[int(rng.integers(len(pieces)))] if pieces else None
            if victim is None:
                continue
            if rng.random() < 0.5:
                victim.robot1_contacted = True
            else:
                victim.robot2_contacted = True
            after = case.scoring().as_dict()
            for key, value in after.items():
                assert value <= before[key], f"{key} rose after contact on {case}"

    def test_touching_everything_zeroes_scoring(self):
        for case in _random_cases(7, 30):
            for piece in case.elements():
                piece.robot1_contacted = True
            assert case.scoring() == EMPTY_SCORING
