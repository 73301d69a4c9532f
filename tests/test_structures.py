"""Tests for structure families and the random samplers.

Validates that:
- Every registered family draws valid cases at every level
- Case constructors enforce their column minimums
- Samplers respect their count ranges and bottom-color bias
- Stacks on floor never draws more than the inventory holds
"""

import numpy as np
import pytest

from field_gen import structures
from field_gen.pieces import Beam, Pin, PinColor, count_colors, make_column
from field_gen.resources import ResourcePool
from field_gen.sampling import Level, maybe, sample_pins, sample_pins_with_preferred_bottom
from field_gen.structures import (
    beam_on_floor,
    floor_goal,
    remaining_pins,
    square_goal,
    stacks_on_floor,
    standoff_goal,
    starting_pin,
    triangle_goal,
)
from field_gen.structures.base import InvalidCaseError, Structure


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistry:
    def test_family_order(self):
        assert structures.list_families() == [
            "standoff_goal",
            "beam_on_floor",
            "floor_goal",
            "blue_square_goal",
            "red_square_goal",
            "red_triangle_goal",
            "blue_triangle_goal",
            "stacks_on_floor",
            "starting_pin",
            "remaining_pins",
        ]

    def test_unknown_family(self):
        with pytest.raises(KeyError, match="Unknown structure family"):
            structures.get("hexagon_goal")

    @pytest.fixture(params=[n for n in structures.list_families() if n != "remaining_pins"])
    def family_name(self, request):
        return request.param

    @pytest.mark.parametrize("level", list(Level))
    def test_random_cases_are_well_formed(self, family_name, level, rng):
        family = structures.get(family_name)
        built = 0
        for _ in range(200):
            try:
                case = family.random_case(rng, level, ResourcePool())
            except InvalidCaseError:
                continue
            built += 1
            pieces = case.elements()
            assert all(isinstance(p, (Pin, Beam)) for p in pieces)
            assert len(set(map(id, pieces))) == len(pieces), "piece listed twice"
            scoring = case.scoring()
            assert all(v >= 0 for v in scoring.as_dict().values())
        assert built > 100

    def test_bound_goal_colors(self, rng):
        case = structures.get("blue_square_goal").random_case(rng, Level.HARD)
        assert case.goal_color is PinColor.BLUE
        case = structures.get("red_triangle_goal").random_case(rng, Level.HARD)
        assert case.goal_color is PinColor.RED


# ---------------------------------------------------------------------------
# Samplers
# ---------------------------------------------------------------------------


class TestSampling:
    def test_sample_pins_range(self, rng):
        lengths = {len(sample_pins(rng, 1, 3)) for _ in range(300)}
        assert lengths == {1, 2, 3}
        assert sample_pins(rng, 0, 0) == ()

    def test_preferred_bottom_never_empty(self, rng):
        for _ in range(300):
            column = sample_pins_with_preferred_bottom(rng, 1, 3, PinColor.ORANGE, 0.0)
            assert 1 <= len(column) <= 3

    def test_preferred_bottom_bias(self, rng):
        n = 2000
        bottoms = [
            sample_pins_with_preferred_bottom(rng, 2, 3, PinColor.RED, 0.9)[0].color
            for _ in range(n)
        ]
        # 0.9 forced + 0.1 * 1/3 random
        frac = bottoms.count(PinColor.RED) / n
        assert 0.9 < frac < 0.97

    def test_preferred_color_rare_above_bottom(self, rng):
        above = [
            p.color
            for _ in range(2000)
            for p in sample_pins_with_preferred_bottom(rng, 3, 3, PinColor.BLUE, 1.0)[1:]
        ]
        # redrawn unless the 0.2 escape lets it stand
        assert above.count(PinColor.BLUE) / len(above) < 0.2

    def test_maybe(self, rng):
        assert maybe(rng, 0.0, lambda: make_column(["red"])) == ()
        assert len(maybe(rng, 1.0, lambda: make_column(["red"]))) == 1


# ---------------------------------------------------------------------------
# Case construction
# ---------------------------------------------------------------------------


class TestStandoffGoal:
    def test_beam_kinds_own_a_beam(self):
        case = standoff_goal.Case.beam_only()
        assert len([p for p in case.elements() if isinstance(p, Beam)]) == 1
        assert standoff_goal.Case.empty().elements() == []

    def test_one_column_needs_a_pin(self):
        with pytest.raises(InvalidCaseError):
            standoff_goal.Case.one_column(())

    def test_beam_with_columns_needs_a_pin(self):
        with pytest.raises(InvalidCaseError):
            standoff_goal.Case.beam_with_columns((), (), ())
        case = standoff_goal.Case.beam_with_columns((), (), make_column(["red"]))
        assert len(case.elements()) == 2

    def test_columns_hold_pins_only(self):
        with pytest.raises(InvalidCaseError):
            standoff_goal.Case.one_column([Beam()])

    def test_easy_never_uses_beam(self, rng):
        for _ in range(200):
            case = standoff_goal.random_case(rng, Level.EASY)
            assert case.kind in (standoff_goal.Kind.EMPTY, standoff_goal.Kind.ONE_COLUMN)


class TestBeamOnFloor:
    def test_every_kind_owns_one_beam(self):
        cases = [
            beam_on_floor.Case.beam_only(),
            beam_on_floor.Case.beam_with_columns((), make_column(["red"]), ()),
            beam_on_floor.Case.beam_on_two_columns(
                make_column(["red"]), make_column(["blue"]), ()
            ),
        ]
        for case in cases:
            assert len([p for p in case.elements() if isinstance(p, Beam)]) == 1

    def test_with_columns_needs_top_pin(self):
        with pytest.raises(InvalidCaseError):
            beam_on_floor.Case.beam_with_columns(make_column(["red", "blue"]), (), ())

    def test_two_columns_equal_height(self):
        with pytest.raises(InvalidCaseError):
            beam_on_floor.Case.beam_on_two_columns(
                make_column(["red"]), make_column(["blue", "red"]), ()
            )
        with pytest.raises(InvalidCaseError):
            beam_on_floor.Case.beam_on_two_columns((), (), make_column(["red"]))


class TestFloorGoal:
    def test_with_columns_needs_a_pin(self):
        with pytest.raises(InvalidCaseError):
            floor_goal.Case.with_columns()

    def test_within_area_length(self):
        with pytest.raises(InvalidCaseError):
            floor_goal.Case.with_columns(make_column(["orange"]), within_area=(True,))

    def test_easy_and_medium_always_within_area(self, rng):
        for level in (Level.EASY, Level.MEDIUM):
            for _ in range(100):
                try:
                    case = floor_goal.random_case(rng, level)
                except InvalidCaseError:
                    continue
                if case.kind == floor_goal.Kind.WITH_COLUMNS:
                    assert all(case.within_area)

    def test_hard_fills_every_corner(self, rng):
        case = floor_goal.random_case(rng, Level.HARD)
        assert all(2 <= len(c) <= 3 for c in case.columns())

    @pytest.mark.parametrize("pin_count", [1, 2, 3])
    def test_simple_case(self, rng, pin_count):
        colors = [PinColor.RED, PinColor.BLUE, PinColor.ORANGE]
        case = floor_goal.simple_case(rng, colors, pin_count)
        filled = [c for c in case.columns() if c]
        assert len(filled) == 1
        assert len(filled[0]) == pin_count
        assert len({p.color for p in filled[0]}) == pin_count
        assert sum(case.within_area) == 1


class TestGoals:
    def test_square_goal_rejects_orange(self):
        with pytest.raises(InvalidCaseError):
            square_goal.Case.empty(PinColor.ORANGE)

    def test_square_goal_one_column_needs_a_pin(self):
        with pytest.raises(InvalidCaseError):
            square_goal.Case.one_column(PinColor.RED, ())

    def test_triangle_goal_needs_a_pin(self):
        with pytest.raises(InvalidCaseError):
            triangle_goal.Case.with_columns(PinColor.BLUE)
        case = triangle_goal.Case.with_columns(PinColor.BLUE, (), (), make_column(["red"]))
        assert len(case.elements()) == 1

    def test_empty_goal_holds_nothing(self):
        with pytest.raises(InvalidCaseError):
            triangle_goal.Case(PinColor.RED, triangle_goal.Kind.EMPTY, make_column(["red"]))


class TestStacksOnFloor:
    def test_stacks_must_be_non_empty(self):
        with pytest.raises(InvalidCaseError):
            stacks_on_floor.Case(((),))
        assert stacks_on_floor.Case(()).elements() == []

    @pytest.mark.parametrize("level", list(Level))
    def test_stack_sizes(self, rng, level):
        max_stacks = 1 if level == Level.EASY else 3
        for _ in range(200):
            case = stacks_on_floor.random_case(rng, level, ResourcePool())
            assert len(case.stacks) <= max_stacks
            assert all(2 <= len(s) <= 3 for s in case.stacks)

    def test_repeated_colors_are_rare(self, rng):
        stacks = [
            s
            for _ in range(300)
            for s in stacks_on_floor.random_case(rng, Level.HARD, ResourcePool()).stacks
        ]
        repeats = sum(len({p.color for p in s}) < len(s) for s in stacks)
        assert repeats / len(stacks) < 0.1

    def test_partial_stack_is_dropped(self):
        # 9 pins wanted, 7 in stock: the third stack would get a single pin
        pool = ResourcePool(red=3, blue=2, orange=2, beams=0)
        rng = np.random.default_rng(0)
        for _ in range(200):
            case = stacks_on_floor.random_case(rng, Level.HARD, pool)
            assert all(len(s) >= 2 for s in case.stacks)

    @pytest.mark.parametrize(
        "pool",
        [
            ResourcePool(red=0, blue=0, orange=0, beams=0),
            ResourcePool(red=1, blue=0, orange=0, beams=0),
            ResourcePool(red=0, blue=2, orange=1, beams=0),
            ResourcePool(red=1, blue=1, orange=1, beams=0),
        ],
    )
    def test_never_exceeds_inventory(self, rng, pool):
        for _ in range(100):
            case = stacks_on_floor.random_case(rng, Level.HARD, pool)
            used = count_colors(case.elements())
            for color, n in used.items():
                assert n <= pool.count(color)


class TestStartingPin:
    def test_owns_two_red_two_blue(self):
        counts = count_colors(starting_pin.Case().elements())
        assert counts == {PinColor.RED: 2, PinColor.BLUE: 2, PinColor.ORANGE: 0}

    def test_cleared_pins_are_absent(self):
        case = starting_pin.Case(red_top_cleared=True, blue_bottom_cleared=True)
        assert len(case.elements()) == 2
        assert set(case.present()) == {"red_bottom", "blue_top"}

    def test_easy_mostly_full(self, rng):
        full = sum(
            len(starting_pin.random_case(rng, Level.EASY).elements()) == 4 for _ in range(1000)
        )
        # 0.8 + 0.2 / 16
        assert 750 < full < 870


class TestRemainingPins:
    def test_orange_only(self):
        assert len(remaining_pins.Case.of_count(5).elements()) == 5
        with pytest.raises(InvalidCaseError):
            remaining_pins.Case((Pin(PinColor.RED),))

    def test_structure_wrapper(self):
        structure = Structure("remaining_pins", remaining_pins.Case.of_count(3))
        assert len(structure.pins()) == 3
        assert structure.beams() == []
