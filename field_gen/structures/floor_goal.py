"""Floor goal: the orange scoring square on the floor around the standoff.

Kinds:
    EMPTY:        nothing in the floor goal
    WITH_COLUMNS: up to four columns, one per corner of the goal, each
                  either inside the scoring area or just outside it

Orange is the goal color. A corner column only counts toward matching_goals
while it sits inside the scoring area.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

import numpy as np

from field_gen.pieces import Column, Pin, PinColor, Piece
from field_gen.resources import ResourcePool
from field_gen.sampling import Level, maybe, sample_pins_with_preferred_bottom
from field_gen.scoring import EMPTY_SCORING, StructureScoring, score_columns
from field_gen.structures.base import (
    FLOOR_Z,
    InvalidCaseError,
    Structure,
    as_column,
    place_column,
    require_pins,
)

GOAL_COLOR = PinColor.ORANGE
CORNER_OFFSET = 115.0
JITTER = 10.0

# Corner order used everywhere in this module: (x sign, y sign)
CORNERS = ("top_left", "top_right", "bottom_left", "bottom_right")
_CORNER_SIGNS = {
    "top_left": (-1, -1),
    "top_right": (-1, 1),
    "bottom_left": (1, -1),
    "bottom_right": (1, 1),
}


class Kind(Enum):
    EMPTY = "empty"
    WITH_COLUMNS = "with_columns"


@dataclass(frozen=True)
class Case:
    kind: Kind
    top_left: Column = ()
    top_right: Column = ()
    bottom_left: Column = ()
    bottom_right: Column = ()
    within_area: tuple[bool, bool, bool, bool] = (False, False, False, False)

    def __post_init__(self):
        for name in CORNERS:
            object.__setattr__(self, name, as_column(getattr(self, name)))
        flags = tuple(bool(f) for f in self.within_area)
        if len(flags) != len(CORNERS):
            raise InvalidCaseError("within_area needs one flag per corner")
        object.__setattr__(self, "within_area", flags)

        if self.kind == Kind.EMPTY:
            if any(self.columns()) or any(flags):
                raise InvalidCaseError("empty case holds no pins")
        else:
            require_pins(*self.columns(), what="Columns")

    @classmethod
    def empty(cls) -> Case:
        return cls(Kind.EMPTY)

    @classmethod
    def with_columns(
        cls,
        top_left=(),
        top_right=(),
        bottom_left=(),
        bottom_right=(),
        within_area: Sequence[bool] = (True, True, True, True),
    ) -> Case:
        return cls(
            Kind.WITH_COLUMNS,
            top_left,
            top_right,
            bottom_left,
            bottom_right,
            tuple(within_area),
        )

    def columns(self) -> tuple[Column, Column, Column, Column]:
        return (self.top_left, self.top_right, self.bottom_left, self.bottom_right)

    def elements(self) -> list[Piece]:
        return [pin for column in self.columns() for pin in column]

    def scoring(self) -> StructureScoring:
        if self.kind == Kind.EMPTY:
            return EMPTY_SCORING
        return score_columns(
            ((column, None) for column in self.columns()),
            goal_color=GOAL_COLOR,
            matchable=self.within_area,
        )

    async def visualize(self, scene, structure: Structure) -> None:
        rng = structure.placement_rng()
        for name, column, within in zip(CORNERS, self.columns(), self.within_area):
            # Inside the area the column is nudged toward the centre,
            # outside it drifts past the corner.
            scale = -2.0 if within else 1.0
            dx = float(rng.random()) * JITTER * scale
            dy = float(rng.random()) * JITTER * scale
            sx, sy = _CORNER_SIGNS[name]
            x = sx * (CORNER_OFFSET + dx)
            y = sy * (CORNER_OFFSET + dy)
            await place_column(scene, column, x, y, FLOOR_Z, (0.0, 0.0, np.pi / 2))


# ---------------------------------------------------------------------------
# Random generation
# ---------------------------------------------------------------------------


def random_case(
    rng: np.random.Generator,
    level: Level,
    available: ResourcePool | None = None,
) -> Case:
    """easy: 20% empty, else each corner filled with probability 0.5.
    medium: each corner filled with probability 0.5.
    hard: every corner filled with 2-3 pins, each inside the area w.p. 0.8.
    """
    roll = rng.random()
    if level == Level.EASY and roll < 0.2:
        return Case.empty()

    if level in (Level.EASY, Level.MEDIUM):
        prob = 0.9 if level == Level.EASY else 0.8
        columns = [
            maybe(
                rng,
                0.5,
                lambda: sample_pins_with_preferred_bottom(rng, 1, 3, GOAL_COLOR, prob),
            )
            for _ in CORNERS
        ]
        return Case.with_columns(*columns)

    columns = []
    within = []
    for _ in CORNERS:
        columns.append(sample_pins_with_preferred_bottom(rng, 2, 3, GOAL_COLOR, 0.8))
        within.append(bool(rng.random() < 0.8))
    return Case.with_columns(*columns, within_area=within)


def simple_case(
    rng: np.random.Generator,
    colors: Sequence[PinColor],
    pin_count: int,
) -> Case:
    """A single in-area column of up to *pin_count* distinct colors.

    Used when random generation cannot find an affordable floor goal: the
    column only draws from *colors* (the colors still in stock), one pin
    each, in a random corner.
    """
    picked = [colors[i] for i in rng.permutation(len(colors))[:pin_count]]
    column = tuple(Pin(c) for c in picked)
    corner = CORNERS[int(rng.integers(len(CORNERS)))]
    return Case(
        Kind.WITH_COLUMNS,
        within_area=tuple(name == corner for name in CORNERS),
        **{corner: column},
    )
