"""Square goal: a one-column goal in the red or blue alliance corner.

Kinds:
    EMPTY:      nothing in the goal
    ONE_COLUMN: a single column standing in the goal

A stack matches the goal when its bottom pin is the goal's color.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from field_gen.pieces import Column, PinColor, Piece
from field_gen.resources import ResourcePool
from field_gen.sampling import Level, sample_pins, sample_pins_with_preferred_bottom
from field_gen.scoring import EMPTY_SCORING, StructureScoring, score_columns
from field_gen.structures.base import FLOOR_Z, InvalidCaseError, Structure, as_column, place_column, require_pins

# Goal centre in the field frame, per alliance color
POSITIONS: dict[PinColor, tuple[float, float]] = {
    PinColor.BLUE: (-880.0, -1180.0),
    PinColor.RED: (-880.0, 1180.0),
}
JITTER = 10.0


class Kind(Enum):
    EMPTY = "empty"
    ONE_COLUMN = "one_column"


@dataclass(frozen=True)
class Case:
    goal_color: PinColor
    kind: Kind
    column: Column = ()

    def __post_init__(self):
        object.__setattr__(self, "goal_color", PinColor(self.goal_color))
        if self.goal_color not in POSITIONS:
            raise InvalidCaseError(f"No {self.goal_color.value} square goal on the field")
        object.__setattr__(self, "column", as_column(self.column))
        if self.kind == Kind.EMPTY:
            if self.column:
                raise InvalidCaseError("empty case holds no pins")
        else:
            require_pins(self.column)

    @classmethod
    def empty(cls, goal_color: PinColor) -> Case:
        return cls(goal_color, Kind.EMPTY)

    @classmethod
    def one_column(cls, goal_color: PinColor, column) -> Case:
        return cls(goal_color, Kind.ONE_COLUMN, column)

    def elements(self) -> list[Piece]:
        return list(self.column)

    def scoring(self) -> StructureScoring:
        if self.kind == Kind.EMPTY:
            return EMPTY_SCORING
        return score_columns([(self.column, None)], goal_color=self.goal_color)

    async def visualize(self, scene, structure: Structure) -> None:
        if self.kind == Kind.EMPTY:
            return
        rng = structure.placement_rng()
        gx, gy = POSITIONS[self.goal_color]
        x = gx + float(rng.random()) * JITTER
        y = gy + float(rng.random()) * JITTER
        await place_column(scene, self.column, x, y, FLOOR_Z, (0.0, 0.0, np.pi / 2))


def random_case(
    rng: np.random.Generator,
    level: Level,
    available: ResourcePool | None = None,
    *,
    goal_color: PinColor,
) -> Case:
    """easy: 20% empty, else 1-3 random pins.
    medium / hard: 1-3 pins, goal color at the bottom w.p. 0.8 / 0.7.
    """
    roll = rng.random()
    if level == Level.EASY:
        if roll < 0.2:
            return Case.empty(goal_color)
        return Case.one_column(goal_color, sample_pins(rng, 1, 3))
    prob = 0.8 if level == Level.MEDIUM else 0.7
    return Case.one_column(
        goal_color, sample_pins_with_preferred_bottom(rng, 1, 3, goal_color, prob)
    )
