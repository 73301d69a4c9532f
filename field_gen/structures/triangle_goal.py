"""Triangle goal: a three-column goal on the far side of the field.

Kinds:
    EMPTY:        nothing in the goal
    WITH_COLUMNS: up to three columns, one per post of the triangle

At least one of the three columns must hold a pin. Stacks whose bottom pin
is the goal's color count toward matching_goals.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from field_gen.pieces import Column, PinColor, Piece
from field_gen.resources import ResourcePool
from field_gen.sampling import Level, maybe, sample_pins_with_preferred_bottom
from field_gen.scoring import EMPTY_SCORING, StructureScoring, score_columns
from field_gen.structures.base import FLOOR_Z, InvalidCaseError, Structure, as_column, place_column, require_pins

# Post positions (field frame) for each triangle goal, in column order
POSTS: dict[PinColor, tuple[tuple[float, float], ...]] = {
    PinColor.RED: ((880.0, -1180.0), (790.0, -1180.0), (880.0, -1090.0)),
    PinColor.BLUE: ((880.0, 1180.0), (790.0, 1180.0), (880.0, 1090.0)),
}
JITTER = 10.0


class Kind(Enum):
    EMPTY = "empty"
    WITH_COLUMNS = "with_columns"


@dataclass(frozen=True)
class Case:
    goal_color: PinColor
    kind: Kind
    column1: Column = ()
    column2: Column = ()
    column3: Column = ()

    def __post_init__(self):
        object.__setattr__(self, "goal_color", PinColor(self.goal_color))
        if self.goal_color not in POSTS:
            raise InvalidCaseError(f"No {self.goal_color.value} triangle goal on the field")
        for name in ("column1", "column2", "column3"):
            object.__setattr__(self, name, as_column(getattr(self, name)))
        if self.kind == Kind.EMPTY:
            if any(self.columns()):
                raise InvalidCaseError("empty case holds no pins")
        else:
            require_pins(*self.columns(), what="Columns")

    @classmethod
    def empty(cls, goal_color: PinColor) -> Case:
        return cls(goal_color, Kind.EMPTY)

    @classmethod
    def with_columns(cls, goal_color: PinColor, column1=(), column2=(), column3=()) -> Case:
        return cls(goal_color, Kind.WITH_COLUMNS, column1, column2, column3)

    def columns(self) -> tuple[Column, Column, Column]:
        return (self.column1, self.column2, self.column3)

    def elements(self) -> list[Piece]:
        return [pin for column in self.columns() for pin in column]

    def scoring(self) -> StructureScoring:
        if self.kind == Kind.EMPTY:
            return EMPTY_SCORING
        return score_columns(
            ((column, None) for column in self.columns()), goal_color=self.goal_color
        )

    async def visualize(self, scene, structure: Structure) -> None:
        if self.kind == Kind.EMPTY:
            return
        # One jitter for the whole goal: the three posts move together
        rng = structure.placement_rng()
        dx = float(rng.random()) * JITTER
        dy = float(rng.random()) * JITTER
        for column, (px, py) in zip(self.columns(), POSTS[self.goal_color]):
            await place_column(scene, column, px + dx, py - dy, FLOOR_Z)


def random_case(
    rng: np.random.Generator,
    level: Level,
    available: ResourcePool | None = None,
    *,
    goal_color: PinColor,
) -> Case:
    """easy: 20% empty, else one column with goal-color bottom w.p. 0.9.
    medium / hard: first column always, the other two w.p. 0.5 each;
    goal-color bottom w.p. 0.8 / 0.7.
    """
    roll = rng.random()
    if level == Level.EASY:
        if roll < 0.2:
            return Case.empty(goal_color)
        return Case.with_columns(
            goal_color, sample_pins_with_preferred_bottom(rng, 1, 3, goal_color, 0.9)
        )

    prob = 0.8 if level == Level.MEDIUM else 0.7

    def draw():
        return sample_pins_with_preferred_bottom(rng, 1, 3, goal_color, prob)

    return Case.with_columns(goal_color, draw(), maybe(rng, 0.5, draw), maybe(rng, 0.5, draw))
