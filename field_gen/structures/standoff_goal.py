"""Standoff goal: the raised goal post in the middle of the field.

Kinds:
    EMPTY:             nothing on the standoff
    BEAM_ONLY:         a beam resting on the standoff, no pins
    ONE_COLUMN:        a column of pins stacked on the standoff
    BEAM_WITH_COLUMNS: a bottom column on the standoff, a beam on top of it,
                       and a column hanging on each end of the beam

Every column on the standoff that forms a stack counts toward
stacks_placed_on_standoff_goal. The bottom column is judged on its own; the
two top columns are judged together with the beam they sit on.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from field_gen.pieces import Beam, Column, Piece
from field_gen.resources import ResourcePool
from field_gen.sampling import Level, sample_pins
from field_gen.scoring import EMPTY_SCORING, StructureScoring, count_stacks, is_not_touching, score_columns
from field_gen.structures.base import (
    BEAM_PITCH,
    FLIPPED,
    InvalidCaseError,
    Structure,
    as_column,
    beam_end,
    place_column,
    require_pins,
)

STANDOFF_Z = 194.0  # top surface of the standoff post


class Kind(Enum):
    EMPTY = "empty"
    BEAM_ONLY = "beam_only"
    ONE_COLUMN = "one_column"
    BEAM_WITH_COLUMNS = "beam_with_columns"


_BEAM_KINDS = (Kind.BEAM_ONLY, Kind.BEAM_WITH_COLUMNS)


@dataclass(frozen=True)
class Case:
    kind: Kind
    bottom: Column = ()
    top_left: Column = ()
    top_right: Column = ()
    beam: Beam | None = None

    def __post_init__(self):
        object.__setattr__(self, "bottom", as_column(self.bottom))
        object.__setattr__(self, "top_left", as_column(self.top_left))
        object.__setattr__(self, "top_right", as_column(self.top_right))

        if self.kind in _BEAM_KINDS:
            if self.beam is None:
                object.__setattr__(self, "beam", Beam())
        elif self.beam is not None:
            raise InvalidCaseError(f"{self.kind.value} case has no beam")

        if self.kind in (Kind.EMPTY, Kind.BEAM_ONLY):
            if self.bottom or self.top_left or self.top_right:
                raise InvalidCaseError(f"{self.kind.value} case holds no pins")
        elif self.kind == Kind.ONE_COLUMN:
            if self.top_left or self.top_right:
                raise InvalidCaseError("one_column case has no top columns")
            require_pins(self.bottom)
        else:
            require_pins(self.bottom, self.top_left, self.top_right, what="Columns")

    @classmethod
    def empty(cls) -> Case:
        return cls(Kind.EMPTY)

    @classmethod
    def beam_only(cls) -> Case:
        return cls(Kind.BEAM_ONLY)

    @classmethod
    def one_column(cls, column) -> Case:
        return cls(Kind.ONE_COLUMN, bottom=column)

    @classmethod
    def beam_with_columns(cls, bottom, top_left, top_right) -> Case:
        return cls(Kind.BEAM_WITH_COLUMNS, bottom, top_left, top_right)

    def elements(self) -> list[Piece]:
        pieces: list[Piece] = [*self.bottom, *self.top_left, *self.top_right]
        if self.beam is not None:
            pieces.append(self.beam)
        return pieces

    def _columns(self):
        if self.kind == Kind.ONE_COLUMN:
            return [(self.bottom, None)]
        if self.kind == Kind.BEAM_WITH_COLUMNS:
            return [
                (self.bottom, None),
                (self.top_left, self.beam),
                (self.top_right, self.beam),
            ]
        return []

    def scoring(self) -> StructureScoring:
        if self.kind == Kind.EMPTY:
            return EMPTY_SCORING

        columns = self._columns()
        base = score_columns(columns)
        return StructureScoring(
            connected_pins=base.connected_pins,
            connected_beams=int(self.beam is not None and is_not_touching(self.beam)),
            two_color_stacks=base.two_color_stacks,
            three_color_stacks=base.three_color_stacks,
            stacks_placed_on_standoff_goal=count_stacks(columns),
        )

    async def visualize(self, scene, structure: Structure) -> None:
        yaw = np.radians(structure.rotation)

        if self.kind == Kind.EMPTY:
            return
        if self.kind == Kind.BEAM_ONLY:
            await scene.add_beam((0.0, 0.0, STANDOFF_Z), (0.0, 0.0, yaw))
            return
        if self.kind == Kind.ONE_COLUMN:
            await place_column(scene, self.bottom, 0.0, 0.0, STANDOFF_Z, (0.0, 0.0, yaw))
            return

        z = await place_column(scene, self.bottom, 0.0, 0.0, STANDOFF_Z)
        await scene.add_beam((0.0, 0.0, z), (0.0, 0.0, yaw))
        top_z = z + BEAM_PITCH
        for column, side in ((self.top_left, 1), (self.top_right, -1)):
            x, y = beam_end(0.0, 0.0, yaw, side)
            await place_column(scene, column, x, y, top_z, FLIPPED)


# ---------------------------------------------------------------------------
# Random generation
# ---------------------------------------------------------------------------


def random_case(
    rng: np.random.Generator,
    level: Level,
    available: ResourcePool | None = None,
) -> Case:
    """easy: 50% empty / 50% one column.
    medium: 40% one column / 10% beam only / 50% beam with columns.
    hard: always beam with columns.
    """
    roll = rng.random()
    if level == Level.EASY:
        if roll < 0.5:
            return Case.empty()
        return Case.one_column(sample_pins(rng, 1, 2))
    if level == Level.MEDIUM:
        if roll < 0.4:
            return Case.one_column(sample_pins(rng, 1, 2))
        if roll < 0.5:
            return Case.beam_only()
    return Case.beam_with_columns(
        sample_pins(rng, 0, 2),
        sample_pins(rng, 0, 2),
        sample_pins(rng, 0, 2),
    )
