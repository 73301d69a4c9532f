"""Beam on floor: a loose beam somewhere in the neutral zone.

Kinds:
    BEAM_ONLY:           the beam lying flat on the floor
    BEAM_WITH_COLUMNS:   a (possibly empty) column under the beam's centre,
                         and a column on each end of the beam
    BEAM_ON_TWO_COLUMNS: the beam bridging two equal-height floor columns,
                         with one column on top of its centre

Every kind owns exactly one beam. The beam counts as connected when it is
untouched and at least one of its columns forms a stack.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from field_gen.pieces import Beam, Column, Piece
from field_gen.resources import ResourcePool
from field_gen.sampling import Level, sample_count, sample_pins
from field_gen.scoring import StructureScoring, count_stacks, is_not_touching, score_columns
from field_gen.structures.base import (
    BEAM_PITCH,
    FLIPPED,
    FLOOR_Z,
    InvalidCaseError,
    Structure,
    as_column,
    beam_end,
    place_column,
    require_pins,
)

CENTRE = (0.0, -600.0)
JITTER = 200.0  # max offset from CENTRE along each axis
BARE_BEAM_LIFT = 4.0  # extra clearance when the beam lies directly on the floor


class Kind(Enum):
    BEAM_ONLY = "beam_only"
    BEAM_WITH_COLUMNS = "beam_with_columns"
    BEAM_ON_TWO_COLUMNS = "beam_on_two_columns"


@dataclass(frozen=True)
class Case:
    kind: Kind
    bottom: Column = ()
    top_left: Column = ()
    top_right: Column = ()
    bottom_left: Column = ()
    bottom_right: Column = ()
    top: Column = ()
    beam: Beam | None = None

    def __post_init__(self):
        for name in ("bottom", "top_left", "top_right", "bottom_left", "bottom_right", "top"):
            object.__setattr__(self, name, as_column(getattr(self, name)))
        if self.beam is None:
            object.__setattr__(self, "beam", Beam())

        with_columns = (self.bottom, self.top_left, self.top_right)
        two_columns = (self.bottom_left, self.bottom_right, self.top)

        if self.kind == Kind.BEAM_ONLY:
            if any(with_columns) or any(two_columns):
                raise InvalidCaseError("beam_only case holds no pins")
        elif self.kind == Kind.BEAM_WITH_COLUMNS:
            if any(two_columns):
                raise InvalidCaseError("beam_with_columns case uses bottom/top_left/top_right")
            require_pins(self.top_left, self.top_right, what="Top columns")
        else:
            if any(with_columns):
                raise InvalidCaseError("beam_on_two_columns case uses bottom_left/bottom_right/top")
            require_pins(self.bottom_left, what="Bottom left column")
            require_pins(self.bottom_right, what="Bottom right column")
            if len(self.bottom_left) != len(self.bottom_right):
                raise InvalidCaseError("Bottom columns must have the same height")

    @classmethod
    def beam_only(cls) -> Case:
        return cls(Kind.BEAM_ONLY)

    @classmethod
    def beam_with_columns(cls, bottom, top_left, top_right) -> Case:
        return cls(Kind.BEAM_WITH_COLUMNS, bottom=bottom, top_left=top_left, top_right=top_right)

    @classmethod
    def beam_on_two_columns(cls, bottom_left, bottom_right, top) -> Case:
        return cls(
            Kind.BEAM_ON_TWO_COLUMNS,
            bottom_left=bottom_left,
            bottom_right=bottom_right,
            top=top,
        )

    def elements(self) -> list[Piece]:
        pins = [pin for column, _ in self._columns() for pin in column]
        return [*pins, self.beam]

    def _columns(self):
        if self.kind == Kind.BEAM_WITH_COLUMNS:
            return [
                (self.bottom, None),
                (self.top_left, self.beam),
                (self.top_right, self.beam),
            ]
        if self.kind == Kind.BEAM_ON_TWO_COLUMNS:
            return [
                (self.bottom_left, None),
                (self.bottom_right, None),
                (self.top, self.beam),
            ]
        return []

    def scoring(self) -> StructureScoring:
        columns = self._columns()
        base = score_columns(columns)
        connected = is_not_touching(self.beam) and count_stacks(columns) > 0
        return StructureScoring(
            connected_pins=base.connected_pins,
            connected_beams=int(connected),
            two_color_stacks=base.two_color_stacks,
            three_color_stacks=base.three_color_stacks,
        )

    async def visualize(self, scene, structure: Structure) -> None:
        rng = structure.placement_rng()
        yaw = float(rng.uniform(0.0, 2 * np.pi))
        x = CENTRE[0] + float(rng.uniform(-JITTER, JITTER))
        y = CENTRE[1] + float(rng.uniform(-JITTER, JITTER))

        if self.kind == Kind.BEAM_ONLY:
            await scene.add_beam((x, y, FLOOR_Z), (0.0, 0.0, yaw))
            return

        if self.kind == Kind.BEAM_WITH_COLUMNS:
            z = await place_column(scene, self.bottom, x, y, FLOOR_Z)
            await scene.add_beam((x, y, z), (0.0, 0.0, yaw))
            top_z = z + BEAM_PITCH + (0.0 if self.bottom else BARE_BEAM_LIFT)
            for column, side in ((self.top_left, 1), (self.top_right, -1)):
                ex, ey = beam_end(x, y, yaw, side)
                await place_column(scene, column, ex, ey, top_z, FLIPPED)
            return

        z = FLOOR_Z
        for column, side in ((self.bottom_left, 1), (self.bottom_right, -1)):
            ex, ey = beam_end(x, y, yaw, side)
            z = await place_column(scene, column, ex, ey, FLOOR_Z)
        await scene.add_beam((x, y, z), (0.0, 0.0, yaw))
        await place_column(scene, self.top, x, y, z + BEAM_PITCH, FLIPPED)


# ---------------------------------------------------------------------------
# Random generation
# ---------------------------------------------------------------------------


def random_case(
    rng: np.random.Generator,
    level: Level,
    available: ResourcePool | None = None,
) -> Case:
    """easy: 70% beam only / 30% beam with three columns.
    medium, hard: 30% beam on two columns / 30% beam with two top columns /
    40% beam with three columns.
    """
    roll = rng.random()
    if level == Level.EASY:
        if roll < 0.7:
            return Case.beam_only()
        return Case.beam_with_columns(
            sample_pins(rng, 1, 2), sample_pins(rng, 1, 2), sample_pins(rng, 1, 2)
        )

    if roll < 0.3:
        height = sample_count(rng, 1, 2)
        return Case.beam_on_two_columns(
            sample_pins(rng, height, height),
            sample_pins(rng, height, height),
            sample_pins(rng, 1, 2),
        )
    if roll < 0.6:
        return Case.beam_with_columns((), sample_pins(rng, 1, 2), sample_pins(rng, 1, 2))
    return Case.beam_with_columns(
        sample_pins(rng, 1, 2), sample_pins(rng, 1, 2), sample_pins(rng, 1, 2)
    )
