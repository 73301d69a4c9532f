"""Shared pieces of every structure family: the Structure wrapper, the
construction error, and the column-stacking helper used by visualize().

Field frame: millimetres, Z-up, origin at the centre of the field.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import numpy as np

from field_gen.pieces import Beam, Piece, Pin, beams_of, pins_of
from field_gen.scoring import StructureScoring

if TYPE_CHECKING:
    from field_gen.scene import Scene

FT = 12 * 25.4  # one foot in mm
FLOOR_Z = 6.0  # base of a pin standing on a floor tile
PIN_PITCH = 60.0  # height gained per stacked pin
BEAM_PITCH = 110.0  # height gained by passing through a beam
BEAM_PIN_OFFSET = 64.0  # distance from beam centre to its end posts

UPRIGHT = (0.0, 0.0, 0.0)
FLIPPED = (0.0, np.pi, 0.0)  # pins hanging from the top of a beam


class InvalidCaseError(ValueError):
    """A case was built with an arrangement its kind does not allow."""


class Case(Protocol):
    """What every family's case type provides."""

    def elements(self) -> list[Piece]: ...

    def scoring(self) -> StructureScoring: ...

    async def visualize(self, scene: Scene, structure: Structure) -> None: ...


@dataclass
class Structure:
    """A case placed on the field.

    Attributes:
        family: Registry name of the structure family (e.g. "floor_goal")
        case: The family's case instance
        rotation: Yaw in degrees, for families that are rotated as a whole
        seed: Placement seed; drives jitter in visualize() deterministically
    """

    family: str
    case: Case
    rotation: float = 0.0
    seed: int = 0

    def elements(self) -> list[Piece]:
        return self.case.elements()

    def pins(self) -> list[Pin]:
        return pins_of(self.elements())

    def beams(self) -> list[Beam]:
        return beams_of(self.elements())

    def scoring(self) -> StructureScoring:
        return self.case.scoring()

    def placement_rng(self) -> np.random.Generator:
        """Fresh generator for placement jitter; same seed, same layout."""
        return np.random.default_rng(self.seed)

    async def visualize(self, scene: Scene) -> None:
        await self.case.visualize(scene, self)


# ---------------------------------------------------------------------------
# Construction checks
# ---------------------------------------------------------------------------


def require_pins(*columns: Sequence[Pin], what: str = "Column") -> None:
    """Raise InvalidCaseError unless at least one column has a pin."""
    if not any(len(c) for c in columns):
        raise InvalidCaseError(f"{what} must have at least 1 pin")


def as_column(pins: Iterable[Pin]) -> tuple[Pin, ...]:
    column = tuple(pins)
    for p in column:
        if not isinstance(p, Pin):
            raise InvalidCaseError(f"Columns hold pins only, got {type(p).__name__}")
    return column


# ---------------------------------------------------------------------------
# Visualization helpers
# ---------------------------------------------------------------------------


async def place_column(
    scene: Scene,
    column: Sequence[Pin],
    x: float,
    y: float,
    z: float,
    rotation: tuple[float, float, float] = UPRIGHT,
) -> float:
    """Stack *column* bottom-to-top starting at height *z*.

    Returns the height just above the top pin (== z for an empty column).
    """
    for pin in column:
        await scene.add_pin(pin.color, (x, y, z), rotation)
        z += PIN_PITCH
    return z


def beam_end(x: float, y: float, yaw: float, side: int) -> tuple[float, float]:
    """Position of one end post of a beam centred at (x, y) with *yaw* radians.

    side=+1 is the end along the beam's local +X axis, side=-1 the other.
    """
    return (
        x + side * BEAM_PIN_OFFSET * np.cos(yaw),
        y + side * BEAM_PIN_OFFSET * np.sin(yaw),
    )
