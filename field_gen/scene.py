"""Scene capability: where visualized structures put their pieces.

Structures never draw anything themselves. Their ``visualize()`` coroutines
call ``add_pin`` / ``add_beam`` on a Scene, one piece at a time, awaiting
each call before computing the next position. Any object with these two
coroutine methods can be a Scene (a browser renderer, a MuJoCo exporter,
a test double).

FieldScene is the in-process implementation: it records every placement
and can hand them out as Prims for rendering.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from field_gen.pieces import PIN_COLORS, PinColor
from field_gen.primitives import Prim, beam_prim, pin_prim

Vec3 = tuple[float, float, float]


class Scene(Protocol):
    async def add_pin(
        self, color: PinColor, position: Vec3, rotation: Vec3 = (0.0, 0.0, 0.0)
    ) -> object: ...

    async def add_beam(self, position: Vec3, rotation: Vec3 = (0.0, 0.0, 0.0)) -> object: ...


@dataclass(frozen=True)
class PlacedPiece:
    """One piece placed in a scene.

    Attributes:
        kind: "pin" or "beam"
        color: Pin color (None for beams)
        position: Field position in millimetres
        rotation: (roll, pitch, yaw) in radians
        instance_id: Per-color (pins) or per-beam running index
    """

    kind: str
    color: PinColor | None
    position: Vec3
    rotation: Vec3
    instance_id: int

    def to_prim(self) -> Prim:
        if self.kind == "beam":
            return beam_prim(self.position, self.rotation)
        return pin_prim(self.color, self.position, self.rotation)


class FieldScene:
    """Records pins and beams in placement order."""

    def __init__(self):
        self.pieces: list[PlacedPiece] = []
        self._pin_counter: dict[PinColor, int] = {c: 0 for c in PIN_COLORS}
        self._beam_counter = 0

    async def add_pin(
        self, color: PinColor, position: Vec3, rotation: Vec3 = (0.0, 0.0, 0.0)
    ) -> PlacedPiece:
        color = PinColor(color)
        piece = PlacedPiece(
            "pin", color, _vec(position), _vec(rotation), self._pin_counter[color]
        )
        self._pin_counter[color] += 1
        self.pieces.append(piece)
        return piece

    async def add_beam(self, position: Vec3, rotation: Vec3 = (0.0, 0.0, 0.0)) -> PlacedPiece:
        piece = PlacedPiece("beam", None, _vec(position), _vec(rotation), self._beam_counter)
        self._beam_counter += 1
        self.pieces.append(piece)
        return piece

    def pin_count(self, color: PinColor | None = None) -> int:
        """Pins in the scene, of one color or in total."""
        if color is None:
            return sum(self._pin_counter.values())
        return self._pin_counter[PinColor(color)]

    @property
    def beam_count(self) -> int:
        return self._beam_counter

    def clear(self):
        """Remove every piece and reset the instance counters."""
        self.pieces.clear()
        self._pin_counter = {c: 0 for c in PIN_COLORS}
        self._beam_counter = 0

    def to_prims(self) -> tuple[Prim, ...]:
        return tuple(p.to_prim() for p in self.pieces)


def _vec(v) -> Vec3:
    x, y, z = v
    return (float(x), float(y), float(z))
