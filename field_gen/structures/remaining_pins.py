"""Remaining pins: the orange pins left over once every other structure is built.

They wait in a row beside the field. The generator builds this structure
last, from whatever orange count the tracker still holds.
"""

from __future__ import annotations

from dataclasses import dataclass

from field_gen.pieces import Pin, PinColor, Piece
from field_gen.scoring import EMPTY_SCORING, StructureScoring
from field_gen.structures.base import FLOOR_Z, InvalidCaseError, Structure

ROW_X = 600.0
PIN_SPACING = 100.0


@dataclass(frozen=True)
class Case:
    pins: tuple[Pin, ...] = ()

    def __post_init__(self):
        pins = tuple(self.pins)
        if any(not isinstance(p, Pin) or p.color != PinColor.ORANGE for p in pins):
            raise InvalidCaseError("Remaining pins are orange pins only")
        object.__setattr__(self, "pins", pins)

    @classmethod
    def of_count(cls, count: int) -> Case:
        return cls(tuple(Pin(PinColor.ORANGE) for _ in range(count)))

    def elements(self) -> list[Piece]:
        return list(self.pins)

    def scoring(self) -> StructureScoring:
        return EMPTY_SCORING

    async def visualize(self, scene, structure: Structure) -> None:
        start_y = -(len(self.pins) - 1) * PIN_SPACING / 2
        for i, pin in enumerate(self.pins):
            await scene.add_pin(pin.color, (ROW_X, start_y + i * PIN_SPACING, FLOOR_Z))
