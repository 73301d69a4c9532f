"""Starting pins: the four pins preloaded on the alliance starting supports.

Two red and two blue pins (a top and a bottom support per alliance). A
cleared pin has already been taken off its support and is not on the field.
Starting pins do not score as stacks; the scenario reports how many are
still in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from field_gen.pieces import Pin, PinColor, Piece
from field_gen.resources import ResourcePool
from field_gen.sampling import Level
from field_gen.scoring import EMPTY_SCORING, StructureScoring
from field_gen.structures.base import FT, Structure

SUPPORT_Z = 120.0
TILT = np.pi / 4

# name -> (x, y, pitch)
SUPPORTS: dict[str, tuple[float, float, float]] = {
    "red_top": (-3 * FT, -1.5 * FT, TILT),
    "blue_top": (-3 * FT, 1.5 * FT, TILT),
    "red_bottom": (3 * FT, 0.5 * FT, -TILT),
    "blue_bottom": (3 * FT, -0.5 * FT, -TILT),
}


@dataclass(frozen=True)
class Case:
    red_top_cleared: bool = False
    red_bottom_cleared: bool = False
    blue_top_cleared: bool = False
    blue_bottom_cleared: bool = False
    red_top: Pin = field(default_factory=lambda: Pin(PinColor.RED))
    red_bottom: Pin = field(default_factory=lambda: Pin(PinColor.RED))
    blue_top: Pin = field(default_factory=lambda: Pin(PinColor.BLUE))
    blue_bottom: Pin = field(default_factory=lambda: Pin(PinColor.BLUE))

    def present(self) -> dict[str, Pin]:
        """Pins still on their supports, keyed by support name."""
        out = {}
        for name in ("red_top", "blue_top", "red_bottom", "blue_bottom"):
            if not getattr(self, f"{name}_cleared"):
                out[name] = getattr(self, name)
        return out

    def elements(self) -> list[Piece]:
        return list(self.present().values())

    def scoring(self) -> StructureScoring:
        return EMPTY_SCORING

    async def visualize(self, scene, structure: Structure) -> None:
        for name, pin in self.present().items():
            x, y, pitch = SUPPORTS[name]
            await scene.add_pin(pin.color, (x, y, SUPPORT_Z), (0.0, pitch, 0.0))


def random_case(
    rng: np.random.Generator,
    level: Level,
    available: ResourcePool | None = None,
) -> Case:
    """easy: 80% all four in place. Otherwise each pin cleared w.p. 0.5."""
    if level == Level.EASY and rng.random() < 0.8:
        return Case()
    return Case(*(bool(rng.random() < 0.5) for _ in range(4)))
