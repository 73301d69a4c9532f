"""Resource pool: the finite inventory of pins and beams for one field.

A match is set up from a fixed box of pieces: 10 red pins, 10 blue pins,
16 orange pins and 2 beams. Every structure placed on the field takes its
pieces out of that box, so a generation run draws them down slot by slot and
never puts anything back.

The tracker is owned by exactly one ScenarioGenerator run. Callers check
affordability first (can_afford / can_afford_beams) and only then commit
with use().
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass

from field_gen.pieces import PIN_COLORS, Pin, PinColor, count_colors


class InsufficientResourcesError(RuntimeError):
    """use() was asked to take more pieces than the pool holds."""


@dataclass
class ResourcePool:
    """Piece counts. All four counters stay >= 0."""

    red: int = 10
    blue: int = 10
    orange: int = 16
    beams: int = 2

    def count(self, color: PinColor) -> int:
        return getattr(self, color.value)

    @property
    def total_pins(self) -> int:
        return self.red + self.blue + self.orange

    def copy(self) -> ResourcePool:
        return dataclasses.replace(self)


class ResourceTracker:
    """Depleting inventory shared by every slot of one generation run."""

    def __init__(self, initial: ResourcePool | None = None):
        pool = initial.copy() if initial is not None else ResourcePool()
        for f in dataclasses.fields(pool):
            if getattr(pool, f.name) < 0:
                raise ValueError(f"Initial {f.name} count must be >= 0")
        self._available = pool

    def get_available(self) -> ResourcePool:
        """Snapshot of the current counts (a copy, safe to mutate)."""
        return self._available.copy()

    def can_afford(self, pins: Iterable[Pin]) -> bool:
        """True iff every color in *pins* is covered by the pool."""
        return self.can_afford_counts(count_colors(pins))

    def can_afford_counts(self, needed: dict[PinColor, int]) -> bool:
        return all(needed.get(c, 0) <= self._available.count(c) for c in PIN_COLORS)

    def can_afford_beams(self, count: int) -> bool:
        return count <= self._available.beams

    def use(self, pins: Iterable[Pin], beams: int = 0) -> None:
        """Take *pins* and *beams* out of the pool.

        All-or-nothing: if any counter would go negative, nothing is
        deducted and InsufficientResourcesError is raised.
        """
        if beams < 0:
            raise ValueError("beams must be >= 0")
        needed = count_colors(pins)
        if not self.can_afford_counts(needed) or not self.can_afford_beams(beams):
            wanted = ", ".join(f"{c.value}={n}" for c, n in needed.items())
            raise InsufficientResourcesError(
                f"Cannot take pins ({wanted}) and beams={beams} from {self._available}"
            )
        for color, n in needed.items():
            setattr(self._available, color.value, self._available.count(color) - n)
        self._available.beams -= beams

    def get_available_colors(self) -> list[PinColor]:
        """Colors with at least one pin left, in red/blue/orange order."""
        return [c for c in PIN_COLORS if self._available.count(c) > 0]

    def total_pins_available(self) -> int:
        return self._available.total_pins
