"""Game pieces: pins and beams.

Every physical piece on the field is its own object: two red pins are two
distinct Pin instances, even though they look the same. Pieces compare by
identity so that a column can hold the "same-looking" pin twice.

Contact flags are written by whoever tracks robot interaction during a match.
Generation never touches them; scoring only reads them.

Usage:
    pin = Pin(PinColor.RED)
    pin.robot1_contacted = True
    beam = Beam()
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum


class PinColor(Enum):
    """The three pin colors. Declaration order is the canonical color order."""

    RED = "red"
    BLUE = "blue"
    ORANGE = "orange"


# Canonical iteration order (red, blue, orange)
PIN_COLORS: tuple[PinColor, ...] = tuple(PinColor)


@dataclass(eq=False)
class Piece:
    """Base for anything a robot can touch."""

    robot1_contacted: bool = field(default=False, kw_only=True)
    robot2_contacted: bool = field(default=False, kw_only=True)

    @property
    def contacted(self) -> bool:
        return self.robot1_contacted or self.robot2_contacted


@dataclass(eq=False)
class Pin(Piece):
    """A colored scoring piece. The color is fixed at creation."""

    color: PinColor

    def __post_init__(self):
        # Accept "red" as well as PinColor.RED
        object.__setattr__(self, "color", PinColor(self.color))

    def __setattr__(self, name, value):
        if name == "color" and "color" in self.__dict__:
            raise AttributeError("Pin color is immutable")
        super().__setattr__(name, value)


@dataclass(eq=False)
class Beam(Piece):
    """An uncolored structural piece. Pins stack under and on top of it."""


Column = tuple[Pin, ...]


def pins_of(pieces: Iterable[Piece]) -> list[Pin]:
    """The pins among *pieces*, in order."""
    return [p for p in pieces if isinstance(p, Pin)]


def beams_of(pieces: Iterable[Piece]) -> list[Beam]:
    """The beams among *pieces*, in order."""
    return [p for p in pieces if isinstance(p, Beam)]


def count_colors(pins: Iterable[Pin]) -> dict[PinColor, int]:
    """Pin count per color. Every color is present in the result."""
    counts = {c: 0 for c in PIN_COLORS}
    for pin in pins:
        counts[pin.color] += 1
    return counts


def make_column(colors: Iterable[PinColor | str]) -> Column:
    """Build a bottom-to-top column of fresh pins from a color sequence."""
    return tuple(Pin(PinColor(c)) for c in colors)
