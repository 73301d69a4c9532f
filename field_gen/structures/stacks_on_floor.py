"""Stacks on floor: free-standing stacks lined up across the near side.

A single kind: a (possibly empty) row of stacks, each a non-empty column.

Unlike the other families, the generator here looks at what is still in
stock: stacks are dealt from a shuffled deck of the remaining pins, so a
drawn case is always affordable against the snapshot it was drawn from.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from field_gen.pieces import PIN_COLORS, Column, Pin, PinColor, Piece
from field_gen.resources import ResourcePool
from field_gen.sampling import Level, sample_count
from field_gen.scoring import StructureScoring, score_columns
from field_gen.structures.base import FLOOR_Z, FT, InvalidCaseError, Structure, as_column, place_column

ROW_Y = 600.0
STACK_SPACING = FT
LOOKAHEAD = 10  # how far down the deck to search for a fresh color


@dataclass(frozen=True)
class Case:
    stacks: tuple[Column, ...] = ()

    def __post_init__(self):
        stacks = tuple(as_column(s) for s in self.stacks)
        if any(len(s) == 0 for s in stacks):
            raise InvalidCaseError("Every stack must have at least 1 pin")
        object.__setattr__(self, "stacks", stacks)

    def elements(self) -> list[Piece]:
        return [pin for stack in self.stacks for pin in stack]

    def scoring(self) -> StructureScoring:
        return score_columns((stack, None) for stack in self.stacks)

    async def visualize(self, scene, structure: Structure) -> None:
        # Centre the row on x=0
        start_x = -(len(self.stacks) - 1) * STACK_SPACING / 2
        for i, stack in enumerate(self.stacks):
            await place_column(scene, stack, start_x + i * STACK_SPACING, ROW_Y, FLOOR_Z)


def _deal_stack(deck: list[PinColor], start: int, size: int) -> tuple[list[PinColor], int]:
    """Deal up to *size* pins from *deck* beginning at *start*.

    When the next card repeats a color already in the stack, the first
    fresh color within LOOKAHEAD cards is swapped forward.
    Returns (colors, next_index).
    """
    colors: list[PinColor] = []
    i = start
    while len(colors) < size and i < len(deck):
        if deck[i] in colors:
            for k in range(i + 1, min(i + LOOKAHEAD, len(deck))):
                if deck[k] not in colors:
                    deck[i], deck[k] = deck[k], deck[i]
                    break
        colors.append(deck[i])
        i += 1
    return colors, i


def random_case(
    rng: np.random.Generator,
    level: Level,
    available: ResourcePool | None = None,
) -> Case:
    """easy: 0-1 stacks. medium / hard: 0-3 stacks. Each stack 2-3 pins.

    The stack count shrinks when the remaining pins cannot cover it.
    """
    available = available if available is not None else ResourcePool()

    max_stacks = 1 if level == Level.EASY else 3
    n_stacks = sample_count(rng, 0, max_stacks)
    sizes = [sample_count(rng, 2, 3) for _ in range(n_stacks)]

    if sum(sizes) > available.total_pins:
        n_stacks = min(n_stacks, available.total_pins // 2)

    deck = [c for c in PIN_COLORS for _ in range(available.count(c))]
    deck = [deck[i] for i in rng.permutation(len(deck))]

    stacks: list[Column] = []
    index = 0
    for size in sizes[:n_stacks]:
        colors, index = _deal_stack(deck, index, size)
        if len(colors) >= 2:
            stacks.append(tuple(Pin(c) for c in colors))
    return Case(tuple(stacks))
