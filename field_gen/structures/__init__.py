"""Structure family registry.

Every family is a module exposing a frozen ``Case`` dataclass and a
``random_case(rng, level, available)`` generator. The square and triangle
goals come in a red and a blue flavour, registered as separate families
with their goal color bound.

Usage:
    from field_gen import structures
    family = structures.get("floor_goal")
    case = family.random_case(rng, Level.HARD, tracker.get_available())
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import partial

from field_gen.pieces import PinColor
from field_gen.structures import (
    beam_on_floor,
    floor_goal,
    remaining_pins,
    square_goal,
    stacks_on_floor,
    standoff_goal,
    starting_pin,
    triangle_goal,
)
from field_gen.structures.base import InvalidCaseError, Structure


@dataclass(frozen=True)
class Family:
    name: str
    random_case: Callable | None  # None for families built from leftovers only


FAMILIES: dict[str, Family] = {
    f.name: f
    for f in (
        Family("standoff_goal", standoff_goal.random_case),
        Family("beam_on_floor", beam_on_floor.random_case),
        Family("floor_goal", floor_goal.random_case),
        Family(
            "blue_square_goal", partial(square_goal.random_case, goal_color=PinColor.BLUE)
        ),
        Family("red_square_goal", partial(square_goal.random_case, goal_color=PinColor.RED)),
        Family(
            "red_triangle_goal", partial(triangle_goal.random_case, goal_color=PinColor.RED)
        ),
        Family(
            "blue_triangle_goal",
            partial(triangle_goal.random_case, goal_color=PinColor.BLUE),
        ),
        Family("stacks_on_floor", stacks_on_floor.random_case),
        Family("starting_pin", starting_pin.random_case),
        Family("remaining_pins", None),
    )
}


def get(name: str) -> Family:
    """Look up a family by name. Raises KeyError listing the valid names."""
    try:
        return FAMILIES[name]
    except KeyError:
        raise KeyError(f"Unknown structure family {name!r}. Available: {list(FAMILIES)}") from None


def list_families() -> list[str]:
    return list(FAMILIES)


__all__ = [
    "FAMILIES",
    "Family",
    "InvalidCaseError",
    "Structure",
    "beam_on_floor",
    "floor_goal",
    "get",
    "list_families",
    "remaining_pins",
    "square_goal",
    "stacks_on_floor",
    "standoff_goal",
    "starting_pin",
    "triangle_goal",
]
