"""Scoring: pure predicates over pin columns.

A *column* is a bottom-to-top tuple of pins. A column becomes a *stack*
(scoring-eligible) when nobody has touched it and it is tall enough:

    - on its own, at least 2 pins
    - resting on a beam, a single pin is enough (the beam is the base)

A beam also counts as one color slot when judging color diversity:

    column            beam    colors   two-color   three-color
    [red, blue]       no      2        yes         no
    [red, red]        yes     1 + 1    yes         no
    [red, blue]       yes     2 + 1    no          yes
    [red, blue, or]   no      3        no          yes

Every structure family builds its StructureScoring out of these functions,
so contact can only ever remove points: each count is gated by is_stack(),
and is_stack() is false as soon as any piece involved is contacted.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import astuple, dataclass, field, fields

from field_gen.pieces import Beam, Pin, PinColor, Piece


@dataclass(frozen=True)
class StructureScoring:
    """Scoring breakdown of one structure. All fields are >= 0."""

    connected_pins: int = 0
    connected_beams: int = 0
    two_color_stacks: int = 0
    three_color_stacks: int = 0
    matching_goals: int = 0
    stacks_placed_on_standoff_goal: int = 0

    def __add__(self, other: StructureScoring) -> StructureScoring:
        return StructureScoring(*(a + b for a, b in zip(astuple(self), astuple(other))))

    def as_dict(self) -> dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


EMPTY_SCORING = StructureScoring()


@dataclass(frozen=True)
class ScenarioScoring:
    """Per-structure scoring for a whole scenario, in slot order."""

    structures: tuple[StructureScoring, ...] = field(default_factory=tuple)
    starting_pins: int = 0

    def totals(self) -> StructureScoring:
        total = EMPTY_SCORING
        for s in self.structures:
            total = total + s
        return total


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def is_not_touching(piece: Piece) -> bool:
    return not piece.robot1_contacted and not piece.robot2_contacted


def is_stack(column: Sequence[Pin], beam: Beam | None = None) -> bool:
    """Untouched column of at least 2 pins, or at least 1 pin on an untouched beam."""
    min_len = 1 if beam is not None else 2
    return (
        len(column) >= min_len
        and all(is_not_touching(p) for p in column)
        and (beam is None or is_not_touching(beam))
    )


def _color_slots(column: Sequence[Pin], beam: Beam | None) -> int:
    """Distinct pin colors, plus one for the beam."""
    return len({p.color for p in column}) + (1 if beam is not None else 0)


def is_two_color_stack(column: Sequence[Pin], beam: Beam | None = None) -> bool:
    return is_stack(column, beam) and _color_slots(column, beam) == 2


def is_three_color_stack(column: Sequence[Pin], beam: Beam | None = None) -> bool:
    return is_stack(column, beam) and _color_slots(column, beam) >= 3


def is_stack_matching_goal(column: Sequence[Pin], color: PinColor | str) -> bool:
    """A stack whose bottom pin (index 0) is the goal's color."""
    return is_stack(column) and column[0].color == PinColor(color)


# ---------------------------------------------------------------------------
# Aggregation helpers
# ---------------------------------------------------------------------------


def score_columns(
    columns: Iterable[tuple[Sequence[Pin], Beam | None]],
    goal_color: PinColor | None = None,
    matchable: Iterable[bool] | None = None,
) -> StructureScoring:
    """Sum the per-column scoring over (column, supporting_beam) pairs.

    Args:
        columns: Each column with the beam it rests on (None if it rests on
            the floor or a goal).
        goal_color: When set, columns whose bottom pin matches count toward
            matching_goals.
        matchable: Optional per-column flags; a False entry excludes that
            column from matching_goals (e.g. a floor-goal column outside the
            scoring area).
    """
    columns = list(columns)
    flags = list(matchable) if matchable is not None else [True] * len(columns)

    connected = two = three = matching = 0
    for (column, beam), can_match in zip(columns, flags):
        if not is_stack(column, beam):
            continue
        connected += len(column)
        two += is_two_color_stack(column, beam)
        three += is_three_color_stack(column, beam)
        if goal_color is not None and can_match:
            matching += is_stack_matching_goal(column, goal_color)

    return StructureScoring(
        connected_pins=connected,
        two_color_stacks=two,
        three_color_stacks=three,
        matching_goals=matching,
    )


def count_stacks(columns: Iterable[tuple[Sequence[Pin], Beam | None]]) -> int:
    return sum(1 for column, beam in columns if is_stack(column, beam))
