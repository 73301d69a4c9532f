"""Scenario: every structure produced by one generation run.

Slots are kept in the order they were generated. A named slot is None when
the generator could not build anything affordable for it.

Usage:
    scenario = generate_scenario(Level.HARD, seed=7)
    print(describe_scenario(scenario, seed=7))
    totals = scenario.calculate_scoring().totals()
    await visualize_scenario(scenario, FieldScene())
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from field_gen.pieces import PIN_COLORS, Beam, Pin, count_colors
from field_gen.scene import Scene
from field_gen.scoring import ScenarioScoring
from field_gen.structures.base import Structure


@dataclass
class Scenario:
    """All structures on the field, in slot order.

    Attributes:
        standoff_goal: Slot 1
        beam_on_floor: Slot 2
        floor_goal: Slot 3
        others: Slots 4-8 (square goals, triangle goals, stacks on floor) in
            the shuffled order they were generated
        starting_pin: Slot 9
        remaining_pins: Slot 10, always built
    """

    standoff_goal: Structure | None = None
    beam_on_floor: Structure | None = None
    floor_goal: Structure | None = None
    others: list[Structure] = field(default_factory=list)
    starting_pin: Structure | None = None
    remaining_pins: Structure | None = None

    @property
    def structures(self) -> list[Structure]:
        """The filled slots, in slot order."""
        slots = [
            self.standoff_goal,
            self.beam_on_floor,
            self.floor_goal,
            *self.others,
            self.starting_pin,
            self.remaining_pins,
        ]
        return [s for s in slots if s is not None]

    def pins(self) -> list[Pin]:
        return [p for s in self.structures for p in s.pins()]

    def beams(self) -> list[Beam]:
        return [b for s in self.structures for b in s.beams()]

    def calculate_scoring(self) -> ScenarioScoring:
        starting = len(self.starting_pin.elements()) if self.starting_pin is not None else 0
        return ScenarioScoring(
            structures=tuple(s.scoring() for s in self.structures),
            starting_pins=starting,
        )


async def visualize_scenario(scenario: Scenario, scene: Scene) -> None:
    """Visualize every structure, one at a time, in slot order."""
    for structure in scenario.structures:
        await structure.visualize(scene)


# ---------------------------------------------------------------------------
# Text descriptions
# ---------------------------------------------------------------------------


def scenario_id(seed: int) -> str:
    """Short hex identifier for a scenario seed (6 chars)."""
    return f"{seed & 0xFFFFFF:06x}"


def _column_str(pins) -> str:
    return "[" + " ".join(p.color.value[0].upper() for p in pins) + "]"


def describe_structure(structure: Structure) -> str:
    """One-line description of a structure.

    Pins are listed bottom-to-top by initial (R/B/O), one bracket per
    column-bearing field of the case.
    """
    case = structure.case
    kind = getattr(case, "kind", None)
    kind_str = f" {kind.value}" if kind is not None else ""

    columns = []
    for name, value in vars(case).items():
        if isinstance(value, tuple) and value and all(isinstance(p, Pin) for p in value):
            columns.append(f"{name}={_column_str(value)}")
        elif name == "stacks" and value:
            columns.append("stacks=" + ",".join(_column_str(s) for s in value))

    n_beams = len(structure.beams())
    beam_str = f" +{n_beams} beam" if n_beams else ""
    col_str = f"  {' '.join(columns)}" if columns else ""
    return (
        f"{structure.family}{kind_str} rot {structure.rotation:.0f}°"
        f"{beam_str}{col_str}"
    )


def describe_scenario(scenario: Scenario, seed: int | None = None) -> str:
    """Multi-line textual description of a whole scenario.

    Example output:
        Scenario #00002a (seed=42)  9 structures, 31 pins, 2 beams
          [0] standoff_goal beam_with_columns rot 118° +1 beam  bottom=[R B] top_left=[O]
          [1] beam_on_floor beam_only rot 45° +1 beam
          ...
          pins by color: red=8 blue=9 orange=14
    """
    structures = scenario.structures
    pins = scenario.pins()

    summary = f"{len(structures)} structures, {len(pins)} pins, {len(scenario.beams())} beams"
    if seed is not None:
        header = f"Scenario #{scenario_id(seed)} (seed={seed})  {summary}"
    else:
        header = f"Scenario  {summary}"
    lines = [header]

    for i, s in enumerate(structures):
        lines.append(f"  [{i}] {describe_structure(s)}")

    counts = count_colors(pins)
    lines.append("  pins by color: " + " ".join(f"{c.value}={counts[c]}" for c in PIN_COLORS))
    return "\n".join(lines)


def format_scoring(scoring: ScenarioScoring) -> str:
    """Scoring totals as an aligned two-column table."""
    totals = scoring.totals().as_dict()
    totals["starting_pins"] = scoring.starting_pins
    width = max(len(k) for k in totals)
    return "\n".join(f"  {k:<{width}}  {v:>3}" for k, v in totals.items())


def scoring_array(scoring: ScenarioScoring) -> np.ndarray:
    """Per-structure scoring as an (n_structures, 6) int array."""
    rows = [list(s.as_dict().values()) for s in scoring.structures]
    return np.array(rows, dtype=np.int64).reshape(len(rows), 6)
