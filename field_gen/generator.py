"""Scenario generator: fills the ten field slots from one shared inventory.

Slot order:
    1. standoff goal        (needs a beam)
    2. beam on floor        (needs a beam)
    3. floor goal           (falls back to a single small column)
    4-8. blue square, red square, red triangle, blue triangle, stacks on
         floor, in a fresh random order every run
    9. starting pins
    10. remaining pins      (whatever orange is left)

Each slot draws random cases until one is affordable, then commits its
pieces to the tracker. Drawing stops after ``max_attempts``; the slot is then
left empty and a warning is logged. The run never fails because pieces ran
out.

Usage:
    gen = ScenarioGenerator(Level.MEDIUM, seed=1234)
    scenario = gen.generate()
    print(gen.tracker.get_available())
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import numpy as np

from field_gen import structures
from field_gen.config import FieldConfig
from field_gen.pieces import Pin
from field_gen.resources import ResourceTracker
from field_gen.sampling import Level
from field_gen.scenario import Scenario, describe_structure
from field_gen.structures import floor_goal, remaining_pins
from field_gen.structures.base import InvalidCaseError, Structure

log = logging.getLogger(__name__)

BEAM_FAMILIES = ("standoff_goal", "beam_on_floor")
SHUFFLED_FAMILIES = (
    "blue_square_goal",
    "red_square_goal",
    "red_triangle_goal",
    "blue_triangle_goal",
    "stacks_on_floor",
)
FALLBACK_PIN_COUNTS = (3, 2, 1)


class ScenarioGenerator:
    """One generation run. Owns the tracker and the random generator.

    Args:
        level: Difficulty tier (Level or "easy" / "medium" / "hard")
        rng: Generator to draw from. Takes priority over *seed*.
        seed: Seed for a fresh generator when *rng* is not given
        config: Inventory and generation knobs
    """

    def __init__(
        self,
        level: Level | str,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
        config: FieldConfig | None = None,
    ):
        self.level = Level(level)
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.config = config if config is not None else FieldConfig()
        self.tracker = ResourceTracker(self.config.pool.to_pool())

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------

    def generate(self) -> Scenario:
        """Run all ten slots and return the finished scenario."""
        scenario = Scenario()
        scenario.standoff_goal = self._generate_slot("standoff_goal")
        scenario.beam_on_floor = self._generate_slot("beam_on_floor")
        scenario.floor_goal = self._generate_floor_goal()

        order = self.rng.permutation(len(SHUFFLED_FAMILIES))
        for i in order:
            structure = self._generate_slot(SHUFFLED_FAMILIES[i])
            if structure is not None:
                scenario.others.append(structure)

        scenario.starting_pin = self._generate_slot("starting_pin")
        scenario.remaining_pins = self._generate_remaining_pins()

        log.info("Scenario complete (%s), left over: %s", self.level.value, self.tracker.get_available())
        return scenario

    def _generate_slot(self, family_name: str) -> Structure | None:
        """Draw cases for *family_name* until one fits the inventory."""
        if family_name in BEAM_FAMILIES and not self.tracker.can_afford_beams(1):
            log.warning("Skipping %s: no beams left", family_name)
            return None

        random_case = structures.get(family_name).random_case
        structure = self._attempt(
            family_name,
            lambda: random_case(self.rng, self.level, self.tracker.get_available()),
        )
        if structure is None:
            log.warning(
                "No affordable %s after %d attempts, slot left empty",
                family_name,
                self.config.generation.max_attempts,
            )
        return structure

    def _generate_floor_goal(self) -> Structure | None:
        structure = self._generate_slot("floor_goal")
        if structure is not None:
            return structure

        colors = self.tracker.get_available_colors()
        for pin_count in FALLBACK_PIN_COUNTS:
            if pin_count > len(colors):
                continue
            case = floor_goal.simple_case(self.rng, colors, pin_count)
            structure = self._commit("floor_goal", case)
            if structure is not None:
                log.info("Using fallback floor goal with %d pin(s)", pin_count)
                return structure

        log.warning("No pins left for a fallback floor goal, slot left empty")
        return None

    def _generate_remaining_pins(self) -> Structure:
        """Every orange pin still in the box. Always succeeds."""
        case = remaining_pins.Case.of_count(self.tracker.get_available().orange)
        structure = self._commit("remaining_pins", case)
        assert structure is not None, "remaining pins always fit the inventory"
        return structure

    # ------------------------------------------------------------------
    # Attempt loop
    # ------------------------------------------------------------------

    def _attempt(self, family_name: str, draw: Callable) -> Structure | None:
        for attempt in range(self.config.generation.max_attempts):
            try:
                case = draw()
            except InvalidCaseError as e:
                log.debug("%s attempt %d rejected: %s", family_name, attempt, e)
                continue
            structure = self._commit(family_name, case)
            if structure is not None:
                return structure
        return None

    def _commit(self, family_name: str, case) -> Structure | None:
        """Wrap *case* in a Structure and take its pieces, if affordable."""
        structure = Structure(
            family=family_name,
            case=case,
            rotation=float(self.rng.integers(0, self.config.generation.rotation_range)),
            seed=int(self.rng.integers(0, self.config.generation.seed_range)),
        )
        pins: list[Pin] = structure.pins()
        n_beams = len(structure.beams())
        if not (self.tracker.can_afford(pins) and self.tracker.can_afford_beams(n_beams)):
            return None

        self.tracker.use(pins, n_beams)
        log.info("Generated %s", describe_structure(structure))
        return structure


def generate_scenario(
    level: Level | str,
    seed: int | None = None,
    config: FieldConfig | None = None,
) -> Scenario:
    """Generate one scenario with a fresh generator seeded by *seed*."""
    return ScenarioGenerator(level, seed=seed, config=config).generate()
