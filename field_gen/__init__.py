"""Procedural field scenarios for the VIQRC Mix & Match game.

Generates a full field of pins and beams from a finite inventory, at one of
three difficulty tiers, and scores every structure on it. Each structure
family (standoff goal, floor goal, square goals, ...) is a frozen case type
plus a random generator; the ScenarioGenerator fills the field slot by slot.

Usage:
    from field_gen import FieldScene, Level, generate_scenario, visualize_scenario

    scenario = generate_scenario(Level.HARD, seed=42)
    totals = scenario.calculate_scoring().totals()
    scene = FieldScene()
    asyncio.run(visualize_scenario(scenario, scene))
"""

from field_gen.config import FieldConfig
from field_gen.generator import ScenarioGenerator, generate_scenario
from field_gen.pieces import Beam, Pin, PinColor
from field_gen.resources import InsufficientResourcesError, ResourcePool, ResourceTracker
from field_gen.sampling import Level
from field_gen.scenario import Scenario, describe_scenario, scenario_id, visualize_scenario
from field_gen.scene import FieldScene, Scene
from field_gen.scoring import ScenarioScoring, StructureScoring
from field_gen.structures.base import InvalidCaseError, Structure

__all__ = [
    "Beam",
    "FieldConfig",
    "FieldScene",
    "InsufficientResourcesError",
    "InvalidCaseError",
    "Level",
    "Pin",
    "PinColor",
    "ResourcePool",
    "ResourceTracker",
    "Scenario",
    "ScenarioGenerator",
    "ScenarioScoring",
    "Scene",
    "Structure",
    "StructureScoring",
    "describe_scenario",
    "generate_scenario",
    "scenario_id",
    "visualize_scenario",
]
