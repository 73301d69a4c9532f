"""
Configuration for field generation.

Piece inventory and generation knobs in one place.
Converts to a flat dict for logging alongside a run.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field

from field_gen.resources import ResourcePool


@dataclass
class PoolConfig:
    """Pieces in the box at the start of a match."""

    red: int = 10
    blue: int = 10
    orange: int = 16
    beams: int = 2

    def to_pool(self) -> ResourcePool:
        return ResourcePool(self.red, self.blue, self.orange, self.beams)


@dataclass
class GenerationConfig:
    """Scenario generator behaviour."""

    max_attempts: int = 100  # Draws per slot before giving up on it
    rotation_range: int = 360  # Structure yaw drawn from [0, rotation_range) degrees
    seed_range: int = 1_000_000_000  # Placement seeds drawn from [0, seed_range)


@dataclass
class FieldConfig:
    """Complete field generation configuration."""

    pool: PoolConfig = field(default_factory=PoolConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)

    def to_flat_dict(self) -> dict:
        """
        Flatten to one level, prefixing keys with their section name.

        Example: pool.red -> "pool/red"
        """
        result = {}
        for section_name, section in [
            ("pool", self.pool),
            ("generation", self.generation),
        ]:
            for key, value in asdict(section).items():
                result[f"{section_name}/{key}"] = value
        return result

    @classmethod
    def no_beams(cls) -> FieldConfig:
        """A box without beams. Beam structures can never be built."""
        return cls(pool=PoolConfig(beams=0))

    @classmethod
    def scarce(cls) -> FieldConfig:
        """A nearly empty box, for exercising the fallback paths."""
        return cls(
            pool=PoolConfig(red=1, blue=1, orange=2, beams=1),
            generation=GenerationConfig(max_attempts=10),
        )
