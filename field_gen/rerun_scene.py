"""
Rerun logging for visualized scenarios.

RerunScene is a FieldScene that also logs every piece to the active Rerun
recording, one entity per piece: a Transform3D with the piece's placement
and a Cylinders3D / Boxes3D child with its shape.

Usage:
    rr.init("field-gen")
    rr.save("field.rrd")
    scene = RerunScene()
    asyncio.run(visualize_scenario(scenario, scene))
"""

from __future__ import annotations

import logging

import rerun as rr

from field_gen.pieces import PinColor
from field_gen.primitives import GeomType, Prim, euler_to_quat
from field_gen.scene import FieldScene, PlacedPiece, Vec3
from field_gen.scoring import ScenarioScoring

logger = logging.getLogger(__name__)


def _rgba255(rgba) -> list[int]:
    return [int(c * 255) for c in rgba]


class RerunScene(FieldScene):
    """Records pieces like FieldScene and mirrors them into Rerun."""

    def __init__(self, namespace: str = "field"):
        super().__init__()
        self.namespace = namespace

    async def add_pin(
        self, color: PinColor, position: Vec3, rotation: Vec3 = (0.0, 0.0, 0.0)
    ) -> PlacedPiece:
        piece = await super().add_pin(color, position, rotation)
        self._log_piece(f"{piece.color.value}_pin_{piece.instance_id}", piece.to_prim())
        return piece

    async def add_beam(self, position: Vec3, rotation: Vec3 = (0.0, 0.0, 0.0)) -> PlacedPiece:
        piece = await super().add_beam(position, rotation)
        self._log_piece(f"beam_{piece.instance_id}", piece.to_prim())
        return piece

    def _log_piece(self, name: str, prim: Prim):
        entity_path = f"{self.namespace}/{name}"
        w, x, y, z = euler_to_quat(*prim.euler)
        rr.log(
            entity_path,
            rr.Transform3D(translation=prim.pos, rotation=rr.Quaternion(xyzw=[x, y, z, w])),
            static=True,
        )

        if prim.geom_type == GeomType.CYLINDER:
            radius, half_height, _ = prim.size
            rr.log(
                f"{entity_path}/cylinder",
                rr.Cylinders3D(
                    lengths=[2 * half_height],
                    radii=[radius],
                    colors=[_rgba255(prim.rgba)],
                ),
                static=True,
            )
        else:
            rr.log(
                f"{entity_path}/box",
                rr.Boxes3D(half_sizes=[prim.size], colors=[_rgba255(prim.rgba)]),
                static=True,
            )


def log_scoring(scoring: ScenarioScoring, namespace: str = "scoring"):
    """Log scoring totals as static scalars, one entity per field."""
    totals = scoring.totals().as_dict()
    totals["starting_pins"] = scoring.starting_pins
    for key, value in totals.items():
        rr.log(f"{namespace}/{key}", rr.Scalars([value]), static=True)
    logger.info("Logged scoring to Rerun: %s", totals)
