"""MuJoCo export of a visualized scenario.

A FieldScene only records placements. This module writes them into an
MjSpec so the field can be compiled, viewed or saved as MJCF.

Usage:
    scene = FieldScene()
    asyncio.run(visualize_scenario(scenario, scene))
    model = compile_scene(scene)
    write_mjcf(scene, "field.xml")
"""

from __future__ import annotations

from pathlib import Path

import mujoco

from field_gen.primitives import MM, GeomType, euler_to_quat
from field_gen.scene import FieldScene

FIELD_HALF_SIZE = 1830 * MM  # 12ft x 6ft field, half extents rounded up
FLOOR_RGBA = [0.35, 0.35, 0.38, 1.0]

_MJ_GEOM = {
    GeomType.BOX: mujoco.mjtGeom.mjGEOM_BOX,
    GeomType.CYLINDER: mujoco.mjtGeom.mjGEOM_CYLINDER,
}


def prepare_spec(scene: FieldScene, spec: mujoco.MjSpec | None = None) -> mujoco.MjSpec:
    """Add every recorded piece of *scene* to an MjSpec.

    Creates one body per geom, named ``<color>_pin_<n>`` or ``beam_<n>``
    after the piece's instance id. A floor plane is added when a fresh spec
    is created.
    """
    if spec is None:
        spec = mujoco.MjSpec()
        floor = spec.worldbody.add_geom()
        floor.name = "floor"
        floor.type = mujoco.mjtGeom.mjGEOM_PLANE
        floor.size = [FIELD_HALF_SIZE, FIELD_HALF_SIZE / 2, 0.01]
        floor.rgba = FLOOR_RGBA

    for piece in scene.pieces:
        prim = piece.to_prim()
        name = f"beam_{piece.instance_id}" if piece.kind == "beam" else (
            f"{piece.color.value}_pin_{piece.instance_id}"
        )
        body = spec.worldbody.add_body()
        body.name = name
        body.pos = list(prim.pos)
        body.quat = list(euler_to_quat(*prim.euler))
        geom = body.add_geom()
        geom.name = name
        geom.type = _MJ_GEOM[prim.geom_type]
        geom.size = list(prim.size)
        geom.rgba = list(prim.rgba)

    return spec


def compile_scene(scene: FieldScene) -> mujoco.MjModel:
    return prepare_spec(scene).compile()


def write_mjcf(scene: FieldScene, path: str | Path) -> Path:
    """Compile *scene* and save it as an MJCF file. Returns the path."""
    spec = prepare_spec(scene)
    spec.compile()
    path = Path(path)
    path.write_text(spec.to_xml())
    return path
