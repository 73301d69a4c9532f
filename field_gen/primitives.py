"""Primitive geometry for visualized field pieces.

Pins and beams are drawn as MuJoCo primitive shapes. A FieldScene records
piece placements in field millimetres; these helpers turn a placement into
a Prim in MuJoCo units (metres).

Coordinate convention (field frame):
    - Z-up, origin at the centre of the field, z=0 is the floor tile surface
    - Positions are in millimetres, rotations are (roll, pitch, yaw) radians
    - A pin's position is the centre of its base, a beam's position is the
      centre of its underside

Size convention (matches MuJoCo, metres):
    - BOX: (half_x, half_y, half_z)
    - CYLINDER: (radius, half_height, 0)  -- aligned along Z axis
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

import mujoco
import numpy as np

from field_gen.pieces import PinColor

MM = 0.001  # metres per millimetre


class GeomType(IntEnum):
    """MuJoCo geom types used for field pieces."""

    BOX = mujoco.mjtGeom.mjGEOM_BOX
    CYLINDER = mujoco.mjtGeom.mjGEOM_CYLINDER


@dataclass(frozen=True)
class Prim:
    """A single primitive shape in world coordinates.

    Attributes:
        geom_type: Shape type (box or cylinder)
        size: Size parameters in metres (see module doc)
        pos: Centre of the shape in metres (x, y, z)
        rgba: Color and opacity (r, g, b, a), values in [0, 1]
        euler: Rotation in radians (roll, pitch, yaw)
    """

    geom_type: GeomType
    size: tuple[float, float, float]
    pos: tuple[float, float, float]
    rgba: tuple[float, float, float, float]
    euler: tuple[float, float, float] = (0.0, 0.0, 0.0)


# ---------------------------------------------------------------------------
# Piece dimensions (millimetres) and colors
# ---------------------------------------------------------------------------

PIN_RADIUS = 25.0
PIN_HEIGHT = 60.0  # also the stacking pitch of one pin on another
BEAM_LENGTH = 200.0
BEAM_WIDTH = 25.0
BEAM_HEIGHT = 50.0

PIN_RGBA: dict[PinColor, tuple[float, float, float, float]] = {
    PinColor.RED: (0.80, 0.12, 0.12, 1.0),
    PinColor.BLUE: (0.12, 0.30, 0.80, 1.0),
    PinColor.ORANGE: (0.95, 0.55, 0.10, 1.0),
}
BEAM_RGBA = (0.55, 0.55, 0.55, 1.0)


def pin_prim(
    color: PinColor,
    position: tuple[float, float, float],
    rotation: tuple[float, float, float] = (0.0, 0.0, 0.0),
) -> Prim:
    """Cylinder for a pin whose base centre sits at *position*."""
    x, y, z = position
    return Prim(
        GeomType.CYLINDER,
        (PIN_RADIUS * MM, PIN_HEIGHT / 2 * MM, 0.0),
        (x * MM, y * MM, (z + PIN_HEIGHT / 2) * MM),
        PIN_RGBA[color],
        tuple(float(a) for a in rotation),
    )


def beam_prim(
    position: tuple[float, float, float],
    rotation: tuple[float, float, float] = (0.0, 0.0, 0.0),
) -> Prim:
    """Box for a beam; its long axis follows the yaw component of *rotation*."""
    x, y, z = position
    return Prim(
        GeomType.BOX,
        (BEAM_LENGTH / 2 * MM, BEAM_WIDTH / 2 * MM, BEAM_HEIGHT / 2 * MM),
        (x * MM, y * MM, (z + BEAM_HEIGHT / 2) * MM),
        BEAM_RGBA,
        tuple(float(a) for a in rotation),
    )


# ---------------------------------------------------------------------------
# Rotation utilities
# ---------------------------------------------------------------------------


def euler_to_quat(roll: float, pitch: float, yaw: float) -> np.ndarray:
    """Euler angles (XYZ extrinsic) to quaternion (w, x, y, z)."""
    cr, sr = np.cos(roll / 2), np.sin(roll / 2)
    cp, sp = np.cos(pitch / 2), np.sin(pitch / 2)
    cy, sy = np.cos(yaw / 2), np.sin(yaw / 2)
    return np.array(
        [
            cr * cp * cy + sr * sp * sy,
            sr * cp * cy - cr * sp * sy,
            cr * sp * cy + sr * cp * sy,
            cr * cp * sy - sr * sp * cy,
        ]
    )

