"""Craft orientation from yaw/pitch/roll angles.

The body axes are found by rotating the reference axes (forward = +Z,
up = +Y) through roll (about Z), then pitch (about X), then yaw (about Y).
Rotations do not commute; this order is what gives the craft its handling
and must not be rearranged.

Example:
    >>> from ringflight.dynamics.orientation import orientation_forward
    >>> import numpy as np
    >>>
    >>> orientation_forward(yaw=np.pi / 2, pitch=0.0, roll=0.0)  # -> [1, 0, 0]
"""

import numpy as np
from numba import njit
from numpy.typing import NDArray

from ringflight.dynamics.vector import _normalize, _rotate_x, _rotate_y, _rotate_z
from ringflight.typecheck import beartype


@njit(cache=True)
def _orient(
    x: float, y: float, z: float,
    yaw: float, pitch: float, roll: float,
) -> tuple[float, float, float]:
    """Rotate a body-frame axis into the world frame (roll -> pitch -> yaw)."""
    x, y, z = _rotate_z(x, y, z, roll)
    x, y, z = _rotate_x(x, y, z, pitch)
    x, y, z = _rotate_y(x, y, z, yaw)
    return _normalize(x, y, z)


@njit(cache=True)
def _forward(yaw: float, pitch: float, roll: float) -> tuple[float, float, float]:
    return _orient(0.0, 0.0, 1.0, yaw, pitch, roll)


@njit(cache=True)
def _up(yaw: float, pitch: float, roll: float) -> tuple[float, float, float]:
    return _orient(0.0, 1.0, 0.0, yaw, pitch, roll)


@beartype
def orientation_forward(yaw: float, pitch: float, roll: float) -> NDArray[np.float64]:
    """Unit vector along the nose of the craft.

    Args:
        yaw: Heading angle [rad], positive turns the nose toward +X
        pitch: Pitch angle [rad]
        roll: Bank angle [rad]

    Returns:
        Forward unit vector in the world frame
    """
    return np.array(_forward(yaw, pitch, roll))


@beartype
def orientation_up(yaw: float, pitch: float, roll: float) -> NDArray[np.float64]:
    """Unit vector out of the top of the craft (the lift direction)."""
    return np.array(_up(yaw, pitch, roll))
