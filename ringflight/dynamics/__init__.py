"""Dynamics module: vector math, orientation and flight state.

Example:
    >>> from ringflight.dynamics import FlightState, orientation_forward
    >>>
    >>> state = FlightState.initial()
    >>> nose = orientation_forward(state.yaw, state.pitch, state.roll)
"""

from ringflight.dynamics.orientation import (
    orientation_forward,
    orientation_up,
)
from ringflight.dynamics.state import (
    ControlInput,
    FlightState,
)
from ringflight.dynamics.vector import (
    NORMALIZE_EPSILON,
    cross,
    dot,
    length,
    normalize,
    rotate_x,
    rotate_y,
    rotate_z,
    vec3,
)

__all__ = [
    # State
    "ControlInput",
    "FlightState",
    # Orientation
    "orientation_forward",
    "orientation_up",
    # Vector math
    "NORMALIZE_EPSILON",
    "vec3",
    "dot",
    "cross",
    "length",
    "normalize",
    "rotate_x",
    "rotate_y",
    "rotate_z",
]
