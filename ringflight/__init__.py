"""Ringflight - a turn-stepped flight simulator through a course of rings.

A craft with throttle/pitch/yaw/roll controls flies a field of scoring rings
under a simplified quadratic drag/lift model until its fuel runs out.

Example:
    >>> from ringflight import ControlInput, Simulator
    >>>
    >>> sim = Simulator.with_rings(ring_count=6)
    >>> while not sim.out_of_fuel:
    ...     sim.step(ControlInput(throttle=0.01), dt=0.1)
    >>> print(f"Score: {sim.score}")
"""

__version__ = "0.1.0"

# Ring course
from ringflight.course import (
    RING_SCORE,
    Ring,
    RingFieldConfig,
    evaluate_ring_passage,
    generate_rings,
)

# Text commands
from ringflight.controls import (
    ControlSensitivity,
    parse_command,
)

# State and orientation
from ringflight.dynamics import (
    ControlInput,
    FlightState,
    orientation_forward,
    orientation_up,
)

# Simulation
from ringflight.simulation import (
    AircraftConfig,
    FlightResult,
    SimConfig,
    Simulator,
)

__all__ = [
    "__version__",
    # Ring course
    "RING_SCORE",
    "Ring",
    "RingFieldConfig",
    "evaluate_ring_passage",
    "generate_rings",
    # Text commands
    "ControlSensitivity",
    "parse_command",
    # State and orientation
    "ControlInput",
    "FlightState",
    "orientation_forward",
    "orientation_up",
    # Simulation
    "AircraftConfig",
    "FlightResult",
    "SimConfig",
    "Simulator",
]
