"""Simulation module for the ring-course flight model.

Provides the step-driven simulation interface where the caller controls the
loop and the simulator maintains truth state.

Example:
    >>> from ringflight.simulation import Simulator
    >>> from ringflight.dynamics import ControlInput
    >>>
    >>> sim = Simulator.with_rings(ring_count=6)
    >>> while not sim.out_of_fuel:
    ...     sim.step(ControlInput(), dt=0.1)
"""

from ringflight.simulation.simulator import (
    AircraftConfig,
    FlightResult,
    SimConfig,
    Simulator,
    apply_control,
    clamp_to_ground,
    integrate,
)

__all__ = [
    "AircraftConfig",
    "FlightResult",
    "SimConfig",
    "Simulator",
    # Integrator phases
    "apply_control",
    "integrate",
    "clamp_to_ground",
]
