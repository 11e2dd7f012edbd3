"""Text heads-up display for the interactive session."""

from collections.abc import Sequence

from ringflight.course.rings import Ring, remaining_rings
from ringflight.dynamics.state import FlightState
from ringflight.typecheck import beartype

# Altitude bands for the phase label [m]
TAXI_ALTITUDE: float = 2.0
CLIMB_ALTITUDE: float = 15.0


@beartype
def flight_phase(altitude: float) -> str:
    """Coarse phase label from altitude: Taxi, Climb or Cruise."""
    if altitude < TAXI_ALTITUDE:
        return "Taxi"
    if altitude < CLIMB_ALTITUDE:
        return "Climb"
    return "Cruise"


@beartype
def format_hud(state: FlightState, rings: Sequence[Ring], tick: int, dt: float) -> str:
    """Render the HUD block shown before each command prompt."""
    x, y, z = state.position
    yaw, pitch, roll = state.attitude_deg
    lines = [
        f"=== Tick {tick} ({dt:.1f}s) ===",
        f"Position (x,y,z): {x:.2f}, {y:.2f}, {z:.2f} m",
        f"Speed: {state.speed:.2f} m/s  (forward={state.forward_speed:.2f})",
        f"Yaw/Pitch/Roll (deg): {yaw:.2f} / {pitch:.2f} / {roll:.2f}",
        f"Throttle: {state.throttle * 100.0:.2f}%  Fuel: {state.fuel:.2f} u",
        f"Score: {state.score}  Rings left: {remaining_rings(rings)}  [{flight_phase(state.altitude)}]",
    ]
    return "\n".join(lines)


@beartype
def format_summary(state: FlightState, rings: Sequence[Ring]) -> str:
    """End-of-flight line."""
    passed = len(rings) - remaining_rings(rings)
    return f"Flight over! Final score: {state.score} ({passed}/{len(rings)} rings, {state.time:.1f} s)"
