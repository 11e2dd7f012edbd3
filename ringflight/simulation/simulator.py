"""Step-driven flight simulation through a ring course.

The caller owns the loop and the simulator owns the truth state:

Architecture:
    - sim.get_state() -> copy of the current flight state
    - sim.get_rings() -> copies of the ring course
    - sim.step(control, dt) -> propagate one tick

Each tick runs four phases in a fixed order, each taking the state by value
and returning the next one:

    1. apply_control     - add control deltas, clamp throttle/pitch/roll
    2. integrate         - forces, banked-turn yaw, Euler step, fuel burn
    3. ring passage      - score rings the craft is inside
    4. clamp_to_ground   - keep the craft above y = 0, bounce downward speed

The order is observable (a ring below ground is checked before the clamp)
and is part of the model.

Example:
    >>> from ringflight.simulation import Simulator
    >>> from ringflight.dynamics import ControlInput
    >>>
    >>> sim = Simulator.with_rings(6)
    >>> while not sim.out_of_fuel:
    ...     sim.step(ControlInput(pitch=0.01), dt=0.1)
"""

import logging
from dataclasses import dataclass, field

import numpy as np
from numba import njit
from numpy.typing import NDArray

from ringflight.course.rings import Ring, RingFieldConfig, evaluate_ring_passage, generate_rings
from ringflight.dynamics.orientation import _forward, _up
from ringflight.dynamics.state import ControlInput, FlightState
from ringflight.typecheck import beartype

logger = logging.getLogger(__name__)

# =============================================================================
# Configuration
# =============================================================================


@beartype
@dataclass
class AircraftConfig:
    """Airframe and engine constants for the simplified flight model.

    Attributes:
        mass: Vehicle mass [kg]
        thrust_power: Thrust at full throttle [N]
        drag_coefficient: Quadratic drag factor, F = k * v^2 [kg/m]
        lift_coefficient: Lift factor along body up, F = k * v^2 [kg/m]
        gravity: Gravitational acceleration [m/s^2]
        fuel_burn_per_sec: Fuel use at full throttle [units/s]
        roll_yaw_coupling: Yaw rate per radian of bank [1/s]
        pitch_limit_deg: Symmetric pitch limit [deg]
        roll_limit_deg: Symmetric roll limit [deg]
        ground_restitution: Fraction of downward speed returned on ground contact
    """
    mass: float = 750.0
    thrust_power: float = 26000.0
    drag_coefficient: float = 0.04
    lift_coefficient: float = 0.018
    gravity: float = 9.81
    fuel_burn_per_sec: float = 0.25
    roll_yaw_coupling: float = 0.35
    pitch_limit_deg: float = 45.0
    roll_limit_deg: float = 80.0
    ground_restitution: float = 0.2

    def __post_init__(self) -> None:
        if self.mass <= 0.0:
            raise ValueError(f"Mass must be positive, got {self.mass}")
        if self.pitch_limit_deg < 0.0 or self.roll_limit_deg < 0.0:
            raise ValueError("Attitude limits must be non-negative")

    @property
    def pitch_limit(self) -> float:
        """Pitch limit [rad]."""
        return float(np.radians(self.pitch_limit_deg))

    @property
    def roll_limit(self) -> float:
        """Roll limit [rad]."""
        return float(np.radians(self.roll_limit_deg))


@beartype
@dataclass
class SimConfig:
    """Simulation configuration.

    Attributes:
        aircraft: Flight model constants
        ring_field: Ring course layout
        record_history: Keep a copy of every state for FlightResult
    """
    aircraft: AircraftConfig = field(default_factory=AircraftConfig)
    ring_field: RingFieldConfig = field(default_factory=RingFieldConfig)
    record_history: bool = True


# =============================================================================
# Numba-Optimized Integration
# =============================================================================


@njit(cache=True)
def _integrate_core(
    # State
    px: float, py: float, pz: float,
    vx: float, vy: float, vz: float,
    yaw: float, pitch: float, roll: float,
    throttle: float,
    fuel: float,
    time: float,
    # Aircraft
    mass: float,
    thrust_power: float,
    drag_coefficient: float,
    lift_coefficient: float,
    gravity: float,
    fuel_burn_per_sec: float,
    roll_yaw_coupling: float,
    # Time step
    dt: float,
) -> tuple[float, ...]:
    """One semi-implicit Euler step of the flight model."""
    fx, fy, fz = _forward(yaw, pitch, roll)
    ux, uy, uz = _up(yaw, pitch, roll)

    # Basic forces
    thrust = thrust_power * throttle
    tx, ty, tz = fx * thrust, fy * thrust, fz * thrust

    speed = np.sqrt(vx * vx + vy * vy + vz * vz)
    drag = -drag_coefficient * speed
    dx, dy, dz = vx * drag, vy * drag, vz * drag

    lift = lift_coefficient * speed * speed
    lx, ly, lz = ux * lift, uy * lift, uz * lift

    gx, gy, gz = 0.0, -mass * gravity, 0.0

    # Banked turn: roll swings the heading. Forces above already used the
    # old heading, so the turn shows up in thrust/lift one tick later.
    yaw += (roll * roll_yaw_coupling) * dt

    ax = (tx + dx + lx + gx) / mass
    ay = (ty + dy + ly + gy) / mass
    az = (tz + dz + lz + gz) / mass

    vx += ax * dt
    vy += ay * dt
    vz += az * dt

    px += vx * dt
    py += vy * dt
    pz += vz * dt

    fuel_use = fuel_burn_per_sec * throttle * dt
    fuel = max(0.0, fuel - fuel_use)

    if fuel <= 0.0:
        throttle = 0.0

    return (px, py, pz, vx, vy, vz, yaw, throttle, fuel, time + dt)


# =============================================================================
# Integrator Phases
# =============================================================================


def _clamp(value: float, low: float, high: float) -> float:
    if value < low:
        return low
    if value > high:
        return high
    return value


@beartype
def apply_control(
    state: FlightState,
    control: ControlInput,
    aircraft: AircraftConfig,
) -> FlightState:
    """Add control deltas to the state, respecting throttle and attitude limits.

    Yaw is unbounded; pitch and roll are clamped to the aircraft limits and
    throttle to [0, 1].
    """
    next_state = state.copy()
    next_state.throttle = _clamp(state.throttle + control.throttle, 0.0, 1.0)
    next_state.pitch = _clamp(state.pitch + control.pitch, -aircraft.pitch_limit, aircraft.pitch_limit)
    next_state.yaw = state.yaw + control.yaw
    next_state.roll = _clamp(state.roll + control.roll, -aircraft.roll_limit, aircraft.roll_limit)
    return next_state


@beartype
def integrate(state: FlightState, dt: float, aircraft: AircraftConfig) -> FlightState:
    """Propagate forces, motion and fuel over one time step.

    Forces:
        thrust  = forward * thrust_power * throttle
        drag    = -drag_coefficient * |v| * v
        lift    = up * lift_coefficient * |v|^2
        gravity = (0, -mass * g, 0)

    Velocity is updated first and the new velocity moves the position
    (semi-implicit Euler). When fuel runs out the throttle is forced to zero.

    Args:
        state: Current flight state
        dt: Time step [s]
        aircraft: Flight model constants

    Returns:
        Next flight state
    """
    # Plain floats only, so the kernel compiles once
    result = _integrate_core(
        state.position[0], state.position[1], state.position[2],
        state.velocity[0], state.velocity[1], state.velocity[2],
        float(state.yaw), float(state.pitch), float(state.roll),
        float(state.throttle),
        float(state.fuel),
        float(state.time),
        float(aircraft.mass),
        float(aircraft.thrust_power),
        float(aircraft.drag_coefficient),
        float(aircraft.lift_coefficient),
        float(aircraft.gravity),
        float(aircraft.fuel_burn_per_sec),
        float(aircraft.roll_yaw_coupling),
        float(dt),
    )

    return FlightState(
        position=np.array([result[0], result[1], result[2]]),
        velocity=np.array([result[3], result[4], result[5]]),
        yaw=float(result[6]),
        pitch=state.pitch,
        roll=state.roll,
        throttle=float(result[7]),
        fuel=float(result[8]),
        score=state.score,
        time=float(result[9]),
    )


@beartype
def clamp_to_ground(state: FlightState, aircraft: AircraftConfig) -> FlightState:
    """Keep the craft on or above the ground plane.

    Below y = 0 the position is snapped to the ground. Downward vertical speed
    is reversed and scaled by the restitution; horizontal velocity and any
    upward vertical speed are left alone.
    """
    if state.position[1] >= 0.0:
        return state

    next_state = state.copy()
    next_state.position[1] = 0.0
    if next_state.velocity[1] < 0.0:
        next_state.velocity[1] *= -aircraft.ground_restitution
    return next_state


# =============================================================================
# Simulator
# =============================================================================


@beartype
@dataclass
class Simulator:
    """Step-driven ring-course simulator.

    Owns the flight state and the ring course. Callers only ever receive
    copies, and the state changes only through step().

    Example:
        >>> sim = Simulator.with_rings(ring_count=6, seed=1)
        >>> for _ in range(100):
        ...     sim.step(ControlInput(roll=0.01), dt=0.1)
        >>> sim.get_state().score
    """
    state: FlightState
    rings: list[Ring] = field(default_factory=list)
    config: SimConfig = field(default_factory=SimConfig)

    # Internal
    _history: list[FlightState] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        """Take ownership of the initial state and rings."""
        self.state = self.state.copy()
        self.rings = [ring.copy() for ring in self.rings]
        if self.config.record_history:
            self._history = [self.state.copy()]

    @classmethod
    def with_rings(
        cls,
        ring_count: int = 6,
        seed: int | None = None,
        config: SimConfig | None = None,
        state: FlightState | None = None,
    ) -> "Simulator":
        """Create a simulator on a freshly generated ring course.

        Args:
            ring_count: Number of rings to lay out
            seed: Optional RNG seed for the ring layout
            config: Simulation configuration
            state: Initial flight state (defaults to FlightState.initial())
        """
        config = config or SimConfig()
        rings = generate_rings(ring_count, config.ring_field, seed=seed)
        return cls(
            state=state or FlightState.initial(),
            rings=rings,
            config=config,
        )

    def get_state(self) -> FlightState:
        """Get current flight state.

        Returns a copy to prevent external modification.
        """
        return self.state.copy()

    def get_rings(self) -> list[Ring]:
        """Get the ring course (copies)."""
        return [ring.copy() for ring in self.rings]

    def step(self, control: ControlInput | None = None, dt: float = 0.1) -> FlightState:
        """Advance the simulation by one tick.

        Args:
            control: Control deltas for this tick (None = no input)
            dt: Time step [s], must be positive

        Returns:
            Copy of the new state
        """
        if dt <= 0.0:
            raise ValueError(f"Time step must be positive, got {dt}")
        if control is None:
            control = ControlInput()

        aircraft = self.config.aircraft
        had_fuel = not self.state.out_of_fuel

        state = apply_control(self.state, control, aircraft)
        state = integrate(state, dt, aircraft)
        state = evaluate_ring_passage(state, self.rings)
        state = clamp_to_ground(state, aircraft)
        self.state = state

        if had_fuel and state.out_of_fuel:
            logger.info("Fuel exhausted at t=%.1f s, score %d", state.time, state.score)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "t=%.1f pos=(%.1f, %.1f, %.1f) speed=%.1f throttle=%.2f fuel=%.2f",
                state.time, *state.position, state.speed, state.throttle, state.fuel,
            )

        if self.config.record_history:
            self._history.append(state.copy())

        return state.copy()

    def get_history(self) -> list[FlightState]:
        """Get recorded state history."""
        return self._history.copy()

    def clear_history(self) -> None:
        """Clear recorded state history."""
        self._history = [self.state.copy()]

    @property
    def time(self) -> float:
        """Current simulation time [s]."""
        return self.state.time

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def out_of_fuel(self) -> bool:
        """True once the fuel is gone (the run is effectively over)."""
        return self.state.out_of_fuel

    @property
    def rings_passed(self) -> int:
        return sum(1 for ring in self.rings if ring.passed)


# =============================================================================
# Results and Analysis
# =============================================================================


@beartype
@dataclass
class FlightResult:
    """Recorded trajectory of a flight.

    Provides convenient access to trajectory data and analysis.
    """
    states: list[FlightState]

    @property
    def time(self) -> NDArray[np.float64]:
        """Time array [s]."""
        return np.array([s.time for s in self.states])

    @property
    def position(self) -> NDArray[np.float64]:
        """Position history [m], shape (N, 3)."""
        return np.array([s.position for s in self.states])

    @property
    def velocity(self) -> NDArray[np.float64]:
        """Velocity history [m/s], shape (N, 3)."""
        return np.array([s.velocity for s in self.states])

    @property
    def altitude(self) -> NDArray[np.float64]:
        """Altitude history [m]."""
        return np.array([s.altitude for s in self.states])

    @property
    def speed(self) -> NDArray[np.float64]:
        """Speed history [m/s]."""
        return np.array([s.speed for s in self.states])

    @property
    def fuel(self) -> NDArray[np.float64]:
        """Fuel history [units]."""
        return np.array([s.fuel for s in self.states])

    @property
    def throttle(self) -> NDArray[np.float64]:
        return np.array([s.throttle for s in self.states])

    @property
    def score(self) -> NDArray[np.int64]:
        return np.array([s.score for s in self.states], dtype=np.int64)

    @property
    def max_altitude(self) -> float:
        return float(self.altitude.max())

    @property
    def max_speed(self) -> float:
        return float(self.speed.max())

    @classmethod
    def from_simulator(cls, sim: Simulator) -> "FlightResult":
        """Create result from simulator history."""
        return cls(states=sim.get_history())

    def to_dataframe(self):
        """Convert to Polars DataFrame."""
        import polars as pl

        return pl.DataFrame({
            "time": self.time,
            "x": self.position[:, 0],
            "y": self.position[:, 1],
            "z": self.position[:, 2],
            "vx": self.velocity[:, 0],
            "vy": self.velocity[:, 1],
            "vz": self.velocity[:, 2],
            "speed": self.speed,
            "throttle": self.throttle,
            "fuel": self.fuel,
            "score": self.score,
        })
