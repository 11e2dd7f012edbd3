"""Flight state and control input for the ring-course flight model.

The state contains:
- Position (3): [x, y, z] in the world frame (Y up, Z along the course)
- Velocity (3): [vx, vy, vz] in the world frame
- Attitude (3): yaw, pitch, roll angles [rad]
- Throttle (1): engine setting in [0, 1]
- Fuel (1): remaining fuel units
- Score (1): points earned from rings
- Time (1): elapsed simulated time [s]

A FlightState is a value: the integrator phases take one and hand back a new
one, so nothing outside the owning Simulator can see a half-updated state.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ringflight.dynamics.orientation import orientation_forward, orientation_up
from ringflight.dynamics.vector import dot, length, normalize
from ringflight.typecheck import beartype

# =============================================================================
# Control Input
# =============================================================================


@beartype
@dataclass(frozen=True)
class ControlInput:
    """Per-tick control deltas.

    Each field is added to the matching state quantity before integration,
    so zero means "leave it where it is".

    Attributes:
        throttle: Throttle change [-]
        pitch: Pitch change [rad]
        yaw: Yaw change [rad]
        roll: Roll change [rad]
    """
    throttle: float = 0.0
    pitch: float = 0.0
    yaw: float = 0.0
    roll: float = 0.0

    def __add__(self, other: "ControlInput") -> "ControlInput":
        return ControlInput(
            throttle=self.throttle + other.throttle,
            pitch=self.pitch + other.pitch,
            yaw=self.yaw + other.yaw,
            roll=self.roll + other.roll,
        )

    @property
    def is_neutral(self) -> bool:
        """True if this input changes nothing."""
        return self.throttle == 0.0 and self.pitch == 0.0 and self.yaw == 0.0 and self.roll == 0.0


# =============================================================================
# Flight State
# =============================================================================


@beartype
@dataclass
class FlightState:
    """Complete state of the craft.

    Attributes:
        position: [x, y, z] position [m]
        velocity: [vx, vy, vz] velocity [m/s]
        yaw: Heading angle [rad] (unbounded)
        pitch: Pitch angle [rad]
        roll: Bank angle [rad]
        throttle: Throttle setting, 0 to 1
        fuel: Remaining fuel [units]
        score: Points earned
        time: Simulation time [s]
    """
    position: NDArray[np.float64]
    velocity: NDArray[np.float64]
    yaw: float = 0.0
    pitch: float = 0.0
    roll: float = 0.0
    throttle: float = 0.4
    fuel: float = 120.0
    score: int = 0
    time: float = 0.0

    def __post_init__(self) -> None:
        """Validate state."""
        self.position = np.asarray(self.position, dtype=np.float64)
        self.velocity = np.asarray(self.velocity, dtype=np.float64)

        if self.position.shape != (3,):
            raise ValueError(f"Position must be shape (3,), got {self.position.shape}")
        if self.velocity.shape != (3,):
            raise ValueError(f"Velocity must be shape (3,), got {self.velocity.shape}")
        if not 0.0 <= self.throttle <= 1.0:
            raise ValueError(f"Throttle must be in [0, 1], got {self.throttle}")
        if self.fuel < 0.0:
            raise ValueError(f"Fuel cannot be negative, got {self.fuel}")
        if self.score < 0:
            raise ValueError(f"Score cannot be negative, got {self.score}")

    @classmethod
    def initial(
        cls,
        altitude: float = 80.0,
        airspeed: float = 30.0,
        throttle: float = 0.4,
        fuel: float = 120.0,
    ) -> "FlightState":
        """Create the starting state: level flight down the course.

        Args:
            altitude: Starting height above ground [m]
            airspeed: Starting speed along +Z [m/s]
            throttle: Starting throttle setting (0 to 1)
            fuel: Starting fuel load [units]
        """
        return cls(
            position=np.array([0.0, altitude, 0.0]),
            velocity=np.array([0.0, 0.0, airspeed]),
            throttle=throttle,
            fuel=fuel,
        )

    def copy(self) -> "FlightState":
        """Create a copy of this state."""
        return FlightState(
            position=self.position.copy(),
            velocity=self.velocity.copy(),
            yaw=self.yaw,
            pitch=self.pitch,
            roll=self.roll,
            throttle=self.throttle,
            fuel=self.fuel,
            score=self.score,
            time=self.time,
        )

    @property
    def speed(self) -> float:
        """Speed magnitude [m/s]."""
        return length(self.velocity)

    @property
    def altitude(self) -> float:
        """Height above the ground plane [m]."""
        return float(self.position[1])

    @property
    def forward(self) -> NDArray[np.float64]:
        """Nose direction in the world frame."""
        return orientation_forward(self.yaw, self.pitch, self.roll)

    @property
    def up(self) -> NDArray[np.float64]:
        """Lift direction in the world frame."""
        return orientation_up(self.yaw, self.pitch, self.roll)

    @property
    def forward_speed(self) -> float:
        """Velocity component along the nose [m/s]."""
        return dot(normalize(self.velocity), self.forward) * self.speed

    @property
    def attitude_deg(self) -> tuple[float, float, float]:
        """(yaw, pitch, roll) in degrees."""
        return (
            float(np.degrees(self.yaw)),
            float(np.degrees(self.pitch)),
            float(np.degrees(self.roll)),
        )

    @property
    def out_of_fuel(self) -> bool:
        return self.fuel <= 0.0
