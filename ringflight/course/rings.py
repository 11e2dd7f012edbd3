"""Scoring rings: generation and passage detection.

Rings are laid out once at startup along the +Z course axis, each with a
random lateral offset and altitude. A ring counts as passed the first time
the craft's position lies within its radius of the ring centre; every ring
can be scored at most once.

Example:
    >>> from ringflight.course import generate_rings, evaluate_ring_passage
    >>>
    >>> rings = generate_rings(6, seed=42)
    >>> state = evaluate_ring_passage(state, rings)  # marks rings, adds score
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ringflight.dynamics.state import FlightState
from ringflight.dynamics.vector import length
from ringflight.typecheck import beartype

logger = logging.getLogger(__name__)

# Points awarded per ring
RING_SCORE: int = 100


# =============================================================================
# Configuration
# =============================================================================


@beartype
@dataclass
class RingFieldConfig:
    """Ring field layout.

    Attributes:
        spacing: Distance between consecutive rings along +Z [m]
        lateral_range: (min, max) X offset of ring centres [m]
        altitude_range: (min, max) Y of ring centres [m]
        radius: Ring radius [m]
    """
    spacing: float = 320.0
    lateral_range: tuple[float, float] = (-220.0, 220.0)
    altitude_range: tuple[float, float] = (40.0, 220.0)
    radius: float = 45.0

    def __post_init__(self) -> None:
        if self.spacing <= 0.0:
            raise ValueError(f"Ring spacing must be positive, got {self.spacing}")
        if self.radius <= 0.0:
            raise ValueError(f"Ring radius must be positive, got {self.radius}")
        for name, (low, high) in (
            ("lateral_range", self.lateral_range),
            ("altitude_range", self.altitude_range),
        ):
            if low > high:
                raise ValueError(f"{name} must be (min, max), got ({low}, {high})")


# =============================================================================
# Ring
# =============================================================================


@beartype
@dataclass
class Ring:
    """A scoring ring.

    Attributes:
        position: [x, y, z] ring centre [m]
        radius: Capture radius [m]
        passed: Whether the ring has been flown through (never resets)
    """
    position: NDArray[np.float64]
    radius: float = 45.0
    passed: bool = False

    def __post_init__(self) -> None:
        self.position = np.asarray(self.position, dtype=np.float64)
        if self.position.shape != (3,):
            raise ValueError(f"Position must be shape (3,), got {self.position.shape}")
        if self.radius <= 0.0:
            raise ValueError(f"Ring radius must be positive, got {self.radius}")

    def distance_to(self, point: NDArray[np.float64]) -> float:
        """Distance from the ring centre to a point [m]."""
        return length(point - self.position)

    def contains(self, point: NDArray[np.float64]) -> bool:
        """True if the point lies within the capture radius (inclusive)."""
        return self.distance_to(point) <= self.radius

    def copy(self) -> "Ring":
        return Ring(position=self.position.copy(), radius=self.radius, passed=self.passed)


# =============================================================================
# Ring Field Generator
# =============================================================================


@beartype
def generate_rings(
    count: int,
    config: RingFieldConfig | None = None,
    seed: int | None = None,
) -> list[Ring]:
    """Lay out a course of rings at increasing distance along +Z.

    Ring i (1-indexed) sits at z = spacing * i with X and Y drawn uniformly
    from the configured ranges. Without a seed the layout is different on
    every call.

    Args:
        count: Number of rings
        config: Ring field layout (defaults to RingFieldConfig())
        seed: Optional RNG seed for a reproducible layout

    Returns:
        List of unpassed rings, nearest first
    """
    if count < 0:
        raise ValueError(f"Ring count cannot be negative, got {count}")

    config = config or RingFieldConfig()
    rng = np.random.default_rng(seed)

    rings = []
    for i in range(1, count + 1):
        lateral = rng.uniform(*config.lateral_range)
        altitude = rng.uniform(*config.altitude_range)
        rings.append(Ring(
            position=np.array([lateral, altitude, config.spacing * i]),
            radius=config.radius,
        ))

    logger.debug("Generated %d rings (seed=%s)", count, seed)
    return rings


# =============================================================================
# Ring-Passage Evaluator
# =============================================================================


@beartype
def evaluate_ring_passage(state: FlightState, rings: Sequence[Ring]) -> FlightState:
    """Score every unpassed ring the craft is currently inside.

    Marks each such ring as passed and adds RING_SCORE per ring. Rings that
    are already passed are skipped, so flying through a ring twice scores it
    once.

    Args:
        state: Current flight state
        rings: Ring course (passed flags are updated in place)

    Returns:
        Next state with the updated score
    """
    newly_passed = 0
    for index, ring in enumerate(rings):
        if ring.passed:
            continue
        if ring.contains(state.position):
            ring.passed = True
            newly_passed += 1
            logger.info("Ring %d passed at t=%.1f s", index + 1, state.time)

    if newly_passed == 0:
        return state

    next_state = state.copy()
    next_state.score = state.score + RING_SCORE * newly_passed
    return next_state


@beartype
def remaining_rings(rings: Sequence[Ring]) -> int:
    """Number of rings not yet passed."""
    return sum(1 for ring in rings if not ring.passed)
