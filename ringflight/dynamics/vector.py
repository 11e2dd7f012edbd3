"""3D vector math for the flight model.

Vectors are plain numpy arrays of shape (3,) and dtype float64, so the usual
arithmetic (+, -, scalar * and /, and their in-place forms) comes straight
from numpy. This module adds the named operations the flight model needs.

Axis convention:
- +X: lateral (right)
- +Y: up (altitude)
- +Z: forward (primary travel axis)

The rotation and normalization kernels are numba-compiled scalar functions so
the integrator kernel can call them directly.

Example:
    >>> from ringflight.dynamics.vector import vec3, rotate_y, length
    >>> import numpy as np
    >>>
    >>> v = rotate_y(vec3(0.0, 0.0, 1.0), np.pi / 2)  # -> [1, 0, 0]
    >>> length(v)
    1.0
"""

import numpy as np
from numba import njit
from numpy.typing import NDArray

from ringflight.typecheck import beartype

# Below this length a vector is treated as having no direction
NORMALIZE_EPSILON: float = 1e-6


# =============================================================================
# Numba-Optimized Scalar Kernels
# =============================================================================


@njit(cache=True)
def _rotate_x(x: float, y: float, z: float, radians: float) -> tuple[float, float, float]:
    """Rotate (x, y, z) about the X axis."""
    c = np.cos(radians)
    s = np.sin(radians)
    return (x, y * c - z * s, y * s + z * c)


@njit(cache=True)
def _rotate_y(x: float, y: float, z: float, radians: float) -> tuple[float, float, float]:
    """Rotate (x, y, z) about the Y axis."""
    c = np.cos(radians)
    s = np.sin(radians)
    return (x * c + z * s, y, -x * s + z * c)


@njit(cache=True)
def _rotate_z(x: float, y: float, z: float, radians: float) -> tuple[float, float, float]:
    """Rotate (x, y, z) about the Z axis."""
    c = np.cos(radians)
    s = np.sin(radians)
    return (x * c - y * s, x * s + y * c, z)


@njit(cache=True)
def _normalize(x: float, y: float, z: float) -> tuple[float, float, float]:
    """Scale (x, y, z) to unit length, or return zeros if degenerate."""
    norm = np.sqrt(x * x + y * y + z * z)
    if norm < NORMALIZE_EPSILON:
        return (0.0, 0.0, 0.0)
    return (x / norm, y / norm, z / norm)


# =============================================================================
# Vector Operations
# =============================================================================


@beartype
def vec3(x: float | int = 0.0, y: float | int = 0.0, z: float | int = 0.0) -> NDArray[np.float64]:
    """Build a 3-vector."""
    return np.array([x, y, z], dtype=np.float64)


@beartype
def dot(a: NDArray[np.float64], b: NDArray[np.float64]) -> float:
    """Dot product a . b"""
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


@beartype
def cross(a: NDArray[np.float64], b: NDArray[np.float64]) -> NDArray[np.float64]:
    """Cross product a x b"""
    return np.array([
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    ])


@beartype
def length(v: NDArray[np.float64]) -> float:
    """Euclidean length |v|."""
    return float(np.sqrt(dot(v, v)))


@beartype
def normalize(v: NDArray[np.float64]) -> NDArray[np.float64]:
    """Normalize a vector to unit length.

    Vectors shorter than NORMALIZE_EPSILON have no meaningful direction and
    come back as the zero vector instead of blowing up.
    """
    return np.array(_normalize(v[0], v[1], v[2]))


@beartype
def rotate_x(v: NDArray[np.float64], radians: float) -> NDArray[np.float64]:
    """Rotate a vector about the X axis by a signed angle [rad]."""
    return np.array(_rotate_x(v[0], v[1], v[2], radians))


@beartype
def rotate_y(v: NDArray[np.float64], radians: float) -> NDArray[np.float64]:
    """Rotate a vector about the Y axis by a signed angle [rad]."""
    return np.array(_rotate_y(v[0], v[1], v[2], radians))


@beartype
def rotate_z(v: NDArray[np.float64], radians: float) -> NDArray[np.float64]:
    """Rotate a vector about the Z axis by a signed angle [rad]."""
    return np.array(_rotate_z(v[0], v[1], v[2], radians))
