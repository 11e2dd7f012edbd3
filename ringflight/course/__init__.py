"""Ring course: layout of scoring rings and passage scoring.

Example:
    >>> from ringflight.course import RingFieldConfig, generate_rings
    >>>
    >>> rings = generate_rings(6, RingFieldConfig(spacing=250.0))
"""

from ringflight.course.rings import (
    RING_SCORE,
    Ring,
    RingFieldConfig,
    evaluate_ring_passage,
    generate_rings,
    remaining_rings,
)

__all__ = [
    "RING_SCORE",
    "Ring",
    "RingFieldConfig",
    "evaluate_ring_passage",
    "generate_rings",
    "remaining_rings",
]
