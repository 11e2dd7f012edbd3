"""Text command parsing.

Turns one line of whitespace-separated tokens into a ControlInput. Token
effects add up, so "w w e" is two pitch steps plus one roll step. Tokens
that mean nothing are skipped.

Example:
    >>> from ringflight.controls import parse_command
    >>>
    >>> control = parse_command("+ w e")
    >>> control.throttle
    0.04
"""

import logging
from dataclasses import dataclass

import numpy as np

from ringflight.dynamics.state import ControlInput
from ringflight.typecheck import beartype

logger = logging.getLogger(__name__)


@beartype
@dataclass(frozen=True)
class ControlSensitivity:
    """Size of one command step on each axis.

    Attributes:
        throttle_step: Throttle change per token [-]
        pitch_step_deg: Pitch change per token [deg]
        yaw_step_deg: Yaw change per token [deg]
        roll_step_deg: Roll change per token [deg]
    """
    throttle_step: float = 0.04
    pitch_step_deg: float = 0.8
    yaw_step_deg: float = 1.2
    roll_step_deg: float = 1.4

    def step(self, axis: str) -> float:
        """Step size for an axis in simulation units (throttle fraction or radians)."""
        if axis == "throttle":
            return self.throttle_step
        if axis == "pitch":
            return float(np.radians(self.pitch_step_deg))
        if axis == "yaw":
            return float(np.radians(self.yaw_step_deg))
        if axis == "roll":
            return float(np.radians(self.roll_step_deg))
        raise ValueError(f"Unknown control axis: {axis!r}")


# token -> (axis, direction)
TOKEN_EFFECTS: dict[str, tuple[str, float]] = {
    "+": ("throttle", 1.0),
    "t+": ("throttle", 1.0),
    "throttle+": ("throttle", 1.0),
    "-": ("throttle", -1.0),
    "t-": ("throttle", -1.0),
    "throttle-": ("throttle", -1.0),
    "w": ("pitch", 1.0),
    "pitch+": ("pitch", 1.0),
    "p+": ("pitch", 1.0),
    "s": ("pitch", -1.0),
    "pitch-": ("pitch", -1.0),
    "p-": ("pitch", -1.0),
    "a": ("yaw", -1.0),
    "yaw-": ("yaw", -1.0),
    "y-": ("yaw", -1.0),
    "d": ("yaw", 1.0),
    "yaw+": ("yaw", 1.0),
    "y+": ("yaw", 1.0),
    "q": ("roll", -1.0),
    "roll-": ("roll", -1.0),
    "r-": ("roll", -1.0),
    "e": ("roll", 1.0),
    "roll+": ("roll", 1.0),
    "r+": ("roll", 1.0),
}

HELP_TEXT = """\
Commands (several per line, separated by spaces):
  + / t+ / throttle+   : throttle up
  - / t- / throttle-   : throttle down
  w / pitch+ / p+      : pitch +
  s / pitch- / p-      : pitch -
  a / yaw- / y-        : yaw left
  d / yaw+ / y+        : yaw right
  q / roll- / r-       : roll left
  e / roll+ / r+       : roll right
  help                 : show this help again
  exit                 : end the flight now
  (empty line)         : hold controls for one tick
"""


@beartype
def parse_command(line: str, sensitivity: ControlSensitivity | None = None) -> ControlInput:
    """Translate a command line into control deltas.

    Args:
        line: Free-form command text
        sensitivity: Step sizes (defaults to ControlSensitivity())

    Returns:
        Summed ControlInput for all recognised tokens
    """
    sensitivity = sensitivity or ControlSensitivity()
    control = ControlInput()

    for token in line.split():
        effect = TOKEN_EFFECTS.get(token)
        if effect is None:
            logger.debug("Ignoring unknown token %r", token)
            continue
        axis, direction = effect
        control = control + ControlInput(**{axis: direction * sensitivity.step(axis)})

    return control
