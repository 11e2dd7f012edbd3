"""Flight path plots.

Two panels for a finished flight:
- Top-down track (z along the course vs lateral x)
- Altitude profile (z along the course vs altitude y)

Rings are drawn at their capture radius, colored by whether they were passed.
"""

from collections.abc import Sequence

import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.patches import Circle

from ringflight.course.rings import Ring
from ringflight.simulation.simulator import FlightResult
from ringflight.typecheck import beartype

# =============================================================================
# Plot Style Configuration
# =============================================================================

COLORS = {
    "primary": "#2E86AB",  # Flight path
    "passed": "#2A9D8F",  # Passed ring
    "missed": "#E63946",  # Unpassed ring
    "ground": "#8D6E63",
    "text": "#333333",
}

DEFAULT_FIGSIZE = (12.0, 5.0)


def _setup_style() -> None:
    """Configure matplotlib style for consistent appearance."""
    plt.rcParams.update({
        "font.family": "sans-serif",
        "font.sans-serif": ["Helvetica", "Arial", "DejaVu Sans"],
        "font.size": 11,
        "axes.titlesize": 14,
        "axes.labelsize": 12,
        "axes.linewidth": 1.2,
        "xtick.labelsize": 10,
        "ytick.labelsize": 10,
        "legend.fontsize": 10,
        "grid.alpha": 0.5,
    })


# =============================================================================
# Flight Path Plot
# =============================================================================


@beartype
def plot_flight_path(
    result: FlightResult,
    rings: Sequence[Ring] = (),
    figsize: tuple[float, float] = DEFAULT_FIGSIZE,
    title: str | None = None,
) -> Figure:
    """Plot the flight track and altitude profile with the ring course.

    Args:
        result: Recorded flight
        rings: Ring course to overlay
        figsize: Figure size
        title: Figure title (default shows the final score)

    Returns:
        matplotlib Figure with two subplots
    """
    _setup_style()

    position = result.position
    fig, (ax_track, ax_alt) = plt.subplots(1, 2, figsize=figsize)

    ax_track.plot(position[:, 2], position[:, 0], color=COLORS["primary"], linewidth=2, label="Flight path")
    ax_alt.plot(position[:, 2], position[:, 1], color=COLORS["primary"], linewidth=2, label="Flight path")

    for ring in rings:
        color = COLORS["passed"] if ring.passed else COLORS["missed"]
        x, y, z = ring.position
        ax_track.add_patch(Circle((z, x), ring.radius, fill=False, edgecolor=color, linewidth=2))
        ax_alt.add_patch(Circle((z, y), ring.radius, fill=False, edgecolor=color, linewidth=2))

    ax_alt.axhline(y=0.0, color=COLORS["ground"], linewidth=1.5, label="Ground")

    ax_track.set_xlabel("Downrange z (m)")
    ax_track.set_ylabel("Lateral x (m)")
    ax_track.set_title("Ground Track")
    ax_track.set_aspect("equal", adjustable="datalim")
    ax_track.grid(True, alpha=0.3)
    ax_track.legend()

    ax_alt.set_xlabel("Downrange z (m)")
    ax_alt.set_ylabel("Altitude y (m)")
    ax_alt.set_title("Altitude Profile")
    ax_alt.set_aspect("equal", adjustable="datalim")
    ax_alt.grid(True, alpha=0.3)
    ax_alt.legend()

    if title is None:
        final_score = result.states[-1].score if result.states else 0
        title = f"Ring Course Flight: score {final_score}"
    fig.suptitle(title, fontsize=14)

    fig.tight_layout()
    return fig
