"""Interactive text session: read a command, step the simulator, show the HUD.

Usage:
    ringflight --rings 6 --dt 0.1
    ringflight --seed 7 --plot flight.png
"""

import argparse
import logging
import sys
from collections.abc import Iterable
from io import TextIOBase

from ringflight.controls import HELP_TEXT, ControlSensitivity, parse_command
from ringflight.hud import format_hud, format_summary
from ringflight.logger import setup_logging
from ringflight.simulation.simulator import FlightResult, Simulator
from ringflight.typecheck import beartype

logger = logging.getLogger(__name__)

BANNER = """\
Ring course flight simulator
Goal: fly through as many rings as you can before the fuel runs out.
"""


@beartype
def run_session(
    simulator: Simulator,
    lines: Iterable[str],
    out: TextIOBase,
    dt: float = 0.1,
    sensitivity: ControlSensitivity | None = None,
) -> int:
    """Drive the simulator from command lines until the fuel or the input runs out.

    "help" reprints the command list without stepping; "exit" or the end of
    input stops the flight early.

    Args:
        simulator: Simulator to fly
        lines: Command lines (e.g. stdin)
        out: Where the HUD and prompts are written
        dt: Time per tick [s]
        sensitivity: Command step sizes

    Returns:
        Number of ticks flown
    """
    print(BANNER, file=out)
    print(HELP_TEXT, file=out)

    commands = iter(lines)
    tick = 0
    while not simulator.out_of_fuel:
        print(format_hud(simulator.get_state(), simulator.get_rings(), tick, dt), file=out)
        print("Command: ", end="", file=out)
        out.flush()

        line = next(commands, None)
        if line is None:
            break
        line = line.strip()
        if line == "exit":
            break
        if line == "help":
            print(HELP_TEXT, file=out)
            continue

        control = parse_command(line, sensitivity)
        if control.is_neutral:
            logger.debug("Tick %d: holding controls", tick)
        simulator.step(control, dt=dt)
        tick += 1

    print("\n" + format_summary(simulator.get_state(), simulator.get_rings()), file=out)
    logger.info("Session ended after %d ticks", tick)
    return tick


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Text-based ring course flight simulator")
    parser.add_argument("--rings", type=int, default=6, help="Number of rings on the course")
    parser.add_argument("--dt", type=float, default=0.1, help="Simulation time per command [s]")
    parser.add_argument("--seed", type=int, help="Seed for a repeatable ring layout")
    parser.add_argument("--plot", help="Save a flight path plot to this file at the end")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    if args.rings < 0:
        parser.error("--rings cannot be negative")
    if args.dt <= 0.0:
        parser.error("--dt must be positive")

    setup_logging(logging.DEBUG if args.debug else logging.WARNING)

    simulator = Simulator.with_rings(args.rings, seed=args.seed)
    run_session(simulator, iter(sys.stdin.readline, ""), sys.stdout, dt=args.dt)

    if args.plot:
        from ringflight.plotting import plot_flight_path

        fig = plot_flight_path(FlightResult.from_simulator(simulator), simulator.get_rings())
        fig.savefig(args.plot, dpi=150, bbox_inches="tight")
        print(f"Plot saved: {args.plot}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
