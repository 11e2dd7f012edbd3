#!/usr/bin/env python
"""Scripted ring course flight example.

Flies the course without a human at the keyboard:
1. Lay out a seeded ring course
2. Each tick, pick keyboard commands that point the nose at the next ring
3. Step the simulator until the fuel runs out (or a time cap)
4. Report the result and save the trajectory data and plot

The "pilot" only uses the same text commands a player would type, so this
also exercises the command parser end to end.
"""

import logging
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import numpy as np

from ringflight.controls import ControlSensitivity, parse_command
from ringflight.course import Ring
from ringflight.dynamics import FlightState
from ringflight.logger import setup_logging
from ringflight.plotting import plot_flight_path
from ringflight.simulation import FlightResult, Simulator

DT = 0.1
MAX_TICKS = 1500
SEED = 2024


def pilot_command(state: FlightState, target: Ring | None, sensitivity: ControlSensitivity) -> str:
    """Choose this tick's keys: full throttle, nose toward the target ring."""
    keys = ["+"] if state.throttle < 1.0 else []
    if target is None:
        return " ".join(keys)

    offset = target.position - state.position
    desired_yaw = np.arctan2(offset[0], offset[2])
    # Positive pitch tips the nose toward -Y, so climbing wants negative pitch
    desired_pitch = -np.arctan2(offset[1], np.hypot(offset[0], offset[2]))

    yaw_step = sensitivity.step("yaw")
    pitch_step = sensitivity.step("pitch")

    if desired_yaw - state.yaw > yaw_step:
        keys.append("d")
    elif desired_yaw - state.yaw < -yaw_step:
        keys.append("a")

    if desired_pitch - state.pitch > pitch_step:
        keys.append("w")
    elif desired_pitch - state.pitch < -pitch_step:
        keys.append("s")

    # Wings level: banking right tips the lift vector toward -X
    bank = np.sin(sensitivity.step("roll"))
    if state.up[0] < -bank:
        keys.append("q")
    elif state.up[0] > bank:
        keys.append("e")

    return " ".join(keys)


def main() -> None:
    """Run the scripted flight example."""
    setup_logging(logging.INFO)

    print("=" * 60)
    print("SCRIPTED RING COURSE FLIGHT")
    print("=" * 60)

    sim = Simulator.with_rings(ring_count=6, seed=SEED)
    sensitivity = ControlSensitivity()

    print("\nRing course:")
    for i, ring in enumerate(sim.get_rings(), start=1):
        x, y, z = ring.position
        print(f"   Ring {i}: x={x:7.1f}  y={y:6.1f}  z={z:7.1f}  r={ring.radius:.0f}")

    print("\nFlying...")
    ticks = 0
    while not sim.out_of_fuel and ticks < MAX_TICKS:
        state = sim.get_state()
        target = next((ring for ring in sim.get_rings() if not ring.passed), None)
        sim.step(parse_command(pilot_command(state, target, sensitivity), sensitivity), dt=DT)
        ticks += 1

    result = FlightResult.from_simulator(sim)
    final = sim.get_state()

    print("\nResults:")
    print("-" * 40)
    print(f"   Ticks flown:     {ticks}")
    print(f"   Flight time:     {final.time:.1f} s")
    print(f"   Max altitude:    {result.max_altitude:.1f} m")
    print(f"   Max speed:       {result.max_speed:.1f} m/s")
    print(f"   Fuel remaining:  {final.fuel:.2f} u")
    print(f"   Rings passed:    {sim.rings_passed}/{len(sim.rings)}")
    print(f"   Score:           {final.score}")

    output_dir = Path("outputs/scripted_flight")
    output_dir.mkdir(parents=True, exist_ok=True)

    result.to_dataframe().write_csv(output_dir / "trajectory.csv")
    print(f"\n   Data saved: {output_dir}/trajectory.csv")

    fig = plot_flight_path(result, sim.get_rings())
    fig.savefig(output_dir / "flight_path.png", dpi=150, bbox_inches="tight")
    print(f"   Plot saved: {output_dir}/flight_path.png")

    print("\n" + "=" * 60)
    print("FLIGHT COMPLETE")
    print("=" * 60)


if __name__ == "__main__":
    main()
