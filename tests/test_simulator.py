"""Unit tests for the step-driven Simulator.

Tests the integrator phases and the simulator loop for the properties the
flight model promises.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from ringflight.course.rings import RING_SCORE, Ring
from ringflight.dynamics.state import ControlInput, FlightState
from ringflight.simulation import (
    AircraftConfig,
    FlightResult,
    SimConfig,
    Simulator,
    apply_control,
    clamp_to_ground,
    integrate,
)

DT = 0.1


def _simulator(state: FlightState | None = None, rings: list[Ring] | None = None, **config) -> Simulator:
    return Simulator(
        state=state or FlightState.initial(),
        rings=rings or [],
        config=SimConfig(**config),
    )


# =============================================================================
# Simulator Initialization Tests
# =============================================================================


class TestSimulatorInit:
    """Test simulator initialization."""

    def test_with_rings_default(self):
        sim = Simulator.with_rings()
        assert len(sim.get_rings()) == 6
        state = sim.get_state()
        assert_allclose(state.position, [0.0, 80.0, 0.0])
        assert state.fuel == 120.0
        assert sim.time == 0.0

    def test_with_rings_count_and_seed(self):
        a = Simulator.with_rings(ring_count=4, seed=9)
        b = Simulator.with_rings(ring_count=4, seed=9)
        assert len(a.get_rings()) == 4
        for ring_a, ring_b in zip(a.get_rings(), b.get_rings()):
            assert_allclose(ring_a.position, ring_b.position)

    def test_get_state_returns_copy(self):
        sim = Simulator.with_rings(ring_count=1)
        state = sim.get_state()
        state.position[1] = -500.0
        state.score = 900
        assert sim.get_state().position[1] == 80.0
        assert sim.score == 0

    def test_get_rings_returns_copies(self):
        sim = Simulator.with_rings(ring_count=2)
        rings = sim.get_rings()
        rings[0].passed = True
        assert not sim.get_rings()[0].passed

    def test_owns_initial_state(self):
        state = FlightState.initial()
        sim = _simulator(state)
        state.position[1] = 0.0
        assert sim.get_state().position[1] == 80.0

    def test_invalid_dt(self):
        sim = _simulator()
        with pytest.raises(ValueError, match="Time step"):
            sim.step(dt=0.0)


# =============================================================================
# Control Input Tests
# =============================================================================


class TestApplyControl:
    """Test control deltas and attitude/throttle limits."""

    def test_deltas_add(self):
        aircraft = AircraftConfig()
        state = apply_control(FlightState.initial(), ControlInput(throttle=0.1, pitch=0.1, yaw=0.2, roll=-0.3), aircraft)
        assert state.throttle == pytest.approx(0.5)
        assert state.pitch == pytest.approx(0.1)
        assert state.yaw == pytest.approx(0.2)
        assert state.roll == pytest.approx(-0.3)

    def test_input_state_untouched(self):
        original = FlightState.initial()
        apply_control(original, ControlInput(throttle=0.5, yaw=1.0), AircraftConfig())
        assert original.throttle == 0.4
        assert original.yaw == 0.0

    @pytest.mark.parametrize("delta", [0.3, -0.3, 2.0, -2.0])
    def test_throttle_stays_in_range(self, delta):
        aircraft = AircraftConfig()
        state = FlightState.initial()
        for _ in range(20):
            state = apply_control(state, ControlInput(throttle=delta), aircraft)
            assert 0.0 <= state.throttle <= 1.0
        assert state.throttle == (1.0 if delta > 0 else 0.0)

    def test_pitch_and_roll_clamped(self):
        aircraft = AircraftConfig()
        state = FlightState.initial()
        for _ in range(100):
            state = apply_control(state, ControlInput(pitch=0.1, roll=-0.1), aircraft)
            assert abs(state.pitch) <= np.radians(45.0) + 1e-12
            assert abs(state.roll) <= np.radians(80.0) + 1e-12
        assert state.pitch == pytest.approx(np.radians(45.0))
        assert state.roll == pytest.approx(-np.radians(80.0))

    def test_yaw_unbounded(self):
        aircraft = AircraftConfig()
        state = FlightState.initial()
        for _ in range(100):
            state = apply_control(state, ControlInput(yaw=0.5), aircraft)
        assert state.yaw == pytest.approx(50.0)


# =============================================================================
# Integration Tests
# =============================================================================


class TestIntegrate:
    """Test the physics step."""

    def test_first_tick_matches_hand_calculation(self):
        """Level flight at 30 m/s, throttle 0.4.

        thrust = (0, 0, 10400), drag = (0, 0, -36), lift = (0, 16.2, 0),
        gravity = (0, -7357.5, 0)
        """
        state = integrate(FlightState.initial(), DT, AircraftConfig())

        accel = np.array([0.0, (16.2 - 7357.5) / 750.0, (10400.0 - 36.0) / 750.0])
        velocity = np.array([0.0, 0.0, 30.0]) + accel * DT
        position = np.array([0.0, 80.0, 0.0]) + velocity * DT

        assert_allclose(state.velocity, velocity, rtol=1e-12)
        assert_allclose(state.position, position, rtol=1e-12)
        assert state.fuel == pytest.approx(120.0 - 0.25 * 0.4 * DT)
        assert state.time == pytest.approx(DT)

    def test_forward_motion_and_fuel_burn(self):
        sim = _simulator()
        state = sim.step(ControlInput(), dt=DT)
        assert state.position[2] > 0.0
        assert state.fuel < 120.0

    def test_drag_opposes_velocity(self):
        aircraft = AircraftConfig(gravity=0.0, lift_coefficient=0.0)
        state = FlightState(
            position=np.array([0.0, 100.0, 0.0]),
            velocity=np.array([20.0, 0.0, 0.0]),
            throttle=0.0,
        )
        next_state = integrate(state, DT, aircraft)
        assert 0.0 < next_state.velocity[0] < 20.0
        assert next_state.velocity[1] == 0.0

    def test_banked_turn_changes_yaw(self):
        roll = np.radians(30.0)
        state = FlightState.initial()
        state.roll = roll
        next_state = integrate(state, DT, AircraftConfig())
        assert next_state.yaw == pytest.approx(roll * 0.35 * DT)

    def test_banked_turn_forces_use_previous_heading(self):
        """The yaw from the bank only steers thrust on the following tick."""
        aircraft = AircraftConfig(gravity=0.0, lift_coefficient=0.0, drag_coefficient=0.0)
        state = FlightState(
            position=np.array([0.0, 100.0, 0.0]),
            velocity=np.array([0.0, 0.0, 0.0]),
            roll=np.radians(60.0),
            throttle=1.0,
        )
        first = integrate(state, DT, aircraft)
        # Thrust still along +Z on the first tick
        assert first.velocity[0] == pytest.approx(0.0, abs=1e-12)
        assert first.yaw > 0.0

        second = integrate(first, DT, aircraft)
        assert second.velocity[0] > 0.0

    def test_zero_throttle_keeps_fuel(self):
        state = FlightState.initial()
        state.throttle = 0.0
        next_state = integrate(state, DT, AircraftConfig())
        assert next_state.fuel == 120.0

    def test_fuel_exhaustion_cuts_throttle(self):
        state = FlightState.initial(throttle=1.0, fuel=0.01)
        next_state = integrate(state, DT, AircraftConfig())
        assert next_state.fuel == 0.0
        assert next_state.throttle == 0.0


# =============================================================================
# Ground Clamp Tests
# =============================================================================


class TestGroundClamp:
    """Test ground contact handling."""

    def test_downward_bounce(self):
        state = FlightState(
            position=np.array([5.0, -2.0, 10.0]),
            velocity=np.array([3.0, -10.0, 40.0]),
        )
        clamped = clamp_to_ground(state, AircraftConfig())
        assert clamped.position[1] == 0.0
        assert clamped.velocity[1] == pytest.approx(2.0)
        # Horizontal motion is untouched
        assert_allclose(clamped.velocity[[0, 2]], [3.0, 40.0])
        assert_allclose(clamped.position[[0, 2]], [5.0, 10.0])

    def test_upward_velocity_untouched(self):
        state = FlightState(
            position=np.array([0.0, -1.0, 0.0]),
            velocity=np.array([0.0, 4.0, 20.0]),
        )
        clamped = clamp_to_ground(state, AircraftConfig())
        assert clamped.position[1] == 0.0
        assert_allclose(clamped.velocity, [0.0, 4.0, 20.0])

    def test_above_ground_untouched(self):
        state = FlightState.initial()
        assert clamp_to_ground(state, AircraftConfig()) is state

    def test_step_bounces_off_ground(self):
        """A step that ends below ground lands at y=0 with -0.2x vertical speed."""
        start = FlightState(
            position=np.array([0.0, 1.0, 0.0]),
            velocity=np.array([0.0, -50.0, 30.0]),
            throttle=0.0,
        )
        sim = _simulator(start)
        aircraft = sim.config.aircraft

        unclamped = integrate(apply_control(start, ControlInput(), aircraft), DT, aircraft)
        assert unclamped.position[1] < 0.0
        assert unclamped.velocity[1] < 0.0

        state = sim.step(ControlInput(), dt=DT)
        assert state.position[1] == 0.0
        assert state.velocity[1] == pytest.approx(-0.2 * unclamped.velocity[1])

    def test_ring_checked_before_clamp(self):
        """A ring below ground can be scored on the tick the craft dips under."""
        start = FlightState(
            position=np.array([0.0, 1.0, 0.0]),
            velocity=np.array([0.0, -50.0, 0.0]),
            throttle=0.0,
        )
        probe = integrate(start, DT, AircraftConfig())
        ring = Ring(position=probe.position.copy() + np.array([0.0, -1.0, 0.0]), radius=1.5)
        # At the clamped position the ring is out of reach
        assert not ring.contains(np.array([probe.position[0], 0.0, probe.position[2]]))

        sim = _simulator(start, rings=[ring])
        state = sim.step(ControlInput(), dt=DT)
        assert state.score == RING_SCORE


# =============================================================================
# Fuel Tests
# =============================================================================


class TestFuel:
    """Test fuel burn and exhaustion."""

    def test_fuel_non_increasing(self):
        sim = _simulator()
        previous = sim.get_state().fuel
        for _ in range(50):
            state = sim.step(ControlInput(throttle=0.02), dt=DT)
            assert state.fuel < previous
            previous = state.fuel

    def test_throttle_locked_after_exhaustion(self):
        sim = _simulator(FlightState.initial(throttle=1.0, fuel=0.005))
        state = sim.step(ControlInput(), dt=DT)
        assert state.fuel == 0.0
        assert state.throttle == 0.0
        assert sim.out_of_fuel

        for _ in range(5):
            state = sim.step(ControlInput(throttle=0.5), dt=DT)
            assert state.throttle == 0.0
            assert state.fuel == 0.0

    def test_zero_input_run_terminates(self):
        """Burn per tick is positive, so the tank always empties."""
        sim = _simulator(record_history=False)
        ticks = 0
        while not sim.out_of_fuel:
            sim.step(ControlInput(), dt=DT)
            ticks += 1
            assert ticks < 20000
        assert sim.get_state().fuel == 0.0
        # 120 units at 0.01 per tick
        assert ticks == pytest.approx(12000, abs=2)


# =============================================================================
# Ring Scoring Through The Simulator
# =============================================================================


class TestSimulatorRings:
    """Test ring passage during stepping."""

    def test_ring_scored_once_across_ticks(self):
        ring = Ring(position=np.array([0.0, 80.0, 3.0]))
        sim = _simulator(rings=[ring])
        sim.step(ControlInput(), dt=DT)
        sim.step(ControlInput(), dt=DT)
        assert sim.score == RING_SCORE
        assert sim.rings_passed == 1

    def test_score_equals_passed_rings(self):
        rings = [Ring(position=np.array([0.0, 80.0, 3.0 + 10.0 * i]), radius=45.0) for i in range(3)]
        rings.append(Ring(position=np.array([0.0, 80.0, 5000.0])))
        sim = _simulator(rings=rings)
        for _ in range(5):
            sim.step(ControlInput(), dt=DT)
            assert sim.score % RING_SCORE == 0
            assert sim.score == RING_SCORE * sum(r.passed for r in sim.get_rings())
        assert sim.score == 3 * RING_SCORE


# =============================================================================
# History and Results Tests
# =============================================================================


class TestFlightResult:
    """Test recorded history and export."""

    def test_history_recorded(self):
        sim = _simulator()
        for _ in range(10):
            sim.step(ControlInput(), dt=DT)
        history = sim.get_history()
        assert len(history) == 11
        assert history[0].time == 0.0
        assert history[-1].time == pytest.approx(1.0)

    def test_history_disabled(self):
        sim = _simulator(record_history=False)
        sim.step(ControlInput(), dt=DT)
        assert sim.get_history() == []

    def test_clear_history(self):
        sim = _simulator()
        for _ in range(3):
            sim.step(ControlInput(), dt=DT)
        sim.clear_history()
        assert len(sim.get_history()) == 1

    def test_result_arrays(self):
        sim = _simulator()
        for _ in range(20):
            sim.step(ControlInput(), dt=DT)
        result = FlightResult.from_simulator(sim)

        assert result.position.shape == (21, 3)
        assert result.velocity.shape == (21, 3)
        assert_allclose(result.time, DT * np.arange(21), atol=1e-9)
        assert np.all(np.diff(result.fuel) < 0.0)
        assert result.max_altitude == pytest.approx(80.0)
        assert result.max_speed >= 30.0

    def test_to_dataframe(self):
        sim = _simulator()
        for _ in range(5):
            sim.step(ControlInput(), dt=DT)
        df = FlightResult.from_simulator(sim).to_dataframe()

        assert df.height == 6
        for column in ("time", "x", "y", "z", "vx", "vy", "vz", "speed", "throttle", "fuel", "score"):
            assert column in df.columns


# =============================================================================
# Numeric Input Tests
# =============================================================================


class TestIntegerInputs:
    """Whole numbers are valid wherever a real value is expected."""

    def test_step_with_integer_dt(self):
        int_sim = _simulator()
        float_sim = _simulator()

        int_state = int_sim.step(ControlInput(), dt=1)
        float_state = float_sim.step(ControlInput(), dt=1.0)

        assert_allclose(int_state.position, float_state.position, rtol=0.0)
        assert_allclose(int_state.velocity, float_state.velocity, rtol=0.0)
        assert int_state.time == 1.0
        assert int_state.fuel == float_state.fuel

    def test_state_from_integers(self):
        state = FlightState.initial(altitude=100, airspeed=20, throttle=1, fuel=50)
        assert_allclose(state.position, [0.0, 100.0, 0.0])
        assert_allclose(state.velocity, [0.0, 0.0, 20.0])

        next_state = integrate(state, 1, AircraftConfig())
        assert next_state.fuel == pytest.approx(49.75)

    def test_config_from_integers(self):
        aircraft = AircraftConfig(mass=1000, thrust_power=30000, gravity=10, pitch_limit_deg=30)
        sim = _simulator(aircraft=aircraft)
        state = sim.step(ControlInput(pitch=1), dt=1)

        assert state.pitch == pytest.approx(np.radians(30.0))
        assert np.all(np.isfinite(state.position))

    def test_control_from_integers(self):
        state = apply_control(FlightState.initial(), ControlInput(throttle=1, yaw=2), AircraftConfig())
        assert state.throttle == 1.0
        assert state.yaw == 2.0


# =============================================================================
# Logging Tests
# =============================================================================


class TestStepLogging:
    """Per-tick debug output is only built when debug logging is on."""

    def test_no_debug_record_when_disabled(self, monkeypatch):
        from ringflight.simulation import simulator as simulator_module

        calls = []
        monkeypatch.setattr(simulator_module.logger, "debug", lambda *args, **kwargs: calls.append(args))
        monkeypatch.setattr(simulator_module.logger, "isEnabledFor", lambda level: False)

        _simulator().step(ControlInput(), dt=DT)
        assert calls == []

    def test_debug_record_when_enabled(self, caplog):
        with caplog.at_level("DEBUG", logger="ringflight.simulation.simulator"):
            _simulator().step(ControlInput(), dt=DT)
        assert any(record.getMessage().startswith("t=0.1 pos=") for record in caplog.records)
