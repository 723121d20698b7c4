"""Tests for kinematic helpers and trajectory containers."""

import math

import numpy as np
import pytest

from two_point_interpolation import (
    InfeasibleTrajectoryError,
    InvalidArgumentError,
    NotReadyError,
)
from two_point_interpolation.kinematics import (
    deceleration_error,
    integrate_jerk,
    normalize_angle,
    p_integ,
    select_positive_root,
    solve_quadratic,
    v_integ,
)
from two_point_interpolation.state import (
    AccelConstraints,
    Inputs,
    JerkConstraints,
    SetupTracker,
    Stage,
)
from two_point_interpolation.trajectory import Phase, Trajectory, build_phases


class TestIntegration:
    def test_constant_acceleration(self):
        assert v_integ(1.0, 2.0, 3.0) == 7.0
        assert p_integ(0.5, 1.0, 2.0, 3.0) == 0.5 + 3.0 + 9.0

    def test_jerk_reduces_to_acceleration(self):
        p, v, a = integrate_jerk(0.5, 1.0, 2.0, 0.0, 3.0)
        assert (p, v, a) == (p_integ(0.5, 1.0, 2.0, 3.0), v_integ(1.0, 2.0, 3.0), 2.0)

    def test_constant_jerk(self):
        p, v, a = integrate_jerk(0.0, 0.0, 0.0, 6.0, 2.0)
        assert p == pytest.approx(8.0)
        assert v == pytest.approx(12.0)
        assert a == pytest.approx(12.0)


class TestNormalizeAngle:
    @pytest.mark.parametrize(
        "angle, expected",
        [
            (0.0, 0.0),
            (math.pi / 2, math.pi / 2),
            (math.pi, -math.pi),
            (-math.pi, -math.pi),
            (3 * math.pi / 2, -math.pi / 2),
            (-3 * math.pi / 2, math.pi / 2),
            (7.0, 7.0 - 2 * math.pi),
        ],
    )
    def test_values(self, angle, expected):
        assert normalize_angle(angle) == pytest.approx(expected)

    def test_range(self):
        for angle in np.linspace(-20.0, 20.0, 401):
            wrapped = normalize_angle(angle)
            assert -math.pi <= wrapped < math.pi
            assert math.isclose(math.cos(wrapped), math.cos(angle), abs_tol=1e-9)


class TestRoots:
    def test_solve_quadratic(self):
        discriminant, plus, minus = solve_quadratic(1.0, -3.0, 2.0)
        assert discriminant == 1.0
        assert (plus, minus) == (2.0, 1.0)

    def test_no_real_roots(self):
        discriminant, plus, minus = solve_quadratic(1.0, 0.0, 1.0)
        assert discriminant < 0
        assert math.isnan(plus) and math.isnan(minus)

    def test_both_positive_picks_smaller(self):
        assert select_positive_root(2.0, 1.0) == 1.0
        assert select_positive_root(1.0, 2.0) == 1.0

    def test_single_positive(self):
        assert select_positive_root(2.0, -1.0) == 2.0
        assert select_positive_root(-2.0, 3.0) == 3.0

    def test_none_positive(self):
        assert select_positive_root(-2.0, -1.0) is None
        assert select_positive_root(0.0, -1.0) is None


class TestDecelerationError:
    def _error(self, v0, ve, dp, dec, context):
        return deceleration_error(v0, ve, dp, dec, context, amax_accel=1.0, amax_decel=abs(dec), vmax=5.0)

    def test_near_boundary(self):
        error = self._error(10.0, 0.0, 49.5, 1.0, "discriminant")
        assert isinstance(error, InfeasibleTrajectoryError)
        assert str(error).startswith("No valid trajectory found:")
        assert "nearly equal" in str(error)

    def test_shortage(self):
        error = self._error(10.0, 0.0, 25.0, 1.0, "no_positive_solution")
        assert "Shortage: 25.000000 (100.000000%)" in str(error)

    @pytest.mark.parametrize(
        "context, start",
        [("discriminant", "No valid trajectory found (discriminant <= 0)"), ("no_positive_solution", "No positive time")],
    )
    def test_general(self, context, start):
        # Moving away from the target
        error = self._error(-1.0, 0.0, 10.0, 1.0, context)
        assert str(error).startswith(start)
        assert "Distance: 10.000000" in str(error)


class TestConstraints:
    def test_dec_max_defaults_to_amax(self):
        assert AccelConstraints(2.0, 5.0).dec_max == 2.0
        assert AccelConstraints(2.0, 5.0, 3.0).dec_max == 3.0

    @pytest.mark.parametrize("args", [(0.0, 1.0), (1.0, 0.0), (1.0, 1.0, 0.0), (float("nan"), 1.0)])
    def test_accel_rejects(self, args):
        with pytest.raises(InvalidArgumentError):
            AccelConstraints(*args)

    def test_jerk_rejects(self):
        with pytest.raises(InvalidArgumentError, match="All constraint values must be positive"):
            JerkConstraints(1.0, 1.0, 0.0)


class TestSetupTracker:
    def test_stages(self):
        tracker = SetupTracker(Inputs.TARGET | Inputs.CONSTRAINTS)
        assert tracker.stage is Stage.UNCONFIGURED

        tracker.mark(Inputs.TARGET)
        assert tracker.stage is Stage.CONFIGURING
        tracker.mark(Inputs.CONSTRAINTS)
        assert tracker.stage is Stage.READY
        tracker.mark_solved()
        assert tracker.stage is Stage.SOLVED
        tracker.mark(Inputs.TARGET)
        assert tracker.stage is Stage.READY

    def test_require_reports_first_missing(self):
        tracker = SetupTracker(Inputs.TARGET | Inputs.CONSTRAINTS | Inputs.INITIAL)
        tracker.mark(Inputs.TARGET)

        with pytest.raises(NotReadyError, match="Constraints not set"):
            tracker.require_inputs()

    def test_require_solved(self):
        tracker = SetupTracker(Inputs.TARGET)
        tracker.mark(Inputs.TARGET)

        with pytest.raises(NotReadyError, match="Trajectory not calculated"):
            tracker.require_solved()
        tracker.mark_solved()
        tracker.require_solved()


class TestTrajectory:
    def test_locate(self):
        phases = (
            Phase(duration=1.0, position=0.0, velocity=0.0, acceleration=1.0),
            Phase(duration=0.0, position=0.5, velocity=1.0, acceleration=0.0),
            Phase(duration=2.0, position=0.5, velocity=1.0, acceleration=-0.5),
        )
        trajectory = Trajectory(phases=phases, case_num=0)

        assert trajectory.duration == 3.0
        np.testing.assert_array_equal(trajectory.starts, [0.0, 1.0, 1.0])

        phase, tau = trajectory.locate(0.25)
        assert phase is phases[0] and tau == 0.25
        phase, tau = trajectory.locate(1.0)
        assert phase is phases[2] and tau == 0.0
        phase, tau = trajectory.locate(2.5)
        assert phase is phases[2] and tau == 1.5

    def test_empty(self):
        trajectory = Trajectory(phases=(), case_num=-1)
        assert trajectory.duration == 0.0
        assert trajectory.durations == []

    def test_build_phases_chains_states(self):
        phases = build_phases(1.0, 0.0, 0.0, [(1.0, 2.0), (1.0, -2.0)])

        assert phases[1].position == pytest.approx(1.0 + 2.0 / 6.0)
        assert phases[1].velocity == pytest.approx(1.0)
        assert phases[1].acceleration == pytest.approx(2.0)
        end = phases[1].exit_state()
        assert end.acceleration == pytest.approx(0.0)
        assert end.velocity == pytest.approx(2.0)
