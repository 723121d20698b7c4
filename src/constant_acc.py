"""Two-point interpolation with constant acceleration (trapezoidal velocity).

Velocity profile::

    v
    ^        vmax
    |      ________
    |     /        \\
    |    /          \\
    |   /            \\ ve
    |  v0
    +---------------------> t
       t1   cruise   dec

Case 0 accelerates at ``amax`` and decelerates at ``dec_max`` without
reaching ``vmax``. Case 1 additionally cruises at ``vmax``.
"""

import logging

import numpy as np

from .errors import InfeasibleTrajectoryError, InvalidArgumentError, NotReadyError
from .kinematics import (
    deceleration_error,
    p_integ,
    select_positive_root,
    solve_quadratic,
    v_integ,
)
from .state import (
    AccelConstraints,
    BoundaryState,
    Inputs,
    SetupTracker,
    Stage,
    TargetState,
)
from .trajectory import Phase, Point, Trajectory

logger = logging.getLogger(__name__)

# Slack allowed when checking that the deceleration phase slows toward ve.
_VELOCITY_SLACK = 1e-9


class TwoPointInterpolation:
    """Minimum-time bang-bang planner between two position/velocity states.

    Usage::

        interp = TwoPointInterpolation()
        interp.init(p0=0.0, pe=10.0, amax=2.0, vmax=5.0)
        te = interp.calc_trajectory()
        pos, vel, acc = interp.get_point(0.5 * te)
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self._tracker = SetupTracker(Inputs.TARGET | Inputs.CONSTRAINTS | Inputs.INITIAL)
        self._initial: BoundaryState | None = None
        self._target: TargetState | None = None
        self._constraints: AccelConstraints | None = None
        self._trajectory: Trajectory | None = None

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------
    def set_initial(self, t0: float, p0: float, v0: float = 0.0) -> None:
        self._initial = BoundaryState(t0, p0, v0)
        self._tracker.mark(Inputs.INITIAL)

    def set_target(self, pe: float, ve: float = 0.0) -> None:
        self._target = TargetState(pe, ve)
        self._tracker.mark(Inputs.TARGET)

    def set_constraints(self, amax: float, vmax: float, dec_max: float | None = None) -> None:
        """Set the limits.

        Args:
            amax: Maximum acceleration magnitude.
            vmax: Maximum velocity magnitude.
            dec_max: Maximum deceleration magnitude, ``amax`` if omitted.

        Raises:
            InvalidArgumentError: If any supplied value is not positive.
        """
        self._constraints = AccelConstraints(amax, vmax, dec_max)
        self._tracker.mark(Inputs.CONSTRAINTS)

    def init(
        self,
        p0: float,
        pe: float,
        amax: float,
        vmax: float,
        t0: float = 0.0,
        v0: float = 0.0,
        ve: float = 0.0,
        dec_max: float | None = None,
    ) -> None:
        self.set_initial(t0, p0, v0)
        self.set_target(pe, ve)
        self.set_constraints(amax, vmax, dec_max)

    @property
    def stage(self) -> Stage:
        return self._tracker.stage

    def is_initialized(self) -> bool:
        return self.stage is Stage.SOLVED

    # ------------------------------------------------------------------
    # Solve
    # ------------------------------------------------------------------
    def calc_trajectory(self) -> float:
        """Solve the phase durations.

        Returns:
            Total duration of the trajectory [s].

        Raises:
            NotReadyError: If target, constraints or initial state are missing.
            InvalidArgumentError: If the positions coincide but the velocities
                differ.
            InfeasibleTrajectoryError: If no profile satisfies the limits.
        """
        self._tracker.require_inputs()
        t0, p0, v0 = self._initial.t0, self._initial.p0, self._initial.v0
        pe, ve = self._target.pe, self._target.ve

        dp = pe - p0
        if dp == 0:
            if ve != v0:
                raise InvalidArgumentError(
                    "Cannot have different velocities at the same position (dp=0, but dv!=0)"
                )
            self._trajectory = Trajectory(phases=(), case_num=-1)
            self._tracker.mark_solved()
            return 0.0

        sign = float(np.sign(dp))
        acc = self.amax_accel * sign
        dec = self.amax_decel * sign

        ratio = acc / dec
        a_coeff = 0.5 * acc * (1 + ratio)
        b_coeff = v0 * (1 + ratio)
        c_coeff = -dp + (v0 * v0 - ve * ve) / (2 * dec)

        discriminant, dt_plus, dt_minus = solve_quadratic(a_coeff, b_coeff, c_coeff)
        if discriminant <= 0:
            raise self._deceleration_error(dp, dec, "discriminant")

        dt01 = select_positive_root(dt_plus, dt_minus)
        if dt01 is None:
            raise self._deceleration_error(dp, dec, "no_positive_solution")

        v1 = v_integ(v0, acc, dt01)
        if abs(v1) < self.vmax:
            case_num = 0
            phases = self._accel_decel_phases(p0, v0, ve, acc, dec, dt01)
        else:
            case_num = 1
            phases = self._cruise_phases(p0, v0, pe, ve, acc, dec, sign)

        self._trajectory = Trajectory(phases=phases, case_num=case_num)
        if self.verbose:
            self._log_trajectory()
        self._tracker.mark_solved()
        return self._trajectory.duration

    def solve(
        self,
        p0: float,
        pe: float,
        amax: float,
        vmax: float,
        t0: float = 0.0,
        v0: float = 0.0,
        ve: float = 0.0,
        dec_max: float | None = None,
    ) -> float:
        """Set every input at once and solve. Returns the total duration."""
        self.init(p0, pe, amax, vmax, t0, v0, ve, dec_max)
        return self.calc_trajectory()

    def _accel_decel_phases(self, p0, v0, ve, acc, dec, dt01) -> tuple[Phase, ...]:
        v1 = v_integ(v0, acc, dt01)
        self._check_reaches_target_velocity(v1, ve, acc)
        p1 = p_integ(p0, v0, acc, dt01)
        dt1e = abs((v1 - ve) / dec)
        return (
            Phase(duration=dt01, position=p0, velocity=v0, acceleration=acc),
            Phase(duration=dt1e, position=p1, velocity=v1, acceleration=-dec),
        )

    def _cruise_phases(self, p0, v0, pe, ve, acc, dec, sign) -> tuple[Phase, ...]:
        v1 = self.vmax * sign
        dt01 = (v1 - v0) / acc
        if dt01 < 0:
            raise InfeasibleTrajectoryError(
                f"Initial velocity {abs(v0):f} exceeds vmax ({self.vmax:f}) "
                "in the direction of motion. Consider reducing initial velocity."
            )
        self._check_reaches_target_velocity(v1, ve, acc)
        p1 = p_integ(p0, v0, acc, dt01)

        dt2e = abs((v1 - ve) / dec)
        dp2e = p_integ(0.0, v1, -dec, dt2e)

        # Analytically non-negative; a negative value means floating point
        # breakdown or inconsistent inputs.
        dt12 = (pe - p1 - dp2e) / v1
        if dt12 < 0:
            raise InfeasibleTrajectoryError(
                "Invalid trajectory: cannot reach target with given constraints. "
                f"Distance too short ({abs(pe - p0):f}) for vmax ({self.vmax:f}). "
                "Consider reducing vmax or increasing distance."
            )
        p2 = pe - dp2e
        return (
            Phase(duration=dt01, position=p0, velocity=v0, acceleration=acc),
            Phase(duration=dt12, position=p1, velocity=v1, acceleration=0.0),
            Phase(duration=dt2e, position=p2, velocity=v1, acceleration=-dec),
        )

    def _check_reaches_target_velocity(self, v_peak, ve, acc) -> None:
        # The last phase decelerates, so ve must not lie beyond the peak velocity.
        if np.sign(acc) * (v_peak - ve) < -_VELOCITY_SLACK * max(1.0, abs(ve)):
            raise InfeasibleTrajectoryError(
                f"Target velocity {abs(ve):f} cannot be reached: peak velocity is "
                f"{abs(v_peak):f} (vmax: {self.vmax:f}, acc_max: {self.amax_accel:f}). "
                "Consider reducing target velocity or increasing distance."
            )

    def _deceleration_error(self, dp, dec, context) -> InfeasibleTrajectoryError:
        return deceleration_error(
            self._initial.v0,
            self._target.ve,
            dp,
            dec,
            context,
            amax_accel=self.amax_accel,
            amax_decel=self.amax_decel,
            vmax=self.vmax,
        )

    def _log_trajectory(self) -> None:
        trajectory = self._trajectory
        logger.info("case %d", trajectory.case_num)
        logger.info("dt %s", [phase.duration for phase in trajectory.phases])
        logger.info("a %s", [phase.acceleration for phase in trajectory.phases])
        logger.info("v %s", [phase.velocity for phase in trajectory.phases])
        logger.info("p %s", [phase.position for phase in trajectory.phases])

    # ------------------------------------------------------------------
    # Sampling
    # ------------------------------------------------------------------
    def get_point(self, t: float) -> Point:
        """Sample (position, velocity, acceleration) at absolute time ``t``.

        Times before ``t0`` return the initial state, times at or after the
        end return the target state, both with zero acceleration.
        """
        self._tracker.require_solved()
        t0, p0, v0 = self._initial.t0, self._initial.p0, self._initial.v0
        trajectory = self._trajectory

        if trajectory.case_num == -1:
            return Point(p0, v0, 0.0)

        tau = t - t0
        if tau < 0:
            return Point(p0, v0, 0.0)
        if tau >= trajectory.duration:
            return Point(self._target.pe, self._target.ve, 0.0)

        phase, tau_local = trajectory.locate(tau)
        return Point(
            p_integ(phase.position, phase.velocity, phase.acceleration, tau_local),
            v_integ(phase.velocity, phase.acceleration, tau_local),
            phase.acceleration,
        )

    def sample(self, times) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Evaluate ``get_point`` at every time in ``times``.

        Returns:
            pos: (N,) Position array
            vel: (N,) Velocity array
            acc: (N,) Acceleration array
        """
        points = np.array([self.get_point(float(t)) for t in np.atleast_1d(times)], dtype=float)
        points = points.reshape(-1, 3)
        return points[:, 0], points[:, 1], points[:, 2]

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def constraints(self) -> AccelConstraints:
        if self._constraints is None:
            raise NotReadyError("Constraints not set. Call set_constraints() first.")
        return self._constraints

    @property
    def vmax(self) -> float:
        return self.constraints.vmax

    @property
    def amax_accel(self) -> float:
        return self.constraints.amax

    @property
    def amax_decel(self) -> float:
        return self.constraints.dec_max

    @property
    def initial(self) -> BoundaryState | None:
        return self._initial

    @property
    def t0(self) -> float:
        if self._initial is None:
            raise NotReadyError("Initial state not set. Call set_initial() first.")
        return self._initial.t0

    @property
    def target(self) -> TargetState | None:
        return self._target

    @property
    def trajectory(self) -> Trajectory | None:
        return self._trajectory

    @property
    def case_num(self) -> int:
        self._tracker.require_solved()
        return self._trajectory.case_num

    @property
    def te(self) -> float:
        self._tracker.require_solved()
        return self._trajectory.duration

    @property
    def dt(self) -> list[float]:
        """Phase durations of the solved trajectory."""
        self._tracker.require_solved()
        return self._trajectory.durations
