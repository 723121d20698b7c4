"""Two-point interpolation with constant jerk (S-curve).

Jerk profile for the unsaturated case::

    d^3x/dt^3
        ^
    max |--------            --------
        |       |            |
        +--------------------------------> t
        |       | t1         | 3 t1
    min |       --------------

The general profile has seven segments: +J for t1, an acceleration plateau
for t2, -J for t1, a cruise at vmax for t3, then the mirror image. Cases
drop the segments whose limit is not reached:

    case 0: neither the acceleration nor the velocity limit is reached
    case 1: velocity limit reached, acceleration limit not reached
    case 2: acceleration limit reached, velocity limit not reached
    case 3: both limits reached

The durations assume the motion starts and ends at rest (v0 = ve = 0).
Nonzero boundary velocities are accepted and used for the clamped states
outside [t0, t0 + te], but they do not enter the durations.
"""

import logging
import math
from typing import Sequence

import numpy as np

from .errors import InvalidArgumentError, NotReadyError
from .state import (
    BoundaryState,
    Inputs,
    JerkConstraints,
    SetupTracker,
    Stage,
    TargetState,
)
from .trajectory import JerkPoint, Trajectory, build_phases

logger = logging.getLogger(__name__)


class TwoPointInterpolationJerk:
    """Minimum-time jerk-limited planner between two rest positions."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self._tracker = SetupTracker(Inputs.TARGET | Inputs.CONSTRAINTS | Inputs.START)
        self._t0 = 0.0
        self._ps = 0.0
        self._initial: BoundaryState | None = None
        self._target: TargetState | None = None
        self._constraints: JerkConstraints | None = None
        self._trajectory: Trajectory | None = None
        self._t1 = 0.0
        self._t2 = 0.0
        self._t3 = 0.0

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------
    def set_initial_time(self, t0: float) -> None:
        self._t0 = t0
        self._tracker.mark(Inputs.NONE)

    def set_initial(self, t0: float, p0: float, v0: float = 0.0) -> None:
        self._t0 = t0
        self._initial = BoundaryState(t0, p0, v0)
        self._tracker.mark(Inputs.INITIAL | Inputs.START)

    def set_points(self, ps: float, pe: float) -> None:
        """Set start and end positions without an initial state.

        A target velocity set earlier is kept.
        """
        self._ps = ps
        ve = self._target.ve if self._target is not None else 0.0
        self._target = TargetState(pe, ve)
        self._tracker.mark(Inputs.TARGET | Inputs.START)

    def set_target(self, pe: float, ve: float = 0.0) -> None:
        self._target = TargetState(pe, ve)
        self._tracker.mark(Inputs.TARGET)

    def set_constraints(self, amax: float, vmax: float, jmax: float) -> None:
        self._constraints = JerkConstraints(amax, vmax, jmax)
        self._tracker.mark(Inputs.CONSTRAINTS)

    def set_max_constraints(self, max_constraints: Sequence[float]) -> None:
        """Set the limits from a ``[vmax, amax, jmax]`` sequence."""
        if len(max_constraints) != 3:
            raise InvalidArgumentError("max_constraints must contain [vmax, amax, jmax]")
        vmax, amax, jmax = max_constraints
        self.set_constraints(amax, vmax, jmax)

    def set(self, ps: float, pe: float, max_constraints: Sequence[float]) -> None:
        self.set_points(ps, pe)
        self.set_max_constraints(max_constraints)

    def init(
        self,
        p0: float,
        pe: float,
        amax: float,
        vmax: float,
        jmax: float,
        t0: float = 0.0,
        v0: float = 0.0,
        ve: float = 0.0,
    ) -> None:
        self.set_initial(t0, p0, v0)
        self.set_target(pe, ve)
        self.set_constraints(amax, vmax, jmax)

    @property
    def stage(self) -> Stage:
        return self._tracker.stage

    def is_initialized(self) -> bool:
        return self.stage is Stage.SOLVED

    # ------------------------------------------------------------------
    # Solve
    # ------------------------------------------------------------------
    def calc_trajectory(self) -> float:
        """Classify the profile and solve the segment durations.

        Returns:
            Total duration of the trajectory [s].

        Raises:
            NotReadyError: If target, constraints or start position are missing.
            InvalidArgumentError: If the positions coincide but the velocities
                differ.
        """
        self._tracker.require_inputs()
        ps, pe = self.start_position, self._target.pe
        v0, ve = self._boundary_velocities()

        dp = pe - ps
        if dp == 0:
            if ve != v0:
                raise InvalidArgumentError(
                    "Cannot have different velocities at the same position (dp=0, but dv!=0)"
                )
            self._t1 = self._t2 = self._t3 = 0.0
            self._trajectory = Trajectory(phases=(), case_num=-1)
            self._tracker.mark_solved()
            return 0.0

        if v0 != 0 or ve != 0:
            logger.warning(
                "Constant jerk durations assume rest at both ends; "
                "v0=%g and ve=%g only affect the clamped boundary states",
                v0,
                ve,
            )

        case_num, t1, t2, t3 = self._classify(abs(dp))
        self._t1, self._t2, self._t3 = t1, t2, t3

        jmax = self.jmax * float(np.sign(dp))
        segments = [
            (t1, jmax),
            (t2, 0.0),
            (t1, -jmax),
            (t3, 0.0),
            (t1, -jmax),
            (t2, 0.0),
            (t1, jmax),
        ]
        phases = build_phases(ps, 0.0, 0.0, _merge_segments(segments))
        self._trajectory = Trajectory(phases=phases, case_num=case_num)

        if self.verbose:
            logger.info("case %d %f", case_num, self._trajectory.duration)
            logger.info("dt %s", self._trajectory.durations)
        self._tracker.mark_solved()
        return self._trajectory.duration

    def _classify(self, distance: float) -> tuple[int, float, float, float]:
        """Return (case_num, t1, t2, t3).

        t1 is the constant-jerk segment, t2 the acceleration plateau and t3
        the cruise at vmax. The case 2 plateau solves
        ``distance = amax (t1 + t2)(2 t1 + t2)`` exactly, so it meets case 0 at
        ``t2 = 0`` (a ``t1**2 / 3`` term under the root would not).
        """
        amax, vmax, jmax = self.amax, self.vmax, self.jmax

        t1 = float(np.cbrt(distance / 2.0 / jmax))
        if t1 * jmax < amax:
            if t1 * jmax * t1 < vmax:
                return 0, t1, 0.0, 0.0
            return self._velocity_limited(distance)

        t1 = amax / jmax
        # distance = amax * (t1 + t2) * (2 t1 + t2)
        t2 = -1.5 * t1 + 0.5 * math.sqrt(4.0 * distance / amax + t1 * t1)
        t2 = max(t2, 0.0)
        if (t1 + t2) * amax < vmax:
            return 2, t1, t2, 0.0

        if vmax / amax < t1:
            # vmax is hit before the jerk ramp can reach amax.
            return self._velocity_limited(distance)
        t2 = vmax / amax - t1
        t3 = max(distance / vmax - 2.0 * t1 - t2, 0.0)
        return 3, t1, t2, t3

    def _velocity_limited(self, distance: float) -> tuple[int, float, float, float]:
        t1 = math.sqrt(self.vmax / self.jmax)
        t3 = max(distance / self.vmax - 2.0 * t1, 0.0)
        return 1, t1, 0.0, t3

    def solve(
        self,
        p0: float,
        pe: float,
        amax: float,
        vmax: float,
        jmax: float,
        t0: float = 0.0,
        v0: float = 0.0,
        ve: float = 0.0,
    ) -> float:
        """Set every input at once and solve. Returns the total duration."""
        self.init(p0, pe, amax, vmax, jmax, t0, v0, ve)
        return self.calc_trajectory()

    # ------------------------------------------------------------------
    # Sampling
    # ------------------------------------------------------------------
    def get_point(self, t: float) -> JerkPoint:
        """Sample (position, velocity, acceleration, jerk) at absolute time ``t``."""
        self._tracker.require_solved()
        ps = self.start_position
        v0, ve = self._boundary_velocities()
        trajectory = self._trajectory

        if trajectory.case_num == -1:
            return JerkPoint(ps, v0, 0.0, 0.0)

        tau = t - self._t0
        if tau < 0:
            return JerkPoint(ps, v0, 0.0, 0.0)
        if tau >= trajectory.duration:
            return JerkPoint(self._target.pe, ve, 0.0, 0.0)

        phase, tau_local = trajectory.locate(tau)
        return phase.evaluate(tau_local)

    def sample(self, times) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """Evaluate ``get_point`` at every time in ``times``.

        Returns:
            pos, vel, acc, jerk: (N,) arrays
        """
        points = np.array([self.get_point(float(t)) for t in np.atleast_1d(times)], dtype=float)
        points = points.reshape(-1, 4)
        return points[:, 0], points[:, 1], points[:, 2], points[:, 3]

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    def _boundary_velocities(self) -> tuple[float, float]:
        v0 = self._initial.v0 if self._initial is not None else 0.0
        ve = self._target.ve if self._target is not None else 0.0
        return v0, ve

    @property
    def start_position(self) -> float:
        if self._initial is not None:
            return self._initial.p0
        return self._ps

    @property
    def constraints(self) -> JerkConstraints:
        if self._constraints is None:
            raise NotReadyError("Constraints not set. Call set_constraints() first.")
        return self._constraints

    @property
    def amax(self) -> float:
        return self.constraints.amax

    @property
    def vmax(self) -> float:
        return self.constraints.vmax

    @property
    def jmax(self) -> float:
        return self.constraints.jmax

    @property
    def t0(self) -> float:
        return self._t0

    @property
    def jerk_time(self) -> float:
        """Duration of each constant-jerk ramp (t1)."""
        return self._t1

    @property
    def accel_plateau_time(self) -> float:
        """Duration of each constant-acceleration plateau (t2)."""
        return self._t2

    @property
    def cruise_time(self) -> float:
        """Duration of the constant-velocity cruise (t3)."""
        return self._t3

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


def _merge_segments(segments: list[tuple[float, float]]) -> list[tuple[float, float]]:
    """Drop empty segments and join neighbours holding the same jerk."""
    merged: list[tuple[float, float]] = []
    for duration, jerk in segments:
        if duration <= 0:
            continue
        if merged and merged[-1][1] == jerk:
            merged[-1] = (merged[-1][0] + duration, jerk)
        else:
            merged.append((duration, jerk))
    return merged
