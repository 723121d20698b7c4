"""Angle interpolation on top of the constant acceleration planner.

Positions are wrapped into [-pi, pi) and the planner follows the shortest
signed angular difference between start and end.
"""

from .constant_acc import TwoPointInterpolation
from .kinematics import normalize_angle
from .trajectory import Point


class TwoAngleInterpolation:
    """Adapter that normalizes angles around an owned ``TwoPointInterpolation``."""

    def __init__(self, verbose: bool = False, planner: TwoPointInterpolation | None = None):
        self.planner = planner if planner is not None else TwoPointInterpolation(verbose)

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
        p0n = normalize_angle(p0)
        pen = normalize_angle(pe)
        dp = normalize_angle(pen - p0n)

        self.planner.set_initial(t0, p0n, v0)
        self.planner.set_target(p0n + dp, ve)
        self.planner.set_constraints(amax, vmax, dec_max)

    def calc_trajectory(self) -> float:
        return self.planner.calc_trajectory()

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
        self.init(p0, pe, amax, vmax, t0, v0, ve, dec_max)
        return self.planner.calc_trajectory()

    def get_point(self, t: float, normalize: bool = True) -> Point:
        """Sample the planner; the position is wrapped unless ``normalize`` is False."""
        point = self.planner.get_point(t)
        if normalize:
            return point._replace(position=normalize_angle(point.position))
        return point

    def is_initialized(self) -> bool:
        return self.planner.is_initialized()

    @property
    def te(self) -> float:
        return self.planner.te

    @property
    def dt(self) -> list[float]:
        return self.planner.dt

    @property
    def case_num(self) -> int:
        return self.planner.case_num
