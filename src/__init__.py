"""Two-point interpolation package - closed-form minimum-time motion profiles.

Provides:
- Constant acceleration (trapezoidal velocity) planner with separate
  acceleration and deceleration limits
- Angle-wrapping adapter for the constant acceleration planner
- Constant jerk (S-curve) planner

Each planner follows the same lifecycle: set inputs, ``calc_trajectory()``
once, then ``get_point(t)`` any number of times.
"""

from .angle import TwoAngleInterpolation
from .constant_acc import TwoPointInterpolation
from .constant_jerk import TwoPointInterpolationJerk
from .errors import (
    InfeasibleTrajectoryError,
    InterpolationError,
    InvalidArgumentError,
    NotReadyError,
)
from .kinematics import DECEL_DISTANCE_TOLERANCE, normalize_angle
from .state import AccelConstraints, BoundaryState, JerkConstraints, Stage, TargetState
from .trajectory import JerkPoint, Phase, Point, Trajectory

__all__ = [
    # planners
    "TwoPointInterpolation",
    "TwoAngleInterpolation",
    "TwoPointInterpolationJerk",
    # errors
    "InterpolationError",
    "InvalidArgumentError",
    "NotReadyError",
    "InfeasibleTrajectoryError",
    # data
    "AccelConstraints",
    "JerkConstraints",
    "BoundaryState",
    "TargetState",
    "Stage",
    "Phase",
    "Trajectory",
    "Point",
    "JerkPoint",
    # helpers
    "DECEL_DISTANCE_TOLERANCE",
    "normalize_angle",
]
