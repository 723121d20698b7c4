"""Exceptions raised by the interpolation planners."""


class InterpolationError(Exception):
    """Base class for all planner errors."""


class InvalidArgumentError(InterpolationError, ValueError):
    """A constraint or boundary value is not acceptable."""


class NotReadyError(InterpolationError, RuntimeError):
    """Solving or sampling was attempted before all inputs were supplied."""


class InfeasibleTrajectoryError(InterpolationError, RuntimeError):
    """No trajectory satisfies the given boundary states and limits."""
