"""Planner inputs and the setup state machine.

A planner moves through ``Stage.UNCONFIGURED -> CONFIGURING -> READY ->
SOLVED``. Inputs may be supplied in any order; calling any setter again
drops a SOLVED planner back to READY so the trajectory is recomputed.
"""

from dataclasses import dataclass
from enum import Enum, Flag, auto

from .errors import InvalidArgumentError, NotReadyError


class Stage(Enum):
    UNCONFIGURED = "unconfigured"
    CONFIGURING = "configuring"
    READY = "ready"
    SOLVED = "solved"


class Inputs(Flag):
    NONE = 0
    TARGET = auto()
    CONSTRAINTS = auto()
    INITIAL = auto()
    START = auto()  # start position known, from the initial state or a point pair


_MISSING_HINTS = {
    Inputs.TARGET: "End point not set. Call set_target() first.",
    Inputs.CONSTRAINTS: "Constraints not set. Call set_constraints() first.",
    Inputs.INITIAL: "Initial state not set. Call set_initial() first.",
    Inputs.START: "Start position not set. Call set_initial() or set_points() first.",
}


class SetupTracker:
    """Runtime guard over which inputs a planner has received."""

    def __init__(self, required: Inputs):
        self.required = required
        self.supplied = Inputs.NONE
        self._solved = False

    def mark(self, inputs: Inputs) -> None:
        self.supplied |= inputs
        self._solved = False

    def has(self, inputs: Inputs) -> bool:
        return (self.supplied & inputs) == inputs

    @property
    def stage(self) -> Stage:
        if self._solved:
            return Stage.SOLVED
        if self.has(self.required):
            return Stage.READY
        if self.supplied:
            return Stage.CONFIGURING
        return Stage.UNCONFIGURED

    def require_inputs(self) -> None:
        """Raise NotReadyError naming the first missing input."""
        for item in (Inputs.TARGET, Inputs.CONSTRAINTS, Inputs.INITIAL, Inputs.START):
            if item in self.required and not self.has(item):
                raise NotReadyError(_MISSING_HINTS[item])

    def mark_solved(self) -> None:
        self._solved = True

    def require_solved(self) -> None:
        if not self._solved:
            self.require_inputs()
            raise NotReadyError("Trajectory not calculated. Call calc_trajectory() first.")


def _require_positive(name: str, value: float) -> None:
    if not value > 0:
        raise InvalidArgumentError(f"{name} must be positive, got {value}")


@dataclass(frozen=True)
class AccelConstraints:
    """Limits for the constant acceleration planner.

    ``dec_max`` defaults to ``amax`` when omitted.
    """

    amax: float
    vmax: float
    dec_max: float | None = None

    def __post_init__(self):
        _require_positive("amax", self.amax)
        _require_positive("vmax", self.vmax)
        if self.dec_max is None:
            object.__setattr__(self, "dec_max", self.amax)
        else:
            _require_positive("dec_max", self.dec_max)


@dataclass(frozen=True)
class JerkConstraints:
    """Limits for the constant jerk planner."""

    amax: float
    vmax: float
    jmax: float

    def __post_init__(self):
        if not (self.amax > 0 and self.vmax > 0 and self.jmax > 0):
            raise InvalidArgumentError(
                "All constraint values must be positive, got "
                f"amax={self.amax}, vmax={self.vmax}, jmax={self.jmax}"
            )


@dataclass(frozen=True)
class BoundaryState:
    t0: float
    p0: float
    v0: float = 0.0


@dataclass(frozen=True)
class TargetState:
    pe: float
    ve: float = 0.0
