"""Piecewise constant-derivative trajectories."""

from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np

from .kinematics import integrate_jerk


class Point(NamedTuple):
    position: float
    velocity: float
    acceleration: float


class JerkPoint(NamedTuple):
    position: float
    velocity: float
    acceleration: float
    jerk: float


@dataclass(frozen=True)
class Phase:
    """Interval with one derivative held constant.

    Attributes:
        duration: Length of the phase [s], never negative.
        position: Position at phase entry.
        velocity: Velocity at phase entry.
        acceleration: Acceleration at phase entry (held constant when
            ``jerk`` is zero).
        jerk: Jerk held over the phase.
    """

    duration: float
    position: float
    velocity: float
    acceleration: float
    jerk: float = 0.0

    def evaluate(self, tau: float) -> JerkPoint:
        """State ``tau`` seconds after phase entry."""
        p, v, a = integrate_jerk(self.position, self.velocity, self.acceleration, self.jerk, tau)
        return JerkPoint(p, v, a, self.jerk)

    def exit_state(self) -> JerkPoint:
        return self.evaluate(self.duration)


@dataclass(frozen=True)
class Trajectory:
    """Ordered phases of a solved profile.

    ``case_num`` identifies the profile topology; -1 is the degenerate
    single-point trajectory with no phases.
    """

    phases: tuple[Phase, ...]
    case_num: int
    starts: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        durations = [phase.duration for phase in self.phases]
        object.__setattr__(self, "starts", np.concatenate(([0.0], np.cumsum(durations)))[:-1])

    @property
    def duration(self) -> float:
        return float(sum(phase.duration for phase in self.phases))

    @property
    def durations(self) -> list[float]:
        return [phase.duration for phase in self.phases]

    def locate(self, tau: float) -> tuple[Phase, float]:
        """Return the phase containing ``tau`` and the phase-local time.

        ``tau`` must lie in [0, duration).
        """
        index = int(np.searchsorted(self.starts, tau, side="right")) - 1
        index = min(max(index, 0), len(self.phases) - 1)
        return self.phases[index], tau - float(self.starts[index])


def build_phases(
    p0: float, v0: float, a0: float, segments: list[tuple[float, float]]
) -> tuple[Phase, ...]:
    """Chain constant-jerk segments into phases by integrating entry states.

    Args:
        p0: Start position.
        v0: Start velocity.
        a0: Start acceleration.
        segments: (duration, jerk) per segment.

    Returns:
        Phases in order.
    """
    phases = []
    p, v, a = p0, v0, a0
    for duration, jerk in segments:
        phase = Phase(duration=duration, position=p, velocity=v, acceleration=a, jerk=jerk)
        phases.append(phase)
        p, v, a, _ = phase.exit_state()
    return tuple(phases)
