"""Closed-form kinematic helpers shared by the planners.

Constant-derivative integration, angle wrapping, quadratic root
selection and the diagnosis used when a deceleration cannot be planned.
"""

import math

import numpy as np

from .errors import InfeasibleTrajectoryError

# Relative tolerance when comparing the required deceleration distance
# against the available distance (2 %).
DECEL_DISTANCE_TOLERANCE = 0.02


def v_integ(v0: float, a: float, dt: float) -> float:
    return v0 + a * dt


def p_integ(p0: float, v0: float, a: float, dt: float) -> float:
    return p0 + v0 * dt + 0.5 * a * dt * dt


def integrate_jerk(
    p0: float, v0: float, a0: float, j: float, dt: float
) -> tuple[float, float, float]:
    """Integrate a constant jerk segment.

    Args:
        p0: Position at segment entry.
        v0: Velocity at segment entry.
        a0: Acceleration at segment entry.
        j: Constant jerk held over the segment.
        dt: Time elapsed since segment entry.

    Returns:
        (position, velocity, acceleration) after ``dt``.
    """
    dt2 = dt * dt
    p = p0 + v0 * dt + 0.5 * a0 * dt2 + j * dt2 * dt / 6.0
    v = v0 + a0 * dt + 0.5 * j * dt2
    a = a0 + j * dt
    return p, v, a


def normalize_angle(angle: float) -> float:
    """Wrap an angle into [-pi, pi)."""
    output = math.fmod(angle + math.pi, 2 * math.pi)
    if output < 0:
        output += 2 * math.pi
    return output - math.pi


def solve_quadratic(a: float, b: float, c: float) -> tuple[float, float, float]:
    """Return (discriminant, plus_root, minus_root) of a*t^2 + b*t + c = 0.

    Roots are NaN when the discriminant is not positive.
    """
    discriminant = b * b - 4 * a * c
    if discriminant <= 0:
        return discriminant, math.nan, math.nan
    sqrt_disc = math.sqrt(discriminant)
    return (
        discriminant,
        (-b + sqrt_disc) / (2 * a),
        (-b - sqrt_disc) / (2 * a),
    )


def select_positive_root(plus_root: float, minus_root: float) -> float | None:
    """Pick the phase duration among two quadratic roots.

    Both positive: the smaller one (shorter acceleration phase). Otherwise
    the single positive root, or None when neither is positive.
    """
    if plus_root > 0 and minus_root > 0:
        return min(plus_root, minus_root)
    if plus_root > 0:
        return plus_root
    if minus_root > 0:
        return minus_root
    return None


def deceleration_error(
    v0: float,
    ve: float,
    dp: float,
    dec: float,
    context: str,
    amax_accel: float,
    amax_decel: float,
    vmax: float,
) -> InfeasibleTrajectoryError:
    """Build the error for a trajectory that cannot be planned.

    Distinguishes three situations:
        - moving toward the target with a deceleration distance within
          ``DECEL_DISTANCE_TOLERANCE`` of the remaining distance, which
          usually means the same goal was re-sent while in motion;
        - moving toward the target with a deceleration distance that is
          larger than the remaining distance;
        - a general mismatch between the limits and the end conditions.

    Args:
        v0: Initial velocity.
        ve: Target velocity.
        dp: Signed displacement pe - p0.
        dec: Signed deceleration magnitude.
        context: "discriminant" or "no_positive_solution".
        amax_accel: Acceleration limit.
        amax_decel: Deceleration limit.
        vmax: Velocity limit.

    Returns:
        The exception to raise.
    """
    sign = float(np.sign(dp))
    distance = abs(dp)
    decel_distance = (v0 * v0 - ve * ve) / (2 * abs(dec))
    toward_target = sign * v0 > 0

    if toward_target and abs(decel_distance - distance) < distance * DECEL_DISTANCE_TOLERANCE:
        prefix = (
            "No valid trajectory found"
            if context == "discriminant"
            else "Insufficient distance for trajectory planning"
        )
        return InfeasibleTrajectoryError(
            f"{prefix}: current velocity {abs(v0):f} requires approximately "
            f"{decel_distance:f} distance to reach target velocity {abs(ve):f}, "
            f"nearly equal to available distance {distance:f}. "
            "This leaves no room for trajectory planning. "
            "This typically occurs when the same goal is resent during motion. "
            "Consider checking if the goal has changed before recalculating trajectory."
        )

    if toward_target and decel_distance > distance:
        shortage = decel_distance - distance
        return InfeasibleTrajectoryError(
            f"Insufficient distance to decelerate: current velocity {abs(v0):f} "
            f"requires {decel_distance:f} distance to reach target velocity "
            f"{abs(ve):f}, but only {distance:f} available. "
            f"Shortage: {shortage:f} ({shortage / distance * 100:f}%). "
            "Consider reducing initial velocity or increasing distance."
        )

    if context == "discriminant":
        return InfeasibleTrajectoryError(
            "No valid trajectory found (discriminant <= 0). "
            "The constraints might be too restrictive for the given end conditions. "
            f"Distance: {distance:f}, v0: {abs(v0):f}, ve: {abs(ve):f}, "
            f"acc_max: {amax_accel:f}, dec_max: {amax_decel:f}, vmax: {vmax:f}"
        )
    return InfeasibleTrajectoryError(
        "No positive time solution found for trajectory. "
        f"Distance: {distance:f}, v0: {abs(v0):f}, ve: {abs(ve):f}, "
        f"acc_max: {amax_accel:f}, dec_max: {amax_decel:f}"
    )
