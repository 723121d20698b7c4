"""Pytest fixtures for two_point_interpolation tests."""

import matplotlib

matplotlib.use("Agg")

import pytest

from two_point_interpolation import TwoPointInterpolation, TwoPointInterpolationJerk


@pytest.fixture
def basic_acc() -> TwoPointInterpolation:
    """Solved case 0 planner: 0 -> 10 with amax=dec_max=2, vmax=5."""
    interp = TwoPointInterpolation()
    interp.init(0.0, 10.0, 2.0, 5.0, 0.0, 0.0, 0.0, 2.0)
    interp.calc_trajectory()
    return interp


@pytest.fixture
def cruise_acc() -> TwoPointInterpolation:
    """Solved case 1 planner: 0 -> 50 with amax=2, dec_max=4, vmax=8."""
    interp = TwoPointInterpolation()
    interp.init(0.0, 50.0, 2.0, 8.0, 0.0, 0.0, 0.0, 4.0)
    interp.calc_trajectory()
    return interp


@pytest.fixture
def basic_jerk() -> TwoPointInterpolationJerk:
    """Solved case 0 jerk planner: 0 -> 2 with jmax=1, amax=vmax=10."""
    interp = TwoPointInterpolationJerk()
    interp.init(0.0, 2.0, 10.0, 10.0, 1.0)
    interp.calc_trajectory()
    return interp


@pytest.fixture
def constraints_yaml(tmp_path):
    """YAML parameter file in the constant acceleration format."""
    path = tmp_path / "constraints.yaml"
    path.write_text(
        "p0: 0.0\n"
        "pe: 10.0\n"
        "v0: 0.0\n"
        "ve: 0.0\n"
        "amax: 2.0\n"
        "vmax: 5.0\n"
        "t0: 0.0\n"
        "dt: 0.05\n"
        "verbose: false\n"
    )
    return path


@pytest.fixture
def constraints_jerk_yaml(tmp_path):
    """YAML parameter file in the constant jerk format (``ps`` instead of ``p0``)."""
    path = tmp_path / "constraints_jerk.yaml"
    path.write_text(
        "ps: 0.0\n"
        "pe: 2.0\n"
        "v0: 0.0\n"
        "ve: 0.0\n"
        "amax: 10.0\n"
        "vmax: 10.0\n"
        "jmax: 1.0\n"
        "t0: 0.0\n"
        "dt: 0.01\n"
        "verbose: false\n"
    )
    return path
