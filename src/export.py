"""Sampling and file output for solved profiles.

Writes sampled ``(t, [jerk,] acc, vel, pos)`` rows to a whitespace-delimited
data file, a gnuplot script that plots them, a JSON dump and a matplotlib
figure.
"""

import json
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes

# Column order in data files, top to bottom in plots.
_COLUMN_ORDER = ("jerk", "acceleration", "velocity", "position")

_TITLES = {
    "jerk": "jerk[m/s^3]",
    "acceleration": "acc[m/s^2]",
    "velocity": "vel[m/s]",
    "position": "pos[m]",
}


def sample_times(t0: float, te: float, dt: float) -> np.ndarray:
    """Times from t0 to t0 + te inclusive, spaced by dt."""
    if not dt > 0:
        raise ValueError(f"dt must be positive, got {dt}")
    num = int(np.floor(te / dt + 1e-9)) + 1
    return t0 + dt * np.arange(num)


def sample_profile(planner, t0: float, te: float, dt: float) -> tuple[np.ndarray, dict[str, np.ndarray]]:
    """Sample ``planner.get_point`` over [t0, t0 + te].

    Returns:
        times: (N,) sample times
        columns: mapping from quantity name to (N,) samples, ordered
            jerk (if present), acceleration, velocity, position.
    """
    times = sample_times(t0, te, dt)
    points = [planner.get_point(float(t)) for t in times]
    fields = points[0]._fields
    data = np.array(points, dtype=float).reshape(len(times), len(fields))
    columns = {name: data[:, fields.index(name)] for name in _COLUMN_ORDER if name in fields}
    return times, columns


def save_data_file(path: str | Path, times: np.ndarray, columns: dict[str, np.ndarray]) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    table = np.column_stack([times, *columns.values()])
    np.savetxt(path, table, fmt="%.6f", delimiter=" ")


def _safe_range(data: np.ndarray) -> tuple[float, float]:
    low, high = float(np.min(data)), float(np.max(data))
    span = high - low
    if span < 1e-10:
        return low - 1.0, high + 1.0
    return low - 0.1 * span, high + 0.1 * span


def write_gnuplot_script(
    script_path: str | Path,
    data_path: str | Path,
    columns: dict[str, np.ndarray],
    image_name: str = "graph.png",
) -> None:
    """Write a gnuplot script drawing one panel per column of the data file."""
    lines = [
        "set terminal png",
        f"set output '{image_name}'",
        "set grid",
        f"set multiplot layout {len(columns)},1",
    ]
    for index, (name, data) in enumerate(columns.items(), start=2):
        low, high = _safe_range(data)
        lines.append(f"set yrange [{low}:{high}]")
        lines.append(f"plot '{data_path}' using 1:{index} with lines title '{_TITLES[name]}'")
    lines.append("unset multiplot")

    Path(script_path).parent.mkdir(parents=True, exist_ok=True)
    with open(script_path, "w") as f:
        f.write("\n".join(lines) + "\n")


def write_to_json(
    times: np.ndarray,
    columns: dict[str, np.ndarray],
    dt: float,
    json_path: str | Path = "trajectory.json",
) -> None:
    """
    Save the sampled trajectory to a JSON file.
    Structure:
    {
        "duration": float,
        "dt": float,
        "columns": ["t", "acceleration", ...],
        "frames": [[t, acc, vel, pos], ...]
    }
    """
    frames = np.column_stack([times, *columns.values()]).tolist()
    data = {
        "duration": float(times[-1] - times[0]) if len(times) else 0.0,
        "dt": dt,
        "columns": ["t", *columns.keys()],
        "frames": frames,
    }

    Path(json_path).parent.mkdir(parents=True, exist_ok=True)
    with open(json_path, "w") as f:
        json.dump(data, f, indent=4)

    print(f"Trajectory JSON saved to {json_path}")


def plot(
    times: np.ndarray,
    columns: dict[str, np.ndarray],
    show: bool = False,
    plot_path: str | Path | None = None,
):
    """Plot the sampled profile, one subplot per quantity."""

    fig, axes = plt.subplots(len(columns), 1, figsize=(10, 3 * len(columns)), sharex=True)
    axes = np.atleast_1d(axes)

    for ax, (name, data) in zip(axes, columns.items()):
        _plot_single_ax(ax, times, data, name.capitalize(), "Time [s]", _TITLES[name])

    plt.tight_layout()

    if plot_path:
        Path(plot_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(plot_path)
        print(f"Plot saved to {plot_path}")

    if show:
        if plt.get_backend().lower() == "agg":
            print("\n[WARNING] Cannot show plot: no interactive matplotlib backend found.")
            print("Please specify a file path with '--plot-path' to save the plot instead.\n")
        else:
            plt.show()

    return fig


def _plot_single_ax(ax: Axes, times: np.ndarray, data: np.ndarray, title: str, xlabel: str, ylabel: str):
    ax.plot(times, data)
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    ax.set_title(title)
    ax.grid(True)
