import logging
import shutil
import subprocess
import sys
from typing import Annotated, Union

import matplotlib.pyplot as plt
import numpy as np
import tyro

from two_point_interpolation import (
    InterpolationError,
    TwoAngleInterpolation,
    TwoPointInterpolation,
    TwoPointInterpolationJerk,
)
from two_point_interpolation.config import (
    ConstantAccConfig,
    ConstantJerkConfig,
    resolve_config,
)
from two_point_interpolation.export import (
    plot,
    sample_profile,
    save_data_file,
    write_gnuplot_script,
    write_to_json,
)

ConfigType = Union[
    Annotated[ConstantAccConfig, tyro.conf.subcommand(name="acc")],
    Annotated[ConstantJerkConfig, tyro.conf.subcommand(name="jerk")],
]


def build_planner(config: ConstantAccConfig | ConstantJerkConfig):
    """Create and solve the planner described by ``config``.

    Returns:
        (planner, te) with ``te`` the planned duration.
    """
    if isinstance(config, ConstantJerkConfig):
        planner = TwoPointInterpolationJerk(verbose=config.verbose)
        te = planner.solve(
            config.p0,
            config.pe,
            config.amax,
            config.vmax,
            config.jmax,
            t0=config.t0,
            v0=config.v0,
            ve=config.ve,
        )
    else:
        planner = TwoAngleInterpolation(config.verbose) if config.angle else TwoPointInterpolation(config.verbose)
        te = planner.solve(
            config.p0,
            config.pe,
            config.amax,
            config.vmax,
            t0=config.t0,
            v0=config.v0,
            ve=config.ve,
            dec_max=config.dec_max,
        )
    return planner, te


def run_gnuplot(script_path) -> bool:
    if shutil.which("gnuplot") is None:
        print("gnuplot not found. Install gnuplot to generate plots automatically.")
        print(f"You can run: gnuplot {script_path}")
        return False
    result = subprocess.run(["gnuplot", str(script_path)], check=False)
    if result.returncode != 0:
        print("Warning: Failed to generate plot", file=sys.stderr)
        return False
    return True


def main(config: ConfigType) -> int:
    """Plan a two-point trajectory, sample it and write the outputs.

    Args:
        config: Profile configuration.

    Returns:
        Process exit code.
    """
    config = resolve_config(config)
    if config.verbose:
        logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    print(f"Generating {config.__class__.__name__}...")
    print(f"  p0 = {config.p0}, pe = {config.pe}")
    print(f"  v0 = {config.v0}, ve = {config.ve}")
    print(f"  amax = {config.amax}, vmax = {config.vmax}")
    print(f"  t0 = {config.t0}, dt = {config.dt}")

    try:
        planner, te = build_planner(config)
    except InterpolationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"Total trajectory time: {te} seconds")

    horizon = config.te if config.te is not None else te
    times, columns = sample_profile(planner, config.t0, horizon, config.dt)
    print(f"Generated {len(times)} data points")

    save_data_file(config.data_path, times, columns)
    print(f"Data saved to {config.data_path}")
    write_gnuplot_script(config.script_path, config.data_path, columns, image_name=config.image_name)
    print(f"Gnuplot script saved to {config.script_path}")

    if config.json_path is not None:
        write_to_json(times, columns, config.dt, config.json_path)
    if config.plot_path is not None or config.show_plot:
        fig = plot(times, columns, show=config.show_plot, plot_path=config.plot_path)
        plt.close(fig)
    if config.run_gnuplot and run_gnuplot(config.script_path):
        print(f"Plot saved to {config.image_name}")

    print("\n=== Trajectory Summary ===")
    print(f"Start: pos={columns['position'][0]}, vel={columns['velocity'][0]}")
    print(f"End:   pos={columns['position'][-1]}, vel={columns['velocity'][-1]}")
    if "jerk" in columns:
        print(f"Max jerk: {np.max(columns['jerk'])}")
    print(f"Max acc:  {np.max(columns['acceleration'])}")
    print(f"Max vel:  {np.max(columns['velocity'])}")
    return 0


def entry_point() -> None:
    config = tyro.cli(ConfigType)
    sys.exit(main(config))


if __name__ == "__main__":
    entry_point()
