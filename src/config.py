"""Configuration dataclasses and YAML parameter loading."""

import dataclasses
from dataclasses import dataclass
from pathlib import Path

import yaml


@dataclass(kw_only=True)
class BaseProfileConfig:
    t0: float = 0.0  # Start time [s]
    dt: float = 0.01  # Sampling step [s]
    te: float | None = None  # Sampling horizon [s], defaults to the planned duration
    verbose: bool = False

    # CLI-specific arguments (shared across all profiles)
    config: Path | None = None  # Path to YAML parameter file, overrides the fields above
    data_path: Path = Path("data.txt")  # Whitespace-delimited samples
    script_path: Path = Path("script.gnu")  # Gnuplot script
    json_path: Path | None = None  # Path to save sampled trajectory JSON
    plot_path: Path | None = None  # Path to save matplotlib plot image
    show_plot: bool = False  # Show plot window (default: hidden)
    run_gnuplot: bool = False  # Run gnuplot on the script if it is installed

    def __post_init__(self):
        if not self.dt > 0:
            raise ValueError(f"dt must be positive, got {self.dt}")
        if self.te is not None and self.te < 0:
            raise ValueError(f"te must not be negative, got {self.te}")


@dataclass(kw_only=True)
class ConstantAccConfig(BaseProfileConfig):
    p0: float = 0.0
    pe: float = 10.0
    v0: float = 0.0
    ve: float = 0.0
    amax: float = 2.0
    vmax: float = 5.0
    dec_max: float | None = None  # Defaults to amax
    angle: bool = False  # Treat positions as angles wrapped into [-pi, pi)
    image_name: str = "graph.png"


@dataclass(kw_only=True)
class ConstantJerkConfig(BaseProfileConfig):
    t0: float = 0.5
    dt: float = 0.001
    verbose: bool = True
    data_path: Path = Path("data_jerk.txt")
    script_path: Path = Path("plot_jerk.gnu")
    p0: float = 5.5
    pe: float = 100.0
    v0: float = 0.0
    ve: float = 0.0
    amax: float = 1.0
    vmax: float = 5.0
    jmax: float = 0.98
    image_name: str = "graph_jerk.png"


# Keys accepted under another name in parameter files.
_ALIASES = {"ps": "p0"}


def load_yaml(path: str | Path) -> dict:
    """Read a YAML mapping of parameters."""
    with open(path) as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping of parameters, got {type(data).__name__}")
    return data


def apply_yaml(cfg: BaseProfileConfig, path: str | Path) -> BaseProfileConfig:
    """Return a copy of ``cfg`` with the fields found in the YAML file replaced.

    Raises:
        ValueError: If the file contains a key that is not a field of ``cfg``.
    """
    raw = load_yaml(path)
    # An alias takes precedence over the field it stands for.
    for alias, name in _ALIASES.items():
        if alias in raw:
            raw.pop(name, None)

    names = {f.name for f in dataclasses.fields(cfg)}
    values = {}
    for key, value in raw.items():
        name = _ALIASES.get(key, key)
        if name not in names:
            raise ValueError(f"{path}: unknown parameter '{key}' for {type(cfg).__name__}")
        values[name] = value
    return dataclasses.replace(cfg, **values)


def resolve_config(cfg: BaseProfileConfig) -> BaseProfileConfig:
    """Apply ``cfg.config`` if set."""
    if cfg.config is None:
        return cfg
    return apply_yaml(cfg, cfg.config)
