"""Tests for sampling and output writers."""

import json

import numpy as np
import pytest

from two_point_interpolation.export import (
    plot,
    sample_profile,
    sample_times,
    save_data_file,
    write_gnuplot_script,
    write_to_json,
)


class TestSampling:
    def test_end_is_inclusive(self):
        times = sample_times(0.5, 1.0, 0.25)
        np.testing.assert_allclose(times, [0.5, 0.75, 1.0, 1.25, 1.5])

    def test_inexact_step(self):
        times = sample_times(0.0, 1.0, 0.3)
        np.testing.assert_allclose(times, [0.0, 0.3, 0.6, 0.9])

    def test_rejects_non_positive_dt(self):
        with pytest.raises(ValueError):
            sample_times(0.0, 1.0, 0.0)

    def test_acc_columns(self, basic_acc):
        times, columns = sample_profile(basic_acc, 0.0, basic_acc.te, 0.01)

        assert list(columns) == ["acceleration", "velocity", "position"]
        assert columns["position"][0] == 0.0
        assert columns["position"][-1] == pytest.approx(10.0, abs=1e-3)
        assert all(len(values) == len(times) for values in columns.values())

    def test_jerk_columns(self, basic_jerk):
        times, columns = sample_profile(basic_jerk, 0.0, 4.0, 0.5)

        assert list(columns) == ["jerk", "acceleration", "velocity", "position"]
        assert len(times) == 9
        assert columns["jerk"][1] == 1.0
        assert columns["position"][-1] == pytest.approx(2.0)


class TestWriters:
    @pytest.fixture
    def samples(self, basic_jerk):
        return sample_profile(basic_jerk, 0.0, 4.0, 0.5)

    def test_data_file(self, tmp_path, samples):
        times, columns = samples
        path = tmp_path / "out" / "data.txt"
        save_data_file(path, times, columns)

        rows = path.read_text().splitlines()
        assert len(rows) == len(times)
        assert rows[0] == "0.000000 1.000000 0.000000 0.000000 0.000000"
        np.testing.assert_allclose(np.loadtxt(path)[:, 0], times)

    def test_gnuplot_script(self, tmp_path, samples):
        _, columns = samples
        path = tmp_path / "plot.gnu"
        write_gnuplot_script(path, "data.txt", columns, image_name="graph_jerk.png")

        script = path.read_text()
        assert script.startswith("set terminal png\n")
        assert "set output 'graph_jerk.png'" in script
        assert "set multiplot layout 4,1" in script
        assert "plot 'data.txt' using 1:2 with lines title 'jerk[m/s^3]'" in script
        assert "plot 'data.txt' using 1:5 with lines title 'pos[m]'" in script
        assert script.rstrip().endswith("unset multiplot")

    def test_flat_column_range(self, tmp_path, basic_acc):
        _, columns = sample_profile(basic_acc, 20.0, 1.0, 0.5)
        path = tmp_path / "flat.gnu"
        write_gnuplot_script(path, "data.txt", columns)

        assert "set yrange [-1.0:1.0]" in path.read_text()

    def test_json(self, tmp_path, samples):
        times, columns = samples
        path = tmp_path / "trajectory.json"
        write_to_json(times, columns, 0.5, path)

        data = json.loads(path.read_text())
        assert data["duration"] == 4.0
        assert data["dt"] == 0.5
        assert data["columns"] == ["t", "jerk", "acceleration", "velocity", "position"]
        assert len(data["frames"]) == len(times)
        assert data["frames"][-1][0] == 4.0

    def test_plot(self, tmp_path, samples):
        times, columns = samples
        path = tmp_path / "plot.png"
        fig = plot(times, columns, plot_path=path)

        assert path.exists()
        assert len(fig.axes) == 4
