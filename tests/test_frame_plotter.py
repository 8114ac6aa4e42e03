import matplotlib.pyplot as plt
import pytest

from recording import FrameRecorder
from stable_fluids import SequentialSolver
from utils import FramePlotter


@pytest.fixture
def saved_run(tmp_path, small_sequential_config):
    solver = SequentialSolver(config=small_sequential_config)
    recorder = FrameRecorder(small_sequential_config.width, small_sequential_config.height)
    solver.simulate(3, recorder=recorder)
    path = tmp_path / "jet.h5"
    solver.save(path)
    return path, recorder


def test_plot_speed(tmp_path, saved_run):
    _, recorder = saved_run
    plotter = FramePlotter(frames=recorder.recorded)
    out = tmp_path / "speed.png"
    plotter.plot_speed(output_path=out)
    plt.close("all")
    assert out.exists()


def test_plot_speed_without_frames():
    with pytest.raises(ValueError):
        FramePlotter().plot_speed()


def test_load_runs(saved_run):
    path, _ = saved_run
    plotter = FramePlotter(runs=[{"h5_path": path, "label": "a"}, {"h5_path": path, "label": "b"}])
    assert len(plotter.time_series) == 6
    assert set(plotter.time_series["run"]) == {"a", "b"}
    assert plotter.time_series["step"].tolist() == [1, 2, 3, 1, 2, 3]
    assert plotter.metadata["method"].tolist() == ["sequential", "sequential"]


def test_plot_diagnostics(tmp_path, saved_run):
    path, _ = saved_run
    plotter = FramePlotter(runs=path)
    out = tmp_path / "energy.png"
    plotter.plot_diagnostics("kinetic_energy", output_path=out)
    plt.close("all")
    assert out.exists()

    with pytest.raises(ValueError):
        plotter.plot_diagnostics("vorticity")


def test_missing_run_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        FramePlotter(runs=tmp_path / "missing.h5")
