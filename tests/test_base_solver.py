import h5py
import numpy as np
import pytest

from datastructures import SequentialInfo
from recording import FrameRecorder
from stable_fluids import ParallelSolver, SequentialSolver


def test_config_defaults():
    solver = SequentialSolver()
    c = solver.config
    assert (c.width, c.height) == (256, 256)
    assert c.diffusion_iterations == 50
    assert c.projection_iterations == 20
    assert c.alpha == pytest.approx(0.1 * 0.5)


def test_parallel_defaults():
    solver = ParallelSolver(width=32, height=32)
    c = solver.config
    assert c.timestep == pytest.approx(0.2)
    assert c.viscosity == pytest.approx(30.0)
    assert c.diffusion_iterations == 15
    assert c.tile_size == 16
    assert c.method == "parallel"


def test_config_object_or_kwargs():
    config = SequentialInfo(width=10, height=6)
    assert SequentialSolver(config=config).config is config
    assert SequentialSolver(width=10, height=6).fields.velocity.shape == (6, 10, 2)


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(width=0, height=4),
        dict(width=4, height=-1),
        dict(width=4, height=4, diffusion_iterations=-1),
        dict(width=4, height=4, projection_iterations=-2),
    ],
)
def test_invalid_config(kwargs):
    with pytest.raises(ValueError):
        SequentialSolver(**kwargs)


def test_simulate_records_frames_and_diagnostics(small_sequential_config):
    solver = SequentialSolver(config=small_sequential_config)
    recorder = FrameRecorder(small_sequential_config.width, small_sequential_config.height)

    solver.simulate(4, recorder=recorder)

    assert solver.steps_taken == 4
    assert len(recorder.recorded) == 4
    assert [f.step for f in recorder.recorded] == [1, 2, 3, 4]
    np.testing.assert_array_equal(recorder.recorded[-1].velocity, solver.fields.velocity)
    assert len(solver.time_series.divergence) == 4
    assert len(solver.time_series.to_dataframe()) == 4
    assert solver.metadata.steps == 4
    assert solver.metadata.final_divergence == solver.time_series.divergence[-1]
    assert solver.metadata.wall_time >= 0.0


def test_recorded_frames_do_not_follow_solver(small_sequential_config):
    solver = SequentialSolver(config=small_sequential_config)
    recorder = FrameRecorder(small_sequential_config.width, small_sequential_config.height)
    solver.simulate(1, recorder=recorder)
    first = recorder.recorded[0].velocity.copy()
    solver.simulate(2)
    np.testing.assert_array_equal(recorder.recorded[0].velocity, first)


def test_simulate_zero_steps(small_sequential_config):
    solver = SequentialSolver(config=small_sequential_config)
    solver.simulate(0)
    assert solver.steps_taken == 0
    assert solver.metadata.final_divergence is None


def test_simulate_negative_steps(small_sequential_config):
    with pytest.raises(ValueError):
        SequentialSolver(config=small_sequential_config).simulate(-1)


def test_sequential_run_is_deterministic(small_sequential_config):
    a = SequentialSolver(config=small_sequential_config)
    b = SequentialSolver(config=small_sequential_config)
    a.simulate(3)
    b.simulate(3)
    np.testing.assert_array_equal(a.fields.velocity, b.fields.velocity)


@pytest.mark.parametrize("solver_cls", [SequentialSolver, ParallelSolver])
def test_add_force_touches_disc(solver_cls):
    solver = solver_cls(width=30, height=30)
    n = solver.add_force(12, 15, 1.0, -1.0)
    vel = solver.fields.velocity

    assert n == 81
    assert vel[15, 12, 0] == pytest.approx(2.0)
    assert vel[15, 12, 1] == pytest.approx(-2.0)
    # The 12 cells at distance exactly 5 receive zero
    assert np.count_nonzero(vel[..., 0]) == 81 - 12


def test_add_force_clamps_target():
    solver = SequentialSolver(width=12, height=12)
    n = solver.add_force(-40, 100, 1.0, 0.0)
    assert n == 26
    assert solver.fields.velocity[11, 0, 0] == pytest.approx(2.0)


def test_add_dye_pushes_along_y():
    solver = SequentialSolver(width=12, height=12)
    solver.add_dye(6, 6, 10.0)
    vel = solver.fields.velocity
    assert vel[6, 6, 1] == pytest.approx(2.0)
    assert np.all(vel[..., 0] == 0.0)


def test_set_velocity_and_snapshot():
    solver = SequentialSolver(width=5, height=4)
    values = np.ones((4, 5, 2))
    solver.set_velocity(values)
    snap = solver.velocity_snapshot()
    solver.fields.velocity[...] = 0.0
    assert np.all(snap == 1.0)
    with pytest.raises(ValueError):
        solver.set_velocity(np.ones((5, 4, 2)))


def test_save_h5(tmp_path, small_sequential_config):
    solver = SequentialSolver(config=small_sequential_config)
    solver.simulate(2)
    path = tmp_path / "run" / "jet.h5"
    solver.save(path)

    with h5py.File(path, "r") as f:
        assert f.attrs["width"] == small_sequential_config.width
        assert f.attrs["steps"] == 2
        assert f["fields/u"].shape == (small_sequential_config.height, small_sequential_config.width)
        np.testing.assert_array_equal(f["fields/u"][()], solver.fields.velocity[..., 0])
        assert set(f["time_series"].keys()) == {
            "divergence", "kinetic_energy", "max_speed", "pressure_residual",
        }
        assert f["time_series/divergence"].shape == (2,)
