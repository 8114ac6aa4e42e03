import numpy as np
import pytest

from kernels import add_radial_force, apply_jet_force
from stable_fluids import ParallelSolver, SequentialSolver


@pytest.mark.parametrize("solver_cls", [SequentialSolver, ParallelSolver])
def test_jet_band_only(solver_cls):
    solver = solver_cls(width=144, height=4, timestep=0.5, force_x=2.0, force_y=0.0)
    solver.apply_forces()
    vel = solver.fields.velocity

    np.testing.assert_allclose(vel[:, 116:140, 0], 1.0)
    np.testing.assert_allclose(vel[:, 116:140, 1], 0.0)
    assert np.all(vel[:, :116] == 0.0)
    assert np.all(vel[:, 140:] == 0.0)


def test_jet_band_clipped_to_narrow_grid():
    vel = np.zeros((3, 120, 2))
    apply_jet_force(vel, 2.0, 1.0, 0.5, 116, 140)
    np.testing.assert_allclose(vel[:, 116:, 0], 1.0)
    np.testing.assert_allclose(vel[:, 116:, 1], 0.5)
    assert np.all(vel[:, :116] == 0.0)


def test_radial_force_touches_disc_only():
    vel = np.zeros((21, 21, 2))
    n = add_radial_force(vel, 10, 10, 1.0, 0.0, 5, 2.0)

    # Lattice points with distance <= 5 from the centre
    assert n == 81
    assert vel[10, 10, 0] == pytest.approx(2.0)
    assert vel[10, 15, 0] == pytest.approx(0.0)
    assert vel[13, 14, 0] == pytest.approx(0.0)
    assert vel[10, 12, 0] == pytest.approx((1.0 - 2.0 / 5.0) * 2.0)
    assert np.all(vel[:, :5] == 0.0)
    assert np.all(vel[:, 16:] == 0.0)
    assert np.all(vel[:, :, 1] == 0.0)


def test_radial_force_at_corner():
    vel = np.zeros((8, 8, 2))
    n = add_radial_force(vel, 0, 0, 0.0, 1.0, 5, 2.0)
    assert n == 26
    assert vel[0, 0, 1] == pytest.approx(2.0)
