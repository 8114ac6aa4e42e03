import numpy as np
import pytest

from datastructures import FieldStore, Vec2
from kernels import sample_pressure, sample_velocity


def test_allocate_shapes():
    f = FieldStore.allocate(5, 3)
    assert f.velocity.shape == (3, 5, 2)
    assert f.pressure.shape == (3, 5)
    assert f.divergence.shape == (3, 5)
    assert np.all(f.velocity_buffers == 0.0)


def test_swap_exchanges_buffers():
    f = FieldStore.allocate(4, 4)
    f.next_velocity[...] = 1.0
    f.swap()
    assert np.all(f.velocity == 1.0)
    assert np.all(f.next_velocity == 0.0)


def test_reset_pressure():
    f = FieldStore.allocate(4, 4)
    f.pressure_buffers[...] = 3.0
    f.swap_pressure()
    f.reset_pressure()
    assert f.pressure_current == 0
    assert np.all(f.pressure_buffers == 0.0)


@pytest.mark.parametrize(
    "i, j, ci, cj",
    [
        (-1, 2, 0, 2),
        (7, 2, 3, 2),
        (2, -5, 2, 0),
        (2, 9, 2, 2),
        (-3, 10, 0, 2),
        (1, 1, 1, 1),
    ],
)
def test_boundary_sampling_clamps(i, j, ci, cj):
    f = FieldStore.allocate(4, 3)
    values = np.arange(4 * 3 * 2, dtype=float).reshape(3, 4, 2)
    f.load_velocity(values)
    f.pressure[...] = np.arange(12, dtype=float).reshape(3, 4)

    assert f.boundary_velocity(i, j) == Vec2(values[cj, ci, 0], values[cj, ci, 1])
    assert f.boundary_pressure(i, j) == f.pressure[cj, ci]


def test_load_velocity_rejects_wrong_shape():
    f = FieldStore.allocate(4, 3)
    with pytest.raises(ValueError):
        f.load_velocity(np.zeros((4, 3, 2)))


def test_snapshot_is_a_copy():
    f = FieldStore.allocate(3, 3)
    snap = f.snapshot()
    f.velocity[...] = 5.0
    assert np.all(snap == 0.0)


@pytest.mark.parametrize("i, j, ci, cj", [(-2, 1, 0, 1), (9, 1, 3, 1), (1, -1, 1, 0), (4, 5, 3, 2)])
def test_kernel_samplers_clamp(i, j, ci, cj):
    vel = np.arange(3 * 4 * 2, dtype=float).reshape(3, 4, 2)
    p = np.arange(12, dtype=float).reshape(3, 4)

    assert sample_velocity(vel, i, j, 0) == vel[cj, ci, 0]
    assert sample_velocity(vel, i, j, 1) == vel[cj, ci, 1]
    assert sample_pressure(p, i, j) == p[cj, ci]
