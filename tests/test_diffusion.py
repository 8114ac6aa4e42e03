import numpy as np

from kernels import diffuse_sweep, diffuse_tiles, make_tiles


def test_uniform_field_is_fixed_point():
    vel = np.full((6, 7, 2), 0.75)
    out = np.zeros_like(vel)
    diffuse_sweep(vel, vel.copy(), out, 3.0)
    np.testing.assert_allclose(out, 0.75)


def test_spike_spreads_to_neighbours():
    vel = np.zeros((7, 7, 2))
    vel[3, 3, 0] = 1.0
    before = vel.copy()
    out = np.zeros_like(vel)
    alpha = 0.5

    diffuse_sweep(vel, before, out, alpha)

    assert out[3, 3, 0] == 1.0 / (1.0 + 4.0 * alpha)
    np.testing.assert_allclose(out[3, [2, 4], 0], alpha / (1.0 + 4.0 * alpha))
    np.testing.assert_allclose(out[[2, 4], 3, 0], alpha / (1.0 + 4.0 * alpha))
    assert out[0, 0, 0] == 0.0
    assert np.all(out[:, :, 1] == 0.0)


def test_tiled_pass_matches_sweep(rng):
    vel = rng.standard_normal((13, 11, 2))
    before = rng.standard_normal((13, 11, 2))
    expected = np.zeros_like(vel)
    out = np.zeros_like(vel)

    diffuse_sweep(vel, before, expected, 1.7)
    diffuse_tiles(make_tiles(11, 13, 4), 4, vel, before, out, 1.7)

    np.testing.assert_allclose(out, expected, rtol=0, atol=1e-14)
