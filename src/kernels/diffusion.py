"""Implicit viscous diffusion by Jacobi relaxation.

Each pass solves ``(1 + 4a) v_new - a * sum(v_neighbours) = v_before`` for
every cell using neighbours of the previous generation only:

    v_new = (v_before + a * (v_l + v_r + v_d + v_u)) / (1 + 4a)

``v_before`` is the field captured when diffusion started and is never
updated across passes.
"""

from numba import njit, prange

from .boundary import sample_velocity


@njit(cache=True)
def diffuse_cell(vel_in, before, vel_out, i, j, alpha):
    denominator = 1.0 + 4.0 * alpha
    for c in range(2):
        neighbours = (
            sample_velocity(vel_in, i - 1, j, c)
            + sample_velocity(vel_in, i + 1, j, c)
            + sample_velocity(vel_in, i, j - 1, c)
            + sample_velocity(vel_in, i, j + 1, c)
        )
        vel_out[j, i, c] = (before[j, i, c] + alpha * neighbours) / denominator


@njit(parallel=False, cache=True)
def diffuse_sweep(vel_in, before, vel_out, alpha):
    """One full Jacobi generation, cell by cell. ``vel_out`` must not alias ``vel_in``."""
    height = vel_in.shape[0]
    width = vel_in.shape[1]
    for j in range(height):
        for i in range(width):
            diffuse_cell(vel_in, before, vel_out, i, j, alpha)
    return vel_out


@njit(parallel=True, cache=True)
def diffuse_tiles(tiles, tile_size, vel_in, before, vel_out, alpha):
    height = vel_in.shape[0]
    width = vel_in.shape[1]
    for t in prange(tiles.shape[0]):
        j0 = tiles[t, 0]
        i0 = tiles[t, 1]
        for j in range(j0, min(j0 + tile_size, height)):
            for i in range(i0, min(i0 + tile_size, width)):
                diffuse_cell(vel_in, before, vel_out, i, j, alpha)
