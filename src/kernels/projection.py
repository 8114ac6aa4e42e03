"""Pressure projection: divergence, red-black relaxation, gradient subtraction.

Discretisation on the unit-spaced grid (all neighbours clamped):

    div   = -0.5 * ((u_r - u_l) + (v_u - v_d))
    p     = (div + p_l + p_r + p_d + p_u) / 4
    v    -= ((p_r - p_l) / 2, (p_u - p_d) / 2)

"up" is the ``j+1`` neighbour and "down" the ``j-1`` neighbour. Red cells have
``(i + j)`` even, black cells odd.
"""

import numpy as np
from numba import njit, prange

from .boundary import sample_pressure, sample_velocity

DIVERGENCE = 0
RED = 1
BLACK = 2


@njit(cache=True)
def divergence_cell(vel, div, i, j):
    u_right = sample_velocity(vel, i + 1, j, 0)
    u_left = sample_velocity(vel, i - 1, j, 0)
    v_up = sample_velocity(vel, i, j + 1, 1)
    v_down = sample_velocity(vel, i, j - 1, 1)
    div[j, i] = -0.5 * ((u_right - u_left) + (v_up - v_down))


@njit(cache=True)
def relax_cell(p_in, div, p_out, i, j):
    p_left = sample_pressure(p_in, i - 1, j)
    p_right = sample_pressure(p_in, i + 1, j)
    p_down = sample_pressure(p_in, i, j - 1)
    p_up = sample_pressure(p_in, i, j + 1)
    p_out[j, i] = (div[j, i] + p_right + p_left + p_up + p_down) / 4.0


@njit(cache=True)
def gradient_cell(vel_in, p, vel_out, i, j):
    p_left = sample_pressure(p, i - 1, j)
    p_right = sample_pressure(p, i + 1, j)
    p_down = sample_pressure(p, i, j - 1)
    p_up = sample_pressure(p, i, j + 1)
    vel_out[j, i, 0] = vel_in[j, i, 0] - (p_right - p_left) / 2.0
    vel_out[j, i, 1] = vel_in[j, i, 1] - (p_up - p_down) / 2.0


# ---------------------------------------------------------------------
# Sequential sweeps
# ---------------------------------------------------------------------
@njit(parallel=False, cache=True)
def compute_divergence(vel, div):
    height = vel.shape[0]
    width = vel.shape[1]
    for j in range(height):
        for i in range(width):
            divergence_cell(vel, div, i, j)
    return div


@njit(parallel=False, cache=True)
def red_black_sweep(p, div):
    """One in-place red-black Gauss-Seidel sweep: even cells first, then odd.

    Every neighbour of a cell has the other colour, so each half-sweep reads
    the values the previous half-sweep just produced.
    """
    height = p.shape[0]
    width = p.shape[1]
    for parity in range(2):
        for j in range(height):
            for i in range(width):
                if (i + j) % 2 == parity:
                    relax_cell(p, div, p, i, j)
    return p


@njit(parallel=False, cache=True)
def subtract_gradient(vel, p):
    """Subtract the centred pressure gradient from ``vel`` in place."""
    height = vel.shape[0]
    width = vel.shape[1]
    for j in range(height):
        for i in range(width):
            gradient_cell(vel, p, vel, i, j)
    return vel


# ---------------------------------------------------------------------
# Tiled kernels
# ---------------------------------------------------------------------
@njit(parallel=True, cache=True)
def projection_tiles(tiles, tile_size, vel, p_in, div, p_out, mode):
    """Mode-selected projection kernel.

    mode 0 writes the divergence of ``vel`` into ``div``; mode 1 (red) and
    mode 2 (black) relax the cells of that colour from ``p_in`` into
    ``p_out`` and copy the other colour through unchanged.
    """
    height = vel.shape[0]
    width = vel.shape[1]
    for t in prange(tiles.shape[0]):
        j0 = tiles[t, 0]
        i0 = tiles[t, 1]
        for j in range(j0, min(j0 + tile_size, height)):
            for i in range(i0, min(i0 + tile_size, width)):
                if mode == DIVERGENCE:
                    divergence_cell(vel, div, i, j)
                else:
                    is_red = (i + j) % 2 == 0
                    if (mode == RED) == is_red:
                        relax_cell(p_in, div, p_out, i, j)
                    else:
                        p_out[j, i] = p_in[j, i]


@njit(parallel=True, cache=True)
def gradient_tiles(tiles, tile_size, vel_in, p, vel_out):
    height = vel_in.shape[0]
    width = vel_in.shape[1]
    for t in prange(tiles.shape[0]):
        j0 = tiles[t, 0]
        i0 = tiles[t, 1]
        for j in range(j0, min(j0 + tile_size, height)):
            for i in range(i0, min(i0 + tile_size, width)):
                gradient_cell(vel_in, p, vel_out, i, j)


# ---------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------
@njit(cache=True)
def mean_abs_divergence(vel):
    """Mean ``|div|`` over interior cells (the outer ring is excluded)."""
    height = vel.shape[0]
    width = vel.shape[1]
    if height < 3 or width < 3:
        return 0.0
    div = np.zeros((height, width))
    compute_divergence(vel, div)
    total = 0.0
    for j in range(1, height - 1):
        for i in range(1, width - 1):
            total += abs(div[j, i])
    return total / ((height - 2) * (width - 2))
