"""Semi-Lagrangian advection.

A cell at grid position ``p = (i, j)`` takes the velocity found at the
backtraced position ``p - v(p) * dt``, clamped to ``[0, W-1] x [0, H-1]`` and
bilinearly interpolated from the four surrounding (clamped) samples.
"""

import numpy as np
from numba import njit, prange


@njit(cache=True)
def advect_cell(vel_in, vel_out, i, j, dt):
    height = vel_in.shape[0]
    width = vel_in.shape[1]

    x = i - vel_in[j, i, 0] * dt
    y = j - vel_in[j, i, 1] * dt
    x = min(max(x, 0.0), width - 1.0)
    y = min(max(y, 0.0), height - 1.0)

    x0 = int(np.floor(x))
    y0 = int(np.floor(y))
    x1 = min(x0 + 1, width - 1)
    y1 = min(y0 + 1, height - 1)
    s = x - x0
    t = y - y0

    for c in range(2):
        vel_out[j, i, c] = (
            (1.0 - s) * (1.0 - t) * vel_in[y0, x0, c]
            + s * (1.0 - t) * vel_in[y0, x1, c]
            + (1.0 - s) * t * vel_in[y1, x0, c]
            + s * t * vel_in[y1, x1, c]
        )


@njit(parallel=False, cache=True)
def advect_sweep(vel_in, vel_out, dt):
    """Advect every cell; reads only ``vel_in`` and writes only ``vel_out``."""
    height = vel_in.shape[0]
    width = vel_in.shape[1]
    for j in range(height):
        for i in range(width):
            advect_cell(vel_in, vel_out, i, j, dt)
    return vel_out


@njit(parallel=True, cache=True)
def advect_tiles(tiles, tile_size, vel_in, vel_out, dt):
    height = vel_in.shape[0]
    width = vel_in.shape[1]
    for t in prange(tiles.shape[0]):
        j0 = tiles[t, 0]
        i0 = tiles[t, 1]
        for j in range(j0, min(j0 + tile_size, height)):
            for i in range(i0, min(i0 + tile_size, width)):
                advect_cell(vel_in, vel_out, i, j, dt)
