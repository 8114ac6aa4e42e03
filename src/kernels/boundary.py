"""Clamped boundary sampling and the optional wall-zeroing pass.

Out-of-range neighbours are always resolved by clamping each coordinate
independently into the grid; this is the only boundary condition used by
diffusion, advection and projection.
"""

from numba import njit, prange


@njit(cache=True)
def clamp_index(k, n):
    """Clamp integer index ``k`` into ``[0, n-1]``."""
    if k < 0:
        return 0
    if k > n - 1:
        return n - 1
    return k


@njit(cache=True)
def sample_velocity(vel, i, j, c):
    """Component ``c`` of the velocity at column ``i``, row ``j`` (clamped)."""
    return vel[clamp_index(j, vel.shape[0]), clamp_index(i, vel.shape[1]), c]


@njit(cache=True)
def sample_pressure(p, i, j):
    """Pressure at column ``i``, row ``j`` (clamped)."""
    return p[clamp_index(j, p.shape[0]), clamp_index(i, p.shape[1])]


@njit(cache=True)
def boundary_cell(vel_in, vel_out, i, j):
    height = vel_in.shape[0]
    width = vel_in.shape[1]
    if i == 0 or i == width - 1 or j == 0 or j == height - 1:
        vel_out[j, i, 0] = 0.0
        vel_out[j, i, 1] = 0.0
    else:
        vel_out[j, i, 0] = vel_in[j, i, 0]
        vel_out[j, i, 1] = vel_in[j, i, 1]


@njit(parallel=False, cache=True)
def zero_boundary(vel):
    """Zero the outer ring of cells in place."""
    height = vel.shape[0]
    width = vel.shape[1]
    for j in range(height):
        for i in range(width):
            boundary_cell(vel, vel, i, j)
    return vel


@njit(parallel=True, cache=True)
def boundary_tiles(tiles, tile_size, vel_in, vel_out):
    """Tiled wall-zeroing pass: copy interior, zero the outer ring."""
    height = vel_in.shape[0]
    width = vel_in.shape[1]
    for t in prange(tiles.shape[0]):
        j0 = tiles[t, 0]
        i0 = tiles[t, 1]
        for j in range(j0, min(j0 + tile_size, height)):
            for i in range(i0, min(i0 + tile_size, width)):
                boundary_cell(vel_in, vel_out, i, j)

