"""External forcing: the constant jet band and local radial force splats."""

import numpy as np
from numba import njit, prange


@njit(cache=True)
def jet_force_cell(vel_in, vel_out, i, j, fx, fy, dt, band_start, band_end):
    """Explicit Euler body force for one cell; zero outside the column band."""
    if i >= band_start and i < band_end:
        vel_out[j, i, 0] = vel_in[j, i, 0] + fx * dt
        vel_out[j, i, 1] = vel_in[j, i, 1] + fy * dt
    else:
        vel_out[j, i, 0] = vel_in[j, i, 0]
        vel_out[j, i, 1] = vel_in[j, i, 1]


@njit(parallel=False, cache=True)
def apply_jet_force(vel, fx, fy, dt, band_start, band_end):
    """Add ``(fx, fy) * dt`` in place to every cell of the jet band."""
    height = vel.shape[0]
    width = vel.shape[1]
    for j in range(height):
        for i in range(max(band_start, 0), min(band_end, width)):
            jet_force_cell(vel, vel, i, j, fx, fy, dt, band_start, band_end)
    return vel


@njit(parallel=True, cache=True)
def jet_force_tiles(tiles, tile_size, vel_in, vel_out, fx, fy, dt, band_start, band_end):
    height = vel_in.shape[0]
    width = vel_in.shape[1]
    for t in prange(tiles.shape[0]):
        j0 = tiles[t, 0]
        i0 = tiles[t, 1]
        for j in range(j0, min(j0 + tile_size, height)):
            for i in range(i0, min(i0 + tile_size, width)):
                jet_force_cell(vel_in, vel_out, i, j, fx, fy, dt, band_start, band_end)


@njit(parallel=False, cache=True)
def add_radial_force(vel, x, y, fx, fy, radius, max_force):
    """Add a force with linear radial falloff around cell (x, y), in place.

    Only the bounded square ``[x-radius, x+radius] x [y-radius, y+radius]``
    is visited. A cell at distance ``d <= radius`` receives
    ``(fx, fy) * (1 - d/radius) * max_force``.

    Parameters
    ----------
    vel : ndarray (H, W, 2)
        Velocity buffer to update.
    x, y : int
        Target column and row, already clamped into the grid.
    fx, fy : float
        Force direction and strength.
    radius : int
        Splat radius in cells.
    max_force : float
        Scale at the centre of the splat.

    Returns
    -------
    n_touched : int
        Number of cells updated.
    """
    height = vel.shape[0]
    width = vel.shape[1]
    n_touched = 0
    for py in range(max(y - radius, 0), min(y + radius, height - 1) + 1):
        for px in range(max(x - radius, 0), min(x + radius, width - 1) + 1):
            dxp = px - x
            dyp = py - y
            dist = np.sqrt(dxp * dxp + dyp * dyp)
            if dist <= radius:
                factor = (1.0 - dist / radius) * max_force
                vel[py, px, 0] += fx * factor
                vel[py, px, 1] += fy * factor
                n_touched += 1
    return n_touched
