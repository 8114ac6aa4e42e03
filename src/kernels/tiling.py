"""Tile decomposition of the grid for data-parallel dispatch."""

import numpy as np
from numba import njit, prange


def make_tiles(width, height, tile_size):
    """Origins ``(row, column)`` of the tiles covering a W x H grid.

    Parameters
    ----------
    width, height : int
        Grid size.
    tile_size : int
        Tile edge length; the last tile in each direction may be partial.

    Returns
    -------
    tiles : ndarray (n_tiles, 2)
        int64 tile origins in row-major order.
    """
    if tile_size <= 0:
        raise ValueError(f"tile_size must be positive, got {tile_size}")
    rows = np.arange(0, height, tile_size, dtype=np.int64)
    cols = np.arange(0, width, tile_size, dtype=np.int64)
    jj, ii = np.meshgrid(rows, cols, indexing="ij")
    return np.ascontiguousarray(np.column_stack([jj.ravel(), ii.ravel()]))


@njit(parallel=True, cache=True)
def copy_tiles(tiles, tile_size, src, dst):
    """Tiled copy of a velocity field (diffusion snapshot)."""
    height = src.shape[0]
    width = src.shape[1]
    for t in prange(tiles.shape[0]):
        j0 = tiles[t, 0]
        i0 = tiles[t, 1]
        for j in range(j0, min(j0 + tile_size, height)):
            for i in range(i0, min(i0 + tile_size, width)):
                dst[j, i, 0] = src[j, i, 0]
                dst[j, i, 1] = src[j, i, 1]
