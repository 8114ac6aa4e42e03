# conftest.py

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from datastructures import ParallelInfo, SequentialInfo


# Small grid with a jet band, partial tiles in both directions
SMALL_GRID = dict(
    width=20,
    height=18,
    viscosity=0.3,
    timestep=0.5,
    diffusion_iterations=6,
    projection_iterations=5,
    force_band_start=8,
    force_band_end=12,
)


@pytest.fixture
def small_sequential_config():
    return SequentialInfo(**SMALL_GRID)


@pytest.fixture
def small_parallel_config():
    return ParallelInfo(**SMALL_GRID, tile_size=4)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


def _bump_gradient(width, height):
    """Divergent velocity field: centred gradient of a bump that vanishes near the walls."""
    jj, ii = np.meshgrid(np.arange(height), np.arange(width), indexing="ij")
    sigma = width / 5.0
    r2 = ((ii - (width - 1) / 2) ** 2 + (jj - (height - 1) / 2) ** 2) / sigma**2
    phi = np.exp(-r2)
    vel = np.zeros((height, width, 2))
    vel[:, 1:-1, 0] = 0.5 * (phi[:, 2:] - phi[:, :-2])
    vel[1:-1, :, 1] = 0.5 * (phi[2:, :] - phi[:-2, :])
    return vel


@pytest.fixture
def bump_gradient_field():
    return _bump_gradient(16, 16)


@pytest.fixture
def large_bump_gradient_field():
    return _bump_gradient(32, 32)
