"""Numba kernels for the stable-fluids stages.

Every stage is written once as a per-cell function and then driven two ways:
a cell-by-cell sweep used by the sequential solver and a tiled ``prange``
kernel dispatched by the parallel solver.
"""

from .advection import advect_cell, advect_sweep, advect_tiles
from .boundary import (
    boundary_tiles,
    clamp_index,
    sample_pressure,
    sample_velocity,
    zero_boundary,
)
from .diffusion import diffuse_cell, diffuse_sweep, diffuse_tiles
from .forces import add_radial_force, apply_jet_force, jet_force_tiles
from .projection import (
    BLACK,
    DIVERGENCE,
    RED,
    compute_divergence,
    gradient_tiles,
    mean_abs_divergence,
    projection_tiles,
    red_black_sweep,
    subtract_gradient,
)
from .tiling import copy_tiles, make_tiles

__all__ = [
    # Boundary handling
    "clamp_index",
    "sample_velocity",
    "sample_pressure",
    "zero_boundary",
    "boundary_tiles",
    # Forces
    "apply_jet_force",
    "jet_force_tiles",
    "add_radial_force",
    # Diffusion
    "diffuse_cell",
    "diffuse_sweep",
    "diffuse_tiles",
    # Advection
    "advect_cell",
    "advect_sweep",
    "advect_tiles",
    # Projection
    "DIVERGENCE",
    "RED",
    "BLACK",
    "compute_divergence",
    "red_black_sweep",
    "subtract_gradient",
    "projection_tiles",
    "gradient_tiles",
    "mean_abs_divergence",
    # Tiling
    "make_tiles",
    "copy_tiles",
]
