"""Sequential stable-fluids solver.

Single thread of control: each stage sweeps the grid cell by cell in a fixed
order, so a run is fully deterministic.
"""

import numpy as np

from .base_solver import StableFluidsSolver
from datastructures import SequentialInfo

from kernels import (
    advect_sweep,
    apply_jet_force,
    compute_divergence,
    diffuse_sweep,
    red_black_sweep,
    subtract_gradient,
    zero_boundary,
)


class SequentialSolver(StableFluidsSolver):
    """Cell-by-cell stable-fluids solver.

    Parameters
    ----------
    config : SequentialInfo
        Grid size, physics and iteration counts (50 diffusion iterations and
        20 red-black sweeps by default).
    """

    Config = SequentialInfo

    def __init__(self, **kwargs):
        """Initialize sequential solver.

        Parameters
        ----------
        **kwargs
            Configuration parameters passed to SequentialInfo.
        """
        super().__init__(**kwargs)

    def apply_forces(self):
        c = self.config
        apply_jet_force(
            self.fields.velocity, c.force_x, c.force_y, c.timestep,
            c.force_band_start, c.force_band_end,
        )

    def diffuse(self):
        f = self.fields  # Shorthand for readability
        alpha = self.config.alpha

        np.copyto(f.before, f.velocity)
        for _ in range(self.config.diffusion_iterations):
            diffuse_sweep(f.velocity, f.before, f.next_velocity, alpha)
            f.swap()

    def advect(self):
        f = self.fields
        advect_sweep(f.velocity, f.next_velocity, self.config.timestep)
        f.swap()

    def project(self):
        f = self.fields

        compute_divergence(f.velocity, f.divergence)

        if not self.config.warm_start_pressure:
            f.reset_pressure()

        # Gauss-Seidel works in place on the current pressure buffer
        for _ in range(self.config.projection_iterations):
            red_black_sweep(f.pressure, f.divergence)

        subtract_gradient(f.velocity, f.pressure)

    def enforce_boundary(self):
        zero_boundary(self.fields.velocity)
