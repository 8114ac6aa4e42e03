"""Compare the sequential and parallel solvers on one shared configuration."""

import numpy as np

from datastructures import ParallelInfo, SequentialInfo
from stable_fluids import ParallelSolver, SequentialSolver

shared = dict(
    width=128,
    height=128,
    viscosity=0.1,
    timestep=0.5,
    diffusion_iterations=20,
    projection_iterations=20,
    force_band_start=56,
    force_band_end=72,
)

sequential = SequentialSolver(config=SequentialInfo(**shared))
parallel = ParallelSolver(config=ParallelInfo(**shared, tile_size=16))

sequential.simulate(20)
parallel.simulate(20)

diff = np.abs(sequential.fields.velocity - parallel.fields.velocity).max()
print(f"\n{'='*60}")
print(f"Max velocity difference after 20 steps: {diff:.3e}")
print(f"Sequential wall time: {sequential.metadata.wall_time:.2f} s")
print(f"Parallel wall time:   {parallel.metadata.wall_time:.2f} s")
print(f"{'='*60}")
