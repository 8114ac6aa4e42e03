"""Stable-fluids solver framework.

This module provides two interchangeable backends for the operator-split
incompressible Navier-Stokes step (forces, diffusion, advection, projection).

Solver Hierarchy:
-----------------
StableFluidsSolver (abstract base - defines the step pipeline)
├── SequentialSolver (cell-by-cell sweeps, in-place red-black Gauss-Seidel)
└── ParallelSolver (tiled numba kernels with explicit barriers)
"""

from .base_solver import StableFluidsSolver
from .parallel_solver import BackendInitializationError, KernelDispatcher, ParallelSolver
from .sequential_solver import SequentialSolver

__all__ = [
    # Base classes
    "StableFluidsSolver",
    # Concrete solvers
    "SequentialSolver",
    "ParallelSolver",
    # Parallel backend
    "KernelDispatcher",
    "BackendInitializationError",
]
