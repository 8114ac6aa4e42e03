"""Data-parallel stable-fluids solver.

Each stage is a set of independent per-cell tasks grouped into square tiles
and executed with numba ``prange``. Tasks of one dispatch may run in any
order, so every dispatch reads only from its input buffers and writes only to
its output buffers, and a barrier separates it from the next dispatch:

    forces   : 1 dispatch
    diffusion: 1 snapshot copy + diffusion_iterations Jacobi passes
    advection: 1 dispatch
    project  : 1 divergence pass + 2 * projection_iterations half-sweeps
               (red, black) + 1 gradient pass
    boundary : 1 dispatch (only with zero_boundary)
"""

import numpy as np
from numba import get_num_threads, set_num_threads

from .base_solver import StableFluidsSolver
from datastructures import ParallelInfo

from kernels import (
    BLACK,
    DIVERGENCE,
    RED,
    advect_tiles,
    boundary_tiles,
    copy_tiles,
    diffuse_tiles,
    gradient_tiles,
    jet_force_tiles,
    make_tiles,
    projection_tiles,
)


class BackendInitializationError(RuntimeError):
    """The compute backend could not be set up; no solver is created."""


class KernelDispatcher:
    """Tiled kernel execution service with explicit barriers.

    Parameters
    ----------
    width, height : int
        Grid size covered by every dispatch.
    tile_size : int
        Tile edge length.
    num_threads : int, optional
        Number of numba worker threads, applied only while a kernel runs.
        None keeps numba's default.

    Attributes
    ----------
    dispatch_count : int
        Dispatches issued so far.
    barrier_count : int
        Barriers issued so far.
    """

    KERNELS = {
        "force": jet_force_tiles,
        "copy": copy_tiles,
        "diffusion": diffuse_tiles,
        "advection": advect_tiles,
        "projection": projection_tiles,
        "gradient": gradient_tiles,
        "boundary": boundary_tiles,
    }

    def __init__(self, width, height, tile_size=16, num_threads=None):
        if tile_size is None or tile_size <= 0:
            raise ValueError(f"tile_size must be positive, got {tile_size}")

        # Validated once here, applied only for the duration of each dispatch
        if num_threads is not None:
            previous = get_num_threads()
            try:
                set_num_threads(num_threads)
            except ValueError as exc:
                raise BackendInitializationError(
                    f"Cannot run {num_threads} worker threads: {exc}"
                ) from exc
            set_num_threads(previous)

        self.num_threads = num_threads
        self.width = width
        self.height = height
        self.tile_size = tile_size
        self.tiles = make_tiles(width, height, tile_size)

        self.dispatch_count = 0
        self.barrier_count = 0
        self._pending = None

    @property
    def n_tiles(self):
        return self.tiles.shape[0]

    @property
    def idle(self):
        """True when every dispatch has been followed by a barrier."""
        return self._pending is None

    def dispatch(self, kernel_id, inputs, outputs, *params):
        """Run one kernel over all tiles.

        Parameters
        ----------
        kernel_id : str
            Key of ``KERNELS``.
        inputs : tuple of ndarray
            Buffers the kernel only reads.
        outputs : tuple of ndarray
            Buffers the kernel writes. None of them may overlap an input.
        *params
            Scalar kernel parameters.
        """
        if kernel_id not in self.KERNELS:
            raise ValueError(f"Unknown kernel: {kernel_id}")
        if self._pending is not None:
            raise RuntimeError(
                f"Dispatch of '{kernel_id}' issued before a barrier after '{self._pending}'"
            )
        for out in outputs:
            for buf in inputs:
                if np.may_share_memory(out, buf):
                    raise ValueError(
                        f"Kernel '{kernel_id}' would read and write the same buffer"
                    )

        kernel = self.KERNELS[kernel_id]
        if self.num_threads is None:
            kernel(self.tiles, self.tile_size, *inputs, *outputs, *params)
        else:
            previous = get_num_threads()
            set_num_threads(self.num_threads)
            try:
                kernel(self.tiles, self.tile_size, *inputs, *outputs, *params)
            finally:
                set_num_threads(previous)
        self._pending = kernel_id
        self.dispatch_count += 1

    def barrier(self):
        """Make all writes of the last dispatch visible to the next one.

        ``prange`` loops join before returning, so the writes are already
        complete; the barrier closes the dispatch for bookkeeping.
        """
        self._pending = None
        self.barrier_count += 1


class ParallelSolver(StableFluidsSolver):
    """Tiled data-parallel stable-fluids solver.

    Parameters
    ----------
    config : ParallelInfo
        Grid size, physics, iteration counts (15 diffusion iterations and
        20 red/black sweeps by default), tile size and thread count.
    """

    Config = ParallelInfo

    def __init__(self, **kwargs):
        """Initialize parallel solver.

        Parameters
        ----------
        **kwargs
            Configuration parameters passed to ParallelInfo.
        """
        super().__init__(**kwargs)

        tile_size = getattr(self.config, "tile_size", 16)
        num_threads = getattr(self.config, "num_threads", None)
        self.dispatcher = KernelDispatcher(
            self.config.width, self.config.height,
            tile_size=tile_size, num_threads=num_threads,
        )

    def _run(self, kernel_id, inputs, outputs, *params):
        self.dispatcher.dispatch(kernel_id, inputs, outputs, *params)
        self.dispatcher.barrier()

    def apply_forces(self):
        f = self.fields
        c = self.config
        self._run(
            "force", (f.velocity,), (f.next_velocity,),
            float(c.force_x), float(c.force_y), float(c.timestep),
            int(c.force_band_start), int(c.force_band_end),
        )
        f.swap()

    def diffuse(self):
        f = self.fields
        alpha = float(self.config.alpha)

        self._run("copy", (f.velocity,), (f.before,))
        for _ in range(self.config.diffusion_iterations):
            self._run("diffusion", (f.velocity, f.before), (f.next_velocity,), alpha)
            f.swap()

    def advect(self):
        f = self.fields
        self._run("advection", (f.velocity,), (f.next_velocity,), float(self.config.timestep))
        f.swap()

    def project(self):
        f = self.fields

        if not self.config.warm_start_pressure:
            f.reset_pressure()

        # Divergence pass; pressure buffers are bound but untouched
        self._run(
            "projection", (f.velocity, f.pressure), (f.divergence, f.next_pressure),
            DIVERGENCE,
        )

        for _ in range(self.config.projection_iterations):
            for mode in (RED, BLACK):
                self._run(
                    "projection", (f.velocity, f.pressure, f.divergence), (f.next_pressure,),
                    mode,
                )
                f.swap_pressure()

        self._run("gradient", (f.velocity, f.pressure), (f.next_velocity,))
        f.swap()

    def enforce_boundary(self):
        f = self.fields
        self._run("boundary", (f.velocity,), (f.next_velocity,))
        f.swap()
