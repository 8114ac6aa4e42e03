"""Configuration and metadata data structures."""
from dataclasses import dataclass, asdict
import pandas as pd


@dataclass
class SolverConfig:
    """Base solver configuration and run info.

    Parameters
    ----------
    width : int, optional
        Number of grid columns (x-direction). Default is 256.
    height : int, optional
        Number of grid rows (y-direction). Default is 256.
    viscosity : float, optional
        Kinematic viscosity. Default is 0.1.
    timestep : float, optional
        Fixed time step. Default is 0.5.
    dx : float, optional
        Grid spacing. Default is 1.
    diffusion_iterations : int, optional
        Jacobi iterations per diffusion stage. Default is 50.
    projection_iterations : int, optional
        Red-black sweeps per projection stage. Default is 20.
    force_x, force_y : float, optional
        Constant body force applied inside the jet band. Default is (2, 0).
    force_band_start, force_band_end : int, optional
        Half-open column range ``[start, end)`` of the jet. Default is [116, 140).
    zero_boundary : bool, optional
        Zero the outer ring of velocities after projection. Default is False.
    warm_start_pressure : bool, optional
        Keep the previous pressure as initial guess instead of resetting it.
        Default is False.
    method : str, optional
        Solver method name. Default is "".
    steps : int, optional
        Number of simulated steps (filled after a run). Default is 0.
    wall_time : float, optional
        Wall-clock seconds of the last run. Default is 0.
    final_divergence : float, optional
        Mean absolute interior divergence after the last step. Default is None.
    """
    # Grid parameters
    width: int = 256
    height: int = 256

    # Physics parameters
    viscosity: float = 0.1
    timestep: float = 0.5
    dx: float = 1.0

    # Solver config
    diffusion_iterations: int = 50
    projection_iterations: int = 20

    # Jet forcing
    force_x: float = 2.0
    force_y: float = 0.0
    force_band_start: int = 116
    force_band_end: int = 140

    # Boundary and pressure handling
    zero_boundary: bool = False
    warm_start_pressure: bool = False
    method: str = ""

    # Run info
    steps: int = 0
    wall_time: float = 0.0
    final_divergence: float = None

    @property
    def alpha(self) -> float:
        """Diffusion coefficient ``viscosity * timestep / dx**2``."""
        return self.viscosity * self.timestep / (self.dx * self.dx)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert config/metadata to single-row DataFrame.

        Returns
        -------
        pd.DataFrame
            Single-row DataFrame with all configuration and run fields.
        """
        return pd.DataFrame([asdict(self)])


@dataclass
class SequentialInfo(SolverConfig):
    """Sequential (cell-by-cell) solver configuration."""
    method: str = "sequential"


@dataclass
class ParallelInfo(SolverConfig):
    """Data-parallel solver configuration.

    Inherits all parameters from SolverConfig and overrides the reference
    values of the tiled backend.

    Parameters
    ----------
    tile_size : int, optional
        Edge length of the square dispatch tiles. Default is 16.
    num_threads : int, optional
        Worker threads for the numba backend. Default is None (numba default).
    """
    viscosity: float = 30.0
    timestep: float = 0.2
    diffusion_iterations: int = 15
    projection_iterations: int = 20
    tile_size: int = 16
    num_threads: int = None
    method: str = "parallel"
