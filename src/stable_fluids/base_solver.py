"""Abstract base solver for the stable-fluids step pipeline."""

from abc import ABC, abstractmethod
import numpy as np
from dataclasses import replace

from datastructures import FieldStore, TimeSeries
from kernels import add_radial_force, mean_abs_divergence
from utils.poisson_validator import PoissonValidator


class StableFluidsSolver(ABC):
    """Abstract base solver for the operator-split Navier-Stokes step.

    Handles:
    - Configuration management
    - The fixed stage order Forces -> Diffusion -> Advection -> Projection
    - Simulation loop with per-step diagnostics and frame recording
    - Interactive force injection
    - Result storage

    Subclasses must:
    - Set the Config class attribute
    - Implement apply_forces(), diffuse(), advect(), project()
    - Implement enforce_boundary() for the optional wall-zeroing pass
    - Extend __init__() for backend-specific setup
    """

    Config = None

    # Interactive force splat
    force_radius = 5
    max_force = 2.0

    def __init__(self, config=None, **kwargs):
        """Initialize solver with configuration.

        Parameters
        ----------
        config : Config, optional
            Configuration object. If not provided, kwargs are used to create config.
        **kwargs
            Configuration parameters passed to Config class if config is None.
        """
        # Create config from kwargs if not provided
        if config is None:
            if self.Config is None:
                raise ValueError("Subclass must define Config class attribute")
            config = self.Config(**kwargs)

        if config.width <= 0 or config.height <= 0:
            raise ValueError(f"Grid must be non-empty, got {config.width}x{config.height}")
        if config.diffusion_iterations < 0 or config.projection_iterations < 0:
            raise ValueError("Iteration counts must be non-negative")

        self.config = config
        self.fields = FieldStore.allocate(config.width, config.height)
        self.validator = PoissonValidator(config.width, config.height)

        self.time_series = TimeSeries()
        self.metadata = replace(self.config)
        self.steps_taken = 0

    # ---------------------------------------------------------------------
    # Stage contract
    # ---------------------------------------------------------------------
    @abstractmethod
    def apply_forces(self):
        """Add the jet body force (explicit Euler) to the current velocity."""
        pass

    @abstractmethod
    def diffuse(self):
        """Jacobi relaxation of the implicit viscous diffusion equation."""
        pass

    @abstractmethod
    def advect(self):
        """Semi-Lagrangian self-advection of the velocity field."""
        pass

    @abstractmethod
    def project(self):
        """Remove the divergent part of the velocity via a pressure solve."""
        pass

    @abstractmethod
    def enforce_boundary(self):
        """Zero the outer ring of velocities."""
        pass

    def step(self):
        """Advance the simulation by one time step.

        Returns
        -------
        velocity : np.ndarray
            The current velocity buffer, shape (H, W, 2).
        """
        self.apply_forces()
        self.diffuse()
        self.advect()
        self.project()
        if self.config.zero_boundary:
            self.enforce_boundary()
        self.steps_taken += 1
        return self.fields.velocity

    # ---------------------------------------------------------------------
    # Driver loop
    # ---------------------------------------------------------------------
    def simulate(self, n_steps, recorder=None):
        """Run ``n_steps`` steps, optionally recording a frame after each.

        Stores results in solver attributes:
        - self.time_series : TimeSeries dataclass with per-step diagnostics
        - self.metadata : copy of the config with run info filled in

        Parameters
        ----------
        n_steps : int
            Number of steps to simulate.
        recorder : FrameRecorder, optional
            Receives the velocity field after every step.
        """
        import time

        if n_steps < 0:
            raise ValueError(f"n_steps must be non-negative, got {n_steps}")

        time_start = time.time()

        for i in range(n_steps):
            velocity = self.step()

            if recorder is not None:
                recorder.record(velocity, step=self.steps_taken)

            self._record_diagnostics()

            if i % 10 == 0 or i == n_steps - 1:
                print(
                    f"Step {self.steps_taken}: div={self.time_series.divergence[-1]:.6e}, "
                    f"max_speed={self.time_series.max_speed[-1]:.6e}"
                )

        wall_time = time.time() - time_start
        print(f"Simulation finished in {wall_time:.2f} seconds.")

        self.metadata = replace(
            self.config,
            steps=self.steps_taken,
            wall_time=wall_time,
            final_divergence=self.time_series.divergence[-1] if self.time_series.divergence else None,
        )

    def _record_diagnostics(self):
        vel = self.fields.velocity
        speed = np.sqrt(vel[:, :, 0] ** 2 + vel[:, :, 1] ** 2)

        self.time_series.divergence.append(float(mean_abs_divergence(vel)))
        self.time_series.kinetic_energy.append(0.5 * float(np.sum(vel * vel)))
        self.time_series.max_speed.append(float(speed.max()))
        self.time_series.pressure_residual.append(
            self.validator.residual(self.fields.pressure, self.fields.divergence)
        )

    # ---------------------------------------------------------------------
    # Interaction
    # ---------------------------------------------------------------------
    def add_force(self, x, y, fx, fy):
        """Inject a local force around cell (x, y).

        The target is clamped into the grid and only cells within
        ``force_radius`` of it are touched, in place, in the current buffer.

        Returns
        -------
        n_touched : int
            Number of cells that received force.
        """
        x = max(0, min(int(x), self.config.width - 1))
        y = max(0, min(int(y), self.config.height - 1))
        return add_radial_force(
            self.fields.velocity, x, y, float(fx), float(fy),
            self.force_radius, self.max_force,
        )

    def add_dye(self, x, y, intensity):
        """Dye marker: a small upward-in-y push at (x, y)."""
        return self.add_force(x, y, 0.0, intensity * 0.1)

    def set_velocity(self, values):
        """Replace the current velocity field with a (H, W, 2) array."""
        self.fields.load_velocity(values)

    def velocity_snapshot(self):
        return self.fields.snapshot()

    # ---------------------------------------------------------------------
    # Persistence
    # ---------------------------------------------------------------------
    def save(self, filepath):
        """Save results to HDF5 file.

        Parameters
        ----------
        filepath : str or Path
            Output file path.
        """
        from dataclasses import asdict
        import h5py
        from pathlib import Path

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        metadata_dict = asdict(self.metadata)
        time_series_dict = asdict(self.time_series)
        vel = self.fields.velocity

        with h5py.File(filepath, "w") as f:
            # Save metadata as root-level attributes
            for key, val in metadata_dict.items():
                # Skip None values
                if val is None:
                    continue
                f.attrs[key] = val

            # Save fields in a fields group
            fields_grp = f.create_group("fields")
            fields_grp.create_dataset("u", data=vel[:, :, 0])
            fields_grp.create_dataset("v", data=vel[:, :, 1])
            fields_grp.create_dataset("pressure", data=self.fields.pressure)
            fields_grp.create_dataset("divergence", data=self.fields.divergence)
            fields_grp.create_dataset(
                "velocity_magnitude", data=np.sqrt(vel[:, :, 0] ** 2 + vel[:, :, 1] ** 2)
            )

            # Save time series in a group
            ts_grp = f.create_group("time_series")
            for key, val in time_series_dict.items():
                ts_grp.create_dataset(key, data=np.asarray(val, dtype=np.float64))

        print(f"Results saved to: {filepath}")
