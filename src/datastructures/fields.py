"""Grid field storage with double-buffer bookkeeping."""
from dataclasses import dataclass
import numpy as np

from .vector import Vec2


@dataclass
class FieldStore:
    """Velocity, pressure and divergence fields of one solver instance.

    Arrays are indexed ``[row, column]``: cell ``(i, j)`` lives at ``[j, i]``.
    The x velocity component points along increasing ``i`` and the y component
    along increasing ``j``.

    Parameters
    ----------
    width : int
        Number of columns W.
    height : int
        Number of rows H.
    velocity_buffers : np.ndarray
        Ping-pong velocity buffers, shape (2, H, W, 2).
    pressure_buffers : np.ndarray
        Ping-pong pressure buffers, shape (2, H, W).
    divergence : np.ndarray
        Divergence of the last projection, shape (H, W).
    before : np.ndarray
        Velocity captured at the start of diffusion, shape (H, W, 2).
    current : int
        Index of the current velocity buffer.
    pressure_current : int
        Index of the current pressure buffer.
    """
    width: int
    height: int
    velocity_buffers: np.ndarray
    pressure_buffers: np.ndarray
    divergence: np.ndarray
    before: np.ndarray
    current: int = 0
    pressure_current: int = 0

    @classmethod
    def allocate(cls, width: int, height: int):
        """Allocate all arrays, zero-filled."""
        return cls(
            width=width,
            height=height,
            velocity_buffers=np.zeros((2, height, width, 2), dtype=np.float64),
            pressure_buffers=np.zeros((2, height, width), dtype=np.float64),
            divergence=np.zeros((height, width), dtype=np.float64),
            before=np.zeros((height, width, 2), dtype=np.float64),
        )

    # ------------------------------------------------------------------
    # Buffer views
    # ------------------------------------------------------------------
    @property
    def velocity(self) -> np.ndarray:
        """Current (readable) velocity buffer."""
        return self.velocity_buffers[self.current]

    @property
    def next_velocity(self) -> np.ndarray:
        """Write target of the next velocity pass."""
        return self.velocity_buffers[1 - self.current]

    @property
    def pressure(self) -> np.ndarray:
        return self.pressure_buffers[self.pressure_current]

    @property
    def next_pressure(self) -> np.ndarray:
        return self.pressure_buffers[1 - self.pressure_current]

    def swap(self):
        """Make the former write buffer the current velocity."""
        self.current = 1 - self.current

    def swap_pressure(self):
        self.pressure_current = 1 - self.pressure_current

    def reset_pressure(self):
        self.pressure_buffers.fill(0.0)
        self.pressure_current = 0

    # ------------------------------------------------------------------
    # Clamped sampling
    # ------------------------------------------------------------------
    def _clamp(self, i, j):
        ci = max(0, min(self.width - 1, i))
        cj = max(0, min(self.height - 1, j))
        return ci, cj

    def boundary_velocity(self, i: int, j: int) -> Vec2:
        """Velocity at (i, j) with both coordinates clamped into the grid."""
        ci, cj = self._clamp(i, j)
        u, v = self.velocity[cj, ci]
        return Vec2(float(u), float(v))

    def boundary_pressure(self, i: int, j: int) -> float:
        """Pressure at (i, j) with both coordinates clamped into the grid."""
        ci, cj = self._clamp(i, j)
        return float(self.pressure[cj, ci])

    # ------------------------------------------------------------------
    # Host-side access
    # ------------------------------------------------------------------
    def load_velocity(self, values):
        """Copy a (H, W, 2) array into the current velocity buffer."""
        values = np.asarray(values, dtype=np.float64)
        if values.shape != (self.height, self.width, 2):
            raise ValueError(
                f"Velocity shape {values.shape} does not match grid "
                f"({self.height}, {self.width}, 2)"
            )
        np.copyto(self.velocity, values)

    def snapshot(self) -> np.ndarray:
        """Deep copy of the current velocity field."""
        return self.velocity.copy()
