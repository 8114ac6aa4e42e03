"""Frame data structures for recorded velocity fields."""
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np


@dataclass(frozen=True, eq=False)
class Frame:
    """Immutable snapshot of a velocity field.

    Parameters
    ----------
    velocity : np.ndarray
        Read-only copy of the field, shape (H, W, 2).
    step : int, optional
        Simulated step the snapshot was taken at. None for generated frames.
    """
    velocity: np.ndarray
    step: Optional[int] = None

    @classmethod
    def capture(cls, velocity, step=None):
        """Deep-copy ``velocity`` into a read-only frame."""
        data = np.array(velocity, dtype=np.float64, copy=True)
        data.flags.writeable = False
        return cls(velocity=data, step=step)

    @property
    def height(self) -> int:
        return self.velocity.shape[0]

    @property
    def width(self) -> int:
        return self.velocity.shape[1]


@dataclass
class FrameSequence:
    """Ordered list of frames sharing one grid size.

    Parameters
    ----------
    width : int
        Grid columns.
    height : int
        Grid rows.
    frames : List[Frame], optional
        Frames in playback order. Default is empty.
    """
    width: int
    height: int
    frames: List[Frame] = field(default_factory=list)

    def append(self, frame: Frame):
        if frame.velocity.shape != (self.height, self.width, 2):
            raise ValueError(
                f"Frame shape {frame.velocity.shape} does not match sequence grid "
                f"({self.height}, {self.width}, 2)"
            )
        self.frames.append(frame)

    def __len__(self):
        return len(self.frames)

    def __iter__(self):
        return iter(self.frames)

    def __getitem__(self, index):
        return self.frames[index]

    def to_array(self) -> np.ndarray:
        """Stack all frames into one (N, H, W, 2) array."""
        if not self.frames:
            return np.zeros((0, self.height, self.width, 2), dtype=np.float64)
        return np.stack([f.velocity for f in self.frames])

