"""Data structures for solver configuration, fields and recorded frames.

This module defines the configuration, grid storage and result data
structures shared by the sequential and parallel stable-fluids solvers.
"""

from .config import SolverConfig, SequentialInfo, ParallelInfo
from .fields import FieldStore
from .frames import Frame, FrameSequence
from .time_series import TimeSeries
from .vector import Vec2

__all__ = [
    # Configuration and metadata
    "SolverConfig",
    "SequentialInfo",
    "ParallelInfo",
    # Fields
    "FieldStore",
    "Vec2",
    # Frames
    "Frame",
    "FrameSequence",
    # Time series
    "TimeSeries",
]
