"""Frame recording, interpolation and binary persistence."""

from .frame_recorder import FrameFileError, FrameRecorder, GridMismatchError

__all__ = [
    "FrameRecorder",
    "FrameFileError",
    "GridMismatchError",
]
