"""Record velocity frames, densify them by interpolation and store them on disk.

File layout (little-endian, no padding)::

    int32   frame_count
    int32   width
    int32   height
    float64 x, y    # frame_count * height * width pairs, row-major per frame

Within a frame, row ``j`` is stored before row ``j+1`` and column ``i``
before column ``i+1``.
"""

from pathlib import Path

import numpy as np

from datastructures import Frame, FrameSequence

HEADER_DTYPE = np.dtype("<i4")
VALUE_DTYPE = np.dtype("<f8")
HEADER_SIZE = 3 * HEADER_DTYPE.itemsize


class FrameFileError(OSError):
    """A frame file could not be opened, or its payload is truncated."""


class GridMismatchError(ValueError):
    """A frame file was written for a different grid size."""


class FrameRecorder:
    """Collect frames from a running solver and play them back smoothly.

    Parameters
    ----------
    width, height : int
        Grid size every recorded frame must have.
    n_between : int
        Frames inserted between each consecutive recorded pair.

    Attributes
    ----------
    recorded : FrameSequence
        Frames captured via ``record``.
    generated : FrameSequence
        Output of the latest ``generate`` or ``read``.
    """

    progress_every = 100

    def __init__(self, width, height, n_between=10):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid must be non-empty, got {width}x{height}")
        if n_between < 0:
            raise ValueError(f"n_between must be non-negative, got {n_between}")

        self.width = width
        self.height = height
        self.n_between = n_between
        self.recorded = FrameSequence(width, height)
        self.generated = FrameSequence(width, height)

    def record(self, velocity, step=None):
        """Append a deep copy of ``velocity``; later solver steps do not alter it."""
        frame = Frame.capture(velocity, step=step)
        self.recorded.append(frame)
        return frame

    def clear(self):
        self.recorded = FrameSequence(self.width, self.height)
        self.generated = FrameSequence(self.width, self.height)

    def generate(self):
        """Rebuild ``generated`` from ``recorded``.

        Each recorded frame ``A`` is followed by ``n`` blends toward its
        successor ``B``, ``(A * (n - j) + B * (j + 1)) / (n + 1)`` for
        ``j = 0 .. n-1``; the last recorded frame is appended once at the end.

        Returns
        -------
        generated : FrameSequence
        """
        n = self.n_between
        frames = self.recorded.frames
        out = FrameSequence(self.width, self.height)

        for a, b in zip(frames[:-1], frames[1:]):
            out.append(a)
            for j in range(n):
                blend = (a.velocity * (n - j) + b.velocity * (j + 1)) / (n + 1)
                out.append(Frame.capture(blend))
        if frames:
            out.append(frames[-1])

        self.generated = out
        return out

    # ---------------------------------------------------------------------
    # Persistence
    # ---------------------------------------------------------------------
    def write(self, filepath, sequence=None):
        """Write a frame sequence (``generated`` by default) to ``filepath``.

        Parameters
        ----------
        filepath : str or Path
            Output file path.
        sequence : FrameSequence, optional
            Sequence to write instead of ``generated``.
        """
        sequence = self.generated if sequence is None else sequence
        filepath = Path(filepath)
        header = np.array([len(sequence), sequence.width, sequence.height], dtype=HEADER_DTYPE)

        try:
            fh = open(filepath, "wb")
        except OSError as exc:
            raise FrameFileError(f"Cannot open frame file for writing: {filepath}") from exc

        with fh:
            fh.write(header.tobytes())
            for idx, frame in enumerate(sequence):
                fh.write(np.ascontiguousarray(frame.velocity, dtype=VALUE_DTYPE).tobytes())
                if (idx + 1) % self.progress_every == 0:
                    print(f"Wrote frame {idx + 1}/{len(sequence)}")

        print(f"Frames saved to: {filepath} ({len(sequence)} frames)")

    def read(self, filepath):
        """Load a frame file into ``generated``.

        Raises
        ------
        FrameFileError
            The file cannot be opened or its payload is shorter than the
            header promises.
        GridMismatchError
            The file's width or height differs from this recorder's grid.

        ``generated`` is replaced only after the whole file has been read.
        """
        filepath = Path(filepath)
        try:
            raw = filepath.read_bytes()
        except OSError as exc:
            raise FrameFileError(f"Cannot open frame file: {filepath}") from exc

        if len(raw) < HEADER_SIZE:
            raise FrameFileError(
                f"Truncated frame file {filepath}: header needs {HEADER_SIZE} bytes, got {len(raw)}"
            )

        count, width, height = (int(v) for v in np.frombuffer(raw, dtype=HEADER_DTYPE, count=3))
        if width != self.width or height != self.height:
            raise GridMismatchError(
                f"Frame file {filepath} is {width}x{height}, recorder expects "
                f"{self.width}x{self.height}"
            )
        if count < 0:
            raise FrameFileError(f"Corrupt frame file {filepath}: negative frame count {count}")

        frame_values = height * width * 2
        expected = HEADER_SIZE + count * frame_values * VALUE_DTYPE.itemsize
        if len(raw) < expected:
            raise FrameFileError(
                f"Truncated frame file {filepath}: expected {expected} bytes, got {len(raw)}"
            )

        payload = np.frombuffer(
            raw, dtype=VALUE_DTYPE, count=count * frame_values, offset=HEADER_SIZE
        ).reshape(count, height, width, 2)

        loaded = FrameSequence(width, height)
        for idx in range(count):
            loaded.append(Frame.capture(payload[idx]))
            if (idx + 1) % self.progress_every == 0:
                print(f"Read frame {idx + 1}/{count}")

        self.generated = loaded
        print(f"Frames loaded from: {filepath} ({count} frames)")
        return loaded
