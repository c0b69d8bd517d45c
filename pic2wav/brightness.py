from __future__ import annotations

import numpy as np


class BrightnessGrid:
    """
    Square grid of pixel brightness values in 0..1.

    Stored as a single row-major buffer: row = time-slice, column = frequency bin.
    The buffer is read-only once the grid is built.
    """

    def __init__(self, values, resolution: int):
        buf = np.array(values, dtype=np.float64).reshape(-1)
        if buf.size != resolution * resolution:
            raise ValueError(
                f"Expected {resolution * resolution} values for a {resolution}x{resolution} grid, got {buf.size}"
            )
        if not np.all(np.isfinite(buf)):
            raise ValueError("Brightness values must be finite")
        if buf.size and (buf.min() < 0.0 or buf.max() > 1.0):
            raise ValueError("Brightness values must be in 0..1")
        buf.flags.writeable = False
        self._buf = buf
        self.resolution = resolution

    @classmethod
    def from_matrix(cls, matrix) -> BrightnessGrid:
        m = np.asarray(matrix, dtype=np.float64)
        if m.ndim != 2 or m.shape[0] != m.shape[1]:
            raise ValueError(f"Brightness matrix must be square, got shape {m.shape}")
        return cls(m, m.shape[0])

    def __getitem__(self, index) -> float:
        row, col = index
        return float(self._buf[self.offset(row, col)])

    def offset(self, row: int, col: int) -> int:
        if not (0 <= row < self.resolution and 0 <= col < self.resolution):
            raise IndexError(f"({row}, {col}) outside {self.resolution}x{self.resolution} grid")
        return row * self.resolution + col

    def row(self, row: int) -> np.ndarray:
        """Read-only view of one row."""
        start = self.offset(row, 0)
        return self._buf[start:start + self.resolution]

    def as_matrix(self) -> np.ndarray:
        return self._buf.reshape(self.resolution, self.resolution)

    def row_energy(self) -> np.ndarray:
        """Per-row brightness sums, the normalisation divisor for each line."""
        return self.as_matrix().sum(axis=1)

    def __repr__(self):
        return f"BrightnessGrid(resolution={self.resolution}, mean={self._buf.mean():.4f})"

    def __eq__(self, other):
        if not isinstance(other, BrightnessGrid):
            return NotImplemented
        return self.resolution == other.resolution and np.array_equal(self._buf, other._buf)
