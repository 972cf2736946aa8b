"""Row-major 4x4 matrix used by affine transforms.

The matrix wraps a read-only NumPy array of shape (4, 4) in float64. Matrix
products follow the standard row-by-column rule and are not commutative; the
order in which matrices are multiplied is preserved exactly.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt


class Matrix4:
    """An immutable 4x4 matrix stored in row-major order.

    Attributes:
        rows: The (4, 4) float64 array backing the matrix. The array is
            marked read-only so a matrix never changes after construction.
    """

    __slots__ = ("rows",)

    def __init__(self, values: Sequence[Sequence[float]] | npt.ArrayLike) -> None:
        """Create a matrix from a 4x4 nested sequence or array.

        Args:
            values: Sixteen floats laid out as four rows of four.

        Raises:
            ValueError: If the input is not 4x4 or contains NaN/infinite entries.
        """
        rows = np.array(values, dtype=np.float64)
        if rows.shape != (4, 4):
            raise ValueError(f"Matrix4 requires a 4x4 array, got shape {rows.shape}")
        if not np.all(np.isfinite(rows)):
            raise ValueError("Matrix4 entries must be finite")
        rows.flags.writeable = False
        self.rows = rows

    @classmethod
    def identity(cls) -> Matrix4:
        """Return the 4x4 identity matrix."""
        return cls(np.eye(4))

    @classmethod
    def from_row_major(cls, values: Sequence[float]) -> Matrix4:
        """Create a matrix from 16 floats listed row by row."""
        flat = np.asarray(values, dtype=np.float64)
        if flat.shape != (16,):
            raise ValueError(f"Expected 16 values, got {flat.size}")
        return cls(flat.reshape(4, 4))

    @staticmethod
    def multiply(m1: Matrix4, m2: Matrix4) -> Matrix4:
        """Return the product m1 * m2."""
        return Matrix4(m1.rows @ m2.rows)

    def __matmul__(self, other: Matrix4) -> Matrix4:
        if not isinstance(other, Matrix4):
            return NotImplemented
        return Matrix4.multiply(self, other)

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = index
        return float(self.rows[row, col])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix4):
            return NotImplemented
        return bool(np.array_equal(self.rows, other.rows))

    def __hash__(self) -> int:
        # Adding 0.0 folds -0.0 into 0.0 so equal matrices hash equal
        return hash((self.rows + 0.0).tobytes())

    def __repr__(self) -> str:
        return f"Matrix4({self.rows.tolist()!r})"

    def allclose(self, other: Matrix4, atol: float = 1e-9) -> bool:
        """Return True if every entry is within ``atol`` of ``other``."""
        return bool(np.allclose(self.rows, other.rows, rtol=0.0, atol=atol))

    def to_numpy(self) -> np.ndarray:
        """Return a writable copy of the backing array."""
        return self.rows.copy()
