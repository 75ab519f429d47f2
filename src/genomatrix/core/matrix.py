"""
Dense 2-D float64 matrix with a one-shot freeze switch.

Matrix is the numeric payload behind Dataset, Dataframe and APMMatrix.

Row/column extraction discipline:
    ``get_row_v`` and ``get_column_v`` always return a frozen Vector that is a
    live, read-only view of the matrix. A view can never be written through,
    so handing one out (before or after the matrix is frozen) cannot break
    the immutability of the owning container. Call ``clone_deep()`` on the
    returned Vector for a mutable copy.

Examples:
    >>> m = Matrix(2, 3)
    >>> m.set_element(0, 1, 4.5)
    >>> m.get_row_v(0).to_list()
    [0.0, 4.5, 0.0]
    >>> m.freeze().is_frozen
    True
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from genomatrix.core.vector import FrozenError, Vector

__all__ = ['Matrix']


class Matrix:
    """
    Fixed-size row-major float64 matrix.

    Args:
        nrows: Number of rows
        ncols: Number of columns
        values: Optional initial values, either 2-D (nrows x ncols) or a flat
            row-major sequence of nrows*ncols values. Always copied; use
            ``Matrix.from_values(..., share=True)`` to wrap an existing buffer.

    Raises:
        ValueError: If dimensions are negative or values do not fit the shape
    """

    def __init__(self, nrows: int, ncols: int, values: Sequence | np.ndarray | None = None):
        if nrows < 0 or ncols < 0:
            raise ValueError(f"Matrix dimensions cannot be negative: {nrows}x{ncols}")

        if values is None:
            data = np.zeros((nrows, ncols), dtype=np.float64)
        else:
            data = np.array(values, dtype=np.float64)
            if data.ndim == 1:
                if data.size != nrows * ncols:
                    raise ValueError(
                        f"Flat values length ({data.size}) must equal "
                        f"nrows*ncols ({nrows}*{ncols})"
                    )
                data = data.reshape((nrows, ncols))
            elif data.shape != (nrows, ncols):
                raise ValueError(
                    f"values shape {data.shape} must match ({nrows}, {ncols})"
                )

        self._data = np.ascontiguousarray(data)
        self._frozen = False

    @classmethod
    def from_values(cls, values: np.ndarray | Sequence, share: bool = False) -> Matrix:
        """
        Build a Matrix from 2-D values.

        Args:
            values: 2-D array-like or another Matrix
            share: Reuse the given float64 ndarray / Matrix buffer instead of copying

        Returns:
            New Matrix (frozen if it shares a read-only buffer)
        """
        if isinstance(values, Matrix):
            data = values._data if share else values._data.copy()
            frozen = values._frozen and share
        elif share and isinstance(values, np.ndarray):
            if values.dtype != np.float64:
                raise ValueError(
                    f"Cannot share a buffer of dtype {values.dtype}; float64 required"
                )
            data = values
            frozen = not values.flags.writeable
        else:
            data = np.array(values, dtype=np.float64)
            frozen = False

        if data.ndim != 2:
            raise ValueError(f"Matrix values must be 2D, got shape {data.shape}")

        obj = cls.__new__(cls)
        obj._data = data
        obj._frozen = frozen
        return obj

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------

    @property
    def num_row(self) -> int:
        return int(self._data.shape[0])

    @property
    def num_col(self) -> int:
        return int(self._data.shape[1])

    @property
    def shape(self) -> tuple[int, int]:
        return (self.num_row, self.num_col)

    @property
    def dim(self) -> int:
        """Total number of cells."""
        return self.num_row * self.num_col

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def freeze(self) -> Matrix:
        self._frozen = True
        if self._data.flags.writeable:
            self._data.flags.writeable = False
        return self

    @property
    def is_frozen(self) -> bool:
        return self._frozen or not self._data.flags.writeable

    def clone_deep(self) -> Matrix:
        """Unfrozen, fully independent copy."""
        return Matrix.from_values(self._data.copy(), share=True)

    def _check_mutable(self, what: str) -> None:
        if self.is_frozen:
            raise FrozenError(f"Matrix is frozen; cannot {what}")

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def get_element(self, row: int, col: int) -> float:
        return float(self._data[row, col])

    def get_row_v(self, row: int) -> Vector:
        """Frozen live view of one row."""
        return Vector._view(self._data[row, :])

    def get_column_v(self, col: int) -> Vector:
        """Frozen live view of one column."""
        return Vector._view(self._data[:, col])

    def to_array(self) -> np.ndarray:
        """Read-only 2-D view of the values."""
        view = self._data.view()
        view.flags.writeable = False
        return view

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set_element(self, row: int, col: int, value: float) -> None:
        self._check_mutable(f"set element ({row}, {col})")
        self._data[row, col] = value

    def set_row(self, row: int, values: Sequence[float] | Vector) -> None:
        self._check_mutable(f"set row {row}")
        arr = values.to_array() if isinstance(values, Vector) else np.asarray(values, dtype=np.float64)
        if arr.shape != (self.num_col,):
            raise ValueError(f"Row {row} needs {self.num_col} values, got {arr.shape}")
        self._data[row, :] = arr

    def fill(self, value: float) -> None:
        self._check_mutable("fill")
        self._data.fill(value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return np.array_equal(self._data, other._data, equal_nan=True)

    __hash__ = None

    def __repr__(self) -> str:
        state = "frozen" if self.is_frozen else "mutable"
        return f"Matrix({self.num_row}x{self.num_col}, {state})"
