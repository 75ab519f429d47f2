"""
Fixed-length numeric vector with a one-shot freeze switch.

Vector is the 1-D building block underneath RankedList scores and the rows
and columns handed out by Matrix. It wraps a contiguous float64 numpy array.

Engineering Design:
    - Explicit sharing: ``share=True`` reuses the caller's buffer, ``share=False``
      deep-copies it. There is no copy-on-write and no implicit aliasing.
    - Freeze is irreversible: after ``freeze()`` every mutator raises FrozenError.
      The underlying array is also flagged read-only so numpy-level writes fail.
    - ``clone_deep()`` always returns an unfrozen, independent copy.

Examples:
    >>> v = Vector([1.0, -2.0, 3.0])
    >>> v.set_element(0, 5.0)
    >>> v.freeze()
    >>> v.set_element(0, 1.0)
    Traceback (most recent call last):
    ...
    genomatrix.core.vector.FrozenError: Vector is frozen; cannot set element 0
"""

from __future__ import annotations

import math
from typing import Iterable, Iterator, Sequence

import numpy as np

from genomatrix.core.modes import ScoreMode

__all__ = ['Vector', 'FrozenError', 'format_value']


class FrozenError(RuntimeError):
    """Raised when a mutating operation is attempted on a frozen container."""
    pass


def format_value(value: float, na_rep: str = '') -> str:
    """Render a float for the flat-file formats (NaN becomes ``na_rep``, empty by default)."""
    value = float(value)
    if math.isnan(value):
        return na_rep
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    return repr(value)


class Vector:
    """
    Ordered float64 values with a fixed length and a one-time freeze.

    Args:
        values: Either an int (size of a zero-filled vector) or the initial
            values (sequence, ndarray or another Vector).
        share: If True and ``values`` is an ndarray or Vector, reuse its buffer
            instead of copying. Sharing a frozen Vector yields a frozen Vector.

    Raises:
        ValueError: If the values are not one-dimensional or size is negative
    """

    def __init__(self, values: int | Sequence[float] | np.ndarray | Vector = 0,
                 share: bool = False):
        frozen = False
        if isinstance(values, (int, np.integer)) and not isinstance(values, bool):
            if values < 0:
                raise ValueError(f"Vector size cannot be negative: {values}")
            data = np.zeros(int(values), dtype=np.float64)
        elif isinstance(values, Vector):
            frozen = values._frozen and share
            data = values._data if share else values._data.copy()
        elif isinstance(values, np.ndarray) and share:
            if values.dtype != np.float64:
                raise ValueError(
                    f"Cannot share a buffer of dtype {values.dtype}; float64 required"
                )
            data = values
            frozen = not values.flags.writeable
        else:
            data = np.array(values, dtype=np.float64)

        if data.ndim != 1:
            raise ValueError(f"Vector values must be 1D, got shape {data.shape}")

        self._data = data
        self._frozen = frozen

    @classmethod
    def _view(cls, data: np.ndarray) -> Vector:
        """Wrap ``data`` without copying as a frozen, read-only vector."""
        view = data.view()
        view.flags.writeable = False
        obj = cls.__new__(cls)
        obj._data = view
        obj._frozen = True
        return obj

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def freeze(self) -> Vector:
        """Make this vector permanently immutable. Returns self for chaining."""
        self._frozen = True
        if self._data.flags.writeable:
            self._data.flags.writeable = False
        return self

    @property
    def is_frozen(self) -> bool:
        # a shared buffer may have been frozen through another wrapper
        return self._frozen or not self._data.flags.writeable

    def _check_mutable(self, what: str) -> None:
        if self.is_frozen:
            raise FrozenError(f"Vector is frozen; cannot {what}")

    def clone_deep(self) -> Vector:
        """Independent, unfrozen copy regardless of this vector's state."""
        return Vector(self._data.copy(), share=True)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        return int(self._data.shape[0])

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[float]:
        return (float(x) for x in self._data)

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def get_element(self, index: int) -> float:
        return float(self._data[index])

    def to_array(self) -> np.ndarray:
        """Read-only ndarray view of the values (no copy)."""
        view = self._data.view()
        view.flags.writeable = False
        return view

    def to_list(self) -> list[float]:
        return self._data.tolist()

    def to_string(self, delim: str = '\t', na_rep: str = '') -> str:
        """Join values with ``delim``; NaN renders as ``na_rep`` (an empty field by default)."""
        return delim.join(format_value(x, na_rep) for x in self._data)

    # ------------------------------------------------------------------
    # Mutation (fails once frozen)
    # ------------------------------------------------------------------

    def set_element(self, index: int, value: float) -> None:
        self._check_mutable(f"set element {index}")
        self._data[index] = value

    def __setitem__(self, index: int, value: float) -> None:
        self.set_element(index, value)

    def fill(self, value: float) -> None:
        self._check_mutable("fill")
        self._data.fill(value)

    def set_values(self, values: Iterable[float]) -> None:
        """Overwrite all values in place; length must match."""
        self._check_mutable("set values")
        arr = np.asarray(list(values), dtype=np.float64)
        if arr.shape != self._data.shape:
            raise ValueError(
                f"Expected {self.size} values, got {arr.shape[0] if arr.ndim else 0}"
            )
        self._data[:] = arr

    # ------------------------------------------------------------------
    # Score-mode helpers
    # ------------------------------------------------------------------

    def size_of(self, mode: ScoreMode) -> int:
        """Number of values selected by ``mode`` (zero counts as positive)."""
        if mode is ScoreMode.POS_AND_NEG_TOGETHER:
            return self.size
        negative = int(np.count_nonzero(self._data < 0))
        if mode is ScoreMode.NEG_ONLY:
            return negative
        return self.size - negative

    def extract(self, mode: ScoreMode) -> Vector:
        """New unfrozen vector holding the values selected by ``mode``, in order."""
        if mode is ScoreMode.POS_AND_NEG_TOGETHER:
            return self.clone_deep()
        if mode is ScoreMode.NEG_ONLY:
            mask = self._data < 0
        else:
            mask = ~(self._data < 0)
        return Vector(self._data[mask].copy(), share=True)

    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return np.array_equal(self._data, other._data, equal_nan=True)

    __hash__ = None

    def __repr__(self) -> str:
        state = "frozen" if self.is_frozen else "mutable"
        return f"Vector(size={self.size}, {state})"
