"""
Present/absent/missing (APM) call matrix for microarray-style data.

Each cell holds one of three values parallel to a Dataset's numeric matrix:
PRESENT (1.0), ABSENT (0.0) or MISSING (NaN). Text files carry the calls as
"P", "A" and "M".

The literal "0" maps to MISSING, not ABSENT. Some legacy call files use "0"
for a missing call, and existing files depend on that reading.
"""

from __future__ import annotations

import math

from genomatrix.core.matrix import Matrix

__all__ = ['APMMatrix']


class APMMatrix(Matrix):

    PRESENT_STR = "P"
    ABSENT_STR = "A"
    MISSING_STR = "M"
    PRESENT = 1.0
    ABSENT = 0.0
    MISSING = float('nan')

    @staticmethod
    def value_of(call: str) -> float:
        """
        Numeric value of a call string.

        Raises:
            ValueError: If ``call`` is None or not a known call literal
        """
        if call is None:
            raise ValueError("Null call value not allowed")
        text = call.strip()
        upper = text.upper()
        if upper == APMMatrix.PRESENT_STR:
            return APMMatrix.PRESENT
        if upper == APMMatrix.ABSENT_STR:
            return APMMatrix.ABSENT
        if upper == APMMatrix.MISSING_STR:
            return APMMatrix.MISSING
        if text == "0":
            return APMMatrix.MISSING
        raise ValueError(f"Unknown AP call value >{call}<")

    def call_at(self, row: int, col: int) -> str:
        """Call string ("P", "A" or "M") at the given cell."""
        value = self.get_element(row, col)
        if math.isnan(value):
            return APMMatrix.MISSING_STR
        if value == APMMatrix.PRESENT:
            return APMMatrix.PRESENT_STR
        if value == APMMatrix.ABSENT:
            return APMMatrix.ABSENT_STR
        raise ValueError(f"Unknown value: {value} at row: {row} col: {col}")

    def set_call(self, row: int, col: int, call: str) -> None:
        self.set_element(row, col, APMMatrix.value_of(call))

    @classmethod
    def from_calls(cls, calls: list[list[str]]) -> APMMatrix:
        """Build from a 2-D grid of call strings."""
        nrows = len(calls)
        ncols = len(calls[0]) if nrows else 0
        apm = cls(nrows, ncols)
        for r, row in enumerate(calls):
            if len(row) != ncols:
                raise ValueError(f"Row {r}: expected {ncols} calls, got {len(row)}")
            for c, call in enumerate(row):
                apm.set_call(r, c, call)
        return apm
