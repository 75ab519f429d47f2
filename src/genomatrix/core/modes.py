"""
Enumerated modes shared by vectors, ranked lists and sorting helpers.
"""

from __future__ import annotations

from enum import Enum

__all__ = ['SortMode', 'Order', 'ScoreMode']


class SortMode(Enum):
    """Compare scores by their real value or by magnitude."""
    REAL = "real"
    ABSOLUTE = "abs"

    @property
    def is_absolute(self) -> bool:
        return self is SortMode.ABSOLUTE

    @classmethod
    def lookup(cls, value: SortMode | str) -> SortMode:
        """Resolve a SortMode from an instance or its case-insensitive name/value."""
        if value is None:
            raise ValueError("Null sort mode not allowed")
        if isinstance(value, SortMode):
            return value
        text = str(value).strip().lower()
        for mode in cls:
            if text in (mode.value, mode.name.lower()):
                return mode
        raise ValueError(f"Unable to lookup sort mode: {value!r}")


class Order(Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"

    @property
    def is_ascending(self) -> bool:
        return self is Order.ASCENDING

    @classmethod
    def lookup(cls, value: Order | str) -> Order:
        if isinstance(value, Order):
            return value
        text = str(value).strip().lower()
        for order in cls:
            if text in (order.value, order.name.lower(), order.value[:3]):
                return order
        raise ValueError(f"Unable to lookup order: {value!r}")


class ScoreMode(Enum):
    """
    Which part of a score vector to keep.

    Zero is treated as positive, so a vector always splits into
    POS_ONLY + NEG_ONLY without overlap.
    """
    POS_ONLY = "pos_only"
    NEG_ONLY = "neg_only"
    POS_AND_NEG_TOGETHER = "pos_and_neg_together"
