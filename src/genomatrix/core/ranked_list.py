"""
RankedList: an immutable sequence of (name, score) pairs in caller order.

A ranked list is the input to gene-set enrichment scoring: features ordered
by a ranking metric (signal-to-noise, t-statistic, log fold change, ...).
The caller sorts before construction; RankedList never re-sorts. Position
in the list is the rank.

Engineering Design:
    - Names and scores are shared or copied per the caller's explicit flags
    - Scores are frozen at construction
    - rank/score-by-name lookups go through a lazily built NameIndex
    - Duplicate names are not rejected (checking is O(n) on lists of tens
      of thousands of features); lookups resolve to the first occurrence

Examples:
    >>> rl = RankedList(["MYC", "TP53", "EGFR"], [2.5, 0.1, -1.3], name="tumor_vs_normal")
    >>> rl.rank("TP53")
    1
    >>> rl.score("EGFR")
    -1.3
    >>> rl.extract_by_score_mode(ScoreMode.NEG_ONLY).ranked_names
    ('EGFR',)
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Sequence

import numpy as np

from genomatrix.core.geneset import GeneSet
from genomatrix.core.modes import ScoreMode
from genomatrix.core.names import NameIndex, NameList, NameNotFoundError
from genomatrix.core.vector import Vector

__all__ = ['RankedList', 'MetricWeightStruc']


@dataclass(frozen=True)
class MetricWeightStruc:
    """
    Positive/negative weight summary of a score vector.

    Zero scores count as positive.
    """
    total_pos_weight: float
    total_neg_weight: float
    total_pos_length: int
    total_neg_length: int
    metric_name: str | None = None

    @classmethod
    def from_scores(cls, scores: np.ndarray, metric_name: str | None = None) -> MetricWeightStruc:
        scores = np.asarray(scores, dtype=np.float64)
        negative = scores < 0
        return cls(
            total_pos_weight=float(scores[~negative].sum()),
            total_neg_weight=float(scores[negative].sum()),
            total_pos_length=int(np.count_nonzero(~negative)),
            total_neg_length=int(np.count_nonzero(negative)),
            metric_name=metric_name,
        )

    @property
    def total_weight(self) -> float:
        return self.total_pos_weight + abs(self.total_neg_weight)

    @property
    def total_length(self) -> int:
        return self.total_pos_length + self.total_neg_length

    @property
    def total_pos_length_frac(self) -> float:
        return _ratio(self.total_pos_length, self.total_length)

    @property
    def total_neg_length_frac(self) -> float:
        return _ratio(self.total_neg_length, self.total_length)

    @property
    def total_pos_weight_frac(self) -> float:
        return _ratio(self.total_pos_weight, self.total_weight)

    @property
    def total_neg_weight_frac(self) -> float:
        return abs(_ratio(self.total_neg_weight, self.total_weight))


def _ratio(num: float, den: float) -> float:
    if den == 0:
        return float('nan')
    return float(num) / float(den)


class RankedList:
    """
    Ordered (name, score) pairs.

    Args:
        names: Ranked names (already in rank order)
        scores: Scores aligned with ``names`` (Vector, ndarray or sequence)
        name: Optional label, "ranked_list" when omitted
        share_names: Wrap ``names`` without copying
        share_scores: Reuse the score buffer without copying. A shared Vector
            is frozen in place.

    Raises:
        ValueError: If names or scores are missing or their lengths differ
    """

    def __init__(
        self,
        names: Sequence[str],
        scores: Vector | np.ndarray | Sequence[float],
        name: str | None = None,
        share_names: bool = False,
        share_scores: bool = False,
    ):
        if names is None:
            raise ValueError("Param names cannot be None")
        if scores is None:
            raise ValueError("Param scores cannot be None")

        if share_scores and isinstance(scores, Vector):
            vector = scores
        else:
            vector = Vector(scores, share=share_scores)
        ranked_names = NameList(names, share=share_names)

        if vector.size != len(ranked_names):
            raise ValueError(
                f"Mismatched sizes: scores ({vector.size}) and names ({len(ranked_names)})"
            )

        self._name = name if name is not None else "ranked_list"
        self._names = ranked_names
        self._scores = vector.freeze()
        self._index = NameIndex(self._names)

    @property
    def name(self) -> str:
        return self._name

    @property
    def name_index(self) -> NameIndex:
        return self._index

    @property
    def size(self) -> int:
        return self._scores.size

    def __len__(self) -> int:
        return self.size

    @property
    def quick_info(self) -> str:
        return f"{self.size} names"

    @property
    def ranked_names(self) -> tuple[str, ...]:
        return tuple(self._names)

    def rank_name(self, rank: int) -> str:
        return self._names[rank]

    def get_scores(self, cloned: bool = True) -> Vector:
        """Scores as a Vector: an unfrozen copy, or the frozen shared buffer."""
        if cloned:
            return self._scores.clone_deep()
        return self._scores

    def score_at(self, rank: int) -> float:
        return self._scores.get_element(rank)

    def rank(self, name: str) -> int | None:
        """Rank (position) of ``name``, or None when absent."""
        return self._index.index_of(name)

    def score(self, name: str) -> float:
        """
        Score of ``name``.

        Raises:
            NameNotFoundError: If name is not in the list
        """
        position = self._index.index_of(name)
        if position is None:
            raise NameNotFoundError(name, self._names)
        return self._scores.get_element(position)

    def scores_for(self, gene_set: GeneSet) -> np.ndarray:
        """Scores of every member of ``gene_set``, in member order."""
        return np.array([self.score(member) for member in gene_set], dtype=np.float64)

    # ------------------------------------------------------------------
    # Sub-lists
    # ------------------------------------------------------------------

    def extract_ranked(self, gene_set: GeneSet) -> RankedList:
        """Ranked members of ``gene_set``, in this list's relative order."""
        members = gene_set.members_as_set()
        positions = [i for i, n in enumerate(self._names) if n in members]
        return self._subset(positions, self._name)

    def size_of(self, mode: ScoreMode) -> int:
        return self._scores.size_of(mode)

    def extract_by_score_mode(self, mode: ScoreMode) -> RankedList:
        """
        Slice by score sign.

        POS_ONLY keeps every non-negative score, NEG_ONLY every negative score,
        POS_AND_NEG_TOGETHER everything. Selection is by sign wherever the
        score sits and rank order is preserved, so on a descending list these
        are the top block and the bottom block.
        """
        if mode is ScoreMode.POS_AND_NEG_TOGETHER:
            return self
        values = self._scores.to_array()
        if mode is ScoreMode.NEG_ONLY:
            positions = np.flatnonzero(values < 0)
        else:
            positions = np.flatnonzero(~(values < 0))
        return self._subset(positions.tolist(), f"{self._name}_{mode.value}")

    def names_of_up_or_dn_x_ranks(self, x: int, top: bool) -> list[str]:
        """
        The ``x`` most extreme names.

        Args:
            x: How many names (clamped to the list size)
            top: True for the first ranks, False for the last ranks listed
                from the very last one upward

        Raises:
            ValueError: If x is negative
        """
        if x < 0:
            raise ValueError(f"x must be non-negative, got {x}")
        x = min(x, self.size)
        if top:
            return list(self._names[:x])
        return [self._names[r] for r in range(self.size - 1, self.size - 1 - x, -1)]

    def clone_shallow(self, new_name: str) -> RankedList:
        """Same names and scores (shared) under a new label."""
        return RankedList(self._names, self._scores, name=new_name,
                          share_names=True, share_scores=True)

    def _subset(self, positions: Sequence[int], name: str) -> RankedList:
        values = self._scores.to_array()
        names = [self._names[i] for i in positions]
        scores = values[np.asarray(positions, dtype=np.intp)] if len(positions) else np.zeros(0)
        return RankedList(names, scores, name=name, share_names=True)

    # ------------------------------------------------------------------

    @cached_property
    def metric_weight_struc(self) -> MetricWeightStruc:
        return MetricWeightStruc.from_scores(self._scores.to_array())

    def __repr__(self) -> str:
        return f"RankedList({self._name!r}, {self.size} names)"
