"""
Builders that derive new ranked lists, gene-set collections and datasets.

Functions:
    - create_by_sorting / sort_ranked_list: build a RankedList in score order
    - ranked_list_from_column: rank the rows of a Dataset by one sample column
    - remove_gene_sets_smaller_than / remove_gene_sets_larger_than: size filters,
      optionally after qualifying each set against a Dataset or RankedList
    - DatasetBuilder / extract_rows: assemble a Dataset from rows of another

Sorting rules:
    - SortMode.REAL compares scores as-is, SortMode.ABSOLUTE by magnitude.
      The stored score is always the real value.
    - Ties keep their input order.
    - NaN scores come first in ascending order and last in descending order.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from genomatrix.core.annotation import Annot, FeatureAnnot, SampleAnnot
from genomatrix.core.dataset import Dataset, DefaultDataset
from genomatrix.core.geneset import GeneSet, NameIndexed
from genomatrix.core.matrix import Matrix
from genomatrix.core.modes import Order, SortMode
from genomatrix.core.ranked_list import RankedList
from genomatrix.core.vector import Vector

__all__ = [
    'create_by_sorting',
    'sort_ranked_list',
    'ranked_list_from_column',
    'remove_gene_sets_smaller_than',
    'remove_gene_sets_larger_than',
    'DatasetBuilder',
    'extract_rows',
]

logger = logging.getLogger(__name__)


def _sort_order(scores: np.ndarray, sort: SortMode, order: Order) -> np.ndarray:
    """Positions of ``scores`` in sorted order."""
    keys = np.abs(scores) if sort.is_absolute else scores
    missing = np.isnan(keys)
    present = np.flatnonzero(~missing)
    if order.is_ascending:
        ranked = present[np.argsort(keys[present], kind="stable")]
        return np.concatenate([np.flatnonzero(missing), ranked])
    ranked = present[np.argsort(-keys[present], kind="stable")]
    return np.concatenate([ranked, np.flatnonzero(missing)])


def create_by_sorting(
    names: Sequence[str],
    scores: Sequence[float] | np.ndarray | Vector,
    sort: SortMode | str = SortMode.REAL,
    order: Order | str = Order.DESCENDING,
    name: str | None = None,
) -> RankedList:
    """
    Sort (name, score) pairs into a new RankedList.

    Args:
        names: Feature names aligned with ``scores``
        scores: Unsorted scores
        sort: Compare real values or magnitudes
        order: Ascending or descending
        name: Label of the resulting list

    Raises:
        ValueError: If names and scores differ in length
    """
    values = Vector(scores).to_array()
    if len(names) != values.shape[0]:
        raise ValueError(
            f"Mismatched sizes: names ({len(names)}) and scores ({values.shape[0]})"
        )
    positions = _sort_order(values, SortMode.lookup(sort), Order.lookup(order))
    sorted_names = [names[i] for i in positions]
    return RankedList(sorted_names, values[positions], name=name, share_names=True)


def sort_ranked_list(
    rl: RankedList,
    sort: SortMode | str = SortMode.REAL,
    order: Order | str = Order.DESCENDING,
) -> RankedList:
    """Re-sort an existing RankedList; the result keeps its name."""
    return create_by_sorting(rl.ranked_names, rl.get_scores(cloned=False), sort, order, name=rl.name)


def ranked_list_from_column(
    dataset: Dataset,
    column: int | str,
    sort: SortMode | str = SortMode.REAL,
    order: Order | str = Order.DESCENDING,
) -> RankedList:
    """
    Rank the rows of ``dataset`` by the values of one column.

    Args:
        dataset: Source dataset
        column: Column position or column name

    Raises:
        ValueError: If a column name is not in the dataset
    """
    if isinstance(column, str):
        position = dataset.column_index(column)
        if position is None:
            raise ValueError(
                f"Column not found: {column!r}. Available: {list(dataset.column_names)}"
            )
    else:
        position = column
    col_name = dataset.get_column_name(position)
    return create_by_sorting(
        list(dataset.row_names),
        dataset.get_column(position),
        sort,
        order,
        name=f"{dataset.name}_{col_name}",
    )


def _filter_gene_sets(
    gene_sets: Sequence[GeneSet],
    keep,
    source: NameIndexed | None,
    qualify: bool,
) -> list[GeneSet]:
    kept = []
    for gset in gene_sets:
        # unqualified size bounds the qualified size, so check it first
        if not keep(gset.num_members()):
            continue
        if source is not None and qualify:
            gset = gset.clone_deep(source)
        elif source is not None:
            if not keep(gset.num_members_in(source)):
                continue
        if keep(gset.num_members()):
            kept.append(gset)
    return kept


def remove_gene_sets_smaller_than(
    gene_sets: Sequence[GeneSet],
    cutoff: int,
    source: NameIndexed | None = None,
    qualify: bool = False,
) -> list[GeneSet]:
    """
    Drop gene sets with fewer than ``cutoff`` members.

    Args:
        gene_sets: Candidate sets
        cutoff: Minimum member count to keep
        source: Optional Dataset or RankedList; sizes are then counted over
            members present in it
        qualify: With a source, return the qualified copies instead of the
            original sets
    """
    kept = _filter_gene_sets(gene_sets, lambda n: n >= cutoff, source, qualify)
    logger.debug(f"Kept {len(kept)}/{len(gene_sets)} gene sets with >= {cutoff} members")
    return kept


def remove_gene_sets_larger_than(
    gene_sets: Sequence[GeneSet],
    cutoff: int,
    source: NameIndexed | None = None,
    qualify: bool = False,
) -> list[GeneSet]:
    """Drop gene sets with more than ``cutoff`` members (see remove_gene_sets_smaller_than)."""
    kept = []
    for gset in gene_sets:
        if source is not None and qualify:
            gset = gset.clone_deep(source)
            size = gset.num_members()
        elif source is not None:
            size = gset.num_members_in(source)
        else:
            size = gset.num_members()
        if size <= cutoff:
            kept.append(gset)
    logger.debug(f"Kept {len(kept)}/{len(gene_sets)} gene sets with <= {cutoff} members")
    return kept


class DatasetBuilder:
    """
    Collects rows from existing datasets and assembles a new DefaultDataset.

    A builder produces exactly one dataset; adding rows after ``generate()``
    raises RuntimeError.

    Examples:
        >>> builder = DatasetBuilder("subset", ds.column_names)
        >>> builder.add_row(0, ds)
        >>> builder.add_row(5, ds)
        >>> sub = builder.generate()
    """

    def __init__(self, name: str, column_names: Sequence[str]):
        if name is None:
            raise ValueError("Param name cannot be None")
        if column_names is None:
            raise ValueError("Param column_names cannot be None")
        self.name = name
        self.column_names = list(column_names)
        self._rows: list[Vector] = []
        self._row_names: list[str] = []
        self._done = False

    def _check_build(self) -> None:
        if self._done:
            raise RuntimeError("Already done building -- DatasetBuilder cannot be reused")

    @property
    def num_rows(self) -> int:
        return len(self._rows)

    def add_row(self, row: int, from_dataset: Dataset) -> None:
        self._check_build()
        if from_dataset.num_col != len(self.column_names):
            raise ValueError(
                f"Dataset {from_dataset.name!r} has {from_dataset.num_col} columns, "
                f"builder expects {len(self.column_names)}"
            )
        self._rows.append(from_dataset.get_row(row))
        self._row_names.append(from_dataset.get_row_name(row))

    def generate(self, annot: Annot | None = None) -> DefaultDataset:
        self._check_build()
        matrix = Matrix(len(self._rows), len(self.column_names))
        for i, row in enumerate(self._rows):
            matrix.set_row(i, row)
        self._done = True
        return DefaultDataset(
            self.name,
            matrix,
            self._row_names,
            self.column_names,
            share_matrix=True,
            annot=annot,
        )


def extract_rows(dataset: Dataset, gene_set: GeneSet, name: str | None = None) -> DefaultDataset:
    """
    Project ``dataset`` onto the members of ``gene_set`` present as rows.

    Rows follow the gene-set member order. Native row descriptions are
    carried over when the source has them.
    """
    qualified = gene_set.qualify(dataset)
    new_name = name if name is not None else f"{dataset.name}_{gene_set.name}"
    builder = DatasetBuilder(new_name, dataset.column_names)
    for member in qualified:
        builder.add_row(dataset.name_index.require(member, what="row"), dataset)

    annot = None
    source_features = dataset.annot.feature_annot
    if source_features.has_native_descriptions:
        members = list(qualified)
        features = FeatureAnnot(
            new_name,
            members,
            [source_features.native_desc(m) for m in members],
            chip=source_features.chip,
        )
        annot = Annot(features, SampleAnnot(new_name, dataset.column_names))
    return builder.generate(annot)
