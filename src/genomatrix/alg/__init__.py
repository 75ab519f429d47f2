"""Algorithms that derive ranked lists, gene-set collections and datasets."""

from genomatrix.alg.generators import (
    create_by_sorting,
    sort_ranked_list,
    ranked_list_from_column,
    remove_gene_sets_smaller_than,
    remove_gene_sets_larger_than,
    DatasetBuilder,
    extract_rows,
)

__all__ = [
    'create_by_sorting',
    'sort_ranked_list',
    'ranked_list_from_column',
    'remove_gene_sets_smaller_than',
    'remove_gene_sets_larger_than',
    'DatasetBuilder',
    'extract_rows',
]
