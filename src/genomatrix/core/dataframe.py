"""
Dataframe: a generic labeled numeric table.

Same shape as a Dataset (named rows x named columns over a frozen Matrix)
but with no annotation, no descriptions and no call matrix. It is kept as a
separate type so that pairwise or statistical matrices are never mistaken
for gene-expression datasets by downstream tooling. Column names are not
required to be unique.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from genomatrix.core.matrix import Matrix
from genomatrix.core.names import NameIndex, NameList
from genomatrix.core.vector import Vector

__all__ = ['Dataframe']


class Dataframe:
    """
    Immutable labeled matrix without annotation.

    Args:
        name: Table label
        matrix: Backing values
        row_names: One name per matrix row
        column_names: One name per matrix column
        share_matrix: Use ``matrix`` as-is instead of a deep copy
        share_row_names: Wrap ``row_names`` without copying
        share_column_names: Wrap ``column_names`` without copying
        comment: Free-text comment from the source file

    Raises:
        ValueError: If an argument is missing or a dimension does not match
    """

    persistent_kind = "dataframe"

    def __init__(
        self,
        name: str,
        matrix: Matrix,
        row_names: Sequence[str],
        column_names: Sequence[str],
        share_matrix: bool = False,
        share_row_names: bool = False,
        share_column_names: bool = False,
        comment: str | None = None,
    ):
        if matrix is None:
            raise ValueError("Param matrix cannot be None")
        if row_names is None:
            raise ValueError("Param row_names cannot be None")
        if column_names is None:
            raise ValueError("Param column_names cannot be None")
        if matrix.num_row != len(row_names):
            raise ValueError(
                f"Matrix numrow: {matrix.num_row} and rowNames: {len(row_names)} do not match"
            )
        if matrix.num_col != len(column_names):
            raise ValueError(
                f"Matrix numcol: {matrix.num_col} and colNames: {len(column_names)} do not match"
            )

        self._name = name
        self._matrix = (matrix if share_matrix else matrix.clone_deep()).freeze()
        self._row_names = NameList(row_names, share=share_row_names)
        self._column_names = NameList(column_names, share=share_column_names)
        self._row_index = NameIndex(self._row_names)
        self._comment = comment or ""

    @property
    def name(self) -> str:
        return self._name

    @property
    def comment(self) -> str:
        return self._comment

    @property
    def matrix(self) -> Matrix:
        return self._matrix

    @property
    def row_names(self) -> NameList:
        return self._row_names

    @property
    def column_names(self) -> NameList:
        return self._column_names

    @property
    def name_index(self) -> NameIndex:
        return self._row_index

    @property
    def num_row(self) -> int:
        return self._matrix.num_row

    @property
    def num_col(self) -> int:
        return self._matrix.num_col

    def get_row_name(self, row: int) -> str:
        return self._row_names[row]

    def get_column_name(self, col: int) -> str:
        return self._column_names[col]

    def row_index(self, row_name: str) -> int | None:
        return self._row_index.index_of(row_name)

    def get_row(self, row: int) -> Vector:
        return self._matrix.get_row_v(row)

    def get_element(self, row: int, col: int) -> float:
        return self._matrix.get_element(row, col)

    @property
    def quick_info(self) -> str:
        return f"{self.num_row}x{self.num_col}"

    def to_pandas(self) -> pd.DataFrame:
        return pd.DataFrame(
            self._matrix.to_array().copy(),
            index=pd.Index(list(self._row_names)),
            columns=pd.Index(list(self._column_names)),
        )

    def __repr__(self) -> str:
        return f"Dataframe({self._name!r}, {self.quick_info})"
