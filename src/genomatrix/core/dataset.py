"""
Labeled expression matrices: the Dataset interface and its implementations.

A Dataset is the central object of the package:
    - Rows = features (genes, probes), identified by row names
    - Columns = samples, identified by column names
    - Cells = float measurements, NaN for missing values

Biological Context:
    Gene expression matrices routinely carry tens of thousands of rows.
    They are built once by a parser and then read by every later pipeline
    stage (ranking, gene-set qualification, export). Immutability lets all
    of those stages share one instance without defensive copies.

Engineering Design:
    - DefaultDataset: validated at construction, matrix frozen, name lists
      read-only. Each of matrix/row names/column names is shared or copied
      according to its own flag.
    - Column names must be unique. Row names are NOT checked: the check is
      linear in the (large) row count and duplicate probes occur in real
      files. With duplicate row names, name lookups resolve to the first row.
    - UnloadedDataset: metadata only. ``materialize()`` re-parses the source
      file once (under a lock) and returns the loaded DefaultDataset. Cell
      reads on an UnloadedDataset go through ``materialize()`` transparently.

Examples:
    >>> import numpy as np
    >>> m = Matrix.from_values(np.array([[1.0, 2.0], [3.0, 4.0]]))
    >>> ds = DefaultDataset("demo", m, ["g1", "g2"], ["s1", "s2"])
    >>> ds.get_row_by_name("g2").to_list()
    [3.0, 4.0]
    >>> ds.quick_info
    '2x2 (ann: 2,2,chip na)'
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from functools import cached_property
from pathlib import Path
from typing import Callable, Sequence

import numpy as np
import pandas as pd

from genomatrix.core.annotation import Annot, FeatureAnnot, SampleAnnot
from genomatrix.core.apm import APMMatrix
from genomatrix.core.geneset import GeneSet
from genomatrix.core.matrix import Matrix
from genomatrix.core.names import NameIndex, NameList
from genomatrix.core.vector import Vector

__all__ = ['Dataset', 'DefaultDataset', 'UnloadedDataset']

logger = logging.getLogger(__name__)


class Dataset(ABC):
    """
    Read-only labeled matrix interface.

    Subclasses provide the metadata (name, row/column names, annotation) and
    the ``matrix``; every cell accessor is expressed through them.
    """

    persistent_kind = "dataset"

    # -- metadata ---------------------------------------------------------

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def row_names(self) -> NameList: ...

    @property
    @abstractmethod
    def column_names(self) -> NameList: ...

    @property
    @abstractmethod
    def annot(self) -> Annot: ...

    @property
    @abstractmethod
    def matrix(self) -> Matrix:
        """The frozen backing matrix."""

    @property
    @abstractmethod
    def name_index(self) -> NameIndex:
        """Row name -> row position index."""

    @property
    def comment(self) -> str:
        return ""

    @property
    def num_row(self) -> int:
        return len(self.row_names)

    @property
    def num_col(self) -> int:
        return len(self.column_names)

    @property
    def dim(self) -> int:
        return self.num_row * self.num_col

    def get_row_name(self, row: int) -> str:
        return self.row_names[row]

    def get_column_name(self, col: int) -> str:
        return self.column_names[col]

    def row_index(self, row_name: str) -> int | None:
        """Position of ``row_name`` (first occurrence), or None."""
        if row_name is None:
            raise ValueError("row_name cannot be None")
        return self.name_index.index_of(row_name)

    def column_index(self, column_name: str) -> int | None:
        try:
            return list(self.column_names).index(column_name)
        except ValueError:
            return None

    @cached_property
    def row_names_gene_set(self) -> GeneSet:
        """All row names as a GeneSet (repeated row names collapse to one member)."""
        return GeneSet(self.name, self.row_names, dedupe=True)

    @property
    def row_descriptions(self) -> list[str | None]:
        fann = self.annot.feature_annot
        return [fann.native_desc(r) for r in self.row_names]

    # -- cells ------------------------------------------------------------

    def get_element(self, row: int, col: int) -> float:
        return self.matrix.get_element(row, col)

    def get_row(self, row: int) -> Vector:
        """Frozen live view of one row."""
        return self.matrix.get_row_v(row)

    def get_row_by_name(self, row_name: str) -> Vector:
        return self.get_row(self.name_index.require(row_name, what="row"))

    def get_rows(self, gene_set: GeneSet) -> list[Vector]:
        """Rows for every member of ``gene_set``; all members must be rows."""
        return [self.get_row_by_name(member) for member in gene_set]

    def get_column(self, col: int) -> Vector:
        return self.matrix.get_column_v(col)

    def to_pandas(self) -> pd.DataFrame:
        """Copy of the values as a DataFrame indexed by row/column names."""
        return pd.DataFrame(
            self.matrix.to_array().copy(),
            index=pd.Index(list(self.row_names)),
            columns=pd.Index(list(self.column_names)),
        )

    # -- summary ----------------------------------------------------------

    @cached_property
    def quick_info(self) -> str:
        buf = f"{self.num_row}x{self.num_col}"
        ann = self.annot
        if ann is not None and ann.sample_annot is not None:
            chip = ann.chip.name if ann.chip is not None else "chip na"
            buf += (
                f" (ann: {ann.feature_annot.num_features},"
                f"{ann.sample_annot.num_samples},{chip})"
            )
        return buf

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, {self.quick_info})"


def _ensure_annot_covers(annot: Annot | None, row_names: Sequence[str]) -> None:
    # feature annotation may be oversized, never undersized
    if annot is not None and annot.feature_annot.num_features < len(row_names):
        raise ValueError(
            "Annot features is less than dataset rowNames: "
            f"{annot.feature_annot.num_features} {len(row_names)}"
        )


def _ensure_unique_columns(column_names: Sequence[str]) -> None:
    seen: set[str] = set()
    for position, name in enumerate(column_names):
        if name in seen:
            raise ValueError(
                "Duplicate column names are not allowed in Datasets. "
                f"The offending entry was: {name!r} at pos: {position}"
            )
        seen.add(name)


def _default_annot(name: str, row_names: NameList, column_names: NameList) -> Annot:
    return Annot(FeatureAnnot(name, row_names), SampleAnnot(name, column_names))


class DefaultDataset(Dataset):
    """
    Immutable in-memory Dataset.

    Args:
        name: Dataset label
        matrix: Backing values (nrows x ncols)
        row_names: Feature identifiers, one per matrix row
        column_names: Sample identifiers, one per matrix column (unique)
        share_matrix: Use ``matrix`` as-is instead of a deep copy
        share_row_names: Wrap ``row_names`` instead of copying
        share_column_names: Wrap ``column_names`` instead of copying
        annot: Optional annotation; its features must cover every row
        apm: Optional present/absent/missing calls with the matrix's shape
        comment: Free-text comment from the source file

    Raises:
        ValueError: On a missing matrix, dimension mismatch, annotation
            coverage shortfall, or duplicate column name (checked in that order)
    """

    def __init__(
        self,
        name: str,
        matrix: Matrix,
        row_names: Sequence[str],
        column_names: Sequence[str],
        share_matrix: bool = False,
        share_row_names: bool = False,
        share_column_names: bool = False,
        annot: Annot | None = None,
        apm: APMMatrix | None = None,
        comment: str | None = None,
    ):
        if matrix is None:
            raise ValueError("Param matrix cannot be None")
        if not isinstance(matrix, Matrix):
            raise TypeError(f"matrix must be Matrix, got {type(matrix)}")
        if row_names is None:
            raise ValueError("Param row_names cannot be None")
        if column_names is None:
            raise ValueError("Param column_names cannot be None")

        if matrix.num_row != len(row_names):
            raise ValueError(
                f"Matrix nrows: {matrix.num_row} and rownames: {len(row_names)} "
                "do not match in size"
            )
        if matrix.num_col != len(column_names):
            raise ValueError(
                f"Matrix ncols: {matrix.num_col} and colnames: {len(column_names)} "
                "do not match in size"
            )

        _ensure_annot_covers(annot, row_names)
        _ensure_unique_columns(column_names)

        if apm is not None and apm.shape != matrix.shape:
            raise ValueError(
                f"APM matrix shape {apm.shape} must match data shape {matrix.shape}"
            )

        self._name = name
        self._matrix = (matrix if share_matrix else matrix.clone_deep()).freeze()
        self._row_names = NameList(row_names, share=share_row_names)
        self._column_names = NameList(column_names, share=share_column_names)
        self._annot = annot
        self._annot_lock = threading.Lock()
        self._apm = apm.freeze() if apm is not None else None
        self._comment = comment or ""
        self._row_index = NameIndex(self._row_names)

    @classmethod
    def from_pandas(cls, df: pd.DataFrame, name: str, annot: Annot | None = None) -> DefaultDataset:
        """Build from a numeric DataFrame (index = row names, columns = sample names)."""
        if not isinstance(df, pd.DataFrame):
            raise TypeError(f"df must be pd.DataFrame, got {type(df)}")
        try:
            values = df.to_numpy(dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise ValueError(f"DataFrame contains non-numeric values: {e}") from e
        return cls(
            name,
            Matrix.from_values(values, share=True),
            [str(r) for r in df.index],
            [str(c) for c in df.columns],
            share_matrix=True,
            annot=annot,
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def row_names(self) -> NameList:
        return self._row_names

    @property
    def column_names(self) -> NameList:
        return self._column_names

    @property
    def matrix(self) -> Matrix:
        return self._matrix

    @property
    def name_index(self) -> NameIndex:
        return self._row_index

    @property
    def apm_matrix(self) -> APMMatrix | None:
        return self._apm

    @property
    def comment(self) -> str:
        return self._comment

    @property
    def annot(self) -> Annot:
        """Supplied annotation, or a pass-through default created once on first access."""
        if self._annot is None:
            with self._annot_lock:
                if self._annot is None:
                    self._annot = _default_annot(self._name, self._row_names, self._column_names)
        return self._annot


class UnloadedDataset(Dataset):
    """
    Dataset metadata whose numeric matrix is still on disk.

    Args:
        name: Dataset label
        row_names: Feature identifiers (as recorded when the file was first read)
        column_names: Sample identifiers
        source: Path of the file the matrix is re-read from
        annot: Optional annotation
        loader: Callable returning the Matrix parsed from ``source``. Defaults
            to the TXT dataset parser.

    The first ``materialize()`` call (or any cell read) loads the matrix,
    checks it against the remembered dimensions, and caches the resulting
    DefaultDataset for the lifetime of this object.
    """

    def __init__(
        self,
        name: str,
        row_names: Sequence[str],
        column_names: Sequence[str],
        source: str | Path,
        annot: Annot | None = None,
        loader: Callable[[Path], Matrix] | None = None,
    ):
        if source is None:
            raise ValueError("Param source cannot be None")
        _ensure_annot_covers(annot, row_names)
        _ensure_unique_columns(column_names)
        self._name = name
        self._row_names = NameList(row_names)
        self._column_names = NameList(column_names)
        self._source = Path(source)
        self._annot = annot if annot is not None else _default_annot(
            name, self._row_names, self._column_names
        )
        self._loader = loader
        self._row_index = NameIndex(self._row_names)
        self._loaded: DefaultDataset | None = None
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def row_names(self) -> NameList:
        return self._row_names

    @property
    def column_names(self) -> NameList:
        return self._column_names

    @property
    def annot(self) -> Annot:
        return self._annot

    @property
    def name_index(self) -> NameIndex:
        return self._row_index

    @property
    def source(self) -> Path:
        return self._source

    @property
    def is_loaded(self) -> bool:
        return self._loaded is not None

    @property
    def matrix(self) -> Matrix:
        return self.materialize().matrix

    def materialize(self) -> DefaultDataset:
        """
        Load the matrix once and return the loaded Dataset.

        Raises:
            FileNotFoundError: If the source file is gone
            ValueError: If the re-read matrix does not match the recorded dimensions
        """
        loaded = self._loaded
        if loaded is not None:
            return loaded
        with self._lock:
            if self._loaded is None:
                self._loaded = self._load()
            return self._loaded

    def _load(self) -> DefaultDataset:
        if not self._source.is_file():
            raise FileNotFoundError(
                f"Dataset file for lazy matrix loading is missing: {self._source}"
            )

        logger.debug(f"Lazy loading dataset matrix from: {self._source}")
        loader = self._loader
        if loader is None:
            from genomatrix.io.txt_dataset import TxtDatasetParser
            loader = TxtDatasetParser(silent=True).parse_matrix_only

        matrix = loader(self._source)
        return DefaultDataset(
            self._name,
            matrix,
            self._row_names,
            self._column_names,
            share_matrix=True,
            share_row_names=True,
            share_column_names=True,
            annot=self._annot,
        )
