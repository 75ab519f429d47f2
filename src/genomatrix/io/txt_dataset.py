"""
Parser for the tab-delimited TXT expression dataset format.

Format:
    ```
    NAME<TAB>[DESCRIPTION<TAB>]s1<TAB>s2<TAB>...
    g1<TAB>[desc1<TAB>]v11<TAB>v12<TAB>...
    ```

    - The first header token is a placeholder and is discarded
    - A second header token of DESCRIPTION or DESC (any case) declares a
      description column on every data line
    - Empty value fields are missing values (NaN)
    - Each data line must have exactly 1 (+1 with descriptions) + ncols
      fields after lenient splitting, otherwise the parse fails with advice
      to impute missing values first
    - Export always writes the description column, with "NA" for rows that
      have no native description

Examples:
    >>> parser = TxtDatasetParser()
    >>> ds = parser.parse_file(Path("expression.txt"))
    >>> ds.quick_info
    '12488x48 (ann: 12488,48,chip na)'
    >>> parser.export(ds, Path("copy.txt"))
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import IO

import numpy as np

from genomatrix.core.annotation import Annot, FeatureAnnot, SampleAnnot
from genomatrix.core.dataset import Dataset, DefaultDataset
from genomatrix.core.matrix import Matrix
from genomatrix.io.base import AbstractParser, LineReader, ParserError, parse_float, split_fields

__all__ = ['TxtDatasetParser', 'DESCRIPTION_TOKENS']

logger = logging.getLogger(__name__)

NAME_HEADER = "NAME"
DESCRIPTION_HEADER = "DESCRIPTION"
DESCRIPTION_TOKENS = ("DESCRIPTION", "DESC")

_IMPUTE_ADVICE = (
    "If this dataset has missing values, use ImputeDataset to fill these in "
    "before importing as a Dataset"
)


class TxtDatasetParser(AbstractParser):
    """Reads and writes Datasets in the TXT format."""

    persistent_kind = DefaultDataset.persistent_kind

    def _parse(self, name: str, reader: LineReader) -> DefaultDataset:
        header = reader.next_line()
        if header is None:
            raise ParserError(f"No header line found in dataset: {name}")

        column_names = [t.strip() for t in header.split("\t") if t.strip()]
        if not column_names:
            raise ParserError(f"Empty header line in dataset: {name}", reader.line_number)
        column_names.pop(0)

        has_desc = bool(column_names) and column_names[0].upper() in DESCRIPTION_TOKENS
        if has_desc:
            column_names.pop(0)
        logger.debug(f"Dataset {name}: description column present: {has_desc}")

        ncols = len(column_names)
        first_value = 2 if has_desc else 1
        expected = ncols + first_value

        row_names: list[str] = []
        row_descs: list[str] = []
        rows: list[list[float]] = []

        # untrimmed: trailing empty value fields are tabs
        for line in reader:
            line_number = reader.line_number
            fields = split_fields(line, expected)
            if len(fields) != expected:
                raise ParserError(
                    f"Bad format - expect ncols: {expected} but found: {len(fields)} "
                    f"on line >{line}<\n{_IMPUTE_ADVICE}",
                    line_number,
                )

            row_name = fields[0]
            if not row_name:
                raise ParserError(
                    f"Bad row name - cannot be empty at line {line_number} >{line}<",
                    line_number,
                )

            if has_desc:
                desc = fields[1]
                if not desc:
                    raise ParserError(
                        f"Bad row - cannot have empty description at line {line_number} >{line}<",
                        line_number,
                    )
            else:
                desc = self.na_token

            row_names.append(row_name)
            row_descs.append(desc)
            rows.append([
                parse_float(token, line_number, column_names[c])
                for c, token in enumerate(fields[first_value:])
            ])

        values = np.array(rows, dtype=np.float64).reshape(len(rows), ncols)
        comment = str(reader.comment)

        feature_annot = FeatureAnnot(name, row_names, row_descs, comment=comment)
        annot = Annot(feature_annot, SampleAnnot(name, column_names))

        return DefaultDataset(
            name,
            Matrix.from_values(values, share=True),
            row_names,
            column_names,
            share_matrix=True,
            share_row_names=True,
            share_column_names=True,
            annot=annot,
            comment=comment,
        )

    def parse_matrix_only(self, path: str | os.PathLike) -> Matrix:
        """Re-read ``path`` and keep only its numeric matrix."""
        return self.parse_file(Path(path)).matrix

    def export_stream(self, obj: Dataset, stream: IO[str]) -> None:
        feature_annot = obj.annot.feature_annot

        stream.write(f"{NAME_HEADER}\t{DESCRIPTION_HEADER}\t")
        for column_name in obj.column_names:
            stream.write(f"{column_name}\t")
        stream.write("\n")

        for r in range(obj.num_row):
            row_name = obj.get_row_name(r)
            desc = feature_annot.native_desc(row_name)
            if desc is None:
                desc = self.na_token
            values = obj.get_row(r).to_string("\t")
            stream.write(f"{row_name}\t{desc}\t{values}\n")
