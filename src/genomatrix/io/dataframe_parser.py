"""
Parser for whitespace-delimited numeric tables (Dataframe objects).

Unlike the TXT dataset format there is no description column, no missing
value leniency and no annotation: every line is split on runs of spaces or
tabs and must carry exactly one row name plus one number per column.
"""

from __future__ import annotations

import logging
from typing import IO

import numpy as np

from genomatrix.core.dataframe import Dataframe
from genomatrix.core.matrix import Matrix
from genomatrix.io.base import AbstractParser, LineReader, ParserError, parse_float

__all__ = ['DataframeParser']

logger = logging.getLogger(__name__)


class DataframeParser(AbstractParser):
    """Reads and writes Dataframes."""

    persistent_kind = Dataframe.persistent_kind

    def _parse(self, name: str, reader: LineReader) -> Dataframe:
        header = reader.next_line()
        if header is None:
            raise ParserError(f"No header line found in dataframe: {name}")

        column_names = header.split()
        column_names.pop(0)
        expected = len(column_names) + 1

        row_names: list[str] = []
        values: list[float] = []

        line = reader.next_line()
        while line is not None:
            line_number = reader.line_number
            fields = line.split()
            if len(fields) != expected:
                raise ParserError(
                    f"Bad format - expect ncols: {expected} but found: {len(fields)} "
                    f"on line {line_number}: {line}",
                    line_number,
                )
            row_names.append(fields[0])
            for c, token in enumerate(fields[1:]):
                values.append(parse_float(token, line_number, column_names[c]))
            line = reader.next_line()

        logger.debug(f"Parsed dataframe {name}: {len(row_names)} rows")

        matrix = Matrix(len(row_names), len(column_names), np.asarray(values, dtype=np.float64))
        return Dataframe(
            name,
            matrix,
            row_names,
            column_names,
            share_matrix=True,
            share_row_names=True,
            share_column_names=True,
            comment=str(reader.comment),
        )

    def export_stream(self, obj: Dataframe, stream: IO[str]) -> None:
        # whitespace splitting cannot see empty fields, so NaN is written out
        stream.write("NAME\t")
        for column_name in obj.column_names:
            stream.write(f"{column_name}\t")
        stream.write("\n")

        for r in range(obj.num_row):
            values = obj.get_row(r).to_string("\t", na_rep="NaN")
            stream.write(f"{obj.get_row_name(r)}\t{values}\n")
