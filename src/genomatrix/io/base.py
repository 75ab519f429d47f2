"""
Shared machinery for the flat-file parsers.

Every text format handled by this package follows the same conventions:
    - Blank lines are ignored everywhere
    - Lines starting with the comment marker ("#") are collected into a
      Comment that is attached to the parsed object. ``#KEY=VALUE`` lines
      become key/value pairs (key upper-cased), anything else is free text.
    - Data lines are tab delimited. Spreadsheet exports frequently add or
      drop trailing tabs, so ``split_fields`` pads short lines and discards
      surplus *empty* trailing fields. Surplus non-empty fields are kept, so
      the caller's exact field-count check still rejects genuinely wide lines.

Parsers are stateless between calls: all per-parse state (line counter,
comment collector) lives on a LineReader created for that parse, so one
parser instance can be reused freely.

Examples:
    >>> split_fields("g1\\tfoo\\t1.0", 4)
    ['g1', 'foo', '1.0', '']
    >>> split_fields("g1\\t1.0\\t\\t\\t", 2)
    ['g1', '1.0']
"""

from __future__ import annotations

import io
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Any, Iterator

from genomatrix.utils.fileio import atomic_writer

__all__ = [
    'AbstractParser',
    'Comment',
    'LineReader',
    'ParserError',
    'split_fields',
    'parse_float',
    'object_name',
    'is_na',
    'COMMENT_CHAR',
    'NA',
]

logger = logging.getLogger(__name__)

COMMENT_CHAR = "#"
NA = "NA"


class ParserError(ValueError):
    """Malformed input. Carries the 1-based line number when known."""

    def __init__(self, message: str, line_number: int | None = None):
        self.line_number = line_number
        super().__init__(message)


def is_na(token: str | None) -> bool:
    return token is not None and token.strip().upper() == NA


def object_name(source_name: str | os.PathLike) -> str:
    """Name of the object parsed from ``source_name``: file name minus its extension."""
    return Path(source_name).stem


def split_fields(line: str, expected_len: int) -> list[str]:
    """
    Lenient tab tokenizer.

    Consecutive tabs produce empty fields and every field is stripped of
    surrounding whitespace. The result is padded with ``""`` up to
    ``expected_len``; beyond ``expected_len`` only non-empty fields are kept.

    Raises:
        TypeError: If line is None
    """
    if line is None:
        raise TypeError("Cannot split a None line")

    fields = [f.strip() for f in line.split("\t")]
    if len(fields) < expected_len:
        fields.extend([""] * (expected_len - len(fields)))
        return fields
    if len(fields) == expected_len:
        return fields
    return fields[:expected_len] + [f for f in fields[expected_len:] if f]


def parse_float(token: str, line_number: int, column: int | str) -> float:
    """
    Parse one numeric cell. An empty or NA token is a missing value (NaN).

    Raises:
        ParserError: If the token is not a number
    """
    token = token.strip()
    if not token or is_na(token):
        return float('nan')
    try:
        # float() also takes digit-group underscores such as 1_000
        if "_" in token:
            raise ValueError(f"digit separators are not allowed: {token}")
        return float(token)
    except ValueError as e:
        raise ParserError(
            f"Bad number >{token}< at line {line_number}, column {column}",
            line_number=line_number,
        ) from e


class Comment:
    """Comment lines collected while reading a file."""

    def __init__(self, comment_char: str = COMMENT_CHAR):
        self._comment_char = comment_char
        self.lines: list[str] = []
        self.key_values: dict[str, str] = {}

    def add(self, line: str) -> None:
        text = line.strip()
        if text.startswith(self._comment_char):
            text = text[len(self._comment_char):]
        text = text.strip()
        if not text:
            return

        if "=" in text:
            key, _, value = text.partition("=")
            key, value = key.strip(), value.strip()
            if not key or not value:
                return
            if "=" in value:
                logger.warning(f"Bad comment KEY=VALUE field, too many tokens: {text!r}")
                return
            self.key_values[key.upper()] = value
        else:
            self.lines.append(text)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.key_values.get(key.upper(), default)

    def __bool__(self) -> bool:
        return bool(self.lines or self.key_values)

    def __str__(self) -> str:
        out = "".join(f"{line}\n" for line in self.lines)
        if self.key_values:
            out += ", ".join(f"{k}={v}" for k, v in self.key_values.items())
        return out


class LineReader:
    """
    Line source that skips blank and comment lines.

    Comment lines are handed to ``comment`` as they are passed over.
    ``line_number`` is the 1-based physical line number of the last line
    returned.
    """

    def __init__(self, stream: IO[str], comment_char: str = COMMENT_CHAR):
        self._lines: Iterator[str] = iter(stream)
        self._comment_char = comment_char
        self.comment = Comment(comment_char)
        self.line_number = 0

    def _next_significant(self) -> str | None:
        for raw in self._lines:
            self.line_number += 1
            line = raw.rstrip("\r\n")
            stripped = line.strip()
            if not stripped:
                continue
            if stripped.startswith(self._comment_char):
                self.comment.add(stripped)
                continue
            return line
        return None

    def next_line(self) -> str | None:
        """Next data line, stripped; None at end of input."""
        line = self._next_significant()
        return line.strip() if line is not None else None

    def next_line_trimless(self) -> str | None:
        """Next data line with only the line terminator removed."""
        return self._next_significant()

    def __iter__(self) -> Iterator[str]:
        """Remaining data lines, untrimmed."""
        line = self.next_line_trimless()
        while line is not None:
            yield line
            line = self.next_line_trimless()


class AbstractParser(ABC):
    """
    Base class for format parsers.

    Subclasses implement ``_parse`` (build one object from a LineReader) and
    ``export_stream`` (write one object to a text stream). Everything else
    (file handling, comment collection, atomic export, logging) lives here.

    Args:
        silent: Suppress the info-level import/export log lines
        comment_char: Marker that starts a comment line
        na_token: Placeholder written for missing descriptions
    """

    #: Kind tag of the objects this parser produces and accepts
    persistent_kind: str = ""

    def __init__(self, silent: bool = False, comment_char: str = COMMENT_CHAR,
                 na_token: str = NA):
        self.silent = silent
        self.comment_char = comment_char
        self.na_token = na_token

    # ------------------------------------------------------------------
    # Import
    # ------------------------------------------------------------------

    def parse(self, source_name: str | os.PathLike, stream: IO[str]) -> Any:
        """
        Parse one object from ``stream``.

        Args:
            source_name: Path or label of the source; the object name is
                derived from it
            stream: Text stream positioned at the start of the content

        Raises:
            ParserError: If the content is malformed
        """
        self._start_import(source_name)
        reader = LineReader(stream, self.comment_char)
        obj = self._parse(object_name(source_name), reader)
        self._done_import(obj)
        return obj

    def parse_file(self, path: str | os.PathLike) -> Any:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        if not path.is_file():
            raise ValueError(f"Path is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return self.parse(path, f)

    def parse_text(self, source_name: str, text: str) -> Any:
        return self.parse(source_name, io.StringIO(text))

    @abstractmethod
    def _parse(self, name: str, reader: LineReader) -> Any:
        """Build the object named ``name`` from ``reader``."""

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export(self, obj: Any, path: str | os.PathLike) -> None:
        """Write ``obj`` to ``path``; the file is replaced atomically."""
        self._check_kind(obj)
        self._start_export(obj, path)
        with atomic_writer(path) as out:
            self.export_stream(obj, out)
        self._done_export(path)

    def export_text(self, obj: Any) -> str:
        buf = io.StringIO()
        self.export_stream(obj, buf)
        return buf.getvalue()

    @abstractmethod
    def export_stream(self, obj: Any, stream: IO[str]) -> None:
        """Write ``obj`` to an open text stream."""

    def _check_kind(self, obj: Any) -> None:
        kind = getattr(obj, "persistent_kind", None)
        if kind != self.persistent_kind:
            raise TypeError(
                f"{type(self).__name__} exports {self.persistent_kind} objects, "
                f"got {type(obj).__name__}"
            )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    def _start_import(self, source_name: str | os.PathLike) -> None:
        if not self.silent:
            logger.info(f"Begun importing: {self.persistent_kind} from: {source_name}")

    def _done_import(self, obj: Any) -> None:
        if not self.silent:
            logger.info(f"Done importing: {getattr(obj, 'quick_info', obj)}")

    def _start_export(self, obj: Any, path: str | os.PathLike) -> None:
        if not self.silent:
            logger.info(f"Exporting: {getattr(obj, 'name', obj)} to: {path}")

    def _done_export(self, path: str | os.PathLike) -> None:
        if not self.silent:
            logger.debug(f"Done exporting to: {path}")
