"""
Format dispatch over the closed set of persistent object kinds.

Each persistable class declares a ``persistent_kind`` tag. The tag maps to
exactly one parser through a fixed table, so reading and writing never
depend on isinstance chains.

Examples:
    >>> ds = read_object(Path("expression.txt"))
    >>> kind_of(ds)
    <PersistentKind.DATASET: 'dataset'>
    >>> write_object(ds, Path("copy.txt"))
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any, Callable

from genomatrix.io.base import AbstractParser
from genomatrix.io.dataframe_parser import DataframeParser
from genomatrix.io.txt_dataset import TxtDatasetParser

__all__ = ['PersistentKind', 'kind_of', 'kind_for_path', 'parser_for', 'read_object', 'write_object']


class PersistentKind(Enum):
    DATASET = "dataset"
    DATAFRAME = "dataframe"

    @classmethod
    def lookup(cls, value: PersistentKind | str) -> PersistentKind:
        if isinstance(value, PersistentKind):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as e:
            choices = ", ".join(k.value for k in cls)
            raise ValueError(f"Unknown object kind {value!r}. Choose from: {choices}") from e


_PARSERS: dict[PersistentKind, Callable[..., AbstractParser]] = {
    PersistentKind.DATASET: TxtDatasetParser,
    PersistentKind.DATAFRAME: DataframeParser,
}

_EXTENSIONS: dict[str, PersistentKind] = {
    ".txt": PersistentKind.DATASET,
    ".df": PersistentKind.DATAFRAME,
    ".dataframe": PersistentKind.DATAFRAME,
}


def kind_of(obj: Any) -> PersistentKind:
    """
    Kind tag of a persistable object.

    Raises:
        TypeError: If the object carries no known ``persistent_kind``
    """
    tag = getattr(obj, "persistent_kind", None)
    if tag is None:
        raise TypeError(f"Object of type {type(obj).__name__} is not persistable")
    try:
        return PersistentKind(tag)
    except ValueError as e:
        raise TypeError(f"Unknown persistent kind {tag!r} on {type(obj).__name__}") from e


def kind_for_path(path: str | os.PathLike) -> PersistentKind:
    """
    Kind implied by a file extension.

    Raises:
        ValueError: If the extension is not recognized
    """
    suffix = Path(path).suffix.lower()
    if suffix not in _EXTENSIONS:
        raise ValueError(
            f"Cannot infer object kind from extension {suffix!r} of {path}. "
            f"Known extensions: {', '.join(sorted(_EXTENSIONS))}"
        )
    return _EXTENSIONS[suffix]


def parser_for(kind: PersistentKind | str, **parser_kwargs) -> AbstractParser:
    """New parser for ``kind``; keyword arguments go to the parser constructor."""
    return _PARSERS[PersistentKind.lookup(kind)](**parser_kwargs)


def read_object(path: str | os.PathLike, kind: PersistentKind | str | None = None,
                **parser_kwargs) -> Any:
    """Parse the object stored at ``path`` (kind inferred from the extension if not given)."""
    resolved = kind_for_path(path) if kind is None else PersistentKind.lookup(kind)
    return parser_for(resolved, **parser_kwargs).parse_file(path)


def write_object(obj: Any, path: str | os.PathLike, **parser_kwargs) -> None:
    """Export ``obj`` to ``path`` with the parser matching its kind."""
    parser_for(kind_of(obj), **parser_kwargs).export(obj, path)
