"""
Name lists and name -> position lookup shared by every labeled container.

NameIndex answers ``index_of(name)`` with an ``int`` position or ``None``.
Position 0 is an ordinary answer; absence is always ``None``, so callers
never have to second-guess a zero.

The mapping is built on the first query and cached for the owner's lifetime.
Owners are immutable, so the cache is never invalidated. The one-time build
is guarded by a lock so concurrent first lookups are safe.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from typing import Iterable, Iterator

__all__ = ['NameList', 'NameIndex', 'NameNotFoundError']

# How many available names a NameNotFoundError message shows
_PREVIEW_LIMIT = 10


class NameNotFoundError(LookupError):
    """Raised when a name lookup must succeed but the name is absent."""

    def __init__(self, name: str, available: Sequence[str] | None = None, what: str = "name"):
        self.name = name
        message = f"No such {what}: {name!r}"
        if available is not None:
            preview = list(available[:_PREVIEW_LIMIT])
            more = len(available) - len(preview)
            message += f"; available: {preview}"
            if more > 0:
                message += f" ... ({more} more)"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]


class NameList(Sequence):
    """
    Read-only sequence of names.

    Args:
        names: Source names
        share: If True, wrap ``names`` without copying. The caller must not
            mutate the shared list afterwards. If False, snapshot into a tuple.

    Raises:
        TypeError: If names is None or a bare string
    """

    __slots__ = ('_names',)

    def __init__(self, names: Iterable[str], share: bool = False):
        if names is None:
            raise TypeError("names cannot be None")
        if isinstance(names, str):
            raise TypeError("names must be a sequence of strings, not a string")
        if isinstance(names, NameList):
            names = names._names
        if share and isinstance(names, Sequence):
            self._names = names
        else:
            self._names = tuple(names)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return tuple(self._names[index])
        return self._names[index]

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, NameList):
            return list(self._names) == list(other._names)
        if isinstance(other, (list, tuple)):
            return list(self._names) == list(other)
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"NameList({list(self._names)!r})"


class NameIndex:
    """
    Lazily built name -> position mapping over a fixed name list.

    Duplicate names resolve to their first occurrence.

    Examples:
        >>> idx = NameIndex(["TP53", "BRCA1"])
        >>> idx.index_of("TP53")
        0
        >>> idx.index_of("EGFR") is None
        True
    """

    def __init__(self, names: Sequence[str]):
        self._names = names
        self._index: dict[str, int] | None = None
        self._lock = threading.Lock()

    def _build(self) -> dict[str, int]:
        index = self._index
        if index is None:
            with self._lock:
                if self._index is None:
                    built: dict[str, int] = {}
                    for position, name in enumerate(self._names):
                        built.setdefault(name, position)
                    self._index = built
                index = self._index
        return index

    def index_of(self, name: str) -> int | None:
        if name is None:
            raise ValueError("name cannot be None")
        return self._build().get(name)

    def require(self, name: str, what: str = "name") -> int:
        """Position of ``name``; raises NameNotFoundError when absent."""
        position = self.index_of(name)
        if position is None:
            raise NameNotFoundError(name, self._names, what=what)
        return position

    def __contains__(self, name: object) -> bool:
        return name in self._build()

    def __len__(self) -> int:
        return len(self._names)

    @property
    def is_built(self) -> bool:
        return self._index is not None

    @property
    def num_unique(self) -> int:
        return len(self._build())
