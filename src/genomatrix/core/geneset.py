"""
GeneSet: a named, ordered, duplicate-free collection of feature names.

Gene sets are qualified against the features actually measured in a
Dataset, or against the names in a RankedList, before any enrichment
statistic is computed. Both sources expose their names through a
``name_index`` attribute (the NameIndexed protocol), so qualification works
the same way for either without checking concrete types.

Examples:
    >>> gs = GeneSet("apoptosis", ["TP53", "BAX", "CASP3"])
    >>> gs.is_member("BAX")
    True
    >>> from genomatrix.core.ranked_list import RankedList
    >>> ranked = RankedList(["CASP3", "MYC", "TP53"], [2.0, 0.5, -1.0])
    >>> gs.qualify(ranked).members
    ('TP53', 'CASP3')
"""

from __future__ import annotations

from typing import Iterable, Iterator, Protocol, Sequence, runtime_checkable

from genomatrix.core.names import NameIndex

__all__ = ['GeneSet', 'NameIndexed', 'union_all_count']


@runtime_checkable
class NameIndexed(Protocol):
    """Anything that can answer name -> position lookups (Dataset rows, RankedList names)."""

    @property
    def name_index(self) -> NameIndex: ...


class GeneSet:
    """
    Immutable, ordered set of member names.

    Args:
        name: Set label (e.g. "HALLMARK_APOPTOSIS")
        members: Member names in their intended order
        dedupe: If True, silently keep the first occurrence of repeated names.
            If False (default), repeated names raise ValueError.

    Raises:
        ValueError: On duplicate members (unless dedupe) or an empty member name
    """

    def __init__(self, name: str, members: Iterable[str], dedupe: bool = False):
        if name is None:
            raise ValueError("GeneSet name cannot be None")
        if isinstance(members, str):
            raise TypeError("members must be an iterable of names, not a string")

        ordered: list[str] = []
        seen: set[str] = set()
        for position, member in enumerate(members):
            if member is None or member == "":
                raise ValueError(f"GeneSet {name!r}: empty member name at position {position}")
            if member in seen:
                if dedupe:
                    continue
                raise ValueError(
                    f"GeneSet {name!r}: duplicate member {member!r} at position {position}"
                )
            seen.add(member)
            ordered.append(member)

        self._name = name
        self._members: tuple[str, ...] = tuple(ordered)
        self._member_set: frozenset[str] = frozenset(seen)

    @classmethod
    def _from_trusted(cls, name: str, members: tuple[str, ...],
                      member_set: frozenset[str] | None = None) -> GeneSet:
        """Build without re-validating members already known to be unique."""
        obj = cls.__new__(cls)
        obj._name = name
        obj._members = members
        obj._member_set = member_set if member_set is not None else frozenset(members)
        return obj

    @property
    def name(self) -> str:
        return self._name

    @property
    def members(self) -> tuple[str, ...]:
        return self._members

    def members_as_set(self) -> frozenset[str]:
        return self._member_set

    def num_members(self) -> int:
        return len(self._members)

    def member(self, position: int) -> str:
        return self._members[position]

    def is_member(self, name: str) -> bool:
        return name in self._member_set

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[str]:
        return iter(self._members)

    def __contains__(self, name: object) -> bool:
        return name in self._member_set

    # ------------------------------------------------------------------
    # Qualification
    # ------------------------------------------------------------------

    def qualify(self, source: NameIndexed) -> GeneSet:
        """
        Restrict this set to members present in ``source``.

        Args:
            source: A Dataset (row names) or RankedList (ranked names)

        Returns:
            New GeneSet with the same name, retained members in original order
        """
        index = source.name_index
        kept = tuple(m for m in self._members if m in index)
        if len(kept) == len(self._members):
            return self
        return GeneSet._from_trusted(self._name, kept)

    def num_members_in(self, source: NameIndexed) -> int:
        """Count members present in ``source`` without building a new set."""
        index = source.name_index
        return sum(1 for m in self._members if m in index)

    def clone_shallow(self, new_name: str) -> GeneSet:
        """Same members under a new label. O(1): the member tuple is shared."""
        return GeneSet._from_trusted(new_name, self._members, self._member_set)

    def clone_deep(self, source: NameIndexed | None = None, new_name: str | None = None) -> GeneSet:
        """
        Independent copy, materializing qualification against ``source`` if given.
        """
        name = self._name if new_name is None else new_name
        if source is None:
            return GeneSet._from_trusted(name, tuple(self._members))
        return GeneSet._from_trusted(name, self.qualify(source).members)

    def intersect_size(self, other: GeneSet) -> int:
        return len(self._member_set & other.members_as_set())

    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GeneSet):
            return NotImplemented
        return self._name == other._name and self._members == other._members

    def __hash__(self) -> int:
        return hash((self._name, self._members))

    def __repr__(self) -> str:
        return f"GeneSet({self._name!r}, {len(self._members)} members)"


def union_all_count(gene_sets: Sequence[GeneSet]) -> int:
    """Number of distinct names across all ``gene_sets``."""
    union: set[str] = set()
    for gset in gene_sets:
        union.update(gset.members_as_set())
    return len(union)
