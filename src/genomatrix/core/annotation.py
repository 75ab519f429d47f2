"""
Annotation collaborators attached to a Dataset.

An Annot bundles:
    - FeatureAnnot: per-row native descriptions plus optional chip-based
      gene symbol / title lookups
    - SampleAnnot: the sample (column) names the annotation is synchronized with

The chip lookup service itself lives outside this package; anything
satisfying the Chip protocol can be plugged in.
"""

from __future__ import annotations

import logging
from typing import Protocol, Sequence, runtime_checkable

from genomatrix.core.names import NameIndex, NameList

__all__ = ['Chip', 'FeatureAnnot', 'SampleAnnot', 'Annot']

logger = logging.getLogger(__name__)


@runtime_checkable
class Chip(Protocol):
    """Probe identifier -> gene symbol/title lookup service."""

    @property
    def name(self) -> str: ...

    def gene_symbol(self, probe: str) -> str | None: ...

    def gene_title(self, probe: str) -> str | None: ...


class FeatureAnnot:
    """
    Feature (row) annotation, possibly chip-less.

    Args:
        name: Annotation label (usually the dataset name)
        feature_names: Feature identifiers, may cover more than the dataset rows
        native_descs: Optional descriptions aligned with ``feature_names``
        chip: Optional Chip for symbol/title lookups
        comment: Free-text comment carried over from the source file

    Raises:
        ValueError: If descriptions are given with a different length
    """

    def __init__(
        self,
        name: str,
        feature_names: Sequence[str],
        native_descs: Sequence[str] | None = None,
        chip: Chip | None = None,
        comment: str | None = None,
    ):
        if feature_names is None:
            raise ValueError("Param feature_names cannot be None")
        names = NameList(feature_names, share=True)
        if native_descs is not None and len(native_descs) != len(names):
            raise ValueError(
                f"Mismatched sizes: num rows ({len(names)}) and row descs ({len(native_descs)})"
            )
        self._name = name
        self._names = names
        self._descs = tuple(native_descs) if native_descs is not None else None
        self._chip = chip
        self._index = NameIndex(self._names)
        self.comment = comment or ""

    @property
    def name(self) -> str:
        return self._name

    @property
    def chip(self) -> Chip | None:
        return self._chip

    @property
    def num_features(self) -> int:
        return len(self._names)

    @property
    def has_native_descriptions(self) -> bool:
        return bool(self._descs)

    def native_desc(self, feature_name: str) -> str | None:
        """Native description of ``feature_name``; None if unknown or absent."""
        if self._descs is None:
            return None
        position = self._index.index_of(feature_name)
        if position is None:
            logger.warning(f"No such feature: {feature_name!r} in annotation {self._name!r}")
            return None
        return self._descs[position]

    def gene_symbol(self, feature_name: str) -> str | None:
        if self._chip is None:
            return None
        return self._chip.gene_symbol(feature_name)

    def gene_title(self, feature_name: str) -> str | None:
        if self._chip is None:
            return None
        return self._chip.gene_title(feature_name)


class SampleAnnot:
    """Sample (column) annotation synchronized with a dataset's columns."""

    def __init__(self, name: str, sample_names: Sequence[str]):
        if sample_names is None:
            raise ValueError("Param sample_names cannot be None")
        self._name = name
        self._names = NameList(sample_names, share=True)

    @property
    def name(self) -> str:
        return self._name

    @property
    def sample_names(self) -> NameList:
        return self._names

    @property
    def num_samples(self) -> int:
        return len(self._names)


class Annot:
    """Feature + sample annotation pair."""

    def __init__(self, feature_annot: FeatureAnnot, sample_annot: SampleAnnot | None = None):
        if feature_annot is None:
            raise ValueError("Param feature_annot cannot be None")
        self._feature_annot = feature_annot
        self._sample_annot = sample_annot

    @property
    def feature_annot(self) -> FeatureAnnot:
        return self._feature_annot

    @property
    def sample_annot(self) -> SampleAnnot | None:
        return self._sample_annot

    @property
    def chip(self) -> Chip | None:
        return self._feature_annot.chip

    def __repr__(self) -> str:
        samples = self._sample_annot.num_samples if self._sample_annot else None
        return f"Annot(features={self._feature_annot.num_features}, samples={samples})"
