"""
Core data model: numeric containers, name lookup and labeled matrices.
"""

from genomatrix.core.vector import Vector, FrozenError, format_value
from genomatrix.core.matrix import Matrix
from genomatrix.core.names import NameList, NameIndex, NameNotFoundError
from genomatrix.core.modes import SortMode, Order, ScoreMode
from genomatrix.core.geneset import GeneSet, NameIndexed, union_all_count
from genomatrix.core.ranked_list import RankedList, MetricWeightStruc
from genomatrix.core.annotation import Chip, FeatureAnnot, SampleAnnot, Annot
from genomatrix.core.apm import APMMatrix
from genomatrix.core.dataset import Dataset, DefaultDataset, UnloadedDataset
from genomatrix.core.dataframe import Dataframe

__all__ = [
    'Vector',
    'FrozenError',
    'format_value',
    'Matrix',
    'NameList',
    'NameIndex',
    'NameNotFoundError',
    'SortMode',
    'Order',
    'ScoreMode',
    'GeneSet',
    'NameIndexed',
    'union_all_count',
    'RankedList',
    'MetricWeightStruc',
    'Chip',
    'FeatureAnnot',
    'SampleAnnot',
    'Annot',
    'APMMatrix',
    'Dataset',
    'DefaultDataset',
    'UnloadedDataset',
    'Dataframe',
]
