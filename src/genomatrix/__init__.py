"""
genomatrix - Labeled expression matrices for gene-set analysis

The data model behind gene-set enrichment workflows: frozen numeric
vectors and matrices, name lookups, gene sets, ranked lists and labeled
datasets, plus parsers for the tab-delimited text formats they are stored in.
"""

__version__ = "0.1.0"

from genomatrix.core.vector import Vector, FrozenError
from genomatrix.core.matrix import Matrix
from genomatrix.core.names import NameIndex, NameNotFoundError
from genomatrix.core.modes import SortMode, Order, ScoreMode
from genomatrix.core.geneset import GeneSet
from genomatrix.core.ranked_list import RankedList
from genomatrix.core.apm import APMMatrix
from genomatrix.core.dataset import Dataset, DefaultDataset, UnloadedDataset
from genomatrix.core.dataframe import Dataframe
from genomatrix.io.base import ParserError
from genomatrix.io.registry import read_object, write_object

__all__ = [
    "Vector",
    "FrozenError",
    "Matrix",
    "NameIndex",
    "NameNotFoundError",
    "SortMode",
    "Order",
    "ScoreMode",
    "GeneSet",
    "RankedList",
    "APMMatrix",
    "Dataset",
    "DefaultDataset",
    "UnloadedDataset",
    "Dataframe",
    "ParserError",
    "read_object",
    "write_object",
]
