"""
Pytest configuration and shared fixtures.

Provides small, hand-checkable datasets and ranked lists plus the example
TXT/dataframe file contents used across the parser tests.
"""

import numpy as np
import pytest
from pathlib import Path

from genomatrix.core.dataset import DefaultDataset
from genomatrix.core.matrix import Matrix
from genomatrix.core.ranked_list import RankedList


EXAMPLE_TXT = (
    "NAME\tDESC\ts1\ts2\n"
    "g1\tfoo\t1.0\t2.0\n"
    "g2\tbar\t\t-1.5\n"
)

EXAMPLE_TXT_NO_DESC = (
    "#source=unit test\n"
    "NAME\ts1\ts2\ts3\n"
    "\n"
    "TP53\t1.5\t2.5\t3.5\n"
    "BRCA1\t-1.0\t0.0\t\n"
)

EXAMPLE_DATAFRAME = (
    "NAME s1 s2\n"
    "r1 1.0 2.0\n"
    "r2\t3.0\t4.0\n"
)


@pytest.fixture
def example_txt():
    return EXAMPLE_TXT


@pytest.fixture
def txt_file(tmp_path):
    """Example dataset written to disk."""
    path = tmp_path / "example.txt"
    path.write_text(EXAMPLE_TXT)
    return path


@pytest.fixture
def txt_file_no_desc(tmp_path):
    path = tmp_path / "nodesc.txt"
    path.write_text(EXAMPLE_TXT_NO_DESC)
    return path


@pytest.fixture
def dataframe_file(tmp_path):
    path = tmp_path / "table.df"
    path.write_text(EXAMPLE_DATAFRAME)
    return path


def make_dataset(
    n_genes: int = 4,
    n_samples: int = 3,
    name: str = "synthetic",
    seed: int = 42,
) -> DefaultDataset:
    """
    Small random dataset with gene names G0..Gn and sample names S0..Sm.

    Args:
        n_genes: Number of rows
        n_samples: Number of columns
        name: Dataset name
        seed: Random seed for reproducibility
    """
    rng = np.random.RandomState(seed)
    values = rng.normal(size=(n_genes, n_samples))
    return DefaultDataset(
        name,
        Matrix.from_values(values),
        [f"G{i}" for i in range(n_genes)],
        [f"S{j}" for j in range(n_samples)],
    )


@pytest.fixture
def dataset():
    """2x3 dataset with known values."""
    values = np.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
    return DefaultDataset("tiny", Matrix.from_values(values), ["TP53", "BRCA1"], ["s1", "s2", "s3"])


@pytest.fixture
def synthetic_dataset():
    return make_dataset(n_genes=20, n_samples=5)


@pytest.fixture
def ranked_list():
    """Descending ranked list with positive, zero and negative scores."""
    return RankedList(
        ["MYC", "EGFR", "KRAS", "TP53", "BAX"],
        [3.0, 1.5, 0.0, -0.5, -2.0],
        name="tumor_vs_normal",
    )
