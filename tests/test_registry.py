"""
Tests for kind-tagged read/write dispatch.
"""

import pytest

from genomatrix.core.dataframe import Dataframe
from genomatrix.core.dataset import DefaultDataset, UnloadedDataset
from genomatrix.core.matrix import Matrix
from genomatrix.io.dataframe_parser import DataframeParser
from genomatrix.io.registry import (
    PersistentKind,
    kind_for_path,
    kind_of,
    parser_for,
    read_object,
    write_object,
)
from genomatrix.io.txt_dataset import TxtDatasetParser


class TestKinds:

    def test_kind_of_objects(self, dataset):
        df = Dataframe("df", Matrix(1, 1), ["r"], ["c"])
        assert kind_of(dataset) is PersistentKind.DATASET
        assert kind_of(df) is PersistentKind.DATAFRAME

    def test_unloaded_dataset_is_dataset_kind(self, txt_file):
        lazy = UnloadedDataset("example", ["g1", "g2"], ["s1", "s2"], txt_file)
        assert kind_of(lazy) is PersistentKind.DATASET

    def test_kind_of_unknown(self):
        with pytest.raises(TypeError, match="not persistable"):
            kind_of(object())

    def test_kind_for_path(self):
        assert kind_for_path("a/b/expr.TXT") is PersistentKind.DATASET
        assert kind_for_path("table.df") is PersistentKind.DATAFRAME
        assert kind_for_path("table.dataframe") is PersistentKind.DATAFRAME
        with pytest.raises(ValueError, match="Cannot infer object kind"):
            kind_for_path("data.csv")

    def test_lookup(self):
        assert PersistentKind.lookup("Dataset") is PersistentKind.DATASET
        with pytest.raises(ValueError, match="Choose from"):
            PersistentKind.lookup("heatmap")

    def test_parser_for(self):
        assert isinstance(parser_for(PersistentKind.DATASET), TxtDatasetParser)
        parser = parser_for("dataframe", silent=True)
        assert isinstance(parser, DataframeParser)
        assert parser.silent


class TestReadWrite:

    def test_read_by_extension(self, txt_file, dataframe_file):
        assert isinstance(read_object(txt_file), DefaultDataset)
        assert isinstance(read_object(dataframe_file), Dataframe)

    def test_read_with_explicit_kind(self, tmp_path):
        path = tmp_path / "table.tsv"
        path.write_text("NAME a b\nr 1 2\n")
        df = read_object(path, kind="dataframe")
        assert df.quick_info == "1x2"

    def test_write_dispatches_on_kind(self, tmp_path, dataset):
        path = tmp_path / "out.anything"
        write_object(dataset, path, silent=True)
        assert path.read_text().startswith("NAME\tDESCRIPTION\ts1\ts2\ts3\t\n")

    def test_write_unloaded_dataset(self, tmp_path, txt_file):
        lazy = UnloadedDataset("example", ["g1", "g2"], ["s1", "s2"], txt_file)
        out = tmp_path / "copy.txt"
        write_object(lazy, out)
        assert "g2\tNA\t\t-1.5" in out.read_text()
