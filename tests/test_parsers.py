"""
Tests for the parser framework and the TXT dataset / dataframe formats.

Covers the lenient field splitter, comment collection, exact field-count
checks with their diagnostics, and export/re-import round trips.
"""

import io
import math

import numpy as np
import pytest

from genomatrix.core.dataframe import Dataframe
from genomatrix.core.dataset import DefaultDataset
from genomatrix.core.matrix import Matrix
from genomatrix.io.base import (
    Comment,
    LineReader,
    ParserError,
    is_na,
    object_name,
    parse_float,
    split_fields,
)
from genomatrix.io.dataframe_parser import DataframeParser
from genomatrix.io.txt_dataset import TxtDatasetParser


class TestSplitFields:
    """Lenient tab tokenizer."""

    def test_exact(self):
        assert split_fields("a\tb\tc", 3) == ["a", "b", "c"]

    def test_consecutive_tabs_give_empty_fields(self):
        assert split_fields("g2\tbar\t\t-1.5", 4) == ["g2", "bar", "", "-1.5"]

    def test_pads_missing_trailing_fields(self):
        assert split_fields("a\tb", 4) == ["a", "b", "", ""]

    def test_drops_extra_empty_trailing_fields(self):
        assert split_fields("a\tb\t\t\t", 2) == ["a", "b"]

    def test_keeps_extra_non_empty_fields(self):
        assert split_fields("a\tb\tc", 2) == ["a", "b", "c"]

    def test_fields_are_stripped(self):
        assert split_fields(" a \t b ", 2) == ["a", "b"]

    def test_none_rejected(self):
        with pytest.raises(TypeError):
            split_fields(None, 2)


class TestHelpers:

    def test_is_na(self):
        assert is_na(" na ")
        assert is_na("NA")
        assert not is_na(None)
        assert not is_na("value")

    def test_parse_float(self):
        assert parse_float("2.5", 1, 0) == 2.5
        assert math.isnan(parse_float("", 1, 0))
        assert math.isnan(parse_float("  ", 1, 0))
        assert math.isnan(parse_float("NA", 1, 0))
        assert parse_float("-Infinity", 1, 0) == float("-inf")

    def test_parse_float_rejects_digit_separators(self):
        with pytest.raises(ParserError, match=">1_000< at line 3"):
            parse_float("1_000", 3, "s1")

    def test_parse_float_error_names_position(self):
        with pytest.raises(ParserError, match="line 7, column s2") as exc_info:
            parse_float("abc", 7, "s2")
        assert exc_info.value.line_number == 7

    def test_object_name(self):
        assert object_name("/data/expression.txt") == "expression"
        assert object_name("plain") == "plain"


class TestComment:

    def test_key_values_upper_cased(self):
        comment = Comment()
        comment.add("#chip=HG_U133A")
        comment.add("# free text line")
        assert comment.get("CHIP") == "HG_U133A"
        assert comment.get("chip") == "HG_U133A"
        assert comment.lines == ["free text line"]
        assert str(comment) == "free text line\nCHIP=HG_U133A"

    def test_empty_comment(self):
        comment = Comment()
        comment.add("#")
        assert not comment
        assert str(comment) == ""


class TestLineReader:

    def test_skips_blank_and_comment_lines(self):
        reader = LineReader(io.StringIO("#c1\n\nfirst  \n   \n#c2\nsecond\t\t\n"))
        assert reader.next_line() == "first"
        assert reader.line_number == 3
        assert reader.next_line_trimless() == "second\t\t"
        assert reader.line_number == 6
        assert reader.next_line() is None
        assert reader.comment.lines == ["c1", "c2"]


class TestTxtDatasetParser:
    """The TXT dataset format."""

    def test_example_with_descriptions(self, example_txt):
        ds = TxtDatasetParser().parse_text("example.txt", example_txt)

        assert isinstance(ds, DefaultDataset)
        assert ds.name == "example"
        assert (ds.num_row, ds.num_col) == (2, 2)
        assert ds.get_row_by_name("g1").to_list() == [1.0, 2.0]
        g2 = ds.get_row_by_name("g2").to_list()
        assert math.isnan(g2[0])
        assert g2[1] == -1.5
        assert ds.row_descriptions == ["foo", "bar"]

    def test_example_export(self, example_txt):
        parser = TxtDatasetParser()
        ds = parser.parse_text("example.txt", example_txt)
        assert parser.export_text(ds) == (
            "NAME\tDESCRIPTION\ts1\ts2\t\n"
            "g1\tfoo\t1.0\t2.0\n"
            "g2\tbar\t\t-1.5\n"
        )

    def test_no_description_column(self, txt_file_no_desc):
        ds = TxtDatasetParser().parse_file(txt_file_no_desc)
        assert list(ds.column_names) == ["s1", "s2", "s3"]
        assert ds.row_descriptions == ["NA", "NA"]
        # trailing tab on BRCA1 is an empty last value
        assert math.isnan(ds.get_element(1, 2))
        assert ds.comment == "SOURCE=unit test"

    def test_desc_header_case_insensitive(self):
        ds = TxtDatasetParser().parse_text("x.txt", "Name\tdescription\ta\ng\td\t1\n")
        assert list(ds.column_names) == ["a"]
        assert ds.row_descriptions == ["d"]

    def test_wrong_field_count_advises_imputation(self):
        text = "NAME\tDESC\ts1\ts2\ng1\tfoo\t1.0\t2.0\t3.0\n"
        with pytest.raises(ParserError) as exc_info:
            TxtDatasetParser().parse_text("bad.txt", text)
        message = str(exc_info.value)
        assert "Bad format - expect ncols: 4 but found: 5" in message
        assert ">g1\tfoo\t1.0\t2.0\t3.0<" in message
        assert "use ImputeDataset to fill these in" in message
        assert exc_info.value.line_number == 2

    def test_short_line_is_padded(self):
        ds = TxtDatasetParser().parse_text("short.txt", "NAME\ts1\ts2\ng1\t1.0\n")
        assert ds.get_element(0, 0) == 1.0
        assert math.isnan(ds.get_element(0, 1))

    def test_empty_row_name(self):
        text = "NAME\ts1\ng1\t1.0\n\t2.0\n"
        with pytest.raises(ParserError, match="cannot be empty at line 3"):
            TxtDatasetParser().parse_text("bad.txt", text)

    def test_empty_description(self):
        text = "NAME\tDESC\ts1\ng1\t\t1.0\n"
        with pytest.raises(ParserError, match="empty description at line 2"):
            TxtDatasetParser().parse_text("bad.txt", text)

    def test_unparsable_value(self):
        text = "NAME\ts1\ts2\ng1\t1.0\toops\n"
        with pytest.raises(ParserError, match=">oops< at line 2, column s2"):
            TxtDatasetParser().parse_text("bad.txt", text)

    def test_underscored_number_rejected(self):
        with pytest.raises(ParserError, match=">1_000< at line 2, column s1"):
            TxtDatasetParser().parse_text("u.txt", "NAME\ts1\ng1\t1_000\n")

    def test_na_value_is_missing(self):
        ds = TxtDatasetParser().parse_text("na.txt", "NAME\ts1\ts2\ng1\tNA\t2.0\n")
        assert math.isnan(ds.get_element(0, 0))
        assert ds.get_element(0, 1) == 2.0

    def test_duplicate_columns_rejected(self):
        with pytest.raises(ValueError, match="Duplicate column names"):
            TxtDatasetParser().parse_text("dup.txt", "NAME\ts1\ts1\ng1\t1\t2\n")

    def test_empty_input(self):
        with pytest.raises(ParserError, match="No header"):
            TxtDatasetParser().parse_text("empty.txt", "\n#only a comment\n")

    def test_round_trip_is_byte_identical(self, tmp_path, example_txt):
        parser = TxtDatasetParser(silent=True)
        first = tmp_path / "first.txt"
        second = tmp_path / "second.txt"

        parser.export(parser.parse_text("example.txt", example_txt), first)
        parser.export(parser.parse_file(first), second)

        assert first.read_text() == second.read_text()

    def test_round_trip_random_values(self, tmp_path, synthetic_dataset):
        parser = TxtDatasetParser(silent=True)
        path = tmp_path / "synthetic.txt"
        parser.export(synthetic_dataset, path)
        reread = parser.parse_file(path)

        assert list(reread.row_names) == list(synthetic_dataset.row_names)
        assert list(reread.column_names) == list(synthetic_dataset.column_names)
        np.testing.assert_array_equal(reread.matrix.to_array(), synthetic_dataset.matrix.to_array())
        assert reread.row_descriptions == ["NA"] * synthetic_dataset.num_row

    def test_export_rejects_dataframe(self, tmp_path):
        df = Dataframe("df", Matrix(1, 1), ["r"], ["c"])
        with pytest.raises(TypeError, match="exports dataset objects"):
            TxtDatasetParser().export(df, tmp_path / "x.txt")

    def test_failed_export_leaves_no_file(self, tmp_path, dataset):
        class BrokenParser(TxtDatasetParser):
            def export_stream(self, obj, stream):
                stream.write("partial")
                raise RuntimeError("disk full")

        target = tmp_path / "out.txt"
        with pytest.raises(RuntimeError):
            BrokenParser().export(dataset, target)
        assert not target.exists()
        assert list(tmp_path.iterdir()) == []

    def test_parse_matrix_only(self, txt_file):
        matrix = TxtDatasetParser().parse_matrix_only(txt_file)
        assert matrix.shape == (2, 2)
        assert matrix.is_frozen

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TxtDatasetParser().parse_file(tmp_path / "nope.txt")

    def test_import_logging(self, caplog, example_txt):
        with caplog.at_level("INFO", logger="genomatrix.io.base"):
            TxtDatasetParser().parse_text("example.txt", example_txt)
        assert "Done importing: 2x2" in caplog.text

    def test_silent_suppresses_logging(self, caplog, example_txt):
        with caplog.at_level("INFO", logger="genomatrix.io.base"):
            TxtDatasetParser(silent=True).parse_text("example.txt", example_txt)
        assert caplog.text == ""


class TestDataframeParser:
    """Whitespace-delimited dataframe format."""

    def test_parse(self, dataframe_file):
        df = DataframeParser().parse_file(dataframe_file)
        assert isinstance(df, Dataframe)
        assert df.name == "table"
        assert df.quick_info == "2x2"
        assert df.get_row(1).to_list() == [3.0, 4.0]

    def test_ragged_trailing_tab_parses_identically(self):
        parser = DataframeParser()
        plain = parser.parse_text("a.df", "NAME\ts1\ts2\nr1\t1.0\t2.0\n")
        ragged = parser.parse_text("a.df", "NAME\ts1\ts2\nr1\t1.0\t2.0\t\n")
        assert plain.matrix == ragged.matrix
        assert list(plain.row_names) == list(ragged.row_names)

    def test_exact_field_count(self):
        with pytest.raises(ParserError, match="expect ncols: 3 but found: 2 on line 2"):
            DataframeParser().parse_text("a.df", "NAME s1 s2\nr1 1.0\n")

    def test_unparsable_number(self):
        with pytest.raises(ParserError, match="line 3"):
            DataframeParser().parse_text("a.df", "NAME s1\nr1 1.0\nr2 x\n")

    def test_export(self):
        df = Dataframe("df", Matrix(2, 2, [1.0, 2.0, float('nan'), 4.0]), ["r1", "r2"], ["c1", "c2"])
        assert DataframeParser().export_text(df) == (
            "NAME\tc1\tc2\t\n"
            "r1\t1.0\t2.0\n"
            "r2\tNaN\t4.0\n"
        )

    def test_round_trip_with_missing_value(self, tmp_path):
        df = Dataframe("df", Matrix(1, 2, [float('nan'), 1.0]), ["r1"], ["c1", "c2"])
        parser = DataframeParser(silent=True)
        path = tmp_path / "df.df"
        parser.export(df, path)
        assert parser.parse_file(path).matrix == df.matrix
