"""
Tests for NameList, NameIndex and NameNotFoundError.
"""

import threading

import pytest

from genomatrix.core.names import NameIndex, NameList, NameNotFoundError


class TestNameIndex:
    """Lookup results distinguish position 0 from absence."""

    def test_position_zero_is_found(self):
        idx = NameIndex(["TP53", "BRCA1", "EGFR"])
        assert idx.index_of("TP53") == 0

    def test_absent_name_is_none(self):
        idx = NameIndex(["TP53", "BRCA1"])
        assert idx.index_of("EGFR") is None
        assert "EGFR" not in idx

    def test_every_position(self):
        names = ["a", "b", "c", "d"]
        idx = NameIndex(names)
        assert [idx.index_of(n) for n in names] == [0, 1, 2, 3]

    def test_duplicates_resolve_to_first(self):
        idx = NameIndex(["x", "y", "x"])
        assert idx.index_of("x") == 0
        assert idx.num_unique == 2

    def test_built_lazily(self):
        idx = NameIndex(["a"])
        assert not idx.is_built
        idx.index_of("a")
        assert idx.is_built

    def test_none_name_rejected(self):
        with pytest.raises(ValueError):
            NameIndex(["a"]).index_of(None)

    def test_require_raises_with_preview(self):
        idx = NameIndex([f"G{i}" for i in range(15)])
        with pytest.raises(NameNotFoundError, match="5 more") as exc_info:
            idx.require("MISSING", what="row")
        assert exc_info.value.name == "MISSING"
        assert "No such row" in str(exc_info.value)

    def test_concurrent_first_lookups(self):
        idx = NameIndex([f"G{i}" for i in range(1000)])
        results = []

        def lookup():
            results.append(idx.index_of("G999"))

        threads = [threading.Thread(target=lookup) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert results == [999] * 8


class TestNameList:

    def test_snapshot_copy(self):
        source = ["a", "b"]
        names = NameList(source)
        source.append("c")
        assert len(names) == 2

    def test_shared(self):
        source = ["a", "b"]
        names = NameList(source, share=True)
        assert names == ["a", "b"]

    def test_string_rejected(self):
        with pytest.raises(TypeError):
            NameList("abc")

    def test_slice_returns_tuple(self):
        assert NameList(["a", "b", "c"])[:2] == ("a", "b")

    def test_equality(self):
        assert NameList(["a"]) == NameList(("a",))
        assert NameList(["a"]) == ("a",)
