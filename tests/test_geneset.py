"""
Tests for GeneSet construction, membership and qualification.
"""

import pytest

from genomatrix.core.geneset import GeneSet, NameIndexed, union_all_count


class TestGeneSetConstruction:

    def test_members_keep_order(self):
        gs = GeneSet("apoptosis", ["TP53", "BAX", "CASP3"])
        assert gs.members == ("TP53", "BAX", "CASP3")
        assert gs.num_members() == 3
        assert gs.member(1) == "BAX"

    def test_duplicate_rejected(self):
        with pytest.raises(ValueError, match="duplicate member 'BAX' at position 2"):
            GeneSet("gs", ["TP53", "BAX", "BAX"])

    def test_dedupe_keeps_first(self):
        gs = GeneSet("gs", ["TP53", "BAX", "TP53"], dedupe=True)
        assert gs.members == ("TP53", "BAX")

    def test_empty_member_rejected(self):
        with pytest.raises(ValueError, match="empty member"):
            GeneSet("gs", ["TP53", ""])

    def test_string_members_rejected(self):
        with pytest.raises(TypeError):
            GeneSet("gs", "TP53")

    def test_membership(self):
        gs = GeneSet("gs", ["TP53", "BAX"])
        assert gs.is_member("TP53")
        assert "BAX" in gs
        assert not gs.is_member("MYC")
        assert gs.members_as_set() == frozenset({"TP53", "BAX"})


class TestGeneSetQualification:
    """Qualification against datasets and ranked lists."""

    def test_qualify_against_dataset(self, dataset):
        gs = GeneSet("gs", ["EGFR", "BRCA1", "MYC", "TP53"])
        qualified = gs.qualify(dataset)
        assert qualified.members == ("BRCA1", "TP53")
        assert qualified.name == "gs"
        assert all(m in dataset.row_names for m in qualified)

    def test_qualify_against_ranked_list(self, ranked_list):
        gs = GeneSet("gs", ["BAX", "NOTHERE", "MYC"])
        assert gs.qualify(ranked_list).members == ("BAX", "MYC")

    def test_fully_contained_returns_same(self, ranked_list):
        gs = GeneSet("gs", ["MYC", "TP53"])
        assert gs.qualify(ranked_list) is gs

    def test_num_members_in(self, ranked_list):
        gs = GeneSet("gs", ["BAX", "NOTHERE", "MYC"])
        assert gs.num_members_in(ranked_list) == 2
        assert gs.num_members() == 3

    def test_sources_are_name_indexed(self, dataset, ranked_list):
        assert isinstance(dataset, NameIndexed)
        assert isinstance(ranked_list, NameIndexed)


class TestGeneSetClones:

    def test_clone_shallow_renames(self):
        gs = GeneSet("gs", ["A", "B"])
        clone = gs.clone_shallow("renamed")
        assert clone.name == "renamed"
        assert clone.members == gs.members

    def test_clone_deep_materializes_qualification(self, ranked_list):
        gs = GeneSet("gs", ["A", "MYC"])
        clone = gs.clone_deep(ranked_list, new_name="q")
        assert clone.name == "q"
        assert clone.members == ("MYC",)

    def test_clone_deep_without_source(self):
        gs = GeneSet("gs", ["A", "B"])
        assert gs.clone_deep() == gs

    def test_intersect_and_union(self):
        a = GeneSet("a", ["X", "Y", "Z"])
        b = GeneSet("b", ["Y", "Z", "W"])
        assert a.intersect_size(b) == 2
        assert union_all_count([a, b]) == 4
