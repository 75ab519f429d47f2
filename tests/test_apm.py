"""
Tests for present/absent/missing call parsing.
"""

import math

import pytest

from genomatrix.core.apm import APMMatrix
from genomatrix.core.vector import FrozenError


class TestCallValues:

    def test_known_calls(self):
        assert APMMatrix.value_of("P") == 1.0
        assert APMMatrix.value_of("A") == 0.0
        assert math.isnan(APMMatrix.value_of("M"))

    def test_case_insensitive(self):
        assert APMMatrix.value_of("p") == APMMatrix.PRESENT
        assert APMMatrix.value_of("a") == APMMatrix.ABSENT

    def test_zero_literal_is_missing(self):
        assert math.isnan(APMMatrix.value_of("0"))

    @pytest.mark.parametrize("call", ["X", "1", "present", ""])
    def test_unknown_call_names_value(self, call):
        with pytest.raises(ValueError, match=f">{call}<"):
            APMMatrix.value_of(call)

    def test_none_rejected(self):
        with pytest.raises(ValueError):
            APMMatrix.value_of(None)


class TestAPMMatrix:

    def test_from_calls_round_trip(self):
        apm = APMMatrix.from_calls([["P", "A"], ["M", "0"]])
        assert apm.shape == (2, 2)
        assert apm.call_at(0, 0) == "P"
        assert apm.call_at(0, 1) == "A"
        assert apm.call_at(1, 0) == "M"
        assert apm.call_at(1, 1) == "M"

    def test_ragged_calls_rejected(self):
        with pytest.raises(ValueError, match="expected 2 calls"):
            APMMatrix.from_calls([["P", "A"], ["M"]])

    def test_set_call_after_freeze(self):
        apm = APMMatrix(1, 1)
        apm.freeze()
        with pytest.raises(FrozenError):
            apm.set_call(0, 0, "P")

    def test_clone_keeps_values(self):
        apm = APMMatrix.from_calls([["P"]])
        assert apm.clone_deep().get_element(0, 0) == 1.0
