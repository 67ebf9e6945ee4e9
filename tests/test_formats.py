"""Tests for mapdiff.formats — Python/JSON conversion and result reports."""

import json
import sys
import os
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from mapdiff.core import (
    NO_DIFF, ExtraElement, Mismatch, OrderDiff, Record, RecordDiff, Scalar,
    Sequence, SequenceDiff, SequenceSummary,
)
from mapdiff.differ import diff
from mapdiff.formats import (
    from_json, from_python, result_to_json, result_to_python, to_json, to_python,
)
from mapdiff.options import KEY_NOT_SET


class TestPythonConversion:

    def test_from_python(self):
        assert from_python({"a": [1, None]}) == Record({"a": Sequence((Scalar(1), Scalar(None)))})

    def test_tuple_is_sequence(self):
        assert from_python((1, 2)) == Sequence((Scalar(1), Scalar(2)))

    def test_keys_kept(self):
        assert list(from_python({1: "a"}).entries) == [1]

    def test_value_passes_through(self):
        value = Scalar("x")
        assert from_python(value) is value

    def test_round_trip(self):
        obj = {"a": [1, 2.5, "x", None, True], "b": {"c": []}}
        assert to_python(from_python(obj)) == obj

    def test_opaque_scalar(self):
        marker = object()
        assert to_python(from_python(marker)) is marker

    def test_unknown_type(self):
        with pytest.raises(TypeError):
            to_python(object())


class TestJsonConversion:

    def test_from_json(self):
        assert from_json('{"a": [1, "x"]}') == from_python({"a": [1, "x"]})

    def test_to_json(self):
        assert json.loads(to_json(from_python({"a": [1, None]}))) == {"a": [1, None]}


class TestResultReports:

    def test_no_diff(self):
        assert result_to_python(NO_DIFF) is None

    def test_mismatch(self):
        assert result_to_python(Mismatch(Scalar(1), Sequence(()))) == (1, [])

    def test_placeholders(self):
        result = Mismatch(SequenceSummary(3), ExtraElement(from_python({"a": 1})))
        assert result_to_python(result) == (
            "3 element List", ("List with additional element", {"a": 1}),
        )
        assert str(SequenceSummary(3)) == "3 element list"

    def test_containers(self):
        result = RecordDiff({"a": SequenceDiff([Mismatch(Scalar(1), Scalar(2))])})
        assert result_to_python(result) == {"a": [(1, 2)]}

    def test_order(self):
        assert result_to_python(OrderDiff("0,1", "1,0")) == (
            "List with order: 0,1", "List with order: 1,0",
        )

    def test_unknown_type(self):
        with pytest.raises(TypeError):
            result_to_python(object())

    def test_json(self):
        assert json.loads(result_to_json(diff({"a": [1, 2]}, {"a": [2, 1]}))) == {
            "a": ["List with order: 0,1", "List with order: 1,0"],
        }
        assert result_to_json(NO_DIFF) == "null"

    def test_json_non_serializable_scalars(self):
        report = json.loads(result_to_json(diff({"a": 1}, {})))
        assert report == {"a": [1, str(KEY_NOT_SET)]}
