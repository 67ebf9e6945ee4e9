"""Tests for mapdiff.fingerprint — canonical text, digests, alignment."""

import sys
import os
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from mapdiff.fingerprint import (
    Alignment, Side, align_single_extra, canonical_text, fingerprint, fingerprints,
)
from mapdiff.core import NO_DIFF, OrderDiff, SequenceDiff
from mapdiff.differ import diff
from mapdiff.formats import from_python


class Token:
    """Equal by name, printed with the default id-based repr."""

    def __init__(self, name):
        self.name = name

    def __eq__(self, other):
        return isinstance(other, Token) and other.name == self.name

    def __hash__(self):
        return hash(self.name)


class TestCanonicalText:

    def test_scalars(self):
        assert canonical_text(from_python("x")) == "'x'"
        assert canonical_text(from_python(1)) == "1"
        assert canonical_text(from_python(None)) == "None"

    def test_nested(self):
        value = from_python({"b": [1, "x"], "a": None})
        assert canonical_text(value) == "{'a': None, 'b': [1, 'x']}"

    def test_key_order_irrelevant(self):
        a = from_python({"a": 1, "b": {"c": 2, "d": 3}})
        b = from_python({"b": {"d": 3, "c": 2}, "a": 1})
        assert canonical_text(a) == canonical_text(b)


class TestFingerprint:

    def test_hex_md5(self):
        fp = fingerprint(from_python({"a": 1}))
        assert len(fp) == 32
        int(fp, 16)

    def test_stable(self):
        assert fingerprint(from_python([1, {"a": "b"}])) == fingerprint(from_python([1, {"a": "b"}]))

    def test_distinct(self):
        values = [1, "1", [1], {"1": 1}, None, True, 1.5]
        fps = {fingerprint(from_python(v)) for v in values}
        assert len(fps) == len(values)

    def test_fingerprints_keep_order(self):
        items = from_python([1, 2, 1]).items
        fps = fingerprints(items)
        assert fps[0] == fps[2] != fps[1]

    def test_default_repr_objects_fingerprint_by_identity(self):
        a, b = Token("x"), Token("x")
        assert a == b
        assert fingerprint(from_python(a)) != fingerprint(from_python(b))

    def test_reordered_default_repr_objects_compared_element_wise(self):
        left = [Token("x"), Token("y")]
        right = [Token("y"), Token("x")]
        result = diff(left, right)
        assert isinstance(result, SequenceDiff)
        assert not isinstance(result, OrderDiff)
        assert len(result.entries) == 2
        # equal but distinct objects in the same positions are not a difference
        assert diff(left, [Token("x"), Token("y")]) is NO_DIFF


class TestAlignSingleExtra:

    @pytest.mark.parametrize("left,right,expected", [
        (["a", "b"], ["a", "x", "b"], Alignment(Side.RIGHT, 1)),
        (["a", "x", "b"], ["a", "b"], Alignment(Side.LEFT, 1)),
        (["a", "b"], ["a", "b", "x"], Alignment(Side.RIGHT, 2)),
        ([], ["x"], Alignment(Side.RIGHT, 0)),
        (["x"], [], Alignment(Side.LEFT, 0)),
    ])
    def test_found(self, left, right, expected):
        assert align_single_extra(left, right) == expected

    @pytest.mark.parametrize("left,right", [
        (["a", "b"], ["a", "b"]),                 # same length
        (["a"], ["a", "x", "y"]),                 # two extra
        (["a", "b"], ["a", "a", "b"]),            # extra is a duplicate
        (["a", "b"], ["x", "a", "y"]),            # two candidates
        (["a", "b"], ["b", "x", "a"]),            # rest not aligned
    ])
    def test_not_found(self, left, right):
        assert align_single_extra(left, right) is None
