"""
mapdiff
=======

Structural diff of nested data with a configurable notion of "equal".

    diff({"a": 1, "b": 2}, {"a": 9, "b": 2})            → {"a": (1, 9)}
    diff({"a": 1}, {"a": 9}, {"ignore": ["a"]})          → no difference
    diff("  x ", "x")                                    → no difference
    diff("1.23456", "1.23999", {"float_accuracy": 2})    → no difference
    diff([1, 2, 3], [3, 2, 1])                           → order difference

(shown above in the result_to_python() form)

The result is NO_DIFF (falsy) when the values are equivalent, otherwise a
tree of RecordDiff / SequenceDiff nodes ending in Mismatch or OrderDiff
leaves.  Equivalence can be loosened by ignoring dotted key paths,
truncating numeric strings, ignoring sequence order, and declaring
value pairs or predicates that count as the same.
"""

import logging

from mapdiff.core import (
    # Values
    Value,
    ValueKind,
    Scalar,
    Sequence,
    Record,
    structurally_equal,
    # Results
    DiffResult,
    NoDiff,
    NO_DIFF,
    Mismatch,
    RecordDiff,
    SequenceDiff,
    OrderDiff,
    SequenceSummary,
    ExtraElement,
)
from mapdiff.differ import diff, is_equivalent
from mapdiff.fingerprint import fingerprint, canonical_text
from mapdiff.formats import (
    from_json, to_json, from_python, to_python, result_to_python, result_to_json,
)
from mapdiff.options import (
    DiffOptions, DiffOptionsError, KEY_NOT_SET, DEFAULT_MINIFY_THRESHOLD,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "Value", "ValueKind", "Scalar", "Sequence", "Record", "structurally_equal",
    "DiffResult", "NoDiff", "NO_DIFF", "Mismatch", "RecordDiff", "SequenceDiff",
    "OrderDiff", "SequenceSummary", "ExtraElement",
    "diff", "is_equivalent",
    "fingerprint", "canonical_text",
    "from_json", "to_json", "from_python", "to_python",
    "result_to_python", "result_to_json",
    "DiffOptions", "DiffOptionsError", "KEY_NOT_SET", "DEFAULT_MINIFY_THRESHOLD",
]
