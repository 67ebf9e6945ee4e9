"""
mapdiff.differ — Structural diff with a configurable equivalence policy.

Given two values and a DiffOptions context, return NO_DIFF when they are
equivalent, otherwise the smallest DiffResult tree describing where they
differ.

ALGORITHM:
    1. Structurally equal inputs        → NO_DIFF (fast path)
    2. Record vs Record                 → per-key recursion, ignore paths
                                          narrowed one segment per level
    3. Sequence vs Sequence
       • same length                    → fingerprints decide between
                                          equal / reordered / element-wise
       • different length               → whole-sequence Mismatch, or a
                                          compact report when the
                                          sequences are large and differ
                                          by one element
    4. Anything else                    → scalar equivalence rules
                                          (treat_as_same, whitespace,
                                          float accuracy), else Mismatch
"""

import logging
import re
from collections.abc import Mapping
from functools import lru_cache
from typing import Any, Union

from .core import (
    NO_DIFF, DiffResult, ExtraElement, Mismatch, OrderDiff, Record, RecordDiff,
    Scalar, Sequence, SequenceDiff, SequenceSummary, Value, ValueKind,
    structurally_equal,
)
from .fingerprint import Side, align_single_extra, canonical_text, fingerprints
from .formats import from_python, to_python
from .options import DiffOptions

logger = logging.getLogger(__name__)


def diff(value1: Any, value2: Any,
         options: Union[DiffOptions, Mapping, None] = None) -> DiffResult:
    """
    Diff two values.

    `value1` and `value2` may be Values or plain Python objects; `options`
    may be a DiffOptions, a mapping of option names, or None.

    Examples:
        diff({"a": 1, "b": 2}, {"a": 9, "b": 2})
            → RecordDiff({"a": Mismatch(Scalar(1) ≠ Scalar(9))})
        diff({"a": 1}, {"a": 9}, {"ignore": ["a"]})
            → NO_DIFF
    """
    return _diff(from_python(value1), from_python(value2), DiffOptions.coerce(options))


def is_equivalent(value1: Any, value2: Any,
                  options: Union[DiffOptions, Mapping, None] = None) -> bool:
    """True when diff() finds no difference."""
    return not diff(value1, value2, options)


def _diff(a: Value, b: Value, options: DiffOptions) -> DiffResult:
    if structurally_equal(a, b):
        return NO_DIFF

    if a.kind is b.kind:
        if a.kind is ValueKind.RECORD:
            return _diff_records(a, b, options)
        if a.kind is ValueKind.SEQUENCE:
            return _diff_sequences(a, b, options)

    # Scalars, or two values of different shape
    return _diff_scalars(a, b, options)


# ═══════════════════════════════════════════════════════════════════
#  RECORDS
# ═══════════════════════════════════════════════════════════════════

def _diff_records(a: Record, b: Record, options: DiffOptions) -> DiffResult:
    """
    Compare key by key over the union of both key sets.

    Ignored keys produce no entry at all; keys missing on one side are
    compared against the key-not-set marker.
    """
    keys = list(a.entries)
    keys.extend(k for k in b.entries if k not in a.entries)

    missing = options.missing
    entries: dict[Any, DiffResult] = {}
    for key in keys:
        if str(key) in options.ignore:
            continue
        result = _diff(a.entries.get(key, missing),
                       b.entries.get(key, missing),
                       options.narrow(key))
        if result:
            entries[key] = result

    return RecordDiff(entries) if entries else NO_DIFF


# ═══════════════════════════════════════════════════════════════════
#  SEQUENCES
# ═══════════════════════════════════════════════════════════════════

def _diff_sequences(a: Sequence, b: Sequence, options: DiffOptions) -> DiffResult:
    if len(a) != len(b):
        return _diff_resized(a, b, options)
    return _diff_same_length(a, b, options)


def _diff_resized(a: Sequence, b: Sequence, options: DiffOptions) -> DiffResult:
    """
    Sequences of different length.

    Large sequences can't be compared usefully element by element, so
    when their text exceeds the minify threshold and exactly one element
    was added, report the length of the short side and the extra element
    instead of both sequences in full.
    """
    size = max(len(canonical_text(a)), len(canonical_text(b)))
    if size <= options.minify_threshold:
        return Mismatch(a, b)

    alignment = align_single_extra(fingerprints(a.items), fingerprints(b.items))
    if alignment is None:
        return Mismatch(a, b)

    logger.debug("minified %d/%d element sequence diff (%d chars), extra element on %s at %d",
                 len(a), len(b), size, alignment.side.value, alignment.index)
    if alignment.side is Side.RIGHT:
        return Mismatch(SequenceSummary(len(a)), ExtraElement(b.items[alignment.index]))
    return Mismatch(ExtraElement(a.items[alignment.index]), SequenceSummary(len(b)))


def _diff_same_length(a: Sequence, b: Sequence, options: DiffOptions) -> DiffResult:
    fps_a = fingerprints(a.items)
    fps_b = fingerprints(b.items)

    if fps_a == fps_b:
        return NO_DIFF

    if sorted(fps_a) == sorted(fps_b):
        if options.ignore_list_order:
            return NO_DIFF
        return _order_diff(fps_a, fps_b)

    items_a, items_b = a.items, b.items
    if options.ignore_list_order:
        items_a = sorted(items_a, key=canonical_text)
        items_b = sorted(items_b, key=canonical_text)

    entries = [r for r in (_diff(x, y, options) for x, y in zip(items_a, items_b)) if r]
    return SequenceDiff(entries) if entries else NO_DIFF


def _order_diff(fps_a: list[str], fps_b: list[str]) -> OrderDiff:
    first_position: dict[str, int] = {}
    for i, fp in enumerate(fps_b):
        first_position.setdefault(fp, i)

    left_order = ",".join(str(i) for i in range(len(fps_a)))
    right_order = ",".join(str(first_position[fp]) for fp in fps_a)
    return OrderDiff(left_order, right_order)


# ═══════════════════════════════════════════════════════════════════
#  SCALARS
# ═══════════════════════════════════════════════════════════════════

def _diff_scalars(a: Value, b: Value, options: DiffOptions) -> DiffResult:
    if _treated_as_same(a, b, options):
        return NO_DIFF
    if _only_whitespace_differs(a, b):
        return NO_DIFF
    if options.float_accuracy is not None and _similar_float_strings(a, b, options.float_accuracy):
        return NO_DIFF
    return Mismatch(a, b)


def _treated_as_same(a: Value, b: Value, options: DiffOptions) -> bool:
    for rule in options.treat_as_same:
        if callable(rule):
            if _call_predicate(rule, a, b):
                return True
            continue

        left, right = rule
        if structurally_equal(a, left) and structurally_equal(b, right):
            return True
        if structurally_equal(a, right) and structurally_equal(b, left):
            return True
    return False


def _call_predicate(predicate, a: Value, b: Value) -> bool:
    """A predicate that raises counts as "not the same"."""
    try:
        return bool(predicate(to_python(a), to_python(b)))
    except Exception:
        logger.debug("treat_as_same predicate %r raised on (%r, %r); treating as different",
                     predicate, a, b, exc_info=True)
        return False


def _only_whitespace_differs(a: Value, b: Value) -> bool:
    if a.kind is not ValueKind.SCALAR or b.kind is not ValueKind.SCALAR:
        return False
    if not (isinstance(a.val, str) and isinstance(b.val, str)):
        return False
    return a.val.strip() == b.val.strip()


@lru_cache(maxsize=32)
def _accuracy_pattern(accuracy: int) -> re.Pattern:
    return re.compile(rf"(\d+\.\d{{{accuracy}}})\d*$", re.ASCII)


def _truncate(val: Value, accuracy: int) -> Value:
    """'1.23456' → '1.23' for accuracy 2.  Anything else is returned as-is."""
    if val.kind is not ValueKind.SCALAR or not isinstance(val.val, str):
        return val
    match = _accuracy_pattern(accuracy).match(val.val)
    if match is None:
        return val
    return Scalar(match.group(1))


def _similar_float_strings(a: Value, b: Value, accuracy: int) -> bool:
    return structurally_equal(_truncate(a, accuracy), _truncate(b, accuracy))
