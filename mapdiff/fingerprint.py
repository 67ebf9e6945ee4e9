"""Content fingerprints for sequence comparison.

Fingerprints let the sequence comparator tell identical, reordered and
distinct sequences apart without recursing, and locate the one extra
element of a resized sequence.  They are never used to compare records
or scalars.  MD5 is used for speed; nothing here is security relevant.
"""

import hashlib
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .core import Value, ValueKind


def canonical_text(val: Value) -> str:
    """
    Deterministic printed form of a value.

    Scalars print with repr(); record entries are sorted so that key
    order does not change the text.

    Opaque scalars are only as stable as their repr().  Equal objects
    with the default id-based repr, or equal sets iterated in different
    orders, print differently.  A reordered sequence of such values is
    then compared element by element instead of yielding an OrderDiff.

    Example:
        {"b": [1, "x"], "a": None}  →  {'a': None, 'b': [1, 'x']}
    """
    if val.kind is ValueKind.SCALAR:
        return repr(val.val)
    if val.kind is ValueKind.SEQUENCE:
        return "[" + ", ".join(canonical_text(item) for item in val.items) + "]"
    entries = sorted(f"{k!r}: {canonical_text(v)}" for k, v in val.entries.items())
    return "{" + ", ".join(entries) + "}"


def fingerprint(val: Value) -> str:
    """Hex MD5 digest of the value's canonical text."""
    return hashlib.md5(canonical_text(val).encode("utf-8")).hexdigest()


def fingerprints(items) -> list[str]:
    """Fingerprint each value of `items`, preserving order."""
    return [fingerprint(item) for item in items]


class Side(Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Alignment:
    """The longer side (`side`) holds one extra element at `index`."""
    side: Side
    index: int


def align_single_extra(left: list[str], right: list[str]) -> Optional[Alignment]:
    """
    Locate a single inserted element between two fingerprint lists.

    Succeeds only when the lists differ in length by one, exactly one
    position of the longer list carries a fingerprint absent from the
    shorter one, and dropping that position leaves the lists identical.
    Returns None otherwise.
    """
    if len(left) == len(right) + 1:
        side, longer, shorter = Side.LEFT, left, right
    elif len(right) == len(left) + 1:
        side, longer, shorter = Side.RIGHT, right, left
    else:
        return None

    known = set(shorter)
    candidates = [i for i, fp in enumerate(longer) if fp not in known]
    if len(candidates) != 1:
        return None

    index = candidates[0]
    if longer[:index] + longer[index + 1:] != shorter:
        return None
    return Alignment(side, index)
