"""
mapdiff.core — Values and diff results
======================================

DATA MODEL
══════════

§1  VALUES
──────────

Every input to the diff engine is one of three shapes:

    Record(entries)     an UNORDERED mapping from keys to values
    Sequence(items)     an ORDERED tuple of values
    Scalar(val)         a leaf: str, int, float, bool, None, bytes,
                        or any opaque object compared by content

Each class carries an explicit discriminant, `kind`, so the dispatcher
switches on one attribute instead of probing with isinstance().

    JSON object  → Record
    JSON array   → Sequence
    JSON string  → Scalar("hello")
    JSON number  → Scalar(42)
    JSON null    → Scalar(None)


§2  DIFF RESULTS
────────────────

A comparison produces exactly one of:

    NoDiff                          equivalent under the current options
    Mismatch(left, right)           leaf disagreement
    RecordDiff({key: result})       per-key differences, never empty
    SequenceDiff((result, ...))     per-position differences, never empty
    OrderDiff(left_order, right_order)
                                    same elements, different arrangement

"No difference" is always the single falsy NO_DIFF marker; an empty
RecordDiff or SequenceDiff cannot be constructed.


§3  EQUALITY
────────────

structurally_equal() is the deep equality used by the fast path:
numbers compare numerically (1 == 1.0) but bool never equals int.

License: MIT
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Union


# ═══════════════════════════════════════════════════════════════════
#  VALUES
# ═══════════════════════════════════════════════════════════════════

class ValueKind(Enum):
    """Discriminant of a Value."""
    RECORD = "record"
    SEQUENCE = "sequence"
    SCALAR = "scalar"


class Value:
    """Base class for comparable values.  Not instantiated directly."""
    __slots__ = ()
    kind: ClassVar[ValueKind]


@dataclass(frozen=True, slots=True)
class Scalar(Value):
    """
    A leaf value.

    Examples:
        Scalar("hello")
        Scalar(42)
        Scalar(None)
    """
    kind: ClassVar[ValueKind] = ValueKind.SCALAR
    val: Any

    def __repr__(self) -> str:
        return f"Scalar({self.val!r})"


@dataclass(frozen=True, slots=True)
class Sequence(Value):
    """
    An ordered sequence of values.

    Examples:
        Sequence((Scalar(1), Scalar(2), Scalar(3)))     # [1, 2, 3]
    """
    kind: ClassVar[ValueKind] = ValueKind.SEQUENCE
    items: tuple[Value, ...]

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        if len(self.items) <= 5:
            return f"Sequence({list(self.items)})"
        return f"Sequence([{self.items[0]!r}, ..., {self.items[-1]!r}] len={len(self.items)})"


@dataclass(frozen=True, slots=True)
class Record(Value):
    """
    An UNORDERED mapping of keys to values.

    Keys are kept as given; they are only turned into strings when
    matched against dotted ignore paths.

    Examples:
        Record({"name": Scalar("Alice"), "age": Scalar(30)})
    """
    kind: ClassVar[ValueKind] = ValueKind.RECORD
    entries: dict[Any, Value]

    def __init__(self, entries: dict[Any, Value]):
        object.__setattr__(self, 'entries', dict(entries))

    def __hash__(self):
        return hash(frozenset(self.entries.items()))

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        if len(self.entries) <= 3:
            return f"Record({self.entries})"
        return f"Record({{...}} len={len(self.entries)})"


def _scalars_equal(av: Any, bv: Any) -> bool:
    # bool is a subclass of int (True == 1), so check it first.
    a_is_bool = type(av) is bool
    b_is_bool = type(bv) is bool
    if a_is_bool != b_is_bool:
        return False
    if a_is_bool:
        return av is bv
    if av is bv:
        # same object, even when it is NaN
        return True
    try:
        return bool(av == bv)
    except Exception:
        # Opaque objects whose __eq__ does not produce a plain bool.
        return av is bv


def structurally_equal(a: Value, b: Value) -> bool:
    """Deep equality of two values (key order of records is irrelevant)."""
    if a is b:
        return True
    if a.kind is not b.kind:
        return False

    if a.kind is ValueKind.SCALAR:
        return _scalars_equal(a.val, b.val)

    if a.kind is ValueKind.SEQUENCE:
        if len(a.items) != len(b.items):
            return False
        return all(structurally_equal(x, y) for x, y in zip(a.items, b.items))

    if a.entries.keys() != b.entries.keys():
        return False
    return all(structurally_equal(v, b.entries[k]) for k, v in a.entries.items())


# ═══════════════════════════════════════════════════════════════════
#  COMPACT-REPORT PLACEHOLDERS
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class SequenceSummary:
    """Stands in for the shorter side of a large resized sequence."""
    length: int

    def __str__(self) -> str:
        return f"{self.length} element list"


@dataclass(frozen=True, slots=True)
class ExtraElement:
    """Stands in for the longer side: "the other list plus this element"."""
    element: Value

    def __str__(self) -> str:
        return f"list with additional element {self.element!r}"


MismatchSide = Union[Value, SequenceSummary, ExtraElement]


# ═══════════════════════════════════════════════════════════════════
#  DIFF RESULTS
# ═══════════════════════════════════════════════════════════════════

class DiffResult:
    """Base class for diff results.  Every result except NoDiff is truthy."""
    __slots__ = ()

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class NoDiff(DiffResult):
    """The two values are equivalent.  Use the NO_DIFF singleton."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_DIFF"


NO_DIFF = NoDiff()


@dataclass(frozen=True, slots=True)
class Mismatch(DiffResult):
    """Leaf-level disagreement between `left` and `right`."""
    left: MismatchSide
    right: MismatchSide

    def __repr__(self) -> str:
        return f"Mismatch({self.left!r} ≠ {self.right!r})"


@dataclass(frozen=True, slots=True)
class RecordDiff(DiffResult):
    """Differences per record key.  Keys without differences are absent."""
    entries: dict[Any, DiffResult]

    def __init__(self, entries: dict[Any, DiffResult]):
        if not entries:
            raise ValueError("RecordDiff requires at least one entry; use NO_DIFF")
        object.__setattr__(self, 'entries', dict(entries))

    def __hash__(self):
        return hash(frozenset(self.entries.items()))


@dataclass(frozen=True, slots=True)
class SequenceDiff(DiffResult):
    """Element-wise differences of two same-length sequences, in order."""
    entries: tuple[DiffResult, ...]

    def __init__(self, entries):
        entries = tuple(entries)
        if not entries:
            raise ValueError("SequenceDiff requires at least one entry; use NO_DIFF")
        object.__setattr__(self, 'entries', entries)


@dataclass(frozen=True, slots=True)
class OrderDiff(DiffResult):
    """
    Same multiset of elements, different arrangement.

    `left_order` is always "0,1,...,n-1"; `right_order` gives, for each
    left element, its position in the right sequence.
    """
    left_order: str
    right_order: str
