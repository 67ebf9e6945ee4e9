"""
mapdiff.formats — Convert between real-world data and mapdiff types.

Supported conversions:
    • Python objects (dict, list, tuple, str, int, float, bool, None) ↔ Value
    • JSON strings ↔ Value
    • DiffResult → plain Python / JSON report
"""

import json
from typing import Any

from .core import (
    DiffResult, ExtraElement, Mismatch, NoDiff, OrderDiff,
    Record, RecordDiff, Scalar, Sequence, SequenceDiff, SequenceSummary, Value,
)


# ═══════════════════════════════════════════════════════════════════
#  PYTHON OBJECTS ↔ VALUES
# ═══════════════════════════════════════════════════════════════════

def from_python(obj: Any) -> Value:
    """
    Convert a Python object to a Value.

    Mapping:
        dict       → Record (keys kept as-is)
        list/tuple → Sequence
        Value      → unchanged
        anything   → Scalar

    Nested structures are converted recursively.
    """
    if isinstance(obj, Value):
        return obj
    if isinstance(obj, dict):
        return Record({k: from_python(v) for k, v in obj.items()})
    if isinstance(obj, (list, tuple)):
        return Sequence(tuple(from_python(item) for item in obj))
    return Scalar(obj)


def to_python(val: Value) -> Any:
    """
    Convert a Value back to a plain Python object.

    Inverse of from_python for JSON-compatible objects (sequences come
    back as lists).
    """
    if isinstance(val, Scalar):
        return val.val
    if isinstance(val, Sequence):
        return [to_python(item) for item in val.items]
    if isinstance(val, Record):
        return {k: to_python(v) for k, v in val.entries.items()}
    raise TypeError(f"Unknown Value type: {type(val)}")


# ═══════════════════════════════════════════════════════════════════
#  JSON STRINGS ↔ VALUES
# ═══════════════════════════════════════════════════════════════════

def from_json(text: str) -> Value:
    """Parse a JSON string into a Value."""
    return from_python(json.loads(text))


def to_json(val: Value, **kwargs) -> str:
    """Convert a Value to a JSON string."""
    return json.dumps(to_python(val), **kwargs)


# ═══════════════════════════════════════════════════════════════════
#  DIFF RESULTS → REPORTS
# ═══════════════════════════════════════════════════════════════════

def _side_to_python(side: Any) -> Any:
    if isinstance(side, SequenceSummary):
        return f"{side.length} element List"
    if isinstance(side, ExtraElement):
        return ("List with additional element", to_python(side.element))
    return to_python(side)


def result_to_python(result: DiffResult) -> Any:
    """
    Render a diff result as plain Python:

        NO_DIFF        → None
        Mismatch       → (left, right)
        RecordDiff     → {key: ...}
        SequenceDiff   → [...]
        OrderDiff      → ("List with order: 0,1,2", "List with order: 2,1,0")
    """
    if isinstance(result, NoDiff):
        return None
    if isinstance(result, Mismatch):
        return (_side_to_python(result.left), _side_to_python(result.right))
    if isinstance(result, RecordDiff):
        return {k: result_to_python(v) for k, v in result.entries.items()}
    if isinstance(result, SequenceDiff):
        return [result_to_python(entry) for entry in result.entries]
    if isinstance(result, OrderDiff):
        return (f"List with order: {result.left_order}",
                f"List with order: {result.right_order}")
    raise TypeError(f"Unknown DiffResult type: {type(result)}")


def result_to_json(result: DiffResult, **kwargs) -> str:
    """Convert a diff result to JSON.  Non-JSON scalars are rendered with str()."""
    kwargs.setdefault("default", str)
    return json.dumps(result_to_python(result), **kwargs)
