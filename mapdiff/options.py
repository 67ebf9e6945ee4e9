"""
mapdiff.options — The options context threaded through a diff.

A DiffOptions instance is immutable.  Descending into a record key does
not mutate it; `narrow(key)` builds the child context whose ignore
paths are relative to that key:

    DiffOptions(ignore=("a.b", "a.c.d", "x")).narrow("a")
        → DiffOptions(ignore=("b", "c.d"))

Entries that do not start with "<key>." are dropped, so an ignore path
never reappears once its prefix stopped matching.
"""

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Union

from .core import Value
from .formats import from_python


DEFAULT_MINIFY_THRESHOLD = 500


class KeyNotSet(Enum):
    """Sentinel type for a record key that is absent on one side."""
    KEY_NOT_SET = "key_not_set"

    def __repr__(self) -> str:
        return ":key_not_set"


KEY_NOT_SET = KeyNotSet.KEY_NOT_SET


class DiffOptionsError(ValueError):
    """Raised when diff options are malformed."""


Predicate = Callable[[Any, Any], Any]
EquivalenceRule = Union[Predicate, tuple[Value, Value]]


def strip_prefix(ignore: tuple[str, ...], key: Any) -> tuple[str, ...]:
    """Ignore paths relative to `key`; paths outside `key` are dropped."""
    prefix = f"{key}."
    return tuple(path[len(prefix):] for path in ignore if path.startswith(prefix))


def _normalize_rule(rule: Any) -> EquivalenceRule:
    if callable(rule):
        return rule
    if isinstance(rule, (list, tuple)) and len(rule) == 2:
        return (from_python(rule[0]), from_python(rule[1]))
    raise DiffOptionsError(
        f"treat_as_same entries must be callables or (left, right) pairs, got {rule!r}"
    )


def _check_count(name: str, value: Any) -> None:
    if type(value) is not int or value < 0:
        raise DiffOptionsError(f"{name} must be a non-negative int, got {value!r}")


@dataclass(frozen=True, slots=True)
class DiffOptions:
    """
    Equivalence policy for a diff.

    Attributes:
        ignore:             dotted key paths excluded at this nesting level
        key_not_set_marker: value substituted for an absent record key
        treat_as_same:      (left, right) pairs (matched both ways) or
                            predicates called as predicate(left, right)
        float_accuracy:     fractional digits kept when comparing numeric
                            strings; None disables truncation
        ignore_list_order:  reordered sequences count as equal
        minify_threshold:   text length above which a resized sequence is
                            reported compactly
    """
    ignore: tuple[str, ...] = ()
    key_not_set_marker: Any = KEY_NOT_SET
    treat_as_same: tuple[EquivalenceRule, ...] = ()
    float_accuracy: Optional[int] = None
    ignore_list_order: bool = False
    minify_threshold: int = DEFAULT_MINIFY_THRESHOLD

    def __post_init__(self):
        if isinstance(self.ignore, str):
            raise DiffOptionsError(
                f"ignore must be a list of dotted paths, not a string: {self.ignore!r}"
            )
        ignore = tuple(self.ignore)
        for path in ignore:
            if not isinstance(path, str):
                raise DiffOptionsError(f"ignore entries must be strings, got {path!r}")
        object.__setattr__(self, 'ignore', ignore)

        if isinstance(self.treat_as_same, (str, bytes)) or not hasattr(self.treat_as_same, '__iter__'):
            raise DiffOptionsError(
                f"treat_as_same must be a list of pairs or predicates, got {self.treat_as_same!r}"
            )
        object.__setattr__(
            self, 'treat_as_same', tuple(_normalize_rule(r) for r in self.treat_as_same)
        )

        if self.float_accuracy is not None:
            _check_count("float_accuracy", self.float_accuracy)
        if type(self.ignore_list_order) is not bool:
            raise DiffOptionsError(
                f"ignore_list_order must be a bool, got {self.ignore_list_order!r}"
            )
        _check_count("minify_threshold", self.minify_threshold)

    @classmethod
    def coerce(cls, options: Union["DiffOptions", Mapping, None]) -> "DiffOptions":
        """Build options from None, a DiffOptions, or a mapping of option names."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, Mapping):
            known = {f.name for f in dataclasses.fields(cls)}
            unknown = sorted(str(k) for k in options if k not in known)
            if unknown:
                raise DiffOptionsError(
                    f"unknown option(s): {', '.join(unknown)}; expected one of {sorted(known)}"
                )
            return cls(**options)
        raise DiffOptionsError(
            f"options must be a DiffOptions or a mapping, got {type(options).__name__}"
        )

    @property
    def missing(self) -> Value:
        """The marker substituted for an absent record key, as a Value.

        None and False fall back to KEY_NOT_SET.
        """
        marker = self.key_not_set_marker
        if marker is None or marker is False:
            marker = KEY_NOT_SET
        return from_python(marker)

    def narrow(self, key: Any) -> "DiffOptions":
        """Options for the value stored under record key `key`."""
        if not self.ignore:
            return self
        return dataclasses.replace(self, ignore=strip_prefix(self.ignore, key))
