"""Comparator kinds and query predicates.

Comparisons always use the natural ordering of Python strings, so numeric
looking values sort lexicographically ("10" < "9").
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from indexed_table.domain.value_objects.validation import ValidationError


class Comparator(Enum):
    """The six supported comparison kinds."""

    EQUAL = "Equal"
    NOT_EQUAL = "NotEqual"
    LESS_THAN = "LessThan"
    LESS_EQ = "LessEq"
    GREATER_THAN = "GreaterThan"
    GREATER_EQ = "GreaterEq"

    @classmethod
    def parse(cls, kind: Comparator | str) -> Comparator:
        """Coerce a member, value ("LessEq") or name ("LESS_EQ") to a Comparator.

        Raises:
            ValidationError: If the kind is not recognised.
        """
        if isinstance(kind, cls):
            return kind
        if isinstance(kind, str):
            try:
                return cls(kind)
            except ValueError:
                pass
            try:
                return cls[kind.upper()]
            except KeyError:
                pass
        raise ValidationError(f"Unknown comparator: {kind!r}")

    @property
    def is_range(self) -> bool:
        """True for the four ordering comparators."""
        return self in _RANGE_BOUNDS

    @property
    def is_index_friendly(self) -> bool:
        """True when an ordered index can answer this comparator."""
        return self is not Comparator.NOT_EQUAL

    def matches(self, left: str, right: str) -> bool:
        """Evaluate ``left <op> right``."""
        return _OPERATORS[self](left, right)


_OPERATORS: dict[Comparator, Callable[[str, str], bool]] = {
    Comparator.EQUAL: operator.eq,
    Comparator.NOT_EQUAL: operator.ne,
    Comparator.LESS_THAN: operator.lt,
    Comparator.LESS_EQ: operator.le,
    Comparator.GREATER_THAN: operator.gt,
    Comparator.GREATER_EQ: operator.ge,
}

# Range comparators as (pivot is upper bound, pivot inclusive)
_RANGE_BOUNDS: dict[Comparator, tuple[bool, bool]] = {
    Comparator.LESS_THAN: (True, False),
    Comparator.LESS_EQ: (True, True),
    Comparator.GREATER_THAN: (False, False),
    Comparator.GREATER_EQ: (False, True),
}


def range_bounds(comparator: Comparator) -> tuple[bool, bool]:
    """Return (pivot_is_upper_bound, pivot_inclusive) for a range comparator.

    Raises:
        ValueError: If the comparator is not a range comparator.
    """
    try:
        return _RANGE_BOUNDS[comparator]
    except KeyError as e:
        raise ValueError(f"{comparator} is not a range comparator") from e


@dataclass(frozen=True, slots=True)
class Predicate:
    """A (column, value, comparator) triple constraining a query.

    Example:
        >>> p = Predicate("score", "20", Comparator.LESS_EQ)
        >>> p.evaluate("19")
        True
    """

    column: str
    value: str
    comparator: Comparator

    def __post_init__(self) -> None:
        """Normalise the comparator."""
        object.__setattr__(self, "comparator", Comparator.parse(self.comparator))
        if not isinstance(self.value, str):
            raise ValidationError(
                f"Predicate value for {self.column!r} must be text, got {self.value!r}"
            )

    def evaluate(self, candidate: str) -> bool:
        """Check whether a column value satisfies this predicate."""
        return self.comparator.matches(candidate, self.value)

    def __str__(self) -> str:
        return f"{self.column} {self.comparator.value} {self.value!r}"
