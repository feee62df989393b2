"""Intersection of per-predicate result sets."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Sequence

from indexed_table.domain.entities import Record


def intersect(result_sets: Sequence[Iterable[Record]]) -> list[Record]:
    """Return the distinct records present in every input set.

    Each input set votes at most once per distinct record (by value), so a
    record repeated inside one set is still counted once for that set.
    Runs in O(total elements across all sets).

    Example:
        intersect([{1, 2, 3}, {2, 3}]) -> [2, 3]
        intersect([{1, 2}, {2, 3}, {2, 4}]) -> [2]

    Args:
        result_sets: One collection of records per resolved predicate.

    Returns:
        Records common to all sets, in first-seen order. Empty when no
        sets are given.
    """
    if not result_sets:
        return []

    frequency: Counter[Record] = Counter()
    for records in result_sets:
        frequency.update(dict.fromkeys(records).keys())

    required = len(result_sets)
    return [record for record, count in frequency.items() if count == required]
