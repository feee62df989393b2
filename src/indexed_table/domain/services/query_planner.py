"""Query planning - decide which predicates an index can answer.

The only optimization is "indexed columns first": a predicate goes to its
column's index when one exists and the comparator is order-based or
equality; everything else is evaluated by filtering.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, Sequence

from indexed_table.domain.value_objects import Comparator, Predicate, ValidationError


@dataclass(frozen=True)
class QueryPlan:
    """Partition of a query's predicates.

    Attributes:
        indexed: Predicates resolved against a column index.
        scan: Predicates evaluated by filtering records.
    """

    indexed: tuple[Predicate, ...]
    scan: tuple[Predicate, ...]

    @property
    def uses_index(self) -> bool:
        return bool(self.indexed)

    @property
    def kind(self) -> str:
        """Short label for logs and metrics: 'indexed' or 'scan'."""
        return "indexed" if self.indexed else "scan"

    def describe(self) -> dict[str, list[str]]:
        return {
            "indexed": [str(p) for p in self.indexed],
            "scan": [str(p) for p in self.scan],
        }


def build_predicates(
    columns: Sequence[str],
    values: Sequence[str],
    comparators: Sequence[Comparator | str],
) -> list[Predicate]:
    """Zip three parallel sequences into predicates.

    Raises:
        ValidationError: If the sequences differ in length or are empty.
    """
    if not (len(columns) == len(values) == len(comparators)):
        raise ValidationError(
            "Predicate sequences must have the same length: "
            f"{len(columns)} columns, {len(values)} values, {len(comparators)} comparators"
        )
    return [
        Predicate(column, value, Comparator.parse(kind))
        for column, value, kind in zip(columns, values, comparators)
    ]


def plan_query(
    predicates: Sequence[Predicate],
    schema: Collection[str],
    indexed_columns: Collection[str],
) -> QueryPlan:
    """Classify each predicate as INDEXED or SCAN.

    Args:
        predicates: The conjunctive predicates of the query.
        schema: Columns of the table being queried.
        indexed_columns: Columns that currently have an index.

    Returns:
        The query plan, preserving predicate order within each group.

    Raises:
        ValidationError: If there are no predicates or one names an
            unknown column.
    """
    if not predicates:
        raise ValidationError("A query needs at least one predicate")

    indexed: list[Predicate] = []
    scan: list[Predicate] = []
    for predicate in predicates:
        if predicate.column not in schema:
            raise ValidationError(f"Unknown column in predicate: {predicate.column!r}")
        if predicate.column in indexed_columns and predicate.comparator.is_index_friendly:
            indexed.append(predicate)
        else:
            scan.append(predicate)

    return QueryPlan(indexed=tuple(indexed), scan=tuple(scan))
