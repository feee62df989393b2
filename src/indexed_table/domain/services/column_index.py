"""Ordered secondary index over one column.

The index maps each distinct column value to the bucket of records holding
that value. Keys are kept sorted (natural string order) in a SortedDict so
equality lookups and one-sided range scans avoid a full table scan.

Invariant: a key is present only while its bucket is non-empty.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from sortedcontainers import SortedDict

from indexed_table.domain.entities import Record
from indexed_table.domain.value_objects import Comparator, Predicate, range_bounds
from indexed_table.ports.inbound.table_store import IndexMetadata

@dataclass
class ColumnIndex:
    """A non-unique ordered index on a single column.

    Buckets are lists so identical records can be stored (and removed)
    independently.

    Attributes:
        column_name: The indexed column.
    """

    column_name: str

    def __post_init__(self) -> None:
        """Initialize an empty index."""
        self._tree: SortedDict = SortedDict()
        self._num_entries = 0
        self._lookup_count = 0
        self._scan_count = 0

    @classmethod
    def build(cls, column_name: str, records: Iterable[Record]) -> ColumnIndex:
        """Build an index by bucketing every record on one pass."""
        index = cls(column_name)
        for record in records:
            index.add(record)
        return index

    @property
    def metadata(self) -> IndexMetadata:
        """Return index metadata."""
        return IndexMetadata(
            column_name=self.column_name,
            num_keys=len(self._tree),
            num_entries=self._num_entries,
            lookup_count=self._lookup_count,
            scan_count=self._scan_count,
        )

    def __len__(self) -> int:
        """Number of distinct keys."""
        return len(self._tree)

    def __contains__(self, value: object) -> bool:
        return value in self._tree

    def keys(self) -> list[str]:
        """Return the distinct keys in sorted order."""
        return list(self._tree.keys())

    def bucket(self, value: str) -> tuple[Record, ...]:
        """Return a snapshot of the bucket for a key (empty if absent)."""
        return tuple(self._tree.get(value, ()))

    def add(self, record: Record) -> None:
        """Append a record to the bucket for its column value."""
        key = record[self.column_name]
        bucket = self._tree.get(key)
        if bucket is None:
            self._tree[key] = [record]
        else:
            bucket.append(record)
        self._num_entries += 1

    def remove(self, record: Record) -> bool:
        """Remove one record equal to the given one.

        Prunes the bucket when it becomes empty.

        Returns:
            True if a record was removed, False if none matched.
        """
        key = record[self.column_name]
        bucket = self._tree.get(key)
        if bucket is None:
            return False

        try:
            bucket.remove(record)
        except ValueError:
            return False

        self._num_entries -= 1
        if not bucket:
            del self._tree[key]
        return True

    def lookup(self, value: str) -> list[Record]:
        """Return all records whose column value equals ``value``."""
        self._lookup_count += 1
        return list(self._tree.get(value, ()))

    def range_scan(self, pivot: str, comparator: Comparator) -> Iterator[Record]:
        """Yield records on one side of a pivot value.

        Buckets are visited in key order; the pivot's own bucket is
        included for LESS_EQ/GREATER_EQ and excluded for LESS_THAN/GREATER_THAN.

        Raises:
            ValueError: If the comparator is not a range comparator.
        """
        upper, inclusive = range_bounds(comparator)
        self._scan_count += 1

        if upper:
            keys = self._tree.irange(maximum=pivot, inclusive=(True, inclusive))
        else:
            keys = self._tree.irange(minimum=pivot, inclusive=(inclusive, True))

        for key in keys:
            yield from self._tree[key]

    def resolve(self, predicate: Predicate) -> list[Record]:
        """Evaluate a predicate on this column using the index.

        Raises:
            ValueError: If the predicate targets another column or uses
                NOT_EQUAL, which an ordered index cannot answer.
        """
        if predicate.column != self.column_name:
            raise ValueError(
                f"Predicate on {predicate.column!r} cannot use index on {self.column_name!r}"
            )
        if predicate.comparator is Comparator.EQUAL:
            return self.lookup(predicate.value)
        if predicate.comparator.is_range:
            return list(self.range_scan(predicate.value, predicate.comparator))
        raise ValueError(f"Index cannot resolve {predicate.comparator.value} predicates")

    def scan_all(self) -> Iterator[tuple[str, Record]]:
        """Yield (key, record) pairs in key order."""
        for key, bucket in self._tree.items():
            for record in bucket:
                yield key, record
