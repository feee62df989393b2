"""Indexed in-memory table.

The table keeps two representations of the same records:

    - the heap: every live record in insertion order, used for full scans
    - column indexes: per-column ordered maps from value to record bucket

Both are private and mutated only through insert/delete, which keep them
in lock-step. Index presence changes query latency, never query results.

Query evaluation:
    1. Plan: predicates on indexed columns (except NOT_EQUAL) are INDEXED,
       the rest are SCAN.
    2. Resolve every INDEXED predicate against its index.
    3. Intersect the partial results, then filter the candidates with
       every SCAN predicate.
    4. With no INDEXED predicate, filter the whole heap with every SCAN
       predicate.

All predicates are combined with AND.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping, Sequence

from indexed_table.domain.entities import Record
from indexed_table.domain.services.column_index import ColumnIndex
from indexed_table.domain.services.intersection import intersect
from indexed_table.domain.services.query_planner import (
    QueryPlan,
    build_predicates,
    plan_query,
)
from indexed_table.domain.value_objects import (
    Comparator,
    Predicate,
    ValidationError,
    validate_schema,
    validate_value,
)
from indexed_table.ports.inbound.table_store import (
    IndexMetadata,
    TableDump,
    TableStats,
)


class Table:
    """An in-memory table with optional per-column ordered indexes.

    Implements the TableStore protocol. Not thread-safe; see
    ``TableEngine`` for a lock-guarded wrapper.

    Example:
        >>> table = Table(["id", "name"])
        >>> _ = table.insert({"id": "1", "name": "Alice"})
        >>> table.create_index("id")
        >>> [r["name"] for r in table.select(["id"], ["1"], [Comparator.EQUAL])]
        ['Alice']
    """

    def __init__(self, columns: Iterable[str]) -> None:
        """Initialize an empty table.

        Args:
            columns: Ordered, non-empty column names (letters, digits, spaces).

        Raises:
            ValidationError: If the schema is invalid.
        """
        self._columns = validate_schema(columns)
        self._column_set = frozenset(self._columns)
        self._heap: list[Record] = []
        self._indexes: dict[str, ColumnIndex] = {}

    @classmethod
    def from_records(
        cls,
        columns: Iterable[str],
        rows: Iterable[Record | Mapping[str, str]],
    ) -> Table:
        """Build a table from a schema and records (bulk load)."""
        table = cls(columns)
        table.load(rows)
        return table

    @property
    def columns(self) -> tuple[str, ...]:
        """Return the ordered schema."""
        return self._columns

    @property
    def indexed_columns(self) -> tuple[str, ...]:
        """Indexed columns, in schema order."""
        return tuple(c for c in self._columns if c in self._indexes)

    def __len__(self) -> int:
        return len(self._heap)

    def __iter__(self) -> Iterator[Record]:
        """Iterate over live records in insertion order."""
        return iter(tuple(self._heap))

    def __contains__(self, record: object) -> bool:
        return record in self._heap

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def _coerce(self, record: Record | Mapping[str, str]) -> Record:
        """Validate a record against the schema.

        Raises:
            ValidationError: On missing/extra columns or invalid values.
        """
        if not isinstance(record, Record):
            if not isinstance(record, Mapping):
                raise ValidationError(f"Expected a record mapping, got {type(record).__name__}")
            record = Record.from_mapping(record)

        present = frozenset(record.columns)
        if present != self._column_set:
            missing = sorted(self._column_set - present)
            extra = sorted(present - self._column_set)
            raise ValidationError(
                f"Record does not match schema: missing={missing}, extra={extra}"
            )

        for column, value in record.items():
            validate_value(column, value)

        return record

    def _store(self, record: Record) -> None:
        self._heap.append(record)
        for index in self._indexes.values():
            index.add(record)

    def insert(self, record: Record | Mapping[str, str]) -> Record:
        """Insert a record and update every existing index.

        Duplicates, including identical records, are allowed.

        Args:
            record: A Record or mapping whose columns match the schema.

        Returns:
            The stored Record instance.

        Raises:
            ValidationError: If the record does not match the schema or
                contains non-alphanumeric text.
        """
        stored = self._coerce(record)
        self._store(stored)
        return stored

    def delete(self, record: Record | Mapping[str, str]) -> bool:
        """Delete the first record (heap order) equal in value to the argument.

        Deleting a record that is not present is a no-op.

        Returns:
            True if a record was removed, False otherwise.
        """
        if not isinstance(record, Record):
            record = Record.from_mapping(record)

        for position, candidate in enumerate(self._heap):
            if candidate == record:
                break
        else:
            return False

        removed = self._heap.pop(position)
        for index in self._indexes.values():
            index.remove(removed)
        return True

    def load(self, rows: Iterable[Record | Mapping[str, str]]) -> int:
        """Insert many records, all or nothing.

        Every record is validated before any is stored, so a single bad
        record leaves the table unchanged.

        Returns:
            Number of records inserted.

        Raises:
            ValidationError: If any record is invalid.
        """
        records = [self._coerce(row) for row in rows]
        for record in records:
            self._store(record)
        return len(records)

    # ------------------------------------------------------------------
    # Indexes
    # ------------------------------------------------------------------

    def _check_column(self, column_name: str) -> None:
        if column_name not in self._column_set:
            raise ValidationError(f"Column not in schema: {column_name!r}")

    def create_index(self, column_name: str) -> None:
        """Build an index on a column with a single heap scan.

        No-op if the column is already indexed.

        Raises:
            ValidationError: If the column is not in the schema.
        """
        self._check_column(column_name)
        if column_name in self._indexes:
            return
        self._indexes[column_name] = ColumnIndex.build(column_name, self._heap)

    def drop_index(self, column_name: str) -> bool:
        """Drop a column's index.

        Returns:
            True if an index was dropped, False if the column had none.

        Raises:
            ValidationError: If the column is not in the schema.
        """
        self._check_column(column_name)
        return self._indexes.pop(column_name, None) is not None

    def has_index(self, column_name: str) -> bool:
        return column_name in self._indexes

    def index_keys(self, column_name: str) -> list[str]:
        """Return the sorted distinct keys of a column's index.

        Raises:
            ValidationError: If the column is unknown or not indexed.
        """
        return self._get_index(column_name).keys()

    def index_bucket(self, column_name: str, value: str) -> tuple[Record, ...]:
        """Return the records filed under one key of a column's index."""
        return self._get_index(column_name).bucket(value)

    def _get_index(self, column_name: str) -> ColumnIndex:
        self._check_column(column_name)
        index = self._indexes.get(column_name)
        if index is None:
            raise ValidationError(f"Column is not indexed: {column_name!r}")
        return index

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def explain(self, predicates: Sequence[Predicate]) -> QueryPlan:
        """Return the plan a query would use, without running it."""
        return plan_query(predicates, self._column_set, self._indexes.keys())

    def select(
        self,
        columns: Sequence[str],
        values: Sequence[str],
        comparators: Sequence[Comparator | str],
    ) -> list[Record]:
        """Return records satisfying every (column, value, comparator) triple.

        Raises:
            ValidationError: If the sequences differ in length, are empty,
                or name an unknown column.
        """
        return self.query(build_predicates(columns, values, comparators))

    def query(self, predicates: Sequence[Predicate]) -> list[Record]:
        """Return records satisfying every predicate.

        Each stored copy of a matching record appears once in the result.
        Result order is unspecified.
        """
        return self.execute(self.explain(predicates))

    def execute(self, plan: QueryPlan) -> list[Record]:
        """Run a query plan produced by ``explain``."""
        if plan.indexed:
            partials = [self._indexes[p.column].resolve(p) for p in plan.indexed]
            common = set(intersect(partials))
            # Every copy of a matching record is in each partial result,
            # so filtering the smallest one keeps duplicates intact.
            driver = min(partials, key=len)
            candidates: Iterable[Record] = (r for r in driver if r in common)
        else:
            candidates = self._heap

        return [r for r in candidates if _satisfies_all(r, plan.scan)]

    # ------------------------------------------------------------------
    # Bulk dump and stats
    # ------------------------------------------------------------------

    def dump(self) -> TableDump:
        """Return the schema and live records in insertion order."""
        return TableDump(columns=self._columns, records=tuple(self._heap))

    def rows(self) -> Iterator[tuple[str, ...]]:
        """Yield each live record's values in schema order."""
        return self.dump().rows()

    def get_stats(self) -> TableStats:
        """Return table statistics."""
        indexes: dict[str, IndexMetadata] = {
            column: self._indexes[column].metadata for column in self.indexed_columns
        }
        return TableStats(
            columns=self._columns,
            num_records=len(self._heap),
            indexes=indexes,
        )

    def __repr__(self) -> str:
        return (
            f"Table(columns={list(self._columns)}, records={len(self._heap)}, "
            f"indexes={list(self.indexed_columns)})"
        )


def _satisfies_all(record: Record, predicates: Sequence[Predicate]) -> bool:
    return all(p.evaluate(record[p.column]) for p in predicates)
