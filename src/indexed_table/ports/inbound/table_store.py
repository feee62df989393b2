"""Table store port for record storage, indexing and queries.

This inbound port defines the contract offered to callers of a table:
inserting and deleting records, creating indexes, conjunctive selection,
and the narrow bulk load/dump interface used by persistence collaborators.

Key responsibilities:
- Keep the heap and every column index in lock-step
- Plan each predicate as indexed or scan and combine results by intersection
- Never mutate state while answering a query
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Mapping, Protocol, Sequence

from indexed_table.domain.entities import Record
from indexed_table.domain.value_objects import Comparator, Predicate


@dataclass
class IndexMetadata:
    """Metadata and counters for one column index."""

    column_name: str
    num_keys: int
    num_entries: int
    lookup_count: int
    scan_count: int


@dataclass
class TableStats:
    """Statistics for table monitoring."""

    columns: tuple[str, ...]
    num_records: int
    indexes: dict[str, IndexMetadata] = field(default_factory=dict)


@dataclass(frozen=True)
class TableDump:
    """Schema plus live records in insertion order, for serialization."""

    columns: tuple[str, ...]
    records: tuple[Record, ...]

    def rows(self) -> Iterator[tuple[str, ...]]:
        """Yield each record's values in schema order."""
        for record in self.records:
            yield record.values_for(self.columns)


class TableStore(Protocol):
    """Protocol for an indexed in-memory table.

    Thread Safety:
        Implementations are not required to be thread-safe. Callers that
        share a table across threads must serialize every call.
    """

    @property
    @abstractmethod
    def columns(self) -> tuple[str, ...]:
        """Return the ordered schema."""
        ...

    @abstractmethod
    def insert(self, record: Record | Mapping[str, str]) -> Record:
        """Insert a record and update every index.

        Args:
            record: A record whose columns match the schema exactly.

        Returns:
            The stored Record instance.

        Raises:
            ValidationError: If the record does not match the schema or
                contains non-alphanumeric text.
        """
        ...

    @abstractmethod
    def delete(self, record: Record | Mapping[str, str]) -> bool:
        """Delete one record equal in value to the argument.

        Returns:
            True if a record was removed, False if none matched.
        """
        ...

    @abstractmethod
    def create_index(self, column_name: str) -> None:
        """Index a column. No-op if it is already indexed.

        Raises:
            ValidationError: If the column is not in the schema.
        """
        ...

    @abstractmethod
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
        ...

    @abstractmethod
    def query(self, predicates: Sequence[Predicate]) -> list[Record]:
        """Return records satisfying every predicate."""
        ...

    @abstractmethod
    def load(self, rows: Iterable[Record | Mapping[str, str]]) -> int:
        """Insert many records, all or nothing.

        Returns:
            Number of records inserted.
        """
        ...

    @abstractmethod
    def dump(self) -> TableDump:
        """Return the schema and live records in insertion order."""
        ...

    @abstractmethod
    def get_stats(self) -> TableStats:
        """Return table statistics for monitoring."""
        ...
