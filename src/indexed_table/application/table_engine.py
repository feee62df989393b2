"""Table Engine - thread-safe entry point for one indexed table.

This module provides the TableEngine class that owns a Table and wires
it to persistence and observability: every call holds a single exclusive
lock for its whole duration, is traced, logged and counted.

Usage:
    from indexed_table.application import TableEngine

    engine = TableEngine.create(["lastname", "firstname", "id"], name="people")
    engine.insert({"lastname": "Smith", "firstname": "Ann", "id": "7"})
    engine.create_index("id")
    rows = engine.select(["id"], ["5"], ["GreaterEq"])
    engine.save("/path/to/people.txt")

    # Later
    engine = TableEngine.open("/path/to/people.txt", indexes=["id"])
"""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping, Sequence

from indexed_table.adapters.outbound.flat_file_table import FlatFileTableFile
from indexed_table.domain.entities import Record
from indexed_table.domain.services import QueryPlan, Table, build_predicates
from indexed_table.domain.value_objects import Comparator, Predicate, ValidationError
from indexed_table.infrastructure.logging import get_logger
from indexed_table.infrastructure.metrics import MetricsRegistry, get_metrics
from indexed_table.infrastructure.tracing import trace_span
from indexed_table.ports.inbound.table_store import TableDump
from indexed_table.ports.outbound.table_file import TableFile


class TableEngine:
    """Lock-guarded façade over a single Table.

    Thread Safety:
        Any number of threads may share an engine. Reads and writes are
        serialized by one re-entrant lock; there is no finer-grained
        locking.
    """

    def __init__(
        self,
        table: Table,
        name: str = "table",
        table_file: TableFile | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            table: The table to guard.
            name: Table name used in logs and traces.
            table_file: Persistence adapter (flat file by default).
            metrics: Metrics registry (global registry by default).
        """
        self._table = table
        self._name = name
        self._table_file: TableFile = table_file or FlatFileTableFile()
        self._metrics = metrics or get_metrics()
        self._lock = threading.RLock()
        self._logger = get_logger(__name__, table=name)
        self._refresh_gauges()

    @classmethod
    def create(cls, columns: Iterable[str], name: str = "table", **kwargs: Any) -> TableEngine:
        """Create an engine over a new, empty table."""
        return cls(Table(columns), name=name, **kwargs)

    @classmethod
    def open(
        cls,
        path: str | Path,
        indexes: Iterable[str] = (),
        name: str | None = None,
        table_file: TableFile | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> TableEngine:
        """Load a table from a file and optionally index some columns.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValidationError: If the file or any record in it is invalid.
        """
        path = Path(path)
        table_file = table_file or FlatFileTableFile()
        metrics = metrics or get_metrics()

        with trace_span("table.open", {"table.path": str(path)}):
            contents = table_file.read(path)
            table = Table.from_records(
                contents.columns,
                (Record.from_values(contents.columns, row) for row in contents.rows),
            )
            for column in indexes:
                table.create_index(column)

        metrics.file_rows_total.labels(direction="read").inc(len(contents.rows))
        engine = cls(table, name=name or path.stem, table_file=table_file, metrics=metrics)
        engine._logger.info(
            "table_opened",
            path=str(path),
            records=len(table),
            indexes=list(table.indexed_columns),
        )
        return engine

    @property
    def name(self) -> str:
        return self._name

    @property
    def columns(self) -> tuple[str, ...]:
        return self._table.columns

    @property
    def indexed_columns(self) -> tuple[str, ...]:
        with self._lock:
            return self._table.indexed_columns

    def __len__(self) -> int:
        with self._lock:
            return len(self._table)

    @contextmanager
    def _operation(self, operation: str, **attributes: Any) -> Iterator[None]:
        """Hold the lock, trace, and count one table operation."""
        span_attributes = {"table.name": self._name, **attributes}
        with self._lock, trace_span(f"table.{operation}", span_attributes):
            try:
                yield
            except ValidationError as e:
                self._logger.warning("validation_failed", operation=operation, error=str(e))
                self._metrics.operations_total.labels(operation=operation, status="error").inc()
                raise
            self._metrics.operations_total.labels(operation=operation, status="success").inc()

    def _refresh_gauges(self) -> None:
        self._metrics.records.set(len(self._table))
        self._metrics.indexes.set(len(self._table.indexed_columns))

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def insert(self, record: Record | Mapping[str, str]) -> Record:
        """Insert one record. See Table.insert."""
        with self._operation("insert"):
            stored = self._table.insert(record)
            self._refresh_gauges()
        return stored

    def delete(self, record: Record | Mapping[str, str]) -> bool:
        """Delete one record equal in value. See Table.delete."""
        with self._operation("delete"):
            removed = self._table.delete(record)
            self._refresh_gauges()
        if not removed:
            self._logger.debug("delete_missed", record=dict(record))
        return removed

    def load(self, rows: Iterable[Record | Mapping[str, str]]) -> int:
        """Insert many records, all or nothing. See Table.load."""
        with self._operation("load"):
            count = self._table.load(rows)
            self._refresh_gauges()
        self._logger.info("records_loaded", count=count)
        return count

    def create_index(self, column_name: str) -> None:
        """Index a column. See Table.create_index."""
        with self._operation("create_index", **{"table.column": column_name}):
            if self._table.has_index(column_name):
                return
            start = time.perf_counter()
            self._table.create_index(column_name)
            elapsed = time.perf_counter() - start
            self._metrics.index_build_seconds.observe(elapsed)
            self._refresh_gauges()
        self._logger.info(
            "index_created",
            column=column_name,
            records=len(self._table),
            seconds=round(elapsed, 6),
        )

    def drop_index(self, column_name: str) -> bool:
        """Drop a column's index. See Table.drop_index."""
        with self._operation("drop_index", **{"table.column": column_name}):
            dropped = self._table.drop_index(column_name)
            self._refresh_gauges()
        if dropped:
            self._logger.info("index_dropped", column=column_name)
        return dropped

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def explain(self, predicates: Sequence[Predicate]) -> QueryPlan:
        """Return the plan a query would use."""
        with self._lock:
            return self._table.explain(predicates)

    def select(
        self,
        columns: Sequence[str],
        values: Sequence[str],
        comparators: Sequence[Comparator | str],
    ) -> list[Record]:
        """Return records satisfying every triple. See Table.select."""
        with self._operation("select"):
            predicates = build_predicates(columns, values, comparators)
        return self.query(predicates)

    def query(self, predicates: Sequence[Predicate]) -> list[Record]:
        """Return records satisfying every predicate. See Table.query."""
        with self._operation("query", **{"query.predicates": len(predicates)}):
            plan = self._table.explain(predicates)
            start = time.perf_counter()
            result = self._table.execute(plan)
            elapsed = time.perf_counter() - start

        self._metrics.select_latency_seconds.labels(plan=plan.kind).observe(elapsed)
        self._metrics.select_rows.observe(len(result))
        for predicate in plan.indexed:
            if predicate.comparator is Comparator.EQUAL:
                self._metrics.index_lookups_total.labels(column=predicate.column).inc()
            else:
                self._metrics.index_scans_total.labels(column=predicate.column).inc()

        self._logger.debug(
            "query_executed",
            plan=plan.describe(),
            rows=len(result),
            seconds=round(elapsed, 6),
        )
        return result

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def dump(self) -> TableDump:
        """Return the schema and live records in insertion order."""
        with self._lock:
            return self._table.dump()

    def save(self, path: str | Path) -> int:
        """Write the table to a file, replacing it.

        Returns:
            Number of rows written.
        """
        path = Path(path)
        with self._operation("save", **{"table.path": str(path)}):
            snapshot = self._table.dump()
            count = self._table_file.write(path, snapshot.columns, snapshot.rows())
        self._metrics.file_rows_total.labels(direction="write").inc(count)
        self._logger.info("table_saved", path=str(path), rows=count)
        return count

    def get_stats(self) -> dict[str, Any]:
        """Return table statistics for monitoring."""
        with self._lock:
            stats = self._table.get_stats()
        return {
            "name": self._name,
            "columns": list(stats.columns),
            "records": stats.num_records,
            "indexes": {
                column: {
                    "keys": meta.num_keys,
                    "entries": meta.num_entries,
                    "lookups": meta.lookup_count,
                    "scans": meta.scan_count,
                }
                for column, meta in stats.indexes.items()
            },
        }
