"""Lookup benchmark: linear scan vs. column index.

Fills a table with ``num_rows`` records carrying unique ids, then times
``num_lookups`` random equality selects on the id column before and after
indexing it. Each lookup must return exactly one record.

Run with:
    python -m indexed_table.application.benchmark
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass

from indexed_table.domain.entities import Record
from indexed_table.domain.services import Table
from indexed_table.domain.value_objects import Comparator
from indexed_table.infrastructure.logging import get_logger

logger = get_logger(__name__)

BENCHMARK_COLUMNS = ("lastname", "firstname", "id")


class BenchmarkError(Exception):
    """Raised when a lookup returns the wrong number of records."""

    pass


@dataclass
class BenchmarkResult:
    """Timings of one benchmark run, in seconds."""

    num_rows: int
    num_lookups: int
    scan_seconds: float
    index_build_seconds: float
    indexed_seconds: float

    @property
    def avg_scan_lookup(self) -> float:
        return self.scan_seconds / self.num_lookups

    @property
    def avg_indexed_lookup(self) -> float:
        return self.indexed_seconds / self.num_lookups

    @property
    def speedup(self) -> float:
        """How many times faster indexed lookups were than scans."""
        if self.indexed_seconds == 0:
            return float("inf")
        return self.scan_seconds / self.indexed_seconds


def build_table(num_rows: int) -> Table:
    """Create a table of ``num_rows`` records with ids 0..num_rows-1."""
    table = Table(BENCHMARK_COLUMNS)
    table.load(
        Record(BENCHMARK_COLUMNS, ("Smith", "Ann", str(i))) for i in range(num_rows)
    )
    return table


def _time_lookups(table: Table, targets: list[str]) -> float:
    start = time.perf_counter()
    for target in targets:
        found = table.select(["id"], [target], [Comparator.EQUAL])
        if len(found) != 1:
            raise BenchmarkError(
                f"Lookup of unique id {target!r} returned {len(found)} records"
            )
    return time.perf_counter() - start


def run_benchmark(
    num_rows: int = 1000,
    num_lookups: int = 1000,
    seed: int | None = None,
) -> BenchmarkResult:
    """Run the scan-vs-index benchmark.

    Raises:
        BenchmarkError: If any lookup does not find exactly one record.
    """
    rng = random.Random(seed)
    table = build_table(num_rows)
    targets = [str(rng.randrange(num_rows)) for _ in range(num_lookups)]

    scan_seconds = _time_lookups(table, targets)

    start = time.perf_counter()
    table.create_index("id")
    index_build_seconds = time.perf_counter() - start

    indexed_seconds = _time_lookups(table, targets)

    result = BenchmarkResult(
        num_rows=num_rows,
        num_lookups=num_lookups,
        scan_seconds=scan_seconds,
        index_build_seconds=index_build_seconds,
        indexed_seconds=indexed_seconds,
    )
    logger.info(
        "benchmark_completed",
        rows=num_rows,
        lookups=num_lookups,
        scan_seconds=round(scan_seconds, 6),
        index_build_seconds=round(index_build_seconds, 6),
        indexed_seconds=round(indexed_seconds, 6),
    )
    return result


if __name__ == "__main__":
    from indexed_table.infrastructure.config import get_config
    from indexed_table.infrastructure.logging import setup_logging_from_config

    config = get_config()
    setup_logging_from_config(config.observability)

    bench = config.benchmark
    result = run_benchmark(bench.num_rows, bench.num_lookups, bench.seed)
    print(f"Non-indexed search time (n={result.num_rows}): {result.scan_seconds:.6f} sec")
    print(f"Time to create index (n={result.num_rows}): {result.index_build_seconds:.6f} sec")
    print(f"Indexed search time (n={result.num_rows}): {result.indexed_seconds:.6f} sec")
    print(f"Speedup: {result.speedup:.1f}x")
