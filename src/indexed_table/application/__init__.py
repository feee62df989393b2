"""Application layer for the indexed table.

The application layer orchestrates domain logic to fulfill use cases.

Exports:
    TableEngine:
        - TableEngine: Lock-guarded, observable entry point for one table
    Benchmark:
        - run_benchmark: Time scan vs. indexed equality lookups
        - BenchmarkResult: Timings of one run
        - BenchmarkError: A lookup returned the wrong number of records
"""

from indexed_table.application.benchmark import (
    BenchmarkError,
    BenchmarkResult,
    run_benchmark,
)
from indexed_table.application.table_engine import TableEngine

__all__ = [
    "TableEngine",
    "BenchmarkError",
    "BenchmarkResult",
    "run_benchmark",
]
