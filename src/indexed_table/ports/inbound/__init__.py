"""Inbound ports - API contracts for the indexed table.

Inbound ports define the interfaces that callers and upper layers
use to store, index and query records.
"""

from indexed_table.ports.inbound.table_store import (
    IndexMetadata,
    TableDump,
    TableStats,
    TableStore,
)

__all__ = [
    "IndexMetadata",
    "TableDump",
    "TableStats",
    "TableStore",
]
