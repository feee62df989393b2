"""Ports layer - interface definitions following Hexagonal Architecture.

Ports are abstract interfaces (protocols) that define contracts:
- Inbound ports: APIs offered to clients (e.g., TableStore)
- Outbound ports: Dependencies on external systems (e.g., TableFile)

Adapters implement these ports with concrete functionality.
"""

from indexed_table.ports.inbound import (
    IndexMetadata,
    TableDump,
    TableStats,
    TableStore,
)
from indexed_table.ports.outbound import (
    MalformedTableFileError,
    TableContents,
    TableFile,
)

__all__ = [
    # Inbound ports
    "IndexMetadata",
    "TableDump",
    "TableStats",
    "TableStore",
    # Outbound ports
    "MalformedTableFileError",
    "TableContents",
    "TableFile",
]
