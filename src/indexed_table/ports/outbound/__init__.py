"""Outbound ports - interfaces for external dependencies.

Outbound ports define contracts for systems the table depends on,
such as the flat file its contents are persisted to.
"""

from indexed_table.ports.outbound.table_file import (
    MalformedTableFileError,
    TableContents,
    TableFile,
)

__all__ = [
    "MalformedTableFileError",
    "TableContents",
    "TableFile",
]
