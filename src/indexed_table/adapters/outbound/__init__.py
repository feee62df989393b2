"""Outbound adapters - implementations of outbound ports.

These adapters implement external dependencies, currently the flat
comma-separated file a table is saved to and loaded from.
"""

from indexed_table.adapters.outbound.flat_file_table import FlatFileTableFile

__all__ = [
    "FlatFileTableFile",
]
