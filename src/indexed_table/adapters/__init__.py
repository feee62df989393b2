"""Adapters layer - concrete implementations of port interfaces.

Adapters provide the actual implementations:
- Inbound adapters: Handle incoming requests (REST)
- Outbound adapters: Implement external dependencies (flat files)
"""

from indexed_table.adapters.outbound import FlatFileTableFile

__all__ = [
    # Outbound adapters
    "FlatFileTableFile",
]
