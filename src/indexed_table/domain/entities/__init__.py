"""Domain entities for the indexed table.

Exports:
    Record:
        - Record: Immutable ordered mapping from column name to text value
"""

from indexed_table.domain.entities.record import Record

__all__ = [
    "Record",
]
