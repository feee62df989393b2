"""Domain services for the indexed table.

Services implement the logic that doesn't naturally fit within a single
entity: maintaining column indexes, planning queries, intersecting
partial results, and the table that ties them together.
"""

from indexed_table.domain.services.column_index import ColumnIndex
from indexed_table.domain.services.intersection import intersect
from indexed_table.domain.services.query_planner import (
    QueryPlan,
    build_predicates,
    plan_query,
)
from indexed_table.domain.services.table import Table

__all__ = [
    "ColumnIndex",
    "QueryPlan",
    "Table",
    "build_predicates",
    "intersect",
    "plan_query",
]
