"""Unit tests for query planning."""

from __future__ import annotations

import pytest

from indexed_table.domain.services import build_predicates, plan_query
from indexed_table.domain.value_objects import Comparator, Predicate, ValidationError

SCHEMA = ("id", "name", "score")


@pytest.mark.unit
class TestBuildPredicates:
    """Tests for zipping parallel sequences."""

    def test_zip(self) -> None:
        predicates = build_predicates(["id", "score"], ["1", "5"], [Comparator.EQUAL, "LessEq"])
        assert predicates == [
            Predicate("id", "1", Comparator.EQUAL),
            Predicate("score", "5", Comparator.LESS_EQ),
        ]

    @pytest.mark.parametrize(
        ("columns", "values", "comparators"),
        [
            (["id"], ["1", "2"], [Comparator.EQUAL]),
            (["id", "name"], ["1", "2"], [Comparator.EQUAL]),
            (["id"], [], []),
        ],
    )
    def test_length_mismatch(
        self, columns: list[str], values: list[str], comparators: list[Comparator]
    ) -> None:
        with pytest.raises(ValidationError):
            build_predicates(columns, values, comparators)


@pytest.mark.unit
class TestPlanQuery:
    """Tests for plan_query."""

    def test_no_indexes_all_scan(self) -> None:
        plan = plan_query([Predicate("id", "1", Comparator.EQUAL)], SCHEMA, ())
        assert plan.indexed == ()
        assert len(plan.scan) == 1
        assert not plan.uses_index
        assert plan.kind == "scan"

    def test_indexed_column(self) -> None:
        predicates = [
            Predicate("id", "1", Comparator.GREATER_EQ),
            Predicate("name", "Ann", Comparator.EQUAL),
        ]
        plan = plan_query(predicates, SCHEMA, {"id"})
        assert plan.indexed == (predicates[0],)
        assert plan.scan == (predicates[1],)
        assert plan.kind == "indexed"

    def test_not_equal_never_indexed(self) -> None:
        """NOT_EQUAL is scanned even on an indexed column."""
        plan = plan_query([Predicate("id", "1", Comparator.NOT_EQUAL)], SCHEMA, {"id"})
        assert plan.indexed == ()
        assert len(plan.scan) == 1

    def test_unknown_column(self) -> None:
        with pytest.raises(ValidationError):
            plan_query([Predicate("age", "1", Comparator.EQUAL)], SCHEMA, ())

    def test_empty_query(self) -> None:
        with pytest.raises(ValidationError):
            plan_query([], SCHEMA, ())

    def test_describe(self) -> None:
        plan = plan_query([Predicate("id", "1", Comparator.EQUAL)], SCHEMA, {"id"})
        assert plan.describe() == {"indexed": ["id Equal '1'"], "scan": []}
