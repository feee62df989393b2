"""Unit tests for the ordered column index."""

from __future__ import annotations

import pytest

from indexed_table.domain.entities import Record
from indexed_table.domain.services import ColumnIndex
from indexed_table.domain.value_objects import Comparator, Predicate


def _rec(value: str, tag: str = "x") -> Record:
    return Record(("k", "tag"), (value, tag))


def _values(records: list[Record]) -> list[str]:
    return sorted(r["k"] for r in records)


@pytest.mark.unit
class TestColumnIndex:
    """Tests for ColumnIndex."""

    @pytest.fixture
    def index(self) -> ColumnIndex:
        """An index over keys v1 < v2 < v3 ('a', 'b', 'c')."""
        return ColumnIndex.build("k", [_rec("b"), _rec("a"), _rec("c"), _rec("b", "y")])

    def test_index_creation(self) -> None:
        """A new index is empty."""
        index = ColumnIndex("k")
        assert index.column_name == "k"
        assert len(index) == 0
        assert index.metadata.num_entries == 0

    def test_keys_are_sorted(self, index: ColumnIndex) -> None:
        """Keys are kept in natural string order."""
        assert index.keys() == ["a", "b", "c"]
        assert index.metadata.num_keys == 3
        assert index.metadata.num_entries == 4

    def test_lookup(self, index: ColumnIndex) -> None:
        """Equality lookup returns the whole bucket."""
        assert sorted(r["tag"] for r in index.lookup("b")) == ["x", "y"]
        assert index.metadata.lookup_count == 1

    def test_lookup_missing_key(self, index: ColumnIndex) -> None:
        """Absent keys produce an empty result, not an error."""
        assert index.lookup("zzz") == []

    def test_lookup_returns_copy(self, index: ColumnIndex) -> None:
        """Mutating a lookup result does not touch the index."""
        index.lookup("a").clear()
        assert len(index.lookup("a")) == 1

    @pytest.mark.parametrize(
        ("comparator", "expected"),
        [
            (Comparator.GREATER_EQ, ["b", "b", "c"]),
            (Comparator.GREATER_THAN, ["c"]),
            (Comparator.LESS_EQ, ["a", "b", "b"]),
            (Comparator.LESS_THAN, ["a"]),
        ],
    )
    def test_range_boundaries(
        self, index: ColumnIndex, comparator: Comparator, expected: list[str]
    ) -> None:
        """The pivot bucket is included only for inclusive comparators."""
        assert _values(list(index.range_scan("b", comparator))) == expected

    def test_range_pivot_not_a_key(self, index: ColumnIndex) -> None:
        """Pivots between keys split the key space correctly."""
        assert _values(list(index.range_scan("bb", Comparator.LESS_THAN))) == ["a", "b", "b"]
        assert _values(list(index.range_scan("bb", Comparator.GREATER_EQ))) == ["c"]

    def test_range_scan_rejects_equality(self, index: ColumnIndex) -> None:
        """range_scan only accepts ordering comparators."""
        with pytest.raises(ValueError):
            list(index.range_scan("b", Comparator.EQUAL))

    def test_lexicographic_range(self) -> None:
        """Numeric-looking keys are ordered as text."""
        index = ColumnIndex.build("k", [_rec("9"), _rec("10"), _rec("100")])
        assert _values(list(index.range_scan("9", Comparator.LESS_THAN))) == ["10", "100"]

    def test_resolve(self, index: ColumnIndex) -> None:
        """resolve dispatches equality and range predicates."""
        assert _values(index.resolve(Predicate("k", "c", Comparator.EQUAL))) == ["c"]
        assert _values(index.resolve(Predicate("k", "a", Comparator.GREATER_THAN))) == [
            "b",
            "b",
            "c",
        ]

    def test_resolve_rejects_not_equal(self, index: ColumnIndex) -> None:
        """NOT_EQUAL is never answered by the index."""
        with pytest.raises(ValueError):
            index.resolve(Predicate("k", "a", Comparator.NOT_EQUAL))

    def test_resolve_rejects_other_column(self, index: ColumnIndex) -> None:
        with pytest.raises(ValueError):
            index.resolve(Predicate("tag", "x", Comparator.EQUAL))

    def test_remove_one_of_duplicates(self) -> None:
        """Removing an identical record takes out exactly one copy."""
        index = ColumnIndex.build("k", [_rec("a"), _rec("a")])

        assert index.remove(_rec("a")) is True
        assert len(index.bucket("a")) == 1
        assert "a" in index

    def test_remove_prunes_empty_bucket(self, index: ColumnIndex) -> None:
        """A key disappears as soon as its bucket is empty."""
        assert index.remove(_rec("a")) is True
        assert "a" not in index
        assert index.keys() == ["b", "c"]
        assert index.bucket("a") == ()

    def test_remove_missing(self, index: ColumnIndex) -> None:
        """Removing an absent record is reported, not raised."""
        assert index.remove(_rec("zzz")) is False
        assert index.remove(_rec("a", "other")) is False
        assert index.metadata.num_entries == 4

    def test_scan_all(self, index: ColumnIndex) -> None:
        """scan_all yields every entry in key order."""
        keys = [key for key, _ in index.scan_all()]
        assert keys == ["a", "b", "b", "c"]
