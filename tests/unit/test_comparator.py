"""Unit tests for comparators, predicates and text validation."""

from __future__ import annotations

import pytest

from indexed_table.domain.value_objects import (
    Comparator,
    Predicate,
    ValidationError,
    is_valid_text,
    range_bounds,
    validate_schema,
)


@pytest.mark.unit
class TestComparator:
    """Tests for the Comparator enum."""

    @pytest.mark.parametrize(
        ("comparator", "left", "right", "expected"),
        [
            (Comparator.EQUAL, "b", "b", True),
            (Comparator.EQUAL, "b", "c", False),
            (Comparator.NOT_EQUAL, "b", "c", True),
            (Comparator.NOT_EQUAL, "b", "b", False),
            (Comparator.LESS_THAN, "a", "b", True),
            (Comparator.LESS_THAN, "b", "b", False),
            (Comparator.LESS_EQ, "b", "b", True),
            (Comparator.LESS_EQ, "c", "b", False),
            (Comparator.GREATER_THAN, "c", "b", True),
            (Comparator.GREATER_THAN, "b", "b", False),
            (Comparator.GREATER_EQ, "b", "b", True),
            (Comparator.GREATER_EQ, "a", "b", False),
        ],
    )
    def test_matches(self, comparator: Comparator, left: str, right: str, expected: bool) -> None:
        """Each comparator evaluates left <op> right."""
        assert comparator.matches(left, right) is expected

    def test_lexicographic_ordering(self) -> None:
        """Numeric-looking values compare as strings."""
        assert Comparator.LESS_THAN.matches("10", "9")
        assert Comparator.GREATER_THAN.matches("9", "10")

    def test_parse(self) -> None:
        """Comparators parse from members, values and names."""
        assert Comparator.parse(Comparator.LESS_EQ) is Comparator.LESS_EQ
        assert Comparator.parse("LessEq") is Comparator.LESS_EQ
        assert Comparator.parse("GREATER_THAN") is Comparator.GREATER_THAN
        assert Comparator.parse("not_equal") is Comparator.NOT_EQUAL

    def test_parse_unknown(self) -> None:
        """Unknown comparator names are rejected."""
        with pytest.raises(ValidationError):
            Comparator.parse("Between")
        with pytest.raises(ValidationError):
            Comparator.parse(3)  # type: ignore[arg-type]

    def test_index_friendly(self) -> None:
        """Only NOT_EQUAL cannot be answered by an ordered index."""
        friendly = {c for c in Comparator if c.is_index_friendly}
        assert friendly == set(Comparator) - {Comparator.NOT_EQUAL}

    def test_range_bounds(self) -> None:
        """Range comparators report bound side and inclusivity."""
        assert range_bounds(Comparator.LESS_THAN) == (True, False)
        assert range_bounds(Comparator.LESS_EQ) == (True, True)
        assert range_bounds(Comparator.GREATER_THAN) == (False, False)
        assert range_bounds(Comparator.GREATER_EQ) == (False, True)
        with pytest.raises(ValueError):
            range_bounds(Comparator.EQUAL)


@pytest.mark.unit
class TestPredicate:
    """Tests for Predicate."""

    def test_evaluate(self) -> None:
        """Predicates compare a candidate against their value."""
        predicate = Predicate("score", "20", Comparator.LESS_EQ)
        assert predicate.evaluate("19")
        assert predicate.evaluate("20")
        assert not predicate.evaluate("3")

    def test_comparator_string_is_parsed(self) -> None:
        """A comparator given by name is normalised to the enum."""
        predicate = Predicate("id", "1", "GreaterThan")  # type: ignore[arg-type]
        assert predicate.comparator is Comparator.GREATER_THAN

    def test_value_must_be_text(self) -> None:
        """Predicate values must be strings."""
        with pytest.raises(ValidationError):
            Predicate("id", 1, Comparator.EQUAL)  # type: ignore[arg-type]

    def test_str(self) -> None:
        assert str(Predicate("id", "1", Comparator.EQUAL)) == "id Equal '1'"


@pytest.mark.unit
class TestValidation:
    """Tests for text and schema validation."""

    @pytest.mark.parametrize("text", ["abc", "ABC 123", "", "first name"])
    def test_valid_text(self, text: str) -> None:
        assert is_valid_text(text)

    @pytest.mark.parametrize("text", ["a,b", "x-y", "semi;colon", "new\nline", "é", None, 5])
    def test_invalid_text(self, text: object) -> None:
        assert not is_valid_text(text)

    def test_validate_schema(self) -> None:
        """A valid schema is returned as a tuple in declared order."""
        assert validate_schema(["id", "last name"]) == ("id", "last name")

    @pytest.mark.parametrize(
        "columns",
        [[], ["id", "id"], ["id", ""], ["id", "bad,name"], "id"],
    )
    def test_invalid_schema(self, columns: object) -> None:
        """Empty, duplicated, blank, symbolic or string schemas are rejected."""
        with pytest.raises(ValidationError):
            validate_schema(columns)  # type: ignore[arg-type]
