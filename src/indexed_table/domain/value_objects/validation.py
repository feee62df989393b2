"""Text validation rules shared by records, schemas and predicates.

Column names and values are restricted to letters, digits and spaces. This
keeps every value safe to write in the comma-separated persisted format
without escaping.
"""

from __future__ import annotations

import re
from typing import Iterable

_TEXT_PATTERN = re.compile(r"[A-Za-z0-9 ]*")


class ValidationError(ValueError):
    """Raised when a schema, record or query is malformed."""

    pass


def is_valid_text(text: object) -> bool:
    """Check that text is a string of letters, digits and spaces only."""
    return isinstance(text, str) and _TEXT_PATTERN.fullmatch(text) is not None


def validate_column_name(name: object) -> str:
    """Validate a single column name.

    Column names must be non-empty alphanumeric-with-spaces strings.

    Raises:
        ValidationError: If the name is empty or contains symbols.
    """
    if not is_valid_text(name) or name == "":
        raise ValidationError(f"Invalid column name: {name!r}")
    return name  # type: ignore[return-value]


def validate_value(column: str, value: object) -> str:
    """Validate a column value.

    Empty values are allowed; symbols are not.

    Raises:
        ValidationError: If the value is not alphanumeric-with-spaces text.
    """
    if not is_valid_text(value):
        raise ValidationError(f"Invalid value for column {column!r}: {value!r}")
    return value  # type: ignore[return-value]


def validate_schema(columns: Iterable[str]) -> tuple[str, ...]:
    """Validate a table schema and return it as a tuple.

    Args:
        columns: Ordered column names.

    Returns:
        The column names in their declared order.

    Raises:
        ValidationError: If the schema is empty, has duplicates, or
            contains an invalid column name.
    """
    if isinstance(columns, str):
        raise ValidationError("Schema must be a sequence of column names, not a string")

    schema = tuple(validate_column_name(name) for name in columns)
    if not schema:
        raise ValidationError("Schema must declare at least one column")

    seen: set[str] = set()
    for name in schema:
        if name in seen:
            raise ValidationError(f"Duplicate column name in schema: {name!r}")
        seen.add(name)

    return schema
