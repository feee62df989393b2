"""Value objects for the indexed table domain.

Value objects are immutable types that represent domain concepts.
They have no identity - two value objects with the same attributes are equal.

Exports:
    Comparators:
        - Comparator: The six comparison kinds (EQUAL, LESS_THAN, ...)
        - Predicate: A (column, value, comparator) triple
        - range_bounds: Bound direction and inclusivity of a range comparator

    Validation:
        - ValidationError: Raised for malformed schemas, records and queries
        - is_valid_text, validate_column_name, validate_value, validate_schema
"""

from indexed_table.domain.value_objects.comparator import (
    Comparator,
    Predicate,
    range_bounds,
)
from indexed_table.domain.value_objects.validation import (
    ValidationError,
    is_valid_text,
    validate_column_name,
    validate_schema,
    validate_value,
)

__all__ = [
    # Comparators
    "Comparator",
    "Predicate",
    "range_bounds",
    # Validation
    "ValidationError",
    "is_valid_text",
    "validate_column_name",
    "validate_schema",
    "validate_value",
]
