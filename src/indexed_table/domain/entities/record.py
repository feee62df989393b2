"""Record entity - one row of a table.

A record is an immutable, ordered mapping from column name to text value.
The same record instance is referenced from the table heap and from every
index bucket it belongs to; it is never copied.

Equality is by value across all columns (column order does not matter),
and the hash agrees with it. Records rebuilt from a file therefore compare
equal to, delete, and intersect with the in-memory records they describe.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Sequence

from indexed_table.domain.value_objects import ValidationError


@dataclass(frozen=True, eq=False, repr=False)
class Record(Mapping[str, str]):
    """A row of column-name to text-value pairs.

    Example:
        >>> record = Record(("id", "name"), ("1", "Alice"))
        >>> record["name"]
        'Alice'
        >>> record == Record.from_mapping({"name": "Alice", "id": "1"})
        True
    """

    columns: tuple[str, ...]
    data: tuple[str, ...]
    _positions: dict[str, int] = field(init=False, compare=False)

    def __post_init__(self) -> None:
        """Normalise to tuples and check the record's shape."""
        columns = tuple(self.columns)
        data = tuple(self.data)

        if len(columns) != len(data):
            raise ValidationError(
                f"Record has {len(columns)} columns but {len(data)} values"
            )

        positions: dict[str, int] = {}
        for position, (column, value) in enumerate(zip(columns, data)):
            if not isinstance(column, str) or not isinstance(value, str):
                raise ValidationError(
                    f"Record columns and values must be text, got {column!r}={value!r}"
                )
            if column in positions:
                raise ValidationError(f"Duplicate column in record: {column!r}")
            positions[column] = position

        object.__setattr__(self, "columns", columns)
        object.__setattr__(self, "data", data)
        object.__setattr__(self, "_positions", positions)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> Record:
        """Build a record from a mapping, keeping its key order."""
        return cls(tuple(mapping.keys()), tuple(mapping.values()))

    @classmethod
    def from_values(cls, columns: Sequence[str], values: Iterable[str]) -> Record:
        """Build a record by pairing a schema with a row of values.

        Raises:
            ValidationError: If the number of values differs from the schema.
        """
        return cls(tuple(columns), tuple(values))

    def __getitem__(self, column: str) -> str:
        try:
            return self.data[self._positions[column]]
        except KeyError as e:
            raise KeyError(f"Column '{column}' not found") from e

    def __iter__(self) -> Iterator[str]:
        return iter(self.columns)

    def __len__(self) -> int:
        return len(self.columns)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        if self is other:
            return True
        return len(self) == len(other) and all(
            column in other._positions and other[column] == value
            for column, value in zip(self.columns, self.data)
        )

    def __hash__(self) -> int:
        return hash(frozenset(zip(self.columns, self.data)))

    def values_for(self, columns: Sequence[str]) -> tuple[str, ...]:
        """Return this record's values in the given column order."""
        return tuple(self[column] for column in columns)

    def as_dict(self) -> dict[str, str]:
        """Return a mutable copy as a plain dict."""
        return dict(zip(self.columns, self.data))

    def __repr__(self) -> str:
        pairs = ", ".join(f"{c}={v!r}" for c, v in zip(self.columns, self.data))
        return f"Record({pairs})"
