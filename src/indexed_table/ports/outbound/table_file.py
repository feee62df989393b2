"""Table file port for persisting a table's contents.

This outbound port defines the contract for reading and writing the
flat representation of a table: an ordered schema and rows of values in
schema order. It knows nothing about indexes; indexes are rebuilt by the
caller after loading.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Protocol

from indexed_table.domain.value_objects import ValidationError


@dataclass(frozen=True)
class TableContents:
    """A schema and its rows as read from storage."""

    columns: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]


class TableFile(Protocol):
    """Protocol for table persistence."""

    @abstractmethod
    def read(self, path: str | Path) -> TableContents:
        """Read a persisted table.

        Args:
            path: The file to read.

        Returns:
            The schema and rows in file order.

        Raises:
            FileNotFoundError: If the file does not exist.
            MalformedTableFileError: If the file is empty or a row has the
                wrong number of fields.
        """
        ...

    @abstractmethod
    def write(
        self,
        path: str | Path,
        columns: Iterable[str],
        rows: Iterable[Iterable[str]],
    ) -> int:
        """Write a table, replacing any existing file.

        Returns:
            Number of rows written.
        """
        ...


class MalformedTableFileError(ValidationError):
    """Raised when a persisted table cannot be parsed."""

    pass
