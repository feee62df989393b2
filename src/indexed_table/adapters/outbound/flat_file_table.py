"""Flat-file table persistence.

This adapter implements the TableFile protocol with a plain text format:

File Format:
    - Line 1: column names joined with commas
    - Line 2+: one record per line, values joined with commas in column order

Example:
    id,coursename,meetingtime
    123,comp285,0900
    021,math150,1500

There is no quoting or escaping; column names and values never contain
commas or line breaks. Every line after the header is a row, so an empty
line is an empty value in a single-column table and malformed otherwise.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from indexed_table.infrastructure.config import get_config
from indexed_table.infrastructure.logging import get_logger
from indexed_table.ports.outbound.table_file import MalformedTableFileError, TableContents

logger = get_logger(__name__)

SEPARATOR = ","


class FlatFileTableFile:
    """Comma-separated implementation of the TableFile protocol.

    Attributes:
        encoding: Text encoding used for reading and writing.
    """

    def __init__(self, encoding: str | None = None) -> None:
        """Initialize the adapter.

        Args:
            encoding: File encoding (default from config).
        """
        self._encoding = encoding or get_config().storage.encoding

    @property
    def encoding(self) -> str:
        return self._encoding

    def read(self, path: str | Path) -> TableContents:
        """Read a table file.

        Raises:
            FileNotFoundError: If the file does not exist.
            MalformedTableFileError: If the file has no header or a row has
                a different number of fields than the header.
        """
        path = Path(path)
        with open(path, "r", encoding=self._encoding, newline="") as f:
            lines = f.read().splitlines()

        if not lines or lines[0] == "":
            raise MalformedTableFileError(f"{path}: missing header line")

        columns = tuple(lines[0].split(SEPARATOR))
        rows: list[tuple[str, ...]] = []
        for line_number, line in enumerate(lines[1:], start=2):
            values = tuple(line.split(SEPARATOR))
            if len(values) != len(columns):
                raise MalformedTableFileError(
                    f"{path}:{line_number}: expected {len(columns)} fields, got {len(values)}"
                )
            rows.append(values)

        logger.debug("table_file_read", path=str(path), columns=len(columns), rows=len(rows))
        return TableContents(columns=columns, rows=tuple(rows))

    def write(
        self,
        path: str | Path,
        columns: Iterable[str],
        rows: Iterable[Iterable[str]],
    ) -> int:
        """Write a table file, replacing any existing one.

        The file is written completely in memory first so a rejected value
        never leaves a truncated file behind.

        Returns:
            Number of rows written.

        Raises:
            MalformedTableFileError: If a column name or value contains a
                comma or line break.
        """
        path = Path(path)
        lines = [_join(columns)]
        lines.extend(_join(row) for row in rows)

        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding=self._encoding, newline="\n") as f:
            f.write("\n".join(lines) + "\n")

        count = len(lines) - 1
        logger.debug("table_file_written", path=str(path), rows=count)
        return count


def _join(fields: Iterable[str]) -> str:
    fields = list(fields)
    for value in fields:
        if SEPARATOR in value or "\n" in value or "\r" in value:
            raise MalformedTableFileError(f"Cannot write field containing a separator: {value!r}")
    return SEPARATOR.join(fields)
