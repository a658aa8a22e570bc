"""
In-memory table of spreadsheet rows.

A Table is what the query engine reads. It is immutable: loading another
sheet produces a new Table rather than changing this one.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

import pandas as pd

from sheet_chat.core.cell import ABSENT, Cell

__all__ = ["Row", "Table", "make_row", "row_value"]

Row = Mapping[str, Cell]


def make_row(record: Mapping[str, Any]) -> Row:
    """Convert a raw record into a read-only row of cells."""
    return MappingProxyType({str(key): Cell.of(value) for key, value in record.items()})


def row_value(row: Row, column: str) -> Cell:
    """Cell for ``column``; rows missing the key read as absent."""
    return row.get(column, ABSENT)


@dataclass(frozen=True)
class Table:
    """
    Ordered rows plus the ordered column names.

    Attributes:
        columns: Column names in declared order
        rows: Rows in sheet order
        name: Sheet name, if known
    """

    columns: tuple[str, ...]
    rows: tuple[Row, ...]
    name: str | None = None

    @classmethod
    def empty(cls, columns: Iterable[str] = (), name: str | None = None) -> "Table":
        return cls(columns=tuple(columns), rows=(), name=name)

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]], name: str | None = None) -> "Table":
        """
        Build a table from decoded row records.

        Column order is the key order of the first record. Later records may
        lack keys (read as absent); keys the first record lacks are kept on
        the row but are not table columns.
        """
        rows = tuple(make_row(record) for record in records)
        columns = tuple(rows[0].keys()) if rows else ()
        return cls(columns=columns, rows=rows, name=name)

    @classmethod
    def from_frame(cls, df: pd.DataFrame, name: str | None = None) -> "Table":
        """
        Build a table from a decoded sheet.

        The header row is authoritative for the column set, so a blank first
        data row does not drop columns.
        """
        columns = tuple(str(column) for column in df.columns)
        frame = df.copy()
        frame.columns = list(columns)
        records = frame.to_dict(orient="records")
        return cls(columns=columns, rows=tuple(make_row(record) for record in records), name=name)

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def has_data(self) -> bool:
        return bool(self.columns) and bool(self.rows)
