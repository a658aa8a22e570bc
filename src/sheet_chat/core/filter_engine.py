"""Row filtering: free-text search and resolved filters. Both keep row order."""

from collections.abc import Sequence

from sheet_chat.core.cell import to_text
from sheet_chat.core.resolver import FilterSpec
from sheet_chat.core.table import Row, row_value

__all__ = ["search_rows", "apply_filter"]


def _row_texts(row: Row, columns: Sequence[str]):
    return (to_text(row_value(row, column)).lower() for column in columns)


def search_rows(rows: Sequence[Row], columns: Sequence[str], term: str) -> list[Row]:
    """Rows where any column's text contains ``term`` (case-insensitive)."""
    needle = term.lower()
    return [row for row in rows if any(needle in text for text in _row_texts(row, columns))]


def apply_filter(rows: Sequence[Row], columns: Sequence[str], spec: FilterSpec | None) -> list[Row]:
    """
    Apply a resolved filter.

    - value set: exact case-insensitive match on ``spec.column``, or on any
      column when no column was resolved
    - column only: the column's value is present and not empty text
    """
    if spec is None:
        return list(rows)

    if spec.value is not None:
        wanted = spec.value.lower()
        if spec.column is not None:
            return [row for row in rows if to_text(row_value(row, spec.column)).lower() == wanted]
        return [row for row in rows if any(text == wanted for text in _row_texts(row, columns))]

    if spec.column is None:
        return list(rows)
    return [row for row in rows if not row_value(row, spec.column).is_empty]
