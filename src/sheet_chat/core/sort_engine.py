"""Row sorting with numeric-aware comparison."""

from collections.abc import Sequence
from functools import cmp_to_key

from sheet_chat.core.cell import Cell, to_text, try_parse_number
from sheet_chat.core.resolver import SortSpec
from sheet_chat.core.table import Row, row_value

__all__ = ["compare_cells", "sort_rows"]


def compare_cells(a: Cell, b: Cell) -> int:
    """
    Three-way comparison of two cells.

    Numeric when both parse as numbers, otherwise case-sensitive text order.
    """
    num_a = try_parse_number(a)
    num_b = try_parse_number(b)
    if num_a is not None and num_b is not None:
        return (num_a > num_b) - (num_a < num_b)
    text_a = to_text(a)
    text_b = to_text(b)
    return (text_a > text_b) - (text_a < text_b)


def sort_rows(rows: Sequence[Row], spec: SortSpec | None) -> list[Row]:
    """
    Sort rows by ``spec.column``.

    Stable in both directions: descending negates the comparator instead of
    reversing the output, so rows with equal keys keep their input order.
    """
    if spec is None:
        return list(rows)

    sign = -1 if spec.descending else 1

    def compare_rows(left: Row, right: Row) -> int:
        return sign * compare_cells(row_value(left, spec.column), row_value(right, spec.column))

    return sorted(rows, key=cmp_to_key(compare_rows))
