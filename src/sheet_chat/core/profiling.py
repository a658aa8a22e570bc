"""
Dataset overview for the active table.

Gives the user (and the chat header) a quick picture of what is loaded:
column names, row count and a sample from both ends of the sheet.
"""

from dataclasses import dataclass

from sheet_chat.core.table import Row, Table


@dataclass(frozen=True)
class DataProfile:
    """Overview of one table: its columns, row count, sample rows and a one-line summary."""

    columns: tuple[str, ...]
    total_rows: int
    sample_rows: tuple[Row, ...]
    summary: str


def profile_table(table: Table, sample_size: int = 5) -> DataProfile:
    """
    Profile a table.

    The sample is the first and last ``sample_size`` rows; a table with at
    most ``2 * sample_size`` rows is sampled whole, without repeats.
    """
    rows = table.rows
    if sample_size <= 0:
        sample = ()
    elif len(rows) <= 2 * sample_size:
        sample = rows
    else:
        sample = rows[:sample_size] + rows[-sample_size:]

    return DataProfile(
        columns=table.columns,
        total_rows=len(rows),
        sample_rows=sample,
        summary=f"Dataset contains {len(rows)} rows with columns: {', '.join(table.columns)}",
    )
