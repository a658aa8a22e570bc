"""
Display formatting for query results.

Kept apart from interpretation so a result can be shown as plain text, in
the chat UI or anywhere else without touching the engine.
"""

from sheet_chat.core.cell import Cell, to_text
from sheet_chat.core.query_engine import QueryResult
from sheet_chat.core.table import row_value

__all__ = ["cell_display", "describe_interpretation", "format_result", "format_markdown"]

NO_MATCH_MESSAGE = "No matching data found."
NO_SUMMARY_MESSAGE = "No summary"


def cell_display(cell: Cell) -> str:
    """Text shown in a table cell; the same text search and equality match against."""
    return to_text(cell)


def describe_interpretation(result: QueryResult) -> str:
    """One line saying how the query was read."""
    parts = [f"intent: {', '.join(result.intent.labels())}"]
    if result.filter_spec is not None:
        parts.append(f"filter: {result.filter_spec.describe()}")
    if result.sort_spec is not None:
        parts.append(f"sort: {result.sort_spec.describe()}")
    return "; ".join(parts)


def _header(result: QueryResult) -> str:
    noun = "row" if result.row_count == 1 else "rows"
    return f"Found {result.row_count} matching {noun}"


def _table_lines(result: QueryResult, max_rows: int, escape_pipes: bool) -> list[str]:
    def cell_text(text: str) -> str:
        return text.replace("|", "\\|") if escape_pipes else text

    columns = list(result.columns)
    lines = [
        "| " + " | ".join(cell_text(c) for c in columns) + " |",
        "|" + "|".join(" --- " for _ in columns) + "|",
    ]
    for row in result.rows[:max_rows]:
        lines.append("| " + " | ".join(cell_text(cell_display(row_value(row, c))) for c in columns) + " |")
    if result.row_count > max_rows:
        lines.append(f"... {result.row_count - max_rows} more rows")
    return lines


def format_result(result: QueryResult, max_rows: int = 20) -> str:
    """
    Plain-text rendering: header, up to ``max_rows`` rows, summary block.

    Args:
        result: Interpreted query
        max_rows: Row cap for the table block

    Returns:
        Display string
    """
    if result.no_data:
        return result.summary_text
    if not result.rows:
        return NO_MATCH_MESSAGE

    lines = [_header(result), ""]
    lines.extend(_table_lines(result, max_rows, escape_pipes=False))
    lines.append("")
    lines.append("Summary:")
    lines.append(result.summary_text or NO_SUMMARY_MESSAGE)
    return "\n".join(lines)


def format_markdown(result: QueryResult, max_rows: int = 20) -> str:
    """Markdown rendering for the chat UI; summary lines become a bullet list."""
    if result.no_data:
        return f"_{result.summary_text}_"
    if not result.rows:
        return f"_{NO_MATCH_MESSAGE}_"

    lines = [f"**{_header(result)}** ({describe_interpretation(result)})", ""]
    lines.extend(_table_lines(result, max_rows, escape_pipes=True))
    if result.summary_text:
        lines.extend(["", "**Summary**", ""])
        lines.extend(f"- {line}" for line in result.summary_text.splitlines())
    return "\n".join(lines)
