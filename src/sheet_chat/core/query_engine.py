"""
Query interpretation pipeline for spreadsheet questions.

Runs a free-text question against the active table without calling any
external service:

    classify intent → resolve column/value → filter → sort → summarize

Example:
    >>> from sheet_chat.core.query_engine import interpret
    >>> result = interpret("sort by price descending", table)
    >>> result.sort_spec
    SortSpec(column='price', descending=True)
"""

from dataclasses import dataclass, field
from typing import Any

import structlog

from sheet_chat.core.config_loader import QueryConfig
from sheet_chat.core.filter_engine import apply_filter, search_rows
from sheet_chat.core.intent import IntentFlags, classify_intent
from sheet_chat.core.resolver import FilterSpec, SortSpec, resolve_filter, resolve_sort
from sheet_chat.core.sort_engine import sort_rows
from sheet_chat.core.summary_engine import SummaryResult, summarize_rows
from sheet_chat.core.table import Row, Table, row_value

logger = structlog.get_logger()

__all__ = ["NO_DATA_MESSAGE", "QueryResult", "QueryEngine", "interpret"]

NO_DATA_MESSAGE = "No data available"


@dataclass
class QueryResult:
    """
    Result of interpreting one query.

    ``rows`` and ``summary_text`` are the answer; the remaining fields record
    how the query was read, for display and logging.
    """

    rows: list[Row]
    summary_text: str = ""
    query: str = ""
    columns: tuple[str, ...] = ()
    intent: IntentFlags = field(default_factory=IntentFlags)
    filter_spec: FilterSpec | None = None
    sort_spec: SortSpec | None = None
    summary: SummaryResult | None = None
    no_data: bool = False

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def to_records(self) -> list[dict[str, Any]]:
        """Rows as plain dicts of raw values, in table column order."""
        return [{column: row_value(row, column).value for column in self.columns} for row in self.rows]


class QueryEngine:
    """
    Deterministic rule-based query interpreter.

    Holds only configuration; every call works on the table it is given, so
    one engine can serve any number of tables.

    Args:
        config: Keyword vocabularies and thresholds (defaults when None)
    """

    def __init__(self, config: QueryConfig | None = None) -> None:
        self.config = config or QueryConfig()

    def interpret(self, query: str, table: Table | None) -> QueryResult:
        """
        Interpret ``query`` against ``table``.

        Args:
            query: User's question
            table: Active table, or None when nothing is loaded

        Returns:
            QueryResult (never raises for missing or malformed data)

        Raises:
            ValueError: If query is empty
        """
        if not query or not query.strip():
            logger.error("query_interpret_failed", error_type="empty_query", query=query)
            raise ValueError("Query cannot be empty")

        query = query.strip()

        if table is None or not table.has_data:
            logger.info(
                "query_interpret_no_data",
                query=query,
                table=table.name if table is not None else None,
                columns=len(table.columns) if table is not None else 0,
            )
            return QueryResult(
                rows=[],
                summary_text=NO_DATA_MESSAGE,
                query=query,
                columns=table.columns if table is not None else (),
                no_data=True,
            )

        query_lower = query.lower()
        columns = table.columns
        intent = classify_intent(query_lower, self.config)
        logger.info("query_interpret_start", query=query, table=table.name, intent=intent.labels(), rows=len(table))

        filter_spec = resolve_filter(query_lower, columns, self.config) if intent.is_filter else None
        sort_spec = resolve_sort(query_lower, columns, self.config) if intent.is_sort else None

        if intent.is_plain_search:
            rows = search_rows(table.rows, columns, query)
        else:
            rows = apply_filter(table.rows, columns, filter_spec)
        rows = sort_rows(rows, sort_spec)

        summary = summarize_rows(rows, columns, requested=intent.is_summarize, config=self.config)

        logger.info(
            "query_interpret_complete",
            query=query,
            intent=intent.labels(),
            filter=filter_spec.describe() if filter_spec else None,
            sort=sort_spec.describe() if sort_spec else None,
            matched_rows=len(rows),
            summarized=not summary.is_empty,
        )

        return QueryResult(
            rows=rows,
            summary_text=summary.text,
            query=query,
            columns=columns,
            intent=intent,
            filter_spec=filter_spec,
            sort_spec=sort_spec,
            summary=summary,
        )


def interpret(query: str, table: Table | None, config: QueryConfig | None = None) -> QueryResult:
    """Interpret ``query`` against ``table`` with a one-off engine."""
    return QueryEngine(config).interpret(query, table)
