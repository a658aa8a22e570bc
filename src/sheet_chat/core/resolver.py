"""
Column and value resolution.

Maps words in the query onto table columns and onto the fixed vocabulary of
status-like filter values. Matching is a plain substring test over a scan in
declared order; the first hit wins. Columns whose names contain one another
("price" / "unit price") resolve to whichever is declared first.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from sheet_chat.core.config_loader import QueryConfig
from sheet_chat.core.intent import contains_any

logger = structlog.get_logger()

__all__ = ["FilterSpec", "SortSpec", "match_column", "match_value", "resolve_filter", "resolve_sort"]


@dataclass(frozen=True)
class FilterSpec:
    """
    Resolved filter.

    Attributes:
        column: Target column, or None to test every column
        value: Lower-cased vocabulary value, or None for a non-empty test on ``column``
    """

    column: str | None = None
    value: str | None = None

    def describe(self) -> str:
        if self.value is not None:
            where = self.column if self.column is not None else "any column"
            return f"{where} = {self.value}"
        return f"{self.column} is not empty"


@dataclass(frozen=True)
class SortSpec:
    """Resolved sort column and direction."""

    column: str
    descending: bool = False

    def describe(self) -> str:
        return f"{self.column} {'descending' if self.descending else 'ascending'}"


def match_column(query_lower: str, columns: Sequence[str]) -> str | None:
    """First column, in declared order, whose lower-cased name occurs in the query."""
    for column in columns:
        name = column.lower()
        if name and name in query_lower:
            return column
    return None


def match_value(query_lower: str, vocabulary: Sequence[str]) -> str | None:
    """First vocabulary term, in declared order, that occurs in the query."""
    for term in vocabulary:
        if term in query_lower:
            return term
    return None


def resolve_filter(query_lower: str, columns: Sequence[str], config: QueryConfig | None = None) -> FilterSpec | None:
    """
    Resolve the filter target of a filter query.

    A matched value always yields a filter, with or without a column. A
    column alone yields a non-empty test. Nothing matched yields None and
    the filter stage is skipped.
    """
    config = config or QueryConfig()
    column = match_column(query_lower, columns)
    value = match_value(query_lower, config.filter_values)

    if value is None and column is None:
        logger.debug("filter_unresolved", query=query_lower)
        return None

    spec = FilterSpec(column=column, value=value)
    logger.debug("filter_resolved", column=column, value=value)
    return spec


def resolve_sort(query_lower: str, columns: Sequence[str], config: QueryConfig | None = None) -> SortSpec | None:
    """Resolve the sort column and direction; None when no column is named."""
    config = config or QueryConfig()
    column = match_column(query_lower, columns)
    if column is None:
        logger.debug("sort_unresolved", query=query_lower)
        return None

    spec = SortSpec(column=column, descending=contains_any(query_lower, config.descending_keywords))
    logger.debug("sort_resolved", column=spec.column, descending=spec.descending)
    return spec
