"""
Intent classification for spreadsheet questions.

A query can ask for several things at once ("sort by price and summarize"),
so intent is a set of independent flags rather than a single label.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from sheet_chat.core.config_loader import QueryConfig

__all__ = ["IntentFlags", "classify_intent", "contains_any"]


@dataclass(frozen=True)
class IntentFlags:
    """Independent intent flags derived from one query."""

    is_filter: bool = False
    is_sort: bool = False
    is_summarize: bool = False

    @property
    def is_plain_search(self) -> bool:
        """No keyword matched: the query is a free-text search term."""
        return not (self.is_filter or self.is_sort or self.is_summarize)

    def labels(self) -> list[str]:
        """Active intent names, for logging."""
        active = [("filter", self.is_filter), ("sort", self.is_sort), ("summarize", self.is_summarize)]
        return [name for name, on in active if on] or ["search"]


def contains_any(query_lower: str, terms: Iterable[str]) -> bool:
    """True if any term is a substring of the lower-cased query."""
    return any(term in query_lower for term in terms)


def classify_intent(query_lower: str, config: QueryConfig | None = None) -> IntentFlags:
    """
    Classify a lower-cased query.

    Args:
        query_lower: Query text, already lower-cased
        config: Keyword vocabularies (defaults when None)

    Returns:
        IntentFlags

    Example:
        >>> classify_intent("sort by price and show stats")
        IntentFlags(is_filter=True, is_sort=True, is_summarize=True)
    """
    config = config or QueryConfig()
    return IntentFlags(
        is_filter=contains_any(query_lower, config.filter_keywords),
        is_sort=contains_any(query_lower, config.sort_keywords),
        is_summarize=contains_any(query_lower, config.summarize_keywords),
    )
