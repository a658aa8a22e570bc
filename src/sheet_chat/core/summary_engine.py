"""
Summary statistics over a row set.

Pure computation over already-loaded rows: numeric min/max/sum/average per
column and value distributions for low-cardinality columns. Cells that do
not parse as numbers are left out of the numeric statistics, never counted
as zero.
"""

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from sheet_chat.core.cell import to_text, try_parse_number
from sheet_chat.core.config_loader import QueryConfig
from sheet_chat.core.table import Row, row_value

__all__ = ["NumericStats", "ValueFrequency", "SummaryResult", "should_summarize", "summarize_rows"]


@dataclass(frozen=True)
class NumericStats:
    """Statistics over the numeric cells of one column."""

    column: str
    count: int
    minimum: float
    maximum: float
    total: float

    @property
    def average(self) -> float:
        return self.total / self.count

    def line(self) -> str:
        return f"{self.column}: Min={self.minimum:.2f}, Max={self.maximum:.2f}, Avg={self.average:.2f}"


@dataclass(frozen=True)
class ValueFrequency:
    """One entry of a value distribution."""

    value: str
    count: int
    percentage: float

    def entry(self) -> str:
        return f"{self.value}: {self.count} ({self.percentage:.1f}%)"


@dataclass
class SummaryResult:
    """Summary lines plus the structured numbers behind them."""

    total_rows: int = 0
    numeric: list[NumericStats] = field(default_factory=list)
    categorical: dict[str, list[ValueFrequency]] = field(default_factory=dict)
    lines: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines


def should_summarize(row_count: int, requested: bool, config: QueryConfig | None = None) -> bool:
    """Summaries run on request, or implicitly once the result exceeds the row threshold."""
    config = config or QueryConfig()
    return requested or row_count > config.summary_row_threshold


def _numeric_stats(rows: Sequence[Row], column: str) -> NumericStats | None:
    numbers = [n for n in (try_parse_number(row_value(row, column)) for row in rows) if n is not None]
    if not numbers:
        return None
    return NumericStats(
        column=column,
        count=len(numbers),
        minimum=min(numbers),
        maximum=max(numbers),
        total=sum(numbers),
    )


def _distribution(rows: Sequence[Row], column: str, config: QueryConfig) -> list[ValueFrequency] | None:
    # Counter keeps first-seen order and most_common() sorts stably, so ties stay in that order
    counts = Counter(to_text(row_value(row, column)) for row in rows)
    if len(counts) > config.categorical_max_distinct:
        return None
    total = len(rows)
    return [
        ValueFrequency(value=value, count=count, percentage=100 * count / total)
        for value, count in counts.most_common(config.distribution_top_n)
    ]


def summarize_rows(
    rows: Sequence[Row],
    columns: Sequence[str],
    requested: bool = False,
    config: QueryConfig | None = None,
) -> SummaryResult:
    """
    Summarize a row set.

    Args:
        rows: Rows after filtering and sorting
        columns: Table columns, in declared order
        requested: The query asked for a summary
        config: Thresholds (defaults when None)

    Returns:
        SummaryResult; empty when not triggered or when there are no rows
    """
    config = config or QueryConfig()
    result = SummaryResult(total_rows=len(rows))
    if not rows or not should_summarize(len(rows), requested, config):
        return result

    result.lines.append(f"Total rows: {len(rows)}")

    for column in columns:
        stats = _numeric_stats(rows, column)
        if stats is not None:
            result.numeric.append(stats)
            result.lines.append(stats.line())

    for column in columns:
        distribution = _distribution(rows, column, config)
        if distribution is not None:
            result.categorical[column] = distribution
            entries = ", ".join(freq.entry() for freq in distribution)
            result.lines.append(f"{column} distribution: {entries}")

    return result
