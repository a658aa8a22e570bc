"""Tests for result formatting."""

from sheet_chat.core.cell import Cell
from sheet_chat.core.formatting import cell_display, describe_interpretation, format_markdown, format_result
from sheet_chat.core.query_engine import interpret
from sheet_chat.core.table import Table


class TestCellDisplay:
    def test_cell_display_values(self):
        assert cell_display(Cell.of(None)) == ""
        assert cell_display(Cell.of(3.0)) == "3"
        assert cell_display(Cell.of(0.1)) == "0.1"
        assert cell_display(Cell.of(True)) == "true"
        assert cell_display(Cell.of("OK")) == "OK"

    def test_cell_display_longFloat_showsFullPrecision(self):
        # Displayed text must be the text search matches against
        assert cell_display(Cell.of(1234.5678)) == "1234.5678"
        assert cell_display(Cell.of(0.123456789)) == "0.123456789"


class TestFormatResult:
    def test_format_result_rowsAndNoSummary(self, status_table):
        result = interpret("show status ok", status_table)

        text = format_result(result)

        assert text.splitlines()[0] == "Found 2 matching rows"
        assert "| name | status | score |" in text
        assert "| alpha | OK | 10 |" in text
        assert text.endswith("Summary:\nNo summary")

    def test_format_result_includesSummaryText(self, status_table):
        result = interpret("summarize", status_table)

        text = format_result(result)

        assert text.endswith(result.summary_text)
        assert "Total rows: 3" in text

    def test_format_result_maxRows_truncates(self, inventory_table):
        result = interpret("sort by price", inventory_table)

        text = format_result(result, max_rows=3)

        assert "... 9 more rows" in text
        assert "| ladder |" not in text

    def test_format_result_noMatch(self, status_table):
        assert format_result(interpret("zzz", status_table)) == "No matching data found."

    def test_format_result_noData(self):
        assert format_result(interpret("anything", Table.empty())) == "No data available"


class TestFormatMarkdown:
    def test_format_markdown_headerDescribesInterpretation(self, status_table):
        result = interpret("show status ok sorted by score descending", status_table)

        text = format_markdown(result)

        # "status" is declared before "score", so it wins the sort column scan too
        assert text.splitlines()[0] == (
            "**Found 2 matching rows** (intent: filter, sort; filter: status = ok; sort: status descending)"
        )

    def test_format_markdown_summaryAsBullets(self, status_table):
        text = format_markdown(interpret("summary", status_table))

        assert "- Total rows: 3" in text

    def test_format_markdown_escapesPipes(self, make_table):
        table = make_table([{"expr": "a|b"}])

        text = format_markdown(interpret("a|b", table))

        assert "a\\|b" in text

    def test_describe_interpretation_plainSearch(self, status_table):
        assert describe_interpretation(interpret("alpha", status_table)) == "intent: search"
