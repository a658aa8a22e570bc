"""Tests for free-text search and resolved filters."""

from sheet_chat.core.filter_engine import apply_filter, search_rows
from sheet_chat.core.resolver import FilterSpec
from sheet_chat.core.table import row_value


def _names(rows, column="name"):
    return [row_value(r, column).value for r in rows]


class TestSearchRows:
    def test_search_rows_substringAnyColumn_caseInsensitive(self, status_table):
        rows = search_rows(status_table.rows, status_table.columns, "AL")

        assert _names(rows) == ["alpha"]

    def test_search_rows_matchesNumberText(self, status_table):
        rows = search_rows(status_table.rows, status_table.columns, "30")

        assert _names(rows) == ["beta"]

    def test_search_rows_preservesOrder(self, status_table):
        rows = search_rows(status_table.rows, status_table.columns, "a")

        assert _names(rows) == ["alpha", "beta", "gamma"]

    def test_search_rows_noMatch_isEmpty(self, status_table):
        assert search_rows(status_table.rows, status_table.columns, "zzz") == []


class TestApplyFilter:
    def test_apply_filter_columnValue_exactCaseInsensitive(self, status_table):
        rows = apply_filter(status_table.rows, status_table.columns, FilterSpec(column="status", value="ok"))

        assert _names(rows) == ["alpha", "beta"]

    def test_apply_filter_value_isNotSubstringMatch(self, make_table):
        # Arrange: "OK-ish" contains "ok" but is not equal to it
        table = make_table([{"name": "a", "status": "OK-ish"}, {"name": "b", "status": "ok"}])

        # Act
        rows = apply_filter(table.rows, table.columns, FilterSpec(column="status", value="ok"))

        # Assert
        assert _names(rows) == ["b"]

    def test_apply_filter_valueWithoutColumn_anyColumnEquals(self, make_table):
        table = make_table(
            [
                {"name": "a", "check1": "pass", "check2": "fail"},
                {"name": "b", "check1": "fail", "check2": "fail"},
                {"name": "c", "check1": "fail", "check2": "PASS"},
            ]
        )

        rows = apply_filter(table.rows, table.columns, FilterSpec(column=None, value="pass"))

        assert _names(rows) == ["a", "c"]

    def test_apply_filter_booleanCells_matchTrueFalseValues(self, make_table):
        table = make_table([{"name": "a", "active": True}, {"name": "b", "active": False}])

        rows = apply_filter(table.rows, table.columns, FilterSpec(column="active", value="true"))

        assert _names(rows) == ["a"]

    def test_apply_filter_columnOnly_dropsAbsentAndEmpty(self, make_table):
        table = make_table(
            [
                {"name": "a", "note": "x"},
                {"name": "b", "note": ""},
                {"name": "c", "note": None},
                {"name": "d"},
                {"name": "e", "note": 0},
            ]
        )

        rows = apply_filter(table.rows, table.columns, FilterSpec(column="note", value=None))

        assert _names(rows) == ["a", "e"]

    def test_apply_filter_none_passesThrough(self, status_table):
        rows = apply_filter(status_table.rows, status_table.columns, None)

        assert rows == list(status_table.rows)
