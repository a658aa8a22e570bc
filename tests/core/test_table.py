"""Tests for Table construction."""

import pandas as pd
import pytest

from sheet_chat.core.cell import CellKind
from sheet_chat.core.table import Table, row_value


class TestTableFromRecords:
    def test_from_records_columns_followFirstRecordKeyOrder(self):
        # Arrange
        records = [{"b": 1, "a": 2}, {"a": 3, "b": 4, "c": 5}]

        # Act
        table = Table.from_records(records)

        # Assert
        assert table.columns == ("b", "a")
        assert len(table) == 2

    def test_from_records_missingKey_readsAbsent(self):
        table = Table.from_records([{"a": 1, "b": 2}, {"a": 3}])

        assert row_value(table.rows[1], "b").kind is CellKind.ABSENT

    def test_from_records_rows_areReadOnly(self):
        table = Table.from_records([{"a": 1}])

        with pytest.raises(TypeError):
            table.rows[0]["a"] = 2  # type: ignore[index]

    def test_from_records_empty_hasNoColumns(self):
        table = Table.from_records([])

        assert table.columns == ()
        assert not table.has_data


class TestTableFromFrame:
    def test_from_frame_header_isColumnSet(self):
        # Arrange: first data row is blank in column "b"
        df = pd.DataFrame({"a": [1, 2], "b": [None, "x"]})

        # Act
        table = Table.from_frame(df, name="Sheet1")

        # Assert
        assert table.columns == ("a", "b")
        assert table.name == "Sheet1"
        assert row_value(table.rows[0], "b").kind is CellKind.ABSENT
        assert row_value(table.rows[1], "b").value == "x"

    def test_from_frame_numbers_areNumberCells(self):
        df = pd.DataFrame({"n": [1.5, 2.0]})

        table = Table.from_frame(df)

        assert [row_value(r, "n").kind for r in table.rows] == [CellKind.NUMBER, CellKind.NUMBER]

    def test_from_frame_nonStringHeaders_areStringified(self):
        df = pd.DataFrame({2023: [1], "name": ["x"]})

        table = Table.from_frame(df)

        assert table.columns == ("2023", "name")
        assert row_value(table.rows[0], "2023").value == 1
