"""
Pytest configuration and fixtures for sheet_chat tests.
"""

import io
from pathlib import Path

import pandas as pd
import pytest

from sheet_chat.core.table import Table


@pytest.fixture(scope="session")
def project_root():
    """Return project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def status_table():
    """Three rows, two OK and one FAIL."""
    return Table.from_records(
        [
            {"name": "alpha", "status": "OK", "score": 10},
            {"name": "beta", "status": "OK", "score": 30},
            {"name": "gamma", "status": "FAIL", "score": 20},
        ],
        name="Sheet1",
    )


@pytest.fixture
def inventory_table():
    """Twelve rows of mixed types: text, numbers, numeric strings, booleans, blanks."""
    records = [
        {"item": "bolt", "category": "hardware", "price": 0.5, "stock": "120", "active": True},
        {"item": "nut", "category": "hardware", "price": 0.25, "stock": "300", "active": True},
        {"item": "hammer", "category": "tools", "price": 12, "stock": "15", "active": True},
        {"item": "saw", "category": "tools", "price": 25, "stock": "8", "active": False},
        {"item": "glue", "category": "supplies", "price": 4.5, "stock": "n/a", "active": True},
        {"item": "tape", "category": "supplies", "price": 3, "stock": "60", "active": None},
        {"item": "drill", "category": "tools", "price": 89.99, "stock": "4", "active": True},
        {"item": "screw", "category": "hardware", "price": 0.1, "stock": "900", "active": True},
        {"item": "wrench", "category": "tools", "price": 15, "stock": "", "active": False},
        {"item": "paint", "category": "supplies", "price": 22, "stock": "12", "active": True},
        {"item": "brush", "category": "supplies", "price": 6, "stock": "40", "active": True},
        {"item": "ladder", "category": "tools", "price": 120, "stock": "2", "active": True},
    ]
    return Table.from_records(records, name="Inventory")


@pytest.fixture
def make_table():
    """Factory: build a Table from a list of dicts."""

    def _make(records, name=None):
        return Table.from_records(records, name=name)

    return _make


@pytest.fixture
def workbook_bytes():
    """Factory: .xlsx bytes with one sheet per {sheet_name: DataFrame} entry."""

    def _make(sheets: dict[str, pd.DataFrame]) -> bytes:
        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            for sheet_name, df in sheets.items():
                df.to_excel(writer, sheet_name=sheet_name, index=False)
        return buffer.getvalue()

    return _make
