"""
Record store: uploaded workbooks and the currently active sheet.

Workbooks are decoded once on upload (every sheet, via pandas/openpyxl).
Switching file or sheet swaps the active Table wholesale. Streamlit runs
script reruns on worker threads, so swaps and reads go through a lock and
callers receive an immutable Table snapshot.
"""

import io
import threading
from dataclasses import dataclass

import pandas as pd
import structlog

from sheet_chat.core.table import Table

logger = structlog.get_logger()

__all__ = ["WorkbookLoadError", "Workbook", "load_workbook", "RecordStore"]


class WorkbookLoadError(ValueError):
    """Raised when an uploaded file cannot be decoded as a workbook."""


@dataclass(frozen=True)
class Workbook:
    """Decoded workbook: sheet tables keyed by sheet name, in workbook order."""

    name: str
    sheets: dict[str, Table]

    @property
    def sheet_names(self) -> list[str]:
        return list(self.sheets)

    def table(self, sheet: str) -> Table:
        if sheet not in self.sheets:
            raise KeyError(f"Sheet '{sheet}' not found in {self.name}. Available: {self.sheet_names}")
        return self.sheets[sheet]


def load_workbook(name: str, data: bytes) -> Workbook:
    """
    Decode every sheet of an Excel workbook.

    Args:
        name: File name (used for display and errors)
        data: Raw file bytes

    Returns:
        Workbook

    Raises:
        WorkbookLoadError: If the bytes are not a readable workbook or it has no sheets
    """
    try:
        frames = pd.read_excel(io.BytesIO(data), sheet_name=None, engine="openpyxl")
    except Exception as e:
        logger.warning("workbook_load_failed", file=name, error=str(e), error_type=type(e).__name__)
        raise WorkbookLoadError(f"Could not read {name} as an Excel workbook: {e}") from e

    if not frames:
        raise WorkbookLoadError(f"{name} contains no sheets")

    sheets = {str(sheet): Table.from_frame(df, name=str(sheet)) for sheet, df in frames.items()}
    logger.info(
        "workbook_loaded",
        file=name,
        sheets=list(sheets),
        rows={sheet: len(table) for sheet, table in sheets.items()},
    )
    return Workbook(name=name, sheets=sheets)


class RecordStore:
    """
    Holds uploaded workbooks and the active table.

    Uploading a file selects it and its first sheet. Removing the selected
    file falls back to the first remaining file, or to no table.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._workbooks: dict[str, Workbook] = {}
        self._selected_file: str | None = None
        self._selected_sheet: str | None = None
        self._active: Table | None = None

    def add_file(self, name: str, data: bytes) -> Workbook:
        """Decode and store a workbook, then select it. Re-uploading a name replaces it."""
        workbook = load_workbook(name, data)
        with self._lock:
            self._workbooks[name] = workbook
            self._select(workbook, workbook.sheet_names[0])
        return workbook

    def select_file(self, name: str) -> None:
        """Make ``name`` the active file, on its first sheet."""
        with self._lock:
            workbook = self._get(name)
            self._select(workbook, workbook.sheet_names[0])

    def select_sheet(self, sheet: str) -> None:
        """Switch the active file to ``sheet``."""
        with self._lock:
            if self._selected_file is None:
                raise KeyError("No file selected")
            self._select(self._workbooks[self._selected_file], sheet)

    def remove_file(self, name: str) -> None:
        """Forget ``name``; the selection moves to the first remaining file if needed."""
        with self._lock:
            self._get(name)
            del self._workbooks[name]
            logger.info("workbook_removed", file=name, remaining=list(self._workbooks))
            if self._selected_file != name:
                return
            if self._workbooks:
                first = next(iter(self._workbooks.values()))
                self._select(first, first.sheet_names[0])
            else:
                self._selected_file = None
                self._selected_sheet = None
                self._active = None

    @property
    def file_names(self) -> list[str]:
        with self._lock:
            return list(self._workbooks)

    @property
    def selected_file(self) -> str | None:
        with self._lock:
            return self._selected_file

    @property
    def selected_sheet(self) -> str | None:
        with self._lock:
            return self._selected_sheet

    @property
    def sheet_names(self) -> list[str]:
        """Sheets of the selected file (empty when nothing is selected)."""
        with self._lock:
            if self._selected_file is None:
                return []
            return self._workbooks[self._selected_file].sheet_names

    @property
    def active_table(self) -> Table | None:
        """Snapshot of the active table; safe to use after the lock is released."""
        with self._lock:
            return self._active

    def _get(self, name: str) -> Workbook:
        if name not in self._workbooks:
            raise KeyError(f"File '{name}' not loaded. Available: {list(self._workbooks)}")
        return self._workbooks[name]

    def _select(self, workbook: Workbook, sheet: str) -> None:
        table = workbook.table(sheet)
        self._selected_file = workbook.name
        self._selected_sheet = sheet
        self._active = table
        logger.debug("active_table_changed", file=workbook.name, sheet=sheet, rows=len(table))
