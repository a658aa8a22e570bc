"""Query interpretation over in-memory spreadsheet tables."""

from sheet_chat.core.query_engine import NO_DATA_MESSAGE, QueryEngine, QueryResult, interpret
from sheet_chat.core.record_store import RecordStore, WorkbookLoadError
from sheet_chat.core.table import Table

__all__ = ["interpret", "NO_DATA_MESSAGE", "QueryEngine", "QueryResult", "RecordStore", "Table", "WorkbookLoadError"]
