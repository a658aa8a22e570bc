"""Sheet Chat: ask questions about spreadsheet data."""

__version__ = "0.1.0"
