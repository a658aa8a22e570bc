"""Helpers shared by the Streamlit page; no Streamlit imports so they stay testable."""

import pandas as pd

from sheet_chat.core.conversation_manager import EXPORT_FILENAME, ConversationManager
from sheet_chat.core.profiling import DataProfile
from sheet_chat.core.query_engine import QueryResult
from sheet_chat.core.table import row_value


def result_to_frame(result: QueryResult, max_rows: int | None = None) -> pd.DataFrame:
    """Result rows as a DataFrame in table column order (raw cell values, None for absent)."""
    records = result.to_records()
    if max_rows is not None:
        records = records[:max_rows]
    return pd.DataFrame(records, columns=list(result.columns))


def profile_sample_frame(profile: DataProfile) -> pd.DataFrame:
    """Sample rows of a profile as a DataFrame."""
    records = [{c: row_value(row, c).value for c in profile.columns} for row in profile.sample_rows]
    return pd.DataFrame(records, columns=list(profile.columns))


def history_download_payload(manager: ConversationManager) -> tuple[str, str, str]:
    """(data, file_name, mime) for a Streamlit download button."""
    return manager.export_json(), EXPORT_FILENAME, "application/json"


def pending_uploads(uploads, seen: set[str]) -> list:
    """
    Uploads not yet processed this session, marked as seen.

    Keyed on Streamlit's ``file_id``, which is fresh for every upload, so a
    removed file can be uploaded again.
    """
    fresh = [upload for upload in uploads or [] if upload.file_id not in seen]
    seen.update(upload.file_id for upload in fresh)
    return fresh
